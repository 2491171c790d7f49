# =============================================
# app/schemas/dashboard.py
# =============================================
from pydantic import BaseModel, Field
from typing import List

from app.schemas.filtros import DashboardFilters

# =============================================
# CHART SERIES SCHEMAS
# =============================================
class EstadoCount(BaseModel):
    name: str = Field(..., description="Etiqueta del gráfico")
    estado: str
    value: int = 0

class TipoPACount(BaseModel):
    tipo_pa: str
    cantidad: int

# =============================================
# STATISTICS SCHEMA
# =============================================
class DashboardStatistics(BaseModel):
    """Valores derivados del subconjunto filtrado (no se persisten)"""
    total: int = 0
    completados: int = 0
    pendientes: int = 0
    ingreso_total: float = Field(0, description="Suma de precios de trabajos Terminados")
    por_estado: List[EstadoCount] = Field(default_factory=list)
    por_tipo_pa: List[TipoPACount] = Field(default_factory=list)

class DashboardFilterOptions(BaseModel):
    proveedores: List[str]
    tipos_pa: List[str]
    periodos: List[str]
    anios: List[int]
    meses: List[str]

class DashboardResponse(BaseModel):
    filtros: DashboardFilters
    mes_nombre: str = "Todos"
    estadisticas: DashboardStatistics
    opciones: DashboardFilterOptions

class TipoPASelection(BaseModel):
    tipos_pa: List[str]
