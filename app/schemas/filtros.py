# =============================================
# app/schemas/filtros.py
# =============================================
from pydantic import BaseModel, Field, validator
from typing import Optional, List
from datetime import date

from app.schemas.enums import TODOS

def _blank_as_none(v):
    """'' y 'Todos' significan "sin filtro" en los selectores"""
    if v is None:
        return None
    if isinstance(v, str) and (not v.strip() or v == TODOS):
        return None
    return v

# =============================================
# SEARCH FILTERS SCHEMA
# =============================================
class TrabajoFilters(BaseModel):
    """Criterios de filtrado de trabajos (todos opcionales, se combinan con AND)"""
    tipo_pa: Optional[str] = Field(None, description="Filtrar por tipo de PA")
    tipos_pa: List[str] = Field(default_factory=list, description="Filtrar por varios tipos de PA ('Todos' = sin filtro)")
    periodo: Optional[str] = Field(None, description="Filtrar por nombre de periodo")
    proveedor: Optional[str] = Field(None, description="Filtrar por nombre de proveedor")
    busqueda: Optional[str] = Field(None, description="Texto en cliente, curso o proveedor")
    fecha_inicio: Optional[date] = Field(None, description="Inicio del rango de fecha de registro")
    fecha_fin: Optional[date] = Field(None, description="Fin del rango de fecha de registro")
    mes: Optional[int] = Field(None, ge=0, le=11, description="Mes de registro (0 = enero)")
    anio: Optional[int] = Field(None, ge=1900, le=9999, description="Año de registro")

    @validator('tipo_pa', 'periodo', 'proveedor', pre=True)
    def validate_selector(cls, v):
        return _blank_as_none(v)

    @validator('busqueda', pre=True)
    def validate_busqueda(cls, v):
        if v is None or (isinstance(v, str) and v == ""):
            return None
        return v

    @validator('fecha_inicio', 'fecha_fin', 'mes', 'anio', pre=True)
    def validate_optional_value(cls, v):
        return _blank_as_none(v)

    @validator('tipos_pa', pre=True)
    def validate_tipos_pa(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return list(v)

# =============================================
# DASHBOARD FILTERS SCHEMA
# =============================================
class DashboardFilters(TrabajoFilters):
    """Filtros del dashboard: el año siempre se aplica (por defecto el actual)"""
    anio: int = Field(default_factory=lambda: date.today().year, ge=1900, le=9999, description="Año de registro")

    @validator('anio', pre=True)
    def validate_anio(cls, v):
        if v is None or v == "" or v == TODOS:
            return date.today().year
        return v

# =============================================
# PAGE SIZE SCHEMA
# =============================================
class PageSizeRequest(BaseModel):
    page_size: int = Field(..., description="Trabajos por página (10, 50 o 100)")
