# =============================================
# app/schemas/reporte.py
# =============================================
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date

from app.schemas.dashboard import DashboardStatistics

REPORTE_COLUMNAS = [
    "N°", "Cliente", "Curso", "Fecha Registro", "Fecha Entrega",
    "Precio", "Proveedor", "Tipo PA", "Periodo"
]

class ReporteFila(BaseModel):
    numero: int = Field(..., description="Número de fila (desde 1)")
    cliente: str
    curso: str
    fecha_registro: str
    fecha_entrega: str
    precio: float
    proveedor: str
    tipo_pa: str
    periodo: str

    def as_row(self) -> list:
        return [
            self.numero, self.cliente, self.curso, self.fecha_registro, self.fecha_entrega,
            f"{self.precio:.2f}", self.proveedor, self.tipo_pa, self.periodo
        ]

class ReporteResponse(BaseModel):
    """Tabla plana lista para cualquier generador de PDF u hoja de cálculo"""
    titulo: str = "Reporte de Trabajos"
    nombre_archivo: str = Field(..., description="Nombre sugerido sin extensión")
    generado_en: date
    filtros: List[str] = Field(default_factory=list, description="Descripción de los filtros activos")
    columnas: List[str] = Field(default_factory=lambda: list(REPORTE_COLUMNAS))
    filas: List[ReporteFila] = Field(default_factory=list)
    total_registros: int = 0
    subtotal: float = Field(0, description="Suma de precios de todas las filas")
    estadisticas: Optional[DashboardStatistics] = Field(None, description="Solo en el reporte del dashboard")
