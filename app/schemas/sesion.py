# =============================================
# app/schemas/sesion.py
# =============================================
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from uuid import UUID

from app.schemas.enums import TipoPAEnum, NotificationTypeEnum

class Notificacion(BaseModel):
    mensaje: str
    tipo: NotificationTypeEnum
    created_at: datetime

class PeriodoActivo(BaseModel):
    periodo_id: Optional[UUID] = None
    nombre: Optional[str] = None

class PeriodoActivoRequest(BaseModel):
    periodo_id: UUID = Field(..., description="Periodo que se pre-llenará en los nuevos trabajos")

class TipoPAActivo(BaseModel):
    tipo_pa: Optional[TipoPAEnum] = None

class TipoPAActivoRequest(BaseModel):
    tipo_pa: TipoPAEnum = Field(..., description="Tipo de PA que se pre-llenará en los nuevos trabajos")
