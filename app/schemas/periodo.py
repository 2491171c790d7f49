# =============================================
# app/schemas/periodo.py
# =============================================
from pydantic import AliasChoices, BaseModel, Field, ConfigDict, validator
from typing import Optional
from datetime import datetime
from uuid import UUID

from app.core.validators import validate_required_text

class PeriodoBase(BaseModel):
    nombre: str = Field(..., min_length=1, max_length=100, description="Nombre del periodo (ej. 2025-I)")

    @validator('nombre')
    def validate_nombre(cls, v):
        return validate_required_text(v, "El nombre es requerido")

class PeriodoCreate(PeriodoBase):
    """Schema para creación de periodo"""
    pass

class PeriodoUpdate(PeriodoBase):
    """Schema para actualización de periodo"""
    pass

class PeriodoResponse(PeriodoBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., validation_alias=AliasChoices("periodo_id", "id"))
    created_date: Optional[datetime] = None
