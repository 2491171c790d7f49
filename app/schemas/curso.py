# =============================================
# app/schemas/curso.py
# =============================================
from pydantic import AliasChoices, BaseModel, Field, ConfigDict, validator
from typing import Optional
from datetime import datetime
from uuid import UUID

from app.core.validators import validate_required_text

class CursoBase(BaseModel):
    nombre: str = Field(..., min_length=1, max_length=255, description="Nombre del curso")

    @validator('nombre')
    def validate_nombre(cls, v):
        return validate_required_text(v, "El nombre es requerido")

class CursoCreate(CursoBase):
    """Schema para creación de curso"""
    pass

class CursoUpdate(CursoBase):
    """Schema para actualización de curso"""
    pass

class CursoResponse(CursoBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., validation_alias=AliasChoices("curso_id", "id"))
    created_date: Optional[datetime] = None
