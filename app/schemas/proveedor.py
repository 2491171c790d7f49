# =============================================
# app/schemas/proveedor.py
# =============================================
from pydantic import AliasChoices, BaseModel, Field, ConfigDict, validator
from typing import Optional
from datetime import datetime
from uuid import UUID

from app.core.validators import validate_celular, validate_required_text

class ProveedorBase(BaseModel):
    nombre: str = Field(..., min_length=1, max_length=255, description="Nombre del proveedor")
    celular: str = Field(..., description="Celular de 9 dígitos")

    @validator('nombre')
    def validate_nombre(cls, v):
        return validate_required_text(v, "El nombre es requerido")

    @validator('celular')
    def validate_celular(cls, v):
        """Validate phone format"""
        return validate_celular(v)

class ProveedorCreate(ProveedorBase):
    """Schema para creación de proveedor"""
    pass

class ProveedorUpdate(ProveedorBase):
    """Schema para actualización de proveedor"""
    pass

class ProveedorResponse(ProveedorBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., validation_alias=AliasChoices("proveedor_id", "id"))
    created_date: Optional[datetime] = None
