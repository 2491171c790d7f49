# =============================================
# app/schemas/user.py
# =============================================
from pydantic import BaseModel, EmailStr, Field, ConfigDict, validator
from typing import Optional
from datetime import datetime
from uuid import UUID

from app.core.validators import validate_password

class UserBase(BaseModel):
    user_name: str = Field(..., min_length=1, max_length=255, description="Nombre del usuario")
    user_email: EmailStr = Field(..., description="Correo del usuario")

class UserCreate(UserBase):
    password: str = Field(..., min_length=8, description="Contraseña (mínimo 8 caracteres)")

    @validator('password')
    def validate_password(cls, v):
        return validate_password(v)

class UserResponse(UserBase):
    model_config = ConfigDict(from_attributes=True)

    user_id: UUID
    is_active: bool = True
    created_date: Optional[datetime] = None
    last_login_date: Optional[datetime] = None
