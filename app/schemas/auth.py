# =============================================
# app/schemas/auth.py
# =============================================
from pydantic import BaseModel, EmailStr, Field

from app.schemas.user import UserResponse

# =============================================
# LOGIN SCHEMAS
# =============================================
class LoginRequest(BaseModel):
    """Schema for login request"""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")
    remember_me: bool = Field(False, description="Keep the session open for longer")

class TokenResponse(BaseModel):
    """Schema for token response"""
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token expiration time in seconds")
    user: UserResponse = Field(..., description="User information")
