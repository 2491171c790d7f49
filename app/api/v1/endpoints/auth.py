# =============================================
# app/api/v1/endpoints/auth.py
# =============================================
from fastapi import APIRouter, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from app.config.database import get_db
from app.services.auth_service import AuthService
from app.services.session_context import SessionContext, session_registry
from app.core.security import verify_token
from app.core.exceptions import InvalidTokenError
from app.schemas.auth import LoginRequest, TokenResponse
from app.schemas.user import UserResponse

# =============================================
# ROUTER AND DEPENDENCIES
# =============================================
router = APIRouter()
security = HTTPBearer(auto_error=False)

async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)

async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> SessionContext:
    """Session context of the bearer token; 401 when missing, expired or closed"""
    if credentials is None:
        raise InvalidTokenError("No autenticado")

    payload = verify_token(credentials.credentials)
    if not payload.get("sub") or not payload.get("sid"):
        raise InvalidTokenError()

    return session_registry.get(payload["sid"])

# =============================================
# AUTHENTICATION ROUTES
# =============================================

@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Iniciar sesión y obtener un token JWT

    - **email**: Correo del usuario
    - **password**: Contraseña
    - **remember_me**: Mantener la sesión abierta una semana

    El token lleva el identificador de la sesión (`sid`); las selecciones
    activas, la cola de notificaciones y la vista de lista viven en esa sesión.
    """
    return await auth_service.login(login_data)

@router.post("/logout")
async def logout(
    context: SessionContext = Depends(get_current_session),
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Cerrar la sesión

    Descarta el contexto de la sesión; el token deja de ser válido.
    """
    auth_service.logout(context)
    return {"message": "Sesión cerrada correctamente"}

@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    context: SessionContext = Depends(get_current_session),
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Usuario de la sesión actual

    Requiere el header `Authorization: Bearer <token>`
    """
    return await auth_service.get_user(context.user_id)
