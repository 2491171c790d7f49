# =============================================
# app/services/auth_service.py
# =============================================
from typing import Optional
from uuid import UUID
from datetime import datetime, timedelta, timezone
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.config.settings import get_settings
from app.repositories.user_repository import UserRepository
from app.services.session_context import SessionContext, SessionRegistry, session_registry
from app.core.security import verify_password, create_access_token, generate_session_id
from app.core.exceptions import InvalidCredentialsError, AppException
from app.schemas.auth import LoginRequest, TokenResponse
from app.schemas.user import UserCreate, UserResponse

logger = logging.getLogger(__name__)
settings = get_settings()

# Sesión "recordarme": una semana
REMEMBER_ME_MINUTES = 7 * 24 * 60

class AuthService:
    def __init__(self, db: AsyncSession, registry: Optional[SessionRegistry] = None):
        self.user_repo = UserRepository(db)
        self.registry = registry or session_registry

    async def login(self, login_data: LoginRequest) -> TokenResponse:
        """Check the credentials and open a session context"""
        user = await self.user_repo.get_by_email(login_data.email)
        if not user or not user.is_active or not verify_password(login_data.password, user.password):
            logger.warning(f"Failed login for {login_data.email}")
            raise InvalidCredentialsError()

        session_id = generate_session_id()
        minutes = REMEMBER_ME_MINUTES if login_data.remember_me else settings.ACCESS_TOKEN_EXPIRE_MINUTES
        expires_at = datetime.now(timezone.utc) + timedelta(minutes=minutes)
        access_token = create_access_token(
            data={"sub": str(user.user_id), "email": user.user_email, "sid": session_id},
            expires_delta=timedelta(minutes=minutes)
        )

        await self.user_repo.touch_last_login(user.user_id)
        self.registry.open(session_id, user.user_id, user.user_email, expires_at=expires_at)

        return TokenResponse(
            access_token=access_token,
            token_type="bearer",
            expires_in=minutes * 60,
            user=UserResponse.model_validate(user)
        )

    def logout(self, context: SessionContext) -> bool:
        return self.registry.close(context.session_id)

    async def get_user(self, user_id: UUID) -> UserResponse:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise InvalidCredentialsError()
        return UserResponse.model_validate(user)

    async def ensure_admin(self) -> Optional[UserResponse]:
        """Create the configured administrator when it does not exist yet"""
        existing = await self.user_repo.get_by_email(settings.ADMIN_EMAIL)
        if existing:
            return None
        try:
            user = await self.user_repo.create(UserCreate(
                user_name=settings.ADMIN_NAME,
                user_email=settings.ADMIN_EMAIL,
                password=settings.ADMIN_PASSWORD
            ))
        except ValueError as e:
            raise AppException(str(e))
        logger.info(f"Administrator created: {user.user_email}")
        return UserResponse.model_validate(user)
