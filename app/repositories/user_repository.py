# =============================================
# app/repositories/user_repository.py
# =============================================
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from typing import Optional
from uuid import UUID
from datetime import datetime, timezone

from app.database.models.user import User
from app.schemas.user import UserCreate
from app.core.security import get_password_hash

class UserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, user_data: UserCreate) -> User:
        """Create a new user"""
        # Hash de la contraseña
        hashed_password = get_password_hash(user_data.password)

        db_user = User(
            user_name=user_data.user_name,
            password=hashed_password,
            user_email=user_data.user_email.lower()
        )

        self.db.add(db_user)
        try:
            await self.db.commit()
            await self.db.refresh(db_user)
            return db_user
        except IntegrityError:
            await self.db.rollback()
            raise ValueError("El correo ya existe")

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.user_id == user_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        stmt = select(User).where(User.user_email == email.lower())
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def touch_last_login(self, user_id: UUID) -> None:
        stmt = update(User).where(User.user_id == user_id).values(
            last_login_date=datetime.now(timezone.utc)
        )
        await self.db.execute(stmt)
        await self.db.commit()

