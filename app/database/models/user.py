# =============================================
# app/database/models/user.py
# =============================================
from sqlalchemy import Column, String, Boolean, DateTime, Uuid
from sqlalchemy.sql import func
from app.config.database import Base
import uuid

class User(Base):
    __tablename__ = "users"

    # Primary Key
    user_id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)

    # Basic Info
    user_name = Column(String(255), nullable=False)
    password = Column(String(255), nullable=False)
    user_email = Column(String(255), unique=True, nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # Audit Fields
    created_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_date = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
    last_login_date = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<User(user_id={self.user_id}, user_email='{self.user_email}')>"
