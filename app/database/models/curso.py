# =============================================
# app/database/models/curso.py
# =============================================
from sqlalchemy import Column, String, DateTime, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.config.database import Base
import uuid

class Curso(Base):
    __tablename__ = "cursos"

    # Primary Key
    curso_id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)

    # Basic Info
    nombre = Column(String(255), nullable=False, index=True)

    # Audit Fields
    created_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_date = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    # =============================================
    # RELATIONSHIPS
    # =============================================
    trabajos = relationship("Trabajo", back_populates="curso", lazy="select", passive_deletes=True)

    def __repr__(self):
        return f"<Curso(curso_id={self.curso_id}, nombre='{self.nombre}')>"
