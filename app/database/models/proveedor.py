# =============================================
# app/database/models/proveedor.py
# =============================================
from sqlalchemy import Column, String, DateTime, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.config.database import Base
import uuid

class Proveedor(Base):
    __tablename__ = "proveedores"

    # Primary Key
    proveedor_id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)

    # Basic Info
    nombre = Column(String(255), nullable=False, index=True)
    celular = Column(String(9), nullable=False)

    # Audit Fields
    created_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_date = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    # =============================================
    # RELATIONSHIPS
    # =============================================
    trabajos = relationship("Trabajo", back_populates="proveedor", lazy="select", passive_deletes=True)

    def __repr__(self):
        return f"<Proveedor(proveedor_id={self.proveedor_id}, nombre='{self.nombre}')>"
