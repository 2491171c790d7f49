# =============================================
# app/database/models/trabajo.py
# =============================================
from sqlalchemy import Column, String, Text, Numeric, DateTime, ForeignKey, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.config.database import Base
import uuid

class Trabajo(Base):
    __tablename__ = "trabajos"

    # Primary Key
    trabajo_id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)

    # Basic Info
    nombre_cliente = Column(String(255), nullable=False, default="Estudiante")
    tipo_pa = Column(String(10), nullable=False, index=True)
    tipo_trabajo = Column(String(50), nullable=False)
    precio = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)
    url = Column(Text, nullable=False, default="")
    estado = Column(String(20), nullable=False, default="Pendiente", index=True)

    # Fechas ISO (YYYY-MM-DD); fecha_entrega vacía = aún no entregado
    fecha_registro = Column(String(10), nullable=False, index=True)
    fecha_entrega = Column(String(10), nullable=False, default="")

    # Foreign Keys
    proveedor_id = Column(
        Uuid,
        ForeignKey('proveedores.proveedor_id', ondelete='SET NULL'),
        nullable=True,
        index=True
    )
    curso_id = Column(
        Uuid,
        ForeignKey('cursos.curso_id', ondelete='SET NULL'),
        nullable=True,
        index=True
    )
    periodo_id = Column(
        Uuid,
        ForeignKey('periodos.periodo_id', ondelete='SET NULL'),
        nullable=True,
        index=True
    )

    # Audit Fields
    created_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_date = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
    create_user_id = Column(Uuid, nullable=True)

    # =============================================
    # RELATIONSHIPS
    # =============================================
    proveedor = relationship("Proveedor", back_populates="trabajos", lazy="select")
    curso = relationship("Curso", back_populates="trabajos", lazy="select")
    periodo = relationship("Periodo", back_populates="trabajos", lazy="select")

    def __repr__(self):
        return f"<Trabajo(trabajo_id={self.trabajo_id}, nombre_cliente='{self.nombre_cliente}', estado='{self.estado}')>"
