# =============================================
# app/database/models/__init__.py
# =============================================
"""
Database Models Package

Importa todos los modelos para registrarlos en SQLAlchemy.
Este archivo garantiza que Alembic detecte todas las tablas para las migraciones.
"""

# Importar todos los modelos para registro en Base.metadata
from .user import User
from .curso import Curso
from .proveedor import Proveedor
from .periodo import Periodo
from .trabajo import Trabajo

# Lista de todos los modelos para fácil acceso
__all__ = [
    "User",
    "Curso",
    "Proveedor",
    "Periodo",
    "Trabajo"
]
