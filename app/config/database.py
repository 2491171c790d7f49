# =============================================
# app/config/database.py
# =============================================
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool
from sqlalchemy import MetaData, text
from typing import AsyncGenerator
import logging
from app.config.settings import get_settings

logger = logging.getLogger(__name__)

# Get settings instance
settings = get_settings()

def _engine_options() -> dict:
    # aiosqlite connections are bound to the event loop that opened them
    if settings.is_sqlite:
        return {"echo": settings.DEBUG, "poolclass": NullPool}
    return {
        "echo": settings.DEBUG,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
        "pool_size": 10,
        "max_overflow": 20,
    }

# Async Engine
engine = create_async_engine(settings.get_database_url(), **_engine_options())

# Session Factory
async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)

# Base Model with metadata
metadata = MetaData()

class Base(DeclarativeBase):
    metadata = metadata

# =============================================
# DATABASE FUNCTIONS
# =============================================

# Dependency para obtener sesión de la base de datos
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency para obtener sesión de la base de datos"""
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()

async def create_tables():
    """
    Crear las tablas que falten.

    En producción el esquema lo administra Alembic; create_all no modifica
    tablas existentes, así que es seguro llamarlo en cada arranque.
    """
    # Registrar todos los modelos en Base.metadata
    import app.database.models  # noqa: F401

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Tablas verificadas: %s", ", ".join(sorted(Base.metadata.tables)))
    except Exception as e:
        logger.error(f"Error al crear tablas: {e}")
        raise

# Health check function
async def check_database_health() -> bool:
    """Check if database is accessible"""
    try:
        async with async_session() as session:
            result = await session.execute(text("SELECT 1"))
            return result.scalar() == 1
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False

async def close_database():
    """Close database connections"""
    try:
        await engine.dispose()
        logger.info("Conexiones con la base de datos cerradas")
    except Exception as e:
        logger.error(f"Error al cerrar conexiones: {e}")
