# =============================================
# app/repositories/catalogo_repository.py
# =============================================
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel
import logging

from app.database.models.curso import Curso
from app.database.models.proveedor import Proveedor
from app.database.models.periodo import Periodo
from app.database.models.trabajo import Trabajo
from app.core.exceptions import DatabaseError

logger = logging.getLogger(__name__)

class CatalogoRepository:
    """CRUD compartido por cursos, proveedores y periodos.

    Cada subclase indica su modelo, el nombre de su columna de id y el de la
    columna de ``trabajos`` que la referencia.
    """
    model = None
    id_field = None
    trabajo_fk_field = None
    entidad = "catálogo"

    def __init__(self, db: AsyncSession):
        self.db = db

    # Columns resolved on the mapped classes
    @property
    def id_column(self):
        return getattr(self.model, self.id_field)

    @property
    def trabajo_fk(self):
        return getattr(Trabajo, self.trabajo_fk_field)

    # =============================================
    # BASIC CRUD OPERATIONS
    # =============================================

    async def get_all(self) -> List:
        try:
            stmt = select(self.model).order_by(self.model.nombre)
            result = await self.db.execute(stmt)
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"Error listing {self.entidad}: {e}")
            raise DatabaseError(f"listar {self.entidad}", str(e))

    async def get_by_id(self, entidad_id: UUID):
        try:
            stmt = select(self.model).where(self.id_column == entidad_id)
            result = await self.db.execute(stmt)
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Error getting {self.entidad} by ID {entidad_id}: {e}")
            raise DatabaseError(f"buscar {self.entidad}", str(e))

    async def create(self, data: BaseModel):
        try:
            db_obj = self.model(**data.model_dump())

            self.db.add(db_obj)
            await self.db.commit()
            await self.db.refresh(db_obj)

            logger.info(f"{self.entidad.capitalize()} created: {db_obj.nombre}")
            return db_obj

        except Exception as e:
            await self.db.rollback()
            logger.error(f"Error creating {self.entidad}: {e}")
            raise DatabaseError(f"crear {self.entidad}", str(e))

    async def update(self, entidad_id: UUID, data: BaseModel):
        try:
            stmt = update(self.model).where(
                self.id_column == entidad_id
            ).values(**data.model_dump())

            result = await self.db.execute(stmt)
            await self.db.commit()

            if result.rowcount == 0:
                return None

            logger.info(f"{self.entidad.capitalize()} updated: {entidad_id}")
            stmt = select(self.model).where(
                self.id_column == entidad_id
            ).execution_options(populate_existing=True)
            result = await self.db.execute(stmt)
            return result.scalar_one_or_none()

        except Exception as e:
            await self.db.rollback()
            logger.error(f"Error updating {self.entidad} {entidad_id}: {e}")
            raise DatabaseError(f"actualizar {self.entidad}", str(e))

    async def delete(self, entidad_id: UUID) -> bool:
        """Delete the entry and detach the jobs that referenced it"""
        try:
            # SQLite does not enforce ON DELETE SET NULL
            await self.db.execute(
                update(Trabajo).where(self.trabajo_fk == entidad_id).values({self.trabajo_fk.key: None})
            )
            result = await self.db.execute(delete(self.model).where(self.id_column == entidad_id))
            await self.db.commit()

            success = result.rowcount > 0
            if success:
                logger.info(f"{self.entidad.capitalize()} deleted: {entidad_id}")
            return success

        except Exception as e:
            await self.db.rollback()
            logger.error(f"Error deleting {self.entidad} {entidad_id}: {e}")
            raise DatabaseError(f"eliminar {self.entidad}", str(e))

    async def get_nombres(self) -> List[str]:
        stmt = select(self.model.nombre)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def exists(self, entidad_id: Optional[UUID]) -> bool:
        if entidad_id is None:
            return False
        stmt = select(self.id_column).where(self.id_column == entidad_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none() is not None

# =============================================
# CATALOG REPOSITORIES
# =============================================

class CursoRepository(CatalogoRepository):
    model = Curso
    id_field = "curso_id"
    trabajo_fk_field = "curso_id"
    entidad = "curso"

class ProveedorRepository(CatalogoRepository):
    model = Proveedor
    id_field = "proveedor_id"
    trabajo_fk_field = "proveedor_id"
    entidad = "proveedor"

class PeriodoRepository(CatalogoRepository):
    model = Periodo
    id_field = "periodo_id"
    trabajo_fk_field = "periodo_id"
    entidad = "periodo"
