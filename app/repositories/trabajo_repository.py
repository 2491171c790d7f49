# =============================================
# app/repositories/trabajo_repository.py
# =============================================
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload
from typing import Optional, List
from uuid import UUID
import logging

from app.database.models.trabajo import Trabajo
from app.schemas.trabajo import TrabajoCreate, TrabajoUpdate
from app.core.exceptions import AppException, DatabaseError

logger = logging.getLogger(__name__)

class TrabajoRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    def _select(self):
        # Las referencias de catálogo se resuelven a nombre al leer
        return select(Trabajo).options(
            joinedload(Trabajo.proveedor),
            joinedload(Trabajo.curso),
            joinedload(Trabajo.periodo)
        )

    # =============================================
    # BASIC CRUD OPERATIONS
    # =============================================

    async def list_all(self) -> List[Trabajo]:
        """Get every job (the caller orders them)"""
        try:
            stmt = self._select().order_by(Trabajo.created_date, Trabajo.fecha_registro)
            result = await self.db.execute(stmt)
            return list(result.scalars().unique().all())
        except Exception as e:
            logger.error(f"Error listing trabajos: {e}")
            raise DatabaseError("listar trabajos", str(e))

    async def get_by_id(self, trabajo_id: UUID) -> Optional[Trabajo]:
        """Get job by ID"""
        try:
            stmt = self._select().where(Trabajo.trabajo_id == trabajo_id)
            result = await self.db.execute(stmt)
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Error getting trabajo by ID {trabajo_id}: {e}")
            raise DatabaseError("buscar trabajo", str(e))

    async def create(self, trabajo_data: TrabajoCreate, create_user_id: Optional[UUID] = None) -> Trabajo:
        """Create a new job (tipo_pa, periodo_id and fecha_registro already resolved)"""
        try:
            db_trabajo = Trabajo(
                **trabajo_data.model_dump(),
                create_user_id=create_user_id
            )

            self.db.add(db_trabajo)
            await self.db.commit()

            logger.info(f"Trabajo created successfully: {db_trabajo.trabajo_id}")
            return await self._refreshed(db_trabajo.trabajo_id)

        except IntegrityError as e:
            await self.db.rollback()
            logger.error(f"Integrity error creating trabajo: {e}")
            raise AppException("Curso, proveedor o periodo inexistente")
        except AppException:
            raise
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Error creating trabajo: {e}")
            raise DatabaseError("crear trabajo", str(e))

    async def update(self, trabajo_id: UUID, trabajo_data: TrabajoUpdate) -> Optional[Trabajo]:
        """Replace every editable field of a job"""
        try:
            stmt = update(Trabajo).where(
                Trabajo.trabajo_id == trabajo_id
            ).values(**trabajo_data.model_dump())

            result = await self.db.execute(stmt)
            await self.db.commit()

            if result.rowcount == 0:
                return None

            logger.info(f"Trabajo updated: {trabajo_id}")
            return await self._refreshed(trabajo_id)

        except IntegrityError as e:
            await self.db.rollback()
            logger.error(f"Integrity error updating trabajo {trabajo_id}: {e}")
            raise AppException("Curso, proveedor o periodo inexistente")
        except AppException:
            raise
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Error updating trabajo {trabajo_id}: {e}")
            raise DatabaseError("actualizar trabajo", str(e))

    async def update_estado(self, trabajo_id: UUID, estado: str, fecha_entrega: str) -> Optional[Trabajo]:
        """Write only the state and the delivery date"""
        try:
            stmt = update(Trabajo).where(
                Trabajo.trabajo_id == trabajo_id
            ).values(estado=estado, fecha_entrega=fecha_entrega)

            result = await self.db.execute(stmt)
            await self.db.commit()

            if result.rowcount == 0:
                return None

            logger.info(f"Trabajo {trabajo_id} changed to {estado}")
            return await self._refreshed(trabajo_id)

        except Exception as e:
            await self.db.rollback()
            logger.error(f"Error changing estado of trabajo {trabajo_id}: {e}")
            raise DatabaseError("cambiar estado del trabajo", str(e))

    async def delete(self, trabajo_id: UUID) -> bool:
        """Hard delete job"""
        try:
            stmt = delete(Trabajo).where(Trabajo.trabajo_id == trabajo_id)

            result = await self.db.execute(stmt)
            await self.db.commit()

            success = result.rowcount > 0
            if success:
                logger.info(f"Trabajo deleted: {trabajo_id}")
            return success

        except Exception as e:
            await self.db.rollback()
            logger.error(f"Error deleting trabajo {trabajo_id}: {e}")
            raise DatabaseError("eliminar trabajo", str(e))

    async def _refreshed(self, trabajo_id: UUID) -> Optional[Trabajo]:
        # Bulk UPDATE does not touch instances already in the identity map
        stmt = self._select().where(Trabajo.trabajo_id == trabajo_id).execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()
