# =============================================
# app/services/catalogo_service.py
# =============================================
from typing import List, Optional, Type
from uuid import UUID
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.repositories.catalogo_repository import (
    CatalogoRepository,
    CursoRepository,
    ProveedorRepository,
    PeriodoRepository
)
from app.services.session_context import SessionContext, session_registry
from app.query.collation import spanish_sort_key
from app.schemas.curso import CursoResponse
from app.schemas.proveedor import ProveedorResponse
from app.schemas.periodo import PeriodoResponse
from app.core.exceptions import AppException, CatalogoNotFoundError, DatabaseError

logger = logging.getLogger(__name__)

class CatalogoService:
    """Alta, edición y baja de una entrada de catálogo.

    Las listas se devuelven en orden alfabético español. Tras cada escritura
    la lista de trabajos de la sesión se marca para recargar, porque los
    nombres resueltos pueden haber cambiado.
    """
    repository_class: Type[CatalogoRepository] = CatalogoRepository
    response_class: Type[BaseModel] = BaseModel
    etiqueta = "Catálogo"

    def __init__(self, db: AsyncSession, context: Optional[SessionContext] = None):
        self.db = db
        self.context = context
        self.repo = self.repository_class(db)

    def _notify(self, ok: bool, mensaje: str) -> None:
        if self.context is None:
            return
        if ok:
            self.context.notifier.success(mensaje)
        else:
            self.context.notifier.error(mensaje)

    def _invalidate_trabajos(self) -> None:
        # Los nombres resueltos cambian para todas las sesiones
        if self.context is not None:
            self.context.store.loaded = False
        session_registry.invalidate_trabajos()

    # =============================================
    # BASIC CRUD OPERATIONS
    # =============================================

    async def list_all(self) -> List[BaseModel]:
        items = await self.repo.get_all()
        items = sorted(items, key=lambda item: spanish_sort_key(item.nombre))
        return [self.response_class.model_validate(item) for item in items]

    async def get(self, entidad_id: UUID) -> BaseModel:
        item = await self.repo.get_by_id(entidad_id)
        if not item:
            raise CatalogoNotFoundError(self.repo.entidad, str(entidad_id))
        return self.response_class.model_validate(item)

    async def create(self, data: BaseModel) -> BaseModel:
        try:
            item = await self.repo.create(data)
        except AppException:
            self._notify(False, f"Error al crear {self.repo.entidad}")
            raise
        self._notify(True, f"{self.etiqueta} creado correctamente")
        return self.response_class.model_validate(item)

    async def update(self, entidad_id: UUID, data: BaseModel) -> BaseModel:
        try:
            item = await self.repo.update(entidad_id, data)
            if not item:
                raise CatalogoNotFoundError(self.repo.entidad, str(entidad_id))
        except AppException:
            self._notify(False, f"Error al actualizar {self.repo.entidad}")
            raise
        self._invalidate_trabajos()
        self._notify(True, f"{self.etiqueta} actualizado correctamente")
        logger.info(f"{self.etiqueta} {entidad_id} renamed to {item.nombre}")
        return self.response_class.model_validate(item)

    async def delete(self, entidad_id: UUID) -> bool:
        try:
            deleted = await self.repo.delete(entidad_id)
            if not deleted:
                raise CatalogoNotFoundError(self.repo.entidad, str(entidad_id))
        except AppException:
            self._notify(False, f"Error al eliminar {self.repo.entidad}")
            raise
        except Exception as e:
            self._notify(False, f"Error al eliminar {self.repo.entidad}")
            raise DatabaseError(f"eliminar {self.repo.entidad}", str(e))
        self._invalidate_trabajos()
        self._notify(True, f"{self.etiqueta} eliminado correctamente")
        return deleted

# =============================================
# CATALOG SERVICES
# =============================================

class CursoService(CatalogoService):
    repository_class = CursoRepository
    response_class = CursoResponse
    etiqueta = "Curso"

class ProveedorService(CatalogoService):
    repository_class = ProveedorRepository
    response_class = ProveedorResponse
    etiqueta = "Proveedor"

class PeriodoService(CatalogoService):
    repository_class = PeriodoRepository
    response_class = PeriodoResponse
    etiqueta = "Periodo"

    async def delete(self, entidad_id: UUID) -> bool:
        deleted = await super().delete(entidad_id)
        # Un periodo eliminado deja de ser la selección activa de cualquier sesión
        for context in session_registry.all():
            context.forget_periodo(entidad_id)
        return deleted

    async def update(self, entidad_id: UUID, data: BaseModel) -> BaseModel:
        periodo = await super().update(entidad_id, data)
        for context in session_registry.all():
            if context.periodo_activo_id == entidad_id:
                context.set_periodo_activo(entidad_id, periodo.nombre)
        return periodo
