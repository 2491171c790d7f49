# =============================================
# app/services/trabajo_service.py
# =============================================
from typing import Awaitable, Callable, List, Optional, TypeVar
from uuid import UUID
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.config.settings import get_settings
from app.repositories.trabajo_repository import TrabajoRepository
from app.repositories.catalogo_repository import CursoRepository, ProveedorRepository, PeriodoRepository
from app.services.session_context import SessionContext, session_registry
from app.query.filters import apply_filters
from app.query.status import order_trabajos, toggle_completion
from app.schemas.enums import EstadoTrabajoEnum, SortFieldEnum, SortOrderEnum
from app.schemas.filtros import TrabajoFilters
from app.schemas.trabajo import (
    TrabajoCreate,
    TrabajoUpdate,
    TrabajoResponse,
    TrabajoDefaults,
    TrabajoList,
    TrabajoPage
)
from app.core.exceptions import (
    AppException,
    DatabaseError,
    TrabajoNotFoundError,
    CatalogoNotFoundError,
    ValidationError
)

logger = logging.getLogger(__name__)
settings = get_settings()

T = TypeVar("T")

class TrabajoService:
    """Record store de la sesión: escribe, vuelve a leer todo y ordena por estado"""

    def __init__(self, db: AsyncSession, context: SessionContext):
        self.db = db
        self.context = context
        self.store = context.store
        self.notifier = context.notifier
        self.trabajo_repo = TrabajoRepository(db)
        self.curso_repo = CursoRepository(db)
        self.proveedor_repo = ProveedorRepository(db)
        self.periodo_repo = PeriodoRepository(db)

    # =============================================
    # FETCH
    # =============================================

    async def _fetch(self) -> List[TrabajoResponse]:
        trabajos = await self.trabajo_repo.list_all()
        self.store.replace(TrabajoResponse.from_model(t) for t in trabajos)
        return self.store.trabajos

    async def fetch_all(self) -> List[TrabajoResponse]:
        """Reload every job into the session store (status ordered)"""
        self.store.is_loading = True
        try:
            return await self._fetch()
        except AppException as e:
            self.notifier.error("Error al cargar los trabajos")
            logger.error(f"Error fetching trabajos: {e.message}")
            raise
        finally:
            self.store.is_loading = False

    async def ensure_loaded(self) -> List[TrabajoResponse]:
        if not self.store.loaded:
            return await self.fetch_all()
        return self.store.trabajos

    async def _mutate(self, action: Callable[[], Awaitable[T]], success_message: str, error_message: str) -> T:
        """Write, then refetch everything before clearing the busy flag.

        On failure the store keeps its last good list.
        """
        self.store.is_loading = True
        try:
            result = await action()
            session_registry.invalidate_trabajos(exclude=self.context)
            await self._fetch()
            self.notifier.success(success_message)
            return result
        except AppException:
            self.notifier.error(error_message)
            raise
        except Exception as e:
            self.notifier.error(error_message)
            logger.error(f"Unexpected error in trabajo operation: {e}")
            raise DatabaseError("operación de trabajo", str(e))
        finally:
            self.store.is_loading = False

    # =============================================
    # READ OPERATIONS
    # =============================================

    async def list_trabajos(
        self,
        filtros: Optional[TrabajoFilters] = None,
        sort_field: Optional[SortFieldEnum] = None,
        sort_order: SortOrderEnum = SortOrderEnum.ASC
    ) -> TrabajoList:
        """Fetch, filter and order all jobs"""
        await self.fetch_all()
        items = order_trabajos(apply_filters(self.store.trabajos, filtros), sort_field, sort_order)
        return TrabajoList(items=items, total=len(items), is_loading=self.store.is_loading)

    async def get_trabajo(self, trabajo_id: UUID) -> TrabajoResponse:
        trabajo = await self.trabajo_repo.get_by_id(trabajo_id)
        if not trabajo:
            raise TrabajoNotFoundError(str(trabajo_id))
        return TrabajoResponse.from_model(trabajo)

    def get_defaults(self, hoy: Optional[date] = None) -> TrabajoDefaults:
        """Valores iniciales del formulario de nuevo trabajo"""
        return TrabajoDefaults(
            nombre_cliente=settings.DEFAULT_NOMBRE_CLIENTE,
            fecha_registro=(hoy or date.today()).isoformat(),
            precio=settings.DEFAULT_PRECIO,
            estado=EstadoTrabajoEnum.PENDIENTE,
            tipo_pa=self.context.tipo_pa_activo,
            periodo_id=self.context.periodo_activo_id,
            periodo=self.context.periodo_activo_nombre
        )

    # =============================================
    # WRITE OPERATIONS
    # =============================================

    async def _check_references(self, curso_id: UUID, proveedor_id: UUID, periodo_id: UUID) -> None:
        if not await self.curso_repo.exists(curso_id):
            raise CatalogoNotFoundError("curso", str(curso_id))
        if not await self.proveedor_repo.exists(proveedor_id):
            raise CatalogoNotFoundError("proveedor", str(proveedor_id))
        if not await self.periodo_repo.exists(periodo_id):
            raise CatalogoNotFoundError("periodo", str(periodo_id))

    def _with_session_defaults(self, trabajo_data: TrabajoCreate) -> TrabajoCreate:
        tipo_pa = trabajo_data.tipo_pa or self.context.tipo_pa_activo
        periodo_id = trabajo_data.periodo_id or self.context.periodo_activo_id
        if not tipo_pa:
            raise ValidationError("tipo_pa", "Seleccione un tipo de PA")
        if not periodo_id:
            raise ValidationError("periodo_id", "Seleccione un periodo")
        return trabajo_data.model_copy(update={
            "tipo_pa": getattr(tipo_pa, "value", tipo_pa),
            "periodo_id": periodo_id,
            "fecha_registro": trabajo_data.fecha_registro or date.today().isoformat()
        })

    async def create_trabajo(self, trabajo_data: TrabajoCreate) -> TrabajoResponse:
        """Create a job; missing tipo_pa/periodo come from the session's active selections"""
        trabajo_data = self._with_session_defaults(trabajo_data)

        async def action():
            await self._check_references(trabajo_data.curso_id, trabajo_data.proveedor_id, trabajo_data.periodo_id)
            trabajo = await self.trabajo_repo.create(trabajo_data, create_user_id=self.context.user_id)
            return TrabajoResponse.from_model(trabajo)

        created = await self._mutate(action, "Trabajo creado correctamente", "Error al crear el trabajo")
        logger.info(f"Trabajo created: {created.id} ({created.nombre_cliente})")
        return created

    async def update_trabajo(self, trabajo_id: UUID, trabajo_data: TrabajoUpdate) -> TrabajoResponse:
        """Full replace; leaving Terminado through an edit clears the delivery date"""

        async def action():
            existing = await self.trabajo_repo.get_by_id(trabajo_id)
            if not existing:
                raise TrabajoNotFoundError(str(trabajo_id))
            await self._check_references(trabajo_data.curso_id, trabajo_data.proveedor_id, trabajo_data.periodo_id)

            data = trabajo_data
            if existing.estado == EstadoTrabajoEnum.TERMINADO.value and data.estado != EstadoTrabajoEnum.TERMINADO.value:
                data = data.model_copy(update={"fecha_entrega": ""})

            trabajo = await self.trabajo_repo.update(trabajo_id, data)
            if not trabajo:
                raise TrabajoNotFoundError(str(trabajo_id))
            return TrabajoResponse.from_model(trabajo)

        return await self._mutate(action, "Trabajo actualizado correctamente", "Error al actualizar el trabajo")

    async def toggle_estado(self, trabajo_id: UUID, hoy: Optional[date] = None) -> TrabajoResponse:
        """Enviar / devolver: Pendiente|Cancelado -> Terminado (hoy), Terminado -> Pendiente"""

        async def action():
            existing = await self.trabajo_repo.get_by_id(trabajo_id)
            if not existing:
                raise TrabajoNotFoundError(str(trabajo_id))
            estado, fecha_entrega = toggle_completion(existing.estado, hoy)
            trabajo = await self.trabajo_repo.update_estado(trabajo_id, estado, fecha_entrega)
            if not trabajo:
                raise TrabajoNotFoundError(str(trabajo_id))
            return TrabajoResponse.from_model(trabajo)

        return await self._mutate(action, "Estado del trabajo actualizado", "Error al cambiar el estado del trabajo")

    async def delete_trabajo(self, trabajo_id: UUID) -> bool:

        async def action():
            deleted = await self.trabajo_repo.delete(trabajo_id)
            if not deleted:
                raise TrabajoNotFoundError(str(trabajo_id))
            return deleted

        return await self._mutate(action, "Trabajo eliminado correctamente", "Error al eliminar el trabajo")

    # =============================================
    # SESSION LIST VIEW
    # =============================================

    async def get_vista(self, refrescar: bool = False, page_changed: bool = True) -> TrabajoPage:
        """Current page of the session's list view"""
        if refrescar:
            await self.fetch_all()
        else:
            await self.ensure_loaded()

        vista = self.context.vista
        filtrados = apply_filters(self.store.trabajos, vista.filtros)
        # The store is already status ordered; an explicit sort replaces it
        ordenados = vista.sort.apply(filtrados)
        total = len(ordenados)

        # The list may have shrunk since the page was chosen
        paginas = vista.paginator.total_pages(total)
        if vista.paginator.current_page > max(paginas, 1):
            vista.paginator.current_page = max(paginas, 1)

        return TrabajoPage(
            items=vista.paginator.page_items(ordenados),
            total=total,
            page=vista.paginator.current_page,
            page_size=vista.paginator.page_size,
            total_pages=paginas,
            pages=vista.paginator.window(total),
            sort_field=vista.sort.sort_field.value if vista.sort.sort_field else None,
            sort_order=vista.sort.sort_order.value,
            is_loading=self.store.is_loading,
            page_changed=page_changed
        )

    async def set_vista_filtros(self, filtros: TrabajoFilters) -> TrabajoPage:
        self.context.vista.set_filtros(filtros)
        return await self.get_vista()

    async def clear_vista_filtros(self) -> TrabajoPage:
        self.context.vista.clear_filtros()
        return await self.get_vista()

    async def sort_vista(self, campo: SortFieldEnum) -> TrabajoPage:
        """Header click: same column flips the direction, another one sorts ascending"""
        self.context.vista.sort.toggle(campo)
        return await self.get_vista()

    async def go_to_page(self, page: int) -> TrabajoPage:
        await self.ensure_loaded()
        vista = self.context.vista
        total = len(apply_filters(self.store.trabajos, vista.filtros))
        changed = vista.paginator.go_to(page, total)
        if not changed:
            logger.debug(f"Page {page} rejected (total {total})")
        return await self.get_vista(page_changed=changed)

    async def set_page_size(self, page_size: int) -> TrabajoPage:
        try:
            self.context.vista.paginator.set_page_size(page_size)
        except ValueError as e:
            raise ValidationError("page_size", str(e))
        return await self.get_vista()
