# =============================================
# app/services/session_context.py
# =============================================
"""
Estado de cada sesión iniciada.

Un ``SessionContext`` se crea al hacer login y se descarta al hacer logout.
Guarda las selecciones activas (periodo y tipo de PA usados como valores por
defecto del formulario de nuevo trabajo), la cola de notificaciones, la lista
de trabajos en memoria con su indicador de carga y el estado de la vista de
lista (filtros, orden y página).
"""
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Deque, Dict, Iterable, List, Optional
from uuid import UUID
import logging
import threading

from app.config.settings import get_settings
from app.core.exceptions import SessionNotActiveError
from app.query.pagination import Paginator
from app.query.sorting import SortState
from app.query.status import sort_by_status
from app.schemas.enums import TODOS, NotificationTypeEnum, TipoPAEnum
from app.schemas.filtros import TrabajoFilters
from app.schemas.sesion import Notificacion
from app.schemas.trabajo import TrabajoResponse

logger = logging.getLogger(__name__)
settings = get_settings()

# =============================================
# NOTIFICATIONS
# =============================================
class Notifier:
    """Cola de avisos para el usuario (toasts del front-end)"""

    def __init__(self, maxlen: int = 50):
        self._queue: Deque[Notificacion] = deque(maxlen=maxlen)

    def _push(self, mensaje: str, tipo: NotificationTypeEnum) -> None:
        self._queue.append(Notificacion(mensaje=mensaje, tipo=tipo, created_at=datetime.now(timezone.utc)))

    def success(self, mensaje: str) -> None:
        self._push(mensaje, NotificationTypeEnum.SUCCESS)

    def error(self, mensaje: str) -> None:
        self._push(mensaje, NotificationTypeEnum.ERROR)

    def info(self, mensaje: str) -> None:
        self._push(mensaje, NotificationTypeEnum.INFO)

    def drain(self) -> List[Notificacion]:
        """Devuelve y vacía la cola"""
        items = list(self._queue)
        self._queue.clear()
        return items

    def __len__(self) -> int:
        return len(self._queue)

# =============================================
# RECORD STORE
# =============================================
class TrabajoStore:
    """Lista autoritativa de trabajos de la sesión.

    Solo se reemplaza completa después de un fetch exitoso, así que ante un
    error de persistencia conserva la última lista buena.
    """

    def __init__(self):
        self.trabajos: List[TrabajoResponse] = []
        self.is_loading: bool = False
        self.loaded: bool = False

    def replace(self, trabajos: Iterable[TrabajoResponse]) -> None:
        self.trabajos = sort_by_status(trabajos)
        self.loaded = True

    def find(self, trabajo_id: UUID) -> Optional[TrabajoResponse]:
        for trabajo in self.trabajos:
            if trabajo.id == trabajo_id:
                return trabajo
        return None

# =============================================
# LIST VIEW STATE
# =============================================
class ListView:
    """Filtros, orden y página de la tabla de trabajos"""

    def __init__(self, page_size: Optional[int] = None):
        self.filtros = TrabajoFilters()
        self.sort = SortState()
        self.paginator = Paginator(
            page_size or settings.DEFAULT_PAGE_SIZE,
            settings.PAGE_SIZE_OPTIONS
        )

    def set_filtros(self, filtros: TrabajoFilters) -> None:
        # Un cambio de filtros vuelve a la primera página
        self.filtros = filtros
        self.paginator.reset()

    def clear_filtros(self) -> None:
        self.set_filtros(TrabajoFilters())

# =============================================
# SESSION CONTEXT
# =============================================
@dataclass
class SessionContext:
    session_id: str
    user_id: UUID
    user_email: str
    periodo_activo_id: Optional[UUID] = None
    periodo_activo_nombre: Optional[str] = None
    tipo_pa_activo: Optional[TipoPAEnum] = None
    dashboard_tipos_pa: List[str] = field(default_factory=lambda: [TODOS])
    notifier: Notifier = field(default_factory=Notifier)
    store: TrabajoStore = field(default_factory=TrabajoStore)
    vista: ListView = field(default_factory=ListView)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    expires_at: Optional[datetime] = None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        return (now or datetime.now(timezone.utc)) >= self.expires_at

    def set_periodo_activo(self, periodo_id: UUID, nombre: str) -> None:
        self.periodo_activo_id = periodo_id
        self.periodo_activo_nombre = nombre

    def clear_periodo_activo(self) -> None:
        self.periodo_activo_id = None
        self.periodo_activo_nombre = None

    def forget_periodo(self, periodo_id: UUID) -> None:
        """Olvidar el periodo activo si se eliminó del catálogo"""
        if self.periodo_activo_id == periodo_id:
            self.clear_periodo_activo()

# =============================================
# SESSION REGISTRY
# =============================================
class SessionRegistry:
    """Sesiones abiertas indexadas por el claim ``sid`` del token.

    Una sesión vive hasta el logout o hasta que vence su token; las vencidas
    se descartan al consultarlas y en cada login.
    """

    def __init__(self):
        self._sessions: Dict[str, SessionContext] = {}
        self._lock = threading.Lock()

    def _prune_locked(self, now: datetime) -> int:
        expired = [sid for sid, context in self._sessions.items() if context.is_expired(now)]
        for sid in expired:
            del self._sessions[sid]
        return len(expired)

    def open(
        self,
        session_id: str,
        user_id: UUID,
        user_email: str,
        expires_at: Optional[datetime] = None
    ) -> SessionContext:
        context = SessionContext(
            session_id=session_id,
            user_id=user_id,
            user_email=user_email,
            expires_at=expires_at
        )
        with self._lock:
            pruned = self._prune_locked(datetime.now(timezone.utc))
            self._sessions[session_id] = context
        if pruned:
            logger.info(f"Expired sessions discarded: {pruned}")
        logger.info(f"Session opened for {user_email}")
        return context

    def get(self, session_id: Optional[str]) -> SessionContext:
        with self._lock:
            context = self._sessions.get(session_id) if session_id else None
            if context is not None and context.is_expired():
                del self._sessions[session_id]
                logger.info(f"Session expired for {context.user_email}")
                context = None
        if context is None:
            raise SessionNotActiveError()
        return context

    def close(self, session_id: str) -> bool:
        with self._lock:
            context = self._sessions.pop(session_id, None)
        if context is not None:
            logger.info(f"Session closed for {context.user_email}")
        return context is not None

    def prune(self) -> int:
        with self._lock:
            return self._prune_locked(datetime.now(timezone.utc))

    def all(self) -> List[SessionContext]:
        with self._lock:
            return list(self._sessions.values())

    def invalidate_trabajos(self, exclude: Optional[SessionContext] = None) -> None:
        """Hacer que las demás sesiones vuelvan a leer los trabajos en su próxima consulta"""
        for context in self.all():
            if context is not exclude:
                context.store.loaded = False

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

session_registry = SessionRegistry()
