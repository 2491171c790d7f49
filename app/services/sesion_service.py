# =============================================
# app/services/sesion_service.py
# =============================================
from typing import List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.repositories.catalogo_repository import PeriodoRepository
from app.services.session_context import SessionContext
from app.schemas.enums import TipoPAEnum
from app.schemas.sesion import Notificacion, PeriodoActivo, TipoPAActivo
from app.core.exceptions import CatalogoNotFoundError

logger = logging.getLogger(__name__)

class SesionService:
    """Selecciones activas y notificaciones de la sesión"""

    def __init__(self, db: AsyncSession, context: SessionContext):
        self.context = context
        self.periodo_repo = PeriodoRepository(db)

    # =============================================
    # ACTIVE PERIOD
    # =============================================

    def get_periodo_activo(self) -> PeriodoActivo:
        return PeriodoActivo(
            periodo_id=self.context.periodo_activo_id,
            nombre=self.context.periodo_activo_nombre
        )

    async def set_periodo_activo(self, periodo_id: UUID) -> PeriodoActivo:
        periodo = await self.periodo_repo.get_by_id(periodo_id)
        if not periodo:
            raise CatalogoNotFoundError("periodo", str(periodo_id))
        self.context.set_periodo_activo(periodo.periodo_id, periodo.nombre)
        self.context.notifier.info(f"Periodo activo: {periodo.nombre}")
        logger.info(f"Active periodo set to {periodo.nombre} for {self.context.user_email}")
        return self.get_periodo_activo()

    def clear_periodo_activo(self) -> PeriodoActivo:
        self.context.clear_periodo_activo()
        return self.get_periodo_activo()

    # =============================================
    # ACTIVE TIPO PA
    # =============================================

    def get_tipo_pa_activo(self) -> TipoPAActivo:
        return TipoPAActivo(tipo_pa=self.context.tipo_pa_activo)

    def set_tipo_pa_activo(self, tipo_pa: TipoPAEnum) -> TipoPAActivo:
        self.context.tipo_pa_activo = TipoPAEnum(tipo_pa)
        self.context.notifier.info(f"Tipo de PA activo: {self.context.tipo_pa_activo.value}")
        return self.get_tipo_pa_activo()

    def clear_tipo_pa_activo(self) -> TipoPAActivo:
        self.context.tipo_pa_activo = None
        return self.get_tipo_pa_activo()

    # =============================================
    # NOTIFICATIONS
    # =============================================

    def drain_notificaciones(self) -> List[Notificacion]:
        return self.context.notifier.drain()
