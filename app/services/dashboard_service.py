# =============================================
# app/services/dashboard_service.py
# =============================================
from typing import Optional
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.repositories.catalogo_repository import PeriodoRepository
from app.services.session_context import SessionContext
from app.services.trabajo_service import TrabajoService
from app.query.filters import apply_filters, toggle_tipo_pa_selection
from app.query import statistics
from app.schemas.filtros import DashboardFilters
from app.schemas.dashboard import DashboardResponse, DashboardFilterOptions, TipoPASelection
from app.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

class DashboardService:
    """Tarjetas, gráficos y opciones de filtro del dashboard"""

    def __init__(self, db: AsyncSession, context: SessionContext):
        self.context = context
        self.trabajo_service = TrabajoService(db, context)
        self.periodo_repo = PeriodoRepository(db)

    def resolve_filtros(self, filtros: Optional[DashboardFilters] = None) -> DashboardFilters:
        """Sin tipos_pa explícitos se usa la selección múltiple de la sesión"""
        filtros = filtros or DashboardFilters()
        if not filtros.tipos_pa:
            filtros = filtros.model_copy(update={"tipos_pa": list(self.context.dashboard_tipos_pa)})
        return filtros

    async def get_dashboard(self, filtros: Optional[DashboardFilters] = None, hoy: Optional[date] = None) -> DashboardResponse:
        trabajos = await self.trabajo_service.fetch_all()
        filtros = self.resolve_filtros(filtros)
        subset = apply_filters(trabajos, filtros)

        opciones = DashboardFilterOptions(
            proveedores=statistics.proveedor_options(trabajos),
            tipos_pa=statistics.tipo_pa_options(trabajos),
            periodos=statistics.periodo_options(await self.periodo_repo.get_nombres()),
            anios=statistics.anio_options(trabajos, hoy),
            meses=list(statistics.MESES)
        )

        logger.debug(f"Dashboard computed over {len(subset)} of {len(trabajos)} trabajos")
        return DashboardResponse(
            filtros=filtros,
            mes_nombre=statistics.mes_nombre(filtros.mes),
            estadisticas=statistics.compute_statistics(subset),
            opciones=opciones
        )

    # =============================================
    # TIPO PA MULTI-SELECT
    # =============================================

    def get_tipos_pa_seleccion(self) -> TipoPASelection:
        return TipoPASelection(tipos_pa=list(self.context.dashboard_tipos_pa))

    def toggle_tipo_pa(self, valor: str) -> TipoPASelection:
        try:
            self.context.dashboard_tipos_pa = toggle_tipo_pa_selection(self.context.dashboard_tipos_pa, valor)
        except ValueError as e:
            raise ValidationError("tipo_pa", str(e))
        return self.get_tipos_pa_seleccion()
