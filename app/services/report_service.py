# =============================================
# app/services/report_service.py
# =============================================
"""
Export collaborator: flat report tables and their CSV and PDF renderings.

The subtotal of a report adds the price of every exported row, whatever its
state. Dashboard revenue only counts Terminado jobs; both numbers are kept.
"""
from typing import Iterable, List, Optional
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from xml.sax.saxutils import escape
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
import csv
import io
import logging

from app.config.settings import get_settings
from app.services.session_context import SessionContext
from app.services.trabajo_service import TrabajoService
from app.services.dashboard_service import DashboardService
from app.query.filters import apply_filters
from app.query.status import order_trabajos
from app.query import statistics
from app.schemas.enums import TODOS, SortFieldEnum, SortOrderEnum
from app.schemas.filtros import TrabajoFilters, DashboardFilters
from app.schemas.reporte import ReporteFila, ReporteResponse
from app.schemas.trabajo import TrabajoResponse

logger = logging.getLogger(__name__)
settings = get_settings()

# =============================================
# PURE HELPERS
# =============================================

def report_filename(proveedor: Optional[str], hoy: Optional[date] = None) -> str:
    """<proveedor con _ | TodosLosProveedores>_<AAAA-MM-DD> (sin extensión)"""
    if proveedor and proveedor != TODOS:
        prefix = "_".join(proveedor.split())
    else:
        prefix = settings.REPORT_ALL_PROVIDERS_LABEL
    return f"{prefix}_{(hoy or date.today()).isoformat()}"

def build_rows(trabajos: Iterable[TrabajoResponse]) -> List[ReporteFila]:
    return [
        ReporteFila(
            numero=index,
            cliente=t.nombre_cliente,
            curso=t.curso,
            fecha_registro=t.fecha_registro,
            fecha_entrega=t.fecha_entrega,
            precio=t.precio,
            proveedor=t.proveedor,
            tipo_pa=t.tipo_pa,
            periodo=t.periodo
        )
        for index, t in enumerate(trabajos, start=1)
    ]

def describe_filters(filtros: TrabajoFilters) -> List[str]:
    """Texto de los filtros activos para la cabecera del reporte"""
    descripciones = [f"Proveedor: {filtros.proveedor or 'Todos los proveedores'}"]

    tipos = [t for t in filtros.tipos_pa if t and t != TODOS]
    if filtros.tipo_pa:
        tipos = [filtros.tipo_pa] + [t for t in tipos if t != filtros.tipo_pa]
    descripciones.append(f"Tipo de PA: {', '.join(tipos) if tipos else 'Todos los tipos'}")

    if filtros.periodo:
        descripciones.append(f"Periodo: {filtros.periodo}")
    if filtros.busqueda:
        descripciones.append(f"Búsqueda: {filtros.busqueda}")
    if filtros.fecha_inicio and filtros.fecha_fin:
        descripciones.append(f"Desde {filtros.fecha_inicio.isoformat()} hasta {filtros.fecha_fin.isoformat()}")
    if filtros.mes is not None:
        descripciones.append(f"Mes: {statistics.mes_nombre(filtros.mes).capitalize()}")
    if filtros.anio is not None:
        descripciones.append(f"Año: {filtros.anio}")
    return descripciones

def build_report(
    trabajos: Iterable[TrabajoResponse],
    filtros: TrabajoFilters,
    hoy: Optional[date] = None,
    titulo: str = "Reporte de Trabajos"
) -> ReporteResponse:
    items = list(trabajos)
    hoy = hoy or date.today()
    return ReporteResponse(
        titulo=titulo,
        nombre_archivo=report_filename(filtros.proveedor, hoy),
        generado_en=hoy,
        filtros=describe_filters(filtros),
        filas=build_rows(items),
        total_registros=len(items),
        subtotal=statistics.export_subtotal(items)
    )

def render_csv(reporte: ReporteResponse) -> str:
    """CSV con cabecera, una línea por trabajo y la línea de subtotal"""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(reporte.columnas)
    for fila in reporte.filas:
        writer.writerow(fila.as_row())
    writer.writerow(["", "", "", "", "Subtotal", f"{reporte.subtotal:.2f}", "", "", ""])
    return output.getvalue()

# Report palette
_DARK = colors.Color(44 / 255, 62 / 255, 80 / 255)
_HEADER = colors.Color(54 / 255, 79 / 255, 107 / 255)
_ROW = colors.Color(245 / 255, 247 / 255, 250 / 255)
_ROW_ALT = colors.Color(230 / 255, 236 / 255, 245 / 255)

def render_pdf(reporte: ReporteResponse) -> bytes:
    """PDF A4 apaisado: título, filtros activos, tabla y totales"""
    output = io.BytesIO()
    doc = SimpleDocTemplate(
        output,
        pagesize=landscape(A4),
        leftMargin=1.5 * cm,
        rightMargin=1.5 * cm,
        topMargin=1.5 * cm,
        bottomMargin=1.5 * cm,
        title=reporte.titulo
    )
    styles = getSampleStyleSheet()

    story = [Paragraph(escape(reporte.titulo), styles["Title"])]
    for descripcion in reporte.filtros:
        story.append(Paragraph(escape(descripcion), styles["Normal"]))
    story.append(Paragraph(f"Generado el {reporte.generado_en.isoformat()}", styles["Italic"]))
    story.append(Spacer(1, 0.5 * cm))

    data = [reporte.columnas] + [[str(value) for value in fila.as_row()] for fila in reporte.filas]
    table = Table(data, repeatRows=1)
    estilo = [
        ("BACKGROUND", (0, 0), (-1, 0), _HEADER),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("GRID", (0, 0), (-1, -1), 0.5, _HEADER),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
    ]
    if reporte.filas:
        estilo += [
            ("TEXTCOLOR", (0, 1), (-1, -1), _DARK),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [_ROW, _ROW_ALT]),
            ("ALIGN", (5, 1), (5, -1), "RIGHT"),
        ]
    table.setStyle(TableStyle(estilo))
    story.append(table)
    story.append(Spacer(1, 0.5 * cm))

    story.append(Paragraph(f"<b>Subtotal: S/ {reporte.subtotal:.2f}</b>", styles["Normal"]))
    if reporte.estadisticas is not None:
        story.append(Paragraph(
            f"Ingresos (Terminados): S/ {reporte.estadisticas.ingreso_total:.2f}",
            styles["Normal"]
        ))

    doc.build(story)
    return output.getvalue()

# =============================================
# SERVICE
# =============================================

class ReportService:
    def __init__(self, db: AsyncSession, context: SessionContext):
        self.context = context
        self.trabajo_service = TrabajoService(db, context)
        self.dashboard_service = DashboardService(db, context)

    async def trabajos_report(
        self,
        filtros: Optional[TrabajoFilters] = None,
        sort_field: Optional[SortFieldEnum] = None,
        sort_order: SortOrderEnum = SortOrderEnum.ASC,
        usar_vista: bool = False
    ) -> ReporteResponse:
        """Report of the job list; ``usar_vista`` takes filters and order from the session list view"""
        trabajos = await self.trabajo_service.fetch_all()
        if usar_vista:
            vista = self.context.vista
            filtros = vista.filtros
            sort_field, sort_order = vista.sort.sort_field, vista.sort.sort_order
        filtros = filtros or TrabajoFilters()

        items = order_trabajos(apply_filters(trabajos, filtros), sort_field, sort_order)
        logger.info(f"Trabajos report generated with {len(items)} rows")
        return build_report(items, filtros)

    async def dashboard_report(self, filtros: Optional[DashboardFilters] = None) -> ReporteResponse:
        """Report of the dashboard subset, with its statistics"""
        trabajos = await self.trabajo_service.fetch_all()
        filtros = self.dashboard_service.resolve_filtros(filtros)
        items = apply_filters(trabajos, filtros)

        reporte = build_report(items, filtros)
        reporte.estadisticas = statistics.compute_statistics(items)
        logger.info(f"Dashboard report generated with {len(items)} rows")
        return reporte
