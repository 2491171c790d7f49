# =============================================
# app/api/v1/endpoints/reportes.py
# =============================================
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from urllib.parse import quote

from app.config.database import get_db
from app.services.session_context import SessionContext
from app.services.report_service import ReportService, render_csv, render_pdf
from app.schemas.enums import SortFieldEnum, SortOrderEnum
from app.schemas.filtros import TrabajoFilters, DashboardFilters
from app.schemas.reporte import ReporteResponse
from app.api.v1.endpoints.auth import get_current_session
from app.api.v1.endpoints.trabajos import get_trabajo_filters
from app.api.v1.endpoints.dashboard import get_dashboard_filters

router = APIRouter()

async def get_report_service(
    db: AsyncSession = Depends(get_db),
    context: SessionContext = Depends(get_current_session)
) -> ReportService:
    return ReportService(db, context)

def csv_response(reporte: ReporteResponse) -> Response:
    # BOM so spreadsheet programs read the accents as UTF-8
    return Response(
        content="\ufeff" + render_csv(reporte),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(reporte.nombre_archivo)}.csv"}
    )

def pdf_response(reporte: ReporteResponse) -> Response:
    return Response(
        content=render_pdf(reporte),
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(reporte.nombre_archivo)}.pdf"}
    )

# =============================================
# TRABAJOS REPORT ROUTES
# =============================================

@router.get("/trabajos", response_model=ReporteResponse)
async def trabajos_report(
    filtros: TrabajoFilters = Depends(get_trabajo_filters),
    sort_field: Optional[SortFieldEnum] = Query(None),
    sort_order: SortOrderEnum = Query(SortOrderEnum.ASC),
    usar_vista: bool = Query(False, description="Usar los filtros y el orden de la vista de la sesión"),
    report_service: ReportService = Depends(get_report_service)
):
    """
    Tabla del reporte de trabajos

    Columnas: N°, Cliente, Curso, Fecha Registro, Fecha Entrega, Precio,
    Proveedor, Tipo PA, Periodo. El **subtotal** suma el precio de todas las
    filas, sin importar su estado.
    """
    return await report_service.trabajos_report(filtros, sort_field, sort_order, usar_vista)

@router.get("/trabajos.csv")
async def trabajos_report_csv(
    filtros: TrabajoFilters = Depends(get_trabajo_filters),
    sort_field: Optional[SortFieldEnum] = Query(None),
    sort_order: SortOrderEnum = Query(SortOrderEnum.ASC),
    usar_vista: bool = Query(False),
    report_service: ReportService = Depends(get_report_service)
):
    """Reporte de trabajos en CSV"""
    reporte = await report_service.trabajos_report(filtros, sort_field, sort_order, usar_vista)
    return csv_response(reporte)

@router.get("/trabajos.pdf")
async def trabajos_report_pdf(
    filtros: TrabajoFilters = Depends(get_trabajo_filters),
    sort_field: Optional[SortFieldEnum] = Query(None),
    sort_order: SortOrderEnum = Query(SortOrderEnum.ASC),
    usar_vista: bool = Query(False),
    report_service: ReportService = Depends(get_report_service)
):
    """Reporte de trabajos en PDF"""
    reporte = await report_service.trabajos_report(filtros, sort_field, sort_order, usar_vista)
    return pdf_response(reporte)

# =============================================
# DASHBOARD REPORT ROUTES
# =============================================

@router.get("/dashboard", response_model=ReporteResponse)
async def dashboard_report(
    filtros: DashboardFilters = Depends(get_dashboard_filters),
    report_service: ReportService = Depends(get_report_service)
):
    """Tabla del reporte del dashboard con sus estadísticas"""
    return await report_service.dashboard_report(filtros)

@router.get("/dashboard.csv")
async def dashboard_report_csv(
    filtros: DashboardFilters = Depends(get_dashboard_filters),
    report_service: ReportService = Depends(get_report_service)
):
    """Reporte del dashboard en CSV"""
    reporte = await report_service.dashboard_report(filtros)
    return csv_response(reporte)

@router.get("/dashboard.pdf")
async def dashboard_report_pdf(
    filtros: DashboardFilters = Depends(get_dashboard_filters),
    report_service: ReportService = Depends(get_report_service)
):
    """
    Reporte del dashboard en PDF

    Cabecera con los filtros activos, tabla de trabajos, subtotal e ingresos.
    Archivo: `<proveedor>_<AAAA-MM-DD>.pdf`
    """
    reporte = await report_service.dashboard_report(filtros)
    return pdf_response(reporte)
