# =============================================
# app/api/v1/endpoints/dashboard.py
# =============================================
from fastapi import APIRouter, Depends, Query, Path
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.config.database import get_db
from app.services.session_context import SessionContext
from app.services.dashboard_service import DashboardService
from app.schemas.filtros import DashboardFilters
from app.schemas.dashboard import DashboardResponse, TipoPASelection
from app.api.v1.endpoints.auth import get_current_session

# =============================================
# ROUTER INSTANCE
# =============================================
router = APIRouter()

# =============================================
# DEPENDENCIES
# =============================================
async def get_dashboard_service(
    db: AsyncSession = Depends(get_db),
    context: SessionContext = Depends(get_current_session)
) -> DashboardService:
    return DashboardService(db, context)

async def get_dashboard_filters(
    proveedor: Optional[str] = Query(None, description="Nombre del proveedor ('Todos' = sin filtro)"),
    tipo_pa: Optional[str] = Query(None, description="Tipo de PA"),
    tipos_pa: List[str] = Query([], description="Selección múltiple (por defecto la de la sesión)"),
    periodo: Optional[str] = Query(None, description="Nombre del periodo"),
    mes: Optional[str] = Query(None, description="Mes 0-11 ('Todos' = sin filtro)"),
    anio: Optional[str] = Query(None, description="Año (por defecto el actual)")
) -> DashboardFilters:
    try:
        return DashboardFilters(
            proveedor=proveedor,
            tipo_pa=tipo_pa,
            tipos_pa=tipos_pa,
            periodo=periodo,
            mes=mes,
            anio=anio
        )
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors())

# =============================================
# DASHBOARD ROUTES
# =============================================

@router.get("/", response_model=DashboardResponse)
async def get_dashboard(
    filtros: DashboardFilters = Depends(get_dashboard_filters),
    dashboard_service: DashboardService = Depends(get_dashboard_service)
):
    """
    Estadísticas del dashboard

    - **total**, **completados**, **pendientes**
    - **ingreso_total**: suma de precios de los trabajos Terminados
    - **por_estado**: Pendientes / Terminados / Cancelados
    - **por_tipo_pa**: cantidad por tipo de PA presente
    - **opciones**: valores de los selectores de filtro
    """
    return await dashboard_service.get_dashboard(filtros)

@router.get("/tipos-pa/seleccion", response_model=TipoPASelection)
async def get_tipos_pa_seleccion(
    dashboard_service: DashboardService = Depends(get_dashboard_service)
):
    """Selección múltiple de tipos de PA guardada en la sesión"""
    return dashboard_service.get_tipos_pa_seleccion()

@router.post("/tipos-pa/seleccion/{valor}", response_model=TipoPASelection)
async def toggle_tipo_pa(
    valor: str = Path(..., description="Tipo de PA o 'Todos'"),
    dashboard_service: DashboardService = Depends(get_dashboard_service)
):
    """
    Marcar o desmarcar un tipo de PA

    'Todos' limpia los demás; marcar un tipo concreto quita 'Todos'; una
    selección vacía vuelve a 'Todos'.
    """
    return dashboard_service.toggle_tipo_pa(valor)
