# =============================================
# app/api/v1/endpoints/sesion.py
# =============================================
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.config.database import get_db
from app.services.session_context import SessionContext
from app.services.sesion_service import SesionService
from app.schemas.sesion import (
    Notificacion,
    PeriodoActivo,
    PeriodoActivoRequest,
    TipoPAActivo,
    TipoPAActivoRequest
)
from app.api.v1.endpoints.auth import get_current_session

router = APIRouter()

async def get_sesion_service(
    db: AsyncSession = Depends(get_db),
    context: SessionContext = Depends(get_current_session)
) -> SesionService:
    return SesionService(db, context)

# =============================================
# ACTIVE SELECTION ROUTES
# =============================================

@router.get("/periodo-activo", response_model=PeriodoActivo)
async def get_periodo_activo(sesion_service: SesionService = Depends(get_sesion_service)):
    return sesion_service.get_periodo_activo()

@router.put("/periodo-activo", response_model=PeriodoActivo)
async def set_periodo_activo(
    data: PeriodoActivoRequest,
    sesion_service: SesionService = Depends(get_sesion_service)
):
    """Periodo que se pre-llena en los nuevos trabajos (no modifica los existentes)"""
    return await sesion_service.set_periodo_activo(data.periodo_id)

@router.delete("/periodo-activo", response_model=PeriodoActivo)
async def clear_periodo_activo(sesion_service: SesionService = Depends(get_sesion_service)):
    return sesion_service.clear_periodo_activo()

@router.get("/tipo-pa-activo", response_model=TipoPAActivo)
async def get_tipo_pa_activo(sesion_service: SesionService = Depends(get_sesion_service)):
    return sesion_service.get_tipo_pa_activo()

@router.put("/tipo-pa-activo", response_model=TipoPAActivo)
async def set_tipo_pa_activo(
    data: TipoPAActivoRequest,
    sesion_service: SesionService = Depends(get_sesion_service)
):
    """Tipo de PA que se pre-llena en los nuevos trabajos"""
    return sesion_service.set_tipo_pa_activo(data.tipo_pa)

@router.delete("/tipo-pa-activo", response_model=TipoPAActivo)
async def clear_tipo_pa_activo(sesion_service: SesionService = Depends(get_sesion_service)):
    return sesion_service.clear_tipo_pa_activo()

# =============================================
# NOTIFICATION ROUTES
# =============================================

@router.get("/notificaciones", response_model=List[Notificacion])
async def drain_notificaciones(sesion_service: SesionService = Depends(get_sesion_service)):
    """Devuelve los avisos pendientes y vacía la cola"""
    return sesion_service.drain_notificaciones()
