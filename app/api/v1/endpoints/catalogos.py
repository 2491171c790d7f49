# =============================================
# app/api/v1/endpoints/catalogos.py
# =============================================
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from uuid import UUID

from app.config.database import get_db
from app.services.session_context import SessionContext
from app.services.catalogo_service import CursoService, ProveedorService, PeriodoService
from app.schemas.curso import CursoCreate, CursoUpdate, CursoResponse
from app.schemas.proveedor import ProveedorCreate, ProveedorUpdate, ProveedorResponse
from app.schemas.periodo import PeriodoCreate, PeriodoUpdate, PeriodoResponse
from app.api.v1.endpoints.auth import get_current_session

# =============================================
# ROUTER INSTANCES
# =============================================
cursos_router = APIRouter()
proveedores_router = APIRouter()
periodos_router = APIRouter()

# =============================================
# DEPENDENCIES
# =============================================
async def get_curso_service(
    db: AsyncSession = Depends(get_db),
    context: SessionContext = Depends(get_current_session)
) -> CursoService:
    return CursoService(db, context)

async def get_proveedor_service(
    db: AsyncSession = Depends(get_db),
    context: SessionContext = Depends(get_current_session)
) -> ProveedorService:
    return ProveedorService(db, context)

async def get_periodo_service(
    db: AsyncSession = Depends(get_db),
    context: SessionContext = Depends(get_current_session)
) -> PeriodoService:
    return PeriodoService(db, context)

# =============================================
# CURSO ROUTES
# =============================================

@cursos_router.get("/", response_model=List[CursoResponse])
async def list_cursos(curso_service: CursoService = Depends(get_curso_service)):
    """Listar cursos en orden alfabético"""
    return await curso_service.list_all()

@cursos_router.post("/", response_model=CursoResponse, status_code=status.HTTP_201_CREATED)
async def create_curso(data: CursoCreate, curso_service: CursoService = Depends(get_curso_service)):
    """Crear curso"""
    return await curso_service.create(data)

@cursos_router.get("/{curso_id}", response_model=CursoResponse)
async def get_curso(curso_id: UUID, curso_service: CursoService = Depends(get_curso_service)):
    return await curso_service.get(curso_id)

@cursos_router.put("/{curso_id}", response_model=CursoResponse)
async def update_curso(curso_id: UUID, data: CursoUpdate, curso_service: CursoService = Depends(get_curso_service)):
    """Renombrar curso (los trabajos muestran el nuevo nombre)"""
    return await curso_service.update(curso_id, data)

@cursos_router.delete("/{curso_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_curso(curso_id: UUID, curso_service: CursoService = Depends(get_curso_service)):
    """Eliminar curso; los trabajos que lo usaban quedan sin curso"""
    await curso_service.delete(curso_id)

# =============================================
# PROVEEDOR ROUTES
# =============================================

@proveedores_router.get("/", response_model=List[ProveedorResponse])
async def list_proveedores(proveedor_service: ProveedorService = Depends(get_proveedor_service)):
    """Listar proveedores en orden alfabético"""
    return await proveedor_service.list_all()

@proveedores_router.post("/", response_model=ProveedorResponse, status_code=status.HTTP_201_CREATED)
async def create_proveedor(data: ProveedorCreate, proveedor_service: ProveedorService = Depends(get_proveedor_service)):
    """
    Crear proveedor

    - **nombre**: Nombre del proveedor
    - **celular**: exactamente 9 dígitos
    """
    return await proveedor_service.create(data)

@proveedores_router.get("/{proveedor_id}", response_model=ProveedorResponse)
async def get_proveedor(proveedor_id: UUID, proveedor_service: ProveedorService = Depends(get_proveedor_service)):
    return await proveedor_service.get(proveedor_id)

@proveedores_router.put("/{proveedor_id}", response_model=ProveedorResponse)
async def update_proveedor(
    proveedor_id: UUID,
    data: ProveedorUpdate,
    proveedor_service: ProveedorService = Depends(get_proveedor_service)
):
    return await proveedor_service.update(proveedor_id, data)

@proveedores_router.delete("/{proveedor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_proveedor(proveedor_id: UUID, proveedor_service: ProveedorService = Depends(get_proveedor_service)):
    """Eliminar proveedor; los trabajos que lo usaban quedan sin proveedor"""
    await proveedor_service.delete(proveedor_id)

# =============================================
# PERIODO ROUTES
# =============================================

@periodos_router.get("/", response_model=List[PeriodoResponse])
async def list_periodos(periodo_service: PeriodoService = Depends(get_periodo_service)):
    """Listar periodos en orden alfabético (2025-II después de 2025-I)"""
    return await periodo_service.list_all()

@periodos_router.post("/", response_model=PeriodoResponse, status_code=status.HTTP_201_CREATED)
async def create_periodo(data: PeriodoCreate, periodo_service: PeriodoService = Depends(get_periodo_service)):
    """Crear periodo"""
    return await periodo_service.create(data)

@periodos_router.get("/{periodo_id}", response_model=PeriodoResponse)
async def get_periodo(periodo_id: UUID, periodo_service: PeriodoService = Depends(get_periodo_service)):
    return await periodo_service.get(periodo_id)

@periodos_router.put("/{periodo_id}", response_model=PeriodoResponse)
async def update_periodo(periodo_id: UUID, data: PeriodoUpdate, periodo_service: PeriodoService = Depends(get_periodo_service)):
    return await periodo_service.update(periodo_id, data)

@periodos_router.delete("/{periodo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_periodo(periodo_id: UUID, periodo_service: PeriodoService = Depends(get_periodo_service)):
    """Eliminar periodo; también deja de ser el periodo activo de las sesiones"""
    await periodo_service.delete(periodo_id)
