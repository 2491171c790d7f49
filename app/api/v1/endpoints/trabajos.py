# =============================================
# app/api/v1/endpoints/trabajos.py
# =============================================
from fastapi import APIRouter, Depends, status, Query, Path
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from uuid import UUID

from app.config.database import get_db
from app.services.session_context import SessionContext
from app.services.trabajo_service import TrabajoService
from app.schemas.enums import SortFieldEnum, SortOrderEnum
from app.schemas.filtros import TrabajoFilters, PageSizeRequest
from app.schemas.trabajo import (
    TrabajoCreate,
    TrabajoUpdate,
    TrabajoResponse,
    TrabajoDefaults,
    TrabajoList,
    TrabajoPage
)
from app.api.v1.endpoints.auth import get_current_session

# =============================================
# ROUTER INSTANCE
# =============================================
router = APIRouter()

# =============================================
# DEPENDENCIES
# =============================================
async def get_trabajo_service(
    db: AsyncSession = Depends(get_db),
    context: SessionContext = Depends(get_current_session)
) -> TrabajoService:
    return TrabajoService(db, context)

async def get_trabajo_filters(
    tipo_pa: Optional[str] = Query(None, description="Tipo de PA ('Todos' = sin filtro)"),
    tipos_pa: List[str] = Query([], description="Varios tipos de PA"),
    periodo: Optional[str] = Query(None, description="Nombre del periodo"),
    proveedor: Optional[str] = Query(None, description="Nombre del proveedor"),
    busqueda: Optional[str] = Query(None, description="Texto en cliente, curso o proveedor"),
    fecha_inicio: Optional[str] = Query(None, description="Inicio del rango (AAAA-MM-DD)"),
    fecha_fin: Optional[str] = Query(None, description="Fin del rango (AAAA-MM-DD)"),
    mes: Optional[str] = Query(None, description="Mes 0-11 ('Todos' = sin filtro)"),
    anio: Optional[str] = Query(None, description="Año de registro")
) -> TrabajoFilters:
    try:
        return TrabajoFilters(
            tipo_pa=tipo_pa,
            tipos_pa=tipos_pa,
            periodo=periodo,
            proveedor=proveedor,
            busqueda=busqueda,
            fecha_inicio=fecha_inicio,
            fecha_fin=fecha_fin,
            mes=mes,
            anio=anio
        )
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors())

# =============================================
# TRABAJO CRUD ROUTES
# =============================================

@router.get("/", response_model=TrabajoList)
async def list_trabajos(
    filtros: TrabajoFilters = Depends(get_trabajo_filters),
    sort_field: Optional[SortFieldEnum] = Query(None, description="Columna de orden (sin valor = orden por estado)"),
    sort_order: SortOrderEnum = Query(SortOrderEnum.ASC, description="asc o desc"),
    trabajo_service: TrabajoService = Depends(get_trabajo_service)
):
    """
    Listar trabajos

    **Requiere sesión activa**

    Recarga todos los trabajos, aplica los filtros (se combinan con AND) y los
    ordena por estado (Pendiente, Terminado, Cancelado) o por la columna pedida.
    """
    return await trabajo_service.list_trabajos(filtros, sort_field, sort_order)

@router.get("/nuevo", response_model=TrabajoDefaults)
async def get_trabajo_defaults(
    trabajo_service: TrabajoService = Depends(get_trabajo_service)
):
    """
    Valores por defecto del formulario de nuevo trabajo

    Cliente "Estudiante", fecha de hoy, precio 20, estado Pendiente y las
    selecciones activas de la sesión (tipo de PA y periodo).
    """
    return trabajo_service.get_defaults()

@router.post("/", response_model=TrabajoResponse, status_code=status.HTTP_201_CREATED)
async def create_trabajo(
    trabajo_data: TrabajoCreate,
    trabajo_service: TrabajoService = Depends(get_trabajo_service)
):
    """
    Crear trabajo

    - **proveedor_id**, **curso_id**: referencias de catálogo
    - **tipo_trabajo**: Trabajo Individual o Trabajo Grupal
    - **tipo_pa**, **periodo_id**: si no se envían se usan las selecciones activas
    - **fecha_registro**: por defecto hoy
    """
    return await trabajo_service.create_trabajo(trabajo_data)

# =============================================
# SESSION LIST VIEW ROUTES
# =============================================

@router.get("/vista", response_model=TrabajoPage)
async def get_vista(
    refrescar: bool = Query(False, description="Volver a leer los trabajos antes de paginar"),
    trabajo_service: TrabajoService = Depends(get_trabajo_service)
):
    """
    Página actual de la lista de trabajos de la sesión

    Usa los filtros, el orden y la página guardados en la sesión.
    """
    return await trabajo_service.get_vista(refrescar=refrescar)

@router.put("/vista/filtros", response_model=TrabajoPage)
async def set_vista_filtros(
    filtros: TrabajoFilters,
    trabajo_service: TrabajoService = Depends(get_trabajo_service)
):
    """Reemplazar los filtros de la vista (vuelve a la página 1)"""
    return await trabajo_service.set_vista_filtros(filtros)

@router.delete("/vista/filtros", response_model=TrabajoPage)
async def clear_vista_filtros(
    trabajo_service: TrabajoService = Depends(get_trabajo_service)
):
    """Limpiar los filtros de la vista"""
    return await trabajo_service.clear_vista_filtros()

@router.post("/vista/orden/{campo}", response_model=TrabajoPage)
async def sort_vista(
    campo: SortFieldEnum = Path(..., description="Columna clicada"),
    trabajo_service: TrabajoService = Depends(get_trabajo_service)
):
    """
    Ordenar por una columna

    La misma columna alterna asc/desc; otra columna ordena ascendente.
    """
    return await trabajo_service.sort_vista(campo)

@router.post("/vista/pagina/{page}", response_model=TrabajoPage)
async def go_to_page(
    page: int = Path(..., description="Página destino (1..total_pages)"),
    trabajo_service: TrabajoService = Depends(get_trabajo_service)
):
    """
    Ir a una página

    Una página fuera de rango no cambia nada (`page_changed = false`).
    """
    return await trabajo_service.go_to_page(page)

@router.put("/vista/tamano", response_model=TrabajoPage)
async def set_page_size(
    data: PageSizeRequest,
    trabajo_service: TrabajoService = Depends(get_trabajo_service)
):
    """Cambiar trabajos por página (10, 50 o 100); vuelve a la página 1"""
    return await trabajo_service.set_page_size(data.page_size)

# =============================================
# SINGLE TRABAJO ROUTES
# =============================================

@router.get("/{trabajo_id}", response_model=TrabajoResponse)
async def get_trabajo(
    trabajo_id: UUID,
    trabajo_service: TrabajoService = Depends(get_trabajo_service)
):
    """Obtener trabajo por ID"""
    return await trabajo_service.get_trabajo(trabajo_id)

@router.put("/{trabajo_id}", response_model=TrabajoResponse)
async def update_trabajo(
    trabajo_id: UUID,
    trabajo_data: TrabajoUpdate,
    trabajo_service: TrabajoService = Depends(get_trabajo_service)
):
    """
    Actualizar trabajo (reemplazo completo)

    Si el trabajo estaba Terminado y pasa a otro estado se borra la fecha de entrega.
    """
    return await trabajo_service.update_trabajo(trabajo_id, trabajo_data)

@router.patch("/{trabajo_id}/estado", response_model=TrabajoResponse)
async def toggle_estado(
    trabajo_id: UUID,
    trabajo_service: TrabajoService = Depends(get_trabajo_service)
):
    """
    Enviar o devolver un trabajo

    - Pendiente o Cancelado -> Terminado, fecha de entrega = hoy
    - Terminado -> Pendiente, fecha de entrega vacía
    """
    return await trabajo_service.toggle_estado(trabajo_id)

@router.delete("/{trabajo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trabajo(
    trabajo_id: UUID,
    trabajo_service: TrabajoService = Depends(get_trabajo_service)
):
    """Eliminar trabajo"""
    await trabajo_service.delete_trabajo(trabajo_id)
