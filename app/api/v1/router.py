# =============================================
# app/api/v1/router.py
# =============================================
from fastapi import APIRouter

from app.api.v1.endpoints import (
    auth,
    trabajos,
    catalogos,
    dashboard,
    sesion,
    reportes
)
from app.config.settings import get_settings

# Get settings
settings = get_settings()

# =============================================
# API V1 ROUTER
# =============================================
api_router = APIRouter()

# =============================================
# AUTHENTICATION ROUTES
# =============================================
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
    responses={
        401: {"description": "Unauthorized"}
    }
)

# =============================================
# TRABAJO ROUTES
# =============================================
api_router.include_router(
    trabajos.router,
    prefix="/trabajos",
    tags=["Trabajos"],
    responses={
        401: {"description": "Unauthorized"},
        404: {"description": "Trabajo not found"},
        422: {"description": "Invalid trabajo data"}
    }
)

# =============================================
# CATALOG ROUTES
# =============================================
api_router.include_router(
    catalogos.cursos_router,
    prefix="/cursos",
    tags=["Cursos"],
    responses={404: {"description": "Curso not found"}}
)

api_router.include_router(
    catalogos.proveedores_router,
    prefix="/proveedores",
    tags=["Proveedores"],
    responses={
        404: {"description": "Proveedor not found"},
        422: {"description": "Invalid phone number"}
    }
)

api_router.include_router(
    catalogos.periodos_router,
    prefix="/periodos",
    tags=["Periodos"],
    responses={404: {"description": "Periodo not found"}}
)

# =============================================
# DASHBOARD ROUTES
# =============================================
api_router.include_router(
    dashboard.router,
    prefix="/dashboard",
    tags=["Dashboard"]
)

# =============================================
# SESSION ROUTES
# =============================================
api_router.include_router(
    sesion.router,
    prefix="/sesion",
    tags=["Sesión"],
    responses={401: {"description": "Unauthorized"}}
)

# =============================================
# REPORT ROUTES
# =============================================
api_router.include_router(
    reportes.router,
    prefix="/reportes",
    tags=["Reportes"]
)

# =============================================
# API INFO ROUTE
# =============================================
@api_router.get("/info", tags=["Info"])
async def api_info():
    """
    API information endpoint
    """
    return {
        "name": settings.APP_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "page_size_options": settings.PAGE_SIZE_OPTIONS,
        "authentication": "JWT Bearer Token",
        "endpoints": {
            "auth": "/api/v1/auth",
            "trabajos": "/api/v1/trabajos",
            "cursos": "/api/v1/cursos",
            "proveedores": "/api/v1/proveedores",
            "periodos": "/api/v1/periodos",
            "dashboard": "/api/v1/dashboard",
            "sesion": "/api/v1/sesion",
            "reportes": "/api/v1/reportes"
        }
    }
