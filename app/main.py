# =============================================
# app/main.py
# =============================================
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from contextlib import asynccontextmanager
import logging
import time
import uvicorn

from app.config.settings import get_settings, validate_environment
from app.config.database import create_tables, close_database, check_database_health, async_session
from app.api.v1.router import api_router
from app.core.exceptions import AppException
from app.core.exception_handlers import (
    app_exception_handler,
    integrity_error_handler,
    sqlalchemy_error_handler,
    global_exception_handler,
    http_exception_handler
)
from app.services.auth_service import AuthService
from app.services.session_context import session_registry

# =============================================
# SETTINGS
# =============================================
settings = get_settings()

# =============================================
# LOGGING CONFIGURATION
# =============================================
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format=settings.LOG_FORMAT
)
logger = logging.getLogger(__name__)

# =============================================
# LIFESPAN CONTEXT MANAGER
# =============================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events"""
    # Startup
    logger.info(f"Starting {settings.APP_NAME} v{settings.VERSION} ({settings.ENVIRONMENT})")

    validate_environment()
    await create_tables()

    async with async_session() as db:
        await AuthService(db).ensure_admin()

    logger.info(f"{settings.APP_NAME} started successfully")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME}...")
    session_registry.clear()
    await close_database()
    logger.info(f"{settings.APP_NAME} shut down successfully")

# =============================================
# FASTAPI APPLICATION
# =============================================
app = FastAPI(
    title=settings.APP_NAME,
    description="""
    Administración de trabajos académicos tercerizados.

    ## Principales Funcionalidades

    * **Trabajos**: alta, edición, baja y envío/devolución (Pendiente ⇄ Terminado)
    * **Catálogos**: cursos, proveedores (celular de 9 dígitos) y periodos
    * **Vista de lista**: filtros combinados, orden por columna y paginación de 10, 50 o 100
    * **Dashboard**: trabajos completados, pendientes, ingresos y gráficos por estado y tipo de PA
    * **Reportes**: tabla plana con subtotal y descarga CSV
    * **Sesión**: periodo y tipo de PA activos, notificaciones

    ## Autenticación

    JWT Bearer Token obtenido en `/api/v1/auth/login`.
    """,
    version=settings.VERSION,
    openapi_tags=[
        {"name": "Authentication", "description": "Inicio y cierre de sesión"},
        {"name": "Trabajos", "description": "Gestión de trabajos y vista de lista"},
        {"name": "Cursos", "description": "Catálogo de cursos"},
        {"name": "Proveedores", "description": "Catálogo de proveedores"},
        {"name": "Periodos", "description": "Catálogo de periodos"},
        {"name": "Dashboard", "description": "Estadísticas y gráficos"},
        {"name": "Sesión", "description": "Selecciones activas y notificaciones"},
        {"name": "Reportes", "description": "Exportación de reportes"},
        {"name": "Health", "description": "Health checks"},
        {"name": "Info", "description": "Información de la API"},
    ],
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# =============================================
# MIDDLEWARE CONFIGURATION
# =============================================

# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add processing time to response headers"""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response

# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming requests"""
    start_time = time.time()

    logger.info(f"Request: {request.method} {request.url.path}")

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(
        f"Response: {request.method} {request.url.path} - "
        f"Status: {response.status_code} - Time: {process_time:.4f}s"
    )

    return response

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Process-Time", "Content-Disposition"],
)

# Trusted Host Middleware (for production)
if not settings.DEBUG:
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=settings.TRUSTED_HOSTS
    )

# ==========================================
# EXCEPTION HANDLERS
# ==========================================

@app.exception_handler(AppException)
async def handle_app_exception(request, exc):
    return await app_exception_handler(request, exc)

@app.exception_handler(IntegrityError)
async def handle_integrity_error(request, exc):
    return await integrity_error_handler(request, exc)

@app.exception_handler(SQLAlchemyError)
async def handle_sqlalchemy_error(request, exc):
    return await sqlalchemy_error_handler(request, exc)

@app.exception_handler(HTTPException)
async def handle_http_exception(request, exc):
    return await http_exception_handler(request, exc)

# Handler global (debe ser el último)
@app.exception_handler(Exception)
async def handle_global_exception(request, exc):
    return await global_exception_handler(request, exc)

# ==========================================
# ROUTERS
# ==========================================
app.include_router(api_router, prefix="/api/v1")

# ==========================================
# BASIC ROUTES
# ==========================================
@app.get("/", tags=["Info"])
async def root():
    return {
        "message": settings.APP_NAME,
        "version": settings.VERSION,
        "docs": "/docs",
        "health": "/health"
    }

@app.get("/health", tags=["Health"])
async def health():
    database_ok = await check_database_health()
    session_registry.prune()
    return {
        "status": "healthy" if database_ok else "degraded",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "database": "connected" if database_ok else "disconnected",
        "active_sessions": len(session_registry)
    }

# =============================================
# DEVELOPMENT SERVER
# =============================================
if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="info" if settings.DEBUG else "warning",
        access_log=settings.DEBUG
    )
