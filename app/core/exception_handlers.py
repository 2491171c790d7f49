# =============================================
# app/core/exception_handlers.py
# =============================================
from fastapi import Request, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging

from app.core.exceptions import AppException, InvalidCredentialsError, InvalidTokenError, SessionNotActiveError

logger = logging.getLogger(__name__)

async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle custom application exceptions"""
    log = logger.warning if exc.status_code < 500 else logger.error
    log(f"Application exception: {exc.message}", extra={
        "path": request.url.path,
        "method": request.method,
        "details": exc.details
    })

    headers = None
    if isinstance(exc, (InvalidCredentialsError, InvalidTokenError, SessionNotActiveError)):
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "type": exc.__class__.__name__,
            "message": exc.message,
            "details": exc.details,
            "path": str(request.url.path)
        },
        headers=headers
    )

async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Handler para errores de integridad de la base de datos"""
    logger.error(f"Integrity error: {exc}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "error": True,
            "type": "IntegrityError",
            "message": "Violación de integridad de los datos"
        }
    )

async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handler para errores generales de SQLAlchemy"""
    logger.error(f"Database error: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": True,
            "type": "DatabaseError",
            "message": "Error interno de la base de datos"
        }
    )

async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handler para HTTPException de FastAPI"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "type": "HTTPException",
            "message": exc.detail,
            "status_code": exc.status_code
        },
        headers=getattr(exc, "headers", None)
    )

async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handler global para excepciones no tratadas"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": True,
            "type": "InternalServerError",
            "message": "Error interno del servidor"
        }
    )
