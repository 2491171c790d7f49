# =============================================
# app/core/exceptions.py
# =============================================
from fastapi import status
from typing import Any, Dict, Optional

# =============================================
# CUSTOM EXCEPTIONS
# =============================================

class AppException(Exception):
    """Base exception class for application-specific errors"""

    def __init__(
        self,
        message: str = "Ocurrió un error en la aplicación",
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class TrabajoNotFoundError(AppException):
    """Exception raised when a job record is not found"""

    def __init__(self, trabajo_id: str):
        super().__init__(
            message=f"Trabajo con ID '{trabajo_id}' no encontrado",
            status_code=status.HTTP_404_NOT_FOUND,
            details={
                "trabajo_id": str(trabajo_id),
                "error_type": "TRABAJO_NOT_FOUND"
            }
        )


class CatalogoNotFoundError(AppException):
    """Exception raised when a course, provider or period is not found"""

    def __init__(self, entidad: str, entidad_id: str):
        super().__init__(
            message=f"{entidad.capitalize()} con ID '{entidad_id}' no encontrado",
            status_code=status.HTTP_404_NOT_FOUND,
            details={
                "entidad": entidad,
                "id": str(entidad_id),
                "error_type": "CATALOGO_NOT_FOUND"
            }
        )


class InvalidCredentialsError(AppException):
    """Exception raised when authentication credentials are invalid"""

    def __init__(self):
        super().__init__(
            message="Correo o contraseña incorrectos",
            status_code=status.HTTP_401_UNAUTHORIZED,
            details={"error_type": "INVALID_CREDENTIALS"}
        )


class InvalidTokenError(AppException):
    """Exception raised when a token is invalid or expired"""

    def __init__(self, reason: str = "Token inválido"):
        super().__init__(
            message=reason,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details={"error_type": "INVALID_TOKEN"}
        )


class SessionNotActiveError(AppException):
    """Exception raised when the token's session was closed or never opened"""

    def __init__(self):
        super().__init__(
            message="No hay una sesión activa",
            status_code=status.HTTP_401_UNAUTHORIZED,
            details={"error_type": "SESSION_NOT_ACTIVE"}
        )


class ValidationError(AppException):
    """Exception raised when data validation fails"""

    def __init__(self, field: str, message: str):
        super().__init__(
            message=f"Error de validación en '{field}': {message}",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={
                "field": field,
                "validation_message": message,
                "error_type": "VALIDATION_ERROR"
            }
        )


class DatabaseError(AppException):
    """Exception raised when database operations fail"""

    def __init__(self, operation: str, reason: str):
        super().__init__(
            message=f"Error de base de datos en {operation}: {reason}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={
                "operation": operation,
                "reason": reason,
                "error_type": "DATABASE_ERROR"
            }
        )
