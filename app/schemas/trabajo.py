# =============================================
# app/schemas/trabajo.py
# =============================================
from pydantic import BaseModel, Field, ConfigDict, validator
from typing import Optional, List, Union
from datetime import datetime
from uuid import UUID

from app.schemas.enums import TipoPAEnum, TipoTrabajoEnum, EstadoTrabajoEnum
from app.core.validators import validate_iso_date, validate_required_text

# =============================================
# BASE SCHEMA
# =============================================
class TrabajoBase(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    nombre_cliente: str = Field("Estudiante", min_length=1, max_length=255, description="Nombre del cliente")
    proveedor_id: UUID = Field(..., description="ID del proveedor")
    curso_id: UUID = Field(..., description="ID del curso")
    tipo_trabajo: TipoTrabajoEnum = Field(..., description="Modalidad del trabajo")
    fecha_entrega: str = Field("", description="Fecha de entrega (AAAA-MM-DD) o vacío si no se entregó")
    precio: float = Field(..., ge=0, description="Precio en soles")
    url: str = Field("", description="Enlace al trabajo")
    estado: EstadoTrabajoEnum = Field(EstadoTrabajoEnum.PENDIENTE, description="Estado del trabajo")

    @validator('nombre_cliente')
    def validate_nombre_cliente(cls, v):
        return validate_required_text(v, "El nombre del cliente es requerido")

    @validator('fecha_entrega')
    def validate_fecha_entrega(cls, v):
        return validate_iso_date(v, allow_empty=True)

    @validator('url')
    def validate_url(cls, v):
        return (v or "").strip()

# =============================================
# CREATE SCHEMA
# =============================================
class TrabajoCreate(TrabajoBase):
    """Schema para creación de trabajo

    tipo_pa, periodo_id y fecha_registro se completan con los valores por
    defecto de la sesión (selecciones activas y fecha de hoy) cuando no se envían.
    """
    tipo_pa: Optional[TipoPAEnum] = Field(None, description="Tipo de PA")
    periodo_id: Optional[UUID] = Field(None, description="ID del periodo")
    fecha_registro: Optional[str] = Field(None, description="Fecha de registro (AAAA-MM-DD)")
    precio: float = Field(20, ge=0, description="Precio en soles")

    @validator('fecha_registro')
    def validate_fecha_registro(cls, v):
        if v is None:
            return v
        return validate_iso_date(v)

# =============================================
# UPDATE SCHEMA
# =============================================
class TrabajoUpdate(TrabajoBase):
    """Schema para actualización completa de trabajo (reemplaza todos los campos)"""
    tipo_pa: TipoPAEnum = Field(..., description="Tipo de PA")
    periodo_id: UUID = Field(..., description="ID del periodo")
    fecha_registro: str = Field(..., description="Fecha de registro (AAAA-MM-DD)")

    @validator('fecha_registro')
    def validate_fecha_registro(cls, v):
        return validate_iso_date(v)

# =============================================
# RESPONSE SCHEMA
# =============================================
class TrabajoResponse(BaseModel):
    """Trabajo con las referencias de catálogo resueltas a su nombre"""
    model_config = ConfigDict(use_enum_values=True)

    id: Optional[UUID] = None
    nombre_cliente: str = "Estudiante"
    proveedor_id: Optional[UUID] = None
    proveedor: str = Field("", description="Nombre del proveedor (vacío si fue eliminado)")
    curso_id: Optional[UUID] = None
    curso: str = Field("", description="Nombre del curso (vacío si fue eliminado)")
    tipo_pa: TipoPAEnum
    tipo_trabajo: TipoTrabajoEnum = TipoTrabajoEnum.INDIVIDUAL
    fecha_registro: str
    fecha_entrega: str = ""
    periodo_id: Optional[UUID] = None
    periodo: str = Field("", description="Nombre del periodo (vacío si fue eliminado)")
    precio: float = 0
    url: str = ""
    estado: EstadoTrabajoEnum = EstadoTrabajoEnum.PENDIENTE
    created_date: Optional[datetime] = None
    updated_date: Optional[datetime] = None

    @classmethod
    def from_model(cls, trabajo) -> "TrabajoResponse":
        """Resolver id -> nombre de las referencias de catálogo"""
        return cls(
            id=trabajo.trabajo_id,
            nombre_cliente=trabajo.nombre_cliente,
            proveedor_id=trabajo.proveedor_id,
            proveedor=trabajo.proveedor.nombre if trabajo.proveedor else "",
            curso_id=trabajo.curso_id,
            curso=trabajo.curso.nombre if trabajo.curso else "",
            tipo_pa=trabajo.tipo_pa,
            tipo_trabajo=trabajo.tipo_trabajo,
            fecha_registro=trabajo.fecha_registro,
            fecha_entrega=trabajo.fecha_entrega or "",
            periodo_id=trabajo.periodo_id,
            periodo=trabajo.periodo.nombre if trabajo.periodo else "",
            precio=float(trabajo.precio or 0),
            url=trabajo.url or "",
            estado=trabajo.estado,
            created_date=trabajo.created_date,
            updated_date=trabajo.updated_date,
        )

# =============================================
# FORM DEFAULTS SCHEMA
# =============================================
class TrabajoDefaults(BaseModel):
    """Valores con los que se pre-llena el formulario de nuevo trabajo"""
    nombre_cliente: str
    fecha_registro: str
    fecha_entrega: str = ""
    precio: float
    url: str = ""
    estado: EstadoTrabajoEnum = EstadoTrabajoEnum.PENDIENTE
    tipo_pa: Optional[TipoPAEnum] = None
    periodo_id: Optional[UUID] = None
    periodo: Optional[str] = None

# =============================================
# LIST / PAGE SCHEMAS
# =============================================
class TrabajoList(BaseModel):
    """Listado completo ordenado"""
    items: List[TrabajoResponse]
    total: int
    is_loading: bool = False

class TrabajoPage(BaseModel):
    """Página de la vista de trabajos de la sesión"""
    items: List[TrabajoResponse]
    total: int = Field(..., description="Trabajos que cumplen los filtros")
    page: int
    page_size: int
    total_pages: int
    pages: List[Union[int, str]] = Field(default_factory=list, description="Números de página a mostrar ('...' = salto)")
    sort_field: Optional[str] = None
    sort_order: str = "asc"
    is_loading: bool = False
    page_changed: bool = Field(True, description="False si se rechazó la página solicitada")
