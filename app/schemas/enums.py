# app/schemas/enums.py
from enum import Enum

class TipoPAEnum(str, Enum):
    PA_01 = "PA-01"
    PA_02 = "PA-02"
    PA_03 = "PA-03"
    EF = "EF"
    ES = "ES"

class TipoTrabajoEnum(str, Enum):
    INDIVIDUAL = "Trabajo Individual"
    GRUPAL = "Trabajo Grupal"

class EstadoTrabajoEnum(str, Enum):
    PENDIENTE = "Pendiente"
    CANCELADO = "Cancelado"
    TERMINADO = "Terminado"

class SortFieldEnum(str, Enum):
    NOMBRE_CLIENTE = "nombre_cliente"
    CURSO = "curso"
    PROVEEDOR = "proveedor"
    TIPO_PA = "tipo_pa"
    FECHA_REGISTRO = "fecha_registro"
    FECHA_ENTREGA = "fecha_entrega"
    PRECIO = "precio"
    ESTADO = "estado"

class SortOrderEnum(str, Enum):
    ASC = "asc"
    DESC = "desc"

class NotificationTypeEnum(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"

# Centinela de los selectores "sin filtro"
TODOS = "Todos"
