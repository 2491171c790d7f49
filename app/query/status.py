# =============================================
# app/query/status.py
# =============================================
from datetime import date
from typing import Iterable, Optional, Tuple, Union

from app.query.collation import as_text
from app.query.sorting import sort_trabajos
from app.schemas.enums import EstadoTrabajoEnum, SortFieldEnum, SortOrderEnum

STATUS_PRIORITY = {
    EstadoTrabajoEnum.PENDIENTE.value: 1,
    EstadoTrabajoEnum.TERMINADO.value: 2,
    EstadoTrabajoEnum.CANCELADO.value: 3,
}
UNKNOWN_STATUS_PRIORITY = 4


def status_priority(estado) -> int:
    return STATUS_PRIORITY.get(as_text(estado), UNKNOWN_STATUS_PRIORITY)


def sort_by_status(trabajos: Iterable) -> list:
    """Orden por defecto: Pendiente, Terminado, Cancelado y luego el resto (estable)"""
    return sorted(trabajos, key=lambda t: status_priority(getattr(t, "estado", None)))


def order_trabajos(
    trabajos: Iterable,
    sort_field: Optional[Union[SortFieldEnum, str]] = None,
    sort_order: Union[SortOrderEnum, str] = SortOrderEnum.ASC,
) -> list:
    """Orden por estado, reemplazado por el orden explícito cuando hay uno activo"""
    return sort_trabajos(sort_by_status(trabajos), sort_field, sort_order)


def toggle_completion(estado_actual, hoy: Optional[date] = None) -> Tuple[str, str]:
    """Siguiente (estado, fecha_entrega) del botón Enviar/Devolver.

    Terminado vuelve a Pendiente y borra la fecha de entrega; Pendiente o
    Cancelado pasan a Terminado con la fecha de hoy. Nunca produce Cancelado.
    """
    if as_text(estado_actual) == EstadoTrabajoEnum.TERMINADO.value:
        return EstadoTrabajoEnum.PENDIENTE.value, ""
    hoy = hoy or date.today()
    return EstadoTrabajoEnum.TERMINADO.value, hoy.isoformat()
