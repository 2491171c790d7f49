# =============================================
# app/query/sorting.py
# =============================================
"""Sort comparator engine for the job list.

Text columns use Spanish collation with numeric substrings, date columns
compare their ISO strings as-is (an empty delivery date is ``""``) and price
compares numerically. Sorting is stable and never mutates its input.
"""
from typing import Callable, Iterable, Optional, Union

from app.query.collation import as_text, spanish_sort_key
from app.schemas.enums import SortFieldEnum, SortOrderEnum

TEXT_FIELDS = {
    SortFieldEnum.NOMBRE_CLIENTE,
    SortFieldEnum.CURSO,
    SortFieldEnum.PROVEEDOR,
    SortFieldEnum.TIPO_PA,
    SortFieldEnum.ESTADO,
}
DATE_FIELDS = {SortFieldEnum.FECHA_REGISTRO, SortFieldEnum.FECHA_ENTREGA}


def _precio(value) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def sort_key_for(field: SortFieldEnum) -> Callable:
    name = field.value
    if field in TEXT_FIELDS:
        return lambda t: spanish_sort_key(getattr(t, name, ""))
    if field in DATE_FIELDS:
        return lambda t: as_text(getattr(t, name, ""))
    return lambda t: _precio(getattr(t, name, 0))


def sort_trabajos(
    trabajos: Iterable,
    sort_field: Optional[Union[SortFieldEnum, str]] = None,
    sort_order: Union[SortOrderEnum, str] = SortOrderEnum.ASC,
) -> list:
    """Nueva lista ordenada; sin campo de orden se conserva el orden recibido"""
    items = list(trabajos)
    if not sort_field:
        return items
    field = SortFieldEnum(sort_field)
    descending = SortOrderEnum(sort_order) == SortOrderEnum.DESC
    # sorted() keeps ties in input order in both directions
    return sorted(items, key=sort_key_for(field), reverse=descending)


class SortState:
    """Orden activo de la lista (clic en la cabecera de una columna)"""

    def __init__(self, sort_field: Optional[SortFieldEnum] = None,
                 sort_order: SortOrderEnum = SortOrderEnum.ASC):
        self.sort_field = sort_field
        self.sort_order = sort_order

    def toggle(self, field: Union[SortFieldEnum, str]) -> None:
        field = SortFieldEnum(field)
        if self.sort_field == field:
            self.sort_order = (
                SortOrderEnum.DESC if self.sort_order == SortOrderEnum.ASC else SortOrderEnum.ASC
            )
        else:
            self.sort_field = field
            self.sort_order = SortOrderEnum.ASC

    def clear(self) -> None:
        self.sort_field = None
        self.sort_order = SortOrderEnum.ASC

    def apply(self, trabajos: Iterable) -> list:
        return sort_trabajos(trabajos, self.sort_field, self.sort_order)
