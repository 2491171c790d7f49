# =============================================
# app/query/filters.py
# =============================================
"""Filter predicate engine over in-memory job records.

Every criterion is optional and they compose with AND. A record only needs
the attributes of :class:`app.schemas.trabajo.TrabajoResponse`.
"""
from datetime import date
from typing import Callable, Iterable, List, Optional

from app.query.collation import as_text
from app.schemas.enums import TODOS, TipoPAEnum
from app.schemas.filtros import TrabajoFilters

Predicate = Callable[[object], bool]


def parse_fecha(value) -> Optional[date]:
    if isinstance(value, date):
        return value
    text = as_text(value)
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def toggle_tipo_pa_selection(selected: List[str], value: str) -> List[str]:
    """Multi-select de tipos de PA del dashboard.

    'Todos' excluye cualquier tipo concreto y viceversa; una selección vacía
    vuelve a 'Todos'.
    """
    current = [v for v in selected if v]
    if value == TODOS:
        return [TODOS]
    if value not in {tipo.value for tipo in TipoPAEnum}:
        raise ValueError(f"Tipo de PA desconocido: {value}")
    current = [v for v in current if v != TODOS]
    if value in current:
        current.remove(value)
    else:
        current.append(value)
    return current or [TODOS]


def build_predicate(filtros: TrabajoFilters) -> Predicate:
    """Componer los criterios activos en un único predicado"""
    checks: List[Predicate] = []

    if filtros.tipo_pa:
        tipo_pa = filtros.tipo_pa
        checks.append(lambda t: as_text(t.tipo_pa) == tipo_pa)

    tipos = [t for t in filtros.tipos_pa if t]
    if tipos and TODOS not in tipos:
        allowed = set(tipos)
        checks.append(lambda t: as_text(t.tipo_pa) in allowed)

    if filtros.periodo:
        periodo = filtros.periodo
        checks.append(lambda t: as_text(t.periodo) == periodo)

    if filtros.proveedor:
        proveedor = filtros.proveedor
        checks.append(lambda t: as_text(t.proveedor) == proveedor)

    # Only a complete range filters; a single bound is ignored
    if filtros.fecha_inicio and filtros.fecha_fin:
        inicio, fin = filtros.fecha_inicio, filtros.fecha_fin

        def in_range(t) -> bool:
            fecha = parse_fecha(t.fecha_registro)
            return fecha is not None and inicio <= fecha <= fin

        checks.append(in_range)

    if filtros.busqueda:
        term = filtros.busqueda.lower()
        checks.append(lambda t: (
            term in as_text(t.nombre_cliente).lower()
            or term in as_text(t.curso).lower()
            or term in as_text(t.proveedor).lower()
        ))

    if filtros.mes is not None:
        mes = filtros.mes

        def in_month(t) -> bool:
            fecha = parse_fecha(t.fecha_registro)
            return fecha is not None and fecha.month - 1 == mes

        checks.append(in_month)

    if filtros.anio is not None:
        anio = filtros.anio

        def in_year(t) -> bool:
            fecha = parse_fecha(t.fecha_registro)
            return fecha is not None and fecha.year == anio

        checks.append(in_year)

    return lambda trabajo: all(check(trabajo) for check in checks)


def matches(trabajo, filtros: TrabajoFilters) -> bool:
    return build_predicate(filtros)(trabajo)


def apply_filters(trabajos: Iterable, filtros: Optional[TrabajoFilters] = None) -> list:
    """Subconjunto filtrado, en el mismo orden de entrada"""
    if filtros is None:
        return list(trabajos)
    predicate = build_predicate(filtros)
    return [trabajo for trabajo in trabajos if predicate(trabajo)]
