# =============================================
# app/query/statistics.py
# =============================================
"""Aggregation engine: dashboard cards and chart series.

Everything is recomputed from the filtered subset on each call.
"""
from collections import Counter
from datetime import date
from typing import Iterable, List, Optional

from app.query.collation import as_text, spanish_sort_key
from app.query.filters import parse_fecha
from app.schemas.dashboard import DashboardStatistics, EstadoCount, TipoPACount
from app.schemas.enums import TODOS, EstadoTrabajoEnum

MESES = [
    'enero', 'febrero', 'marzo', 'abril', 'mayo', 'junio',
    'julio', 'agosto', 'septiembre', 'octubre', 'noviembre', 'diciembre'
]

ESTADO_LABELS = [
    (EstadoTrabajoEnum.PENDIENTE.value, "Pendientes"),
    (EstadoTrabajoEnum.TERMINADO.value, "Terminados"),
    (EstadoTrabajoEnum.CANCELADO.value, "Cancelados"),
]


def _precio(trabajo) -> float:
    try:
        return float(getattr(trabajo, "precio", 0) or 0)
    except (TypeError, ValueError):
        return 0.0


def count_estado(trabajos: Iterable, estado: EstadoTrabajoEnum) -> int:
    return sum(1 for t in trabajos if as_text(t.estado) == estado.value)


def ingreso_total(trabajos: Iterable) -> float:
    """Ingresos: solo los trabajos Terminados suman su precio"""
    return sum(_precio(t) for t in trabajos if as_text(t.estado) == EstadoTrabajoEnum.TERMINADO.value)


def export_subtotal(trabajos: Iterable) -> float:
    """Subtotal de un reporte: suma el precio de todas las filas, sin mirar el estado"""
    return sum(_precio(t) for t in trabajos)


def por_estado(trabajos: Iterable) -> List[EstadoCount]:
    conteo = Counter(as_text(t.estado) for t in trabajos)
    return [EstadoCount(name=label, estado=estado, value=conteo.get(estado, 0)) for estado, label in ESTADO_LABELS]


def por_tipo_pa(trabajos: Iterable) -> List[TipoPACount]:
    # Counter keeps first-appearance order; absent codes are not listed
    conteo = Counter(as_text(t.tipo_pa) for t in trabajos)
    return [TipoPACount(tipo_pa=tipo, cantidad=cantidad) for tipo, cantidad in conteo.items()]


def compute_statistics(trabajos: Iterable) -> DashboardStatistics:
    items = list(trabajos)
    return DashboardStatistics(
        total=len(items),
        completados=count_estado(items, EstadoTrabajoEnum.TERMINADO),
        pendientes=count_estado(items, EstadoTrabajoEnum.PENDIENTE),
        ingreso_total=ingreso_total(items),
        por_estado=por_estado(items),
        por_tipo_pa=por_tipo_pa(items),
    )


def _distinct(values: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(v for v in values if v))


def proveedor_options(trabajos: Iterable) -> List[str]:
    return [TODOS] + _distinct(as_text(t.proveedor) for t in trabajos)


def tipo_pa_options(trabajos: Iterable) -> List[str]:
    return [TODOS] + _distinct(as_text(t.tipo_pa) for t in trabajos)


def periodo_options(nombres: Iterable[str]) -> List[str]:
    return [TODOS] + sorted(_distinct(nombres), key=spanish_sort_key)


def anio_options(trabajos: Iterable, hoy: Optional[date] = None) -> List[int]:
    """Años con trabajos registrados más el actual, de mayor a menor"""
    anios = set()
    for t in trabajos:
        fecha = parse_fecha(t.fecha_registro)
        if fecha is not None:
            anios.add(fecha.year)
    anios.add((hoy or date.today()).year)
    return sorted(anios, reverse=True)


def mes_nombre(mes: Optional[int]) -> str:
    if mes is None or not 0 <= mes <= 11:
        return TODOS
    return MESES[mes]
