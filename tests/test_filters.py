"""Filter predicate engine."""
from datetime import date

import pytest

from app.query.filters import apply_filters, matches, parse_fecha, toggle_tipo_pa_selection
from app.schemas.filtros import DashboardFilters, TrabajoFilters


@pytest.fixture
def ana_luis(make_trabajo):
    return [
        make_trabajo(nombre_cliente="Ana", tipo_pa="PA-01", estado="Pendiente", precio=50,
                     fecha_registro="2025-06-01"),
        make_trabajo(nombre_cliente="Luis", tipo_pa="PA-02", estado="Terminado", precio=80,
                     fecha_registro="2025-06-10", fecha_entrega="2025-06-12"),
    ]


def test_filter_by_tipo_pa_returns_only_matching(ana_luis):
    result = apply_filters(ana_luis, TrabajoFilters(tipo_pa="PA-01"))
    assert [t.nombre_cliente for t in result] == ["Ana"]


def test_no_filters_keeps_everything_in_order(ana_luis):
    assert apply_filters(ana_luis, None) == ana_luis
    assert apply_filters(ana_luis, TrabajoFilters()) == ana_luis


def test_todos_and_blank_selectors_do_not_filter(ana_luis):
    filtros = TrabajoFilters(tipo_pa="Todos", proveedor="", periodo="Todos", mes="Todos", anio="")
    assert apply_filters(ana_luis, filtros) == ana_luis


def test_criteria_compose_with_and(make_trabajo):
    trabajos = [
        make_trabajo(nombre_cliente="Ana", proveedor="Carlos", periodo="2025-I"),
        make_trabajo(nombre_cliente="Beto", proveedor="Carlos", periodo="2025-II"),
        make_trabajo(nombre_cliente="Cata", proveedor="Lucía", periodo="2025-I"),
    ]
    result = apply_filters(trabajos, TrabajoFilters(proveedor="Carlos", periodo="2025-I"))
    assert [t.nombre_cliente for t in result] == ["Ana"]


def test_tipos_pa_multi_select(make_trabajo):
    trabajos = [make_trabajo(tipo_pa=tipo) for tipo in ("PA-01", "PA-02", "EF", "ES")]
    result = apply_filters(trabajos, TrabajoFilters(tipos_pa=["PA-02", "ES"]))
    assert [t.tipo_pa for t in result] == ["PA-02", "ES"]

    todos = apply_filters(trabajos, TrabajoFilters(tipos_pa=["Todos"]))
    assert len(todos) == 4


def test_date_range_is_inclusive(make_trabajo):
    trabajos = [make_trabajo(nombre_cliente=str(day), fecha_registro=f"2025-06-{day:02d}") for day in (1, 5, 10, 15)]
    filtros = TrabajoFilters(fecha_inicio="2025-06-05", fecha_fin="2025-06-10")
    assert [t.nombre_cliente for t in apply_filters(trabajos, filtros)] == ["5", "10"]


def test_date_range_needs_both_bounds(make_trabajo):
    trabajos = [make_trabajo(fecha_registro="2024-01-01"), make_trabajo(fecha_registro="2025-06-01")]
    assert len(apply_filters(trabajos, TrabajoFilters(fecha_inicio="2025-01-01"))) == 2
    assert len(apply_filters(trabajos, TrabajoFilters(fecha_fin="2024-06-01"))) == 2


def test_busqueda_is_case_insensitive_over_cliente_curso_and_proveedor(make_trabajo):
    trabajos = [
        make_trabajo(nombre_cliente="María López", curso="Física", proveedor="Carlos"),
        make_trabajo(nombre_cliente="Pedro", curso="Historia del Perú", proveedor="Carlos"),
        make_trabajo(nombre_cliente="Pedro", curso="Física", proveedor="Marisol"),
        make_trabajo(nombre_cliente="Juan", curso="Química", proveedor="Carlos"),
    ]
    assert len(apply_filters(trabajos, TrabajoFilters(busqueda="mar"))) == 2
    assert len(apply_filters(trabajos, TrabajoFilters(busqueda="HISTORIA"))) == 1
    assert len(apply_filters(trabajos, TrabajoFilters(busqueda="zzz"))) == 0


def test_mes_is_zero_based(make_trabajo):
    trabajos = [make_trabajo(fecha_registro="2025-01-20"), make_trabajo(fecha_registro="2025-06-01")]
    result = apply_filters(trabajos, TrabajoFilters(mes=0))
    assert [t.fecha_registro for t in result] == ["2025-01-20"]


def test_anio_filter(make_trabajo):
    trabajos = [make_trabajo(fecha_registro="2024-12-31"), make_trabajo(fecha_registro="2025-01-01")]
    result = apply_filters(trabajos, TrabajoFilters(anio=2024))
    assert [t.fecha_registro for t in result] == ["2024-12-31"]


def test_matches_single_record(ana_luis):
    assert matches(ana_luis[1], TrabajoFilters(busqueda="lui", tipo_pa="PA-02"))
    assert not matches(ana_luis[1], TrabajoFilters(busqueda="lui", tipo_pa="PA-01"))


def test_invalid_mes_is_rejected():
    with pytest.raises(ValueError):
        TrabajoFilters(mes=12)


def test_dashboard_filters_default_to_current_year():
    assert DashboardFilters().anio == date.today().year
    assert DashboardFilters(anio="Todos").anio == date.today().year
    assert DashboardFilters(anio=2023).anio == 2023


def test_parse_fecha():
    assert parse_fecha("2025-06-01") == date(2025, 6, 1)
    assert parse_fecha("") is None
    assert parse_fecha("no es fecha") is None


class TestTipoPASelection:

    def test_selecting_a_code_replaces_todos(self):
        assert toggle_tipo_pa_selection(["Todos"], "PA-01") == ["PA-01"]

    def test_selecting_todos_clears_codes(self):
        assert toggle_tipo_pa_selection(["PA-01", "EF"], "Todos") == ["Todos"]

    def test_toggle_adds_and_removes(self):
        assert toggle_tipo_pa_selection(["PA-01"], "EF") == ["PA-01", "EF"]
        assert toggle_tipo_pa_selection(["PA-01", "EF"], "PA-01") == ["EF"]

    def test_empty_selection_falls_back_to_todos(self):
        assert toggle_tipo_pa_selection(["EF"], "EF") == ["Todos"]

    def test_unknown_code(self):
        with pytest.raises(ValueError):
            toggle_tipo_pa_selection(["Todos"], "PA-99")
