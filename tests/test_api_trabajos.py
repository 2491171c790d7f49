"""Job CRUD, session defaults, status toggle and the session list view."""
from datetime import date
from uuid import uuid4

import pytest

from app.core.exceptions import DatabaseError
from app.repositories.trabajo_repository import TrabajoRepository
from app.services.session_context import session_registry

TRABAJOS = "/api/v1/trabajos"


@pytest.fixture
def create(client, auth_headers, trabajo_payload):
    def post(**overrides):
        response = client.post(f"{TRABAJOS}/", json=trabajo_payload(**overrides), headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()
    return post


def _update_payload(trabajo, **overrides):
    payload = {
        key: trabajo[key]
        for key in ("nombre_cliente", "proveedor_id", "curso_id", "tipo_pa", "tipo_trabajo",
                    "periodo_id", "fecha_registro", "fecha_entrega", "precio", "url", "estado")
    }
    payload.update(overrides)
    return payload


def _drain(client, auth_headers):
    return client.get("/api/v1/sesion/notificaciones", headers=auth_headers).json()


# =============================================
# CRUD
# =============================================

def test_create_resolves_catalog_names(client, auth_headers, create, catalogos):
    trabajo = create()
    assert trabajo["nombre_cliente"] == "Ana"
    assert trabajo["proveedor"] == "Carlos Pérez"
    assert trabajo["curso"] == "Matemática Básica"
    assert trabajo["periodo"] == "2025-I"
    assert trabajo["estado"] == "Pendiente"
    assert trabajo["fecha_entrega"] == ""

    response = client.get(f"{TRABAJOS}/{trabajo['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["precio"] == 50


def test_create_pushes_success_notification(client, auth_headers, create):
    create()
    notificaciones = _drain(client, auth_headers)
    assert notificaciones[-1]["tipo"] == "success"
    assert _drain(client, auth_headers) == []


def test_list_is_status_ordered(client, auth_headers, create):
    create(nombre_cliente="C", estado="Cancelado")
    create(nombre_cliente="T", estado="Terminado", fecha_entrega="2025-06-02")
    create(nombre_cliente="P", estado="Pendiente")

    data = client.get(f"{TRABAJOS}/", headers=auth_headers).json()
    assert data["total"] == 3
    assert data["is_loading"] is False
    assert [t["estado"] for t in data["items"]] == ["Pendiente", "Terminado", "Cancelado"]


def test_list_filters_and_sorts(client, auth_headers, create):
    create(nombre_cliente="Ana", tipo_pa="PA-01", precio=50)
    create(nombre_cliente="Luis", tipo_pa="PA-02", precio=80)
    create(nombre_cliente="Beto", tipo_pa="PA-01", precio=30)

    data = client.get(f"{TRABAJOS}/", params={"tipo_pa": "PA-01", "sort_field": "precio"},
                      headers=auth_headers).json()
    assert [t["nombre_cliente"] for t in data["items"]] == ["Beto", "Ana"]

    data = client.get(f"{TRABAJOS}/", params={"busqueda": "LUI"}, headers=auth_headers).json()
    assert [t["nombre_cliente"] for t in data["items"]] == ["Luis"]


def test_list_rejects_bad_filter_values(client, auth_headers, catalogos):
    response = client.get(f"{TRABAJOS}/", params={"mes": "13"}, headers=auth_headers)
    assert response.status_code == 422


def test_create_validation(client, auth_headers, trabajo_payload):
    response = client.post(f"{TRABAJOS}/", json=trabajo_payload(precio=-1), headers=auth_headers)
    assert response.status_code == 422
    response = client.post(f"{TRABAJOS}/", json=trabajo_payload(fecha_registro="01/06/2025"), headers=auth_headers)
    assert response.status_code == 422
    response = client.post(f"{TRABAJOS}/", json=trabajo_payload(tipo_pa="PA-09"), headers=auth_headers)
    assert response.status_code == 422


def test_create_with_unknown_catalog_reference(client, auth_headers, trabajo_payload):
    response = client.post(f"{TRABAJOS}/", json=trabajo_payload(curso_id=str(uuid4())), headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["details"]["entidad"] == "curso"
    assert client.get(f"{TRABAJOS}/", headers=auth_headers).json()["total"] == 0


def test_get_missing_trabajo(client, auth_headers):
    response = client.get(f"{TRABAJOS}/{uuid4()}", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["type"] == "TrabajoNotFoundError"


def test_delete(client, auth_headers, create):
    trabajo = create()
    response = client.delete(f"{TRABAJOS}/{trabajo['id']}", headers=auth_headers)
    assert response.status_code == 204
    assert client.get(f"{TRABAJOS}/{trabajo['id']}", headers=auth_headers).status_code == 404
    assert client.delete(f"{TRABAJOS}/{trabajo['id']}", headers=auth_headers).status_code == 404


def test_update_replaces_fields(client, auth_headers, create, catalogos):
    trabajo = create()
    payload = _update_payload(
        trabajo,
        nombre_cliente="Ana María",
        proveedor_id=catalogos["proveedor_2"]["id"],
        precio=65.5,
        url="https://drive.example.com/ana"
    )
    response = client.put(f"{TRABAJOS}/{trabajo['id']}", json=payload, headers=auth_headers)
    assert response.status_code == 200, response.text
    data = response.json()
    assert data["nombre_cliente"] == "Ana María"
    assert data["proveedor"] == "Lucía Ramos"
    assert data["precio"] == 65.5
    assert data["url"] == "https://drive.example.com/ana"


def test_update_leaving_terminado_clears_delivery_date(client, auth_headers, create):
    trabajo = create(estado="Terminado", fecha_entrega="2025-06-05")
    payload = _update_payload(trabajo, estado="Pendiente")
    data = client.put(f"{TRABAJOS}/{trabajo['id']}", json=payload, headers=auth_headers).json()
    assert data["estado"] == "Pendiente"
    assert data["fecha_entrega"] == ""


def test_update_missing_trabajo(client, auth_headers, create):
    trabajo = create()
    response = client.put(f"{TRABAJOS}/{uuid4()}", json=_update_payload(trabajo), headers=auth_headers)
    assert response.status_code == 404


# =============================================
# DEFAULTS AND ACTIVE SELECTIONS
# =============================================

def test_new_form_defaults(client, auth_headers, catalogos):
    client.put("/api/v1/sesion/periodo-activo", json={"periodo_id": catalogos["periodo_2"]["id"]}, headers=auth_headers)
    data = client.get(f"{TRABAJOS}/nuevo", headers=auth_headers).json()
    assert data["nombre_cliente"] == "Estudiante"
    assert data["precio"] == 20
    assert data["estado"] == "Pendiente"
    assert data["fecha_registro"] == date.today().isoformat()
    assert data["periodo_id"] == catalogos["periodo_2"]["id"]
    assert data["periodo"] == "2025-II"
    assert data["tipo_pa"] is None


def test_create_without_active_selection_is_rejected(client, auth_headers, trabajo_payload):
    payload = trabajo_payload()
    del payload["tipo_pa"]
    response = client.post(f"{TRABAJOS}/", json=payload, headers=auth_headers)
    assert response.status_code == 422
    assert response.json()["details"]["field"] == "tipo_pa"

    payload = trabajo_payload()
    del payload["periodo_id"]
    response = client.post(f"{TRABAJOS}/", json=payload, headers=auth_headers)
    assert response.status_code == 422
    assert response.json()["details"]["field"] == "periodo_id"


def test_create_uses_active_selections(client, auth_headers, trabajo_payload, catalogos):
    client.put("/api/v1/sesion/tipo-pa-activo", json={"tipo_pa": "EF"}, headers=auth_headers)
    client.put("/api/v1/sesion/periodo-activo", json={"periodo_id": catalogos["periodo_2"]["id"]}, headers=auth_headers)

    payload = trabajo_payload()
    for key in ("tipo_pa", "periodo_id", "fecha_registro"):
        del payload[key]
    response = client.post(f"{TRABAJOS}/", json=payload, headers=auth_headers)
    assert response.status_code == 201, response.text
    data = response.json()
    assert data["tipo_pa"] == "EF"
    assert data["periodo"] == "2025-II"
    assert data["fecha_registro"] == date.today().isoformat()


# =============================================
# STATUS TOGGLE
# =============================================

def test_toggle_estado_round_trip(client, auth_headers, create):
    trabajo = create()
    url = f"{TRABAJOS}/{trabajo['id']}/estado"

    data = client.patch(url, headers=auth_headers).json()
    assert data["estado"] == "Terminado"
    assert data["fecha_entrega"] == date.today().isoformat()

    data = client.patch(url, headers=auth_headers).json()
    assert data["estado"] == "Pendiente"
    assert data["fecha_entrega"] == ""


def test_toggle_cancelado_completes(client, auth_headers, create):
    trabajo = create(estado="Cancelado")
    data = client.patch(f"{TRABAJOS}/{trabajo['id']}/estado", headers=auth_headers).json()
    assert data["estado"] == "Terminado"


def test_toggle_missing_trabajo(client, auth_headers):
    assert client.patch(f"{TRABAJOS}/{uuid4()}/estado", headers=auth_headers).status_code == 404


def test_toggle_moves_price_in_and_out_of_revenue(client, auth_headers, create):
    trabajo = create(precio=75, fecha_registro="2025-03-10")
    url = f"{TRABAJOS}/{trabajo['id']}/estado"

    def ingreso_total():
        data = client.get("/api/v1/dashboard/", params={"anio": 2025}, headers=auth_headers).json()
        return data["estadisticas"]["ingreso_total"]

    assert ingreso_total() == 0
    client.patch(url, headers=auth_headers)
    assert ingreso_total() == 75
    client.patch(url, headers=auth_headers)
    assert ingreso_total() == 0


# =============================================
# PERSISTENCE FAILURES
# =============================================

def test_failed_create_keeps_last_good_list(client, auth_headers, create, trabajo_payload, monkeypatch):
    create(nombre_cliente="Existente")
    _drain(client, auth_headers)

    async def broken_create(self, trabajo_data, create_user_id=None):
        raise DatabaseError("crear trabajo", "disco lleno")

    monkeypatch.setattr(TrabajoRepository, "create", broken_create)
    response = client.post(f"{TRABAJOS}/", json=trabajo_payload(nombre_cliente="Nuevo"), headers=auth_headers)
    assert response.status_code == 500
    assert response.json()["type"] == "DatabaseError"

    notificaciones = _drain(client, auth_headers)
    assert [n["tipo"] for n in notificaciones] == ["error"]

    vista = client.get(f"{TRABAJOS}/vista", headers=auth_headers).json()
    assert [t["nombre_cliente"] for t in vista["items"]] == ["Existente"]
    assert vista["is_loading"] is False


def test_store_is_busy_while_writing(client, auth_headers, create, monkeypatch):
    create(nombre_cliente="Existente")
    original_create = TrabajoRepository.create
    estados = []

    async def watched_create(self, trabajo_data, create_user_id=None):
        estados.extend(context.store.is_loading for context in session_registry.all())
        return await original_create(self, trabajo_data, create_user_id)

    monkeypatch.setattr(TrabajoRepository, "create", watched_create)
    create(nombre_cliente="Nuevo")
    assert estados == [True]

    vista = client.get(f"{TRABAJOS}/vista", headers=auth_headers).json()
    assert vista["is_loading"] is False
    assert vista["total"] == 2


def test_unexpected_update_error_becomes_database_error(client, auth_headers, create, monkeypatch):
    trabajo = create()

    async def broken_update(self, trabajo_id, trabajo_data):
        raise RuntimeError("conexión perdida")

    monkeypatch.setattr(TrabajoRepository, "update", broken_update)
    response = client.put(f"{TRABAJOS}/{trabajo['id']}", json=_update_payload(trabajo, precio=99),
                          headers=auth_headers)
    assert response.status_code == 500
    assert response.json()["type"] == "DatabaseError"
    assert client.get(f"{TRABAJOS}/{trabajo['id']}", headers=auth_headers).json()["precio"] == 50


# =============================================
# SESSION LIST VIEW
# =============================================

@pytest.fixture
def doce(create):
    return [create(nombre_cliente=f"Cliente {i}", precio=10 + i) for i in range(1, 13)]


def test_vista_paginates(client, auth_headers, doce):
    data = client.get(f"{TRABAJOS}/vista", headers=auth_headers).json()
    assert (data["total"], data["page"], data["page_size"], data["total_pages"]) == (12, 1, 10, 2)
    assert len(data["items"]) == 10
    assert data["pages"] == [1, 2]

    data = client.post(f"{TRABAJOS}/vista/pagina/2", headers=auth_headers).json()
    assert data["page"] == 2
    assert data["page_changed"] is True
    assert len(data["items"]) == 2


def test_vista_rejects_out_of_range_page(client, auth_headers, doce):
    client.post(f"{TRABAJOS}/vista/pagina/2", headers=auth_headers)
    for page in (0, 3):
        data = client.post(f"{TRABAJOS}/vista/pagina/{page}", headers=auth_headers).json()
        assert data["page_changed"] is False
        assert data["page"] == 2


def test_vista_page_size(client, auth_headers, doce):
    client.post(f"{TRABAJOS}/vista/pagina/2", headers=auth_headers)
    data = client.put(f"{TRABAJOS}/vista/tamano", json={"page_size": 50}, headers=auth_headers).json()
    assert (data["page"], data["page_size"], data["total_pages"]) == (1, 50, 1)
    assert len(data["items"]) == 12

    response = client.put(f"{TRABAJOS}/vista/tamano", json={"page_size": 25}, headers=auth_headers)
    assert response.status_code == 422


def test_vista_filters_reset_page(client, auth_headers, doce):
    client.post(f"{TRABAJOS}/vista/pagina/2", headers=auth_headers)
    data = client.put(f"{TRABAJOS}/vista/filtros", json={"busqueda": "cliente 1"}, headers=auth_headers).json()
    assert data["page"] == 1
    assert sorted(t["nombre_cliente"] for t in data["items"]) == ["Cliente 1", "Cliente 10", "Cliente 11", "Cliente 12"]

    data = client.delete(f"{TRABAJOS}/vista/filtros", headers=auth_headers).json()
    assert data["total"] == 12


def test_vista_sort_toggles(client, auth_headers, doce):
    data = client.post(f"{TRABAJOS}/vista/orden/precio", headers=auth_headers).json()
    assert (data["sort_field"], data["sort_order"]) == ("precio", "asc")
    assert data["items"][0]["nombre_cliente"] == "Cliente 1"

    data = client.post(f"{TRABAJOS}/vista/orden/precio", headers=auth_headers).json()
    assert data["sort_order"] == "desc"
    assert data["items"][0]["nombre_cliente"] == "Cliente 12"

    data = client.post(f"{TRABAJOS}/vista/orden/nombre_cliente", headers=auth_headers).json()
    assert (data["sort_field"], data["sort_order"]) == ("nombre_cliente", "asc")
    assert [t["nombre_cliente"] for t in data["items"][:3]] == ["Cliente 1", "Cliente 2", "Cliente 3"]


def test_vista_unknown_sort_column(client, auth_headers):
    assert client.post(f"{TRABAJOS}/vista/orden/color", headers=auth_headers).status_code == 422


def test_vista_page_is_clamped_when_list_shrinks(client, auth_headers, doce):
    client.post(f"{TRABAJOS}/vista/pagina/2", headers=auth_headers)
    for trabajo in doce[:3]:
        client.delete(f"{TRABAJOS}/{trabajo['id']}", headers=auth_headers)

    data = client.get(f"{TRABAJOS}/vista", headers=auth_headers).json()
    assert (data["total"], data["total_pages"], data["page"]) == (9, 1, 1)
    assert len(data["items"]) == 9


# =============================================
# CONCURRENT SESSIONS
# =============================================

@pytest.fixture
def otra_sesion(client, auth_headers):
    credenciales = {"email": "admin@trabajos.com", "password": "Admin12345"}
    token = client.post("/api/v1/auth/login", json=credenciales).json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


def test_writes_are_visible_to_other_sessions(client, auth_headers, otra_sesion, create, catalogos):
    assert client.get(f"{TRABAJOS}/vista", headers=otra_sesion).json()["total"] == 0

    trabajo = create(nombre_cliente="Ana")
    vista = client.get(f"{TRABAJOS}/vista", headers=otra_sesion).json()
    assert [t["nombre_cliente"] for t in vista["items"]] == ["Ana"]

    client.patch(f"{TRABAJOS}/{trabajo['id']}/estado", headers=auth_headers)
    assert client.get(f"{TRABAJOS}/vista", headers=otra_sesion).json()["items"][0]["estado"] == "Terminado"

    client.put(f"/api/v1/cursos/{catalogos['curso']['id']}", json={"nombre": "Estadística"}, headers=auth_headers)
    assert client.get(f"{TRABAJOS}/vista", headers=otra_sesion).json()["items"][0]["curso"] == "Estadística"

    client.delete(f"{TRABAJOS}/{trabajo['id']}", headers=auth_headers)
    assert client.get(f"{TRABAJOS}/vista", headers=otra_sesion).json()["total"] == 0
