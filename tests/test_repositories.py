"""Catalog repositories resolve their columns on the mapped models."""
import pytest

from app.database.models.curso import Curso
from app.database.models.periodo import Periodo
from app.database.models.proveedor import Proveedor
from app.database.models.trabajo import Trabajo
from app.repositories.catalogo_repository import CursoRepository, PeriodoRepository, ProveedorRepository


@pytest.mark.parametrize("repository_class, id_column, trabajo_fk", [
    (CursoRepository, Curso.curso_id, Trabajo.curso_id),
    (ProveedorRepository, Proveedor.proveedor_id, Trabajo.proveedor_id),
    (PeriodoRepository, Periodo.periodo_id, Trabajo.periodo_id),
])
def test_columns_are_read_through_an_instance(repository_class, id_column, trabajo_fk):
    repository = repository_class(None)
    assert repository.id_column is id_column
    assert repository.trabajo_fk is trabajo_fk


@pytest.mark.parametrize("path, key", [
    ("/api/v1/cursos", "curso"),
    ("/api/v1/proveedores", "proveedor"),
    ("/api/v1/periodos", "periodo"),
])
def test_update_and_delete_by_id(client, auth_headers, catalogos, trabajo_payload, path, key):
    entidad = catalogos[key]
    payload = {"nombre": "Renombrado"}
    if key == "proveedor":
        payload["celular"] = entidad["celular"]
    trabajo = client.post("/api/v1/trabajos/", json=trabajo_payload(), headers=auth_headers).json()

    response = client.put(f"{path}/{entidad['id']}", json=payload, headers=auth_headers)
    assert response.status_code == 200, response.text
    assert response.json()["nombre"] == "Renombrado"
    assert client.get(f"/api/v1/trabajos/{trabajo['id']}", headers=auth_headers).json()[key] == "Renombrado"

    assert client.delete(f"{path}/{entidad['id']}", headers=auth_headers).status_code == 204
    assert client.get(f"/api/v1/trabajos/{trabajo['id']}", headers=auth_headers).json()[f"{key}_id"] is None
