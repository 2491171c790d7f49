"""
Pytest configuration and fixtures.

The application reads its settings from the environment when it is first
imported, so the test database and secrets are configured here before any
``app`` module is loaded.
"""
import os
import sqlite3
import tempfile
from pathlib import Path

_TEST_DIR = Path(tempfile.mkdtemp(prefix="trabajos-tests-"))
TEST_DB_PATH = _TEST_DIR / "test.db"

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key-with-at-least-32-characters!"
os.environ["ENVIRONMENT"] = "testing"
os.environ["DEBUG"] = "False"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["ADMIN_EMAIL"] = "admin@trabajos.com"
os.environ["ADMIN_PASSWORD"] = "Admin12345"

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.schemas.trabajo import TrabajoResponse
from app.services.session_context import session_registry

ADMIN_CREDENTIALS = {"email": "admin@trabajos.com", "password": "Admin12345"}


def _clean_database() -> None:
    if not TEST_DB_PATH.exists():
        return
    with sqlite3.connect(TEST_DB_PATH) as conn:
        for table in ("trabajos", "cursos", "proveedores", "periodos"):
            conn.execute(f"DELETE FROM {table}")
        conn.commit()


@pytest.fixture(scope="session")
def app_client():
    """TestClient with the lifespan started (tables and admin created once)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def client(app_client):
    """Client over an empty catalog/job database and no open sessions."""
    _clean_database()
    session_registry.clear()
    yield app_client
    session_registry.clear()


@pytest.fixture
def auth_headers(client):
    response = client.post("/api/v1/auth/login", json=ADMIN_CREDENTIALS)
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def catalogos(client, auth_headers):
    """One course, two providers and two periods."""
    def post(path, payload):
        response = client.post(path, json=payload, headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return {
        "curso": post("/api/v1/cursos/", {"nombre": "Matemática Básica"}),
        "proveedor": post("/api/v1/proveedores/", {"nombre": "Carlos Pérez", "celular": "987654321"}),
        "proveedor_2": post("/api/v1/proveedores/", {"nombre": "Lucía Ramos", "celular": "912345678"}),
        "periodo": post("/api/v1/periodos/", {"nombre": "2025-I"}),
        "periodo_2": post("/api/v1/periodos/", {"nombre": "2025-II"}),
    }


@pytest.fixture
def trabajo_payload(catalogos):
    """Factory of valid create payloads."""
    def build(**overrides):
        payload = {
            "nombre_cliente": "Ana",
            "proveedor_id": catalogos["proveedor"]["id"],
            "curso_id": catalogos["curso"]["id"],
            "tipo_pa": "PA-01",
            "tipo_trabajo": "Trabajo Individual",
            "periodo_id": catalogos["periodo"]["id"],
            "fecha_registro": "2025-06-01",
            "precio": 50,
        }
        payload.update(overrides)
        return payload
    return build


@pytest.fixture
def make_trabajo():
    """Factory of in-memory records for the query engine."""
    def build(**fields):
        defaults = {
            "nombre_cliente": "Estudiante",
            "proveedor": "Carlos",
            "curso": "Álgebra",
            "tipo_pa": "PA-01",
            "tipo_trabajo": "Trabajo Individual",
            "fecha_registro": "2025-06-01",
            "fecha_entrega": "",
            "periodo": "2025-I",
            "precio": 20,
            "estado": "Pendiente",
        }
        defaults.update(fields)
        return TrabajoResponse(**defaults)
    return build
