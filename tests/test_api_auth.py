"""Authentication and session lifecycle endpoints."""
from datetime import datetime, timedelta, timezone

from app.services.session_context import session_registry

ADMIN_CREDENTIALS = {"email": "admin@trabajos.com", "password": "Admin12345"}


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["database"] == "connected"


def test_login_returns_token_and_user(client):
    response = client.post("/api/v1/auth/login", json=ADMIN_CREDENTIALS)
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]
    assert data["user"]["user_email"] == ADMIN_CREDENTIALS["email"]


def test_remember_me_extends_expiry(client):
    short = client.post("/api/v1/auth/login", json=ADMIN_CREDENTIALS).json()
    long = client.post("/api/v1/auth/login", json={**ADMIN_CREDENTIALS, "remember_me": True}).json()
    assert long["expires_in"] == 7 * 24 * 60 * 60
    assert long["expires_in"] > short["expires_in"]


def test_login_with_wrong_password(client):
    response = client.post("/api/v1/auth/login", json={**ADMIN_CREDENTIALS, "password": "Incorrecta123"})
    assert response.status_code == 401
    assert response.json()["type"] == "InvalidCredentialsError"


def test_login_with_unknown_email(client):
    response = client.post("/api/v1/auth/login", json={"email": "nadie@trabajos.com", "password": "Admin12345"})
    assert response.status_code == 401


def test_me(client, auth_headers):
    response = client.get("/api/v1/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["user_email"] == ADMIN_CREDENTIALS["email"]
    assert response.json()["last_login_date"] is not None


def test_missing_token(client):
    response = client.get("/api/v1/trabajos/")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_garbage_token(client):
    response = client.get("/api/v1/trabajos/", headers={"Authorization": "Bearer no-es-un-jwt"})
    assert response.status_code == 401


def test_logout_closes_the_session(client, auth_headers):
    response = client.post("/api/v1/auth/logout", headers=auth_headers)
    assert response.status_code == 200

    response = client.get("/api/v1/auth/me", headers=auth_headers)
    assert response.status_code == 401
    assert response.json()["type"] == "SessionNotActiveError"


def test_each_login_gets_its_own_session(client):
    first = client.post("/api/v1/auth/login", json=ADMIN_CREDENTIALS).json()["access_token"]
    second = client.post("/api/v1/auth/login", json=ADMIN_CREDENTIALS).json()["access_token"]
    first_headers = {"Authorization": f"Bearer {first}"}
    second_headers = {"Authorization": f"Bearer {second}"}

    client.put("/api/v1/sesion/tipo-pa-activo", json={"tipo_pa": "EF"}, headers=first_headers)
    assert client.get("/api/v1/sesion/tipo-pa-activo", headers=first_headers).json()["tipo_pa"] == "EF"
    assert client.get("/api/v1/sesion/tipo-pa-activo", headers=second_headers).json()["tipo_pa"] is None


def test_login_session_expires_with_the_token(client):
    data = client.post("/api/v1/auth/login", json=ADMIN_CREDENTIALS).json()
    (context,) = session_registry.all()
    restante = context.expires_at - datetime.now(timezone.utc)
    assert timedelta(seconds=data["expires_in"] - 60) < restante <= timedelta(seconds=data["expires_in"])


def test_expired_session_is_rejected(client, auth_headers):
    (context,) = session_registry.all()
    context.expires_at = datetime.now(timezone.utc) - timedelta(seconds=1)
    response = client.get("/api/v1/auth/me", headers=auth_headers)
    assert response.status_code == 401
    assert response.json()["type"] == "SessionNotActiveError"
    assert len(session_registry) == 0


def test_health_discards_expired_sessions(client, auth_headers):
    (context,) = session_registry.all()
    context.expires_at = datetime.now(timezone.utc) - timedelta(seconds=1)
    assert client.get("/health").status_code == 200
    assert len(session_registry) == 0

