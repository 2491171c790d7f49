"""Environment validation run at startup."""
import pytest

from app.config.settings import get_settings, validate_environment


def test_testing_environment_is_valid():
    assert validate_environment() is True


def test_production_rejects_development_defaults(monkeypatch):
    monkeypatch.setattr(get_settings(), "ENVIRONMENT", "production")
    with pytest.raises(ValueError) as excinfo:
        validate_environment()
    message = str(excinfo.value)
    assert "SECRET_KEY" in message
    assert "ADMIN_PASSWORD" in message


def test_production_with_hardened_settings(monkeypatch):
    settings = get_settings()
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")
    monkeypatch.setattr(settings, "DEBUG", False)
    monkeypatch.setattr(settings, "ALLOWED_HOSTS", ["trabajos.example.com"])
    monkeypatch.setattr(settings, "SECRET_KEY", "s" * 64)
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", "OtraClave2025")
    assert validate_environment() is True
