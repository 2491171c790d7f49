# app/core/validators.py
import re
from datetime import date
from typing import Optional

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
CELULAR_RE = re.compile(r"^\d{9}$")

def validate_password(password: str) -> str:
    if len(password) < 8:
        raise ValueError("La contraseña debe tener al menos 8 caracteres")
    if not re.search(r"[A-Za-z]", password):
        raise ValueError("La contraseña debe contener al menos una letra")
    if not re.search(r"\d", password):
        raise ValueError("La contraseña debe contener al menos un número")
    return password

def validate_celular(celular: str) -> str:
    celular = (celular or "").strip()
    if not CELULAR_RE.match(celular):
        raise ValueError("El celular debe tener exactamente 9 dígitos")
    return celular

def validate_iso_date(value: str, allow_empty: bool = False) -> str:
    """Valida una fecha YYYY-MM-DD y la devuelve sin espacios."""
    value = (value or "").strip()
    if not value:
        if allow_empty:
            return ""
        raise ValueError("La fecha es requerida")
    if not ISO_DATE_RE.match(value):
        raise ValueError("La fecha debe tener el formato AAAA-MM-DD")
    try:
        date.fromisoformat(value)
    except ValueError:
        raise ValueError("La fecha no es válida")
    return value

def validate_required_text(value: Optional[str], message: str = "Este campo es requerido") -> str:
    if value is None or not value.strip():
        raise ValueError(message)
    return value.strip()
