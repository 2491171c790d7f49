# =============================================
# app/query/collation.py
# =============================================
"""Spanish collation keys for text ordering.

Approximates ``localeCompare(x, 'es', {numeric: true})``: digit runs compare
by numeric value, case and accents only break ties, and ``ñ`` sorts as its
own letter between ``n`` and ``o``.
"""
import re
import unicodedata
from enum import Enum
from typing import Any, Tuple

_DIGITS_RE = re.compile(r"(\d+)")

# Sorts after any ASCII letter, so "ñ" lands between "n..." and "o"
_ENIE = "n\x7f"


def as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _natural_chunks(text: str) -> Tuple:
    chunks = []
    for part in _DIGITS_RE.split(text):
        if not part:
            continue
        if part.isdigit():
            chunks.append((0, int(part), part))
        else:
            chunks.append((1, 0, part))
    return tuple(chunks)


def spanish_sort_key(value: Any) -> Tuple:
    text = unicodedata.normalize("NFC", as_text(value))
    folded = text.casefold().replace("ñ", _ENIE)
    primary = _natural_chunks(_strip_accents(folded))
    secondary = _natural_chunks(folded)
    # lowercase before uppercase on full ties
    tertiary = text.swapcase()
    return (primary, secondary, tertiary)
