"""Exact conversion between raw amount representations and atomic integers."""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any, Optional

_DECIMAL_LITERAL = re.compile(r"^[+-]?[0-9]+$")
_PREFIXED_LITERALS = (
    (re.compile(r"^0[xX][0-9a-fA-F]+$"), 16),
    (re.compile(r"^0[oO][0-7]+$"), 8),
    (re.compile(r"^0[bB][01]+$"), 2),
)
_CHUNK_DIGITS = 1000
_CHUNK = 10**_CHUNK_DIGITS


def parse_atomic(raw: Any) -> Optional[int]:
    """Parse ``raw`` into an atomic amount, or ``None`` when it cannot be read.

    Integers pass through unchanged. Finite floats and decimals are truncated
    toward zero, which loses any fractional part. Strings must be integer
    literals (decimal, or ``0x``/``0o``/``0b`` prefixed); surrounding
    whitespace is ignored.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if not math.isfinite(raw):
            return None
        return int(raw)
    if isinstance(raw, Decimal):
        if not raw.is_finite():
            return None
        return int(raw)

    text = str(raw).strip()
    if not text:
        return None
    try:
        if _DECIMAL_LITERAL.match(text):
            return int(text, 10)
        for pattern, base in _PREFIXED_LITERALS:
            if pattern.match(text):
                return int(text[2:], base)
    except ValueError:
        # Decimal strings past the interpreter's int/str digit limit.
        return None
    return None


def _digits(value: int) -> str:
    """``str`` for non-negative ints of any size, ignoring the int/str digit limit."""
    if value < _CHUNK:
        return str(value)
    chunks = []
    while value:
        value, chunk = divmod(value, _CHUNK)
        chunks.append(str(chunk).rjust(_CHUNK_DIGITS, "0"))
    return "".join(reversed(chunks)).lstrip("0") or "0"


def format_integer(amount: int) -> str:
    return f"-{_digits(-amount)}" if amount < 0 else _digits(amount)


def format_atomic(amount: int, decimals: int) -> str:
    """Render an atomic amount as a fixed-point string with trailing zeros stripped."""
    if decimals <= 0:
        return format_integer(amount)

    negative = amount < 0
    whole, fraction = divmod(abs(amount), 10**decimals)
    digits = _digits(fraction).rjust(decimals, "0").rstrip("0")
    text = f"{_digits(whole)}.{digits}" if digits else _digits(whole)
    return f"-{text}" if negative else text
