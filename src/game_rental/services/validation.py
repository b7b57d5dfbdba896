"""Argument validators shared by the services."""

from __future__ import annotations

import re
from decimal import Decimal

from game_rental.domain.money import to_money
from game_rental.services.errors import ValidationError

_DIGITS = re.compile(r"^\d+$")

# Largest value a SQLite INTEGER column can hold.
MAX_INT = 2**63 - 1


def positive_int(value: object, field: str) -> int:
    """Return ``value`` as a positive int or raise ValidationError.

    Accepts ints, integral Decimals and strings of digits. Booleans,
    fractional numbers, zero, negatives and values above ``MAX_INT`` are
    rejected.
    """
    if isinstance(value, bool):
        raise ValidationError(f"Campo inválido: {field}", field)
    if isinstance(value, int):
        number = value
    elif isinstance(value, Decimal) and value.is_finite() and value == value.to_integral_value():
        number = int(value)
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str) and _DIGITS.match(value.strip()):
        number = int(value.strip())
    else:
        raise ValidationError(f"Campo inválido: {field}", field)
    if not 0 < number <= MAX_INT:
        raise ValidationError(f"Campo inválido: {field}", field)
    return number


def required_text(value: object, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Campo obrigatório: {field}", field)
    return value.strip()


def digits(value: object, field: str, *, min_len: int, max_len: int) -> str:
    text = required_text(value, field)
    if not _DIGITS.match(text) or not min_len <= len(text) <= max_len:
        raise ValidationError(f"Campo inválido: {field}", field)
    return text


def positive_money(value: object, field: str) -> Decimal:
    try:
        amount = to_money(value)  # type: ignore[arg-type]
    except ValueError as exc:
        raise ValidationError(f"Campo inválido: {field}", field) from exc
    if amount <= 0:
        raise ValidationError(f"Campo inválido: {field}", field)
    return amount
