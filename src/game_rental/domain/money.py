"""Fixed-point money helpers."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value: Decimal | int | str) -> Decimal:
    """Convert a stored or user supplied amount into a Decimal.

    Floats are refused: their binary representation is already lossy.
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise ValueError(f"Unsupported money value: {value!r}")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"Invalid money value: {value!r}") from exc
    else:
        raise ValueError(f"Unsupported money value: {value!r}")
    if not amount.is_finite():
        raise ValueError(f"Invalid money value: {value!r}")
    return amount


def quantize(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(amount: Decimal | None) -> str | None:
    if amount is None:
        return None
    return str(quantize(amount))
