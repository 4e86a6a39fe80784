from __future__ import annotations
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")

def to_decimal(value: Number) -> Decimal:
    """Convert a price or amount to Decimal without binary-float artefacts."""
    if isinstance(value, bool):
        raise ValueError(f"Not a monetary value: {value!r}")
    if isinstance(value, Decimal):
        return value
    try:
        d = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"Not a monetary value: {value!r}") from e
    if not d.is_finite():
        raise ValueError(f"Not a monetary value: {value!r}")
    return d

def round_cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)

def format_money(value: Decimal) -> str:
    return f"${round_cents(value):,.2f}"
