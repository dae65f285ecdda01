"""Fixed-point currency helpers.

Balances are ``Decimal`` values held to whole cents. Every rounding step floors,
so a projection never credits money that fractional growth did not produce.
"""

from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal
from typing import Final

CENT: Final[Decimal] = Decimal("0.01")
DOLLAR: Final[Decimal] = Decimal("1")
ZERO: Final[Decimal] = Decimal("0")


def to_decimal(value: int | float | str | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    return Decimal(str(value))


def floor_cents(value: int | float | str | Decimal) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_FLOOR)


def floor_dollars(value: int | float | str | Decimal) -> Decimal:
    return to_decimal(value).quantize(DOLLAR, rounding=ROUND_FLOOR)


def grow(balance: Decimal, rate: Decimal, inflation_rate: Decimal) -> Decimal:
    """Apply one year of real growth, ``balance * (1 + rate - inflation)``."""
    return floor_cents(balance * (1 + rate - inflation_rate))


def format_money(value: Decimal, decimals: int = 0) -> str:
    return f"${value:,.{decimals}f}"
