"""Required Minimum Distribution helpers."""

from __future__ import annotations

from decimal import Decimal
from typing import Final

from .money import ZERO, floor_dollars

FIRST_RMD_AGE: Final[int] = 70
LAST_TABLE_AGE: Final[int] = 115
# Owners born in July or later turn 70 1/2 the following year.
HALF_BIRTHDAY_MONTH: Final[int] = 7

# IRS Uniform Lifetime Table (pre-2022). Index 0 is age 70.
# Worksheet: https://www.irs.gov/pub/irs-tege/uniform_rmd_wksht.pdf
DISTRIBUTION_PERIODS: Final[tuple[Decimal, ...]] = tuple(
    Decimal(value)
    for value in (
        "27.4", "26.5", "25.6", "24.7", "23.8", "22.9", "22.0", "21.2", "20.3", "19.5", "18.7", "17.9",
        "17.1", "16.3", "15.5", "14.8", "14.1", "13.4", "12.7", "12.0", "11.4", "10.8", "10.2", "9.6",
        "9.1", "8.6", "8.1", "7.6", "7.1", "6.7", "6.3", "5.9", "5.5", "5.2", "4.9", "4.5",
        "4.2", "3.9", "3.7", "3.4", "3.1", "2.9", "2.6", "2.4", "2.1", "1.9",
    )
)


def age_in_year(birth_year: int, current_year: int) -> int:
    return max(0, current_year - birth_year)


def distribution_period(birth_year: int, birth_month: int, current_year: int) -> Decimal | None:
    """Return the Uniform Lifetime divisor for ``current_year``, or None before RMDs begin."""
    age = age_in_year(birth_year, current_year)
    if age < FIRST_RMD_AGE:
        return None
    if age == FIRST_RMD_AGE and birth_month >= HALF_BIRTHDAY_MONTH:
        return None
    return DISTRIBUTION_PERIODS[min(age, LAST_TABLE_AGE) - FIRST_RMD_AGE]


def compute_rmd_amount(birth_year: int, birth_month: int, year: int, prior_year_end_balance: Decimal) -> Decimal:
    """RMD in whole dollars for ``year`` given the Dec 31 balance of the year before."""
    divisor = distribution_period(birth_year, birth_month, year)
    if divisor is None or prior_year_end_balance <= 0:
        return ZERO
    return floor_dollars(prior_year_end_balance / divisor)


def first_rmd_year(birth_year: int, birth_month: int) -> int:
    if birth_month < HALF_BIRTHDAY_MONTH:
        return birth_year + FIRST_RMD_AGE
    return birth_year + FIRST_RMD_AGE + 1
