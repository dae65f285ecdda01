"""Progressive federal income tax helpers."""

from __future__ import annotations

from decimal import Decimal

from .money import ZERO, floor_dollars, to_decimal
from .tax_data import FEDERAL_BRACKETS, TaxBracket


def bracket_for_income(taxable_income: Decimal | int) -> TaxBracket:
    """Return the bracket the next dollar of income is taxed in."""
    income = to_decimal(taxable_income)
    selected = FEDERAL_BRACKETS[0]
    for bracket in FEDERAL_BRACKETS[1:]:
        if income <= bracket.threshold:
            break
        selected = bracket
    return selected


def compute_federal_income_tax(taxable_income: Decimal | int) -> Decimal:
    income = to_decimal(taxable_income)
    if income <= 0:
        return ZERO
    bracket = bracket_for_income(income)
    return floor_dollars(bracket.base + bracket.rate * (income - bracket.threshold))


def marginal_rate(taxable_income: Decimal | int) -> Decimal:
    return bracket_for_income(taxable_income).rate


def room_in_bracket(taxable_income: Decimal | int) -> Decimal | None:
    """Income that can be added before crossing into the next bracket; None in the top bracket."""
    income = max(ZERO, to_decimal(taxable_income))
    for bracket in FEDERAL_BRACKETS[1:]:
        if income <= bracket.threshold:
            return bracket.threshold - income
    return None
