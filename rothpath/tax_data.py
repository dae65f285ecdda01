"""Federal income tax schedule reference data."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Final

BASE_TAX_YEAR: Final[int] = 2019
FILING_STATUS: Final[str] = "single"


@dataclass(frozen=True, slots=True)
class TaxBracket:
    threshold: Decimal
    rate: Decimal
    base: Decimal


# 2019 Tax Rate Schedule X (single): https://www.irs.gov/pub/irs-prior/f1040es--2019.pdf#page=7
# Base is the tax owed on income exactly at the threshold.
FEDERAL_BRACKETS: Final[tuple[TaxBracket, ...]] = (
    TaxBracket(Decimal("0"), Decimal("0.10"), Decimal("0")),
    TaxBracket(Decimal("9700"), Decimal("0.12"), Decimal("970.00")),
    TaxBracket(Decimal("39475"), Decimal("0.22"), Decimal("4543.00")),
    TaxBracket(Decimal("84200"), Decimal("0.24"), Decimal("14382.50")),
    TaxBracket(Decimal("160725"), Decimal("0.32"), Decimal("32748.50")),
    TaxBracket(Decimal("204100"), Decimal("0.35"), Decimal("46628.50")),
    TaxBracket(Decimal("510300"), Decimal("0.37"), Decimal("153798.50")),
)
