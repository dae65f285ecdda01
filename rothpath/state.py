"""Per-year account state and the transition model applied by the search."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from .money import ZERO, floor_cents, grow
from .rmd import compute_rmd_amount
from .schema import ScenarioParameters
from .tax import compute_federal_income_tax


@dataclass(frozen=True, slots=True)
class Continue:
    """Take only the required minimum distribution."""

    @property
    def rollover(self) -> Decimal:
        return ZERO

    def describe(self) -> str:
        return "RMD only"


@dataclass(frozen=True, slots=True)
class RolloverThenContinue:
    """Convert ``amount`` from the IRA to the Roth, then take the RMD."""

    amount: Decimal

    @property
    def rollover(self) -> Decimal:
        return self.amount

    def describe(self) -> str:
        return f"Convert ${self.amount:,.0f}"


Action = Continue | RolloverThenContinue


@dataclass(frozen=True, slots=True)
class AccountState:
    # Balances are as of Dec. 31 of the year before ``year``.
    year: int
    roth: Decimal
    ira: Decimal
    basis: Decimal
    total_cash: Decimal
    total_tax: Decimal
    previous_action: Action | None = None

    @classmethod
    def initial(cls, params: ScenarioParameters) -> "AccountState":
        return cls(
            year=params.start_year,
            roth=floor_cents(params.roth_value),
            ira=floor_cents(params.ira_value),
            basis=floor_cents(params.basis),
            total_cash=floor_cents(params.starting_cash),
            total_tax=ZERO,
        )

    def position(self) -> tuple[int, Decimal, Decimal, Decimal]:
        """Fields that determine every future transition from this state."""
        return (self.year, self.roth, self.ira, self.basis)


@dataclass(frozen=True, slots=True)
class Transition:
    state: AccountState
    rmd: Decimal
    rollover: Decimal
    nontaxable: Decimal
    taxable_income: Decimal
    tax: Decimal
    cash: Decimal


def apply_action(state: AccountState, action: Action, params: ScenarioParameters) -> Transition | None:
    """Advance ``state`` one year under ``action``.

    Returns None when the IRA cannot cover the rollover and the RMD together.
    Cash received may be negative when conversion tax exceeds the RMD plus
    other income; the shortfall is carried in ``total_cash``.
    """
    rollover = action.rollover
    if state.ira < rollover:
        return None

    rmd = compute_rmd_amount(params.birth_year, params.birth_month, state.year, state.ira)
    if state.ira < rollover + rmd:
        return None

    # RMD and rollover are taken at the start of the year, before growth.
    roth = grow(state.roth + rollover, params.roth_rate, params.inflation_rate)
    ira = grow(state.ira - rmd - rollover, params.ira_rate, params.inflation_rate)

    distributed = rmd + rollover
    denominator = distributed + ira
    basis_fraction = min(Decimal(1), state.basis / denominator) if denominator > 0 else ZERO
    nontaxable = min(state.basis, floor_cents(basis_fraction * distributed))

    taxable_income = distributed - nontaxable + params.yearly_taxable_income
    tax = compute_federal_income_tax(taxable_income)
    cash = rmd + params.yearly_taxable_income - tax

    next_state = AccountState(
        year=state.year + 1,
        roth=roth,
        ira=ira,
        basis=state.basis - nontaxable,
        total_cash=state.total_cash + cash,
        total_tax=state.total_tax + tax,
        previous_action=action,
    )
    return Transition(
        state=next_state,
        rmd=rmd,
        rollover=rollover,
        nontaxable=nontaxable,
        taxable_income=taxable_income,
        tax=tax,
        cash=cash,
    )


def max_after_tax_cash(state: AccountState, external_income: Decimal) -> Decimal:
    """After-tax value if the IRA were fully liquidated at ``state``."""
    taxable = state.ira - state.basis + external_income
    return state.roth + state.total_cash + state.basis + taxable - compute_federal_income_tax(taxable)
