"""Optimal action-sequence search over the yearly decision graph.

Every edge advances the year by one, so the graph is acyclic. A state labelled
``year`` holds balances as of Dec 31 of ``year - 1``; decisions are made for
``start_year`` through ``end_year - 1`` and a path ends at the snapshot labelled
``end_year``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
import heapq
import itertools
import logging
from typing import Callable, Iterable

from .money import ZERO
from .schema import DEFAULT_ROLLOVER_STEP, ScenarioParameters
from .state import AccountState, Action, Continue, RolloverThenContinue, Transition, apply_action, max_after_tax_cash

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Objective:
    name: str
    maximize: bool
    non_negative: bool
    edge_weight: Callable[[AccountState, Transition, ScenarioParameters], Decimal]

    def better(self, candidate: Decimal, incumbent: Decimal) -> bool:
        """Strict preference; ties keep the incumbent."""
        return candidate > incumbent if self.maximize else candidate < incumbent


def _tax_paid(current: AccountState, transition: Transition, params: ScenarioParameters) -> Decimal:
    return transition.tax


def _liquidation_gain(current: AccountState, transition: Transition, params: ScenarioParameters) -> Decimal:
    income = params.yearly_taxable_income
    return max_after_tax_cash(transition.state, income) - max_after_tax_cash(current, income)


MINIMIZE_TAX = Objective(name="minimize_tax", maximize=False, non_negative=True, edge_weight=_tax_paid)
MAXIMIZE_AFTER_TAX_CASH = Objective(
    name="maximize_after_tax_cash",
    maximize=True,
    non_negative=False,
    edge_weight=_liquidation_gain,
)

OBJECTIVES_BY_NAME: dict[str, Objective] = {
    MINIMIZE_TAX.name: MINIMIZE_TAX,
    MAXIMIZE_AFTER_TAX_CASH.name: MAXIMIZE_AFTER_TAX_CASH,
}


@dataclass(slots=True)
class SearchResult:
    path: list[AccountState]
    total_cost: Decimal
    objective: str
    algorithm: str
    nodes_expanded: int = 0

    @property
    def actions(self) -> list[Action]:
        return [state.previous_action for state in self.path[1:] if state.previous_action is not None]


def candidate_actions(rollover_step: Decimal = DEFAULT_ROLLOVER_STEP) -> tuple[Action, ...]:
    return (Continue(), RolloverThenContinue(rollover_step))


def successors(
    state: AccountState,
    params: ScenarioParameters,
    objective: Objective = MINIMIZE_TAX,
    rollover_step: Decimal = DEFAULT_ROLLOVER_STEP,
) -> list[tuple[AccountState, Decimal]]:
    edges: list[tuple[AccountState, Decimal]] = []
    for action in candidate_actions(rollover_step):
        transition = apply_action(state, action, params)
        if transition is None:
            continue
        edges.append((transition.state, objective.edge_weight(state, transition, params)))
    return edges


def is_terminal(state: AccountState, params: ScenarioParameters) -> bool:
    return state.year >= params.end_year


def dijkstra_search(
    start: AccountState,
    params: ScenarioParameters,
    objective: Objective = MINIMIZE_TAX,
    rollover_step: Decimal = DEFAULT_ROLLOVER_STEP,
) -> SearchResult | None:
    """Lowest-cost path with a priority frontier. Valid only for non-negative edge costs.

    Equal costs are ordered by the rollover amounts taken so far, so among
    optimal paths the one preferring ``Continue`` earliest wins, as in
    ``exhaustive_search``.
    """
    if objective.maximize or not objective.non_negative:
        raise ValueError(f"dijkstra search requires a non-negative minimizing objective, got '{objective.name}'")

    counter = itertools.count()
    frontier: list[tuple[Decimal, tuple[Decimal, ...], int, AccountState]] = [(ZERO, (), next(counter), start)]
    best_label: dict[AccountState, tuple[Decimal, tuple[Decimal, ...]]] = {start: (ZERO, ())}
    parents: dict[AccountState, AccountState] = {}
    expanded: set[AccountState] = set()

    while frontier:
        cost, order, _, state = heapq.heappop(frontier)
        if state in expanded:
            continue
        expanded.add(state)

        if is_terminal(state, params):
            path = [state]
            while path[-1] in parents:
                path.append(parents[path[-1]])
            path.reverse()
            logger.debug("dijkstra: expanded %d states, total cost %s", len(expanded), cost)
            return SearchResult(path, cost, objective.name, "dijkstra", len(expanded))

        for child, edge_cost in successors(state, params, objective, rollover_step):
            if edge_cost < 0:
                raise ValueError(f"negative edge cost {edge_cost} from year {state.year}")
            label = (cost + edge_cost, order + (child.previous_action.rollover,))
            known = best_label.get(child)
            if known is not None and known <= label:
                continue
            best_label[child] = label
            parents[child] = state
            heapq.heappush(frontier, (label[0], label[1], next(counter), child))

    logger.debug("dijkstra: no terminal state reachable after %d states", len(expanded))
    return None


def replay(start: AccountState, actions: Iterable[Action], params: ScenarioParameters) -> list[Transition]:
    """Re-apply ``actions`` from ``start`` and return each year's transition."""
    transitions: list[Transition] = []
    state = start
    for action in actions:
        transition = apply_action(state, action, params)
        if transition is None:
            raise RuntimeError(f"action {action!r} does not apply in year {state.year}")
        transitions.append(transition)
        state = transition.state
    return transitions


def exhaustive_search(
    start: AccountState,
    params: ScenarioParameters,
    objective: Objective = MINIMIZE_TAX,
    rollover_step: Decimal = DEFAULT_ROLLOVER_STEP,
    memoize: bool = True,
) -> SearchResult | None:
    """Depth-first enumeration of every action sequence.

    Works for objectives with edges of either sign. With ``memoize`` the best
    continuation is cached per ``AccountState.position()``, which collapses
    paths that converge on the same balances.

    Recursion depth equals the number of decision years; the validator caps
    the horizon at ``MAX_HORIZON_YEARS``.
    """
    cache: dict[tuple, tuple[Decimal, tuple[Action, ...]] | None] = {}
    stats = {"expanded": 0, "cache_hits": 0}

    def best_from(state: AccountState) -> tuple[Decimal, tuple[Action, ...]] | None:
        if is_terminal(state, params):
            return ZERO, ()

        key = state.position()
        if memoize and key in cache:
            stats["cache_hits"] += 1
            return cache[key]

        stats["expanded"] += 1
        best: tuple[Decimal, tuple[Action, ...]] | None = None
        for child, edge_cost in successors(state, params, objective, rollover_step):
            tail = best_from(child)
            if tail is None:
                continue
            candidate = (edge_cost + tail[0], (child.previous_action,) + tail[1])
            if best is None or objective.better(candidate[0], best[0]):
                best = candidate

        if memoize:
            cache[key] = best
        return best

    outcome = best_from(start)
    logger.debug(
        "exhaustive: expanded %d states, %d cache hits (memoize=%s)",
        stats["expanded"],
        stats["cache_hits"],
        memoize,
    )
    if outcome is None:
        return None

    total, actions = outcome
    path = [start] + [transition.state for transition in replay(start, actions, params)]
    return SearchResult(path, total, objective.name, "exhaustive", stats["expanded"])
