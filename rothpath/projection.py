"""Projection entry point: validate a scenario, then search it."""

from __future__ import annotations

import logging

from .schema import Scenario, ScenarioParameters, SearchSettings
from .search import OBJECTIVES_BY_NAME, SearchResult, dijkstra_search, exhaustive_search, replay
from .state import AccountState, Transition
from .validate import validate_scenario

logger = logging.getLogger(__name__)


def project(params: ScenarioParameters, settings: SearchSettings | None = None) -> SearchResult | None:
    """Return the optimal path from ``start_year`` through ``end_year``.

    Returns None when the scenario fails validation or no terminal state is
    reachable.
    """
    if settings is None:
        settings = SearchSettings()
    validation = validate_scenario(Scenario(parameters=params, search=settings))
    if not validation.is_valid:
        for error in validation.errors:
            logger.warning("rejected scenario: %s", error)
        return None

    objective = OBJECTIVES_BY_NAME[settings.objective]
    start = AccountState.initial(params)
    logger.info(
        "searching %d-%d with %s (%s, rollover step %s)",
        params.start_year,
        params.end_year,
        settings.algorithm,
        objective.name,
        settings.rollover_step,
    )

    if settings.algorithm == "dijkstra":
        return dijkstra_search(start, params, objective, settings.rollover_step)
    return exhaustive_search(start, params, objective, settings.rollover_step, memoize=settings.memoize)


def project_scenario(scenario: Scenario) -> SearchResult | None:
    return project(scenario.parameters, scenario.search)


def year_breakdown(result: SearchResult, params: ScenarioParameters) -> list[Transition]:
    """Replay the chosen actions and return each year's transition details."""
    return replay(result.path[0], result.actions, params)
