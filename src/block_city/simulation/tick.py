"""One simulated month: fires, metrics, funds, population, history."""

import dataclasses
import logging
import math

from block_city.constants import (
    DEPARTURE_NO_WATER,
    DEPARTURE_POLLUTED,
    DEPARTURE_UNEDUCATED,
    DEPARTURE_UNHAPPY,
    DEPARTURE_UNHAPPY_THRESHOLD,
    DEPARTURE_UNHEALTHY,
    DEPARTURE_UNSAFE,
    DEPARTURE_VERY_UNHAPPY,
    DEPARTURE_VERY_UNHAPPY_THRESHOLD,
    EDUCATION_PENALTY_THRESHOLD,
    GROWTH_TIERS,
    HEALTH_PENALTY_THRESHOLD,
    JOBS_POPULATION_SOFT_CAP,
    MONTHLY_TAX_PER_CAPITA,
    POLLUTION_GROWTH_MARGIN,
    POLLUTION_HEALTH_IMPACT_THRESHOLD,
    RESIDENTIAL_GROWTH_FACTOR,
    SAFETY_PENALTY_THRESHOLD,
    SEVERE_POLLUTION_LEVEL,
    TOURIST_GROWTH_APPEAL_THRESHOLD,
    TOURIST_GROWTH_FACTOR,
    TOURIST_INCOME_PER_TOURIST,
)
from block_city.events import EventKind, GameEvent
from block_city.fire.simulator import FireSimulator
from block_city.metrics.engine import apply_metrics, derive_metrics
from block_city.metrics.types import CityMetrics
from block_city.models import CityStats
from block_city.simulation.types import SimulationState, TickReport

logger = logging.getLogger(__name__)


def monthly_income(stats: CityStats) -> int:
    """Taxes plus tourism, from last month's population and tourists."""
    return stats.population * MONTHLY_TAX_PER_CAPITA + stats.tourists * TOURIST_INCOME_PER_TOURIST


def monthly_expense(metrics: CityMetrics) -> int:
    return math.ceil(metrics.total_maintenance_cost)


def growth_factor(happiness: int) -> float:
    for threshold, factor in GROWTH_TIERS:
        if happiness > threshold:
            return factor
    return 0.0


def departure_factor(metrics: CityMetrics) -> float:
    """Largest departure rate among the triggered causes (they do not add up)."""
    has_water = metrics.has_water
    is_healthy = metrics.health_level > HEALTH_PENALTY_THRESHOLD
    is_safe = metrics.safety_level > SAFETY_PENALTY_THRESHOLD
    is_educated = metrics.education_level >= EDUCATION_PENALTY_THRESHOLD
    pollution_ok = metrics.pollution_level < POLLUTION_HEALTH_IMPACT_THRESHOLD + POLLUTION_GROWTH_MARGIN

    triggered = [0.0]
    if metrics.happiness < DEPARTURE_VERY_UNHAPPY_THRESHOLD:
        triggered.append(DEPARTURE_VERY_UNHAPPY)
    if metrics.happiness < DEPARTURE_UNHAPPY_THRESHOLD:
        triggered.append(DEPARTURE_UNHAPPY)
    if not has_water:
        triggered.append(DEPARTURE_NO_WATER)
    if not is_healthy:
        triggered.append(DEPARTURE_UNHEALTHY)
    if not is_safe:
        triggered.append(DEPARTURE_UNSAFE)
    if not is_educated:
        triggered.append(DEPARTURE_UNEDUCATED)
    if not pollution_ok and metrics.pollution_level > SEVERE_POLLUTION_LEVEL:
        triggered.append(DEPARTURE_POLLUTED)
    return max(triggered)


def can_grow(population: int, metrics: CityMetrics) -> bool:
    """All service gates that must be open for newcomers to arrive."""
    return (
        population < metrics.total_residential_capacity
        and metrics.has_water
        and metrics.health_level > HEALTH_PENALTY_THRESHOLD
        and metrics.safety_level > SAFETY_PENALTY_THRESHOLD
        and metrics.education_level >= EDUCATION_PENALTY_THRESHOLD
        and metrics.pollution_level < POLLUTION_HEALTH_IMPACT_THRESHOLD + POLLUTION_GROWTH_MARGIN
    )


def compute_population_change(population: int, metrics: CityMetrics) -> int:
    """Net arrivals minus departures for one month, before clamping.

    Growth follows the happiness tier plus a share of housing capacity, with
    a tourism bonus for very appealing cities. Positive growth is softened
    once the population would outnumber jobs by more than 25%.
    """
    change = 0
    if can_grow(population, metrics):
        change = math.floor(population * growth_factor(metrics.happiness) + 1)
        change += math.floor(metrics.total_residential_capacity * RESIDENTIAL_GROWTH_FACTOR)
        if metrics.appeal > TOURIST_GROWTH_APPEAL_THRESHOLD:
            change += math.floor(metrics.tourists * TOURIST_GROWTH_FACTOR)

    leaving = departure_factor(metrics)
    if leaving > 0:
        change -= math.floor(population * leaving)

    job_ceiling = metrics.total_jobs_provided * JOBS_POPULATION_SOFT_CAP
    projected = population + change
    if change > 0 and projected > job_ceiling:
        change = max(0, change - math.floor((projected - job_ceiling) / 2))
    return change


def advance_month(state: SimulationState, fire_simulator: FireSimulator) -> TickReport:
    """Run one simulated month against the state, in place.

    Order: fires, metrics, funds, population, month counter, history,
    selection cleanup.
    """
    previous = state.stats

    fire = fire_simulator.step(state.buildings, month=previous.month)
    state.buildings = fire.buildings

    metrics = derive_metrics(state.buildings, previous)

    income = monthly_income(previous)
    expense = monthly_expense(metrics)
    funds = previous.funds + income - expense

    change = compute_population_change(previous.population, metrics)
    population = max(0, min(previous.population + change, metrics.total_residential_capacity))

    state.stats = dataclasses.replace(
        apply_metrics(previous, metrics),
        funds=funds,
        population=population,
        month=previous.month + 1,
    )
    state.history.append(state.stats)

    selected = state.selected_building
    if state.selected_building_id is not None and (selected is None or selected.is_destroyed):
        state.selected_building_id = None

    events = list(fire.events)
    if not events and not state.autonomy_enabled:
        events.append(GameEvent(
            kind=EventKind.FINANCE,
            message=(
                f"Monthly income: ${previous.population * MONTHLY_TAX_PER_CAPITA} (taxes) + "
                f"${previous.tourists * TOURIST_INCOME_PER_TOURIST} (tourism) = ${income}. "
                f"Expenses: ${expense}. Net: ${income - expense}"
            ),
            month=previous.month,
        ))
    state.events.extend(events)

    logger.info(
        "Month %d: population %d -> %d, funds %d -> %d",
        previous.month,
        previous.population,
        population,
        previous.funds,
        funds,
    )
    return TickReport(
        month=previous.month,
        metrics=metrics,
        income=income,
        expense=expense,
        population_change=population - previous.population,
        events=events,
        destroyed_ids=list(fire.destroyed_ids),
    )
