"""Metrics derivation engine.

Turns the building collection plus last month's statistics into the full
set of city-wide metrics. The computation runs in a fixed order:

1. Accumulate per-building contributions
2. Happiness baseline, then penalties and bonuses
3. Pollution level
4. Health level
5. Safety level
6. Education level
7. Appeal
8. Tourists

Several terms read last month's values (happiness, health, safety,
population, funds) while others read values computed earlier in the same
pass. Integer flooring happens at the points each helper documents.
"""

import dataclasses
import math
from collections.abc import Iterable

from block_city.catalog.resolver import effective_properties
from block_city.constants import (
    ACTIVE_FIRE_HAPPINESS_PENALTY,
    COMMERCIAL_CAPACITY_PER_TOURIST_RATIO,
    DEEP_DEBT_HAPPINESS_PENALTY,
    DEEP_DEBT_THRESHOLD,
    DERELICT_BUILDING_APPEAL_PENALTY,
    EDUCATION_APPEAL_BONUS_FACTOR,
    EDUCATION_CAPACITY_WEIGHT,
    EDUCATION_DECLINE_DIVISOR,
    EDUCATION_DECLINE_FLOOR,
    EDUCATION_DECLINE_POPULATION,
    EDUCATION_GRACE_POPULATION,
    EDUCATION_PENALTY_THRESHOLD,
    EDUCATION_POINTS_BONUS_FACTOR,
    EDUCATION_QUALITY_WEIGHT,
    EDUCATION_READY_LEVEL,
    HAPPINESS_APPEAL_BONUS_FACTOR,
    HEALTH_PENALTY_THRESHOLD,
    HOSPITAL_PATIENT_RATIO,
    INDUSTRY_HAPPINESS_PENALTY_PER_BUILDING,
    INDUSTRY_PARK_RATIO,
    INITIAL_EDUCATION_LEVEL,
    INITIAL_HAPPINESS,
    INTRINSIC_APPEAL_BONUS,
    INTRINSIC_APPEAL_MAX_POLLUTION,
    LOW_FUNDS_HAPPINESS_PENALTY,
    LOW_FUNDS_THRESHOLD,
    MAX_APPEAL_UNITS_FOR_MAX_LEVEL,
    MAX_POLLUTION_UNITS_FOR_MAX_LEVEL,
    NO_HOSPITAL_HEALTH_LEVEL,
    NO_POWER_HAPPINESS_PENALTY,
    NO_WATER_HAPPINESS_PENALTY,
    POLLUTION_APPEAL_PENALTY_FACTOR,
    POLLUTION_HAPPINESS_FACTOR,
    POLLUTION_HEALTH_IMPACT_THRESHOLD,
    POLLUTION_HEALTH_PENALTY_FACTOR,
    POPULATION_REQUIRING_EDUCATION_RATIO,
    SAFETY_PENALTY_PER_ACTIVE_FIRE,
    SAFETY_PENALTY_THRESHOLD,
    TOURISTS_PER_APPEAL,
    TOURISTS_PER_APPEAL_POINT,
    UNEDUCATED_LEVEL,
    UNEMPLOYMENT_HAPPINESS_FACTOR,
    UNEMPLOYMENT_THRESHOLD,
)
from block_city.metrics.types import CityMetrics, Contributions
from block_city.models import Building, BuildingType, CityStats

EDUCATION_TYPES = frozenset({BuildingType.SCHOOL, BuildingType.UNIVERSITY})


def clamp_level(value: float, low: int = 0, high: int = 100) -> int:
    """Floor a level and clamp it into [low, high]."""
    return max(low, min(high, math.floor(value)))


def accumulate(buildings: Iterable[Building]) -> Contributions:
    """Sum every building's contribution at its current level.

    Destroyed buildings only cost half their upkeep. Burning buildings keep
    their capacities, demands and upkeep but stop contributing happiness,
    pollution effects and appeal.
    """
    totals = Contributions()
    for building in buildings:
        totals.building_count += 1
        props = effective_properties(building)

        if building.is_destroyed:
            totals.derelict_count += 1
            totals.maintenance_cost += props.maintenance_cost / 2
            continue

        if building.is_burning:
            totals.active_fires += 1
        else:
            totals.direct_happiness += props.happiness_effect
            totals.pollution_output += props.pollution_output
            totals.pollution_reduction += props.pollution_reduction
            totals.appeal_points += props.appeal_points
            if building.type == BuildingType.INDUSTRIAL:
                totals.industrial_count += 1
            elif building.type == BuildingType.PARK:
                totals.park_count += 1
            elif building.type == BuildingType.HOSPITAL:
                totals.has_hospital = True
            elif building.type in EDUCATION_TYPES:
                totals.has_education = True

        totals.power_capacity += props.power_capacity
        totals.power_demand += props.power_demand
        totals.water_capacity += props.water_capacity
        totals.water_demand += props.water_demand
        totals.maintenance_cost += props.maintenance_cost
        totals.residential_capacity += props.residential_capacity
        totals.jobs_provided += props.jobs_provided
        if building.type == BuildingType.COMMERCIAL:
            totals.commercial_jobs += props.jobs_provided
        totals.patient_capacity += props.patient_capacity
        totals.student_capacity += props.student_capacity
        totals.education_points += props.education_point_contribution

    return totals


def pollution_level(totals: Contributions) -> int:
    net_units = max(0, totals.pollution_output - totals.pollution_reduction)
    if MAX_POLLUTION_UNITS_FOR_MAX_LEVEL <= 0:
        return 0
    return min(100, math.floor(net_units / MAX_POLLUTION_UNITS_FOR_MAX_LEVEL * 100))


def health_level(totals: Contributions, population: int, pollution: int) -> int:
    """Hospital coverage against half the population, less pollution damage."""
    if totals.has_hospital and population > 0:
        level: float = min(
            100,
            math.floor(totals.patient_capacity / (population * HOSPITAL_PATIENT_RATIO) * 100),
        )
    elif totals.has_hospital:
        level = 100
    else:
        level = NO_HOSPITAL_HEALTH_LEVEL

    if pollution > POLLUTION_HEALTH_IMPACT_THRESHOLD:
        level -= (pollution - POLLUTION_HEALTH_IMPACT_THRESHOLD) * POLLUTION_HEALTH_PENALTY_FACTOR
    return clamp_level(level)


def safety_level(active_fires: int) -> int:
    return max(0, 100 - active_fires * SAFETY_PENALTY_PER_ACTIVE_FIRE)


def education_level(totals: Contributions, population: int) -> int:
    demand = population * POPULATION_REQUIRING_EDUCATION_RATIO

    if totals.has_education:
        if demand > 0:
            quality_ratio = min(1, totals.education_points / max(1, demand))
            capacity_ratio = min(1, totals.student_capacity / max(1, demand))
            level = math.floor(
                capacity_ratio * EDUCATION_CAPACITY_WEIGHT
                + quality_ratio * EDUCATION_QUALITY_WEIGHT
            )
            level += math.floor(totals.education_points * EDUCATION_POINTS_BONUS_FACTOR)
            level = min(100, level)
        else:
            level = EDUCATION_READY_LEVEL
    elif demand > 0:
        if population < EDUCATION_GRACE_POPULATION:
            level = INITIAL_EDUCATION_LEVEL
        elif population < EDUCATION_DECLINE_POPULATION:
            level = max(
                EDUCATION_DECLINE_FLOOR,
                INITIAL_EDUCATION_LEVEL
                - math.floor((population - EDUCATION_GRACE_POPULATION) / EDUCATION_DECLINE_DIVISOR),
            )
        else:
            level = UNEDUCATED_LEVEL
    else:
        level = INITIAL_EDUCATION_LEVEL

    return clamp_level(level)


def happiness_score(
    totals: Contributions,
    previous: CityStats,
    pollution: int,
    education: int,
) -> float:
    """Unclamped happiness after all penalties, in their fixed order."""
    happiness: float = INITIAL_HAPPINESS + totals.direct_happiness
    has_buildings = totals.building_count > 0

    if totals.power_demand > totals.power_capacity and has_buildings:
        happiness -= NO_POWER_HAPPINESS_PENALTY
    if totals.water_demand > totals.water_capacity and has_buildings:
        happiness -= NO_WATER_HAPPINESS_PENALTY

    if totals.industrial_count > 0 and totals.industrial_count > totals.park_count * INDUSTRY_PARK_RATIO:
        happiness -= totals.industrial_count * INDUSTRY_HAPPINESS_PENALTY_PER_BUILDING

    if previous.population > 0 and totals.jobs_provided < previous.population:
        unemployment = (previous.population - totals.jobs_provided) / previous.population
        if unemployment > UNEMPLOYMENT_THRESHOLD:
            happiness -= math.floor(unemployment * UNEMPLOYMENT_HAPPINESS_FACTOR)

    if previous.funds < LOW_FUNDS_THRESHOLD:
        happiness -= LOW_FUNDS_HAPPINESS_PENALTY
    if previous.funds < DEEP_DEBT_THRESHOLD:
        happiness -= DEEP_DEBT_HAPPINESS_PENALTY

    happiness -= pollution * POLLUTION_HAPPINESS_FACTOR

    if previous.health_level < HEALTH_PENALTY_THRESHOLD:
        happiness -= (HEALTH_PENALTY_THRESHOLD - previous.health_level) / 2
    if previous.safety_level < SAFETY_PENALTY_THRESHOLD:
        happiness -= SAFETY_PENALTY_THRESHOLD - previous.safety_level

    happiness -= totals.active_fires * ACTIVE_FIRE_HAPPINESS_PENALTY

    if education < EDUCATION_PENALTY_THRESHOLD:
        happiness -= (EDUCATION_PENALTY_THRESHOLD - education) / 1.5

    return happiness


def appeal_level(
    totals: Contributions,
    previous: CityStats,
    pollution: int,
    health: int,
    safety: int,
    education: int,
) -> int:
    intrinsic = 0
    if (
        previous.happiness >= 50
        and pollution < INTRINSIC_APPEAL_MAX_POLLUTION
        and health >= HEALTH_PENALTY_THRESHOLD
        and safety >= SAFETY_PENALTY_THRESHOLD
    ):
        intrinsic = INTRINSIC_APPEAL_BONUS

    raw_units: float = totals.appeal_points + intrinsic
    if previous.happiness > 50:
        raw_units += (previous.happiness - 50) * HAPPINESS_APPEAL_BONUS_FACTOR
    if education > EDUCATION_PENALTY_THRESHOLD:
        raw_units += (education - EDUCATION_PENALTY_THRESHOLD) * EDUCATION_APPEAL_BONUS_FACTOR
    raw_units = max(0, raw_units)

    if MAX_APPEAL_UNITS_FOR_MAX_LEVEL <= 0:
        appeal: float = 0
    else:
        appeal = math.floor(raw_units / MAX_APPEAL_UNITS_FOR_MAX_LEVEL * 100)
    appeal -= pollution * POLLUTION_APPEAL_PENALTY_FACTOR
    appeal -= totals.derelict_count * DERELICT_BUILDING_APPEAL_PENALTY
    return clamp_level(appeal)


def tourist_count(totals: Contributions, appeal: int) -> int:
    """Tourists drawn by appeal, capped by commercial capacity to serve them."""
    tourists = math.floor(appeal * TOURISTS_PER_APPEAL + totals.appeal_points * TOURISTS_PER_APPEAL_POINT)
    ceiling = math.floor(totals.commercial_jobs / COMMERCIAL_CAPACITY_PER_TOURIST_RATIO)
    return max(0, min(tourists, ceiling))


def derive_metrics(buildings: Iterable[Building], previous: CityStats) -> CityMetrics:
    """Compute all derived metrics for the given buildings.

    Args:
        buildings: Every placed building, destroyed ones included.
        previous: Statistics from the last committed month; supplies the
            population, funds and the feedback terms.

    Returns:
        A CityMetrics record. The input is not modified.
    """
    totals = accumulate(buildings)
    population = previous.population

    pollution = pollution_level(totals)
    health = health_level(totals, population, pollution)
    safety = safety_level(totals.active_fires)
    education = education_level(totals, population)
    happiness = happiness_score(totals, previous, pollution, education)
    appeal = appeal_level(totals, previous, pollution, health, safety, education)
    tourists = tourist_count(totals, appeal)

    return CityMetrics(
        power_capacity=totals.power_capacity,
        power_demand=totals.power_demand,
        water_capacity=totals.water_capacity,
        water_demand=totals.water_demand,
        happiness=clamp_level(happiness),
        health_level=health,
        safety_level=safety,
        education_level=education,
        pollution_level=pollution,
        appeal=appeal,
        tourists=tourists,
        total_maintenance_cost=totals.maintenance_cost,
        total_residential_capacity=totals.residential_capacity,
        total_jobs_provided=totals.jobs_provided,
        total_commercial_jobs=totals.commercial_jobs,
        derelict_count=totals.derelict_count,
        active_fires=totals.active_fires,
        total_appeal_points=totals.appeal_points,
    )


def apply_metrics(stats: CityStats, metrics: CityMetrics) -> CityStats:
    """Return a copy of stats with the derived fields replaced by metrics."""
    return dataclasses.replace(
        stats,
        power_capacity=metrics.power_capacity,
        power_demand=metrics.power_demand,
        water_capacity=metrics.water_capacity,
        water_demand=metrics.water_demand,
        happiness=metrics.happiness,
        health_level=metrics.health_level,
        safety_level=metrics.safety_level,
        education_level=metrics.education_level,
        pollution_level=metrics.pollution_level,
        appeal=metrics.appeal,
        tourists=metrics.tourists,
    )
