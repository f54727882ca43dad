"""Core models shared across the simulation.

Enumerations plus the mutable records the orchestrator owns: placed
buildings, city statistics and the planner focus point.
"""

import uuid
from dataclasses import dataclass, field
from enum import StrEnum

from block_city.constants import (
    BASE_BUILDING_LEVEL,
    INITIAL_APPEAL,
    INITIAL_EDUCATION_LEVEL,
    INITIAL_FUNDS,
    INITIAL_HAPPINESS,
    INITIAL_HEALTH_LEVEL,
    INITIAL_MONTH,
    INITIAL_POLLUTION_LEVEL,
    INITIAL_POPULATION,
    INITIAL_SAFETY_LEVEL,
    INITIAL_TOURISTS,
    MAX_FIRE_HEALTH,
)


class BuildingType(StrEnum):
    """Placeable structure types."""

    RESIDENTIAL = "RESIDENTIAL"
    COMMERCIAL = "COMMERCIAL"
    INDUSTRIAL = "INDUSTRIAL"
    ROAD = "ROAD"
    PARK = "PARK"
    POWER_PLANT = "POWER_PLANT"
    WATER_TOWER = "WATER_TOWER"
    FIRE_STATION = "FIRE_STATION"
    HOSPITAL = "HOSPITAL"
    SCHOOL = "SCHOOL"
    UNIVERSITY = "UNIVERSITY"
    WASTE_MANAGEMENT = "WASTE_MANAGEMENT"
    LANDMARK = "LANDMARK"


class FailureReason(StrEnum):
    """Why a player or planner action was rejected."""

    INSUFFICIENT_FUNDS = "insufficient_funds"
    CELL_OCCUPIED = "cell_occupied"
    INVALID_COORDINATE = "invalid_coordinate"
    ROAD_BLOCK_RULE_VIOLATION = "road_block_rule_violation"
    NO_UPGRADE_AVAILABLE = "no_upgrade_available"
    TARGET_NOT_FOUND = "target_not_found"
    TARGET_ON_FIRE = "target_on_fire"
    TARGET_DESTROYED = "target_destroyed"


class Actor(StrEnum):
    """Who issued an action."""

    PLAYER = "player"
    PLANNER = "planner"


class FocusSource(StrEnum):
    """Provenance of the planner focus point."""

    PLAYER = "PLAYER"
    PLANNER = "AI_STRATEGIC"


class ActionKind(StrEnum):
    """Planner action kinds."""

    BUILD = "BUILD"
    UPGRADE = "UPGRADE"


class UpgradeReason(StrEnum):
    """Why the planner chose to upgrade a structure."""

    POWER_CAPACITY = "power_capacity"
    RESIDENTIAL = "residential"
    GENERIC = "generic"


def new_building_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Building:
    """A structure placed on one grid cell."""

    type: BuildingType
    grid_x: int
    grid_z: int
    id: str = field(default_factory=new_building_id)
    level: int = BASE_BUILDING_LEVEL
    is_on_fire: bool = False
    fire_health: float = MAX_FIRE_HEALTH

    @property
    def cell(self) -> tuple[int, int]:
        return (self.grid_x, self.grid_z)

    @property
    def is_destroyed(self) -> bool:
        """Burnt out; kept as rubble until demolished."""
        return self.is_on_fire and self.fire_health <= 0

    @property
    def is_burning(self) -> bool:
        return self.is_on_fire and self.fire_health > 0


@dataclass
class CityStats:
    """City-wide statistics for one month."""

    population: int = INITIAL_POPULATION
    funds: int = INITIAL_FUNDS
    power_capacity: int = 0
    power_demand: int = 0
    water_capacity: int = 0
    water_demand: int = 0
    happiness: int = INITIAL_HAPPINESS
    month: int = INITIAL_MONTH
    health_level: int = INITIAL_HEALTH_LEVEL
    safety_level: int = INITIAL_SAFETY_LEVEL
    education_level: int = INITIAL_EDUCATION_LEVEL
    pollution_level: int = INITIAL_POLLUTION_LEVEL
    appeal: int = INITIAL_APPEAL
    tourists: int = INITIAL_TOURISTS


@dataclass(frozen=True)
class FocusPoint:
    """Grid location the planner concentrates development around."""

    x: int
    z: int
    source: FocusSource
