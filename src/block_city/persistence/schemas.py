"""Saved-game schemas.

Field names are serialized in camelCase so snapshots stay compatible with
saves written by the browser build of the game.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from block_city.constants import (
    AI_PLANNER_COOLDOWN_MONTHS,
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
from block_city.models import BuildingType, FocusSource


class SnapshotModel(BaseModel):
    """Base for saved-game models: camelCase on the wire, snake_case in code."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class BuildingSnapshot(SnapshotModel):
    id: str
    type: BuildingType
    grid_x: int
    grid_z: int
    level: int = Field(default=BASE_BUILDING_LEVEL, ge=1)
    is_on_fire: bool = False
    fire_health: float = Field(default=MAX_FIRE_HEALTH, ge=0, le=MAX_FIRE_HEALTH)


class CityStatsSnapshot(SnapshotModel):
    """City statistics; missing fields fall back to the starting values."""

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


class FocusPointSnapshot(SnapshotModel):
    x: int
    z: int


class CameraState(SnapshotModel):
    """Camera pose; opaque to the simulation and passed through untouched."""

    position: list[float] = Field(default_factory=list)
    target: list[float] = Field(default_factory=list)


class SavedGameState(SnapshotModel):
    """Everything needed to rehydrate a game."""

    buildings: list[BuildingSnapshot] = Field(default_factory=list)
    city_stats: CityStatsSnapshot = Field(default_factory=CityStatsSnapshot)
    selected_building_id: str | None = None
    camera_state: CameraState | None = None
    is_delegation_mode_active: bool = False
    ai_planner_cooldown: int = AI_PLANNER_COOLDOWN_MONTHS
    ai_focus_point: FocusPointSnapshot | None = None
    ai_focus_point_source: FocusSource | None = None
    city_stats_history: list[CityStatsSnapshot] = Field(default_factory=list)
