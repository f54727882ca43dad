"""Type definitions for the fire subsystem."""

from dataclasses import dataclass, field

from block_city.constants import (
    FIRE_DAMAGE_RATE,
    FIRE_SPREAD_CHANCE,
    FIRE_SPREAD_HEALTH_THRESHOLD,
    FIRE_START_CHANCE_PER_TICK_PER_BUILDING,
    MAX_FIRE_HEALTH,
)
from block_city.events import GameEvent
from block_city.models import Building


@dataclass
class FireConfig:
    """Tunables for ignition, spread and damage."""

    start_chance: float = FIRE_START_CHANCE_PER_TICK_PER_BUILDING
    spread_chance: float = FIRE_SPREAD_CHANCE
    damage_rate: float = FIRE_DAMAGE_RATE
    max_fire_health: float = MAX_FIRE_HEALTH

    # A fire only spreads once it has burnt below this share of max health
    spread_health_threshold: float = FIRE_SPREAD_HEALTH_THRESHOLD

    @property
    def ignition_health(self) -> float:
        """Fire health of a freshly ignited building."""
        return self.max_fire_health - 1


@dataclass
class FireTickResult:
    """Outcome of advancing fires by one month."""

    buildings: list[Building]
    events: list[GameEvent] = field(default_factory=list)
    destroyed_ids: list[str] = field(default_factory=list)
    ignited_ids: list[str] = field(default_factory=list)
    suppressed_ids: list[str] = field(default_factory=list)
