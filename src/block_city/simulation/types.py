"""Type definitions for the city simulation state and its outcomes."""

import dataclasses
from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from block_city.catalog.types import BuildingProperties
from block_city.constants import AI_PLANNER_COOLDOWN_MONTHS, GRID_SIZE, MAX_HISTORY_ENTRIES
from block_city.events import EventLog, GameEvent
from block_city.metrics.types import CityMetrics
from block_city.models import Building, CityStats, FailureReason, FocusPoint


class StatsHistory:
    """Bounded monthly history; the oldest snapshot is evicted first."""

    def __init__(
        self,
        entries: Iterable[CityStats] = (),
        capacity: int = MAX_HISTORY_ENTRIES,
    ) -> None:
        self.capacity = capacity
        self._entries: deque[CityStats] = deque(maxlen=capacity)
        for entry in entries:
            self.append(entry)

    def append(self, stats: CityStats) -> None:
        self._entries.append(dataclasses.replace(stats))

    def latest(self) -> CityStats | None:
        return self._entries[-1] if self._entries else None

    def to_list(self) -> list[CityStats]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CityStats]:
        return iter(self._entries)


@dataclass
class SimulationState:
    """Everything the orchestrator owns between ticks."""

    buildings: list[Building] = field(default_factory=list)
    stats: CityStats = field(default_factory=CityStats)
    history: StatsHistory = field(default_factory=StatsHistory)
    selected_building_id: str | None = None
    camera_state: dict[str, Any] | None = None
    autonomy_enabled: bool = False
    planner_cooldown: int = AI_PLANNER_COOLDOWN_MONTHS
    planner_busy: bool = False
    focus_point: FocusPoint | None = None
    paused: bool = True
    grid_size: int = GRID_SIZE
    events: EventLog = field(default_factory=EventLog)

    def find_building(self, building_id: str) -> Building | None:
        for building in self.buildings:
            if building.id == building_id:
                return building
        return None

    def building_at(self, x: int, z: int) -> Building | None:
        for building in self.buildings:
            if building.grid_x == x and building.grid_z == z:
                return building
        return None

    def occupied_cells(self) -> set[tuple[int, int]]:
        return {b.cell for b in self.buildings}

    @property
    def selected_building(self) -> Building | None:
        if self.selected_building_id is None:
            return None
        return self.find_building(self.selected_building_id)


@dataclass
class ActionResult:
    """Outcome of a placement, demolition, upgrade or selection."""

    ok: bool
    reason: FailureReason | None = None
    building: Building | None = None
    cost: int = 0
    refund: int = 0
    properties: BuildingProperties | None = None
    message: str = ""

    @classmethod
    def failure(cls, reason: FailureReason, message: str = "") -> "ActionResult":
        return cls(ok=False, reason=reason, message=message)


@dataclass
class TickReport:
    """What happened during one simulated month."""

    month: int
    metrics: CityMetrics
    income: int
    expense: int
    population_change: int
    events: list[GameEvent] = field(default_factory=list)
    destroyed_ids: list[str] = field(default_factory=list)

    @property
    def net_funds_change(self) -> int:
        return self.income - self.expense
