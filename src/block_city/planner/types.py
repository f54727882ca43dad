"""Type definitions for the autonomous planner."""

from dataclasses import dataclass, field
from typing import Any

from block_city.constants import (
    AI_BOOTSTRAP_CENTER_SPAN,
    AI_FOCUS_EMPTY_CELLS,
    AI_MAX_ACTIONS_PER_TURN,
    AI_MAX_EMPTY_CELLS_TO_SHOW,
    AI_PLANNER_COOLDOWN_MONTHS,
    AI_PLANNER_MIN_FUNDS_TO_ACT,
)
from block_city.grid import Cell
from block_city.metrics.types import CityMetrics
from block_city.models import (
    ActionKind,
    Building,
    BuildingType,
    CityStats,
    FocusPoint,
    UpgradeReason,
)
from block_city.simulation.types import ActionResult


@dataclass
class PlannerConfig:
    """Tunables for planner cadence and batch size."""

    cooldown_months: int = AI_PLANNER_COOLDOWN_MONTHS
    min_funds_to_act: int = AI_PLANNER_MIN_FUNDS_TO_ACT
    max_actions_per_turn: int = AI_MAX_ACTIONS_PER_TURN
    max_empty_cells: int = AI_MAX_EMPTY_CELLS_TO_SHOW * 2
    focus_cells: int = AI_FOCUS_EMPTY_CELLS
    bootstrap_span: int = AI_BOOTSTRAP_CENTER_SPAN


@dataclass(frozen=True)
class ProposedAction:
    """A build or upgrade the planner wants to commit."""

    kind: ActionKind
    cost: int
    reasoning: str = ""
    building_type: BuildingType | None = None
    x: int | None = None
    z: int | None = None
    building_id: str | None = None
    upgrade_reason: UpgradeReason | None = None

    @property
    def cell(self) -> Cell | None:
        if self.x is None or self.z is None:
            return None
        return (self.x, self.z)

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": self.kind.value,
            "type": self.building_type.value if self.building_type else None,
            "x": self.x,
            "z": self.z,
            "building_id": self.building_id,
            "cost": self.cost,
            "reasoning": self.reasoning,
        }


@dataclass(frozen=True)
class PlanningDraft:
    """Proposals for one turn plus the funds and cells they reserve.

    Nothing in a draft touches live state; funds and cells are simulated.
    """

    funds: int
    occupied: frozenset[Cell]
    roads: frozenset[Cell]
    max_actions: int
    actions: tuple[ProposedAction, ...] = ()
    # Cell of a power plant that should become the focus point once built
    initial_power_plant: Cell | None = None

    @classmethod
    def start(
        cls,
        funds: int,
        occupied: set[Cell],
        roads: set[Cell],
        max_actions: int,
    ) -> "PlanningDraft":
        return cls(
            funds=funds,
            occupied=frozenset(occupied),
            roads=frozenset(roads),
            max_actions=max_actions,
        )

    @property
    def is_full(self) -> bool:
        return len(self.actions) >= self.max_actions

    @property
    def reserved_funds(self) -> int:
        return sum(action.cost for action in self.actions)


@dataclass(frozen=True)
class PlanningContext:
    """Read-only view of the city the proposal functions reason about."""

    buildings: tuple[Building, ...]
    stats: CityStats
    metrics: CityMetrics
    grid_size: int
    focus_point: FocusPoint | None
    # Empty cells for general placement and around the focus point
    candidates: tuple[Cell, ...]
    focus_candidates: tuple[Cell, ...] = ()
    bootstrap_span: int = AI_BOOTSTRAP_CENTER_SPAN

    @property
    def real_occupied(self) -> frozenset[Cell]:
        return frozenset(b.cell for b in self.buildings)

    @property
    def real_roads(self) -> frozenset[Cell]:
        return frozenset(b.cell for b in self.buildings if b.type == BuildingType.ROAD)

    @property
    def has_power_plant(self) -> bool:
        return any(
            b.type == BuildingType.POWER_PLANT and not b.is_destroyed
            for b in self.buildings
        )


@dataclass
class PlannerTurn:
    """Proposals from one planner turn and how committing them went."""

    draft: PlanningDraft
    results: list[ActionResult] = field(default_factory=list)

    @property
    def proposals(self) -> tuple[ProposedAction, ...]:
        return self.draft.actions

    @property
    def committed(self) -> int:
        return sum(1 for result in self.results if result.ok)
