"""Simulation facade: one object that owns the state and its collaborators."""

import logging
import random

from block_city.constants import GRID_SIZE
from block_city.events import EventKind, GameEvent
from block_city.fire.simulator import FireSimulator
from block_city.fire.types import FireConfig
from block_city.models import BuildingType
from block_city.persistence.game import load_game, save_game
from block_city.persistence.store import KeyValueStore, MemoryStore
from block_city.planner.planner import Planner
from block_city.planner.types import PlannerConfig, PlannerTurn
from block_city.simulation import actions
from block_city.simulation.tick import advance_month
from block_city.simulation.types import ActionResult, SimulationState, TickReport

logger = logging.getLogger(__name__)

DEFAULT_SAVE_KEY = "blockCityBuilderSave_v1"


class CitySimulation:
    """Entry point for front-ends and schedulers.

    Holds the state plus the fire simulator, the planner and the save store.
    `advance_tick` and `advance_planner` are the two scheduler callbacks; the
    remaining methods are player intents.
    """

    def __init__(
        self,
        state: SimulationState | None = None,
        store: KeyValueStore | None = None,
        save_key: str = DEFAULT_SAVE_KEY,
        seed: int | None = None,
        fire_config: FireConfig | None = None,
        planner_config: PlannerConfig | None = None,
        grid_size: int = GRID_SIZE,
    ) -> None:
        self.state = state if state is not None else SimulationState(grid_size=grid_size)
        self.store = store if store is not None else MemoryStore()
        self.save_key = save_key

        # Independent streams: planner draws never shift fire rolls
        seeder = random.Random(seed)
        self.fire = FireSimulator(config=fire_config, rng=random.Random(seeder.getrandbits(64)))
        self.planner = Planner(config=planner_config, rng=random.Random(seeder.getrandbits(64)))

        actions.refresh_stats(self.state)

    # Scheduler callbacks

    def advance_tick(self) -> TickReport | None:
        """Simulate one month unless paused."""
        if self.state.paused:
            return None
        return advance_month(self.state, self.fire)

    def advance_planner(self) -> PlannerTurn | None:
        """One planner cadence step. Runs while paused; no-op with autonomy off."""
        return self.planner.advance_cycle(self.state)

    # Player intents

    def place(self, building_type: BuildingType, x: int, z: int) -> ActionResult:
        return actions.place_building(self.state, building_type, x, z)

    def demolish(self, x: int, z: int) -> ActionResult:
        return actions.demolish_building(self.state, x, z)

    def upgrade(self, building_id: str) -> ActionResult:
        return actions.upgrade_building(self.state, building_id)

    def select(self, building_id: str | None) -> ActionResult:
        return actions.select_building(self.state, building_id)

    def set_paused(self, paused: bool) -> None:
        actions.set_paused(self.state, paused)

    def set_autonomy(self, enabled: bool) -> None:
        actions.set_autonomy(self.state, enabled)

    # Persistence

    def save(self) -> None:
        save_game(self.state, self.store, self.save_key)
        self.state.events.emit(GameEvent(
            kind=EventKind.SYSTEM,
            message="Game saved.",
            month=self.state.stats.month,
        ))

    def load(self) -> None:
        """Replace the state with the saved one, or a new city if none loads.

        Pending events and the paused flag carry over.
        """
        previous = self.state
        state = load_game(self.store, self.save_key, grid_size=previous.grid_size)
        state.events = previous.events
        state.paused = previous.paused
        self.state = state
        state.events.emit(GameEvent(
            kind=EventKind.SYSTEM,
            message=f"Game loaded at month {state.stats.month}.",
            month=state.stats.month,
        ))

    def drain_events(self) -> list[GameEvent]:
        return self.state.events.drain()
