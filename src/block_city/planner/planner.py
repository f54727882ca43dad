"""Autonomous city planner.

Reads the current state, drafts a bounded batch of builds and upgrades with
the prioritized heuristics, then commits the batch through the same action
paths the player uses.
"""

import logging
import random

from block_city.catalog.buildings import get_properties
from block_city.events import EventKind, GameEvent
from block_city.grid import empty_cells, road_cells
from block_city.metrics.engine import derive_metrics
from block_city.models import ActionKind, Actor, FocusPoint, FocusSource
from block_city.planner.heuristics import PROPOSALS
from block_city.planner.types import (
    PlannerConfig,
    PlannerTurn,
    PlanningContext,
    PlanningDraft,
    ProposedAction,
)
from block_city.simulation.actions import place_building, upgrade_building
from block_city.simulation.types import ActionResult, SimulationState

logger = logging.getLogger(__name__)


def describe(action: ProposedAction) -> str:
    name = get_properties(action.building_type).name if action.building_type else "building"
    verb = "build" if action.kind == ActionKind.BUILD else "upgrade"
    return f"{verb} {name} ({action.reasoning})"


class Planner:
    """Rule-based planner with its own cooldown and single-flight guard."""

    def __init__(
        self,
        config: PlannerConfig | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or PlannerConfig()
        self.rng = rng if rng is not None else random.Random(seed)

    def advance_cycle(self, state: SimulationState) -> PlannerTurn | None:
        """One planner cadence step: count the cooldown down or take a turn."""
        if not state.autonomy_enabled or state.planner_busy:
            return None
        if state.planner_cooldown > 0:
            state.planner_cooldown -= 1
            return None
        return self.run_turn(state)

    def run_turn(self, state: SimulationState) -> PlannerTurn | None:
        """Plan and commit one batch. Returns None if a turn is already running."""
        if state.planner_busy:
            logger.debug("Planner turn rejected: previous turn still running")
            return None

        state.planner_busy = True
        try:
            if state.stats.funds < self.config.min_funds_to_act:
                draft = self._empty_draft(state)
                self._emit(
                    state,
                    f"Planner: holding off, funds are below ${self.config.min_funds_to_act} "
                    f"(currently ${state.stats.funds}).",
                )
                return PlannerTurn(draft=draft)

            draft = self.plan(state)
            if draft.actions:
                self._emit(state, "Planner: " + ", ".join(describe(a) for a in draft.actions))
            else:
                self._emit(state, "Planner: no action needed right now.")

            results = self.commit(state, draft)
            turn = PlannerTurn(draft=draft, results=results)
            logger.info(
                "Planner turn: %d proposed, %d committed, funds now %d",
                len(draft.actions),
                turn.committed,
                state.stats.funds,
            )
            return turn
        finally:
            state.planner_busy = False
            state.planner_cooldown = self.config.cooldown_months

    def plan(self, state: SimulationState) -> PlanningDraft:
        """Draft proposals without touching the state."""
        metrics = derive_metrics(state.buildings, state.stats)
        occupied = state.occupied_cells()
        focus = state.focus_point
        focus_cell = (focus.x, focus.z) if focus is not None else None

        candidates = empty_cells(
            occupied,
            state.grid_size,
            focus=focus_cell,
            limit=self.config.max_empty_cells,
            rng=self.rng,
        )
        focus_candidates = (
            empty_cells(occupied, state.grid_size, focus=focus_cell, limit=self.config.focus_cells)
            if focus_cell is not None
            else []
        )

        ctx = PlanningContext(
            buildings=tuple(state.buildings),
            stats=state.stats,
            metrics=metrics,
            grid_size=state.grid_size,
            focus_point=focus,
            candidates=tuple(candidates),
            focus_candidates=tuple(focus_candidates),
            bootstrap_span=self.config.bootstrap_span,
        )

        draft = PlanningDraft.start(
            funds=state.stats.funds,
            occupied=occupied,
            roads=road_cells(state.buildings),
            max_actions=self.config.max_actions_per_turn,
        )
        for propose in PROPOSALS:
            draft = propose(ctx, draft)
        return draft

    def commit(self, state: SimulationState, draft: PlanningDraft) -> list[ActionResult]:
        """Apply drafted actions to live state, skipping any that no longer fit."""
        results: list[ActionResult] = []
        for action in draft.actions[: self.config.max_actions_per_turn]:
            if action.kind == ActionKind.BUILD:
                result = place_building(
                    state, action.building_type, action.x, action.z, actor=Actor.PLANNER,
                )
                if result.ok and action.cell == draft.initial_power_plant:
                    self._set_strategic_focus(state, action.x, action.z)
            else:
                result = upgrade_building(state, action.building_id, actor=Actor.PLANNER)

            if not result.ok:
                logger.debug("Skipped planner action %s: %s", action.to_dict(), result.reason)
            results.append(result)
        return results

    def _set_strategic_focus(self, state: SimulationState, x: int, z: int) -> None:
        state.focus_point = FocusPoint(x=x, z=z, source=FocusSource.PLANNER)
        self._emit(
            state,
            f"Planner: initial power plant built at ({x},{z}); "
            "using it as the strategic development hub.",
            x=x,
            z=z,
        )

    def _empty_draft(self, state: SimulationState) -> PlanningDraft:
        return PlanningDraft.start(
            funds=state.stats.funds,
            occupied=state.occupied_cells(),
            roads=road_cells(state.buildings),
            max_actions=self.config.max_actions_per_turn,
        )

    def _emit(self, state: SimulationState, message: str, x: int | None = None, z: int | None = None) -> None:
        state.events.emit(GameEvent(
            kind=EventKind.PLANNER,
            message=message,
            month=state.stats.month,
            x=x,
            z=z,
        ))
