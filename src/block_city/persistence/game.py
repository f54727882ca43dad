"""Save and load the full simulation state."""

import logging

from pydantic import ValidationError

from block_city.catalog.buildings import get_properties
from block_city.constants import GRID_SIZE
from block_city.models import Building, CityStats, FocusPoint, FocusSource
from block_city.persistence.schemas import (
    BuildingSnapshot,
    CameraState,
    CityStatsSnapshot,
    FocusPointSnapshot,
    SavedGameState,
)
from block_city.persistence.store import KeyValueStore
from block_city.simulation.actions import refresh_stats
from block_city.simulation.types import SimulationState, StatsHistory

logger = logging.getLogger(__name__)


def _stats_snapshot(stats: CityStats) -> CityStatsSnapshot:
    return CityStatsSnapshot(
        population=stats.population,
        funds=stats.funds,
        power_capacity=stats.power_capacity,
        power_demand=stats.power_demand,
        water_capacity=stats.water_capacity,
        water_demand=stats.water_demand,
        happiness=stats.happiness,
        month=stats.month,
        health_level=stats.health_level,
        safety_level=stats.safety_level,
        education_level=stats.education_level,
        pollution_level=stats.pollution_level,
        appeal=stats.appeal,
        tourists=stats.tourists,
    )


def _stats_from_snapshot(snapshot: CityStatsSnapshot) -> CityStats:
    return CityStats(**snapshot.model_dump())


def snapshot_state(state: SimulationState) -> SavedGameState:
    """Capture the persistent parts of the state."""
    focus = state.focus_point
    return SavedGameState(
        buildings=[
            BuildingSnapshot(
                id=b.id,
                type=b.type,
                grid_x=b.grid_x,
                grid_z=b.grid_z,
                level=b.level,
                is_on_fire=b.is_on_fire,
                fire_health=b.fire_health,
            )
            for b in state.buildings
        ],
        city_stats=_stats_snapshot(state.stats),
        selected_building_id=state.selected_building_id,
        camera_state=CameraState.model_validate(state.camera_state) if state.camera_state else None,
        is_delegation_mode_active=state.autonomy_enabled,
        ai_planner_cooldown=state.planner_cooldown,
        ai_focus_point=FocusPointSnapshot(x=focus.x, z=focus.z) if focus else None,
        ai_focus_point_source=focus.source if focus else None,
        city_stats_history=[_stats_snapshot(s) for s in state.history],
    )


def restore_state(saved: SavedGameState, grid_size: int = GRID_SIZE) -> SimulationState:
    """Rebuild a state from a snapshot and recompute its derived statistics.

    Buildings outside the grid or on an already-occupied cell are dropped,
    levels are capped at the last tier and population at the housing left.
    """
    buildings: list[Building] = []
    seen: set[tuple[int, int]] = set()
    for snap in saved.buildings:
        cell = (snap.grid_x, snap.grid_z)
        in_grid = 0 <= snap.grid_x < grid_size and 0 <= snap.grid_z < grid_size
        if not in_grid or cell in seen:
            logger.warning("Dropping saved building %s at %s", snap.id, cell)
            continue
        seen.add(cell)
        buildings.append(Building(
            id=snap.id,
            type=snap.type,
            grid_x=snap.grid_x,
            grid_z=snap.grid_z,
            level=min(snap.level, get_properties(snap.type).max_level),
            is_on_fire=snap.is_on_fire,
            fire_health=snap.fire_health,
        ))

    focus = None
    if saved.ai_focus_point is not None:
        focus = FocusPoint(
            x=saved.ai_focus_point.x,
            z=saved.ai_focus_point.z,
            source=saved.ai_focus_point_source or FocusSource.PLAYER,
        )

    state = SimulationState(
        buildings=buildings,
        stats=_stats_from_snapshot(saved.city_stats),
        history=StatsHistory(_stats_from_snapshot(s) for s in saved.city_stats_history),
        camera_state=saved.camera_state.model_dump() if saved.camera_state else None,
        autonomy_enabled=saved.is_delegation_mode_active,
        planner_cooldown=saved.ai_planner_cooldown,
        focus_point=focus,
        grid_size=grid_size,
    )

    selected = state.find_building(saved.selected_building_id) if saved.selected_building_id else None
    state.selected_building_id = selected.id if selected is not None else None

    refresh_stats(state)
    return state


def save_game(state: SimulationState, store: KeyValueStore, key: str) -> str:
    """Serialize the state into the store under key. Returns the payload."""
    payload = snapshot_state(state).model_dump_json(by_alias=True)
    store.set(key, payload)
    logger.info("Saved game at month %d (%d buildings)", state.stats.month, len(state.buildings))
    return payload


def load_game(store: KeyValueStore, key: str, grid_size: int = GRID_SIZE) -> SimulationState:
    """Load the state saved under key.

    An absent, unreadable or malformed save yields a fresh default state.
    """
    try:
        raw = store.get(key)
    except (OSError, ValueError) as e:
        logger.warning("Could not read saved game %r: %s", key, e)
        raw = None

    if raw is None:
        logger.info("No saved game under %r, starting a new city", key)
        state = SimulationState(grid_size=grid_size)
        refresh_stats(state)
        return state

    try:
        saved = SavedGameState.model_validate_json(raw)
    except ValidationError as e:
        logger.warning("Saved game %r is malformed, starting a new city: %s", key, e)
        state = SimulationState(grid_size=grid_size)
        refresh_stats(state)
        return state

    state = restore_state(saved, grid_size=grid_size)
    logger.info("Loaded game at month %d (%d buildings)", state.stats.month, len(state.buildings))
    return state
