"""Player-facing actions on the simulation state.

Placement, demolition, upgrades and selection all go through here, whether
issued by the player or committed by the planner. Rule violations are
returned as failed ActionResults and never mutate state.
"""

import logging
import math

from block_city.catalog.buildings import get_properties
from block_city.catalog.resolver import effective_properties, next_upgrade
from block_city.constants import (
    DEMOLITION_DAMAGE_THRESHOLD,
    DEMOLITION_REFUND_RATIO,
    MAX_FIRE_HEALTH,
)
from block_city.events import EventKind, GameEvent
from block_city.grid import can_place_road, in_bounds, road_cells
from block_city.metrics.engine import apply_metrics, derive_metrics
from block_city.metrics.types import CityMetrics
from block_city.models import (
    Actor,
    Building,
    BuildingType,
    FailureReason,
    FocusPoint,
    FocusSource,
)
from block_city.simulation.types import ActionResult, SimulationState

logger = logging.getLogger(__name__)


def refresh_stats(state: SimulationState) -> CityMetrics:
    """Recompute derived statistics after the building collection changed."""
    metrics = derive_metrics(state.buildings, state.stats)
    state.stats = apply_metrics(state.stats, metrics)
    # Residents never outnumber the homes left standing
    state.stats.population = max(0, min(state.stats.population, metrics.total_residential_capacity))
    return metrics


def _reject(
    state: SimulationState,
    reason: FailureReason,
    message: str,
    actor: Actor,
    x: int | None = None,
    z: int | None = None,
) -> ActionResult:
    logger.debug("Rejected %s action: %s (%s)", actor, reason, message)
    if actor == Actor.PLAYER:
        kind = (
            EventKind.INSUFFICIENT_FUNDS
            if reason == FailureReason.INSUFFICIENT_FUNDS
            else EventKind.REJECTED
        )
        state.events.emit(GameEvent(kind=kind, message=message, month=state.stats.month, x=x, z=z))
    return ActionResult.failure(reason, message)


def place_building(
    state: SimulationState,
    building_type: BuildingType,
    x: int,
    z: int,
    actor: Actor = Actor.PLAYER,
) -> ActionResult:
    """Place a new building on an empty cell, paying its cost."""
    try:
        building_type = BuildingType(building_type)
    except ValueError:
        return _reject(
            state, FailureReason.TARGET_NOT_FOUND,
            f"Unknown building type: {building_type}.", actor, x, z,
        )
    props = get_properties(building_type)

    if not in_bounds(x, z, state.grid_size):
        return _reject(
            state, FailureReason.INVALID_COORDINATE,
            f"({x},{z}) is outside the map.", actor, x, z,
        )
    if state.building_at(x, z) is not None:
        return _reject(
            state, FailureReason.CELL_OCCUPIED,
            "This cell is already in use.", actor, x, z,
        )
    if building_type == BuildingType.ROAD and not can_place_road(x, z, road_cells(state.buildings)):
        return _reject(
            state, FailureReason.ROAD_BLOCK_RULE_VIOLATION,
            "Roads must stay single-lane (no solid 2x2 road blocks).", actor, x, z,
        )
    if state.stats.funds < props.cost:
        return _reject(
            state, FailureReason.INSUFFICIENT_FUNDS,
            f"Not enough funds for {props.name} (${props.cost}).", actor, x, z,
        )

    building = Building(type=building_type, grid_x=x, grid_z=z)
    state.buildings.append(building)
    state.stats.funds -= props.cost
    logger.info("%s built %s at (%d,%d) for $%d", actor, props.name, x, z, props.cost)
    state.events.emit(GameEvent(
        kind=EventKind.CONSTRUCTION,
        message=f"{props.name} built. Cost: ${props.cost}",
        month=state.stats.month,
        x=x,
        z=z,
    ))

    if (
        actor == Actor.PLAYER
        and building_type == BuildingType.POWER_PLANT
        and state.autonomy_enabled
    ):
        state.focus_point = FocusPoint(x=x, z=z, source=FocusSource.PLAYER)
        state.planner_cooldown = 1
        state.events.emit(GameEvent(
            kind=EventKind.PLANNER,
            message=f"Planner: focusing development around the new power plant at ({x},{z}).",
            month=state.stats.month,
            x=x,
            z=z,
        ))

    refresh_stats(state)
    return ActionResult(ok=True, building=building, cost=props.cost)


def demolition_refund(building: Building) -> int:
    """Refund for tearing a building down; nothing for badly burnt ones."""
    if building.is_on_fire and building.fire_health < MAX_FIRE_HEALTH * DEMOLITION_DAMAGE_THRESHOLD:
        return 0
    return math.floor(get_properties(building.type).cost * DEMOLITION_REFUND_RATIO)


def demolish_building(state: SimulationState, x: int, z: int) -> ActionResult:
    """Remove the building at (x, z), destroyed rubble included."""
    building = state.building_at(x, z)
    if building is None:
        return _reject(
            state, FailureReason.TARGET_NOT_FOUND,
            "There is nothing to demolish here.", Actor.PLAYER, x, z,
        )

    props = get_properties(building.type)
    refund = demolition_refund(building)
    state.buildings = [b for b in state.buildings if b.id != building.id]
    state.stats.funds += refund
    logger.info("Demolished %s at (%d,%d), refund $%d", props.name, x, z, refund)
    state.events.emit(GameEvent(
        kind=EventKind.DEMOLITION,
        message=f"{props.name} demolished. " + (f"Refund: ${refund}" if refund > 0 else "No refund."),
        month=state.stats.month,
        x=x,
        z=z,
    ))

    if state.selected_building_id == building.id:
        state.selected_building_id = None

    focus = state.focus_point
    if (
        focus is not None
        and building.type == BuildingType.POWER_PLANT
        and (focus.x, focus.z) == (x, z)
    ):
        state.focus_point = None
        state.events.emit(GameEvent(
            kind=EventKind.PLANNER,
            message="Planner: the focus power plant was demolished; returning to general planning.",
            month=state.stats.month,
        ))

    refresh_stats(state)
    return ActionResult(ok=True, building=building, refund=refund)


def upgrade_building(
    state: SimulationState,
    building_id: str,
    actor: Actor = Actor.PLAYER,
) -> ActionResult:
    """Move a building to its next upgrade tier, paying the tier cost."""
    building = state.find_building(building_id)
    if building is None:
        return _reject(
            state, FailureReason.TARGET_NOT_FOUND,
            "Could not find the building to upgrade.", actor,
        )
    if building.is_burning:
        return _reject(
            state, FailureReason.TARGET_ON_FIRE,
            "Burning buildings cannot be upgraded.", actor, building.grid_x, building.grid_z,
        )
    if building.is_destroyed:
        return _reject(
            state, FailureReason.TARGET_DESTROYED,
            "Destroyed buildings cannot be upgraded.", actor, building.grid_x, building.grid_z,
        )

    tier = next_upgrade(building)
    if tier is None:
        return _reject(
            state, FailureReason.NO_UPGRADE_AVAILABLE,
            "No further upgrades are available.", actor, building.grid_x, building.grid_z,
        )
    if state.stats.funds < tier.cost:
        return _reject(
            state, FailureReason.INSUFFICIENT_FUNDS,
            f"Not enough funds for {tier.name} (${tier.cost}).", actor,
            building.grid_x, building.grid_z,
        )

    building.level += 1
    state.stats.funds -= tier.cost
    props = get_properties(building.type)
    logger.info("%s upgraded %s %s to level %d", actor, props.name, building.id, building.level)
    state.events.emit(GameEvent(
        kind=EventKind.UPGRADE,
        message=f"{props.name} upgraded to {tier.name}. Cost: ${tier.cost}",
        month=state.stats.month,
        x=building.grid_x,
        z=building.grid_z,
    ))

    refresh_stats(state)
    return ActionResult(
        ok=True,
        building=building,
        cost=tier.cost,
        properties=effective_properties(building),
    )


def select_building(state: SimulationState, building_id: str | None) -> ActionResult:
    """Select a building for inspection, or clear the selection with None."""
    if building_id is None:
        state.selected_building_id = None
        return ActionResult(ok=True)

    building = state.find_building(building_id)
    if building is None:
        state.selected_building_id = None
        return _reject(
            state, FailureReason.TARGET_NOT_FOUND,
            "Could not find that building.", Actor.PLAYER,
        )
    if building.is_destroyed:
        state.selected_building_id = None
        return _reject(
            state, FailureReason.TARGET_DESTROYED,
            "Destroyed buildings cannot be selected.", Actor.PLAYER,
            building.grid_x, building.grid_z,
        )

    state.selected_building_id = building.id
    return ActionResult(ok=True, building=building, properties=effective_properties(building))


def set_autonomy(state: SimulationState, enabled: bool) -> None:
    """Turn the planner on or off.

    Enabling schedules a turn on the next planner cycle; disabling drops the
    busy flag and the focus point.
    """
    state.autonomy_enabled = enabled
    if enabled:
        state.planner_cooldown = 1
        message = "Autonomous planning enabled."
    else:
        state.planner_busy = False
        state.focus_point = None
        message = "Autonomous planning disabled."
    logger.info(message)
    state.events.emit(GameEvent(kind=EventKind.SYSTEM, message=message, month=state.stats.month))


def set_paused(state: SimulationState, paused: bool) -> None:
    state.paused = paused
    message = "Simulation paused." if paused else "Simulation resumed."
    logger.info(message)
    state.events.emit(GameEvent(kind=EventKind.SYSTEM, message=message, month=state.stats.month))
