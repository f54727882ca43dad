"""Prioritized proposal functions for the planner.

Each function takes the planning context and the current draft and returns
either an extended draft or the same draft when it has nothing to add. They
run in priority order: bootstrap, focus development, road connections,
reactive needs, upgrades.
"""

import dataclasses

from block_city.catalog.buildings import get_properties
from block_city.catalog.resolver import next_upgrade
from block_city.constants import (
    AI_JOBS_PRESSURE,
    AI_PARK_HAPPINESS_THRESHOLD,
    AI_POWER_HEADROOM,
    AI_POWER_UPGRADE_HEADROOM,
    AI_RESIDENTIAL_MIN_HAPPINESS,
    AI_RESIDENTIAL_PRESSURE,
    AI_RESIDENTIAL_UPGRADE_PRESSURE,
    AI_WATER_HEADROOM,
)
from block_city.grid import Cell, can_place_road, in_bounds, neighbors
from block_city.models import ActionKind, Building, BuildingType, UpgradeReason
from block_city.planner.types import PlanningContext, PlanningDraft, ProposedAction


def try_build(
    draft: PlanningDraft,
    ctx: PlanningContext,
    building_type: BuildingType,
    x: int,
    z: int,
    reasoning: str,
) -> PlanningDraft:
    """Add a build if the draft can afford it and the cell is free and legal."""
    if draft.is_full:
        return draft
    props = get_properties(building_type)
    if not in_bounds(x, z, ctx.grid_size) or (x, z) in draft.occupied:
        return draft
    if draft.funds < props.cost:
        return draft
    if building_type == BuildingType.ROAD and not can_place_road(x, z, draft.roads):
        return draft

    action = ProposedAction(
        kind=ActionKind.BUILD,
        cost=props.cost,
        reasoning=reasoning,
        building_type=building_type,
        x=x,
        z=z,
    )
    initial_power_plant = draft.initial_power_plant
    if (
        building_type == BuildingType.POWER_PLANT
        and ctx.focus_point is None
        and initial_power_plant is None
    ):
        initial_power_plant = (x, z)

    return dataclasses.replace(
        draft,
        funds=draft.funds - props.cost,
        actions=draft.actions + (action,),
        occupied=draft.occupied | {(x, z)},
        roads=draft.roads | {(x, z)} if building_type == BuildingType.ROAD else draft.roads,
        initial_power_plant=initial_power_plant,
    )


def try_upgrade(
    draft: PlanningDraft,
    building: Building,
    reason: UpgradeReason,
    reasoning: str,
) -> PlanningDraft:
    """Add an upgrade if a tier is available, affordable and the building is intact."""
    if draft.is_full or building.is_on_fire:
        return draft
    tier = next_upgrade(building)
    if tier is None or draft.funds < tier.cost:
        return draft

    action = ProposedAction(
        kind=ActionKind.UPGRADE,
        cost=tier.cost,
        reasoning=reasoning,
        building_type=building.type,
        building_id=building.id,
        upgrade_reason=reason,
    )
    return dataclasses.replace(
        draft,
        funds=draft.funds - tier.cost,
        actions=draft.actions + (action,),
    )


def _first_road_cell(ctx: PlanningContext, draft: PlanningDraft, x: int, z: int) -> Cell | None:
    for cell in neighbors(x, z, ctx.grid_size):
        if cell not in draft.occupied and can_place_road(cell[0], cell[1], draft.roads):
            return cell
    return None


def propose_bootstrap(ctx: PlanningContext, draft: PlanningDraft) -> PlanningDraft:
    """Without a working power plant: power plant near the center, water, a road."""
    if draft.is_full or ctx.has_power_plant or not ctx.candidates:
        return draft

    mid = ctx.grid_size // 2
    span = ctx.bootstrap_span
    target = next(
        (
            (x, z) for x, z in ctx.candidates
            if mid - span < x < mid + span and mid - span < z < mid + span
        ),
        ctx.candidates[0],
    )

    with_power = try_build(draft, ctx, BuildingType.POWER_PLANT, *target, "initial power supply")
    if with_power is draft or len(ctx.candidates) < 2:
        return with_power

    water_cell = ctx.candidates[1]
    with_water = try_build(with_power, ctx, BuildingType.WATER_TOWER, *water_cell, "initial water supply")
    if with_water is with_power:
        return with_power

    road_cell = _first_road_cell(ctx, with_water, *target)
    if road_cell is None:
        return with_water
    return try_build(with_water, ctx, BuildingType.ROAD, *road_cell, "connect the power plant by road")


def propose_focus_development(ctx: PlanningContext, draft: PlanningDraft) -> PlanningDraft:
    """Extend roads toward the focus point, or add housing next to it."""
    focus = ctx.focus_point
    if draft.is_full or focus is None or not ctx.has_power_plant:
        return draft

    cells = ctx.focus_candidates
    if not cells:
        return draft

    with_road = try_build(
        draft, ctx, BuildingType.ROAD, *cells[0],
        f"extend roads around focus ({focus.x},{focus.z})",
    )
    if with_road is not draft or len(cells) < 2:
        return with_road
    return try_build(draft, ctx, BuildingType.RESIDENTIAL, *cells[1], "develop housing near focus")


def is_road_connected(building: Building, roads: frozenset[tuple[int, int]]) -> bool:
    """True if a road sits on an axis-aligned neighbor cell."""
    x, z = building.grid_x, building.grid_z
    return any(
        (abs(rx - x) <= 1 and rz == z) or (abs(rz - z) <= 1 and rx == x)
        for rx, rz in roads
    )


def propose_road_connections(ctx: PlanningContext, draft: PlanningDraft) -> PlanningDraft:
    """Connect the first isolated building that can be reached with one road."""
    if draft.is_full:
        return draft

    roads = ctx.real_roads
    for building in ctx.buildings:
        if building.type == BuildingType.ROAD or building.is_burning:
            continue
        if is_road_connected(building, roads):
            continue

        cell = _first_road_cell(ctx, draft, building.grid_x, building.grid_z)
        if cell is None:
            continue
        name = get_properties(building.type).name
        connected = try_build(draft, ctx, BuildingType.ROAD, *cell, f"connect {name} by road")
        if connected is not draft:
            return connected
    return draft


def propose_reactive_needs(ctx: PlanningContext, draft: PlanningDraft) -> PlanningDraft:
    """Address the most pressing shortfall; only the first triggered need is tried."""
    if draft.is_full or not ctx.candidates:
        return draft

    metrics = ctx.metrics
    stats = ctx.stats
    first = ctx.candidates[0]

    if metrics.power_capacity < metrics.power_demand * AI_POWER_HEADROOM:
        return try_build(draft, ctx, BuildingType.POWER_PLANT, *first, "power shortfall")
    if metrics.water_capacity < metrics.water_demand * AI_WATER_HEADROOM:
        if len(ctx.candidates) < 2:
            return draft
        return try_build(draft, ctx, BuildingType.WATER_TOWER, *ctx.candidates[1], "water shortfall")
    if (
        stats.population >= metrics.total_residential_capacity * AI_RESIDENTIAL_PRESSURE
        and stats.happiness > AI_RESIDENTIAL_MIN_HAPPINESS
    ):
        return try_build(draft, ctx, BuildingType.RESIDENTIAL, *first, "housing near capacity")
    if stats.population > metrics.total_jobs_provided * AI_JOBS_PRESSURE:
        return try_build(draft, ctx, BuildingType.COMMERCIAL, *first, "job shortage")
    if stats.happiness < AI_PARK_HAPPINESS_THRESHOLD:
        return try_build(draft, ctx, BuildingType.PARK, *first, "raise happiness")
    return draft


def propose_upgrade(ctx: PlanningContext, draft: PlanningDraft) -> PlanningDraft:
    """Upgrade the lowest-level building that still has a tier left."""
    if draft.is_full:
        return draft

    upgradable = sorted(
        (b for b in ctx.buildings if not b.is_on_fire and next_upgrade(b) is not None),
        key=lambda b: b.level,
    )
    if not upgradable:
        return draft

    building = upgradable[0]
    metrics = ctx.metrics
    reason = UpgradeReason.GENERIC
    reasoning = "improve performance"
    if (
        building.type == BuildingType.POWER_PLANT
        and metrics.power_capacity < metrics.power_demand * AI_POWER_UPGRADE_HEADROOM
    ):
        reason = UpgradeReason.POWER_CAPACITY
        reasoning = "increase power output"
    elif (
        building.type == BuildingType.RESIDENTIAL
        and ctx.stats.population >= metrics.total_residential_capacity * AI_RESIDENTIAL_UPGRADE_PRESSURE
    ):
        reason = UpgradeReason.RESIDENTIAL
        reasoning = "add housing space"
    return try_upgrade(draft, building, reason, reasoning)


PROPOSALS = (
    propose_bootstrap,
    propose_focus_development,
    propose_road_connections,
    propose_reactive_needs,
    propose_upgrade,
)
