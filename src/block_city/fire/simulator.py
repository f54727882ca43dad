"""Fire simulation engine.

Advances fires by one month:
1. Burning buildings take damage; one covering fire station with spare
   capacity fights each fire
2. Fires that have burnt for a while may spread to one flammable neighbor
3. Flammable buildings may catch fire, at half the odds when covered
"""

import dataclasses
import logging
import math
import random

from block_city.catalog.buildings import get_properties
from block_city.catalog.resolver import effective_properties
from block_city.catalog.types import BuildingProperties
from block_city.events import EventKind, GameEvent
from block_city.fire.types import FireConfig, FireTickResult
from block_city.models import Building, BuildingType

logger = logging.getLogger(__name__)

# Neighbor order used when a fire spreads
SPREAD_DIRECTIONS: tuple[tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


class _Station:
    """A fire station with its resolved attributes and assignment count."""

    def __init__(self, building: Building, props: BuildingProperties) -> None:
        self.building = building
        self.power = props.fire_fighting_power
        self.radius = props.fire_coverage_radius
        self.capacity = props.max_active_fires_handled or 1
        self.assigned = 0

    @property
    def has_capacity(self) -> bool:
        return self.assigned < self.capacity

    def covers(self, building: Building) -> bool:
        distance = math.hypot(
            building.grid_x - self.building.grid_x,
            building.grid_z - self.building.grid_z,
        )
        return distance <= self.radius


class FireSimulator:
    """Runs the per-month fire process on a copy of the building list."""

    def __init__(
        self,
        config: FireConfig | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or FireConfig()
        self.rng = rng if rng is not None else random.Random(seed)

    def step(self, buildings: list[Building], month: int | None = None) -> FireTickResult:
        """Advance all fires by one month and return the updated buildings.

        The input list and its buildings are left untouched.
        """
        updated = [dataclasses.replace(b) for b in buildings]
        result = FireTickResult(buildings=updated)

        stations = [
            _Station(b, effective_properties(b))
            for b in updated
            if b.type == BuildingType.FIRE_STATION and not b.is_on_fire
        ]

        self._burn(updated, stations, result, month)
        self._spread(updated, result, month)
        self._ignite(updated, stations, result, month)

        if result.events:
            logger.info(
                "Fire step: %d ignited, %d destroyed",
                len(result.ignited_ids),
                len(result.destroyed_ids),
            )
        return result

    def _burn(
        self,
        buildings: list[Building],
        stations: list[_Station],
        result: FireTickResult,
        month: int | None,
    ) -> None:
        """Apply fire damage, then suppression from the first available station."""
        for building in buildings:
            if not building.is_burning:
                continue

            fire_health = building.fire_health - self.config.damage_rate
            for station in stations:
                if station.has_capacity and station.covers(building):
                    fire_health += station.power
                    station.assigned += 1
                    result.suppressed_ids.append(building.id)
                    break

            fire_health = min(self.config.max_fire_health, fire_health)
            if fire_health <= 0:
                building.fire_health = 0
                result.destroyed_ids.append(building.id)
                result.events.append(GameEvent(
                    kind=EventKind.DESTRUCTION,
                    message=(
                        f"{get_properties(building.type).name} at "
                        f"({building.grid_x},{building.grid_z}) was destroyed by fire!"
                    ),
                    month=month,
                    x=building.grid_x,
                    z=building.grid_z,
                ))
            else:
                building.fire_health = fire_health

    def _spread(
        self,
        buildings: list[Building],
        result: FireTickResult,
        month: int | None,
    ) -> None:
        """Let established fires jump to at most one 4-connected neighbor each."""
        by_cell = {b.cell: b for b in buildings}
        spread_below = self.config.max_fire_health * self.config.spread_health_threshold
        sources = [b for b in buildings if b.is_burning and b.fire_health < spread_below]

        for source in sources:
            if self.rng.random() >= self.config.spread_chance:
                continue
            for dx, dz in SPREAD_DIRECTIONS:
                target = by_cell.get((source.grid_x + dx, source.grid_z + dz))
                if target is None or target.is_on_fire:
                    continue
                props = get_properties(target.type)
                if not props.is_flammable:
                    continue

                self._set_alight(target)
                result.ignited_ids.append(target.id)
                result.events.append(GameEvent(
                    kind=EventKind.FIRE_SPREAD,
                    message=(
                        f"Fire! The blaze spread to {props.name} at "
                        f"({target.grid_x},{target.grid_z})!"
                    ),
                    month=month,
                    x=target.grid_x,
                    z=target.grid_z,
                ))
                break

    def _ignite(
        self,
        buildings: list[Building],
        stations: list[_Station],
        result: FireTickResult,
        month: int | None,
    ) -> None:
        """Roll a new outbreak for every flammable building not already on fire."""
        for building in buildings:
            if building.is_on_fire:
                continue
            props = get_properties(building.type)
            if not props.is_flammable:
                continue

            covered = any(s.has_capacity and s.covers(building) for s in stations)
            chance = self.config.start_chance / 2 if covered else self.config.start_chance
            if self.rng.random() >= chance:
                continue

            self._set_alight(building)
            result.ignited_ids.append(building.id)
            suffix = " (within fire station coverage)" if covered else ""
            result.events.append(GameEvent(
                kind=EventKind.FIRE_OUTBREAK,
                message=(
                    f"Fire! {props.name} at ({building.grid_x},{building.grid_z}) "
                    f"caught fire!{suffix}"
                ),
                month=month,
                x=building.grid_x,
                z=building.grid_z,
            ))

    def _set_alight(self, building: Building) -> None:
        building.is_on_fire = True
        building.fire_health = self.config.ignition_health
