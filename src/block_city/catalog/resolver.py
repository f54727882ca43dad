"""Resolve a building's effective attributes at its current level."""

import dataclasses

from block_city.catalog.buildings import get_properties
from block_city.catalog.types import BuildingProperties, UpgradeTier
from block_city.constants import BASE_BUILDING_LEVEL
from block_city.models import Building


def effective_properties(building: Building) -> BuildingProperties:
    """Fold the upgrade tiers up to the building's level over its base attributes.

    Tier values replace earlier values; attributes a tier does not mention
    carry over unchanged.
    """
    props = get_properties(building.type)
    tiers = props.upgrades[: max(0, building.level - BASE_BUILDING_LEVEL)]
    for tier in tiers:
        props = dataclasses.replace(props, **tier.effects)
    return props


def next_upgrade(building: Building) -> UpgradeTier | None:
    """Return the tier the building would move to next, if any."""
    upgrades = get_properties(building.type).upgrades
    index = building.level - BASE_BUILDING_LEVEL
    if 0 <= index < len(upgrades):
        return upgrades[index]
    return None
