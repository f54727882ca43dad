"""Building catalog and effective-attribute resolution."""

from block_city.catalog.buildings import BUILDING_CATALOG, get_properties
from block_city.catalog.resolver import effective_properties, next_upgrade
from block_city.catalog.types import BuildingProperties, UpgradeTier

__all__ = [
    "BUILDING_CATALOG",
    "BuildingProperties",
    "UpgradeTier",
    "effective_properties",
    "get_properties",
    "next_upgrade",
]
