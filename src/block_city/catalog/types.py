"""Type definitions for the building catalog."""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from types import MappingProxyType

# Attributes an upgrade tier is not allowed to patch
FIXED_ATTRIBUTES = frozenset({"name", "icon", "color", "upgrades", "is_flammable"})


@dataclass(frozen=True)
class UpgradeTier:
    """One upgrade stage: a cost plus absolute attribute overrides."""

    name: str
    cost: int
    effects: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        allowed = {f.name for f in fields(BuildingProperties)} - FIXED_ATTRIBUTES
        unknown = set(self.effects) - allowed
        if unknown:
            raise ValueError(
                f"Upgrade tier {self.name!r} patches unsupported attributes: {sorted(unknown)}"
            )
        object.__setattr__(self, "effects", MappingProxyType(dict(self.effects)))


@dataclass(frozen=True)
class BuildingProperties:
    """Attributes of a building type (or a resolved building at some level)."""

    name: str
    cost: int
    maintenance_cost: float
    color: int
    height: float
    icon: str
    is_flammable: bool

    residential_capacity: int = 0
    jobs_provided: int = 0
    power_demand: int = 0
    power_capacity: int = 0
    water_demand: int = 0
    water_capacity: int = 0
    happiness_effect: float = 0

    fire_fighting_power: int = 0
    fire_coverage_radius: float = 0
    max_active_fires_handled: int = 0

    patient_capacity: int = 0
    health_point_contribution: int = 0
    health_service_radius: float = 0

    student_capacity: int = 0
    education_point_contribution: int = 0
    education_coverage_radius: float = 0

    pollution_output: int = 0
    pollution_reduction: int = 0
    appeal_points: int = 0

    upgrades: tuple[UpgradeTier, ...] = ()

    @property
    def max_level(self) -> int:
        """Highest level reachable through upgrades."""
        return 1 + len(self.upgrades)

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dict (without upgrade tiers)."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "upgrades"
        }
