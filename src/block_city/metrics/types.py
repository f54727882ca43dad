"""Type definitions for derived city metrics."""

from dataclasses import dataclass


@dataclass
class Contributions:
    """Raw per-building sums gathered in the accumulation pass."""

    power_capacity: int = 0
    power_demand: int = 0
    water_capacity: int = 0
    water_demand: int = 0
    direct_happiness: float = 0
    maintenance_cost: float = 0
    residential_capacity: int = 0
    jobs_provided: int = 0
    commercial_jobs: int = 0
    patient_capacity: int = 0
    student_capacity: int = 0
    education_points: int = 0
    pollution_output: int = 0
    pollution_reduction: int = 0
    appeal_points: int = 0

    building_count: int = 0
    derelict_count: int = 0
    active_fires: int = 0
    industrial_count: int = 0
    park_count: int = 0
    has_hospital: bool = False
    has_education: bool = False


@dataclass(frozen=True)
class CityMetrics:
    """Everything derived from the building collection in one pass."""

    power_capacity: int
    power_demand: int
    water_capacity: int
    water_demand: int
    happiness: int
    health_level: int
    safety_level: int
    education_level: int
    pollution_level: int
    appeal: int
    tourists: int
    total_maintenance_cost: float
    total_residential_capacity: int
    total_jobs_provided: int
    total_commercial_jobs: int

    # Diagnostics
    derelict_count: int = 0
    active_fires: int = 0
    total_appeal_points: int = 0

    @property
    def has_water(self) -> bool:
        return self.water_demand <= self.water_capacity
