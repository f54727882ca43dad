"""Tests for the metrics derivation engine."""

import dataclasses

from block_city.metrics.engine import (
    accumulate,
    apply_metrics,
    derive_metrics,
    education_level,
    happiness_score,
    health_level,
    pollution_level,
    safety_level,
    tourist_count,
)
from block_city.metrics.types import Contributions
from block_city.models import Building, BuildingType, CityStats


def _serviced(**overrides) -> Contributions:
    """Contributions for a city with enough power and water."""
    values = {"building_count": 3, "power_capacity": 100, "water_capacity": 100}
    values.update(overrides)
    return Contributions(**values)


class TestAccumulate:
    def test_destroyed_building_only_costs_half_upkeep(self):
        """Destroyed buildings cost half their upkeep and provide nothing."""
        rubble = Building(
            type=BuildingType.RESIDENTIAL, grid_x=0, grid_z=0, is_on_fire=True, fire_health=0,
        )
        totals = accumulate([rubble])
        assert totals.derelict_count == 1
        assert totals.maintenance_cost == 5
        assert totals.residential_capacity == 0
        assert totals.power_demand == 0
        assert totals.direct_happiness == 0

    def test_burning_building_keeps_demand_but_not_happiness(self):
        """Burning buildings keep their demands but lose their amenities."""
        burning = Building(
            type=BuildingType.PARK, grid_x=0, grid_z=0, is_on_fire=True, fire_health=50,
        )
        totals = accumulate([burning])
        assert totals.active_fires == 1
        assert totals.power_demand == 1
        assert totals.maintenance_cost == 5
        assert totals.direct_happiness == 0
        assert totals.appeal_points == 0
        assert totals.pollution_reduction == 0
        assert totals.park_count == 0

    def test_commercial_jobs_tracked_separately(self):
        """Commercial jobs are counted on top of the job total."""
        totals = accumulate([
            Building(type=BuildingType.COMMERCIAL, grid_x=0, grid_z=0),
            Building(type=BuildingType.INDUSTRIAL, grid_x=1, grid_z=0),
        ])
        assert totals.jobs_provided == 50
        assert totals.commercial_jobs == 20
        assert totals.industrial_count == 1

    def test_uses_upgraded_values(self):
        """Totals use the upgraded properties of each building."""
        totals = accumulate([Building(type=BuildingType.POWER_PLANT, grid_x=0, grid_z=0, level=2)])
        assert totals.power_capacity == 150
        assert totals.maintenance_cost == 110


class TestHappiness:
    def test_baseline(self):
        """A serviced city with no problems sits at the base happiness."""
        assert happiness_score(_serviced(), CityStats(), pollution=0, education=55) == 65

    def test_power_and_water_shortage(self):
        """Missing power and water each cost happiness."""
        totals = Contributions(building_count=1, power_demand=5, water_demand=3)
        assert happiness_score(totals, CityStats(), pollution=0, education=55) == 45

    def test_no_utility_penalty_without_buildings(self):
        """An empty city is not penalised for missing utilities."""
        assert happiness_score(Contributions(), CityStats(), pollution=0, education=55) == 65

    def test_industry_outnumbering_parks(self):
        """Industry outnumbering parks lowers happiness."""
        totals = _serviced(industrial_count=2, park_count=1)
        assert happiness_score(totals, CityStats(), pollution=0, education=55) == 60

    def test_enough_parks_offset_industry(self):
        """Enough parks cancel the industry penalty."""
        totals = _serviced(industrial_count=2, park_count=2)
        assert happiness_score(totals, CityStats(), pollution=0, education=55) == 65

    def test_unemployment(self):
        """High unemployment lowers happiness in proportion."""
        totals = _serviced(jobs_provided=50)
        previous = CityStats(population=100)
        assert happiness_score(totals, previous, pollution=0, education=55) == 50

    def test_low_unemployment_is_ignored(self):
        """Unemployment under the threshold has no effect."""
        totals = _serviced(jobs_provided=95)
        previous = CityStats(population=100)
        assert happiness_score(totals, previous, pollution=0, education=55) == 65

    def test_debt(self):
        """Low funds and deep debt stack their penalties."""
        assert happiness_score(_serviced(), CityStats(funds=-1), pollution=0, education=55) == 55
        assert happiness_score(_serviced(), CityStats(funds=-20000), pollution=0, education=55) == 40

    def test_pollution(self):
        """Heavy pollution lowers happiness."""
        assert happiness_score(_serviced(), CityStats(), pollution=100, education=55) == 60

    def test_previous_health_and_safety(self):
        """Last month's poor health and safety lower happiness."""
        previous = CityStats(health_level=25, safety_level=45)
        assert happiness_score(_serviced(), previous, pollution=0, education=55) == 50

    def test_active_fires(self):
        """Each active fire lowers happiness."""
        totals = _serviced(active_fires=2)
        assert happiness_score(totals, CityStats(), pollution=0, education=55) == 55

    def test_poor_education(self):
        """Poor education lowers happiness."""
        assert happiness_score(_serviced(), CityStats(), pollution=0, education=10) == 55

    def test_derived_happiness_is_clamped(self):
        """Derived happiness never drops below zero."""
        factories = [
            Building(type=BuildingType.INDUSTRIAL, grid_x=x, grid_z=0) for x in range(20)
        ]
        metrics = derive_metrics(factories, CityStats(funds=-50000))
        assert metrics.happiness == 0


class TestLevels:
    def test_pollution_level(self):
        """Pollution is output minus reduction, kept within 0 to 100."""
        assert pollution_level(Contributions(pollution_output=30, pollution_reduction=10)) == 20
        assert pollution_level(Contributions(pollution_output=5, pollution_reduction=10)) == 0
        assert pollution_level(Contributions(pollution_output=500)) == 100

    def test_health_without_hospital(self):
        """Cities without a hospital settle at the base health level."""
        assert health_level(Contributions(), population=1000, pollution=0) == 50

    def test_health_with_hospital(self):
        """Hospital coverage drives health."""
        totals = Contributions(has_hospital=True, patient_capacity=200)
        assert health_level(totals, population=1000, pollution=0) == 40
        assert health_level(totals, population=0, pollution=0) == 100

    def test_health_pollution_damage(self):
        """Pollution over the threshold damages health."""
        totals = Contributions(has_hospital=True, patient_capacity=200)
        assert health_level(totals, population=1000, pollution=60) == 39

    def test_safety(self):
        """Each active fire lowers safety."""
        assert safety_level(0) == 100
        assert safety_level(3) == 40
        assert safety_level(6) == 0

    def test_education_without_schools(self):
        """Education declines with population when there are no schools."""
        assert education_level(Contributions(), population=0) == 55
        assert education_level(Contributions(), population=10) == 55
        assert education_level(Contributions(), population=20) == 52
        assert education_level(Contributions(), population=100) == 25

    def test_education_with_schools(self):
        """School coverage raises education."""
        school = Contributions(has_education=True, student_capacity=150, education_points=20)
        assert education_level(school, population=0) == 75
        assert education_level(school, population=50) == 100

    def test_education_quality_and_bonus(self):
        """Education points add a quality bonus on top of coverage."""
        university = Contributions(has_education=True, student_capacity=500, education_points=60)
        assert education_level(university, population=1000) == 79

    def test_tourists_capped_by_commercial_jobs(self):
        """Tourist numbers are capped by commercial jobs."""
        assert tourist_count(Contributions(commercial_jobs=20), appeal=50) == 5
        assert tourist_count(Contributions(commercial_jobs=1000, appeal_points=10), appeal=50) == 130


class TestDeriveMetrics:
    def test_empty_city(self):
        """An empty city derives the starting levels."""
        metrics = derive_metrics([], CityStats())
        assert metrics.happiness == 65
        assert metrics.health_level == 50
        assert metrics.safety_level == 100
        assert metrics.education_level == 55
        assert metrics.pollution_level == 0
        assert metrics.appeal == 5
        assert metrics.tourists == 0

    def test_derelict_lowers_appeal(self):
        """Derelict buildings lower appeal."""
        rubble = Building(
            type=BuildingType.ROAD, grid_x=0, grid_z=0, is_on_fire=True, fire_health=0,
        )
        metrics = derive_metrics([rubble], CityStats())
        assert metrics.derelict_count == 1
        assert metrics.appeal == 2
        assert metrics.total_maintenance_cost == 1.5

    def test_ranges(self, serviced_city):
        metrics = derive_metrics(serviced_city, CityStats(population=40))
        for value in (
            metrics.happiness,
            metrics.health_level,
            metrics.safety_level,
            metrics.education_level,
            metrics.pollution_level,
            metrics.appeal,
        ):
            assert 0 <= value <= 100
        assert metrics.tourists >= 0
        assert metrics.power_capacity == 100
        assert metrics.total_residential_capacity == 50

    def test_inputs_not_mutated(self, serviced_city):
        """Deriving metrics leaves buildings and stats untouched."""
        before = [dataclasses.replace(b) for b in serviced_city]
        previous = CityStats(population=40)
        derive_metrics(serviced_city, previous)
        assert serviced_city == before
        assert previous == CityStats(population=40)

    def test_apply_metrics_keeps_committed_fields(self, serviced_city):
        """Applying metrics keeps population, funds and month."""
        stats = CityStats(population=40, funds=1234, month=7)
        updated = apply_metrics(stats, derive_metrics(serviced_city, stats))
        assert updated.population == 40
        assert updated.funds == 1234
        assert updated.month == 7
        assert updated.power_capacity == 100
        assert stats.power_capacity == 0
