"""Tests for the monthly tick."""

import dataclasses

import pytest
from block_city.events import EventKind
from block_city.metrics.types import CityMetrics
from block_city.models import Building, BuildingType, CityStats
from block_city.simulation.tick import (
    advance_month,
    can_grow,
    compute_population_change,
    departure_factor,
    growth_factor,
    monthly_expense,
    monthly_income,
)
from block_city.simulation.types import StatsHistory


def _metrics(**overrides) -> CityMetrics:
    """Metrics for a healthy, well-serviced city."""
    values = {
        "power_capacity": 100,
        "power_demand": 50,
        "water_capacity": 100,
        "water_demand": 50,
        "happiness": 85,
        "health_level": 85,
        "safety_level": 100,
        "education_level": 55,
        "pollution_level": 0,
        "appeal": 10,
        "tourists": 0,
        "total_maintenance_cost": 0,
        "total_residential_capacity": 150,
        "total_jobs_provided": 100,
        "total_commercial_jobs": 0,
    }
    values.update(overrides)
    return CityMetrics(**values)


class TestFinances:
    def test_income_uses_population_and_tourists(self):
        """Income combines resident taxes and tourist spending."""
        assert monthly_income(CityStats(population=100, tourists=5)) == 2600

    def test_expense_rounds_up_half_upkeep(self):
        """Fractional upkeep rounds up."""
        assert monthly_expense(_metrics(total_maintenance_cost=12.5)) == 13
        assert monthly_expense(_metrics(total_maintenance_cost=12)) == 12


class TestPopulationChange:
    @pytest.mark.parametrize(
        "happiness, expected",
        [(85, 0.06), (81, 0.06), (80, 0.04), (61, 0.04), (60, 0.02), (41, 0.02), (40, 0.0)],
    )
    def test_growth_tiers(self, happiness, expected):
        """Higher happiness tiers grow faster."""
        assert growth_factor(happiness) == expected

    def test_growth_scenario(self):
        """A happy city of 100 with room for 150 gains seven residents."""
        assert compute_population_change(100, _metrics()) == 7

    def test_residential_capacity_bonus(self):
        """Spare housing attracts extra residents."""
        metrics = _metrics(total_residential_capacity=400, total_jobs_provided=1000)
        assert compute_population_change(100, metrics) == 9

    def test_tourist_bonus_needs_high_appeal(self):
        """Tourists only bring residents to very appealing cities."""
        metrics = _metrics(appeal=75, tourists=300, total_jobs_provided=1000)
        assert compute_population_change(100, metrics) == 10
        metrics = _metrics(appeal=70, tourists=300, total_jobs_provided=1000)
        assert compute_population_change(100, metrics) == 7

    def test_soft_cap_on_jobs(self):
        """Growth slows once residents outnumber jobs."""
        metrics = _metrics(total_residential_capacity=1000, total_jobs_provided=80)
        assert compute_population_change(100, metrics) == 6

    def test_no_growth_at_capacity(self):
        """Full housing stops growth."""
        assert compute_population_change(150, _metrics()) == 0

    @pytest.mark.parametrize(
        "overrides",
        [
            {"water_demand": 101},
            {"health_level": 35},
            {"safety_level": 55},
            {"education_level": 24},
            {"pollution_level": 70},
        ],
    )
    def test_growth_gates(self, overrides):
        """Any failed service gate blocks growth."""
        assert not can_grow(100, _metrics(**overrides))

    def test_departure_takes_the_largest_factor(self):
        """Departure causes do not add up; the largest one wins."""
        metrics = _metrics(happiness=30, water_demand=101)
        assert departure_factor(metrics) == 0.08
        assert compute_population_change(100, metrics) == -8

    def test_departure_when_very_unhappy(self):
        """Very unhappy cities lose residents."""
        metrics = _metrics(happiness=20)
        assert departure_factor(metrics) == 0.06
        # One newcomer still arrives while six leave
        assert compute_population_change(100, metrics) == -5

    def test_moderate_pollution_blocks_growth_without_departure(self):
        """Moderate pollution stops growth but drives nobody out."""
        metrics = _metrics(pollution_level=72)
        assert departure_factor(metrics) == 0.0
        assert compute_population_change(100, metrics) == 0

    def test_severe_pollution_drives_people_out(self):
        """Severe pollution drives residents out."""
        assert departure_factor(_metrics(pollution_level=80)) == 0.05

    def test_no_departures_in_a_good_city(self):
        """Nobody leaves a well-run city."""
        assert departure_factor(_metrics()) == 0.0


class TestAdvanceMonth:
    def test_funds_month_and_history(self, make_state, serviced_city, fireproof):
        """A tick collects income, pays upkeep and records history."""
        state = make_state(serviced_city, population=10, funds=1000)

        report = advance_month(state, fireproof)

        # income 10 * 25, upkeep 75 + 30 + 3 + 10
        assert report.income == 250
        assert report.expense == 118
        assert state.stats.funds == 1000 + 250 - 118
        assert report.net_funds_change == 132
        assert state.stats.month == 2
        assert report.month == 1
        assert len(state.history) == 1
        assert state.history.latest() == state.stats

    def test_history_entries_are_snapshots(self, make_state, serviced_city, fireproof):
        """History keeps one entry per month."""
        state = make_state(serviced_city, population=10, funds=1000)
        advance_month(state, fireproof)
        advance_month(state, fireproof)
        assert [s.month for s in state.history] == [2, 3]

    def test_population_clamped_to_capacity(self, make_state, fireproof):
        """Population never ends a month above housing capacity."""
        state = make_state(
            [Building(type=BuildingType.RESIDENTIAL, grid_x=0, grid_z=0)], population=500, refresh=False,
        )
        advance_month(state, fireproof)
        assert state.stats.population == 50

    def test_population_never_negative(self, make_state, fireproof):
        """Population never drops below zero."""
        state = make_state(population=0, funds=-100000)
        advance_month(state, fireproof)
        assert state.stats.population == 0

    def test_destroyed_selection_is_cleared(self, make_state, fireproof):
        """A building destroyed by fire is deselected."""
        home = Building(
            type=BuildingType.RESIDENTIAL, grid_x=0, grid_z=0, is_on_fire=True, fire_health=1,
        )
        state = make_state([home])
        state.selected_building_id = home.id

        report = advance_month(state, fireproof)

        assert state.selected_building_id is None
        assert report.destroyed_ids == [home.id]
        assert any(e.kind == EventKind.DESTRUCTION for e in report.events)

    def test_finance_summary_when_quiet(self, make_state, serviced_city, fireproof):
        """Quiet months report a finance summary."""
        state = make_state(serviced_city, population=10)
        report = advance_month(state, fireproof)
        assert [e.kind for e in report.events] == [EventKind.FINANCE]
        assert [e.kind for e in state.events.drain()] == [EventKind.FINANCE]

    def test_no_finance_summary_with_autonomy(self, make_state, serviced_city, fireproof):
        """The finance summary is skipped while the planner runs."""
        state = make_state(serviced_city, population=10)
        state.autonomy_enabled = True
        assert advance_month(state, fireproof).events == []

    def test_derived_stats_refreshed(self, make_state, serviced_city, fireproof):
        """A tick recomputes derived stats."""
        state = make_state(serviced_city, refresh=False)
        advance_month(state, fireproof)
        assert state.stats.power_capacity == 100
        assert state.stats.water_capacity == 80


class TestStatsHistory:
    def test_evicts_oldest(self):
        """A full history drops its oldest month."""
        history = StatsHistory(capacity=3)
        for month in range(1, 6):
            history.append(CityStats(month=month))
        assert len(history) == 3
        assert [s.month for s in history] == [3, 4, 5]

    def test_default_capacity(self):
        """History keeps twenty years of months by default."""
        history = StatsHistory()
        for month in range(300):
            history.append(CityStats(month=month))
        assert len(history) == 240
        assert history.to_list()[0].month == 60

    def test_append_copies(self):
        """History stores copies of the stats it is given."""
        history = StatsHistory()
        stats = CityStats()
        history.append(stats)
        stats.funds = 0
        assert history.latest() == dataclasses.replace(CityStats())
