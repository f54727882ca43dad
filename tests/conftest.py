"""Pytest configuration and fixtures for simulation tests."""

import random

import pytest
from block_city.fire.simulator import FireSimulator
from block_city.fire.types import FireConfig
from block_city.models import Building, BuildingType, CityStats
from block_city.simulation.actions import refresh_stats
from block_city.simulation.types import SimulationState


class FixedRandom(random.Random):
    """Random source whose random() always returns the same value."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def fixed_rng():
    """Factory for random sources that always roll the given value."""
    return FixedRandom


@pytest.fixture
def state():
    """A fresh, empty city with derived stats computed."""
    state = SimulationState()
    refresh_stats(state)
    return state


@pytest.fixture
def make_state():
    """Factory for a state holding the given buildings and stats."""

    def _make(buildings=(), refresh=True, **stats):
        state = SimulationState(buildings=list(buildings), stats=CityStats(**stats))
        if refresh:
            refresh_stats(state)
        return state

    return _make


@pytest.fixture
def fireproof():
    """Fire simulator that never starts new fires."""
    return FireSimulator(config=FireConfig(start_chance=0), seed=1)


@pytest.fixture
def serviced_city():
    """A small city with power, water and one home."""
    return [
        Building(type=BuildingType.POWER_PLANT, grid_x=10, grid_z=10),
        Building(type=BuildingType.WATER_TOWER, grid_x=12, grid_z=10),
        Building(type=BuildingType.ROAD, grid_x=11, grid_z=10),
        Building(type=BuildingType.RESIDENTIAL, grid_x=11, grid_z=11),
    ]
