"""Tests for saving and loading games."""

import json

from block_city.models import Building, BuildingType, CityStats, FocusPoint, FocusSource
from block_city.persistence import (
    JsonFileStore,
    MemoryStore,
    SavedGameState,
    load_game,
    save_game,
    snapshot_state,
)
from block_city.simulation.actions import refresh_stats
from block_city.simulation.engine import CitySimulation
from block_city.simulation.types import SimulationState

KEY = "blockCityBuilderSave_v1"


def _populated_state() -> SimulationState:
    home = Building(type=BuildingType.RESIDENTIAL, grid_x=3, grid_z=4, level=2)
    burning = Building(
        type=BuildingType.PARK, grid_x=5, grid_z=5, is_on_fire=True, fire_health=42.5,
    )
    plant = Building(type=BuildingType.POWER_PLANT, grid_x=10, grid_z=10)
    state = SimulationState(
        buildings=[home, burning, plant],
        stats=CityStats(population=40, funds=12345, month=18),
        selected_building_id=home.id,
        camera_state={"position": [1.0, 2.0, 3.0], "target": [0.0, 0.0, 0.0]},
        autonomy_enabled=True,
        planner_cooldown=2,
        focus_point=FocusPoint(x=10, z=10, source=FocusSource.PLANNER),
    )
    state.history.append(CityStats(month=16))
    state.history.append(CityStats(month=17, population=30))
    refresh_stats(state)
    return state


class TestRoundTrip:
    def test_round_trip(self):
        """Saving and loading restores every persisted field."""
        state = _populated_state()
        store = MemoryStore()

        save_game(state, store, KEY)
        loaded = load_game(store, KEY)

        assert loaded.buildings == state.buildings
        assert loaded.stats.funds == 12345
        assert loaded.stats.population == 40
        assert loaded.stats.month == 18
        assert loaded.selected_building_id == state.selected_building_id
        assert loaded.camera_state == state.camera_state
        assert loaded.autonomy_enabled is True
        assert loaded.planner_cooldown == 2
        assert loaded.focus_point == state.focus_point
        assert loaded.history.to_list() == state.history.to_list()

    def test_snapshot_is_stable(self):
        """A loaded game snapshots to the same buildings it was saved with."""
        state = _populated_state()
        store = MemoryStore()
        save_game(state, store, KEY)
        loaded = load_game(store, KEY)
        assert snapshot_state(loaded).buildings == snapshot_state(state).buildings

    def test_payload_uses_camel_case(self):
        """The saved payload uses camelCase keys."""
        store = MemoryStore()
        save_game(_populated_state(), store, KEY)

        data = json.loads(store.get(KEY))

        assert data["isDelegationModeActive"] is True
        assert data["aiFocusPointSource"] == "AI_STRATEGIC"
        assert data["cityStats"]["funds"] == 12345
        assert data["buildings"][0]["gridX"] == 3
        assert data["buildings"][1]["fireHealth"] == 42.5
        assert len(data["cityStatsHistory"]) == 2


class TestLoadFallbacks:
    def test_absent_save(self):
        """A missing save loads a fresh city."""
        state = load_game(MemoryStore(), KEY)
        assert state.buildings == []
        assert state.stats.funds == 50000
        assert state.stats.month == 1

    def test_malformed_json(self):
        """Unparseable save data loads a fresh city."""
        state = load_game(MemoryStore({KEY: "{not json"}), KEY)
        assert state.buildings == []
        assert state.stats.funds == 50000

    def test_invalid_schema(self):
        """Save data that fails validation loads a fresh city."""
        store = MemoryStore({KEY: json.dumps({"buildings": [{"id": 1}]})})
        state = load_game(store, KEY)
        assert state.buildings == []

    def test_partial_stats_merge_over_defaults(self):
        """Missing stats fall back to their starting values."""
        store = MemoryStore({KEY: json.dumps({"cityStats": {"funds": 1234}})})
        state = load_game(store, KEY)
        assert state.stats.funds == 1234
        assert state.stats.month == 1
        assert state.stats.population == 0

    def test_derived_stats_are_recomputed(self):
        """Derived stats are recomputed from the loaded buildings."""
        payload = {
            "buildings": [
                {"id": "p1", "type": "POWER_PLANT", "gridX": 1, "gridZ": 1, "level": 1,
                 "isOnFire": False, "fireHealth": 100},
            ],
            "cityStats": {"powerCapacity": 9999, "funds": 500},
        }
        state = load_game(MemoryStore({KEY: json.dumps(payload)}), KEY)
        assert state.stats.power_capacity == 100
        assert state.stats.funds == 500

    def test_overlapping_buildings_are_dropped(self):
        """Buildings off the map or on a taken cell are dropped."""
        payload = {
            "buildings": [
                {"id": "a", "type": "PARK", "gridX": 1, "gridZ": 1},
                {"id": "b", "type": "ROAD", "gridX": 1, "gridZ": 1},
                {"id": "c", "type": "ROAD", "gridX": 99, "gridZ": 1},
            ],
        }
        state = load_game(MemoryStore({KEY: json.dumps(payload)}), KEY)
        assert [b.id for b in state.buildings] == ["a"]

    def test_population_capped_to_saved_housing(self):
        """Loaded population never exceeds the saved housing."""
        payload = {
            "buildings": [{"id": "h", "type": "RESIDENTIAL", "gridX": 2, "gridZ": 2}],
            "cityStats": {"population": 400},
        }
        state = load_game(MemoryStore({KEY: json.dumps(payload)}), KEY)
        assert state.stats.population == 50

    def test_levels_capped_at_last_tier(self):
        """Loaded levels are capped at the last upgrade tier."""
        payload = {
            "buildings": [
                {"id": "h", "type": "RESIDENTIAL", "gridX": 2, "gridZ": 2, "level": 9},
                {"id": "r", "type": "ROAD", "gridX": 4, "gridZ": 4, "level": 3},
            ],
        }
        state = load_game(MemoryStore({KEY: json.dumps(payload)}), KEY)
        assert [b.level for b in state.buildings] == [3, 1]

    def test_unknown_selection_is_dropped(self):
        """A selection pointing at a missing building is cleared."""
        store = MemoryStore({KEY: json.dumps({"selectedBuildingId": "ghost"})})
        assert load_game(store, KEY).selected_building_id is None

    def test_schema_accepts_snake_case(self):
        """Snapshots also accept snake_case field names."""
        saved = SavedGameState.model_validate({"is_delegation_mode_active": True})
        assert saved.is_delegation_mode_active


class TestJsonFileStore:
    def test_missing_file(self, tmp_path):
        """A missing save file reads as an empty store."""
        assert JsonFileStore(tmp_path / "save.json").get(KEY) is None

    def test_set_and_get(self, tmp_path):
        """Values written to the file store survive a reopen."""
        store = JsonFileStore(tmp_path / "nested" / "save.json")
        store.set(KEY, "payload")
        store.set("other", "x")
        assert store.get(KEY) == "payload"
        assert JsonFileStore(tmp_path / "nested" / "save.json").get("other") == "x"

    def test_corrupt_file_falls_back(self, tmp_path):
        """A corrupt save file loads a fresh city."""
        path = tmp_path / "save.json"
        path.write_text("[[[", encoding="utf-8")
        state = load_game(JsonFileStore(path), KEY)
        assert state.stats.funds == 50000

    def test_file_round_trip(self, tmp_path):
        """Games round-trip through the file store."""
        store = JsonFileStore(tmp_path / "save.json")
        state = _populated_state()
        save_game(state, store, KEY)
        assert load_game(store, KEY).buildings == state.buildings


class TestSimulationSaveLoad:
    def test_save_then_load(self):
        """Loading discards changes made after the last save."""
        simulation = CitySimulation(seed=1)
        simulation.place(BuildingType.PARK, 4, 4)
        simulation.save()

        simulation.place(BuildingType.PARK, 6, 6)
        simulation.load()

        assert [b.cell for b in simulation.state.buildings] == [(4, 4)]
        assert simulation.state.stats.funds == 50000 - 180

    def test_load_keeps_pending_events(self):
        """Loading keeps events that were not yet drained."""
        simulation = CitySimulation(seed=1)
        simulation.place(BuildingType.PARK, 4, 4)
        simulation.load()
        kinds = [e.kind for e in simulation.drain_events()]
        assert kinds[0] == "construction"
        assert kinds[-1] == "system"
