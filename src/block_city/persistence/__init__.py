"""Saved-game snapshots and the stores that hold them."""

from block_city.persistence.game import load_game, restore_state, save_game, snapshot_state
from block_city.persistence.schemas import (
    BuildingSnapshot,
    CameraState,
    CityStatsSnapshot,
    FocusPointSnapshot,
    SavedGameState,
)
from block_city.persistence.store import JsonFileStore, KeyValueStore, MemoryStore

__all__ = [
    "BuildingSnapshot",
    "CameraState",
    "CityStatsSnapshot",
    "FocusPointSnapshot",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "SavedGameState",
    "load_game",
    "restore_state",
    "save_game",
    "snapshot_state",
]
