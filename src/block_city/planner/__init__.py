"""Autonomous rule-based city planner."""

from block_city.planner.planner import Planner
from block_city.planner.types import (
    PlannerConfig,
    PlannerTurn,
    PlanningContext,
    PlanningDraft,
    ProposedAction,
)

__all__ = [
    "Planner",
    "PlannerConfig",
    "PlannerTurn",
    "PlanningContext",
    "PlanningDraft",
    "ProposedAction",
]
