"""Notification events emitted by the simulation for display."""

import logging
from collections import deque
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)

MAX_PENDING_EVENTS = 100


class EventKind(StrEnum):
    """Kinds of user-facing notifications."""

    CONSTRUCTION = "construction"
    DEMOLITION = "demolition"
    UPGRADE = "upgrade"
    FIRE_OUTBREAK = "fire_outbreak"
    FIRE_SPREAD = "fire_spread"
    DESTRUCTION = "destruction"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    REJECTED = "rejected"
    PLANNER = "planner"
    FINANCE = "finance"
    SYSTEM = "system"


@dataclass(frozen=True)
class GameEvent:
    """A short-lived message for the front-end."""

    kind: EventKind
    message: str
    month: int | None = None
    x: int | None = None
    z: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "month": self.month,
            "x": self.x,
            "z": self.z,
        }


class EventLog:
    """Bounded queue of pending events; oldest are dropped when full."""

    def __init__(self, maxlen: int = MAX_PENDING_EVENTS) -> None:
        self._events: deque[GameEvent] = deque(maxlen=maxlen)

    def emit(self, event: GameEvent) -> GameEvent:
        logger.debug("Event %s: %s", event.kind, event.message)
        self._events.append(event)
        return event

    def extend(self, events: list[GameEvent]) -> None:
        for event in events:
            self.emit(event)

    def drain(self) -> list[GameEvent]:
        """Return and clear all pending events."""
        events = list(self._events)
        self._events.clear()
        return events

    def peek(self) -> list[GameEvent]:
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)
