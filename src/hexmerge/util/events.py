"""Typed event bus — how the session publishes changes.

Renderers, the mode scheduler and persistence subscribe here instead of
reaching into a global store.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar, Type

T = TypeVar("T")


# -- Move events ---------------------------------------------------------

@dataclass(frozen=True)
class TilesMoved:
    """A move changed the board."""
    direction: int
    score: int
    score_gained: int
    merged_ids: tuple[str, ...]


@dataclass(frozen=True)
class TileSpawned:
    """A tile was added outside a move (fast-pace auto-spawn)."""
    tile_id: str
    value: int


@dataclass(frozen=True)
class MoveUndone:
    """The last move was taken back."""
    undos_remaining: int


# -- Game lifecycle events -----------------------------------------------

@dataclass(frozen=True)
class GameReset:
    """A new game started (reset or mode switch)."""
    mode: str


@dataclass(frozen=True)
class GameWon:
    """A tile reached the winning value."""
    score: int


@dataclass(frozen=True)
class GameOver:
    """No move is left, or the time ran out."""
    score: int


@dataclass(frozen=True)
class TimerExpired:
    """The time-trial countdown hit zero."""
    score: int


@dataclass(frozen=True)
class BestScoreChanged:
    """The session best score increased."""
    best_score: int
    previous: Optional[int] = None


# -- Event Bus -----------------------------------------------------------

class EventBus:
    """Simple synchronous event bus with typed events.

    Usage:
        bus = EventBus()
        bus.on(GameOver, lambda e: print(e.score))
        bus.emit(GameOver(score=42))
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable[[Any], None]]] = defaultdict(list)

    def on(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """Register a handler for an event type."""
        self._handlers[event_type].append(handler)

    def off(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """Unregister a handler."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: object) -> None:
        """Emit an event to all registered handlers."""
        for handler in list(self._handlers.get(type(event), [])):
            handler(event)

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()
