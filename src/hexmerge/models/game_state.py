"""Game state model — everything a session needs to render and continue.

GameState is a value: engine operations return new instances and never
mutate one that was handed out, so history snapshots and the live board
can never alias.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from hexmerge.models.board import Board


@dataclass(frozen=True)
class HistoryEntry:
    """Board and score before a move, for undo."""

    board: Board
    score: int


@dataclass(frozen=True)
class GameState:
    """The full state of one game.

    Attributes:
        board: Current tiles.
        score: Points this game.
        best_score: Highest score seen this session; survives resets.
        is_game_over: Grid full and no triplet anywhere.
        is_won: A tile reached the winning value.
        can_undo: History holds at least one entry.
        history: Pre-move snapshots, most recent last.
        undos_remaining: Undo budget left this game.
    """

    board: Board = Board()
    score: int = 0
    best_score: int = 0
    is_game_over: bool = False
    is_won: bool = False
    can_undo: bool = False
    history: tuple[HistoryEntry, ...] = ()
    undos_remaining: int = 0

    @property
    def is_playing(self) -> bool:
        return not (self.is_game_over or self.is_won)

    def evolve(self, **changes) -> GameState:
        """Copy with the given fields replaced."""
        return replace(self, **changes)
