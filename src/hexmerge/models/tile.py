"""Tile model — a single valued tile on the board.

Tiles are immutable; a move produces new Tile objects that keep the same
``id``. The id is the tile's identity across moves and is never reused.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, replace
from typing import Optional

from hexmerge.models.hex import HexCoord
from hexmerge.util.constants import TILE_VALUES

_INDEX: dict[int, int] = {v: i for i, v in enumerate(TILE_VALUES)}
_ids = itertools.count(1)


def new_tile_id() -> str:
    """Return a process-unique tile id."""
    return f"t{next(_ids)}"


def is_progression_value(value: int) -> bool:
    return value in _INDEX


def next_value(value: int) -> Optional[int]:
    """The progression successor of ``value``.

    Returns None for the terminal value and for non-members.
    """
    idx = _INDEX.get(value)
    if idx is None or idx == len(TILE_VALUES) - 1:
        return None
    return TILE_VALUES[idx + 1]


@dataclass(frozen=True)
class Tile:
    """A tile on the board.

    Attributes:
        id: Opaque unique identity, stable across moves.
        value: A member of the progression.
        position: Cell the tile occupies.
        is_new: Spawned during the last move (display hint).
        is_merged: Produced by a merge during the last move (display hint).
    """

    id: str
    value: int
    position: HexCoord
    is_new: bool = False
    is_merged: bool = False

    def __post_init__(self) -> None:
        if not is_progression_value(self.value):
            raise ValueError(f"Tile value {self.value} is not in the progression")

    @classmethod
    def create(cls, value: int, position: HexCoord, *, is_new: bool = False,
               is_merged: bool = False) -> Tile:
        """Build a tile with a fresh id."""
        return cls(new_tile_id(), value, position, is_new=is_new, is_merged=is_merged)

    def moved_to(self, position: HexCoord) -> Tile:
        return replace(self, position=position)

    def cleared(self) -> Tile:
        """Copy with the per-move display flags reset."""
        if not (self.is_new or self.is_merged):
            return self
        return replace(self, is_new=False, is_merged=False)
