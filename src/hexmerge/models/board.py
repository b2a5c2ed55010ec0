"""Board model — the ordered, immutable collection of tiles.

Board order matters: it is the order in which triplets are searched, so
operations that rebuild the board keep the same append/remove semantics
on every call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from hexmerge.models.grid import HexGrid
from hexmerge.models.hex import HexCoord
from hexmerge.models.tile import Tile


@dataclass(frozen=True)
class Board:
    """Tiles on the grid.

    Invariants (checked on construction):
        - no two tiles share a position
        - no two tiles share an id

    Attributes:
        tiles: Tiles in board order.
    """

    tiles: tuple[Tile, ...] = ()
    _by_pos: dict = field(init=False, repr=False, compare=False, hash=False)
    _ids: frozenset = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self) -> None:
        tiles = tuple(self.tiles)
        object.__setattr__(self, "tiles", tiles)

        by_pos: dict[HexCoord, Tile] = {}
        for tile in tiles:
            if tile.position in by_pos:
                raise ValueError(f"Two tiles at {tile.position!r}")
            by_pos[tile.position] = tile
        ids = frozenset(t.id for t in tiles)
        if len(ids) != len(tiles):
            raise ValueError("Duplicate tile id on board")

        object.__setattr__(self, "_by_pos", by_pos)
        object.__setattr__(self, "_ids", ids)

    @classmethod
    def of(cls, tiles: Iterable[Tile]) -> Board:
        return cls(tuple(tiles))

    # -- Queries ---------------------------------------------------------

    def __len__(self) -> int:
        return len(self.tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self.tiles)

    def tile_at(self, coord: HexCoord) -> Optional[Tile]:
        """The tile occupying ``coord``, or None."""
        return self._by_pos.get(coord)

    def is_occupied(self, coord: HexCoord) -> bool:
        return coord in self._by_pos

    def has_id(self, tile_id: str) -> bool:
        return tile_id in self._ids

    @property
    def ids(self) -> frozenset:
        return self._ids

    def empty_coords(self, grid: HexGrid) -> list[HexCoord]:
        """Unoccupied grid cells, in grid order."""
        return [c for c in grid.coords() if c not in self._by_pos]

    def is_full(self, grid: HexGrid) -> bool:
        return not self.empty_coords(grid)

    def max_value(self) -> int:
        return max((t.value for t in self.tiles), default=0)

    def fits(self, grid: HexGrid) -> bool:
        """True if every tile lies on ``grid`` (and hence count <= cells)."""
        return all(grid.is_valid(t.position) for t in self.tiles)

    # -- Derivation ------------------------------------------------------

    def without(self, tile_ids: Iterable[str]) -> Board:
        """Copy with the given tiles removed, order otherwise kept."""
        drop = set(tile_ids)
        return Board(tuple(t for t in self.tiles if t.id not in drop))

    def with_tile(self, tile: Tile) -> Board:
        """Copy with ``tile`` appended."""
        return Board(self.tiles + (tile,))

    def cleared_flags(self) -> Board:
        return Board(tuple(t.cleared() for t in self.tiles))
