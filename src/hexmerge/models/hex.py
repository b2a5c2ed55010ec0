"""Hexagonal coordinate system using axial coordinates (q, r).

Axial coordinates define position on a hex grid where:
- q axis runs roughly east
- r axis runs roughly south-east
- s = -q - r is the implicit third cube coordinate

Reference: https://www.redblobgames.com/grids/hexagons/
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Direction(IntEnum):
    """The six slide directions, in 60° steps."""

    NORTHEAST = 0
    EAST = 1
    SOUTHEAST = 2
    SOUTHWEST = 3
    WEST = 4
    NORTHWEST = 5

    @property
    def opposite(self) -> Direction:
        return Direction((self + 3) % 6)

    @property
    def vector(self) -> HexCoord:
        """Unit axial step for this direction."""
        return DIRECTION_VECTORS[self]


@dataclass(frozen=True)
class HexCoord:
    """Immutable axial hex coordinate.

    Attributes:
        q: Column coordinate (east axis).
        r: Row coordinate (south-east axis).
    """

    q: int
    r: int

    # -- Cube coordinate -------------------------------------------------

    @property
    def s(self) -> int:
        """Implicit cube coordinate: s = -q - r."""
        return -self.q - self.r

    # -- Arithmetic ------------------------------------------------------

    def __add__(self, other: HexCoord) -> HexCoord:
        return HexCoord(self.q + other.q, self.r + other.r)

    def __sub__(self, other: HexCoord) -> HexCoord:
        return HexCoord(self.q - other.q, self.r - other.r)

    # -- Geometry --------------------------------------------------------

    def distance_to(self, other: HexCoord) -> int:
        """Hex grid distance (number of steps along hex edges)."""
        dq = abs(self.q - other.q)
        dr = abs(self.r - other.r)
        ds = abs(self.s - other.s)
        return max(dq, dr, ds)

    def neighbor(self, direction: Direction) -> HexCoord:
        """Return the adjacent hex one step along ``direction``."""
        return self + DIRECTION_VECTORS[direction]

    def neighbors(self) -> list[HexCoord]:
        """Return the 6 adjacent hex coordinates, in Direction order."""
        return [self + vec for vec in DIRECTION_VECTORS]

    def is_adjacent(self, other: HexCoord) -> bool:
        return other in self.neighbors()

    # -- Serialization ---------------------------------------------------

    def __repr__(self) -> str:
        return f"Hex({self.q},{self.r})"


# Axial step per Direction. Lines are built so that tiles pile up at the
# far end of the vector's opposite, which is the on-screen travel direction.
DIRECTION_VECTORS: tuple[HexCoord, ...] = (
    HexCoord(-1, 1),   # NE
    HexCoord(-1, 0),   # E
    HexCoord(0, -1),   # SE
    HexCoord(1, -1),   # SW
    HexCoord(1, 0),    # W
    HexCoord(0, 1),    # NW
)
