"""Hexagonal grid model.

A hexagon of cells around the origin. Owns grid membership, the canonical
cell ordering and the per-direction slide lines.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from hexmerge.models.hex import Direction, HexCoord
from hexmerge.util.constants import GRID_RADIUS


@dataclass(frozen=True)
class HexGrid:
    """A hexagon-shaped board of the given axial radius.

    Attributes:
        radius: Maximum |q|, |r| and |s| of any cell.
    """

    radius: int = GRID_RADIUS
    _lines: dict = field(default_factory=dict, init=False, repr=False, compare=False, hash=False)

    def __post_init__(self) -> None:
        if self.radius < 0:
            raise ValueError(f"Grid radius must be >= 0, got {self.radius}")

    @classmethod
    def from_size(cls, size: int) -> HexGrid:
        """Build a grid from its width in cells (radius = size // 2)."""
        if size < 1:
            raise ValueError(f"Grid size must be >= 1, got {size}")
        return cls(radius=size // 2)

    # -- Membership ------------------------------------------------------

    def is_valid(self, coord: HexCoord) -> bool:
        """True if ``coord`` lies on the grid."""
        rad = self.radius
        return abs(coord.q) <= rad and abs(coord.r) <= rad and abs(coord.s) <= rad

    def __contains__(self, coord: object) -> bool:
        return isinstance(coord, HexCoord) and self.is_valid(coord)

    # -- Enumeration -----------------------------------------------------

    def coords(self) -> list[HexCoord]:
        """All cells, q ascending then r ascending."""
        rad = self.radius
        results: list[HexCoord] = []
        for q in range(-rad, rad + 1):
            for r in range(max(-rad, -q - rad), min(rad, -q + rad) + 1):
                results.append(HexCoord(q, r))
        return results

    @property
    def cell_count(self) -> int:
        rad = self.radius
        return 3 * rad * (rad + 1) + 1

    # -- Lines -----------------------------------------------------------

    def line(self, start: HexCoord, direction: Direction) -> list[HexCoord]:
        """Cells from ``start`` stepping along ``direction`` while on the grid."""
        step = direction.vector
        results = [start]
        current = start + step
        while self.is_valid(current):
            results.append(current)
            current = current + step
        return results

    def lines(self, direction: Direction) -> list[list[HexCoord]]:
        """Partition the grid into maximal straight lines along ``direction``.

        Each line starts at the cell furthest back (against the direction
        vector), so ``line[0]`` is where sliding packs the first tile.
        """
        cached = self._lines.get(direction)
        if cached is None:
            cached = self._build_lines(direction)
            self._lines[direction] = cached
        return [list(line) for line in cached]

    def _build_lines(self, direction: Direction) -> tuple[tuple[HexCoord, ...], ...]:
        back = direction.opposite.vector
        used: set[HexCoord] = set()
        result: list[tuple[HexCoord, ...]] = []
        for coord in self.coords():
            if coord in used:
                continue
            start = coord
            while self.is_valid(start + back):
                start = start + back
            line = self.line(start, direction)
            used.update(line)
            result.append(tuple(line))
        return tuple(result)


DEFAULT_GRID = HexGrid()
