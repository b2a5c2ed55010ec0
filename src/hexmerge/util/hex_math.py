"""Hex math utilities — geometry functions for the hexagonal board.

Free-function view of ``HexCoord`` / ``HexGrid`` for callers that work on
the default grid (renderers, input layers). All functions operate on
HexCoord (axial coordinates).
Reference: https://www.redblobgames.com/grids/hexagons/
"""

from __future__ import annotations

import math

from hexmerge.models.grid import DEFAULT_GRID, HexGrid
from hexmerge.models.hex import Direction, HexCoord

_SQRT3 = math.sqrt(3)


def coords_equal(a: HexCoord, b: HexCoord) -> bool:
    """Exact equality on (q, r)."""
    return a.q == b.q and a.r == b.r


def hex_distance(a: HexCoord, b: HexCoord) -> int:
    """Compute the hex grid distance between two coordinates."""
    return a.distance_to(b)


def get_neighbors(coord: HexCoord) -> list[HexCoord]:
    """Return the 6 neighbors of a hex coordinate (off-grid ones included)."""
    return coord.neighbors()


def is_valid_coord(coord: HexCoord, grid: HexGrid = DEFAULT_GRID) -> bool:
    return grid.is_valid(coord)


def get_all_grid_coords(grid: HexGrid = DEFAULT_GRID) -> list[HexCoord]:
    """Every cell of the grid, q ascending then r ascending."""
    return grid.coords()


def get_line(start: HexCoord, direction: Direction, grid: HexGrid = DEFAULT_GRID) -> list[HexCoord]:
    return grid.line(start, direction)


def get_all_lines(direction: Direction, grid: HexGrid = DEFAULT_GRID) -> list[list[HexCoord]]:
    """Disjoint lines along ``direction`` covering the whole grid."""
    return grid.lines(direction)


def hex_to_pixel(coord: HexCoord, size: float) -> tuple[float, float]:
    """Axial → pixel centre for a layout with hexes of radius ``size``.

    Returns:
        ``(x, y)`` relative to the centre of the origin hex.
    """
    x = size * (_SQRT3 * coord.q + _SQRT3 / 2 * coord.r)
    y = size * (3 / 2 * coord.r)
    return x, y


def centroid(coords: list[HexCoord]) -> HexCoord:
    """Rounded componentwise average of the given coordinates.

    Halves round up, matching JavaScript ``Math.round``.
    """
    n = len(coords)
    q = math.floor(sum(c.q for c in coords) / n + 0.5)
    r = math.floor(sum(c.r for c in coords) / n + 0.5)
    return HexCoord(q, r)
