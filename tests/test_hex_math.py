"""Tests for hex coordinates, grid geometry and hex math utilities."""

import math

import pytest

from hexmerge.models.grid import HexGrid
from hexmerge.models.hex import DIRECTION_VECTORS, Direction, HexCoord
from hexmerge.util.hex_math import (
    centroid,
    coords_equal,
    get_all_grid_coords,
    get_all_lines,
    get_line,
    get_neighbors,
    hex_distance,
    hex_to_pixel,
    is_valid_coord,
)


class TestHexDistance:
    def test_distance_to_self_is_zero(self):
        h = HexCoord(3, -2)
        assert h.distance_to(h) == 0

    def test_distance_to_neighbor_is_one(self):
        a = HexCoord(0, 0)
        for n in a.neighbors():
            assert a.distance_to(n) == 1

    def test_distance_is_symmetric(self):
        a, b = HexCoord(1, 2), HexCoord(-3, 5)
        assert hex_distance(a, b) == hex_distance(b, a)

    def test_distance_known_value(self):
        assert hex_distance(HexCoord(0, 0), HexCoord(3, -1)) == 3


class TestHexNeighbors:
    def test_neighbor_count(self):
        assert len(get_neighbors(HexCoord(0, 0))) == 6

    def test_neighbors_follow_direction_order(self):
        center = HexCoord(1, -1)
        assert get_neighbors(center) == [center + v for v in DIRECTION_VECTORS]

    def test_off_grid_neighbors_included(self):
        corner = HexCoord(3, 0)
        outside = [n for n in get_neighbors(corner) if not is_valid_coord(n)]
        assert outside, "edge cell should have off-grid neighbours"

    def test_is_adjacent(self):
        assert HexCoord(0, 0).is_adjacent(HexCoord(1, -1))
        assert not HexCoord(0, 0).is_adjacent(HexCoord(1, 1))


class TestDirection:
    @pytest.mark.parametrize("direction", list(Direction))
    def test_opposite_is_three_steps_away(self, direction):
        assert direction.opposite == Direction((direction + 3) % 6)
        assert direction.vector + direction.opposite.vector == HexCoord(0, 0)

    def test_east_vector(self):
        assert Direction.EAST.vector == HexCoord(-1, 0)


class TestGridCoords:
    def test_default_grid_has_37_cells(self):
        coords = get_all_grid_coords()
        assert len(coords) == 37
        assert len(set(coords)) == 37

    def test_order_is_q_then_r(self):
        coords = get_all_grid_coords()
        assert coords[0] == HexCoord(-3, 0)
        assert coords[1] == HexCoord(-3, 1)
        assert coords[-1] == HexCoord(3, 0)
        assert coords == sorted(coords, key=lambda c: (c.q, c.r))

    def test_all_coords_valid(self):
        assert all(is_valid_coord(c) for c in get_all_grid_coords())

    @pytest.mark.parametrize("coord", [HexCoord(4, 0), HexCoord(2, 2), HexCoord(-1, -3)])
    def test_outside_coords_invalid(self, coord):
        assert not is_valid_coord(coord)

    @pytest.mark.parametrize("radius", [0, 1, 2, 3])
    def test_cell_count_matches_enumeration(self, radius):
        grid = HexGrid(radius)
        assert grid.cell_count == len(grid.coords())

    def test_from_size(self):
        assert HexGrid.from_size(7).radius == 3
        assert HexGrid.from_size(5).cell_count == 19

    def test_negative_radius_rejected(self):
        with pytest.raises(ValueError):
            HexGrid(-1)


class TestLines:
    @pytest.mark.parametrize("direction", list(Direction))
    def test_lines_partition_grid(self, direction):
        lines = get_all_lines(direction)
        flat = [c for line in lines for c in line]
        assert len(flat) == 37
        assert set(flat) == set(get_all_grid_coords())

    @pytest.mark.parametrize("direction", list(Direction))
    def test_lines_are_straight_and_maximal(self, direction):
        for line in get_all_lines(direction):
            for a, b in zip(line, line[1:]):
                assert b == a + direction.vector
            assert not is_valid_coord(line[0] + direction.opposite.vector)
            assert not is_valid_coord(line[-1] + direction.vector)

    def test_east_line_through_origin(self):
        lines = get_all_lines(Direction.EAST)
        row = next(line for line in lines if HexCoord(0, 0) in line)
        assert row == [HexCoord(q, 0) for q in range(3, -4, -1)]

    def test_line_lengths(self):
        lengths = sorted(len(line) for line in get_all_lines(Direction.NORTHWEST))
        assert lengths == [4, 4, 5, 5, 6, 6, 7]

    def test_get_line_stops_at_edge(self):
        assert get_line(HexCoord(1, 0), Direction.EAST) == [
            HexCoord(1, 0), HexCoord(0, 0), HexCoord(-1, 0), HexCoord(-2, 0), HexCoord(-3, 0),
        ]

    def test_returned_lines_are_copies(self):
        lines = get_all_lines(Direction.WEST)
        lines[0].clear()
        assert all(get_all_lines(Direction.WEST))


class TestPixelsAndCentroid:
    def test_origin_is_origin(self):
        assert hex_to_pixel(HexCoord(0, 0), 50) == (0.0, 0.0)

    def test_known_position(self):
        x, y = hex_to_pixel(HexCoord(1, 2), 10)
        assert x == pytest.approx(10 * (math.sqrt(3) + math.sqrt(3)))
        assert y == pytest.approx(30.0)

    def test_coords_equal(self):
        assert coords_equal(HexCoord(1, -1), HexCoord(1, -1))
        assert not coords_equal(HexCoord(1, -1), HexCoord(-1, 1))

    def test_centroid_of_triangle_lands_on_member(self):
        tri = [HexCoord(0, 0), HexCoord(1, 0), HexCoord(0, 1)]
        assert centroid(tri) == HexCoord(0, 0)

    def test_centroid_rounds_to_nearest(self):
        tri = [HexCoord(-1, 0), HexCoord(-1, 1), HexCoord(0, 0)]
        assert centroid(tri) == HexCoord(-1, 0)
