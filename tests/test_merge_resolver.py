"""Tests for triplet detection and merge resolution."""

import random

import pytest

from hexmerge.engine.merge_resolver import (
    can_merge_anywhere,
    find_all_triplets,
    find_triplets_at,
    merge_triplet,
    resolve_all_merges,
)
from hexmerge.models.board import Board
from hexmerge.models.grid import DEFAULT_GRID
from hexmerge.models.hex import HexCoord
from hexmerge.models.tile import Tile
from hexmerge.util.constants import WINNING_TILE


def _board(*specs: tuple[int, int, int]) -> Board:
    """Board from (value, q, r) triples, ids t-<index>."""
    return Board(tuple(Tile(f"t-{i}", v, HexCoord(q, r)) for i, (v, q, r) in enumerate(specs)))


# Three mutually adjacent cells around the origin
TRIANGLE = ((0, 0), (1, 0), (0, 1))

# Nine 2s where a later centre's triplet overlaps the first triangle
CLAIM_CASE = (
    (2, 0, 0), (2, 1, 0), (2, 0, 1),
    (2, 1, 1), (2, 0, 2), (2, 1, 2),
    (2, 0, 3), (2, -1, 3), (2, -1, 2),
)


class TestFindTripletsAt:
    def test_empty_cell(self):
        assert find_triplets_at(Board(), HexCoord(0, 0)) == ()

    def test_finds_triangle(self):
        b = _board(*[(2, q, r) for q, r in TRIANGLE])
        triplet = find_triplets_at(b, HexCoord(0, 0))
        assert [t.id for t in triplet] == ["t-0", "t-1", "t-2"]

    def test_values_must_match(self):
        b = _board((2, 0, 0), (2, 1, 0), (6, 0, 1))
        assert find_triplets_at(b, HexCoord(0, 0)) == ()

    def test_straight_line_is_not_a_triplet(self):
        b = _board((2, -1, 0), (2, 0, 0), (2, 1, 0))
        assert find_triplets_at(b, HexCoord(0, 0)) == ()

    def test_one_triplet_per_centre(self):
        # Two disjoint matching pairs around the centre: only the first counts
        b = _board((2, 0, 0), (2, 1, 0), (2, 1, -1), (2, -1, 0), (2, -1, 1))
        triplet = find_triplets_at(b, HexCoord(0, 0))
        assert len(triplet) == 3
        assert triplet[0].id == "t-0"


class TestFindAllTriplets:
    def test_none_on_empty_board(self):
        assert find_all_triplets(Board()) == []
        assert not can_merge_anywhere(Board())

    def test_no_tile_in_two_triplets(self):
        # A 2x2 rhombus of equal tiles holds two overlapping triangles
        b = _board((2, 0, 0), (2, 1, 0), (2, 0, 1), (2, 1, -1))
        triplets = find_all_triplets(b)
        assert len(triplets) == 1
        ids = [t.id for trip in triplets for t in trip]
        assert len(ids) == len(set(ids))

    def test_dropped_triplet_still_claims_its_tiles(self):
        # (1,1) pairs with (0,2) and (0,1), but (0,1) belongs to the first
        # triangle. (0,2) is claimed anyway, so it never scans as a centre
        # and (1,2) picks it up instead.
        b = _board(*CLAIM_CASE)
        ids = [[t.id for t in trip] for trip in find_all_triplets(b)]
        assert ids == [["t-0", "t-1", "t-2"], ["t-5", "t-6", "t-4"]]

    def test_disjoint_triplets_in_board_order(self):
        b = _board((6, 2, 0), (6, 2, -1), (6, 1, 0),
                   (2, -2, 0), (2, -2, 1), (2, -3, 1))
        triplets = find_all_triplets(b)
        assert [trip[0].value for trip in triplets] == [6, 2]


class TestMergeTriplet:
    def test_merge_produces_next_value_at_centroid(self):
        b = _board(*[(2, q, r) for q, r in TRIANGLE])
        result = merge_triplet(b, find_triplets_at(b, HexCoord(0, 0)))
        assert len(result.board) == 1
        merged = result.board.tiles[0]
        assert merged.value == 6
        assert merged.position == HexCoord(0, 0)
        assert merged.is_merged
        assert result.score_increase == 6
        assert set(result.merged_ids) == {"t-0", "t-1", "t-2"}

    def test_merged_tile_gets_fresh_id(self):
        b = _board(*[(18, q, r) for q, r in TRIANGLE])
        result = merge_triplet(b, find_triplets_at(b, HexCoord(0, 0)))
        assert result.board.tiles[0].id not in {"t-0", "t-1", "t-2"}

    def test_terminal_value_is_noop(self):
        b = _board(*[(WINNING_TILE, q, r) for q, r in TRIANGLE])
        result = merge_triplet(b, find_triplets_at(b, HexCoord(0, 0)))
        assert result.board is b
        assert result.score_increase == 0

    def test_wrong_size_is_noop(self):
        b = _board((2, 0, 0))
        assert merge_triplet(b, tuple(b.tiles)).board is b

    def test_other_tiles_untouched(self):
        b = _board((54, -3, 0), *[(2, q, r) for q, r in TRIANGLE])
        result = merge_triplet(b, find_triplets_at(b, HexCoord(0, 0)))
        assert result.board.tiles[0].id == "t-0"
        assert result.board.tiles[0].position == HexCoord(-3, 0)


class TestResolveAllMerges:
    def test_nothing_to_merge(self):
        b = _board((2, 0, 0), (6, 1, 0))
        result = resolve_all_merges(b)
        assert result.board is b
        assert result.score_increase == 0

    def test_single_merge(self):
        b = _board(*[(54, q, r) for q, r in TRIANGLE])
        result = resolve_all_merges(b)
        assert [t.value for t in result.board] == [162]
        assert result.score_increase == 3 * 54

    def test_chain_reaction(self):
        # 2s merge into a 6 at the origin, which completes a triangle of 6s
        b = _board((2, 0, 0), (2, 1, 0), (2, 0, 1), (6, -1, 0), (6, -1, 1))
        result = resolve_all_merges(b)
        assert len(result.board) == 1
        final = result.board.tiles[0]
        assert final.value == 18
        assert final.position == HexCoord(-1, 0)
        assert result.score_increase == 6 + 18
        assert len(result.merged_ids) == 6

    def test_two_independent_merges_in_one_pass(self):
        b = _board((6, 2, 0), (6, 2, -1), (6, 1, 0),
                   (2, -2, 0), (2, -2, 1), (2, -3, 1))
        result = resolve_all_merges(b)
        assert sorted(t.value for t in result.board) == [6, 18]
        assert result.score_increase == 18 + 6

    def test_claimed_tiles_decide_merge_positions(self):
        b = _board(*CLAIM_CASE)
        result = resolve_all_merges(b)
        placed = {(t.position.q, t.position.r): t.value for t in result.board}
        assert placed == {
            (0, 0): 6, (0, 2): 6,
            (1, 1): 2, (-1, 3): 2, (-1, 2): 2,
        }
        assert result.score_increase == 12
        assert sorted(result.merged_ids) == sorted(["t-0", "t-1", "t-2", "t-4", "t-5", "t-6"])

    def test_terminal_triplet_terminates(self):
        b = _board(*[(WINNING_TILE, q, r) for q, r in TRIANGLE])
        result = resolve_all_merges(b)
        assert result.board is b
        assert result.score_increase == 0

    def test_input_board_not_modified(self):
        b = _board(*[(2, q, r) for q, r in TRIANGLE])
        resolve_all_merges(b)
        assert len(b) == 3


def _scan_then_skip(board: Board) -> tuple[Board, int]:
    """Resolve merges by recording every found triplet and skipping at merge time.

    Triplets are collected with all three positions claimed; a triplet is
    skipped during the pass once any of its tiles is gone.
    """
    total = 0
    while True:
        found = []
        claimed = set()
        for tile in board:
            if tile.position in claimed:
                continue
            claimed.add(tile.position)
            triplet = find_triplets_at(board, tile.position)
            if len(triplet) == 3:
                claimed.update(t.position for t in triplet)
                found.append(triplet)
        if not found:
            return board, total
        for triplet in found:
            if all(board.has_id(t.id) for t in triplet):
                result = merge_triplet(board, triplet)
                board = result.board
                total += result.score_increase


def _layout(board: Board) -> dict:
    return {t.position: t.value for t in board}


class TestResolveMatchesSkipAtMerge:
    @pytest.mark.parametrize("seed", range(0, 400, 7))
    def test_random_boards(self, seed):
        rng = random.Random(seed)
        cells = rng.sample(DEFAULT_GRID.coords(), rng.randint(8, 30))
        b = Board(tuple(Tile(f"t-{i}", rng.choice((2, 6)), c) for i, c in enumerate(cells)))
        expected, score = _scan_then_skip(b)
        result = resolve_all_merges(b)
        assert _layout(result.board) == _layout(expected)
        assert result.score_increase == score
