"""Merge resolver — triplet detection and chained merge resolution.

A triplet is three pairwise-adjacent tiles of one value. Merging replaces
them with a single tile of the next progression value at their rounded
centroid and scores ``value * 3``. Resolution runs in passes until a pass
finds nothing, so a merged tile can trigger further merges (chains).

Tie-breaking is deterministic: tiles are scanned in board order and
neighbours in Direction order; only the first qualifying pair is used
for each centre tile.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from hexmerge.models.board import Board
from hexmerge.models.hex import HexCoord
from hexmerge.models.tile import Tile, next_value
from hexmerge.util.constants import MERGE_SCORE_FACTOR
from hexmerge.util.hex_math import centroid

log = logging.getLogger(__name__)

Triplet = tuple[Tile, Tile, Tile]


@dataclass(frozen=True)
class MergeResult:
    """Outcome of merging.

    Attributes:
        board: Board after all merges.
        score_increase: Points earned.
        merged_ids: Ids of every consumed tile, in merge order.
    """

    board: Board
    score_increase: int = 0
    merged_ids: tuple[str, ...] = ()


def find_triplets_at(board: Board, coord: HexCoord) -> tuple[Tile, ...]:
    """Find a triplet centred on the tile at ``coord``.

    Returns:
        ``(centre, a, b)`` for the first mutually adjacent pair of matching
        neighbours, or an empty tuple.
    """
    centre = board.tile_at(coord)
    if centre is None:
        return ()

    matching = [
        tile for tile in (board.tile_at(n) for n in coord.neighbors())
        if tile is not None and tile.value == centre.value
    ]
    if len(matching) < 2:
        return ()

    for i, tile_a in enumerate(matching):
        for tile_b in matching[i + 1:]:
            if tile_a.position.is_adjacent(tile_b.position):
                return (centre, tile_a, tile_b)
    return ()


def find_all_triplets(board: Board) -> list[Triplet]:
    """All non-overlapping triplets, in board scan order.

    Every tile of a found triplet is claimed and never starts a scan of
    its own, even when the triplet is dropped for sharing a tile with an
    earlier recorded one.
    """
    triplets: list[Triplet] = []
    claimed: set[HexCoord] = set()
    taken: set[str] = set()

    for tile in board:
        if tile.position in claimed:
            continue
        claimed.add(tile.position)
        triplet = find_triplets_at(board, tile.position)
        if len(triplet) != 3:
            continue
        claimed.update(t.position for t in triplet)
        if any(t.id in taken for t in triplet):
            continue
        taken.update(t.id for t in triplet)
        triplets.append(triplet)

    return triplets


def can_merge_anywhere(board: Board) -> bool:
    return bool(find_all_triplets(board))


def merge_triplet(board: Board, triplet: tuple[Tile, ...]) -> MergeResult:
    """Replace the three tiles with one tile of the next value.

    A triplet of the terminal value (or anything but three tiles) is left
    alone and scores nothing.
    """
    if len(triplet) != 3:
        return MergeResult(board)

    old_value = triplet[0].value
    new_value = next_value(old_value)
    if new_value is None:
        return MergeResult(board)

    position = centroid([t.position for t in triplet])
    merged = Tile.create(new_value, position, is_merged=True)
    consumed = tuple(t.id for t in triplet)
    new_board = board.without(consumed).with_tile(merged)

    log.debug("Merged 3x%d at %r -> %d", old_value, position, new_value)
    return MergeResult(new_board, old_value * MERGE_SCORE_FACTOR, consumed)


def resolve_all_merges(board: Board) -> MergeResult:
    """Merge repeatedly until no triplet remains.

    Within one pass every triplet found is merged unless one of its tiles
    was already consumed earlier in the same pass.
    """
    current = board
    total = 0
    consumed: list[str] = []
    passes = 0

    while True:
        triplets = find_all_triplets(current)
        if not triplets:
            break
        passes += 1
        merged_in_pass = 0
        for triplet in triplets:
            if not all(current.has_id(t.id) for t in triplet):
                continue
            result = merge_triplet(current, triplet)
            if not result.merged_ids:
                continue
            current = result.board
            total += result.score_increase
            consumed.extend(result.merged_ids)
            merged_in_pass += 1
        if merged_in_pass == 0:
            # Only terminal-value triplets left; they never merge.
            break

    if passes:
        log.debug("Resolved merges in %d pass(es), +%d points", passes, total)
    return MergeResult(current, total, tuple(consumed))
