"""Move engine — pure state transitions for one game.

Responsibilities:
- Initial fill and random tile spawning
- Directional sliding along grid lines
- Merge resolution (delegated to merge_resolver)
- Win / game-over evaluation
- Undo history and reset

Every function takes a GameState and returns a new one; nothing here
mutates its input. Randomness comes from an injectable ``random.Random``
so games are reproducible from a seed.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional

from hexmerge.engine.merge_resolver import can_merge_anywhere, resolve_all_merges
from hexmerge.models.board import Board
from hexmerge.models.game_state import GameState, HistoryEntry
from hexmerge.models.grid import DEFAULT_GRID, HexGrid
from hexmerge.models.hex import Direction
from hexmerge.models.mode import GAME_MODES, GameMode
from hexmerge.models.tile import Tile
from hexmerge.util import constants

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineRules:
    """Tunable rules the engine runs under.

    Attributes:
        grid: Board geometry.
        initial_tiles: Tiles spawned on a fresh board.
        high_spawn_chance: Probability a spawn is the high value.
        winning_tile: Any tile at or above this value wins.
        initial_undos: Undo budget of a freshly initialized state.
    """

    grid: HexGrid = DEFAULT_GRID
    initial_tiles: int = constants.INITIAL_TILES
    high_spawn_chance: float = constants.HIGH_SPAWN_CHANCE
    winning_tile: int = constants.WINNING_TILE
    initial_undos: int = GAME_MODES[GameMode.CLASSIC].undo_limit


DEFAULT_RULES = EngineRules()


def _rng(rng: Optional[random.Random]) -> random.Random:
    return rng if rng is not None else random.Random()


# -- Spawning ------------------------------------------------------------

def add_random_tile(board: Board, rng: Optional[random.Random] = None,
                    rules: EngineRules = DEFAULT_RULES) -> Board:
    """Place one new tile on a uniformly random empty cell.

    Returns the board unchanged when it is full.
    """
    empty = board.empty_coords(rules.grid)
    if not empty:
        return board
    rng = _rng(rng)
    position = rng.choice(empty)
    value = constants.LOW_SPAWN_VALUE
    if rng.random() >= 1.0 - rules.high_spawn_chance:
        value = constants.HIGH_SPAWN_VALUE
    tile = Tile.create(value, position, is_new=True)
    log.debug("Spawned %d at %r", value, position)
    return board.with_tile(tile)


def evaluate_terminal(board: Board, rules: EngineRules = DEFAULT_RULES) -> tuple[bool, bool]:
    """Return ``(is_won, is_game_over)`` for ``board``."""
    is_won = board.max_value() >= rules.winning_tile
    is_game_over = board.is_full(rules.grid) and not can_merge_anywhere(board)
    return is_won, is_game_over


def has_valid_moves(board: Board, grid: HexGrid = DEFAULT_GRID) -> bool:
    """True while an empty cell or a triplet exists."""
    if not board.is_full(grid):
        return True
    return can_merge_anywhere(board)


# -- Lifecycle -----------------------------------------------------------

def initialize_game_state(rng: Optional[random.Random] = None,
                          rules: EngineRules = DEFAULT_RULES) -> GameState:
    """A fresh game: empty board plus ``rules.initial_tiles`` spawns."""
    rng = _rng(rng)
    board = Board()
    for _ in range(rules.initial_tiles):
        board = add_random_tile(board, rng, rules)
    return GameState(board=board, undos_remaining=rules.initial_undos)


def reset_game(state: GameState, rng: Optional[random.Random] = None,
               rules: EngineRules = DEFAULT_RULES) -> GameState:
    """Start over, carrying the best score forward.

    The caller re-applies the active mode's undo budget.
    """
    return initialize_game_state(rng, rules).evolve(best_score=state.best_score)


# -- Moves ---------------------------------------------------------------

def slide(board: Board, direction: Direction, grid: HexGrid = DEFAULT_GRID) -> tuple[Board, bool]:
    """Pack every line's tiles towards ``line[0]``, keeping their order.

    Returns:
        The slid board and whether any tile changed position.
    """
    tiles = list(board)
    moved = False

    for line in grid.lines(direction):
        by_pos = {t.position: t for t in tiles}
        in_line = [by_pos[c] for c in line if c in by_pos]
        if not in_line:
            continue
        line_ids = {t.id for t in in_line}
        tiles = [t for t in tiles if t.id not in line_ids]
        for target, tile in zip(line, in_line):
            if tile.position != target:
                moved = True
                tile = tile.moved_to(target)
            tiles.append(tile)

    return Board(tuple(tiles)), moved


def move_in_direction(state: GameState, direction: Direction,
                      rng: Optional[random.Random] = None,
                      rules: EngineRules = DEFAULT_RULES) -> GameState:
    """Slide, merge, spawn and re-evaluate.

    If no tile moves the input state itself is returned: no merge, spawn
    or history entry happens even when a triplet is present. The engine
    does not refuse moves on a finished game; callers check the flags.
    """
    snapshot = HistoryEntry(board=state.board, score=state.score)

    slid, moved = slide(state.board.cleared_flags(), direction, rules.grid)
    if not moved:
        log.debug("Move %s changed nothing", direction.name)
        return state

    merged = resolve_all_merges(slid)
    score = state.score + merged.score_increase
    board = add_random_tile(merged.board, rng, rules)
    is_won, is_game_over = evaluate_terminal(board, rules)

    return state.evolve(
        board=board,
        score=score,
        best_score=max(state.best_score, score),
        is_won=is_won,
        is_game_over=is_game_over,
        can_undo=True,
        history=state.history + (snapshot,),
    )


def spawn_tile(state: GameState, rng: Optional[random.Random] = None,
               rules: EngineRules = DEFAULT_RULES) -> GameState:
    """Add one random tile outside a move (timed auto-spawn).

    No history entry is recorded. A full board returns ``state`` itself.
    """
    board = add_random_tile(state.board, rng, rules)
    if board is state.board:
        return state
    is_won, is_game_over = evaluate_terminal(board, rules)
    return state.evolve(board=board, is_won=is_won, is_game_over=is_game_over)


def undo_move(state: GameState) -> GameState:
    """Restore the board and score before the last move.

    No-op without history or without undo budget. Undo always returns to
    a playable state.
    """
    if not state.can_undo or not state.history or state.undos_remaining <= 0:
        return state

    last = state.history[-1]
    history = state.history[:-1]
    return state.evolve(
        board=last.board,
        score=last.score,
        is_game_over=False,
        is_won=False,
        can_undo=bool(history),
        history=history,
        undos_remaining=state.undos_remaining - 1,
    )
