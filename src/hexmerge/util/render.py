"""Plain-text board rendering for the terminal front end."""

from __future__ import annotations

from hexmerge.models.board import Board
from hexmerge.models.game_state import GameState
from hexmerge.models.grid import HexGrid
from hexmerge.models.hex import HexCoord

CELL_WIDTH = 8
EMPTY_CELL = "."


def render_board(board: Board, grid: HexGrid) -> str:
    """Lay out the hexagon row by row (one row per r).

    Rows are shifted by half a cell per step of r, mirroring hex_to_pixel's
    ``x ∝ q + r/2``.
    """
    rad = grid.radius
    half = CELL_WIDTH // 2
    lines: list[str] = []
    for r in range(-rad, rad + 1):
        q_min = max(-rad, -r - rad)
        q_max = min(rad, -r + rad)
        indent = (2 * q_min + r + 2 * rad) * half
        cells: list[str] = []
        for q in range(q_min, q_max + 1):
            tile = board.tile_at(HexCoord(q, r))
            label = str(tile.value) if tile is not None else EMPTY_CELL
            if tile is not None and tile.is_merged:
                label += "*"
            cells.append(label.center(CELL_WIDTH))
        lines.append(" " * indent + "".join(cells).rstrip())
    return "\n".join(lines)


def render_status(state: GameState, mode: str, remaining_seconds: float | None = None) -> str:
    """One-line score/status summary."""
    parts = [f"score {state.score}", f"best {state.best_score}",
             f"undos {state.undos_remaining}", f"mode {mode}"]
    if remaining_seconds is not None:
        parts.append(f"time {int(remaining_seconds)}s")
    if state.is_won:
        parts.append("YOU WIN")
    elif state.is_game_over:
        parts.append("GAME OVER")
    return " | ".join(parts)
