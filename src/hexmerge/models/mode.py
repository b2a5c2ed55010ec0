"""Game mode policy.

A mode only parameterizes the session (undo budget, win value, timers);
the move engine itself is mode-agnostic.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from hexmerge.util.constants import WINNING_TILE


class GameMode(Enum):
    """Available game modes."""

    CLASSIC = "classic"
    TIME_TRIAL = "timeTrials"
    FAST_PACE = "fastPace"


@dataclass(frozen=True)
class GameModeConfig:
    """Settings for one game mode.

    Attributes:
        mode: Which mode this configures.
        undo_limit: Undos granted per game.
        winning_tile: Tile value that wins the game.
        timer_duration: Seconds per game (time trial only).
        auto_spawn_interval: Milliseconds between forced spawns (fast pace only).
    """

    mode: GameMode
    undo_limit: int
    winning_tile: int = WINNING_TILE
    timer_duration: Optional[float] = None
    auto_spawn_interval: Optional[float] = None

    @property
    def is_timed(self) -> bool:
        return self.timer_duration is not None or self.auto_spawn_interval is not None


GAME_MODES: dict[GameMode, GameModeConfig] = {
    GameMode.CLASSIC: GameModeConfig(GameMode.CLASSIC, undo_limit=3),
    GameMode.TIME_TRIAL: GameModeConfig(GameMode.TIME_TRIAL, undo_limit=0, timer_duration=60),
    GameMode.FAST_PACE: GameModeConfig(GameMode.FAST_PACE, undo_limit=0, auto_spawn_interval=1000),
}


def parse_mode(mode: Union[GameMode, str]) -> GameMode:
    """Accept a GameMode, its value (``"timeTrials"``) or its name (``"time_trial"``).

    String matching ignores case.
    """
    if isinstance(mode, GameMode):
        return mode
    key = str(mode).lower()
    for candidate in GameMode:
        if key in (candidate.value.lower(), candidate.name.lower()):
            return candidate
    raise ValueError(f"Unknown game mode: {mode!r}")


def get_mode_config(
    mode: Union[GameMode, str],
    table: Optional[dict[GameMode, GameModeConfig]] = None,
) -> GameModeConfig:
    """Look up the settings for ``mode`` in ``table`` (default: GAME_MODES)."""
    return (table or GAME_MODES)[parse_mode(mode)]
