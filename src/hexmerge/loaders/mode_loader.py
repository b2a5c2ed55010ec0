"""Mode loader — applies per-mode overrides from config/modes.yaml.

Format::

    classic:
      undo_limit: 3
    timeTrials:
      timer_duration: 90

Top-level keys are mode values (``timeTrials``) or names (``time_trial``).
Unlisted modes and fields keep the built-in GAME_MODES settings.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

import yaml

from hexmerge.models.mode import GAME_MODES, GameMode, GameModeConfig, parse_mode

log = logging.getLogger(__name__)

DEFAULT_MODES_PATH = "config/modes.yaml"

_FIELDS = ("undo_limit", "winning_tile", "timer_duration", "auto_spawn_interval")


def load_modes(path: str | Path = DEFAULT_MODES_PATH) -> dict[GameMode, GameModeConfig]:
    """Load the mode table, overriding the built-in defaults.

    Returns:
        A new dict; GAME_MODES itself is never modified.
    """
    table = dict(GAME_MODES)
    p = Path(path)
    if not p.exists():
        log.warning("Mode config not found at %s — using built-in modes", p)
        return table

    with p.open() as f:
        raw = yaml.safe_load(f) or {}

    for key, attrs in raw.items():
        if not isinstance(attrs, dict):
            continue
        mode = parse_mode(str(key))
        overrides = {k: attrs[k] for k in _FIELDS if k in attrs}
        table[mode] = replace(table[mode], **overrides)
        log.info("  mode %s: %s", mode.value, overrides)

    return table
