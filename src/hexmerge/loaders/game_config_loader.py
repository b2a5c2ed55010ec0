"""Game configuration — loads tunable settings from config/game.yaml.

Provides a single ``GameConfig`` dataclass that is loaded once at startup
and then passed (or injected) wherever settings are needed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

import yaml

from hexmerge.engine.move_engine import EngineRules
from hexmerge.models.grid import HexGrid
from hexmerge.util import constants

log = logging.getLogger(__name__)

DEFAULT_GAME_CONFIG_PATH = "config/game.yaml"

DEFAULT_KEY_BINDINGS: Dict[str, str] = {
    "e": "NORTHEAST",
    "d": "EAST",
    "c": "SOUTHEAST",
    "x": "SOUTHWEST",
    "s": "WEST",
    "w": "NORTHWEST",
    "r": "reset",
    "u": "undo",
    "q": "quit",
}


@dataclass
class GameConfig:
    """All tunable gameplay and front-end settings.

    Loaded from ``config/game.yaml``.  Every field has a sensible default
    so the game can start even without the file.
    """

    # -- Board -------------------------------------------------------
    grid_size: int = constants.GRID_SIZE
    initial_tiles: int = constants.INITIAL_TILES
    high_spawn_chance: float = constants.HIGH_SPAWN_CHANCE

    # -- Session -----------------------------------------------------
    default_mode: str = "classic"
    tick_ms: float = 100.0

    # -- Input -------------------------------------------------------
    key_bindings: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_KEY_BINDINGS))

    # -- Persistence / logging ---------------------------------------
    best_score_path: str = "best_score.yaml"
    log_level: str = "INFO"

    def to_rules(self, winning_tile: int = constants.WINNING_TILE, initial_undos: int = 3) -> EngineRules:
        """Engine rules for this configuration."""
        return EngineRules(
            grid=HexGrid.from_size(self.grid_size),
            initial_tiles=self.initial_tiles,
            high_spawn_chance=self.high_spawn_chance,
            winning_tile=winning_tile,
            initial_undos=initial_undos,
        )


def load_game_config(path: str = DEFAULT_GAME_CONFIG_PATH) -> GameConfig:
    """Load game configuration from a YAML file.

    Missing keys fall back to dataclass defaults.  If the file does not
    exist, a warning is logged and pure defaults are returned.
    """
    p = Path(path)
    if not p.exists():
        log.warning("Game config not found at %s — using defaults", p)
        return GameConfig()

    with p.open() as f:
        raw = yaml.safe_load(f) or {}

    log.info("Loaded game config from %s (%d keys)", p, len(raw))

    # Custom bindings extend the defaults rather than replacing them
    bindings_raw = raw.pop("key_bindings", None)
    bindings = dict(DEFAULT_KEY_BINDINGS)
    if isinstance(bindings_raw, dict):
        bindings.update({str(k): str(v) for k, v in bindings_raw.items()})

    unknown = sorted(k for k in raw if k not in GameConfig.__dataclass_fields__)
    if unknown:
        log.warning("Ignoring unknown game config keys: %s", ", ".join(unknown))

    cfg = GameConfig(key_bindings=bindings, **{
        k: v for k, v in raw.items()
        if k in GameConfig.__dataclass_fields__
    })
    return cfg
