"""Terminal entry point.

Initializes all components and runs the asyncio event loop:
1. Load configuration (game settings, mode table)
2. Restore the best score
3. Create the event bus, game service and mode scheduler
4. Wire event handlers (rendering, best-score saving)
5. Read commands from stdin until quit

Usage:
    python -m hexmerge.main --mode timeTrials
    # or via entry point:
    hexmerge
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import random
import sys
from dataclasses import dataclass, field
from typing import Optional

from hexmerge.engine.game_loop import GameLoop
from hexmerge.engine.game_service import GameService
from hexmerge.loaders.game_config_loader import GameConfig, load_game_config
from hexmerge.loaders.mode_loader import load_modes
from hexmerge.models.hex import Direction
from hexmerge.models.mode import GameMode, GameModeConfig
from hexmerge.persistence.best_score import load_best_score, save_best_score
from hexmerge.util.events import (
    BestScoreChanged,
    EventBus,
    GameOver,
    GameReset,
    GameWon,
    MoveUndone,
    TileSpawned,
    TilesMoved,
    TimerExpired,
)
from hexmerge.util.input_mapping import key_to_action
from hexmerge.util.render import render_board, render_status

log = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = "config"


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------


@dataclass
class Configuration:
    """Holds all data loaded from config files."""

    game: GameConfig = field(default_factory=GameConfig)
    modes: dict[GameMode, GameModeConfig] = field(default_factory=dict)


@dataclass
class Services:
    """Holds references to all session components."""

    event_bus: Optional[EventBus] = None
    game_service: Optional[GameService] = None
    game_loop: Optional[GameLoop] = None
    best_score_path: str = ""


# ===================================================================
# 1. Load configuration
# ===================================================================


def load_configuration(config_dir: str = DEFAULT_CONFIG_DIR) -> Configuration:
    """Load game settings and mode overrides from YAML files."""
    log.info("Loading configuration …")
    game_cfg = load_game_config(os.path.join(config_dir, "game.yaml"))
    modes = load_modes(os.path.join(config_dir, "modes.yaml"))
    log.info("  grid size %d, %d modes", game_cfg.grid_size, len(modes))
    return Configuration(game=game_cfg, modes=modes)


# ===================================================================
# 2. Create services
# ===================================================================


def create_services(
    config: Configuration,
    mode: Optional[str] = None,
    seed: Optional[int] = None,
    best_score_path: Optional[str] = None,
) -> Services:
    """Instantiate the session with its dependencies injected."""
    log.info("Creating services …")
    path = best_score_path or config.game.best_score_path
    best = load_best_score(path)

    event_bus = EventBus()
    game_service = GameService(
        event_bus,
        game_config=config.game,
        modes=config.modes,
        mode=mode or config.game.default_mode,
        best_score=best,
        rng=random.Random(seed),
    )
    game_loop = GameLoop(event_bus, game_service, config.game)
    return Services(event_bus=event_bus, game_service=game_service,
                    game_loop=game_loop, best_score_path=path)


# ===================================================================
# 3. Wire up event handlers
# ===================================================================


def wire_events(services: Services, out=None) -> None:
    """Redraw on every change and persist new best scores."""
    out = out or sys.stdout
    bus = services.event_bus
    game = services.game_service
    loop = services.game_loop

    def redraw(_evt: object = None) -> None:
        print(render_board(game.state.board, game.rules.grid), file=out)
        print(render_status(game.state, game.mode.mode.value, loop.remaining_seconds), file=out)

    for evt_type in (TilesMoved, TileSpawned, MoveUndone, GameReset):
        bus.on(evt_type, redraw)

    bus.on(GameWon, lambda evt: print(f"You reached {game.mode.winning_tile}!", file=out))
    bus.on(TimerExpired, lambda evt: print("Time is up.", file=out))
    bus.on(GameOver, lambda evt: print(f"Game over. Final score {evt.score}.", file=out))
    bus.on(BestScoreChanged, lambda evt: save_best_score(evt.best_score, services.best_score_path))


# ===================================================================
# 4. Command handling
# ===================================================================


def handle_command(services: Services, line: str, bindings: dict[str, str]) -> bool:
    """Apply one input line. Returns False when the player quits."""
    game = services.game_service
    key = line.strip().lower()
    if not key:
        return True
    if key.startswith("mode "):
        try:
            game.set_mode(key.split(None, 1)[1])
        except ValueError as exc:
            print(exc)
        return True

    action = key_to_action(key, bindings)
    if action is None:
        print(f"Unknown key {key!r}")
    elif action == "quit":
        return False
    elif action == "undo":
        if not game.undo():
            print("Nothing to undo")
    elif action == "reset":
        game.reset()
    elif isinstance(action, Direction):
        game.move(action)
    return True


async def _read_commands(services: Services, bindings: dict[str, str]) -> None:
    loop = asyncio.get_running_loop()
    while True:
        line = await loop.run_in_executor(None, sys.stdin.readline)
        if not line:
            break
        if not handle_command(services, line, bindings):
            break


# ===================================================================
# Entry points
# ===================================================================


async def _start(config_dir: str, mode: Optional[str], seed: Optional[int],
                 best_score_path: Optional[str]) -> None:
    config = load_configuration(config_dir)
    logging.getLogger().setLevel(config.game.log_level.upper())

    services = create_services(config, mode=mode, seed=seed, best_score_path=best_score_path)
    wire_events(services)

    game = services.game_service
    print(render_board(game.state.board, game.rules.grid))
    print(render_status(game.state, game.mode.mode.value, services.game_loop.remaining_seconds))

    ticker = asyncio.create_task(services.game_loop.run())
    try:
        await _read_commands(services, config.game.key_bindings)
    finally:
        services.game_loop.stop()
        await ticker
        save_best_score(game.state.best_score, services.best_score_path)
        log.info("Goodbye")


def main() -> None:
    """Entry point for the terminal game."""
    parser = argparse.ArgumentParser(description="HexMerge — hexagonal merge-three puzzle")
    parser.add_argument(
        "--mode",
        type=str,
        default=None,
        help="classic, timeTrials or fastPace (default: from game.yaml)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for tile spawns (default: random)"
    )
    parser.add_argument(
        "--config-dir",
        type=str,
        default=DEFAULT_CONFIG_DIR,
        help="Directory holding game.yaml and modes.yaml (default: config)"
    )
    parser.add_argument(
        "--best-score-file",
        type=str,
        default=None,
        help="Where the best score is kept (default: from game.yaml)"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    try:
        asyncio.run(_start(args.config_dir, args.mode, args.seed, args.best_score_file))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
