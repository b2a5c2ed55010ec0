"""Mode scheduler — asyncio tick loop for the timed modes.

Responsibilities:
- Time trial: count down and end the game at zero
- Fast pace: spawn a tile every ``auto_spawn_interval`` ms
- Restart the countdown whenever a new game starts

Classic mode needs no scheduling; the loop still runs but does nothing.
All game changes go through GameService on the event-loop thread.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Optional

from hexmerge.util.events import GameReset

if TYPE_CHECKING:
    from hexmerge.engine.game_service import GameService
    from hexmerge.loaders.game_config_loader import GameConfig
    from hexmerge.util.events import EventBus

log = logging.getLogger(__name__)


class GameLoop:
    """Drives time-based rules of the active mode.

    Args:
        event_bus: Used to learn about resets and mode switches.
        game_service: The session to act on.
        game_config: Supplies the tick length (default 100 ms).
    """

    def __init__(
        self,
        event_bus: EventBus,
        game_service: GameService,
        game_config: GameConfig | None = None,
    ) -> None:
        self._events = event_bus
        self._game = game_service
        self._running = False
        self._step_interval = (game_config.tick_ms / 1000.0) if game_config else 0.1

        self.remaining_seconds: Optional[float] = None
        self._spawn_elapsed_ms: float = 0.0
        self._timer_fired = False

        # --- Monitoring counters ---
        self.tick_count: int = 0
        self.started_at: float = 0.0
        self.spawn_count: int = 0

        self._events.on(GameReset, self._on_game_reset)
        self.restart()

    async def run(self) -> None:
        """Start the loop. Runs until stop() is called."""
        self._running = True
        self.started_at = time.monotonic()
        last = self.started_at
        while self._running:
            now = time.monotonic()
            dt = now - last
            last = now

            self.step(dt)
            self.tick_count += 1

            await asyncio.sleep(self._step_interval)

    @property
    def uptime_seconds(self) -> float:
        """Seconds since the loop started."""
        if self.started_at == 0.0:
            return 0.0
        return time.monotonic() - self.started_at

    @property
    def is_running(self) -> bool:
        return self._running

    def stop(self) -> None:
        """Signal the loop to stop."""
        self._running = False

    def restart(self) -> None:
        """Reset the countdown and spawn clock for the current mode."""
        mode = self._game.mode
        self.remaining_seconds = float(mode.timer_duration) if mode.timer_duration is not None else None
        self._spawn_elapsed_ms = 0.0
        self._timer_fired = False

    def step(self, dt: float) -> None:
        """Advance the mode clocks by ``dt`` seconds."""
        if not self._game.state.is_playing:
            return
        mode = self._game.mode

        # 1. Time trial countdown
        if self.remaining_seconds is not None and not self._timer_fired:
            self.remaining_seconds = max(0.0, self.remaining_seconds - dt)
            if self.remaining_seconds == 0.0:
                self._timer_fired = True
                self._game.expire_timer()
                return

        # 2. Fast pace auto-spawn
        if mode.auto_spawn_interval:
            self._spawn_elapsed_ms += dt * 1000.0
            while self._spawn_elapsed_ms >= mode.auto_spawn_interval:
                self._spawn_elapsed_ms -= mode.auto_spawn_interval
                if self._game.auto_spawn():
                    self.spawn_count += 1
                if not self._game.state.is_playing:
                    break

    def _on_game_reset(self, event: GameReset) -> None:
        log.debug("Scheduler restarted for mode %s", event.mode)
        self.restart()
