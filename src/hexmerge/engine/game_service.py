"""Game service — owns the live GameState of one session.

Responsibilities:
- Dispatch moves (refusing them once the game is won or over)
- Undo / reset / mode switching with the mode's undo budget
- Timed-mode hooks (auto-spawn, timer expiry)
- Track the last merge triplet for merge effects
- Publish every change on the EventBus

The engine functions stay pure; this is the one place that holds state.
No I/O happens here.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from hexmerge.loaders.game_config_loader import GameConfig

from hexmerge.engine import move_engine
from hexmerge.engine.move_engine import EngineRules
from hexmerge.models.game_state import GameState
from hexmerge.models.hex import Direction
from hexmerge.models.mode import GAME_MODES, GameMode, GameModeConfig, get_mode_config
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

log = logging.getLogger(__name__)


class GameService:
    """Session state holder and event publisher.

    Args:
        event_bus: Where state changes are published.
        game_config: Board settings (defaults when None).
        modes: Mode table (defaults to GAME_MODES).
        mode: Initial mode.
        best_score: Best score restored from persistence.
        rng: Random source for spawns; seed it for reproducible games.
    """

    def __init__(
        self,
        event_bus: EventBus,
        game_config: GameConfig | None = None,
        modes: Optional[dict[GameMode, GameModeConfig]] = None,
        mode: Union[GameMode, str] = GameMode.CLASSIC,
        best_score: int = 0,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._events = event_bus
        self._config = game_config
        self._modes = modes or dict(GAME_MODES)
        self._rng = rng or random.Random()
        self._mode = get_mode_config(mode, self._modes)
        self._rules = self._rules_for(self._mode)

        self.last_merge_triplet: Optional[tuple[str, ...]] = None
        self._state = move_engine.initialize_game_state(self._rng, self._rules).evolve(
            best_score=best_score,
            undos_remaining=self._mode.undo_limit,
        )
        log.info("Game started: mode=%s best=%d", self._mode.mode.value, best_score)

    # -- Read access -----------------------------------------------------

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def mode(self) -> GameModeConfig:
        return self._mode

    @property
    def rules(self) -> EngineRules:
        return self._rules

    # -- Player actions --------------------------------------------------

    def move(self, direction: Direction) -> bool:
        """Apply a move.

        Returns:
            True if the board changed. Moves on a won or finished game are
            ignored.
        """
        current = self._state
        if not current.is_playing:
            log.debug("Move %s ignored: game already finished", direction.name)
            return False

        new_state = move_engine.move_in_direction(current, direction, self._rng, self._rules)
        if new_state is current:
            return False

        gone = current.board.ids - new_state.board.ids
        removed = tuple(t.id for t in current.board if t.id in gone)
        has_merged = any(t.is_merged for t in new_state.board)
        self.last_merge_triplet = removed if has_merged and len(removed) == 3 else None

        self._commit(new_state)
        self._events.emit(TilesMoved(
            direction=int(direction),
            score=new_state.score,
            score_gained=new_state.score - current.score,
            merged_ids=removed,
        ))
        self._emit_transitions(current, new_state)
        return True

    def undo(self) -> bool:
        """Take back the last move if the budget allows."""
        new_state = move_engine.undo_move(self._state)
        if new_state is self._state:
            return False
        self._commit(new_state)
        self.last_merge_triplet = None
        self._events.emit(MoveUndone(undos_remaining=new_state.undos_remaining))
        return True

    def reset(self) -> None:
        """Start a new game in the current mode."""
        self._state = move_engine.reset_game(self._state, self._rng, self._rules).evolve(
            undos_remaining=self._mode.undo_limit,
        )
        self.last_merge_triplet = None
        log.info("Game reset: mode=%s", self._mode.mode.value)
        self._events.emit(GameReset(mode=self._mode.mode.value))

    def set_mode(self, mode: Union[GameMode, str]) -> None:
        """Switch mode; this always starts a new game."""
        self._mode = get_mode_config(mode, self._modes)
        self._rules = self._rules_for(self._mode)
        self.reset()

    # -- Timed-mode hooks ------------------------------------------------

    def auto_spawn(self) -> bool:
        """Spawn a tile without a move (fast pace)."""
        current = self._state
        if not current.is_playing:
            return False
        new_state = move_engine.spawn_tile(current, self._rng, self._rules)
        if new_state is current:
            return False
        self._commit(new_state)
        spawned = new_state.board.tiles[-1]
        self._events.emit(TileSpawned(tile_id=spawned.id, value=spawned.value))
        self._emit_transitions(current, new_state)
        return True

    def expire_timer(self) -> None:
        """End a time-trial game."""
        current = self._state
        if not current.is_playing:
            return
        self._state = current.evolve(is_game_over=True)
        log.info("Time is up: score=%d", current.score)
        self._events.emit(TimerExpired(score=current.score))
        self._events.emit(GameOver(score=current.score))

    # -- Internal --------------------------------------------------------

    def _rules_for(self, mode: GameModeConfig) -> EngineRules:
        if self._config is not None:
            return self._config.to_rules(winning_tile=mode.winning_tile,
                                         initial_undos=mode.undo_limit)
        return EngineRules(winning_tile=mode.winning_tile, initial_undos=mode.undo_limit)

    def _commit(self, new_state: GameState) -> None:
        previous_best = self._state.best_score
        self._state = new_state
        if new_state.best_score > previous_best:
            self._events.emit(BestScoreChanged(best_score=new_state.best_score,
                                               previous=previous_best))

    def _emit_transitions(self, before: GameState, after: GameState) -> None:
        if after.is_won and not before.is_won:
            log.info("Game won: score=%d", after.score)
            self._events.emit(GameWon(score=after.score))
        if after.is_game_over and not before.is_game_over:
            log.info("Game over: score=%d", after.score)
            self._events.emit(GameOver(score=after.score))
