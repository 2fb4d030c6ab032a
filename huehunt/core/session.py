from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Protocol

from huehunt.core.errors import IdentityUnavailable
from huehunt.core.identity import PlayerIdentity
from huehunt.core.round_engine import Grid, RoundEngine, RoundOutcome
from huehunt.core.settings import GameSettings
from huehunt.core.timer import CountdownTimer

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    NOT_STARTED = "not_started"
    IN_ROUND = "in_round"
    ROUND_WON = "round_won"
    ROUND_LOST = "round_lost"
    OVER = "over"


class ScheduledCall(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Runs a callback once after ``delay_ms``; the returned handle can cancel it."""

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledCall: ...


@dataclass(frozen=True)
class SessionResult:
    """Final score and level reached by a finished session."""

    player: PlayerIdentity
    score: int
    level: int
    outcome: RoundOutcome


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything the presentation layer needs to draw one frame of the game."""

    state: SessionState
    level: int
    score: int
    time_left: int
    grid: Optional[Grid]
    selected_index: int
    target_index: int
    outcome: RoundOutcome
    show_result: bool
    player: Optional[PlayerIdentity]

    @property
    def started(self) -> bool:
        return self.state is not SessionState.NOT_STARTED

    @property
    def over(self) -> bool:
        return self.state is SessionState.OVER


class GameSession:
    """One player's run: rounds at rising levels until a wrong pick or a timeout.

    All state lives here and changes only through ``start``, ``choose_cell``,
    ``reset`` and ``identity_lost`` plus the callbacks this object schedules
    itself. Every scheduled callback is cancelled on the next transition, and
    callbacks from an earlier generation that still fire are dropped.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        settings: Optional[GameSettings] = None,
        engine: Optional[RoundEngine] = None,
        timer: Optional[CountdownTimer] = None,
    ) -> None:
        self._scheduler = scheduler
        self._settings = settings or GameSettings()
        self._engine = engine or RoundEngine()
        self._timer = timer or CountdownTimer()
        self._timer.add_expiry_listener(self._on_timer_expired)

        self._state = SessionState.NOT_STARTED
        self._player: Optional[PlayerIdentity] = None
        self._level = 1
        self._score = 0
        self._time_left = self._settings.round_seconds
        self._result: Optional[SessionResult] = None

        self._generation = 0
        self._pending: List[ScheduledCall] = []
        self._change_listeners: List[Callable[[SessionSnapshot], None]] = []
        self._finish_listeners: List[Callable[[SessionResult], None]] = []

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def level(self) -> int:
        return self._level

    @property
    def score(self) -> int:
        return self._score

    @property
    def time_left(self) -> int:
        return self._time_left

    @property
    def player(self) -> Optional[PlayerIdentity]:
        return self._player

    @property
    def result(self) -> Optional[SessionResult]:
        """The finished session's result, or None while it is still running."""
        return self._result

    def add_change_listener(self, callback: Callable[[SessionSnapshot], None]) -> None:
        self._change_listeners.append(callback)

    def add_finish_listener(self, callback: Callable[[SessionResult], None]) -> None:
        self._finish_listeners.append(callback)

    def snapshot(self) -> SessionSnapshot:
        grid = self._engine.grid
        return SessionSnapshot(
            state=self._state,
            level=self._level,
            score=self._score,
            time_left=self._time_left,
            grid=grid,
            selected_index=self._engine.selected_index,
            target_index=grid.target_index if grid is not None else -1,
            outcome=self._engine.outcome,
            show_result=self._engine.show_result,
            player=self._player,
        )

    # -- input events --------------------------------------------------------

    def start(self, player: Optional[PlayerIdentity]) -> None:
        """Start a new run for ``player``. Raises IdentityUnavailable without one."""
        if player is None:
            raise IdentityUnavailable("Sign in before starting a game.")
        if self._state is SessionState.OVER:
            self.reset()
        if self._state is not SessionState.NOT_STARTED:
            return
        self._player = player
        logger.info("Session started for %s", player.display_name)
        self._enter_round()

    def choose_cell(self, index: int) -> RoundOutcome:
        """Adjudicate the player's pick. Ignored outside a round or after the round's result."""
        if self._state is not SessionState.IN_ROUND or self._engine.show_result:
            return self._engine.outcome

        outcome = self._engine.submit_guess(index)
        if outcome is RoundOutcome.PENDING:
            return outcome

        self._timer.stop()
        self._cancel_pending()
        if outcome is RoundOutcome.CORRECT:
            self._score += 1
            self._level += 1
            self._state = SessionState.ROUND_WON
            self._schedule(self._settings.settle_delay_ms, self._enter_round)
        else:
            self._state = SessionState.ROUND_LOST
            self._schedule(self._settings.reveal_delay_ms, self._finish)
        self._notify_change()
        return outcome

    def reset(self) -> None:
        """Back to level 1 with no score. The player stays signed in."""
        self._cancel_pending()
        self._timer.stop()
        self._engine.clear()
        self._state = SessionState.NOT_STARTED
        self._level = 1
        self._score = 0
        self._time_left = self._settings.round_seconds
        self._result = None
        self._notify_change()

    def identity_lost(self) -> None:
        self._player = None
        self.reset()

    def close(self) -> None:
        """Drop every pending callback; used when the owning window goes away."""
        self._cancel_pending()
        self._timer.stop()

    # -- internal transitions -----------------------------------------------

    def _enter_round(self) -> None:
        if self._player is None:
            raise IdentityUnavailable("Sign in before starting a game.")
        self._cancel_pending()
        self._engine.start_round(self._level)
        self._timer.start(self._settings.round_seconds)
        self._time_left = self._timer.remaining
        self._state = SessionState.IN_ROUND
        self._schedule(self._settings.tick_interval_ms, self._on_tick)
        self._notify_change()

    def _on_tick(self) -> None:
        self._timer.tick()
        if self._state is not SessionState.IN_ROUND:
            return
        self._time_left = self._timer.remaining
        self._schedule(self._settings.tick_interval_ms, self._on_tick)
        self._notify_change()

    def _on_timer_expired(self) -> None:
        if self._state is not SessionState.IN_ROUND:
            return
        self._time_left = 0
        self._engine.expire()
        self._finish()

    def _finish(self) -> None:
        if self._state is SessionState.OVER or self._player is None:
            return
        self._cancel_pending()
        self._timer.stop()
        self._state = SessionState.OVER
        self._result = SessionResult(
            player=self._player,
            score=self._score,
            level=self._level,
            outcome=self._engine.outcome,
        )
        logger.info(
            "Session over for %s: score=%d level=%d (%s)",
            self._player.display_name,
            self._score,
            self._level,
            self._engine.outcome.value,
        )
        self._notify_change()
        for callback in list(self._finish_listeners):
            callback(self._result)

    def _schedule(self, delay_ms: int, action: Callable[[], None]) -> None:
        generation = self._generation
        handle: Optional[ScheduledCall] = None

        def fire() -> None:
            if handle in self._pending:
                self._pending.remove(handle)
            if generation != self._generation:
                logger.debug("Dropping stale callback from generation %d", generation)
                return
            action()

        handle = self._scheduler.schedule(delay_ms, fire)
        self._pending.append(handle)

    def _cancel_pending(self) -> None:
        self._generation += 1
        pending, self._pending = self._pending, []
        for handle in pending:
            handle.cancel()

    def _notify_change(self) -> None:
        snapshot = self.snapshot()
        for callback in list(self._change_listeners):
            callback(snapshot)
