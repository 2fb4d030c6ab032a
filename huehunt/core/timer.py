from __future__ import annotations

from enum import Enum
from typing import Callable, List


class TimerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    EXPIRED = "expired"
    STOPPED = "stopped"


class CountdownTimer:
    """Whole-second countdown driven by explicit ``tick()`` calls.

    The timer has no clock of its own; the owner schedules ticks. Each run
    reports expiry to listeners at most once, and ``stop()`` after expiry
    neither retracts nor repeats that notification.
    """

    def __init__(self) -> None:
        self._state = TimerState.IDLE
        self._remaining = 0
        self._expiry_listeners: List[Callable[[], None]] = []

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def is_running(self) -> bool:
        return self._state is TimerState.RUNNING

    def add_expiry_listener(self, callback: Callable[[], None]) -> None:
        self._expiry_listeners.append(callback)

    def start(self, seconds: int) -> None:
        """Begin a new run with ``seconds`` remaining."""
        if seconds <= 0:
            raise ValueError(f"countdown needs a positive budget, got {seconds}")
        self._remaining = int(seconds)
        self._state = TimerState.RUNNING

    def tick(self) -> bool:
        """Count down one second. Returns True only on the tick that expires the run."""
        if self._state is not TimerState.RUNNING:
            return False
        self._remaining -= 1
        if self._remaining > 0:
            return False
        self._remaining = 0
        self._state = TimerState.EXPIRED
        for callback in list(self._expiry_listeners):
            callback()
        return True

    def stop(self) -> None:
        if self._state in (TimerState.RUNNING, TimerState.EXPIRED):
            self._state = TimerState.STOPPED
