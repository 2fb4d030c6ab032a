"""QTimer-backed scheduler for the game session's delayed callbacks."""

from __future__ import annotations

from typing import Callable, Optional, Set

from PySide6.QtCore import QObject, QTimer


class QtScheduledCall:
    """Owned single-shot timer; ``cancel()`` stops it before it fires."""

    def __init__(self, timer: QTimer, on_done: Callable[["QtScheduledCall"], None]) -> None:
        self._timer = timer
        self._on_done = on_done
        self._released = False

    def cancel(self) -> None:
        if self._released:
            return
        self._timer.stop()
        self._release()

    def _release(self) -> None:
        if self._released:
            return
        self._released = True
        self._on_done(self)
        self._timer.deleteLater()


class QtScheduler:
    def __init__(self, parent: Optional[QObject] = None) -> None:
        self._parent = parent
        self._active: Set[QtScheduledCall] = set()

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> QtScheduledCall:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        call = QtScheduledCall(timer, self._active.discard)

        def fire() -> None:
            call._release()
            callback()

        timer.timeout.connect(fire)
        self._active.add(call)
        timer.start(max(0, int(delay_ms)))
        return call

    def cancel_all(self) -> None:
        for call in list(self._active):
            call.cancel()
