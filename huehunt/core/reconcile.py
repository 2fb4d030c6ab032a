from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from huehunt.core.errors import ReconciliationFailed, ScoreStoreError
from huehunt.core.scores import ScoreRecord, ScoreStore, utc_now
from huehunt.core.session import SessionResult

logger = logging.getLogger(__name__)


class ReconcileStatus(str, Enum):
    CREATED = "created"
    RAISED = "raised"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class ReconcileResult:
    status: ReconcileStatus
    current_high_score: int
    previous_high_score: Optional[int] = None

    @property
    def is_new_record(self) -> bool:
        return self.status is not ReconcileStatus.UNCHANGED


class ScoreReconciler:
    """Merges a finished session into the player's stored record.

    The read and the write are separate store calls. Two sessions of the same
    player finishing at once can both decide to raise; whichever write lands
    last wins.
    """

    def __init__(self, store: ScoreStore, clock: Callable[[], datetime] = utc_now) -> None:
        self._store = store
        self._clock = clock

    def reconcile(
        self,
        player_id: str,
        display_name: str,
        final_score: int,
        final_level: int,
    ) -> ReconcileResult:
        try:
            existing = self._store.get(player_id)
            now = self._clock()

            if existing is None:
                self._store.create(
                    ScoreRecord(
                        player_id=player_id,
                        display_name=display_name,
                        high_score=final_score,
                        max_level=final_level,
                        total_games=1,
                        created_at=now,
                        last_played=now,
                    )
                )
                return ReconcileResult(
                    status=ReconcileStatus.CREATED,
                    current_high_score=final_score,
                    previous_high_score=0,
                )

            if final_score > existing.high_score:
                self._store.update(
                    player_id,
                    display_name=display_name,
                    high_score=final_score,
                    max_level=max(existing.max_level, final_level),
                    total_games=existing.total_games + 1,
                    last_played=now,
                )
                return ReconcileResult(
                    status=ReconcileStatus.RAISED,
                    current_high_score=final_score,
                    previous_high_score=existing.high_score,
                )

            self._store.update(
                player_id,
                display_name=display_name,
                total_games=existing.total_games + 1,
                last_played=now,
            )
            return ReconcileResult(
                status=ReconcileStatus.UNCHANGED,
                current_high_score=existing.high_score,
            )
        except ScoreStoreError as e:
            raise ReconciliationFailed(f"could not save score for {player_id}: {e}") from e


@dataclass(frozen=True)
class SaveReport:
    """What the game-over panel shows about the save."""

    saved: bool
    message: str
    result: Optional[ReconcileResult] = None


def save_session_result(reconciler: ScoreReconciler, session_result: SessionResult) -> SaveReport:
    """Reconcile a finished session and describe the outcome; never raises ReconciliationFailed."""
    player = session_result.player
    try:
        result = reconciler.reconcile(
            player.player_id,
            player.display_name,
            session_result.score,
            session_result.level,
        )
    except ReconciliationFailed as e:
        logger.error("Score for %s was not saved: %s", player.display_name, e)
        return SaveReport(saved=False, message="Score could not be saved.")

    logger.info(
        "Reconciled score for %s: %s (best %d)",
        player.display_name,
        result.status.value,
        result.current_high_score,
    )
    if result.status is ReconcileStatus.CREATED:
        message = f"First score saved: {result.current_high_score}"
    elif result.status is ReconcileStatus.RAISED:
        message = f"New record! Previous best: {result.previous_high_score}"
    else:
        message = f"Your best: {result.current_high_score}"
    return SaveReport(saved=True, message=message, result=result)
