from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from huehunt.core.errors import ScoreStoreError
from huehunt.core.scores import ScoreRecord, ScoreStore

logger = logging.getLogger(__name__)

DEFAULT_LEADERBOARD_SIZE = 10


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    record: ScoreRecord


@dataclass(frozen=True)
class Leaderboard:
    entries: Tuple[LeaderboardEntry, ...] = ()
    player_rank: Optional[int] = None
    available: bool = True

    def __len__(self) -> int:
        return len(self.entries)


class LeaderboardView:
    """Top-N projection of the score store; every fetch re-reads the store."""

    def __init__(self, store: ScoreStore, size: int = DEFAULT_LEADERBOARD_SIZE) -> None:
        self._store = store
        self._size = size

    def fetch_top(self, player_id: Optional[str] = None) -> Leaderboard:
        try:
            records = self._store.top(self._size)
        except ScoreStoreError as e:
            logger.error("Could not load leaderboard: %s", e)
            return Leaderboard(available=False)

        entries = tuple(LeaderboardEntry(rank=i, record=r) for i, r in enumerate(records, start=1))
        player_rank = next(
            (entry.rank for entry in entries if player_id and entry.record.player_id == player_id),
            None,
        )
        return Leaderboard(entries=entries, player_rank=player_rank)
