from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from huehunt.core.errors import ScoreStoreError
from huehunt.core.settings import data_dir

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(value: Any, fallback: datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return fallback
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return fallback


@dataclass(frozen=True)
class ScoreRecord:
    """A player's best result. ``high_score`` and ``max_level`` never go down."""

    player_id: str
    display_name: str
    high_score: int = 0
    max_level: int = 1
    total_games: int = 0
    created_at: datetime = datetime.fromtimestamp(0, timezone.utc)
    last_played: datetime = datetime.fromtimestamp(0, timezone.utc)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoreRecord":
        """Build a record from stored data, defaulting any missing or malformed field.

        Raises ValueError when the player id is missing.
        """
        player_id = data.get("player_id")
        if not player_id:
            raise ValueError("score record without 'player_id'")
        now = utc_now()

        def _int(key: str, default: int, minimum: int) -> int:
            try:
                return max(minimum, int(data.get(key, default)))
            except (TypeError, ValueError):
                return default

        created_at = _parse_timestamp(data.get("created_at"), now)
        return cls(
            player_id=str(player_id),
            display_name=str(data.get("display_name") or ""),
            high_score=_int("high_score", 0, 0),
            max_level=_int("max_level", 1, 1),
            total_games=_int("total_games", 0, 0),
            created_at=created_at,
            last_played=_parse_timestamp(data.get("last_played"), created_at),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "display_name": self.display_name,
            "high_score": self.high_score,
            "max_level": self.max_level,
            "total_games": self.total_games,
            "created_at": self.created_at.isoformat(),
            "last_played": self.last_played.isoformat(),
        }


class ScoreStore:
    """Stores one ScoreRecord per player in a JSON document.

    File: ~/.huehunt/scores.json. Every call reads the file fresh, so several
    windows (or machines sharing the directory) see each other's writes;
    concurrent updates resolve as last writer wins.
    """

    def __init__(self, file_path: Optional[Path] = None) -> None:
        self._file_path = file_path or data_dir() / "scores.json"

    @property
    def file_path(self) -> Path:
        return self._file_path

    def get(self, player_id: str) -> Optional[ScoreRecord]:
        raw = self._load().get(player_id)
        if raw is None:
            return None
        return self._record_from(player_id, raw)

    def create(self, record: ScoreRecord) -> ScoreRecord:
        documents = self._load()
        if record.player_id in documents:
            raise ScoreStoreError(f"score record for {record.player_id} already exists")
        documents[record.player_id] = record.to_dict()
        self._save(documents)
        return record

    def update(self, player_id: str, **changes: Any) -> ScoreRecord:
        """Apply field changes to an existing record and return the stored result."""
        documents = self._load()
        raw = documents.get(player_id)
        if raw is None:
            raise ScoreStoreError(f"no score record for {player_id}")
        try:
            updated = replace(self._record_from(player_id, raw), **changes)
        except TypeError as e:
            raise ScoreStoreError(f"invalid score update for {player_id}: {e}") from e
        documents[player_id] = updated.to_dict()
        self._save(documents)
        return updated

    def top(self, n: int) -> List[ScoreRecord]:
        """Best ``n`` records: highest score first, then whoever got there earliest."""
        records = [self._record_from(key, raw) for key, raw in self._load().items()]
        records.sort(key=lambda r: (-r.high_score, r.last_played, r.player_id))
        return records[: max(0, n)]

    def _record_from(self, player_id: str, raw: Any) -> ScoreRecord:
        if not isinstance(raw, dict):
            raise ScoreStoreError(f"malformed score record for {player_id}")
        try:
            return ScoreRecord.from_dict({"player_id": player_id, **raw})
        except ValueError as e:
            raise ScoreStoreError(str(e)) from e

    def _load(self) -> Dict[str, Any]:
        if not self._file_path.exists():
            return {}
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load scores from %s: %s", self._file_path, e)
            raise ScoreStoreError(f"could not read {self._file_path.name}") from e
        scores = payload.get("scores", {}) if isinstance(payload, dict) else None
        if not isinstance(scores, dict):
            raise ScoreStoreError(f"{self._file_path.name}: expected a 'scores' mapping")
        return scores

    def _save(self, documents: Dict[str, Any]) -> None:
        tmp_path = self._file_path.with_suffix(".tmp")
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps({"scores": documents}, indent=2), encoding="utf-8")
            os.replace(tmp_path, self._file_path)
        except OSError as e:
            logger.warning("Could not save scores to %s: %s", self._file_path, e)
            raise ScoreStoreError(f"could not write {self._file_path.name}") from e
