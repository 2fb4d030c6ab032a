"""Tests for huehunt.core.reconcile – merging a finished session into the store."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from huehunt.core.errors import ReconciliationFailed
from huehunt.core.identity import PlayerIdentity
from huehunt.core.reconcile import ReconcileStatus, ScoreReconciler, save_session_result
from huehunt.core.round_engine import RoundOutcome
from huehunt.core.scores import ScoreRecord, ScoreStore
from huehunt.core.session import SessionResult

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
NOW = T0 + timedelta(days=3)


@pytest.fixture()
def store(tmp_path: Path) -> ScoreStore:
    return ScoreStore(tmp_path / "scores.json")


@pytest.fixture()
def reconciler(store: ScoreStore) -> ScoreReconciler:
    return ScoreReconciler(store, clock=lambda: NOW)


def _existing(store: ScoreStore, high_score: int, total_games: int, max_level: int = 0) -> None:
    store.create(
        ScoreRecord(
            player_id="p1",
            display_name="Ada",
            high_score=high_score,
            max_level=max_level or high_score + 1,
            total_games=total_games,
            created_at=T0,
            last_played=T0,
        )
    )


class TestReconcile:
    def test_first_session_creates_record(self, reconciler, store):
        result = reconciler.reconcile("p1", "Ada", 5, 6)
        assert result.status is ReconcileStatus.CREATED
        assert result.previous_high_score == 0
        assert result.current_high_score == 5
        stored = store.get("p1")
        assert stored.high_score == 5
        assert stored.max_level == 6
        assert stored.total_games == 1
        assert stored.created_at == NOW
        assert stored.last_played == NOW

    def test_higher_score_raises_record(self, reconciler, store):
        _existing(store, high_score=5, total_games=3)
        result = reconciler.reconcile("p1", "Ada", 8, 9)
        assert result.status is ReconcileStatus.RAISED
        assert result.previous_high_score == 5
        assert result.current_high_score == 8
        stored = store.get("p1")
        assert stored.high_score == 8
        assert stored.max_level == 9
        assert stored.total_games == 4
        assert stored.created_at == T0
        assert stored.last_played == NOW

    def test_lower_score_leaves_best_unchanged(self, reconciler, store):
        _existing(store, high_score=10, total_games=2)
        result = reconciler.reconcile("p1", "Ada", 3, 4)
        assert result.status is ReconcileStatus.UNCHANGED
        assert result.current_high_score == 10
        assert result.previous_high_score is None
        stored = store.get("p1")
        assert stored.high_score == 10
        assert stored.max_level == 11
        assert stored.total_games == 3
        assert stored.last_played == NOW

    def test_equal_score_is_unchanged(self, reconciler, store):
        _existing(store, high_score=4, total_games=1)
        assert reconciler.reconcile("p1", "Ada", 4, 5).status is ReconcileStatus.UNCHANGED
        assert store.get("p1").total_games == 2

    def test_missing_total_games_counts_from_zero(self, reconciler, store):
        store.file_path.write_text(
            '{"scores": {"p1": {"display_name": "Ada", "high_score": 2}}}', encoding="utf-8"
        )
        reconciler.reconcile("p1", "Ada", 1, 2)
        assert store.get("p1").total_games == 1

    def test_max_level_never_drops(self, reconciler, store):
        _existing(store, high_score=5, total_games=1, max_level=20)
        reconciler.reconcile("p1", "Ada", 6, 7)
        assert store.get("p1").max_level == 20

    def test_refreshes_display_name(self, reconciler, store):
        _existing(store, high_score=5, total_games=1)
        reconciler.reconcile("p1", "Ada L.", 1, 2)
        assert store.get("p1").display_name == "Ada L."

    def test_store_failure(self, reconciler, store):
        store.file_path.write_text("garbage", encoding="utf-8")
        with pytest.raises(ReconciliationFailed):
            reconciler.reconcile("p1", "Ada", 5, 6)


class TestSaveSessionResult:
    @pytest.fixture()
    def result(self) -> SessionResult:
        return SessionResult(
            player=PlayerIdentity("p1", "Ada"), score=7, level=8, outcome=RoundOutcome.INCORRECT
        )

    def test_created_message(self, reconciler, result):
        report = save_session_result(reconciler, result)
        assert report.saved
        assert report.result.status is ReconcileStatus.CREATED
        assert "7" in report.message

    def test_raised_message(self, reconciler, store, result):
        _existing(store, high_score=3, total_games=1)
        report = save_session_result(reconciler, result)
        assert report.result.is_new_record
        assert report.message.startswith("New record!")
        assert "3" in report.message

    def test_unchanged_message(self, reconciler, store, result):
        _existing(store, high_score=30, total_games=1)
        report = save_session_result(reconciler, result)
        assert not report.result.is_new_record
        assert report.message == "Your best: 30"

    def test_failure_reported_not_raised(self, reconciler, store, result):
        store.file_path.write_text("garbage", encoding="utf-8")
        report = save_session_result(reconciler, result)
        assert not report.saved
        assert report.result is None
        assert report.message == "Score could not be saved."
