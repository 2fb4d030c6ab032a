"""Tests for huehunt.core.leaderboard – top-N projection with ranks."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from huehunt.core.leaderboard import LeaderboardView
from huehunt.core.scores import ScoreRecord, ScoreStore

T0 = datetime(2024, 5, 1, tzinfo=timezone.utc)


@pytest.fixture()
def store(tmp_path: Path) -> ScoreStore:
    return ScoreStore(tmp_path / "scores.json")


def _add(store: ScoreStore, player_id: str, high_score: int, minutes: int = 0) -> None:
    store.create(
        ScoreRecord(
            player_id=player_id,
            display_name=player_id.title(),
            high_score=high_score,
            max_level=high_score + 1,
            total_games=1,
            created_at=T0,
            last_played=T0 + timedelta(minutes=minutes),
        )
    )


class TestFetchTop:
    def test_ranks_are_one_based(self, store):
        _add(store, "ann", 4)
        _add(store, "bob", 9)
        board = LeaderboardView(store).fetch_top()
        assert [(e.rank, e.record.player_id) for e in board.entries] == [(1, "bob"), (2, "ann")]
        assert board.player_rank is None
        assert board.available

    def test_player_rank(self, store):
        for i, pid in enumerate(["a", "b", "c", "d"]):
            _add(store, pid, 10 - i)
        board = LeaderboardView(store).fetch_top("c")
        assert board.player_rank == 3

    def test_player_outside_window(self, store):
        for i in range(12):
            _add(store, f"p{i:02d}", i)
        board = LeaderboardView(store, size=10).fetch_top("p00")
        assert len(board) == 10
        assert board.player_rank is None

    def test_ties_are_deterministic(self, store):
        _add(store, "second", 5, minutes=10)
        _add(store, "first", 5, minutes=1)
        board = LeaderboardView(store).fetch_top()
        assert [e.record.player_id for e in board.entries] == ["first", "second"]

    def test_empty_store(self, store):
        board = LeaderboardView(store).fetch_top("anyone")
        assert board.entries == ()
        assert board.available

    def test_refetch_sees_new_scores(self, store):
        view = LeaderboardView(store)
        assert len(view.fetch_top()) == 0
        _add(store, "ann", 1)
        assert len(view.fetch_top()) == 1

    def test_store_failure_marks_unavailable(self, store):
        store.file_path.write_text("{broken", encoding="utf-8")
        board = LeaderboardView(store).fetch_top("ann")
        assert not board.available
        assert board.entries == ()
