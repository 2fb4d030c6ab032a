"""Shared fixtures for the core tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from huehunt.core.identity import PlayerIdentity
from tests.fakes import FakeScheduler


@pytest.fixture()
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture()
def player() -> PlayerIdentity:
    return PlayerIdentity(player_id="p1", display_name="Ada")


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HUEHUNT_HOME at a temp dir so tests never touch ~/.huehunt."""
    home = tmp_path / "huehunt-home"
    monkeypatch.setenv("HUEHUNT_HOME", str(home))
    return home
