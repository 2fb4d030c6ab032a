"""Tests for huehunt.core.settings – YAML game settings."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from huehunt.core.settings import GameSettings, data_dir, load_settings


def _write_yaml(path: Path, data) -> Path:
    path.write_text(yaml.dump(data, default_flow_style=False), encoding="utf-8")
    return path


class TestLoadSettings:
    def test_bundled_file_matches_defaults(self):
        assert load_settings() == GameSettings()

    def test_defaults(self):
        s = GameSettings()
        assert s.round_seconds == 10
        assert s.settle_delay_ms == 800
        assert s.reveal_delay_ms == 2000
        assert s.leaderboard_size == 10

    def test_partial_override(self, tmp_path: Path):
        s = load_settings(_write_yaml(tmp_path / "s.yaml", {"round_seconds": 5}))
        assert s.round_seconds == 5
        assert s.reveal_delay_ms == 2000

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "s.yaml"
        path.write_text("", encoding="utf-8")
        assert load_settings(path) == GameSettings()

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "absent.yaml")

    def test_not_a_mapping(self, tmp_path: Path):
        with pytest.raises(ValueError, match="expected a mapping"):
            load_settings(_write_yaml(tmp_path / "s.yaml", [1, 2]))

    def test_unknown_key(self, tmp_path: Path):
        with pytest.raises(ValueError, match="unknown setting"):
            load_settings(_write_yaml(tmp_path / "s.yaml", {"round_secs": 5}))

    @pytest.mark.parametrize("value", [0, -1, "ten", 2.5, True])
    def test_bad_value(self, tmp_path: Path, value):
        with pytest.raises(ValueError, match="positive integer"):
            load_settings(_write_yaml(tmp_path / "s.yaml", {"round_seconds": value}))


class TestDataDir:
    def test_env_override(self, isolated_home: Path):
        assert data_dir() == isolated_home

    def test_default_under_home(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("HUEHUNT_HOME", raising=False)
        assert data_dir() == Path.home() / ".huehunt"
