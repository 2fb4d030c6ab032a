from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parent.parent / "data" / "settings.yaml"


@dataclass(frozen=True)
class GameSettings:
    """Timing and leaderboard knobs. Durations are in seconds or milliseconds as named."""

    round_seconds: int = 10
    tick_interval_ms: int = 1000
    settle_delay_ms: int = 800
    reveal_delay_ms: int = 2000
    leaderboard_size: int = 10


def load_settings(path: Optional[Path] = None) -> GameSettings:
    """Read settings from YAML. Missing keys keep their defaults; bad values raise ValueError."""
    settings_path = Path(path) if path is not None else DEFAULT_SETTINGS_PATH
    if not settings_path.exists():
        raise FileNotFoundError(f"Settings file not found: {settings_path}")

    raw = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    if raw is None:
        return GameSettings()
    if not isinstance(raw, dict):
        raise ValueError(f"{settings_path.name}: expected a mapping of setting names to values")

    known = {f.name for f in fields(GameSettings)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"{settings_path.name}: unknown setting(s): {', '.join(map(str, unknown))}")

    values = {}
    for key, value in raw.items():
        # bool is an int subclass; "true" is never a valid duration
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValueError(f"{settings_path.name}: '{key}' must be a positive integer")
        values[key] = value
    return GameSettings(**values)


def data_dir() -> Path:
    """Directory holding scores and the player profile (``HUEHUNT_HOME`` overrides)."""
    override = os.environ.get("HUEHUNT_HOME")
    if override:
        return Path(override)
    return Path.home() / ".huehunt"
