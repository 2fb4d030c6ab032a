from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

from huehunt.core.errors import IdentityError
from huehunt.core.settings import data_dir

logger = logging.getLogger(__name__)

MAX_DISPLAY_NAME_LENGTH = 24


@dataclass(frozen=True)
class PlayerIdentity:
    player_id: str
    display_name: str


class IdentityProvider:
    """Local player profiles: a display name maps to a stable player id.

    File: ~/.huehunt/profile.json. The last signed-in player is restored on
    the next start until they sign out.
    """

    def __init__(self, file_path: Optional[Path] = None) -> None:
        self._file_path = file_path or data_dir() / "profile.json"
        self._players: Dict[str, PlayerIdentity] = {}
        self._current: Optional[PlayerIdentity] = None
        self._listeners: List[Callable[[Optional[PlayerIdentity]], None]] = []
        self._load()

    @property
    def current(self) -> Optional[PlayerIdentity]:
        return self._current

    def add_listener(self, callback: Callable[[Optional[PlayerIdentity]], None]) -> None:
        """Register a callback invoked with the new identity (or None) on every change."""
        self._listeners.append(callback)

    def restore(self) -> Optional[PlayerIdentity]:
        return self._current

    def sign_in(self, display_name: str) -> PlayerIdentity:
        name = (display_name or "").strip()
        if not name:
            raise IdentityError("Please enter a player name.")
        if len(name) > MAX_DISPLAY_NAME_LENGTH:
            raise IdentityError(f"Player name must be at most {MAX_DISPLAY_NAME_LENGTH} characters.")

        key = name.casefold()
        identity = self._players.get(key)
        if identity is None:
            identity = PlayerIdentity(player_id=uuid.uuid4().hex, display_name=name)
            logger.info("Created player profile %s for %r", identity.player_id, name)
        elif identity.display_name != name:
            identity = PlayerIdentity(player_id=identity.player_id, display_name=name)
        self._players[key] = identity
        self._current = identity
        self._save()
        self._notify()
        return identity

    def sign_out(self) -> None:
        if self._current is None:
            return
        self._current = None
        self._save()
        self._notify()

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback(self._current)

    def _load(self) -> None:
        if not self._file_path.exists():
            return
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load profile from %s: %s", self._file_path, e)
            return
        if not isinstance(payload, dict):
            logger.warning("Ignoring malformed profile file %s", self._file_path)
            return

        players = payload.get("players", {})
        if isinstance(players, dict):
            for key, value in players.items():
                if not isinstance(value, dict):
                    continue
                player_id = value.get("player_id")
                display_name = value.get("display_name")
                if player_id and display_name:
                    self._players[key] = PlayerIdentity(str(player_id), str(display_name))

        current_id = payload.get("current")
        if current_id:
            self._current = next(
                (p for p in self._players.values() if p.player_id == current_id),
                None,
            )

    def _save(self) -> None:
        payload = {
            "players": {
                key: {"player_id": p.player_id, "display_name": p.display_name}
                for key, p in self._players.items()
            },
            "current": self._current.player_id if self._current else None,
        }
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save profile to %s: %s", self._file_path, e)
