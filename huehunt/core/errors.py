"""Exception types raised by the game core."""

from __future__ import annotations


class HueHuntError(Exception):
    """Base class for all game errors."""


class InvalidGuess(HueHuntError):
    """A guessed cell index lies outside the grid."""

    def __init__(self, index: int, cell_count: int) -> None:
        super().__init__(f"cell index {index} outside grid of {cell_count} cells")
        self.index = index
        self.cell_count = cell_count


class IdentityUnavailable(HueHuntError):
    """A session was started without a signed-in player."""


class IdentityError(HueHuntError):
    """A sign-in attempt was rejected (e.g. empty display name)."""


class ScoreStoreError(HueHuntError):
    """The score store could not complete a read or write."""


class ReconciliationFailed(HueHuntError):
    """A finished session's score could not be reconciled with the store."""
