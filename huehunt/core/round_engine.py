from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from huehunt.core.colors import Color, ColorPairGenerator
from huehunt.core.difficulty import grid_size
from huehunt.core.errors import InvalidGuess

logger = logging.getLogger(__name__)


class RoundOutcome(str, Enum):
    PENDING = "pending"
    CORRECT = "correct"
    INCORRECT = "incorrect"
    TIMED_OUT = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self is not RoundOutcome.PENDING


@dataclass(frozen=True)
class Grid:
    """A square grid of cells where only ``target_index`` holds the variant color."""

    size: int
    cells: Tuple[Color, ...]
    target_index: int

    def __len__(self) -> int:
        return len(self.cells)

    @property
    def base_color(self) -> Color:
        # Grids always have at least 9 cells, so a non-target neighbour exists.
        return self.cells[1] if self.target_index == 0 else self.cells[0]

    @property
    def variant_color(self) -> Color:
        return self.cells[self.target_index]


def adjudicate(grid: Grid, chosen_index: int) -> RoundOutcome:
    """Judge a single guess against the grid. Raises InvalidGuess when out of bounds."""
    if not 0 <= chosen_index < len(grid):
        raise InvalidGuess(chosen_index, len(grid))
    if chosen_index == grid.target_index:
        return RoundOutcome.CORRECT
    return RoundOutcome.INCORRECT


class RoundEngine:
    """Builds the grid for each round and records at most one guess per round."""

    def __init__(
        self,
        generator: Optional[ColorPairGenerator] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._generator = generator or ColorPairGenerator(self._rng)
        self._grid: Optional[Grid] = None
        self._outcome = RoundOutcome.PENDING
        self._selected_index = -1

    @property
    def grid(self) -> Optional[Grid]:
        return self._grid

    @property
    def outcome(self) -> RoundOutcome:
        return self._outcome

    @property
    def selected_index(self) -> int:
        """Index of the cell the player picked this round, or -1."""
        return self._selected_index

    @property
    def show_result(self) -> bool:
        return self._outcome.is_terminal

    def start_round(self, level: int) -> Grid:
        size = grid_size(level)
        cell_count = size * size
        base = self._generator.generate_base()
        variant = self._generator.generate_variant(base)
        target_index = self._rng.randrange(cell_count)
        cells = tuple(variant if i == target_index else base for i in range(cell_count))

        self._grid = Grid(size=size, cells=cells, target_index=target_index)
        self._outcome = RoundOutcome.PENDING
        self._selected_index = -1
        return self._grid

    def submit_guess(self, chosen_index: int) -> RoundOutcome:
        """Record the player's guess for the current round.

        Once an outcome is recorded, further guesses return it unchanged.
        An out-of-range index is logged and ignored; the round stays open.
        """
        if self._grid is None or self._outcome.is_terminal:
            return self._outcome
        try:
            outcome = adjudicate(self._grid, chosen_index)
        except InvalidGuess as e:
            logger.warning("Ignoring guess: %s", e)
            return self._outcome
        self._selected_index = chosen_index
        self._outcome = outcome
        return outcome

    def expire(self) -> RoundOutcome:
        """Mark the round as missed if no guess has been recorded yet."""
        if self._grid is not None and not self._outcome.is_terminal:
            self._outcome = RoundOutcome.TIMED_OUT
        return self._outcome

    def clear(self) -> None:
        self._grid = None
        self._outcome = RoundOutcome.PENDING
        self._selected_index = -1
