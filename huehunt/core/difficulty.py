from __future__ import annotations

MIN_GRID_SIZE = 3
MAX_GRID_SIZE = 6
LEVELS_PER_STEP = 5


def grid_size(level: int) -> int:
    """Side length of the grid for a level: grows by one every five levels, capped at 6."""
    level = max(1, int(level))
    return min(MAX_GRID_SIZE, MIN_GRID_SIZE + (level - 1) // LEVELS_PER_STEP)
