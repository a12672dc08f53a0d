"""
Daily board generation - blockers drawn from the seeded generator.
"""

from typing import List, Optional

from dailypuzzles.core.rng import SeededRandom
from dailypuzzles.packing.game_core import (
    BLOCKER, GRID_SIZE, Cell, PackingState, create_pieces
)


def empty_grid(size: int = GRID_SIZE) -> List[List[Optional[str]]]:
    return [[None for _ in range(size)] for _ in range(size)]


def place_blockers(grid: List[List[Optional[str]]], rng: SeededRandom, count: int = 6) -> List[Cell]:
    """
    Mark ``count`` distinct random cells as blockers.

    Each candidate draws the row first, then the column; duplicates are
    rejected and redrawn with no retry limit.

    Args:
        grid: square grid, modified in place
        rng: seeded generator
        count: number of blockers

    Returns:
        Blocker cells in draw order
    """
    size = len(grid)
    if count > size * size:
        raise ValueError(f"Cannot place {count} blockers on a {size}x{size} grid")

    blockers: List[Cell] = []
    while len(blockers) < count:
        r = rng.randint(size)
        c = rng.randint(size)
        if (r, c) not in blockers:
            blockers.append((r, c))
            grid[r][c] = BLOCKER
    return blockers


def create_game_state(seed: int, size: int = GRID_SIZE, num_blockers: int = 6) -> PackingState:
    """
    Build the board for ``seed``: blockers placed, all pieces unplaced.

    Args:
        seed: daily seed
        size: grid width
        num_blockers: number of fixed obstacles

    Returns:
        PackingState
    """
    rng = SeededRandom(seed)
    grid = empty_grid(size)
    blockers = place_blockers(grid, rng, num_blockers)
    return PackingState(grid=grid, pieces=create_pieces(), blockers=blockers)
