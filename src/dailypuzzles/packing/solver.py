"""
Backtracking solver for the packing board.

The first empty cell in reading order can only be covered by a piece whose
anchor lands on it, so every branch places some orientation of some unused
piece with its anchor on that cell.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from dailypuzzles.packing.game_core import PackingState
from dailypuzzles.packing.placement import footprint
from dailypuzzles.packing.rotation import unique_orientations


@dataclass
class SolutionStep:
    """Place ``piece_id`` after ``turns`` clockwise quarter turns, anchor on (row, col)."""
    piece_id: str
    turns: int
    row: int
    col: int


def find_tiling(state: PackingState) -> Optional[List[SolutionStep]]:
    """
    Fill every empty cell using each unplaced piece at most once.

    Args:
        state: board to complete (not modified)

    Returns:
        Steps that complete the board, or None if no tiling exists
    """
    grid = [list(row) for row in state.grid]
    candidates = [
        (piece.id, piece.size, unique_orientations(piece.shape))
        for piece in state.unplaced_pieces()
    ]
    used = [False] * len(candidates)
    steps: List[SolutionStep] = []

    def first_empty() -> Optional[Tuple[int, int]]:
        for r, row in enumerate(grid):
            for c, cell in enumerate(row):
                if cell is None:
                    return r, c
        return None

    def remaining_capacity() -> int:
        return sum(size for i, (_, size, _) in enumerate(candidates) if not used[i])

    def fits(cells) -> bool:
        for r, c in cells:
            if not (0 <= r < len(grid) and 0 <= c < len(grid[0])):
                return False
            if grid[r][c] is not None:
                return False
        return True

    def solve(empty_count: int) -> bool:
        target = first_empty()
        if target is None:
            return True
        if remaining_capacity() < empty_count:
            return False

        row, col = target
        for idx, (piece_id, size, orientations) in enumerate(candidates):
            if used[idx]:
                continue
            for turns, shape in orientations:
                cells = footprint(shape, row, col)
                if not fits(cells):
                    continue
                for r, c in cells:
                    grid[r][c] = piece_id
                used[idx] = True
                steps.append(SolutionStep(piece_id, turns, row, col))

                if solve(empty_count - size):
                    return True

                steps.pop()
                used[idx] = False
                for r, c in cells:
                    grid[r][c] = None
        return False

    if solve(len(state.empty_cells())):
        return steps
    return None


def can_complete(state: PackingState) -> bool:
    """True if the remaining pieces can fill the board."""
    return find_tiling(state) is not None
