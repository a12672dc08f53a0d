"""
Sliding puzzle - core data structures.
"""

from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field, replace
from enum import Enum


class ErrorCode(Enum):
    """Outcome of a tile move."""
    OK = "OK"
    OUT_OF_BOUNDS = "OutOfBounds"
    NOT_ADJACENT = "NotAdjacent"
    PUZZLE_COMPLETE = "PuzzleComplete"


@dataclass
class SlidingState:
    """Board state; ``None`` marks the empty cell."""
    size: int
    grid: List[Optional[int]]
    empty_index: int
    moves: int = 0
    is_complete: bool = False
    start_time: Optional[int] = None
    end_time: Optional[int] = None

    def copy(self, **changes) -> "SlidingState":
        """Shallow copy with a fresh grid list."""
        changes.setdefault("grid", list(self.grid))
        return replace(self, **changes)

    def position(self, index: int) -> tuple:
        """(row, col) of a grid index."""
        return divmod(index, self.size)

    def elapsed_ms(self) -> int:
        if self.start_time is None or self.end_time is None:
            return 0
        return self.end_time - self.start_time

    def to_dict(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "grid": list(self.grid),
            "empty_index": self.empty_index,
            "moves": self.moves,
            "is_complete": self.is_complete,
            "start_time": self.start_time,
            "end_time": self.end_time,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "SlidingState":
        return SlidingState(
            size=data["size"],
            grid=list(data["grid"]),
            empty_index=data["empty_index"],
            moves=data.get("moves", 0),
            is_complete=data.get("is_complete", False),
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
        )


@dataclass
class MoveResult:
    """Result of applying a move; ``state`` is the unchanged input on failure."""
    success: bool
    error: ErrorCode
    state: SlidingState
    message: str = ""


@dataclass
class ShuffleResult:
    """Shuffled grid plus every position the empty cell passed through."""
    grid: List[Optional[int]]
    empty_index: int
    empty_trail: List[int] = field(default_factory=list)


def solved_grid(size: int) -> List[Optional[int]]:
    """1..N-1 in row-major order, empty cell last."""
    grid: List[Optional[int]] = list(range(1, size * size))
    grid.append(None)
    return grid


def is_solved(grid: List[Optional[int]]) -> bool:
    """Tiles 1..N-1 occupy the first N-1 positions in order."""
    return all(value == i + 1 for i, value in enumerate(grid[:-1]))


def is_adjacent(size: int, a: int, b: int) -> bool:
    """Manhattan distance between two grid indices is exactly one."""
    row_a, col_a = divmod(a, size)
    row_b, col_b = divmod(b, size)
    return abs(row_a - row_b) + abs(col_a - col_b) == 1


def neighbors(size: int, index: int) -> List[int]:
    """Legal neighbours of ``index`` in the order up, down, left, right."""
    row, col = divmod(index, size)
    result = []
    if row > 0:
        result.append(index - size)
    if row < size - 1:
        result.append(index + size)
    if col > 0:
        result.append(index - 1)
    if col < size - 1:
        result.append(index + 1)
    return result


def count_inversions(grid: List[Optional[int]]) -> int:
    tiles = [v for v in grid if v is not None]
    inversions = 0
    for i in range(len(tiles)):
        for j in range(i + 1, len(tiles)):
            if tiles[i] > tiles[j]:
                inversions += 1
    return inversions


def is_solvable(grid: List[Optional[int]], size: int) -> bool:
    """
    Parity test for reachability from the solved layout.

    Odd widths need an even inversion count. Even widths need the inversion
    count plus the empty cell's row distance from the bottom row to be even.
    """
    inversions = count_inversions(grid)
    if size % 2 == 1:
        return inversions % 2 == 0
    empty_row = grid.index(None) // size
    return (inversions + (size - 1 - empty_row)) % 2 == 0
