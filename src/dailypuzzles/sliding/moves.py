"""
Tile moves for the sliding puzzle.

Every function here is pure: it returns a new state and never mutates its
input. Invalid moves come back with an error code and the input state.
"""

from typing import Optional

from dailypuzzles.sliding.game_core import ErrorCode, MoveResult, SlidingState, is_adjacent, is_solved


def slide_tile(state: SlidingState, index: int, now: Optional[int] = None) -> MoveResult:
    """
    Slide the tile at ``index`` into the empty cell.

    Args:
        state: current board
        index: grid index of the tile to move
        now: wall-clock milliseconds used for start/end timestamps

    Returns:
        MoveResult
    """
    if state.is_complete:
        return MoveResult(False, ErrorCode.PUZZLE_COMPLETE, state, "Puzzle already solved")

    if not 0 <= index < len(state.grid):
        return MoveResult(False, ErrorCode.OUT_OF_BOUNDS, state, f"Index {index} is outside the grid")

    if not is_adjacent(state.size, index, state.empty_index):
        return MoveResult(False, ErrorCode.NOT_ADJACENT, state, f"Tile at {index} is not next to the empty cell")

    grid = list(state.grid)
    tile = grid[index]
    grid[state.empty_index] = tile
    grid[index] = None

    solved = is_solved(grid)
    new_state = state.copy(
        grid=grid,
        empty_index=index,
        moves=state.moves + 1,
        start_time=state.start_time if state.start_time is not None else now,
        is_complete=solved,
        end_time=now if solved else None,
    )
    return MoveResult(True, ErrorCode.OK, new_state, f"Moved tile {tile}")


def apply_move(state: SlidingState, index: int, now: Optional[int] = None) -> SlidingState:
    """State-to-state form of ``slide_tile``."""
    return slide_tile(state, index, now).state


def movable_indices(state: SlidingState) -> list:
    """Indices of tiles that can currently move."""
    if state.is_complete:
        return []
    return [i for i in range(len(state.grid)) if is_adjacent(state.size, i, state.empty_index)]
