"""
Sliding-tile puzzle engine (The Fifteen, Quick Blitz)
"""

from .game_core import (
    SlidingState, MoveResult, ShuffleResult, ErrorCode,
    solved_grid, is_solved, is_adjacent, is_solvable, neighbors
)

from .shuffle import shuffle_by_simulation, create_game_state, default_shuffle_moves

from .moves import slide_tile, apply_move, movable_indices

__all__ = [
    # Core types
    'SlidingState', 'MoveResult', 'ShuffleResult', 'ErrorCode',
    'solved_grid', 'is_solved', 'is_adjacent', 'is_solvable', 'neighbors',
    # Shuffle
    'shuffle_by_simulation', 'create_game_state', 'default_shuffle_moves',
    # Moves
    'slide_tile', 'apply_move', 'movable_indices',
]
