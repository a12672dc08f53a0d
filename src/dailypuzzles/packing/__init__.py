"""
Block Logic grid-packing engine
"""

from .game_core import (
    Piece, PackingState, PlacementResult, ErrorCode,
    SHAPES, COLORS, BLOCKER, GRID_SIZE,
    create_pieces, catalog_cell_count, check_complete
)

from .rotation import rotate_shape, rotate_piece, unique_orientations

from .initialization import empty_grid, place_blockers, create_game_state

from .placement import (
    find_anchor,
    footprint,
    select_piece,
    rotate_selected,
    place_piece,
    remove_piece,
    click_cell
)

from .solver import SolutionStep, find_tiling, can_complete

__all__ = [
    # Core types
    'Piece', 'PackingState', 'PlacementResult', 'ErrorCode',
    'SHAPES', 'COLORS', 'BLOCKER', 'GRID_SIZE',
    'create_pieces', 'catalog_cell_count', 'check_complete',
    # Rotation
    'rotate_shape', 'rotate_piece', 'unique_orientations',
    # Initialization
    'empty_grid', 'place_blockers', 'create_game_state',
    # Placement
    'find_anchor', 'footprint', 'select_piece', 'rotate_selected',
    'place_piece', 'remove_piece', 'click_cell',
    # Solver
    'SolutionStep', 'find_tiling', 'can_complete',
]
