"""
Placement, removal and selection for the Block Logic game.

All functions are pure: they return a PlacementResult carrying the next state
and leave the input untouched. Rejected actions carry the input state.
"""

from typing import List, Optional, Tuple

from dailypuzzles.packing.game_core import (
    BLOCKER, Cell, ErrorCode, PackingState, PlacementResult, Shape, check_complete
)
from dailypuzzles.packing.rotation import rotate_piece


def find_anchor(shape: Shape) -> Tuple[int, int]:
    """First occupied cell of the mask in row-major order."""
    for r, row in enumerate(shape):
        for c, value in enumerate(row):
            if value == 1:
                return r, c
    return 0, 0


def footprint(shape: Shape, row: int, col: int) -> List[Cell]:
    """Grid cells covered when the anchor of ``shape`` sits on (row, col)."""
    anchor_r, anchor_c = find_anchor(shape)
    start_r = row - anchor_r
    start_c = col - anchor_c
    return [
        (start_r + r, start_c + c)
        for r, shape_row in enumerate(shape)
        for c, value in enumerate(shape_row)
        if value == 1
    ]


def select_piece(state: PackingState, piece_id: str) -> PlacementResult:
    """
    Select an unplaced piece; selecting the selected piece rotates it.

    Args:
        state: current board
        piece_id: piece to select or rotate

    Returns:
        PlacementResult
    """
    if state.is_complete:
        return PlacementResult(False, ErrorCode.PUZZLE_COMPLETE, state, message="Puzzle already solved")

    piece = state.get_piece(piece_id)
    if not piece:
        return PlacementResult(False, ErrorCode.PIECE_NOT_FOUND, state, message=f"Piece {piece_id} not found")

    if piece.placed:
        return PlacementResult(False, ErrorCode.PIECE_ALREADY_PLACED, state, message=f"Piece {piece_id} is already placed")

    if state.selected_piece_id == piece_id:
        new_state = state.copy()
        new_state.pieces = [rotate_piece(p) if p.id == piece_id else p for p in new_state.pieces]
        return PlacementResult(True, ErrorCode.OK, new_state, message=f"Piece {piece_id} rotated")

    return PlacementResult(True, ErrorCode.OK, state.copy(selected_piece_id=piece_id),
                           message=f"Piece {piece_id} selected")


def rotate_selected(state: PackingState) -> PlacementResult:
    """Rotate the currently selected piece."""
    if state.selected_piece_id is None:
        return PlacementResult(False, ErrorCode.NO_SELECTION, state, message="No piece selected")
    return select_piece(state, state.selected_piece_id)


def place_piece(state: PackingState, piece_id: str, row: int, col: int,
                now: Optional[int] = None) -> PlacementResult:
    """
    Place a piece with its anchor cell on (row, col).

    Args:
        state: current board
        piece_id: piece to place
        row, col: target cell for the anchor (0-based)
        now: wall-clock milliseconds for start/end timestamps

    Returns:
        PlacementResult
    """
    if state.is_complete:
        return PlacementResult(False, ErrorCode.PUZZLE_COMPLETE, state, message="Puzzle already solved")

    piece = state.get_piece(piece_id)
    if not piece:
        return PlacementResult(False, ErrorCode.PIECE_NOT_FOUND, state, message=f"Piece {piece_id} not found")

    if piece.placed:
        return PlacementResult(False, ErrorCode.PIECE_ALREADY_PLACED, state, message=f"Piece {piece_id} is already placed")

    cells = footprint(piece.shape, row, col)
    for r, c in cells:
        if not state.in_bounds(r, c):
            return PlacementResult(False, ErrorCode.OUT_OF_BOUNDS, state,
                                   message=f"Piece {piece_id} exceeds the board at {(r, c)}")
    for r, c in cells:
        if state.grid[r][c] is not None:
            return PlacementResult(False, ErrorCode.COLLISION, state, message=f"Collision at {(r, c)}")

    new_state = state.copy()
    for r, c in cells:
        new_state.grid[r][c] = piece_id
    for p in new_state.pieces:
        if p.id == piece_id:
            p.placed = True

    complete = check_complete(new_state.grid)
    new_state.selected_piece_id = None
    new_state.moves = state.moves + 1
    new_state.start_time = state.start_time if state.start_time is not None else now
    new_state.is_complete = complete
    new_state.end_time = now if complete else None

    return PlacementResult(True, ErrorCode.OK, new_state, cells=cells,
                           message=f"Piece {piece_id} placed")


def remove_piece(state: PackingState, piece_id: str) -> PlacementResult:
    """Lift a placed piece off the board."""
    if state.is_complete:
        return PlacementResult(False, ErrorCode.PUZZLE_COMPLETE, state, message="Puzzle already solved")

    if piece_id == BLOCKER:
        return PlacementResult(False, ErrorCode.PIECE_NOT_FOUND, state, message="Blockers cannot be removed")

    cells = state.cells_of(piece_id)
    if not cells:
        return PlacementResult(False, ErrorCode.PIECE_NOT_FOUND, state, message=f"Piece {piece_id} is not placed")

    new_state = state.copy()
    for r, c in cells:
        new_state.grid[r][c] = None
    for p in new_state.pieces:
        if p.id == piece_id:
            p.placed = False
    new_state.moves = state.moves + 1
    new_state.selected_piece_id = None

    return PlacementResult(True, ErrorCode.OK, new_state, cells=cells,
                           message=f"Piece {piece_id} removed")


def click_cell(state: PackingState, row: int, col: int, now: Optional[int] = None) -> PlacementResult:
    """
    Grid tap: remove the piece under the cell, or place the selected piece.
    """
    if state.is_complete:
        return PlacementResult(False, ErrorCode.PUZZLE_COMPLETE, state, message="Puzzle already solved")

    if not state.in_bounds(row, col):
        return PlacementResult(False, ErrorCode.OUT_OF_BOUNDS, state, message=f"Cell {(row, col)} is off the board")

    value = state.grid[row][col]
    if value is not None and value != BLOCKER:
        return remove_piece(state, value)

    if state.selected_piece_id is None:
        return PlacementResult(False, ErrorCode.NO_SELECTION, state, message="No piece selected")

    return place_piece(state, state.selected_piece_id, row, col, now)
