"""
Quarter-turn rotations of 2D piece masks.
"""

import numpy as np
from typing import List, Tuple

from dailypuzzles.packing.game_core import Piece, Shape


def rotate_shape(shape: Shape) -> Shape:
    """
    Rotate a mask 90 degrees clockwise.

    An R x C mask becomes C x R with new[c][R-1-r] = old[r][c].
    """
    rotated = np.rot90(np.asarray(shape, dtype=int), k=-1)
    return rotated.tolist()


def rotate_piece(piece: Piece) -> Piece:
    """Return a copy of ``piece`` turned one quarter clockwise."""
    return Piece(
        id=piece.id,
        shape=rotate_shape(piece.shape),
        color=piece.color,
        rotation=(piece.rotation + 1) % 4,
        placed=piece.placed,
    )


def shape_signature(shape: Shape) -> str:
    """Canonical string for a mask, used to detect symmetric orientations."""
    return "/".join("".join(str(v) for v in row) for row in shape)


def unique_orientations(shape: Shape) -> List[Tuple[int, Shape]]:
    """Distinct masks reachable by rotation, paired with their quarter-turn count."""
    orientations = []
    seen = set()
    current = [list(row) for row in shape]
    for turns in range(4):
        sig = shape_signature(current)
        if sig not in seen:
            seen.add(sig)
            orientations.append((turns, current))
        current = rotate_shape(current)
    return orientations
