"""
Block Logic packing game - core data structures and piece catalog.
"""

from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass, field, replace
from enum import Enum

GRID_SIZE = 6
BLOCKER = "blocker"

Shape = List[List[int]]
Cell = Tuple[int, int]

# 1 marks an occupied cell of the shape
SHAPES: Dict[str, Shape] = {
    "I1": [[1]],
    "I2": [[1, 1]],
    "I3": [[1, 1, 1]],
    "L3": [[1, 0], [1, 1]],
    "O4": [[1, 1], [1, 1]],
    "T4": [[1, 1, 1], [0, 1, 0]],
    "Z4": [[1, 1, 0], [0, 1, 1]],
    "L4": [[1, 0, 0], [1, 1, 1]],
    "I4": [[1, 1, 1, 1]],
}

COLORS = [
    "#5D6D7E", "#A569BD", "#E74C3C", "#3498DB", "#1ABC9C",
    "#F39C12", "#D35400", "#2E86C1", "#27AE60",
]


class ErrorCode(Enum):
    """Outcome of a packing action."""
    OK = "OK"
    OUT_OF_BOUNDS = "OutOfBounds"
    COLLISION = "Collision"
    PIECE_NOT_FOUND = "PieceNotFound"
    PIECE_ALREADY_PLACED = "PieceAlreadyPlaced"
    NO_SELECTION = "NoSelection"
    EMPTY_CELL = "EmptyCell"
    PUZZLE_COMPLETE = "PuzzleComplete"


@dataclass
class Piece:
    """A catalog piece in its current orientation."""
    id: str
    shape: Shape
    color: str
    rotation: int = 0
    placed: bool = False

    def cells(self) -> List[Cell]:
        """Occupied (row, col) offsets in row-major order."""
        return [
            (r, c)
            for r, row in enumerate(self.shape)
            for c, value in enumerate(row)
            if value == 1
        ]

    @property
    def size(self) -> int:
        return len(self.cells())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "shape": [list(row) for row in self.shape],
            "color": self.color,
            "rotation": self.rotation,
            "placed": self.placed,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Piece":
        return Piece(
            id=data["id"],
            shape=[list(row) for row in data["shape"]],
            color=data["color"],
            rotation=data.get("rotation", 0),
            placed=data.get("placed", False),
        )


@dataclass
class PackingState:
    """Board state; cells hold None, BLOCKER, or a piece id."""
    grid: List[List[Optional[str]]]
    pieces: List[Piece]
    selected_piece_id: Optional[str] = None
    is_complete: bool = False
    moves: int = 0
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    blockers: List[Cell] = field(default_factory=list)

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def cols(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    def copy(self, **changes) -> "PackingState":
        """Copy with fresh grid rows and piece objects."""
        changes.setdefault("grid", [list(row) for row in self.grid])
        changes.setdefault("pieces", [replace(p, shape=[list(r) for r in p.shape]) for p in self.pieces])
        return replace(self, **changes)

    def get_piece(self, piece_id: str) -> Optional[Piece]:
        for p in self.pieces:
            if p.id == piece_id:
                return p
        return None

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_blocker(self, row: int, col: int) -> bool:
        return self.grid[row][col] == BLOCKER

    def filled_count(self) -> int:
        return sum(1 for row in self.grid for cell in row if cell is not None)

    def empty_cells(self) -> List[Cell]:
        return [
            (r, c)
            for r, row in enumerate(self.grid)
            for c, cell in enumerate(row)
            if cell is None
        ]

    def cells_of(self, piece_id: str) -> List[Cell]:
        return [
            (r, c)
            for r, row in enumerate(self.grid)
            for c, cell in enumerate(row)
            if cell == piece_id
        ]

    def unplaced_pieces(self) -> List[Piece]:
        return [p for p in self.pieces if not p.placed]

    def elapsed_ms(self) -> int:
        if self.start_time is None or self.end_time is None:
            return 0
        return self.end_time - self.start_time

    def to_dict(self) -> Dict[str, Any]:
        return {
            "grid": [list(row) for row in self.grid],
            "pieces": [p.to_dict() for p in self.pieces],
            "selected_piece_id": self.selected_piece_id,
            "is_complete": self.is_complete,
            "moves": self.moves,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "blockers": [list(b) for b in self.blockers],
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "PackingState":
        return PackingState(
            grid=[list(row) for row in data["grid"]],
            pieces=[Piece.from_dict(p) for p in data["pieces"]],
            selected_piece_id=data.get("selected_piece_id"),
            is_complete=data.get("is_complete", False),
            moves=data.get("moves", 0),
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
            blockers=[tuple(b) for b in data.get("blockers", [])],
        )


@dataclass
class PlacementResult:
    """Result of a packing action; ``state`` is the unchanged input on failure."""
    success: bool
    error: ErrorCode
    state: PackingState
    cells: Optional[List[Cell]] = None
    message: str = ""


def create_pieces() -> List[Piece]:
    """Fresh catalog pieces at rotation 0, unplaced."""
    return [
        Piece(id=key, shape=[list(row) for row in shape], color=COLORS[idx])
        for idx, (key, shape) in enumerate(SHAPES.items())
    ]


def catalog_cell_count() -> int:
    """Total number of cells covered by the whole catalog."""
    return sum(value for shape in SHAPES.values() for row in shape for value in row)


def check_complete(grid: List[List[Optional[str]]]) -> bool:
    """Every cell holds a blocker or a piece."""
    return all(cell is not None for row in grid for cell in row)
