"""
Block Logic environment: daily 6x6 packing puzzle.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from PIL import Image, ImageDraw

from dailypuzzles.core.base import GameMode, Observation
from dailypuzzles.core.config import PackingGameConfig
from dailypuzzles.core.registry import register_environment
from dailypuzzles.core.seeding import Clock, daily_seed
from dailypuzzles.environment.base_env import PuzzleEnvironment, build_schema, hex_to_rgb
from dailypuzzles.evaluation.ranking import format_time
from dailypuzzles.packing import (
    BLOCKER,
    PackingState,
    PlacementResult,
    click_cell,
    create_game_state,
    find_tiling,
    place_piece,
    remove_piece,
    rotate_selected,
    select_piece,
)


def _piece_text(shape) -> List[str]:
    return ["".join("#" if v else "." for v in row) for row in shape]


@register_environment(GameMode.BLOCK_LOGIC.value)
class PackingEnvironment(PuzzleEnvironment):
    """Tool-driven wrapper around the packing engine."""

    def __init__(self, config: PackingGameConfig, clock: Optional[Clock] = None):
        super().__init__(config, clock)
        self.config: PackingGameConfig
        self.game_state: Optional[PackingState] = None
        self._tool_handlers.update({
            "select": self._tool_select,
            "rotate": self._tool_rotate,
            "click": self._tool_click,
            "place": self._tool_place,
            "remove": self._tool_remove,
            "reset": self._tool_reset,
            "hint": self._tool_hint,
        })

    # ------------------------------------------------------------------ #
    # Game hooks
    # ------------------------------------------------------------------ #
    def has_game(self) -> bool:
        return self.game_state is not None

    def _derive_seed(self) -> int:
        return daily_seed(self.clock.today())

    def _new_game(self, seed: int) -> None:
        self.game_state = create_game_state(seed, self.config.grid_size, self.config.num_blockers)

    @property
    def is_complete(self) -> bool:
        return bool(self.game_state and self.game_state.is_complete)

    @property
    def moves(self) -> int:
        return self.game_state.moves if self.game_state else 0

    @property
    def elapsed_ms(self) -> int:
        return self.game_state.elapsed_ms() if self.game_state else 0

    def snapshot(self) -> Dict[str, Any]:
        return self.game_state.to_dict()

    def restore(self, data: Dict[str, Any]) -> Observation:
        self.game_state = PackingState.from_dict(data)
        return self._create_observation(metadata={"restored": True})

    # ------------------------------------------------------------------ #
    # Tools
    # ------------------------------------------------------------------ #
    def get_tool_schemas(self) -> List[Dict[str, Any]]:
        cell = {
            "row": {"type": "integer", "description": "Grid row (0-based)."},
            "col": {"type": "integer", "description": "Grid column (0-based)."},
        }
        piece = {"piece_id": {"type": "string", "description": "Catalog piece id, e.g. 'T4'."}}
        return [
            build_schema("state", "Show the board, pieces, selection and completion flag.", {}, []),
            build_schema("select", "Select an unplaced piece. Selecting the selected piece rotates it clockwise.",
                         piece, ["piece_id"]),
            build_schema("rotate", "Rotate the selected piece clockwise.", {}, []),
            build_schema("click", "Tap a grid cell: removes the piece there, or places the selected piece "
                                  "with its first occupied cell on the tapped cell.", cell, ["row", "col"]),
            build_schema("place", "Place a piece with its first occupied cell on (row, col).",
                         {**piece, **cell}, ["piece_id", "row", "col"]),
            build_schema("remove", "Lift a placed piece off the board.", piece, ["piece_id"]),
            build_schema("reset", "Restart today's board.", {}, []),
            build_schema("hint", "Search for a way to fill every empty cell with the unplaced pieces.", {}, []),
        ]

    def _apply(self, result: PlacementResult) -> Dict[str, Any]:
        if not result.success:
            return {"status": "error", "message": result.message, "error": result.error.value}
        self.game_state = result.state
        response = {"status": "success", "message": result.message, "moves": result.state.moves}
        if result.cells:
            response["cells"] = [list(c) for c in result.cells]
        if result.state.is_complete:
            response["message"] = "Puzzle solved"
            response["time"] = format_time(result.state.elapsed_ms())
        return response

    def _tool_select(self, piece_id: str) -> Dict[str, Any]:
        return self._apply(select_piece(self.game_state, str(piece_id)))

    def _tool_rotate(self) -> Dict[str, Any]:
        return self._apply(rotate_selected(self.game_state))

    def _tool_click(self, row: int, col: int) -> Dict[str, Any]:
        return self._apply(click_cell(self.game_state, int(row), int(col), self.clock.now_ms()))

    def _tool_place(self, piece_id: str, row: int, col: int) -> Dict[str, Any]:
        return self._apply(place_piece(self.game_state, str(piece_id), int(row), int(col), self.clock.now_ms()))

    def _tool_remove(self, piece_id: str) -> Dict[str, Any]:
        return self._apply(remove_piece(self.game_state, str(piece_id)))

    def _tool_reset(self) -> Dict[str, Any]:
        self._new_game(self.seed)
        return {"status": "success", "message": "Board reset", "moves": 0}

    def _tool_hint(self) -> Dict[str, Any]:
        steps = find_tiling(self.game_state)
        if steps is None:
            return {"status": "error", "message": "The remaining pieces cannot fill the board", "error": "NoTiling"}
        return {
            "status": "success",
            "message": f"Found a tiling with {len(steps)} placements",
            "steps": [
                {"piece_id": s.piece_id, "turns": s.turns, "row": s.row, "col": s.col}
                for s in steps
            ],
        }

    # ------------------------------------------------------------------ #
    # Rendering
    # ------------------------------------------------------------------ #
    def _state_metadata(self) -> Dict[str, Any]:
        state = self.game_state
        return {
            "grid": [list(row) for row in state.grid],
            "placed_pieces": sorted(p.id for p in state.pieces if p.placed),
            "unplaced_pieces": [p.id for p in state.pieces if not p.placed],
            "selected_piece_id": state.selected_piece_id,
            "filled": state.filled_count(),
            "total_cells": state.rows * state.cols,
            "moves": state.moves,
            "is_complete": state.is_complete,
            "start_time": state.start_time,
            "end_time": state.end_time,
        }

    def board_text(self) -> str:
        lines = []
        for row in self.game_state.grid:
            cells = []
            for cell in row:
                if cell is None:
                    cells.append(" .")
                elif cell == BLOCKER:
                    cells.append("##")
                else:
                    cells.append(cell[-2:].rjust(2))
            lines.append(" ".join(cells))
        return "\n".join(lines)

    def _get_state_description(self) -> str:
        if not self.game_state:
            return "Block Logic not initialized."
        state = self.game_state
        lines = [
            f"Block Logic No. {self.puzzle_number}",
            self.board_text(),
            f"Filled: {state.filled_count()}/{state.rows * state.cols}, Moves: {state.moves}",
        ]
        unplaced = state.unplaced_pieces()
        if unplaced:
            lines.append("Pieces:")
            for piece in unplaced:
                marker = "*" if piece.id == state.selected_piece_id else " "
                lines.append(f" {marker}{piece.id} (rot {piece.rotation}): {' | '.join(_piece_text(piece.shape))}")
        if state.is_complete:
            lines.append(f"Logic solved in {format_time(state.elapsed_ms())}.")
        return "\n".join(lines)

    def render(self) -> Image.Image:
        """Draw the grid with blockers and piece colors."""
        image = self._blank_canvas()
        if not self.game_state:
            return image
        draw = ImageDraw.Draw(image)
        state = self.game_state
        margin = 8
        cell_w = (self.config.render_width - margin * 2) / state.cols
        cell_h = (self.config.render_height - margin * 2) / state.rows
        colors = {p.id: hex_to_rgb(p.color) for p in state.pieces}

        for r, row in enumerate(state.grid):
            for c, cell in enumerate(row):
                box = (
                    margin + c * cell_w + 2,
                    margin + r * cell_h + 2,
                    margin + (c + 1) * cell_w - 2,
                    margin + (r + 1) * cell_h - 2,
                )
                if cell is None:
                    draw.rectangle(box, fill=(255, 255, 255))
                elif cell == BLOCKER:
                    draw.rectangle(box, fill=(60, 60, 60))
                    draw.line((box[0], box[3], box[2], box[1]), fill=(120, 120, 120), width=2)
                else:
                    draw.rectangle(box, fill=colors.get(cell, (128, 128, 128)), outline=(0, 0, 0))
        return image
