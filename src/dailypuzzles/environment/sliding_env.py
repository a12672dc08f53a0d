"""
Sliding-puzzle environment: The Fifteen (daily, 4x4) and Quick Blitz (3x3).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from PIL import Image, ImageDraw

from dailypuzzles.core.base import GameMode, Observation
from dailypuzzles.core.config import SlidingGameConfig
from dailypuzzles.core.registry import register_environment
from dailypuzzles.core.seeding import Clock, daily_seed, session_seed
from dailypuzzles.environment.base_env import PuzzleEnvironment, build_schema
from dailypuzzles.evaluation.ranking import format_time, get_ranking
from dailypuzzles.sliding import SlidingState, create_game_state, movable_indices, slide_tile


@register_environment(GameMode.DAILY_15.value)
@register_environment(GameMode.QUICK_BLITZ.value)
class SlidingPuzzleEnvironment(PuzzleEnvironment):
    """Tool-driven wrapper around the sliding puzzle engine."""

    def __init__(self, config: SlidingGameConfig, clock: Optional[Clock] = None):
        super().__init__(config, clock)
        self.config: SlidingGameConfig
        self.game_state: Optional[SlidingState] = None
        self._tool_handlers.update({
            "move": self._tool_move,
            "ranking": self._tool_ranking,
        })

    # ------------------------------------------------------------------ #
    # Game hooks
    # ------------------------------------------------------------------ #
    def has_game(self) -> bool:
        return self.game_state is not None

    def _derive_seed(self) -> int:
        if self.config.daily:
            return daily_seed(self.clock.today())
        return session_seed(self.clock)

    def _new_game(self, seed: int) -> None:
        self.game_state = create_game_state(self.config.grid_size, seed, self.config.shuffle_moves)

    @property
    def persistable(self) -> bool:
        return bool(self.config.persist)

    @property
    def puzzle_number(self) -> Optional[int]:
        if not self.config.daily:
            return None
        return super().puzzle_number

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
        state = SlidingState.from_dict(data)
        if state.size != self.config.grid_size:
            raise ValueError(f"Stored grid size {state.size} does not match configured {self.config.grid_size}")
        self.game_state = state
        return self._create_observation(metadata={"restored": True})

    def ranking(self):
        return get_ranking(self.moves, self.config.ranking_tiers())

    # ------------------------------------------------------------------ #
    # Tools
    # ------------------------------------------------------------------ #
    def get_tool_schemas(self) -> List[Dict[str, Any]]:
        return [
            build_schema("state", "Show the current board, move count and completion flag.", {}, []),
            build_schema(
                "move",
                "Slide the tile at a grid position into the empty cell. Give either a row-major "
                "index or a (row, col) pair, 0-based. Only tiles next to the empty cell move.",
                {
                    "index": {"type": "integer", "description": "Row-major grid index of the tile."},
                    "row": {"type": "integer", "description": "Row of the tile (0-based)."},
                    "col": {"type": "integer", "description": "Column of the tile (0-based)."},
                },
                [],
            ),
            build_schema("ranking", "Show the ranking tier for the current move count.", {}, []),
        ]

    def _tool_move(self, index: Optional[int] = None, row: Optional[int] = None,
                   col: Optional[int] = None) -> Dict[str, Any]:
        if index is None:
            if row is None or col is None:
                return {"status": "error", "message": "Provide index or row and col"}
            size = self.game_state.size
            if not (0 <= int(row) < size and 0 <= int(col) < size):
                return {"status": "error", "message": f"Cell {(row, col)} is off the board", "error": "OutOfBounds"}
            index = int(row) * size + int(col)

        result = slide_tile(self.game_state, int(index), self.clock.now_ms())
        if not result.success:
            return {"status": "error", "message": result.message, "error": result.error.value}

        self.game_state = result.state
        response = {"status": "success", "message": result.message, "moves": result.state.moves}
        if result.state.is_complete:
            tier = self.ranking()
            response.update({
                "message": "Puzzle solved",
                "ranking": tier.title,
                "time": format_time(result.state.elapsed_ms()),
            })
        return response

    def _tool_ranking(self) -> Dict[str, Any]:
        tier = self.ranking()
        return {"status": "success", "message": "Ranking retrieved", "ranking": tier.to_dict()}

    # ------------------------------------------------------------------ #
    # Rendering
    # ------------------------------------------------------------------ #
    def _state_metadata(self) -> Dict[str, Any]:
        state = self.game_state
        return {
            "grid": list(state.grid),
            "size": state.size,
            "empty_index": state.empty_index,
            "moves": state.moves,
            "is_complete": state.is_complete,
            "start_time": state.start_time,
            "end_time": state.end_time,
        }

    def board_text(self) -> str:
        state = self.game_state
        width = len(str(state.size * state.size - 1))
        lines = []
        for r in range(state.size):
            cells = state.grid[r * state.size:(r + 1) * state.size]
            lines.append(" ".join("." * width if v is None else str(v).rjust(width) for v in cells))
        return "\n".join(lines)

    def _get_state_description(self) -> str:
        if not self.game_state:
            return "Sliding puzzle not initialized."
        title = "The Fifteen" if self.config.daily else "Quick Blitz"
        number = self.puzzle_number
        lines = [f"{title} No. {number}" if number is not None else title, self.board_text(),
                 f"Moves: {self.game_state.moves}"]
        if self.game_state.is_complete:
            tier = self.ranking()
            lines.append(f"Solved in {format_time(self.game_state.elapsed_ms())}. Ranking: {tier.title} - {tier.description}")
        else:
            lines.append(f"Movable tiles at: {movable_indices(self.game_state)}")
        return "\n".join(lines)

    def render(self) -> Image.Image:
        """Draw the tile grid."""
        image = self._blank_canvas()
        if not self.game_state:
            return image
        draw = ImageDraw.Draw(image)
        size = self.game_state.size
        margin = 8
        cell_w = (self.config.render_width - margin * 2) / size
        cell_h = (self.config.render_height - margin * 2) / size
        tile_color = (39, 174, 96) if self.game_state.is_complete else (250, 249, 246)
        text_color = (255, 255, 255) if self.game_state.is_complete else (40, 40, 40)

        for idx, value in enumerate(self.game_state.grid):
            if value is None:
                continue
            r, c = self.game_state.position(idx)
            box = (
                margin + c * cell_w + 3,
                margin + r * cell_h + 3,
                margin + (c + 1) * cell_w - 3,
                margin + (r + 1) * cell_h - 3,
            )
            draw.rectangle(box, fill=tile_color, outline=(200, 198, 192))
            self._draw_label(draw, box, str(value), fill=text_color)
        return image
