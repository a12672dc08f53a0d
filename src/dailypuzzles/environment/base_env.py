"""
Shared environment plumbing for the puzzle games.

An environment owns one game state, exposes its actions as named tools and
renders the board. Persistence is not handled here: the session host reads
``snapshot()`` after each step and decides whether to store it.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Callable, Dict, List, Optional

from PIL import Image, ImageDraw, ImageFont

from dailypuzzles.core.base import Action, BaseEnvironment, Observation
from dailypuzzles.core.config import GameConfig
from dailypuzzles.core.seeding import Clock, SystemClock, puzzle_number


def build_schema(name: str, desc: str, properties: Dict[str, Any], required: List[str]) -> Dict[str, Any]:
    return {
        "type": "function",
        "function": {
            "name": name,
            "description": desc,
            "parameters": {
                "type": "object",
                "properties": properties,
                "required": required,
            },
        },
    }


def hex_to_rgb(color: str) -> tuple:
    color = color.lstrip("#")
    return tuple(int(color[i:i + 2], 16) for i in (0, 2, 4))


class PuzzleEnvironment(BaseEnvironment):
    """Common tool dispatch, observation building and seeding."""

    background_color = (234, 232, 227)

    def __init__(self, config: GameConfig, clock: Optional[Clock] = None):
        super().__init__(config)
        self.clock: Clock = clock or SystemClock()
        self.step_count: int = 0
        self.seed: Optional[int] = None
        self._tool_handlers: Dict[str, Callable[..., Dict[str, Any]]] = {
            "state": self._tool_state,
        }

    # ------------------------------------------------------------------ #
    # BaseEnvironment API
    # ------------------------------------------------------------------ #
    def reset(self) -> Observation:
        """Generate today's (or a fresh) puzzle."""
        self.step_count = 0
        self.seed = self._derive_seed()
        self._new_game(self.seed)
        return self._create_observation()

    def step(self, action: Action) -> Observation:
        """Execute an action and return the new observation."""
        self.step_count += 1
        tool_result = self.execute_tool_call(action.action_type, action.parameters)
        return self._create_observation(metadata={
            "tool_call": action.to_dict(),
            "tool_result": tool_result,
        })

    def execute_tool_call(self, tool_name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
        """Dispatch tool calls."""
        handler = self._tool_handlers.get(tool_name)
        if not handler:
            return {"status": "error", "message": f"Unknown tool '{tool_name}'"}
        if not self.has_game():
            return {"status": "error", "message": "No puzzle loaded"}
        try:
            return handler(**arguments)
        except (TypeError, ValueError) as exc:
            return {"status": "error", "message": f"Tool '{tool_name}' failed: {exc}"}

    def close(self) -> None:
        """Cleanup (no-op for in-memory games)."""
        pass

    # ------------------------------------------------------------------ #
    # Persistence hooks used by the session host
    # ------------------------------------------------------------------ #
    @property
    def storage_key(self) -> Optional[str]:
        """Key for the persisted state, or None when the game is not persisted."""
        if self.seed is None or not self.persistable:
            return None
        return f"{self.config.type}_{self.seed}"

    @property
    def persistable(self) -> bool:
        return False

    @property
    def puzzle_number(self) -> Optional[int]:
        if self.config.epoch is None:
            return None
        return puzzle_number(self.clock.now(), self.config.epoch)

    @abstractmethod
    def snapshot(self) -> Dict[str, Any]:
        """Serializable copy of the current game state."""
        pass

    @abstractmethod
    def restore(self, data: Dict[str, Any]) -> Observation:
        """Replace the current game state with a persisted one."""
        pass

    # ------------------------------------------------------------------ #
    # Game hooks
    # ------------------------------------------------------------------ #
    @property
    def is_complete(self) -> bool:
        return False

    @property
    def moves(self) -> int:
        return 0

    @property
    def elapsed_ms(self) -> int:
        return 0

    @abstractmethod
    def has_game(self) -> bool:
        pass

    @abstractmethod
    def _derive_seed(self) -> int:
        pass

    @abstractmethod
    def _new_game(self, seed: int) -> None:
        pass

    @abstractmethod
    def _state_metadata(self) -> Dict[str, Any]:
        pass

    @abstractmethod
    def _get_state_description(self) -> str:
        pass

    def _tool_state(self) -> Dict[str, Any]:
        return {"status": "success", "message": "State retrieved", "state": self._state_metadata()}

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _create_observation(self, metadata: Optional[Dict[str, Any]] = None) -> Observation:
        meta = self._state_metadata() if self.has_game() else {}
        meta.update({
            "game_mode": self.config.type,
            "seed": self.seed,
            "puzzle_number": self.puzzle_number,
        })
        if metadata:
            meta.update(metadata)
        return Observation(
            image=self.render(),
            step=self.step_count,
            description=self._get_state_description(),
            metadata=meta,
        )

    def _blank_canvas(self) -> Image.Image:
        return Image.new("RGB", (self.config.render_width, self.config.render_height), color=self.background_color)

    def _draw_label(self, draw: ImageDraw.ImageDraw, box: tuple, text: str, fill=(40, 40, 40)) -> None:
        font = ImageFont.load_default()
        left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
        x = box[0] + (box[2] - box[0] - (right - left)) / 2
        y = box[1] + (box[3] - box[1] - (bottom - top)) / 2
        draw.text((x, y), text, fill=fill, font=font)
