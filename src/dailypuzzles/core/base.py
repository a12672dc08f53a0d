"""
Base classes and interfaces for the daily puzzle games.

This module defines the shared vocabulary (game modes, actions, observations,
session results) and the abstract environment every game implements.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, TYPE_CHECKING
from dataclasses import dataclass, field
from enum import Enum
from abc import ABC, abstractmethod
from PIL import Image
if TYPE_CHECKING:
    from dailypuzzles.core.config import GameConfig


class GameMode(Enum):
    """Playable game variants."""
    DAILY_15 = "daily_15"
    QUICK_BLITZ = "quick_blitz"
    BLOCK_LOGIC = "block_logic"


@dataclass
class Action:
    """Represents an action to be applied to a game."""
    action_type: str
    parameters: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert action to dictionary representation."""
        return {
            "action_type": self.action_type,
            "parameters": self.parameters,
        }


@dataclass
class Observation:
    """What a player sees after each action."""
    image: Optional[Image.Image]
    step: int
    description: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert observation to dictionary (excluding the image)."""
        return {
            "step": self.step,
            "description": self.description,
            "metadata": self.metadata,
        }


@dataclass
class SessionResult:
    """Summary of a finished (or abandoned) session."""
    game_mode: str
    seed: int
    puzzle_number: Optional[int]
    moves: int
    elapsed_ms: int
    success: bool = False
    ranking: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "game_mode": self.game_mode,
            "seed": self.seed,
            "puzzle_number": self.puzzle_number,
            "moves": self.moves,
            "elapsed_ms": self.elapsed_ms,
            "success": bool(self.success),
            "ranking": self.ranking,
            "metadata": self.metadata,
        }


class BaseEnvironment(ABC):
    """Base class for puzzle game environments."""

    def __init__(self, config: GameConfig):
        self.config: GameConfig = config

    @abstractmethod
    def reset(self) -> Observation:
        """Generate the initial puzzle state."""
        pass

    @abstractmethod
    def step(self, action: Action) -> Observation:
        """Apply an action and return the new observation."""
        pass

    @abstractmethod
    def render(self) -> Image.Image:
        """Render the current board."""
        pass

    @abstractmethod
    def get_tool_schemas(self) -> List[Dict[str, Any]]:
        """Describe the actions this game accepts."""
        pass

    @abstractmethod
    def execute_tool_call(self, tool_name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
        """Execute a named action."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release environment resources."""
        pass
