"""
Game environments.

This package contains:
- PuzzleEnvironment: shared tool dispatch and observation building
- SlidingPuzzleEnvironment: The Fifteen and Quick Blitz
- PackingEnvironment: Block Logic
"""

# Normal imports to ensure proper environment registration
from dailypuzzles.environment.base_env import PuzzleEnvironment
from dailypuzzles.environment.sliding_env import SlidingPuzzleEnvironment
from dailypuzzles.environment.packing_env import PackingEnvironment

__all__ = [
    "PuzzleEnvironment",
    "SlidingPuzzleEnvironment",
    "PackingEnvironment",
]
