"""
Ranking tiers for the sliding puzzle.

A finished puzzle is mapped to the first tier whose move threshold it meets;
the final tier is unbounded and catches everything else.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence


@dataclass(frozen=True)
class Ranking:
    """A named performance bracket."""
    title: str
    max_moves: float
    description: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Ranking":
        max_moves = data.get("max_moves")
        if max_moves is None or str(max_moves).lower() in ("inf", "infinity", ".inf"):
            max_moves = math.inf
        return cls(title=data["title"], max_moves=max_moves, description=data.get("description", ""))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "max_moves": None if math.isinf(self.max_moves) else self.max_moves,
            "description": self.description,
        }


DAILY_15_RANKINGS: List[Ranking] = [
    Ranking("Grandmaster", 60, "A flawless display of logic."),
    Ranking("Strategist", 90, "Highly efficient problem solving."),
    Ranking("Tactician", 130, "A strong, calculated approach."),
    Ranking("Apprentice", 180, "A solid effort with room to optimize."),
    Ranking("Novice", math.inf, "Persistence is the path to mastery."),
]


def get_ranking(moves: int, rankings: Sequence[Ranking] = DAILY_15_RANKINGS) -> Ranking:
    """Return the first tier whose threshold is >= ``moves``."""
    for tier in rankings:
        if moves <= tier.max_moves:
            return tier
    return rankings[-1]


def format_time(ms: int) -> str:
    """Format elapsed milliseconds as m:ss."""
    total_seconds = int(ms // 1000)
    minutes = total_seconds // 60
    seconds = total_seconds % 60
    return f"{minutes}:{seconds:02d}"
