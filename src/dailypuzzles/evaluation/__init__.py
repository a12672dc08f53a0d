"""Evaluation helpers: ranking tiers and time formatting."""

from dailypuzzles.evaluation.ranking import Ranking, DAILY_15_RANKINGS, get_ranking, format_time

__all__ = [
    "Ranking",
    "DAILY_15_RANKINGS",
    "get_ranking",
    "format_time",
]
