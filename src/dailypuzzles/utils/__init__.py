"""Utility modules for dailypuzzles."""

from dailypuzzles.utils.logger import SessionLogger, load_results, summarize_results
from dailypuzzles.utils.display import StatusDisplay, LiveLogger
from dailypuzzles.utils.storage import StateStore, MemoryStore, JsonFileStore

__all__ = [
    "SessionLogger",
    "load_results",
    "summarize_results",
    "StatusDisplay",
    "LiveLogger",
    "StateStore",
    "MemoryStore",
    "JsonFileStore",
]
