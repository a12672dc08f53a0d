"""
Key-value stores for persisted puzzle state.

The session host treats these as opaque: ``load`` returns the last value saved
under a key (or None), ``save`` overwrites it.
"""

import json
import os
import re
from abc import ABC, abstractmethod
from copy import deepcopy
from typing import Any, Dict, Optional

_SAFE_KEY = re.compile(r"[^A-Za-z0-9_.-]")


class StateStore(ABC):
    """Last-write-wins store keyed by "<variant>_<seed>"."""

    @abstractmethod
    def load(self, key: str) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    def save(self, key: str, state: Dict[str, Any]) -> None:
        pass


class MemoryStore(StateStore):
    def __init__(self):
        self.data: Dict[str, Dict[str, Any]] = {}

    def load(self, key: str) -> Optional[Dict[str, Any]]:
        value = self.data.get(key)
        return deepcopy(value) if value is not None else None

    def save(self, key: str, state: Dict[str, Any]) -> None:
        self.data[key] = deepcopy(state)


class JsonFileStore(StateStore):
    """One JSON file per key under ``state_dir``."""

    def __init__(self, state_dir: str):
        self.state_dir = state_dir

    def _path(self, key: str) -> str:
        return os.path.join(self.state_dir, f"{_SAFE_KEY.sub('_', key)}.json")

    def load(self, key: str) -> Optional[Dict[str, Any]]:
        path = self._path(key)
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError):
            return None
        return data if isinstance(data, dict) else None

    def save(self, key: str, state: Dict[str, Any]) -> None:
        os.makedirs(self.state_dir, exist_ok=True)
        path = self._path(key)
        tmp_path = path + ".tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(state, f, indent=2)
        os.replace(tmp_path, path)
