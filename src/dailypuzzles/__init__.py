"""
dailypuzzles: deterministic daily puzzle games

Seeded, reproducible puzzles for casual daily play:
- The Fifteen (daily 4x4 sliding-tile puzzle)
- Quick Blitz (3x3 sliding-tile puzzle with a fresh seed every session)
- Block Logic (daily 6x6 grid-packing puzzle)

Example Usage:
```python
from dailypuzzles.core.config import load_config
from dailypuzzles.core.base import Action
from dailypuzzles.runner import GameSession

config = load_config("configs/daily_15.yaml")
session = GameSession(config)
session.setup()
observation = session.start()
observation = session.apply(Action("move", {"index": 14}))
```

Command-line Usage:
```bash
dailypuzzles play --game daily_15
dailypuzzles show --game block_logic --date 2025-12-01
dailypuzzles results
```
"""

# Normal imports instead of lazy loading to ensure proper registry initialization
from dailypuzzles.core.config import Config, load_config, validate_config
from dailypuzzles.runner import GameSession

__version__ = "0.1.0"

__all__ = [
    "Config",
    "load_config",
    "validate_config",
    "GameSession",
]
