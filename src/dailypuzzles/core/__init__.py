"""
Core modules for dailypuzzles.

This package contains the fundamental components:
- Base classes and shared types (actions, observations, results)
- Deterministic random generator and seed derivation
- Configuration management
- Registry for game discovery
"""

from dailypuzzles.core.base import (
    Action,
    BaseEnvironment,
    GameMode,
    Observation,
    SessionResult,
)

from dailypuzzles.core.config import (
    Config, GameConfig, SlidingGameConfig, PackingGameConfig, SessionConfig,
    load_config, create_default_config, validate_config
)

from dailypuzzles.core.registry import (
    register_environment, register_game_config, ENVIRONMENT_REGISTRY, GAME_CONFIG_REGISTRY
)

from dailypuzzles.core.rng import SeededRandom

from dailypuzzles.core.seeding import (
    Clock, SystemClock, FixedClock, PinnedDateClock, daily_seed, puzzle_number, session_seed,
    SLIDING_EPOCH, PACKING_EPOCH
)

__all__ = [
    "Action",
    "BaseEnvironment",
    "GameMode",
    "Observation",
    "SessionResult",
    "Config",
    "GameConfig",
    "SlidingGameConfig",
    "PackingGameConfig",
    "SessionConfig",
    "load_config",
    "create_default_config",
    "validate_config",
    "register_environment",
    "register_game_config",
    "ENVIRONMENT_REGISTRY",
    "GAME_CONFIG_REGISTRY",
    "SeededRandom",
    "Clock",
    "SystemClock",
    "FixedClock",
    "PinnedDateClock",
    "daily_seed",
    "puzzle_number",
    "session_seed",
    "SLIDING_EPOCH",
    "PACKING_EPOCH",
]
