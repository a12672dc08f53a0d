"""
Configuration management for the daily puzzle games.

This module handles loading and validation of YAML configuration files and
provides typed configuration objects for the session host and each game.
"""

import os
import yaml
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field, asdict, replace
from datetime import date
from pathlib import Path

from dailypuzzles.core.base import GameMode
from dailypuzzles.core.registry import GAME_CONFIG_REGISTRY, register_game_config
from dailypuzzles.core.seeding import SLIDING_EPOCH, PACKING_EPOCH
from dailypuzzles.evaluation.ranking import Ranking, DAILY_15_RANKINGS


def _parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


@dataclass
class GameConfig:
    """Configuration shared by every game."""
    type: str
    epoch: Optional[date] = None
    render_width: int = 360
    render_height: int = 360

    def __post_init__(self):
        if self.type not in {m.value for m in GameMode}:
            raise ValueError(f"Unknown game type '{self.type}'")
        if self.epoch is not None:
            self.epoch = _parse_date(self.epoch)
        if not isinstance(self.render_width, int) or self.render_width <= 0:
            raise ValueError("render_width must be a positive integer")
        if not isinstance(self.render_height, int) or self.render_height <= 0:
            raise ValueError("render_height must be a positive integer")

    @property
    def mode(self) -> GameMode:
        return GameMode(self.type)

    @classmethod
    def from_dict(cls, game_data: Dict[str, Any]) -> "GameConfig":
        config_type = game_data.get("type", GameMode.DAILY_15.value)
        config_cls = GAME_CONFIG_REGISTRY.get(config_type, GameConfig)
        return config_cls(**game_data)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if self.epoch is not None:
            data["epoch"] = self.epoch.isoformat()
        return data


@register_game_config(GameMode.DAILY_15.value)
@register_game_config(GameMode.QUICK_BLITZ.value)
@dataclass
class SlidingGameConfig(GameConfig):
    """Configuration for the sliding-tile games (The Fifteen, Quick Blitz)."""
    grid_size: Optional[int] = None
    shuffle_moves: Optional[int] = None
    persist: Optional[bool] = None
    rankings: Optional[List[Dict[str, Any]]] = None

    def __post_init__(self):
        super().__post_init__()
        daily = self.mode == GameMode.DAILY_15
        if self.grid_size is None:
            self.grid_size = 4 if daily else 3
        if self.shuffle_moves is None:
            self.shuffle_moves = 250 if self.grid_size >= 4 else 50
        if self.epoch is None:
            self.epoch = SLIDING_EPOCH
        if self.persist is None:
            self.persist = daily
        if not isinstance(self.grid_size, int) or self.grid_size < 2:
            raise ValueError("grid_size must be an integer >= 2")
        if not isinstance(self.shuffle_moves, int) or self.shuffle_moves < 0:
            raise ValueError("shuffle_moves must be a non-negative integer")
        if self.persist and not daily:
            raise ValueError("Only the daily sliding puzzle can be persisted")
        if self.rankings is not None:
            tiers = self.ranking_tiers()
            thresholds = [t.max_moves for t in tiers]
            if not tiers:
                raise ValueError("rankings must contain at least one tier")
            if thresholds != sorted(thresholds):
                raise ValueError("ranking thresholds must be increasing")

    @property
    def daily(self) -> bool:
        return self.mode == GameMode.DAILY_15

    def ranking_tiers(self) -> List[Ranking]:
        if self.rankings is None:
            return list(DAILY_15_RANKINGS)
        # Tiers named like a default tier inherit its description when they omit one
        defaults = {t.title: t.description for t in DAILY_15_RANKINGS}
        tiers = []
        for data in self.rankings:
            tier = Ranking.from_dict(data)
            if not tier.description and tier.title in defaults:
                tier = replace(tier, description=defaults[tier.title])
            tiers.append(tier)
        return tiers


@register_game_config(GameMode.BLOCK_LOGIC.value)
@dataclass
class PackingGameConfig(GameConfig):
    """Configuration for the Block Logic packing game."""
    grid_size: int = 6
    num_blockers: int = 6

    def __post_init__(self):
        super().__post_init__()
        if self.epoch is None:
            self.epoch = PACKING_EPOCH
        if not isinstance(self.grid_size, int) or self.grid_size < 1:
            raise ValueError("grid_size must be a positive integer")
        if not isinstance(self.num_blockers, int) or self.num_blockers < 0:
            raise ValueError("num_blockers must be a non-negative integer")
        if self.num_blockers >= self.grid_size * self.grid_size:
            raise ValueError("num_blockers must leave at least one free cell")


@dataclass
class SessionConfig:
    """Configuration for the session host."""
    state_dir: str = ".dailypuzzles/state"
    log_dir: str = "logs"
    results_path: str = "results.csv"
    save_logs: bool = True
    verbose: bool = True

    def __post_init__(self):
        # Directory creation is deferred to GameSession.setup() to avoid side effects on import
        if not isinstance(self.state_dir, str) or not self.state_dir:
            raise ValueError("state_dir must be a non-empty string")
        if not isinstance(self.log_dir, str) or not self.log_dir:
            raise ValueError("log_dir must be a non-empty string")


@dataclass
class Config:
    """Main configuration object."""
    game: GameConfig
    session: SessionConfig = field(default_factory=SessionConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        game = GameConfig.from_dict(data.get("game", {}))
        session = SessionConfig(**data.get("session", {}))
        return cls(game=game, session=session)

    def to_dict(self) -> Dict[str, Any]:
        """Convert Config to dictionary."""
        return {
            "game": self.game.to_dict(),
            "session": {k: v for k, v in self.session.__dict__.items()},
        }


def load_config(config_path: str) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Config object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is malformed
        ValueError: If required fields are missing or invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error parsing YAML config: {e}")

    if not data:
        raise ValueError("Configuration file is empty")

    try:
        return Config.from_dict(data)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Error creating config from data: {e}")


def create_default_config(output_path: str = "config.yaml", game_type: str = GameMode.DAILY_15.value) -> Config:
    """
    Create a default configuration file.

    Args:
        output_path: Path where to save the default config
        game_type: Game mode to configure

    Returns:
        Default Config object
    """
    config = Config(game=GameConfig.from_dict({"type": game_type}))

    with open(output_path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(config.to_dict(), f, default_flow_style=False, indent=2, sort_keys=False)

    return config


def validate_config(config: Config) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration to validate

    Returns:
        List of validation messages
    """
    issues = []
    game = config.game

    if isinstance(game, SlidingGameConfig):
        if game.shuffle_moves == 0:
            issues.append("WARNING: shuffle_moves is 0, the puzzle starts solved")
        elif game.shuffle_moves < game.grid_size * game.grid_size:
            issues.append("WARNING: shuffle_moves is small for this grid size")

    if isinstance(game, PackingGameConfig):
        from dailypuzzles.packing.game_core import catalog_cell_count
        free_cells = game.grid_size * game.grid_size - game.num_blockers
        if catalog_cell_count() < free_cells:
            issues.append(
                f"WARNING: the piece catalog covers {catalog_cell_count()} cells but "
                f"{free_cells} cells are free; the board can never be completely filled"
            )
        if catalog_cell_count() > free_cells:
            issues.append("WARNING: the piece catalog covers more cells than are free; some pieces will stay unused")

    if config.session.results_path and not config.session.results_path.endswith(".csv"):
        issues.append("ERROR: results_path must point to a .csv file")

    state_parent = os.path.dirname(os.path.abspath(config.session.state_dir))
    if not os.path.exists(state_parent):
        issues.append(f"WARNING: parent of state_dir does not exist yet: {state_parent}")

    return issues
