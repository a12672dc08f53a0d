from datetime import date

import pytest

from dailypuzzles.core.config import Config, GameConfig, SessionConfig
from dailypuzzles.core.seeding import FixedClock
from dailypuzzles.utils.display import LiveLogger
from dailypuzzles.utils.storage import MemoryStore


@pytest.fixture
def clock():
    return FixedClock(date(2025, 10, 18), now_ms=1_000_000)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def quiet():
    return LiveLogger(verbose=False)


@pytest.fixture
def make_config(tmp_path):
    """Build a Config whose session files all live under tmp_path."""
    def _make(**game):
        game.setdefault("type", "daily_15")
        session = SessionConfig(
            state_dir=str(tmp_path / "state"),
            log_dir=str(tmp_path / "logs"),
            results_path=str(tmp_path / "results.csv"),
            verbose=False,
        )
        return Config(game=GameConfig.from_dict(game), session=session)
    return _make
