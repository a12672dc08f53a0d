"""
Seed and puzzle-number derivation.

Every read of "today" or "now" goes through a ``Clock`` so sessions can be
replayed for a fixed date.
"""

import math
import time
from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta
from typing import Union

SLIDING_EPOCH = date(2025, 9, 19)
PACKING_EPOCH = date(2025, 11, 28)


class Clock(ABC):
    """Source of the local calendar date and wall-clock milliseconds."""

    def today(self) -> date:
        return self.now().date()

    @abstractmethod
    def now(self) -> datetime:
        pass

    @abstractmethod
    def now_ms(self) -> int:
        pass


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now()

    def now_ms(self) -> int:
        return int(time.time() * 1000)


class FixedClock(Clock):
    """Clock pinned to a given moment; ``advance`` moves it forward."""

    def __init__(self, moment: Union[datetime, date], now_ms: int = 0):
        if not isinstance(moment, datetime):
            moment = datetime(moment.year, moment.month, moment.day)
        self.moment = moment
        self._now_ms = now_ms

    def now(self) -> datetime:
        return self.moment

    def now_ms(self) -> int:
        return self._now_ms

    def advance(self, ms: int) -> None:
        self._now_ms += ms
        self.moment = self.moment + timedelta(milliseconds=ms)


def daily_seed(day: Union[date, datetime]) -> int:
    """YYYYMMDD as an integer."""
    return day.year * 10000 + day.month * 100 + day.day


def puzzle_number(moment: Union[date, datetime], epoch: date) -> int:
    """
    Sequential puzzle index: whole days since ``epoch``, rounded up.

    A plain date is read as local midnight, so during the epoch day itself a
    datetime gives 1 while the bare date gives 0.
    """
    if not isinstance(moment, datetime):
        moment = datetime(moment.year, moment.month, moment.day)
    start = datetime(epoch.year, epoch.month, epoch.day)
    delta = abs(moment - start)
    return math.ceil(delta / timedelta(days=1))


def session_seed(clock: Clock) -> int:
    """Non-deterministic seed for sessions that are not tied to a date."""
    return clock.now_ms()


class PinnedDateClock(SystemClock):
    """Real wall-clock time on a chosen calendar day (for replaying past puzzles)."""

    def __init__(self, day: date):
        self.day = day

    def now(self) -> datetime:
        return datetime.combine(self.day, datetime.now().time())
