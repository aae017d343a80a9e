"""Calendar clock used to decide which day is "today"."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        """Return the current timezone-aware time."""


@dataclass
class ZoneClock(Clock):
    """System clock in a fixed IANA timezone."""

    timezone_name: str = "UTC"

    def now(self) -> datetime:
        return datetime.now(tz=ZoneInfo(self.timezone_name))


def today(clock: Clock) -> date:
    """Return the local calendar day of the clock."""
    return clock.now().date()


def is_same_local_day(moment: datetime, clock: Clock) -> bool:
    """Return True when a timestamp falls on the clock's current local day."""
    now = clock.now()
    return moment.astimezone(now.tzinfo).date() == now.date()
