"""UTC datetime utilities and the timestamp source consumed by the market."""

from datetime import datetime, timezone
from typing import Protocol


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def unix_now() -> int:
    """Return the current unix timestamp in whole seconds."""
    return int(utc_now().timestamp())


class Clock(Protocol):
    def now(self) -> int: ...


class SystemClock:
    """Wall-clock seconds since the epoch."""

    def now(self) -> int:
        return unix_now()


class ManualClock:
    """Clock advanced explicitly by the caller (simulations and tests)."""

    def __init__(self, start: int = 0) -> None:
        self._now = start

    def now(self) -> int:
        return self._now

    def set(self, timestamp: int) -> None:
        self._now = timestamp

    def advance(self, seconds: int) -> None:
        self._now += seconds
