"""
HGS Core Time — Explicit Clock Protocol
=========================================
Event timestamps and command outcomes are stamped from an injected
Clock so that tests can pin time and replayed histories stay
reproducible.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    """Injectable time source."""

    def now_utc(self) -> datetime:
        """Return current UTC time."""
        ...  # pragma: no cover


class SystemClock:
    """Production clock — real system time."""

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Test clock — returns a pinned timestamp until advanced.

    Usage:
        clock = FixedClock(datetime(2026, 1, 1, tzinfo=timezone.utc))
        clock.advance(30)
    """

    def __init__(self, fixed_dt: datetime) -> None:
        if fixed_dt.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")
        self._fixed_dt = fixed_dt

    def now_utc(self) -> datetime:
        return self._fixed_dt

    def advance(self, seconds: float) -> None:
        self._fixed_dt = self._fixed_dt + timedelta(seconds=seconds)
