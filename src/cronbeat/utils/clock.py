"""Injected wall clock with an explicit timezone."""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo


class Clock:
    """Sub-second wall clock bound to one timezone.

    Trackers and monitors receive a clock at construction instead of reading
    the process default timezone, so every timestamp they write carries the
    same offset.
    """

    def __init__(self, tz: Optional[tzinfo] = None) -> None:
        self.tz = tz or timezone.utc

    @classmethod
    def for_zone(cls, name: str) -> "Clock":
        if name.upper() == "UTC":
            return cls(timezone.utc)
        return cls(ZoneInfo(name))

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def __repr__(self) -> str:
        return f"Clock(tz={self.tz})"


__all__ = ["Clock"]
