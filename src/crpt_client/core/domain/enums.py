from __future__ import annotations

from enum import Enum


class TimeUnit(str, Enum):
    MILLISECONDS = "milliseconds"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"

    @property
    def seconds(self) -> float:
        return _UNIT_SECONDS[self]

    def to_seconds(self, magnitude: float) -> float:
        """Convert ``magnitude`` expressed in this unit to seconds."""
        return magnitude * self.seconds

    @classmethod
    def from_str(cls, value: str) -> "TimeUnit":
        """Parse a unit name, accepting common abbreviations (ms, s, min, h, d)."""
        s = value.strip().lower()
        aliases = {
            "ms": cls.MILLISECONDS,
            "millisecond": cls.MILLISECONDS,
            "s": cls.SECONDS,
            "sec": cls.SECONDS,
            "second": cls.SECONDS,
            "m": cls.MINUTES,
            "min": cls.MINUTES,
            "minute": cls.MINUTES,
            "h": cls.HOURS,
            "hour": cls.HOURS,
            "d": cls.DAYS,
            "day": cls.DAYS,
        }
        if s in aliases:
            return aliases[s]
        return cls(s)


_UNIT_SECONDS = {
    TimeUnit.MILLISECONDS: 0.001,
    TimeUnit.SECONDS: 1.0,
    TimeUnit.MINUTES: 60.0,
    TimeUnit.HOURS: 3600.0,
    TimeUnit.DAYS: 86400.0,
}


class GateStrategy(str, Enum):
    FIXED_WINDOW = "fixed_window"  # N permits, topped up every window
    PACED = "paced"  # one permit every window / N


class SubmissionStatus(Enum):
    SUCCESS = "SUCCESS"
    HTTP_ERROR = "HTTP_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
