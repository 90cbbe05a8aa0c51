"""A timestamp that serialises as "YYYY-MM-DD HH:MM:SS"."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class JSONTime:
    """Wraps a datetime; a missing time is the zero value."""

    time: datetime | None = None

    @property
    def is_zero(self) -> bool:
        return self.time is None or self.time == datetime.min

    def to_json(self) -> str:
        """Return the JSON text: a quoted timestamp, or "" for the zero value."""
        if self.is_zero:
            return '""'
        assert self.time is not None
        return f'"{self.time.strftime(TIME_FORMAT)}"'

    def value(self) -> datetime | None:
        """Return the value to store in a database; None for the zero value."""
        if self.is_zero:
            return None
        return self.time

    @classmethod
    def scan(cls, value: Any) -> "JSONTime":
        """Build a JSONTime from a database value, which must be a datetime."""
        if isinstance(value, datetime):
            return cls(value)
        raise TypeError(f"can not convert {value!r} to timestamp")