"""Domain primitives that enforce validity at creation time."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Self
from uuid import UUID


@dataclass(frozen=True)
class SeriesId:
    """Unique identifier for an EventSeries."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class EventId:
    """Unique identifier for a materialized Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


class Frequency(Enum):
    """Supported recurrence frequencies."""

    DAILY = "daily"
    WEEKLY = "weekly"

    @classmethod
    def coerce(cls, value: str) -> "Frequency | str":
        """Return the matching member, or the raw value when unrecognised.

        Stored rows can carry values outside the enum. The expander rejects
        them, which lets the materializer skip that one series.
        """
        try:
            return cls(value)
        except ValueError:
            return value


class Visibility(Enum):
    PUBLIC = "public"
    PRIVATE = "private"

    @classmethod
    def coerce(cls, value: str) -> "Visibility | str":
        """Same pass-through as ``Frequency.coerce``; unknown rows get skipped."""
        try:
            return cls(value)
        except ValueError:
            return value


# Sunday-based weekday numbering: 0=Sunday ... 6=Saturday.
SUNDAY = 0
SATURDAY = 6


def coerce_interval(value: int | None) -> int:
    """Intervals below one mean 'every period'."""
    if value is None or value <= 0:
        return 1
    return value


@dataclass(frozen=True)
class DurationMinutes:
    """Positive event duration. Use ``from_raw`` for nullable inputs."""

    value: int

    def __post_init__(self) -> None:
        if self.value <= 0:
            raise ValueError("Duration must be positive")

    @classmethod
    def from_raw(cls, value: object) -> Self | None:
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        if value <= 0:
            return None
        return cls(value=value)


_CATEGORY_KEY_SEPARATORS = re.compile(r"[^a-z0-9]+")


def normalize_category_key(value: str) -> str:
    """Lowercase slug form used as the category lookup key."""
    return _CATEGORY_KEY_SEPARATORS.sub("-", value.strip().lower()).strip("-")


def normalize_category_keys(values: list[str]) -> list[str]:
    """Normalize, drop empties and dedupe, keeping first-seen order."""
    keys: list[str] = []
    for value in values:
        key = normalize_category_key(value)
        if key and key not in keys:
            keys.append(key)
    return keys
