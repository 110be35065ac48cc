"""Canonical contest record shared by every source."""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum


class ContestStatus(str, Enum):
    """Status of a contest relative to the resolution-time clock."""

    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    PAST = "past"


def to_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_millis(value: datetime) -> int:
    """Epoch milliseconds of ``value``."""
    return int(round(to_utc(value).timestamp() * 1000))


def iso_utc(value: datetime) -> str:
    """ISO-8601 string with millisecond precision and a ``Z`` suffix."""
    return to_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def seconds_to_hours(seconds: float) -> float:
    """Convert a source-provided duration in seconds to hours."""
    if seconds < 0:
        return 0.0
    return round(seconds / 3600, 2)


def hours_between(start: datetime, end: datetime) -> float:
    """Duration in hours between two instants, clamped at zero."""
    return seconds_to_hours((to_utc(end) - to_utc(start)).total_seconds())


@dataclass(frozen=True)
class Contest:
    """A single contest, normalized from any upstream provider.

    ``status`` is left unset by the adapters. The window filter assigns it
    against the clock of the current resolution.
    """

    id: int
    name: str
    platform: str
    url: str
    start_time: datetime
    end_time: datetime
    duration_hours: float
    status: ContestStatus | None = None

    @property
    def dedupe_key(self) -> str:
        """Key used to detect the same contest reported by several sources."""
        return f"{self.platform}|{self.name}|{iso_utc(self.start_time)}"

    def with_status(self, status: ContestStatus) -> "Contest":
        return replace(self, status=status)
