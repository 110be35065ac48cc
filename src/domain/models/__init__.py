"""Domain models package."""

from .contest import (
    Contest,
    ContestStatus,
    hours_between,
    iso_utc,
    seconds_to_hours,
    to_millis,
    to_utc,
)
from .platform import normalize_platform

__all__ = [
    "Contest",
    "ContestStatus",
    "hours_between",
    "iso_utc",
    "normalize_platform",
    "seconds_to_hours",
    "to_millis",
    "to_utc",
]
