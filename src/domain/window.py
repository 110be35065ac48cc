"""Time-window policies deciding which contests are kept and their status."""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Protocol

from dateutil.relativedelta import relativedelta

from .models.contest import Contest, ContestStatus, to_utc


def classify_status(start: datetime, end: datetime, now: datetime) -> ContestStatus:
    """Status of a contest spanning ``[start, end)`` at instant ``now``."""
    start, end, now = to_utc(start), to_utc(end), to_utc(now)
    if now < start:
        return ContestStatus.UPCOMING
    if now < end:
        return ContestStatus.ONGOING
    return ContestStatus.PAST


class WindowPolicy(Protocol):
    """Decides inclusion and final status of contests."""

    def lower_bound(self, now: datetime) -> datetime:
        """Earliest end time the window accepts."""
        ...

    def apply(self, contests: Iterable[Contest], now: datetime) -> list[Contest]:
        """Filter ``contests`` and assign their status, preserving order."""
        ...


@dataclass(frozen=True)
class UpcomingWindow:
    """Contests that have not ended yet, classified ongoing or upcoming."""

    def lower_bound(self, now: datetime) -> datetime:
        return to_utc(now)

    def apply(self, contests: Iterable[Contest], now: datetime) -> list[Contest]:
        now = to_utc(now)
        kept = []
        for contest in contests:
            if to_utc(contest.end_time) <= now:
                continue
            status = classify_status(contest.start_time, contest.end_time, now)
            kept.append(contest.with_status(status))
        return kept


@dataclass(frozen=True)
class RecentPastWindow:
    """Contests that ended within the last ``months`` calendar months."""

    months: int = 2

    def lower_bound(self, now: datetime) -> datetime:
        return to_utc(now) - relativedelta(months=self.months)

    def apply(self, contests: Iterable[Contest], now: datetime) -> list[Contest]:
        now = to_utc(now)
        earliest = self.lower_bound(now)
        return [
            contest.with_status(ContestStatus.PAST)
            for contest in contests
            if earliest <= to_utc(contest.end_time) <= now
        ]
