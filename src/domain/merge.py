"""Merging, deduplication and ordering of contests from several sources."""

from typing import Iterable

from .models.contest import Contest, ContestStatus, to_utc


def dedupe(contests: Iterable[Contest]) -> list[Contest]:
    """Drop contests whose ``dedupe_key`` was already seen. First one wins."""
    seen: set[str] = set()
    unique = []
    for contest in contests:
        key = contest.dedupe_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(contest)
    return unique


def merge_upcoming(contests: Iterable[Contest]) -> list[Contest]:
    """
    Order for the upcoming list.

    Sort by start ascending, dedupe, then move ongoing contests in front of
    upcoming ones. Contests without a status keep their place after both.
    """
    ordered = dedupe(sorted(contests, key=lambda c: to_utc(c.start_time)))
    ongoing = [c for c in ordered if c.status == ContestStatus.ONGOING]
    rest = [c for c in ordered if c.status != ContestStatus.ONGOING]
    return ongoing + rest


def merge_past(contests: Iterable[Contest]) -> list[Contest]:
    """Order for the past list: end time descending, then dedupe."""
    return dedupe(sorted(contests, key=lambda c: to_utc(c.end_time), reverse=True))
