"""Builders for contest records used across tests."""

from datetime import datetime, timedelta, timezone

from domain.models.contest import Contest, hours_between

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def make_contest(
    name: str = "Round 1",
    *,
    platform: str = "codeforces",
    start: datetime | None = None,
    hours: float = 2,
    contest_id: int = 1,
    status=None,
) -> Contest:
    start = start or NOW + timedelta(days=1)
    end = start + timedelta(hours=hours)
    return Contest(
        id=contest_id,
        name=name,
        platform=platform,
        url=f"https://example.com/{contest_id}",
        start_time=start,
        end_time=end,
        duration_hours=hours_between(start, end),
        status=status,
    )
