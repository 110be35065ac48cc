"""Direct source: LeetCode GraphQL ``allContests`` query."""

from datetime import datetime, timezone

from pydantic import BaseModel

from domain.identity import assign_contest_id
from domain.models.contest import Contest, seconds_to_hours
from domain.models.platform import LEETCODE

from .base import ContestQuery, ContestSource, QueryKind, validate_entries, validate_payload

LEETCODE_GRAPHQL_URL = "https://leetcode.com/graphql"
CONTEST_LIST_QUERY = "query getContestList { allContests { title startTime duration titleSlug } }"


class LeetCodeContest(BaseModel):
    title: str
    titleSlug: str
    startTime: int
    duration: int


class LeetCodeData(BaseModel):
    allContests: list[dict] | None = None


class LeetCodeResponse(BaseModel):
    data: LeetCodeData


def to_contests(entries: list[LeetCodeContest], query: ContestQuery) -> list[Contest]:
    """Upcoming keeps contests not started yet, past keeps the finished ones."""
    contests = []
    for entry in entries:
        start_time = datetime.fromtimestamp(entry.startTime, tz=timezone.utc)
        end_time = datetime.fromtimestamp(entry.startTime + entry.duration, tz=timezone.utc)

        if query.kind is QueryKind.UPCOMING and start_time <= query.now:
            continue
        if query.kind is QueryKind.PAST and end_time >= query.now:
            continue

        contests.append(
            Contest(
                id=assign_contest_id(LEETCODE, entry.title, entry.startTime * 1000),
                name=entry.title,
                platform=LEETCODE,
                url=f"https://leetcode.com/contest/{entry.titleSlug}",
                start_time=start_time,
                end_time=end_time,
                duration_hours=seconds_to_hours(entry.duration),
            )
        )
    return contests


class LeetCodeSource(ContestSource):
    name = "leetcode"

    async def fetch_contests(self, query: ContestQuery) -> list[Contest]:
        data = await self.http_client.post_json(
            LEETCODE_GRAPHQL_URL, {"query": CONTEST_LIST_QUERY}, source=self.name
        )
        payload = validate_payload(self.name, LeetCodeResponse, data)
        entries = validate_entries(self.name, LeetCodeContest, payload.data.allContests or [])
        return to_contests(entries, query)
