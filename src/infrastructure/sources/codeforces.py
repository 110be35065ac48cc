"""Direct source: Codeforces ``contest.list`` API."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from domain.models.contest import Contest, seconds_to_hours
from domain.models.platform import CODEFORCES
from infrastructure.errors import MalformedPayloadError

from .base import ContestQuery, ContestSource, QueryKind, validate_entries, validate_payload

CODEFORCES_CONTEST_LIST_URL = "https://codeforces.com/api/contest.list"

UPCOMING_PHASES = frozenset({"BEFORE", "CODING"})
PAST_PHASES = frozenset({"FINISHED"})


class CodeforcesContest(BaseModel):
    id: int
    name: str
    phase: str
    startTimeSeconds: int
    durationSeconds: int


class CodeforcesResponse(BaseModel):
    status: str
    comment: str | None = None
    result: list[dict] = Field(default_factory=list)


def to_contests(entries: list[CodeforcesContest], query: ContestQuery) -> list[Contest]:
    """Keep the phases relevant to ``query`` and map them. Ids are native."""
    phases = UPCOMING_PHASES if query.kind is QueryKind.UPCOMING else PAST_PHASES
    contests = []
    for entry in entries:
        if entry.phase not in phases:
            continue
        start_time = datetime.fromtimestamp(entry.startTimeSeconds, tz=timezone.utc)
        end_time = datetime.fromtimestamp(
            entry.startTimeSeconds + entry.durationSeconds, tz=timezone.utc
        )
        contests.append(
            Contest(
                id=entry.id,
                name=entry.name,
                platform=CODEFORCES,
                url=f"https://codeforces.com/contests/{entry.id}",
                start_time=start_time,
                end_time=end_time,
                duration_hours=seconds_to_hours(entry.durationSeconds),
            )
        )
    return contests


class CodeforcesSource(ContestSource):
    name = "codeforces"

    async def fetch_contests(self, query: ContestQuery) -> list[Contest]:
        data = await self.http_client.get_json(CODEFORCES_CONTEST_LIST_URL, source=self.name)
        payload = validate_payload(self.name, CodeforcesResponse, data)
        if payload.status != "OK":
            raise MalformedPayloadError(self.name, f"status {payload.status}: {payload.comment}")

        entries = validate_entries(self.name, CodeforcesContest, payload.result)
        return to_contests(entries, query)
