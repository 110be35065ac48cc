"""Direct source: CodeChef contest list with future/present/past buckets."""

from zoneinfo import ZoneInfo

from loguru import logger
from pydantic import BaseModel, Field

from domain.identity import assign_contest_id
from domain.models.contest import Contest, hours_between
from domain.models.platform import CODECHEF

from .base import ContestQuery, ContestSource, QueryKind, parse_instant, validate_entries, validate_payload

CODECHEF_CONTEST_LIST_URL = "https://www.codechef.com/api/list/contests/all"

# Dates without an offset are CodeChef local time.
CODECHEF_TZ = ZoneInfo("Asia/Kolkata")


class CodeChefContest(BaseModel):
    contest_code: str
    contest_name: str
    contest_start_date: str
    contest_end_date: str
    contest_start_date_iso: str | None = None
    contest_end_date_iso: str | None = None


class CodeChefResponse(BaseModel):
    future_contests: list[dict] = Field(default_factory=list)
    present_contests: list[dict] = Field(default_factory=list)
    past_contests: list[dict] = Field(default_factory=list)

    def buckets_for(self, kind: QueryKind) -> list[dict]:
        if kind is QueryKind.UPCOMING:
            return [*self.future_contests, *self.present_contests]
        return [*self.present_contests, *self.past_contests]


def to_contests(entries: list[CodeChefContest]) -> list[Contest]:
    contests = []
    for entry in entries:
        try:
            start_time = parse_instant(
                entry.contest_start_date_iso or entry.contest_start_date, assume_tz=CODECHEF_TZ
            )
            end_time = parse_instant(
                entry.contest_end_date_iso or entry.contest_end_date, assume_tz=CODECHEF_TZ
            )
        except (ValueError, OverflowError):
            logger.debug(f"Skipping CodeChef contest with unreadable dates: {entry.contest_code}")
            continue

        contests.append(
            Contest(
                id=assign_contest_id(CODECHEF, entry.contest_name, start_time),
                name=entry.contest_name,
                platform=CODECHEF,
                url=f"https://www.codechef.com/{entry.contest_code}",
                start_time=start_time,
                end_time=end_time,
                duration_hours=hours_between(start_time, end_time),
            )
        )
    return contests


class CodeChefSource(ContestSource):
    name = "codechef"

    async def fetch_contests(self, query: ContestQuery) -> list[Contest]:
        data = await self.http_client.get_json(CODECHEF_CONTEST_LIST_URL, source=self.name)
        payload = validate_payload(self.name, CodeChefResponse, data)
        entries = validate_entries(self.name, CodeChefContest, payload.buckets_for(query.kind))
        return to_contests(entries)
