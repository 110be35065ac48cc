"""Secondary aggregator: per-platform endpoints sharing one simplified schema."""

import asyncio

from loguru import logger
from pydantic import BaseModel, TypeAdapter, ValidationError

from domain.identity import assign_contest_id
from domain.models.contest import Contest, hours_between, seconds_to_hours
from domain.models.platform import normalize_platform
from infrastructure.errors import MalformedPayloadError, SourceError
from infrastructure.http_client import AsyncHTTPClient

from .base import ContestQuery, ContestSource, QueryKind, parse_instant, validate_entries

DEFAULT_ENDPOINTS = ("codeforces", "code_chef", "leet_code")

UPCOMING_PHASES = frozenset({"BEFORE", "CODING"})

_ENTRY_LIST = TypeAdapter(list[dict])


class KontestsContest(BaseModel):
    name: str
    url: str
    start_time: str
    end_time: str
    duration: float | None = None
    site: str
    status: str | None = None


def to_contests(entries: list[KontestsContest], query: ContestQuery, endpoint: str) -> list[Contest]:
    """
    Map aggregator entries to contests.

    The platform comes from the ``site`` name, falling back to the endpoint
    slug when the site is blank. For upcoming queries only BEFORE/CODING
    entries are kept; entries without a status are left to the window filter.
    """
    contests = []
    for entry in entries:
        if (
            query.kind is QueryKind.UPCOMING
            and entry.status is not None
            and entry.status.upper() not in UPCOMING_PHASES
        ):
            continue

        try:
            start_time = parse_instant(entry.start_time)
            end_time = parse_instant(entry.end_time)
        except (ValueError, OverflowError):
            logger.debug(f"Skipping {endpoint} contest with unreadable dates: {entry.name}")
            continue

        platform = normalize_platform(entry.site or endpoint)
        if entry.duration is not None:
            duration = seconds_to_hours(entry.duration)
        else:
            duration = hours_between(start_time, end_time)

        contests.append(
            Contest(
                id=assign_contest_id(platform, entry.name, start_time),
                name=entry.name,
                platform=platform,
                url=entry.url,
                start_time=start_time,
                end_time=end_time,
                duration_hours=duration,
            )
        )
    return contests


class KontestsSource(ContestSource):
    """Queries every configured endpoint concurrently and flattens the results.

    A failing endpoint contributes nothing; the source only fails when all
    endpoints fail.
    """

    name = "kontests"

    def __init__(
        self,
        http_client: AsyncHTTPClient,
        *,
        base_url: str,
        endpoints: tuple[str, ...] = DEFAULT_ENDPOINTS,
    ):
        super().__init__(http_client)
        self.base_url = base_url.rstrip("/")
        self.endpoints = endpoints

    async def fetch_contests(self, query: ContestQuery) -> list[Contest]:
        results = await asyncio.gather(
            *(self._fetch_endpoint(endpoint, query) for endpoint in self.endpoints),
            return_exceptions=True,
        )

        contests: list[Contest] = []
        errors: list[BaseException] = []
        for endpoint, result in zip(self.endpoints, results):
            if isinstance(result, BaseException):
                logger.warning(f"Kontests endpoint {endpoint} failed: {result}")
                errors.append(result)
                continue
            contests.extend(result)

        if errors and len(errors) == len(self.endpoints):
            first = errors[0]
            if isinstance(first, SourceError):
                raise first
            raise MalformedPayloadError(self.name, f"all endpoints failed: {first!r}") from first

        return contests

    async def _fetch_endpoint(self, endpoint: str, query: ContestQuery) -> list[Contest]:
        source = f"{self.name}/{endpoint}"
        data = await self.http_client.get_json(f"{self.base_url}/{endpoint}", source=source)
        try:
            items = _ENTRY_LIST.validate_python(data)
        except ValidationError as e:
            raise MalformedPayloadError(source, "expected a list of contests") from e

        entries = validate_entries(source, KontestsContest, items)
        return to_contests(entries, query, endpoint)
