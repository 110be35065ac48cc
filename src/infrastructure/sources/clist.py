"""Primary aggregator: clist.by contest API."""

from datetime import datetime

from loguru import logger
from pydantic import BaseModel, Field

from domain.models.contest import Contest, hours_between, iso_utc, seconds_to_hours
from domain.models.platform import normalize_platform
from infrastructure.errors import MissingCredentialsError
from infrastructure.http_client import AsyncHTTPClient

from .base import ContestQuery, ContestSource, QueryKind, parse_instant, validate_entries, validate_payload

PAGE_LIMIT = 200


class ClistContest(BaseModel):
    id: int
    event: str
    resource: str
    href: str
    start: str
    end: str
    duration: float | None = None


class ClistResponse(BaseModel):
    objects: list[dict] = Field(default_factory=list)


def _api_time(value: datetime) -> str:
    # clist filters expect naive UTC timestamps
    return iso_utc(value).rstrip("Z")


def to_contests(entries: list[ClistContest]) -> list[Contest]:
    """Map clist objects to contests. Ids come straight from clist."""
    contests = []
    for entry in entries:
        try:
            start_time = parse_instant(entry.start)
            end_time = parse_instant(entry.end)
        except (ValueError, OverflowError):
            logger.debug(f"Skipping clist contest {entry.id} with unreadable dates")
            continue

        if entry.duration is not None:
            duration = seconds_to_hours(entry.duration)
        else:
            duration = hours_between(start_time, end_time)

        contests.append(
            Contest(
                id=entry.id,
                name=entry.event,
                platform=normalize_platform(entry.resource),
                url=entry.href,
                start_time=start_time,
                end_time=end_time,
                duration_hours=duration,
            )
        )
    return contests


class ClistSource(ContestSource):
    """Single filtered request against clist.by, authenticated by username + API key."""

    name = "clist"

    def __init__(
        self,
        http_client: AsyncHTTPClient,
        *,
        username: str | None,
        api_key: str | None,
        api_url: str,
        resources: tuple[str, ...],
    ):
        super().__init__(http_client)
        self.username = username
        self.api_key = api_key
        self.api_url = api_url
        self.resources = resources

    def build_params(self, query: ContestQuery) -> dict[str, str | int]:
        """Query string for ``query``: resource filter plus a time lower bound."""
        params: dict[str, str | int] = {
            "username": self.username or "",
            "api_key": self.api_key or "",
            "resource__regex": "|".join(self.resources),
            "limit": PAGE_LIMIT,
        }
        if query.kind is QueryKind.UPCOMING:
            params["end__gt"] = _api_time(query.now)
            params["order_by"] = "start"
        else:
            params["end__gt"] = _api_time(query.lower_bound)
            params["end__lt"] = _api_time(query.now)
            params["order_by"] = "-end"
        return params

    async def fetch_contests(self, query: ContestQuery) -> list[Contest]:
        if not (self.username and self.api_key):
            raise MissingCredentialsError(self.name, "CLIST_USERNAME / CLIST_API_KEY not set")

        data = await self.http_client.get_json(
            self.api_url, params=self.build_params(query), source=self.name
        )
        payload = validate_payload(self.name, ClistResponse, data)
        entries = validate_entries(self.name, ClistContest, payload.objects)
        return to_contests(entries)
