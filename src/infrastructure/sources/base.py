"""Base class and shared helpers for upstream contest sources."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, TypeVar

from dateutil import parser as date_parser
from loguru import logger
from pydantic import BaseModel, ValidationError

from domain.models.contest import Contest, to_utc
from domain.window import RecentPastWindow, UpcomingWindow, WindowPolicy
from infrastructure.errors import MalformedPayloadError, SourceError
from infrastructure.http_client import AsyncHTTPClient

ModelT = TypeVar("ModelT", bound=BaseModel)


class QueryKind(str, Enum):
    """Which contest list a resolution is building."""

    UPCOMING = "upcoming"
    PAST = "past"


@dataclass(frozen=True)
class ContestQuery:
    """Parameters of one resolution, shared by every source it touches.

    The window policy follows from ``kind``: upcoming queries use
    ``UpcomingWindow``, past queries a ``RecentPastWindow`` of
    ``past_window_months``.
    """

    kind: QueryKind
    now: datetime
    past_window_months: int = 2

    @classmethod
    def upcoming(cls, now: datetime) -> "ContestQuery":
        return cls(kind=QueryKind.UPCOMING, now=to_utc(now))

    @classmethod
    def past(cls, now: datetime, months: int = 2) -> "ContestQuery":
        return cls(kind=QueryKind.PAST, now=to_utc(now), past_window_months=months)

    @property
    def window(self) -> WindowPolicy:
        if self.kind is QueryKind.PAST:
            return RecentPastWindow(months=self.past_window_months)
        return UpcomingWindow()

    @property
    def lower_bound(self) -> datetime:
        return self.window.lower_bound(self.now)


def parse_instant(value: str | int | float | datetime, assume_tz=timezone.utc) -> datetime:
    """
    Parse a source timestamp into an aware UTC datetime.

    Numbers are epoch seconds. Strings are ISO-8601 or anything dateutil
    understands; values without an offset are read in ``assume_tz``.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    else:
        try:
            parsed = date_parser.isoparse(value)
        except ValueError:
            parsed = date_parser.parse(value)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=assume_tz)
    return parsed.astimezone(timezone.utc)


def validate_payload(source: str, model: type[ModelT], data: Any) -> ModelT:
    """Validate a whole response envelope, raising ``MalformedPayloadError``."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise MalformedPayloadError(source, f"unexpected payload shape: {e.error_count()} error(s)") from e


def validate_entries(source: str, model: type[ModelT], items: Iterable[Any]) -> list[ModelT]:
    """Validate list entries one by one, skipping the ones that do not fit."""
    entries = []
    skipped = 0
    for item in items:
        try:
            entries.append(model.model_validate(item))
        except ValidationError:
            skipped += 1
    if skipped:
        logger.debug(f"[{source}] skipped {skipped} malformed entr{'y' if skipped == 1 else 'ies'}")
    return entries


class ContestSource(ABC):
    """An upstream provider mapped onto the canonical ``Contest`` schema."""

    name: str = "source"

    def __init__(self, http_client: AsyncHTTPClient):
        self.http_client = http_client

    @abstractmethod
    async def fetch_contests(self, query: ContestQuery) -> list[Contest]:
        """
        Fetch and map contests for ``query``.

        Raises:
            SourceError: On network failure, bad status, malformed payload
                or missing configuration
        """
        ...

    async def collect(self, query: ContestQuery) -> list[Contest]:
        """Same as ``fetch_contests`` but failures become an empty list."""
        try:
            contests = await self.fetch_contests(query)
        except SourceError as e:
            logger.warning(f"Source {self.name} failed: {e}")
            return []
        except Exception as e:
            logger.error(f"Unexpected error in source {self.name}: {e!r}")
            return []

        logger.debug(f"Source {self.name} returned {len(contests)} contest(s)")
        return contests

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
