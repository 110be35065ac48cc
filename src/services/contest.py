"""Service for resolving upcoming and past contest lists."""

from datetime import datetime, timezone
from typing import Callable

from loguru import logger

from infrastructure.sources.base import ContestQuery
from services.resolver import CascadingResolver, Resolution, SourceTier


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ContestService:
    """Entry point used by the API: one resolution per call, nothing kept between calls."""

    def __init__(
        self,
        *,
        resolver: CascadingResolver,
        past_window_months: int = 2,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize service with dependencies."""
        self.resolver = resolver
        self.past_window_months = past_window_months
        self.clock = clock

    async def get_upcoming(self) -> Resolution:
        """Ongoing and upcoming contests, ongoing first, then by start time."""
        return await self._resolve(ContestQuery.upcoming(self.clock()))

    async def get_past(self) -> Resolution:
        """Contests that ended within the trailing window, most recent first."""
        return await self._resolve(ContestQuery.past(self.clock(), months=self.past_window_months))

    async def _resolve(self, query: ContestQuery) -> Resolution:
        logger.debug(f"Resolving {query.kind.value} contests at {query.now.isoformat()}")
        try:
            return await self.resolver.resolve(query)
        except Exception:
            logger.exception(f"Unexpected failure resolving {query.kind.value} contests")
            return Resolution(tier=SourceTier.NONE, contests=[])
