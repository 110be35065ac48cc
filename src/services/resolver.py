"""Cascading resolution of contest lists across source tiers."""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Sequence

from loguru import logger

from domain.merge import merge_past, merge_upcoming
from domain.models.contest import Contest
from infrastructure.sources.base import ContestQuery, ContestSource, QueryKind

DEFAULT_BUDGET_SECONDS = 9.0


class SourceTier(str, Enum):
    """Provider tiers, in the order they are tried. Values are the response header values."""

    PRIMARY = "primary"
    DIRECT = "direct"
    SECONDARY = "secondary"
    NONE = "none"


@dataclass(frozen=True)
class TierPlan:
    """A tier together with the sources queried (concurrently) when it is tried."""

    tier: SourceTier
    sources: tuple[ContestSource, ...]


@dataclass(frozen=True)
class Resolution:
    """Outcome of a resolution: the contests and the tier that produced them."""

    tier: SourceTier
    contests: list[Contest] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.contests


MERGERS: dict[QueryKind, Callable[[Iterable[Contest]], list[Contest]]] = {
    QueryKind.UPCOMING: merge_upcoming,
    QueryKind.PAST: merge_past,
}


class CascadingResolver:
    """
    Tries tiers in order and returns the first non-empty contest list.

    States run PRIMARY -> DIRECT -> SECONDARY -> NONE. A tier is left when
    all its sources fail or when the merged and windowed list is empty.
    Sources of one tier run concurrently; the whole cascade shares one
    wall-clock budget.
    """

    def __init__(self, tiers: Sequence[TierPlan], *, budget: float = DEFAULT_BUDGET_SECONDS):
        """
        Initialize resolver.

        Args:
            tiers: Tier plans in priority order
            budget: Wall-clock budget in seconds for the whole cascade
        """
        self.tiers = tuple(tiers)
        self.budget = budget

    @property
    def order(self) -> tuple[SourceTier, ...]:
        return tuple(plan.tier for plan in self.tiers)

    async def resolve(self, query: ContestQuery) -> Resolution:
        """Run the cascade for ``query``. Never raises for upstream failures."""
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.budget

        for plan in self.tiers:
            remaining = deadline - loop.time()
            if remaining <= 0:
                logger.warning(f"Resolve budget exhausted before tier {plan.tier.value}")
                break

            contests = await self.run_tier(plan, query, timeout=remaining)

            if contests:
                logger.info(
                    f"Resolved {query.kind.value} contests: source={plan.tier.value} count={len(contests)}"
                )
                return Resolution(tier=plan.tier, contests=contests)

            logger.info(f"Tier {plan.tier.value} produced no {query.kind.value} contests, falling through")

        logger.info(f"Resolved {query.kind.value} contests: source=none count=0")
        return Resolution(tier=SourceTier.NONE, contests=[])

    async def run_tier(
        self, plan: TierPlan, query: ContestQuery, *, timeout: float | None = None
    ) -> list[Contest]:
        """
        Query every source of ``plan`` concurrently, then window and merge as one unit.

        Each source is bounded by ``timeout`` on its own: a source that runs
        past it contributes nothing, while its siblings keep their results.
        """
        results = await asyncio.gather(
            *(self._collect_within(source, query, timeout) for source in plan.sources)
        )

        combined: list[Contest] = []
        for contests in results:
            combined.extend(contests)

        windowed = query.window.apply(combined, query.now)
        return MERGERS[query.kind](windowed)

    async def _collect_within(
        self, source: ContestSource, query: ContestQuery, timeout: float | None
    ) -> list[Contest]:
        try:
            return await asyncio.wait_for(source.collect(query), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Source {source.name} exceeded the remaining budget ({timeout:.2f}s)")
            return []
