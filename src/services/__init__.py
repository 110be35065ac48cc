from infrastructure.config import Settings
from infrastructure.http_client import AsyncHTTPClient
from services.contest import ContestService
from services.resolver import CascadingResolver, Resolution, SourceTier, TierPlan


def build_tiers(settings: Settings, http_client: AsyncHTTPClient | None = None) -> list[TierPlan]:
    """Tier plans in cascade order, wired from ``settings``."""
    from infrastructure.sources import (
        ClistSource,
        CodeChefSource,
        CodeforcesSource,
        KontestsSource,
        LeetCodeSource,
    )

    http_client = http_client or AsyncHTTPClient(
        timeout=settings.source_timeout, user_agent=settings.user_agent
    )

    primary = ClistSource(
        http_client,
        username=settings.clist_username,
        api_key=settings.clist_api_key,
        api_url=settings.clist_api_url,
        resources=settings.clist_resources,
    )
    direct = (
        CodeforcesSource(http_client),
        LeetCodeSource(http_client),
        CodeChefSource(http_client),
    )
    secondary = KontestsSource(http_client, base_url=settings.kontests_api_url)

    return [
        TierPlan(tier=SourceTier.PRIMARY, sources=(primary,)),
        TierPlan(tier=SourceTier.DIRECT, sources=direct),
        TierPlan(tier=SourceTier.SECONDARY, sources=(secondary,)),
    ]


def create_contest_service(
    settings: Settings | None = None,
    http_client: AsyncHTTPClient | None = None,
) -> ContestService:
    """Factory function to create contest service with all dependencies."""
    settings = settings or Settings.from_env()
    resolver = CascadingResolver(build_tiers(settings, http_client), budget=settings.resolve_budget)
    return ContestService(resolver=resolver, past_window_months=settings.past_window_months)


__all__ = [
    "CascadingResolver",
    "ContestService",
    "Resolution",
    "SourceTier",
    "TierPlan",
    "build_tiers",
    "create_contest_service",
]
