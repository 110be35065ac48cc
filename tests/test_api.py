"""End-to-end tests for the contest endpoints."""

from datetime import timedelta
from unittest.mock import AsyncMock

import httpx
import pytest
from litestar.testing import TestClient

from api.app import create_app
from domain.models.contest import ContestStatus
from infrastructure.config import Settings
from infrastructure.http_client import AsyncHTTPClient
from services import CascadingResolver, ContestService, Resolution, SourceTier, build_tiers
from tests.factories import NOW, make_contest

SETTINGS = Settings(
    clist_username="user",
    clist_api_key="key",
    clist_api_url="https://clist.test/api/v4/contest/",
    kontests_api_url="https://kontests.test/api/v1",
)


def _ts(value) -> int:
    return int(value.timestamp())


def codeforces_payload():
    return {
        "status": "OK",
        "result": [
            {
                "id": 2101,
                "name": "Codeforces Round 1001 (Div. 2)",
                "phase": "BEFORE",
                "startTimeSeconds": _ts(NOW + timedelta(days=1)),
                "durationSeconds": 7200,
            },
            # Phase still says CODING but the contest already ended
            {
                "id": 2100,
                "name": "Codeforces Round 1000 (Div. 1)",
                "phase": "CODING",
                "startTimeSeconds": _ts(NOW - timedelta(hours=5)),
                "durationSeconds": 7200,
            },
        ],
    }


def upstream(request: httpx.Request) -> httpx.Response:
    host = request.url.host
    if host == "clist.test":
        return httpx.Response(500, text="internal error")
    if host == "codeforces.com":
        return httpx.Response(200, json=codeforces_payload())
    if host == "leetcode.com":
        return httpx.Response(200, json={"data": {"allContests": []}})
    if host == "www.codechef.com":
        return httpx.Response(503)
    if host == "kontests.test":
        return httpx.Response(200, json=[])
    return httpx.Response(404)


def _client_for(handler) -> TestClient:
    http_client = AsyncHTTPClient(transport=httpx.MockTransport(handler))
    service = ContestService(
        resolver=CascadingResolver(build_tiers(SETTINGS, http_client)),
        clock=lambda: NOW,
    )
    return TestClient(app=create_app(settings=SETTINGS, contest_service=service))


def test_contests_fall_back_to_direct_sources_and_drop_finished():
    """Test that /contests serves merged direct sources and drops finished ones."""
    with _client_for(upstream) as client:
        response = client.get("/contests")

    assert response.status_code == 200
    assert response.headers["x-contest-source"] == "direct"

    body = response.json()
    assert len(body) == 1
    contest = body[0]
    assert contest["id"] == 2101
    assert contest["platform"] == "codeforces"
    assert contest["status"] == "upcoming"
    assert contest["duration"] == 2.0
    assert contest["url"] == "https://codeforces.com/contests/2101"
    assert contest["startTime"] == "2026-01-16T12:00:00.000Z"
    assert contest["endTime"] == "2026-01-16T14:00:00.000Z"
    assert contest["startTimeIST"] == "16 Jan 2026, 05:30:00 PM"


def test_past_contests_total_failure_is_empty_success():
    """Test that /pastcontests answers 200 with an empty list when every source fails."""
    def everything_down(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502)

    with _client_for(everything_down) as client:
        response = client.get("/pastcontests")

    assert response.status_code == 200
    assert response.headers["x-contest-source"] == "none"
    assert response.json() == []


def test_past_contests_are_served_most_recent_first():
    """Test that /pastcontests orders contests by end time, most recent first."""
    finished = [
        {
            "id": 2000 + offset,
            "name": f"Round {offset}",
            "phase": "FINISHED",
            "startTimeSeconds": _ts(NOW - timedelta(days=offset)),
            "durationSeconds": 7200,
        }
        for offset in (30, 3, 90)
    ]

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "codeforces.com":
            return httpx.Response(200, json={"status": "OK", "result": finished})
        return httpx.Response(500)

    with _client_for(handler) as client:
        response = client.get("/pastcontests")

    assert response.headers["x-contest-source"] == "direct"
    assert [c["name"] for c in response.json()] == ["Round 3", "Round 30"]
    assert {c["status"] for c in response.json()} == {"past"}


def test_contests_endpoint_reports_tier_from_service():
    """Test that the x-contest-source header reports the serving tier."""
    service = AsyncMock(spec=ContestService)
    service.get_upcoming.return_value = Resolution(
        tier=SourceTier.SECONDARY,
        contests=[make_contest("Starters 200", platform="codechef").with_status(ContestStatus.UPCOMING)],
    )

    with TestClient(app=create_app(settings=SETTINGS, contest_service=service)) as client:
        response = client.get("/contests")

    assert response.headers["x-contest-source"] == "secondary"
    assert response.headers["cache-control"] == "no-store"
    assert response.json()[0]["name"] == "Starters 200"


@pytest.mark.asyncio
async def test_service_never_raises_on_resolver_bugs():
    """Test that an unexpected resolver error resolves to an empty none result."""
    resolver = AsyncMock()
    resolver.resolve.side_effect = RuntimeError("boom")

    resolution = await ContestService(resolver=resolver, clock=lambda: NOW).get_upcoming()

    assert resolution.tier is SourceTier.NONE
    assert resolution.contests == []
