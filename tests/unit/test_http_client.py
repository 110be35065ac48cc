"""Unit tests for the async HTTP client."""

import asyncio

import httpx
import pytest

from infrastructure.errors import MalformedPayloadError, SourceUnavailableError
from infrastructure.http_client import AsyncHTTPClient


def _client(handler, **kwargs):
    return AsyncHTTPClient(transport=httpx.MockTransport(handler), **kwargs)


@pytest.mark.asyncio
async def test_get_json_sends_params_and_user_agent():
    """Test that GET requests carry the query params and the configured User-Agent."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["user_agent"] = request.headers.get("user-agent")
        return httpx.Response(200, json={"status": "OK"})

    client = _client(handler, user_agent="ContestTracker/test")
    data = await client.get_json("https://api.test/list", params={"limit": 5})

    assert data == {"status": "OK"}
    assert seen["url"] == "https://api.test/list?limit=5"
    assert seen["user_agent"] == "ContestTracker/test"


@pytest.mark.asyncio
async def test_post_json_sends_body():
    """Test that POST requests send the JSON body and decode the reply."""
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert b"allContests" in request.content
        return httpx.Response(200, json={"data": {}})

    assert await _client(handler).post_json("https://api.test/graphql", {"query": "allContests"}) == {
        "data": {}
    }


@pytest.mark.asyncio
async def test_non_success_status_is_unavailable():
    """Test that a non-2xx reply raises SourceUnavailableError carrying the status."""
    client = _client(lambda request: httpx.Response(500, text="boom"))

    with pytest.raises(SourceUnavailableError) as excinfo:
        await client.get_json("https://api.test/list", source="clist")

    assert excinfo.value.status_code == 500
    assert excinfo.value.source == "clist"


@pytest.mark.asyncio
async def test_timeout_is_unavailable():
    """Test that an httpx timeout surfaces as SourceUnavailableError."""
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(SourceUnavailableError):
        await _client(handler, timeout=0.1).get_json("https://api.test/list")


@pytest.mark.asyncio
async def test_connection_error_is_unavailable():
    """Test that a refused connection surfaces as SourceUnavailableError."""
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(SourceUnavailableError):
        await _client(handler).get_json("https://api.test/list")


@pytest.mark.asyncio
async def test_non_json_body_is_malformed():
    """Test that a 200 reply with a non-JSON body raises MalformedPayloadError."""
    client = _client(lambda request: httpx.Response(200, text="<html>maintenance</html>"))

    with pytest.raises(MalformedPayloadError):
        await client.get_json("https://api.test/list")


@pytest.mark.asyncio
async def test_slow_exchange_is_bounded_by_total_timeout():
    """Test that an exchange outliving the timeout as a whole is abandoned as unavailable."""
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(1)
        return httpx.Response(200, json={"status": "OK"})

    with pytest.raises(SourceUnavailableError):
        await _client(handler, timeout=0.05).get_json("https://api.test/list", source="leetcode")
