"""Async HTTP client used by contest sources."""

import asyncio
from typing import Any

import httpx
from loguru import logger

from infrastructure.errors import MalformedPayloadError, SourceUnavailableError

DEFAULT_TIMEOUT = 3.5


class AsyncHTTPClient:
    """Thin JSON client over ``httpx.AsyncClient`` with a fixed per-request timeout.

    A fresh ``httpx.AsyncClient`` is opened for every call, so concurrent
    requests from different sources never share connection state.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize client.

        Args:
            timeout: Per-request timeout in seconds
            user_agent: Value for the User-Agent header
            transport: Optional transport override (used by tests)
        """
        self.timeout = timeout
        self.headers = {"Accept": "application/json"}
        if user_agent:
            self.headers["User-Agent"] = user_agent
        self.transport = transport

    async def get_json(
        self, url: str, *, params: dict[str, Any] | None = None, source: str = "http"
    ) -> Any:
        """GET ``url`` and decode the JSON body."""
        return await self._request("GET", url, source=source, params=params)

    async def post_json(
        self, url: str, payload: dict[str, Any], *, source: str = "http"
    ) -> Any:
        """POST ``payload`` as JSON to ``url`` and decode the JSON body."""
        return await self._request("POST", url, source=source, json=payload)

    async def _request(self, method: str, url: str, *, source: str, **kwargs: Any) -> Any:
        logger.debug(f"{method} {url} ({source})")

        try:
            # httpx timeouts apply per phase; bound the whole exchange as well
            response = await asyncio.wait_for(
                self._send(method, url, **kwargs), timeout=self.timeout
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            raise SourceUnavailableError(source, f"timed out after {self.timeout}s: {url}") from e
        except httpx.HTTPError as e:
            raise SourceUnavailableError(source, f"request failed: {url}: {e}") from e

        if not response.is_success:
            raise SourceUnavailableError(
                source,
                f"HTTP {response.status_code} from {url}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise MalformedPayloadError(source, f"response from {url} is not JSON") from e

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers=self.headers,
            transport=self.transport,
            follow_redirects=True,
        ) as client:
            return await client.request(method, url, **kwargs)
