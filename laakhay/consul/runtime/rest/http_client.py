"""HTTP client helper."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass

import aiohttp

from ...core.exceptions import RequestTimeoutError, TransportError
from .request import PreparedRequest


@dataclass(frozen=True)
class HTTPResponse:
    """Fully read HTTP response."""

    status: int
    headers: Mapping[str, str]
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class HTTPClient:
    """Async HTTP client wrapper around one pooled ``aiohttp`` session.

    The session is shared by every request sent through this client, so one
    instance can serve concurrent one-shot calls and watches. Per-request
    deadlines are applied by the caller; ``timeout`` here is only the
    session-wide ceiling and defaults to none, since blocking queries may
    legitimately be held open for minutes.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def send(self, request: PreparedRequest) -> HTTPResponse:
        """Send ``request`` and read the whole response body.

        Raises:
            TransportError: Connection refused/reset or protocol violation.
            RequestTimeoutError: The session-wide timeout expired.
        """
        try:
            async with self.session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body,
            ) as response:
                body = await response.read()
                return HTTPResponse(
                    status=response.status,
                    headers=response.headers,
                    body=body,
                )
        except asyncio.TimeoutError as e:
            raise RequestTimeoutError(
                f"request timed out: {request.method} {request.url}",
                timeout=self.timeout.total,
            ) from e
        except aiohttp.ClientError as e:
            raise TransportError(f"request error: {e}") from e

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
