"""REST request runner: build, execute and parse Consul requests."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError
from yarl import URL

from ...core.exceptions import PayloadDecodeError, RequestTimeoutError, ResponseStatusError
from ...core.metadata import QueryMetadata
from ...core.projection import RequestOptions, derive_timeout
from .http_client import HTTPClient, HTTPResponse
from .request import PreparedRequest, build_request, parse_endpoint

logger = logging.getLogger(__name__)

T = TypeVar("T")


@lru_cache(maxsize=128)
def _adapter_for(payload_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(payload_type)


def decode_payload(body: bytes, payload_type: type[T] | Any) -> T:
    """Decode a JSON body into ``payload_type``.

    Raises:
        PayloadDecodeError: If the body is not JSON or does not match the type.
    """
    try:
        return _adapter_for(payload_type).validate_json(body)
    except ValidationError as e:
        raise PayloadDecodeError(f"invalid JSON payload: {e}") from e


class RestRunner:
    """Runs requests against one Consul endpoint through a shared transport.

    The runner holds no per-request state; a single instance is shared by
    every subclient and watch created from a ``ConsulClient``.
    """

    def __init__(self, base_url: str | URL, http: HTTPClient) -> None:
        self.base_url = parse_endpoint(base_url)
        self._http = http

    def build_request(
        self,
        method: str,
        path_segments: Iterable[str],
        options: RequestOptions | None = None,
        body: Any = None,
    ) -> PreparedRequest:
        return build_request(self.base_url, method, path_segments, options, body)

    async def run_request(
        self,
        request: PreparedRequest,
        options: RequestOptions | None = None,
    ) -> HTTPResponse:
        """Send ``request``, racing it against the options' timeout.

        On expiry the in-flight send is cancelled; the transport owns socket
        teardown.

        Raises:
            RequestTimeoutError: The effective timeout expired.
            TransportError: The transport failed.
        """
        timeout = derive_timeout(options)
        logger.debug(
            "Sending request",
            extra={
                "method": request.method,
                "url": str(request.url),
                "timeout": timeout.total_seconds() if timeout is not None else None,
            },
        )

        if timeout is None:
            response = await self._http.send(request)
        else:
            try:
                response = await asyncio.wait_for(
                    self._http.send(request), timeout=timeout.total_seconds()
                )
            except RequestTimeoutError:
                raise
            except asyncio.TimeoutError as e:
                raise RequestTimeoutError(
                    f"request timed out after {timeout.total_seconds()}s: "
                    f"{request.method} {request.url}",
                    timeout=timeout.total_seconds(),
                ) from e

        logger.debug(
            "Request completed",
            extra={"url": str(request.url), "status": response.status},
        )
        return response

    def check_status(self, response: HTTPResponse) -> None:
        """Raise ``ResponseStatusError`` for a non-2xx response."""
        if not response.ok:
            body = response.body.decode("utf-8", errors="replace")
            raise ResponseStatusError(
                f"unexpected status code: {response.status}",
                status_code=response.status,
                body=body,
            )

    def parse_query_response(
        self,
        response: HTTPResponse,
        payload_type: type[T] | Any,
    ) -> tuple[T, QueryMetadata]:
        """Check the status, extract metadata, then decode the body.

        Raises:
            ResponseStatusError: Non-success status code.
            MalformedHeadersError: Unparsable protocol headers.
            PayloadDecodeError: Body did not decode into ``payload_type``.
        """
        self.check_status(response)
        meta = QueryMetadata.from_headers(response.headers)
        parsed = decode_payload(response.body, payload_type)
        return parsed, meta

    async def query(
        self,
        path_segments: Iterable[str],
        payload_type: type[T] | Any,
        options: RequestOptions | None = None,
    ) -> tuple[T, QueryMetadata]:
        """Run a GET query and return ``(payload, metadata)``."""
        request = self.build_request("GET", path_segments, options)
        response = await self.run_request(request, options)
        return self.parse_query_response(response, payload_type)

    async def write(
        self,
        method: str,
        path_segments: Iterable[str],
        options: RequestOptions | None = None,
        body: Any = None,
    ) -> HTTPResponse:
        """Run a write operation; only the status code is checked."""
        request = self.build_request(method, path_segments, options, body)
        response = await self.run_request(request, options)
        self.check_status(response)
        return response
