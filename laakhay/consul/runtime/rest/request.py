"""Request construction for Consul HTTP operations.

Architecture:
    ``build_request`` turns a base endpoint, path segments, an options value
    and a body into a ``PreparedRequest`` ready for the transport:

    1. Path segments are percent-encoded and appended to the endpoint path.
    2. Projected query parameters are merged over any the endpoint already
       carries (a projected name replaces every endpoint value of that name).
    3. The body is serialized to JSON.
    4. Projected headers are validated and attached.

    Every failure surfaces as a ``ConsulError`` subclass; nothing is silently
    dropped or truncated.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from multidict import CIMultiDict
from pydantic import BaseModel
from pydantic_core import PydanticSerializationError
from yarl import URL

from ...core.exceptions import (
    EndpointConfigurationError,
    InvalidRequestBodyError,
    InvalidRequestError,
)
from ...core.projection import (
    RequestOptions,
    collect_query_parameters,
    collect_request_headers,
)

# RFC 7230 token / field-value character sets
_HEADER_NAME_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
_HEADER_VALUE_RE = re.compile(r"^[\t\x20-\x7e\x80-\xff]*$")

_SUPPORTED_SCHEMES = frozenset({"http", "https"})


@dataclass(frozen=True)
class PreparedRequest:
    """A transport-ready request."""

    method: str
    url: URL
    headers: CIMultiDict[str] = field(default_factory=CIMultiDict)
    body: bytes | None = None


def parse_endpoint(endpoint: str | URL) -> URL:
    """Parse and check a base Consul endpoint.

    The endpoint must be an absolute ``http``/``https`` URL with a host, since
    request paths are appended to it.

    Raises:
        EndpointConfigurationError: If the endpoint cannot be extended.
    """
    try:
        url = endpoint if isinstance(endpoint, URL) else URL(endpoint)
    except (TypeError, ValueError) as e:
        raise EndpointConfigurationError(
            f"failed to parse Consul endpoint: {endpoint!r}", endpoint=str(endpoint)
        ) from e

    if url.scheme not in _SUPPORTED_SCHEMES or not url.host:
        raise EndpointConfigurationError(
            f"Consul endpoint must be an absolute http(s) URL, got {endpoint!r}",
            endpoint=str(endpoint),
        )
    return url


def _extend_path(base: URL, segments: Iterable[str]) -> URL:
    encoded = "/".join(quote(str(segment), safe="") for segment in segments)
    path = f"{base.raw_path.rstrip('/')}/{encoded}"
    # with_path() clears the query; the caller re-applies the merged one
    return base.with_path(path, encoded=True)


def _merge_query(base: URL, projected: list[tuple[str, str]]) -> list[tuple[str, str]]:
    overridden = {name for name, _ in projected}
    merged = [(name, value) for name, value in base.query.items() if name not in overridden]
    merged.extend(projected)
    return merged


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize_body(body: Any) -> bytes | None:
    """Serialize a request body to JSON bytes (``None`` means no body).

    Raises:
        InvalidRequestBodyError: If the body cannot be represented as JSON.
    """
    if body is None:
        return None

    try:
        if isinstance(body, BaseModel):
            return body.model_dump_json(by_alias=True, exclude_none=True).encode()
        return json.dumps(body, default=_json_default, allow_nan=False).encode()
    except (TypeError, ValueError, PydanticSerializationError) as e:
        raise InvalidRequestBodyError(f"failed to serialize request body to JSON: {e}") from e


def _validate_header(name: str, value: str) -> None:
    if not _HEADER_NAME_RE.match(name):
        raise InvalidRequestError(f"invalid header name: {name!r}", header=name)
    if not _HEADER_VALUE_RE.match(value):
        raise InvalidRequestError(f"invalid value for header {name!r}", header=name)


def build_request(
    base_url: str | URL,
    method: str,
    path_segments: Iterable[str],
    options: RequestOptions | None = None,
    body: Any = None,
) -> PreparedRequest:
    """Build a request against ``base_url``.

    Args:
        base_url: Consul endpoint; may already carry a path prefix and query
            parameters.
        method: HTTP method, e.g. ``"GET"``.
        path_segments: Path segments appended to the endpoint path, each one
            percent-encoded on its own.
        options: ``QueryOptions``/``WriteOptions`` to project, or ``None``.
        body: JSON-serializable body or pydantic model; ``None`` for no body.

    Returns:
        PreparedRequest ready for ``HTTPClient.send``.

    Raises:
        EndpointConfigurationError: If ``base_url`` cannot be extended.
        InvalidRequestBodyError: If ``body`` cannot be serialized.
        InvalidRequestError: If a projected header is not a valid HTTP header.
    """
    base = parse_endpoint(base_url)
    url = _extend_path(base, path_segments)
    url = url.with_query(_merge_query(base, collect_query_parameters(options)))

    payload = serialize_body(body)

    headers: CIMultiDict[str] = CIMultiDict()
    for name, value in collect_request_headers(options):
        _validate_header(name, value)
        headers.add(name, value)
    if payload is not None:
        headers["Content-Type"] = "application/json"

    return PreparedRequest(method=method.upper(), url=url, headers=headers, body=payload)
