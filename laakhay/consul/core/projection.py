"""Projection of option values onto query parameters, headers and timeouts.

Architecture:
    Every options type exposes three operations: query parameter pairs,
    header pairs and an effective timeout. The ``RequestOptions`` protocol
    names that capability so the request builder and runner can accept any
    options value without caring which concrete type it is.

    The collector functions in this module accept ``None`` as well, which
    stands for "no options supplied" and projects to nothing.

Design Decisions:
    - Ordered pairs, not dicts: ``node-meta[]`` may repeat, and a stable
      order keeps requests reproducible in logs and tests
    - Pure functions: options are never mutated, so a single options value can
      be shared by concurrent requests
"""

from __future__ import annotations

from datetime import timedelta
from typing import Protocol, runtime_checkable

from .enums import Consistency

ParamPairs = list[tuple[str, str]]
HeaderPairs = list[tuple[str, str]]

# Request header names
TOKEN_HEADER = "X-Consul-Token"
CACHE_CONTROL_HEADER = "Cache-Control"


@runtime_checkable
class RequestOptions(Protocol):
    """Anything that can be projected onto a Consul request."""

    def as_query_pairs(self) -> ParamPairs:
        """Query parameters, in projection order."""
        ...

    def as_header_pairs(self) -> HeaderPairs:
        """Request headers, in projection order."""
        ...

    def as_timeout(self) -> timedelta | None:
        """Overall deadline for the request, if any."""
        ...


def collect_query_parameters(options: RequestOptions | None) -> ParamPairs:
    """Project ``options`` to query parameter pairs (empty for ``None``)."""
    if options is None:
        return []
    return options.as_query_pairs()


def collect_request_headers(options: RequestOptions | None) -> HeaderPairs:
    """Project ``options`` to header pairs (empty for ``None``)."""
    if options is None:
        return []
    return options.as_header_pairs()


def derive_timeout(options: RequestOptions | None) -> timedelta | None:
    """Effective overall timeout for ``options``.

    The blocking ``wait`` and the overall timeout are not combined here.
    """
    if options is None:
        return None
    return options.as_timeout()


def format_wait(duration: timedelta) -> str:
    """Format a blocking wait as whole milliseconds, e.g. ``"1500ms"``."""
    return f"{duration // timedelta(milliseconds=1)}ms"


def whole_seconds(duration: timedelta) -> int:
    return int(duration.total_seconds())


def cache_eligible(use_cache: bool, consistency: Consistency | None) -> bool:
    """Whether cache parameters and headers may be sent.

    A fully consistent read must bypass the agent cache, so ``use_cache`` is
    ignored when consistency is ``CONSISTENT``.
    """
    return use_cache and consistency != Consistency.CONSISTENT


def build_cache_control(
    max_age: timedelta | None,
    stale_if_error: timedelta | None,
) -> str | None:
    """Build the ``Cache-Control`` value, or ``None`` when nothing applies."""
    parts: list[str] = []

    if max_age is not None and whole_seconds(max_age) > 0:
        parts.append(f"max-age={whole_seconds(max_age)}")

    if stale_if_error is not None and whole_seconds(stale_if_error) > 0:
        parts.append(f"stale-if-error={whole_seconds(stale_if_error)}")

    if not parts:
        return None
    return ", ".join(parts)
