"""Blocking-query watch: a lazy, infinite stream of query results.

Architecture:
    ``BlockingQueryWatch`` is a pull-based state machine exposed as an async
    iterator. Each ``__anext__`` issues exactly one request:

        IDLE --(response)--> BLOCKED(condition) --(response)--> BLOCKED(...)
          \\                      |
           +------(error)--------+--> FAILED

    The request's ``blocking`` field is replaced by the condition carried over
    from the previous response (nothing while idle). After a response is
    yielded, ``QueryMetadata.as_blocking()`` becomes the next condition; if the
    response carried neither a hash nor an index the watch falls back to idle.

Design Decisions:
    - No client-side pacing: the loop never sleeps on success. The server's
      long-poll hold (bounded by ``blocking_timeout`` when set) is the only
      cadence, so staleness is bounded by the wait time, not a poll interval
    - Pull-based: nothing is fetched ahead of the consumer, and a consumer
      that stops pulling pauses the watch
    - Terminal errors: the first error is raised once, afterwards the iterator
      is exhausted. Restarting means creating a new watch
    - Cancelling a pending ``__anext__`` cancels the in-flight request and
      closes the watch. ``aclose()`` does the same from outside the pull; a
      response that lands after closing is dropped
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from collections.abc import Sequence
from enum import Enum
from typing import Any, Generic, TypeVar

from ..core.metadata import QueryMetadata
from ..core.options import BlockingMode, QueryOptions
from .rest.runner import RestRunner

logger = logging.getLogger(__name__)

T = TypeVar("T")


class WatchState(str, Enum):
    """Lifecycle states of a blocking-query watch."""

    IDLE = "idle"
    BLOCKED = "blocked"
    FAILED = "failed"
    CLOSED = "closed"


class BlockingQueryWatch(Generic[T]):
    """Async iterator of ``(payload, metadata)`` pairs for one endpoint.

    Example:
        >>> watch = client.catalog().watch_service_nodes("web")
        >>> async for nodes, meta in watch:
        ...     print(meta.last_index, len(nodes))
    """

    def __init__(
        self,
        runner: RestRunner,
        path_segments: Sequence[str],
        payload_type: type[T] | Any,
        options: QueryOptions | None = None,
    ) -> None:
        self._runner = runner
        self._path = tuple(path_segments)
        self._payload_type = payload_type
        self._options = options or QueryOptions()
        self._blocking: BlockingMode | None = None
        self._state = WatchState.IDLE
        self._error: BaseException | None = None
        self._inflight: asyncio.Future[tuple[T, QueryMetadata]] | None = None
        # One request in flight at a time, even with concurrent pullers
        self._lock = asyncio.Lock()

    @property
    def state(self) -> WatchState:
        return self._state

    @property
    def blocking(self) -> BlockingMode | None:
        """Condition the next request will block on, if any."""
        return self._blocking

    @property
    def error(self) -> BaseException | None:
        """The terminal error, once the watch has failed."""
        return self._error

    def _request_options(self) -> QueryOptions:
        return dataclasses.replace(self._options, blocking=self._blocking)

    def __aiter__(self) -> BlockingQueryWatch[T]:
        return self

    async def __anext__(self) -> tuple[T, QueryMetadata]:
        async with self._lock:
            if self._state in (WatchState.FAILED, WatchState.CLOSED):
                raise StopAsyncIteration

            options = self._request_options()
            self._inflight = asyncio.ensure_future(
                self._runner.query(self._path, self._payload_type, options)
            )
            try:
                payload, meta = await self._inflight
            except asyncio.CancelledError:
                closed_by_caller = self._state == WatchState.CLOSED
                self._state = WatchState.CLOSED
                logger.debug("Watch cancelled", extra={"path": "/".join(self._path)})
                current = asyncio.current_task()
                # aclose() cancelled the request, not the puller itself
                if closed_by_caller and current is not None and not current.cancelling():
                    raise StopAsyncIteration from None
                raise
            except Exception as e:
                if self._state == WatchState.CLOSED:
                    raise StopAsyncIteration from e
                self._state = WatchState.FAILED
                self._error = e
                logger.debug(
                    "Watch failed",
                    extra={"path": "/".join(self._path), "error": repr(e)},
                )
                raise
            finally:
                self._inflight = None

            # Closed while the response was being delivered
            if self._state == WatchState.CLOSED:
                raise StopAsyncIteration

            self._blocking = meta.as_blocking()
            self._state = WatchState.IDLE if self._blocking is None else WatchState.BLOCKED
            logger.debug(
                "Watch advanced",
                extra={
                    "path": "/".join(self._path),
                    "state": self._state.value,
                    "blocking": repr(self._blocking),
                },
            )
            return payload, meta

    async def aclose(self) -> None:
        """Stop the watch and cancel any in-flight request.

        A pull waiting on that request ends with ``StopAsyncIteration``; later
        pulls end the iteration without sending anything.
        """
        if self._state != WatchState.FAILED:
            self._state = WatchState.CLOSED
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
