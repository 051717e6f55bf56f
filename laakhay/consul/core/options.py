"""Query and write option values.

Architecture:
    Options are immutable value objects. They carry no behaviour beyond
    projecting themselves onto a request (see ``projection``). Nothing is
    validated at construction: an out-of-range ``relay_factor`` is forwarded
    and rejected, if at all, by the server.

Design Decisions:
    - Frozen dataclasses: the watch engine derives per-request copies with
      ``dataclasses.replace`` instead of mutating shared state
    - Blocking as a small tagged union (``IndexBlocking`` | ``HashBlocking``):
      a request can never carry both an index and a hash
    - ``timedelta`` for every duration
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Union

from .enums import Consistency
from .projection import (
    CACHE_CONTROL_HEADER,
    TOKEN_HEADER,
    HeaderPairs,
    ParamPairs,
    build_cache_control,
    cache_eligible,
    format_wait,
)


@dataclass(frozen=True)
class IndexBlocking:
    """Block until the data's Raft index moves past ``index``.

    Related to the ``X-Consul-Index`` response header.
    """

    index: int


@dataclass(frozen=True)
class HashBlocking:
    """Block until the content hash differs from ``hash``.

    Related to the ``X-Consul-ContentHash`` response header and only supported
    by some endpoints.
    """

    hash: str


BlockingMode = Union[IndexBlocking, HashBlocking]


@dataclass(frozen=True)
class WriteOptions:
    """Options specific to write operations."""

    namespace: str | None = None  # Enterprise only
    datacenter: str | None = None
    token: str | None = None
    # Keyring operations: relay responses through N other random nodes (0-5)
    relay_factor: int | None = None
    timeout: timedelta | None = None

    def as_query_pairs(self) -> ParamPairs:
        pairs: ParamPairs = []

        if self.namespace is not None:
            pairs.append(("ns", self.namespace))

        if self.datacenter is not None:
            pairs.append(("dc", self.datacenter))

        if self.relay_factor is not None:
            pairs.append(("relay-factor", str(self.relay_factor)))

        return pairs

    def as_header_pairs(self) -> HeaderPairs:
        pairs: HeaderPairs = []

        if self.token is not None:
            pairs.append((TOKEN_HEADER, self.token))

        return pairs

    def as_timeout(self) -> timedelta | None:
        return self.timeout


@dataclass(frozen=True)
class QueryOptions:
    """Options specific to query operations.

    Attributes:
        namespace: Namespace to query (Consul Enterprise only).
        datacenter: Datacenter to query. Defaults to the datacenter of the
            agent or server being talked to.
        token: ACL token. Without one the agent's default token applies.
        consistency: Consistency mode; ``None`` leaves it to the server.
        blocking: Condition under which the server should hold the request.
        blocking_timeout: Maximum hold time sent as ``wait``. Only used when
            ``blocking`` is set and should be lower than ``timeout`` so the
            server has a chance to answer before the client gives up.
        use_cache: Ask the agent to answer from its local cache. Ignored for
            ``Consistency.CONSISTENT`` reads.
        cache_max_age: Oldest cached value to accept before the agent
            refetches.
        cache_stale_if_error: Oldest cached value to accept when a refresh
            fails.
        near: Node name (or ``_agent``) to sort results by network latency.
        node_meta: Only return nodes carrying all of these metadata pairs.
        tag: Only return services with this tag.
        filtering: Server-side filter expression, forwarded verbatim.
        relay_factor: Keyring relay factor (0-5).
        local_only: Keyring list operations only query local servers.
        connect: Only include Connect-capable services.
        timeout: Overall deadline for the request.
    """

    namespace: str | None = None
    datacenter: str | None = None
    token: str | None = None
    consistency: Consistency | None = None
    blocking: BlockingMode | None = None
    blocking_timeout: timedelta | None = None
    use_cache: bool = False
    cache_max_age: timedelta | None = None
    cache_stale_if_error: timedelta | None = None
    near: str | None = None
    node_meta: Mapping[str, str] | None = None
    tag: str | None = None
    filtering: str | None = None
    relay_factor: int | None = None
    local_only: bool = False
    connect: bool = False
    timeout: timedelta | None = None

    @property
    def caching_enabled(self) -> bool:
        """Whether cache parameters and headers will be projected."""
        return cache_eligible(self.use_cache, self.consistency)

    def as_query_pairs(self) -> ParamPairs:
        pairs: ParamPairs = []

        if self.namespace is not None:
            pairs.append(("ns", self.namespace))

        if self.datacenter is not None:
            pairs.append(("dc", self.datacenter))

        if self.consistency == Consistency.CONSISTENT:
            pairs.append(("consistent", "1"))
        elif self.consistency == Consistency.STALE:
            pairs.append(("stale", "1"))

        if self.blocking is not None:
            if isinstance(self.blocking, IndexBlocking):
                pairs.append(("index", str(self.blocking.index)))
            else:
                pairs.append(("hash", self.blocking.hash))

            if self.blocking_timeout is not None:
                pairs.append(("wait", format_wait(self.blocking_timeout)))

        if self.near is not None:
            pairs.append(("near", self.near))

        if self.node_meta:
            for key, value in self.node_meta.items():
                pairs.append(("node-meta[]", f"{key}:{value}"))

        if self.tag is not None:
            pairs.append(("tag", self.tag))

        if self.filtering is not None:
            pairs.append(("filter", self.filtering))

        if self.relay_factor is not None:
            pairs.append(("relay-factor", str(self.relay_factor)))

        if self.local_only:
            pairs.append(("local-only", "true"))

        if self.connect:
            pairs.append(("connect", "true"))

        if self.caching_enabled:
            pairs.append(("cached", "1"))

        return pairs

    def as_header_pairs(self) -> HeaderPairs:
        pairs: HeaderPairs = []

        if self.token is not None:
            pairs.append((TOKEN_HEADER, self.token))

        if self.caching_enabled:
            cache_control = build_cache_control(self.cache_max_age, self.cache_stale_if_error)
            if cache_control is not None:
                pairs.append((CACHE_CONTROL_HEADER, cache_control))

        return pairs

    def as_timeout(self) -> timedelta | None:
        return self.timeout
