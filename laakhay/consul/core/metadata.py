"""Protocol metadata carried in Consul response headers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta

from multidict import CIMultiDict

from .exceptions import MalformedHeadersError
from .options import BlockingMode, HashBlocking, IndexBlocking

INDEX_HEADER = "X-Consul-Index"
CONTENT_HASH_HEADER = "X-Consul-ContentHash"
KNOWN_LEADER_HEADER = "X-Consul-KnownLeader"
LAST_CONTACT_HEADER = "X-Consul-LastContact"
TRANSLATE_ADDRESSES_HEADER = "X-Consul-Translate-Addresses"
CACHE_HEADER = "X-Cache"
AGE_HEADER = "Age"

_U64_MAX = 2**64 - 1


def _parse_u64(raw: str) -> int:
    # A single leading "+" is allowed; int() would also take "-", whitespace
    # and underscores
    digits = raw[1:] if raw.startswith("+") else raw
    if not digits.isascii() or not digits.isdigit():
        raise ValueError(f"not an unsigned integer: {raw!r}")
    value = int(digits)
    if value > _U64_MAX:
        raise ValueError(f"out of range for u64: {raw!r}")
    return value


def _to_timedelta(value: int, milliseconds: bool = False) -> timedelta:
    # Valid u64 values can exceed what timedelta holds; saturate instead
    try:
        if milliseconds:
            return timedelta(milliseconds=value)
        return timedelta(seconds=value)
    except OverflowError:
        return timedelta.max


@dataclass(frozen=True)
class QueryMetadata:
    """Metadata about how a query response was produced.

    Attributes:
        last_index: Consul index of the returned data; usable for blocking.
        last_content_hash: Content hash of the returned data; only sent by
            endpoints that support hash-based blocking.
        known_leader: Whether the cluster had a known leader.
        last_contact: Time since the answering server last contacted the
            leader.
        addr_translate_enabled: Whether the agent translates addresses in
            HTTP responses.
        cache_hit: Whether the agent answered from its local cache.
        cache_age: Age of the cached value, if served from cache.
    """

    last_index: int | None = None
    last_content_hash: str | None = None
    known_leader: bool = False
    last_contact: timedelta = timedelta(0)
    addr_translate_enabled: bool = False
    cache_hit: bool = False
    cache_age: timedelta | None = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> QueryMetadata:
        """Parse metadata from a response header set.

        Absent headers keep their defaults. Every header that is present but
        cannot be parsed is collected, and all of them are reported together.

        Note:
            ``X-Cache`` is compared case-insensitively while the leader and
            translate headers must be exactly ``true``. Servers have been seen
            sending ``HIT`` as well as ``hit``. ``X-Consul-LastContact`` is
            best-effort and never fails the parse. Durations too large for
            ``timedelta`` saturate at ``timedelta.max``.

        Raises:
            MalformedHeadersError: If any header failed to parse.
        """
        lookup = CIMultiDict(headers)
        fields: dict[str, object] = {}
        errors: list[str] = []

        index_raw = lookup.get(INDEX_HEADER)
        if index_raw is not None:
            try:
                fields["last_index"] = _parse_u64(index_raw)
            except ValueError:
                errors.append(INDEX_HEADER)

        hash_raw = lookup.get(CONTENT_HASH_HEADER)
        if hash_raw is not None:
            fields["last_content_hash"] = hash_raw

        leader_raw = lookup.get(KNOWN_LEADER_HEADER)
        if leader_raw is not None:
            fields["known_leader"] = leader_raw == "true"

        # Informational only: an unparsable value keeps the default
        contact_raw = lookup.get(LAST_CONTACT_HEADER)
        if contact_raw is not None:
            try:
                fields["last_contact"] = _to_timedelta(_parse_u64(contact_raw), milliseconds=True)
            except ValueError:
                pass

        translate_raw = lookup.get(TRANSLATE_ADDRESSES_HEADER)
        if translate_raw is not None:
            fields["addr_translate_enabled"] = translate_raw == "true"

        cache_raw = lookup.get(CACHE_HEADER)
        if cache_raw is not None:
            fields["cache_hit"] = cache_raw.lower() == "hit"

        age_raw = lookup.get(AGE_HEADER)
        if age_raw is not None:
            try:
                fields["cache_age"] = _to_timedelta(_parse_u64(age_raw))
            except ValueError:
                errors.append(AGE_HEADER)

        if errors:
            raise MalformedHeadersError(errors)

        return cls(**fields)  # type: ignore[arg-type]

    def as_blocking(self) -> BlockingMode | None:
        """Blocking condition for the next request.

        The content hash is preferred over the index when both are present;
        with neither, the next request does not block.
        """
        if self.last_content_hash is not None:
            return HashBlocking(self.last_content_hash)

        if self.last_index is not None:
            return IndexBlocking(self.last_index)

        return None
