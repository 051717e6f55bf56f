"""Go-style duration decoding for Consul JSON payloads."""

from __future__ import annotations

import re
from datetime import timedelta
from typing import Annotated, Any

from pydantic import BeforeValidator

_UNIT_NANOS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_PART_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_go_duration(raw: str) -> timedelta:
    """Parse a Go ``time.Duration`` string such as ``"1m30s"`` or ``"250ms"``."""
    text = raw.strip()
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]

    if text == "0":
        return timedelta(0)

    nanos = 0.0
    pos = 0
    for match in _PART_RE.finditer(text):
        if match.start() != pos:
            break
        nanos += float(match.group(1)) * _UNIT_NANOS[match.group(2)]
        pos = match.end()

    if not text or pos != len(text):
        raise ValueError(f"invalid duration: {raw!r}")
    return timedelta(microseconds=sign * nanos / 1_000)


def _coerce_duration(value: Any) -> Any:
    # Consul renders durations as strings in most payloads, but as integer
    # nanoseconds in a few (e.g. raw check definitions)
    if isinstance(value, str):
        return parse_go_duration(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return timedelta(microseconds=value / 1_000)
    return value


GoDuration = Annotated[timedelta, BeforeValidator(_coerce_duration)]
