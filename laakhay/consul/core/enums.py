"""Shared enumerations for Consul query semantics."""

from enum import Enum


class Consistency(str, Enum):
    """Read consistency level for a query.

    Not every endpoint honours a consistency mode. When no value is given the
    server applies its own default, so there is no "default"
    member here.
    """

    CONSISTENT = "consistent"  # served by the leader, never stale
    STALE = "stale"  # any server may answer, lower latency


class HealthState(str, Enum):
    """Health check states accepted by the health state endpoint."""

    ANY = "any"
    PASSING = "passing"
    WARNING = "warning"
    CRITICAL = "critical"
