"""Data models for Consul resources.

Architecture:
    Pydantic v2 models mirroring the JSON objects returned by the Consul HTTP
    API. They carry no behaviour beyond a few convenience properties and are
    frozen so a payload yielded by a watch can be shared safely.

Design Decisions:
    - Wire names via aliases: Consul field names are fixed and case-sensitive
    - ``populate_by_name``: tests and callers may build models with Python names
    - Lenient defaults: optional or version-dependent fields default to empty
      values instead of failing the whole payload

Model Categories:
    - Catalog: CatalogNode, CatalogServiceNode, ServiceAddress, Weights
    - Health: HealthCheck, HealthCheckDefinition
    - Agent: AgentService, AgentServiceKind, AgentCheck, AgentWeights
"""

from .agent import AgentCheck, AgentService, AgentServiceKind, AgentWeights
from .catalog import CatalogNode, CatalogServiceNode, ServiceAddress, Weights
from .durations import GoDuration, parse_go_duration
from .health import HealthCheck, HealthCheckDefinition

__all__ = [
    "AgentCheck",
    "AgentService",
    "AgentServiceKind",
    "AgentWeights",
    "CatalogNode",
    "CatalogServiceNode",
    "GoDuration",
    "HealthCheck",
    "HealthCheckDefinition",
    "ServiceAddress",
    "Weights",
    "parse_go_duration",
]
