"""Laakhay Consul - asyncio client for the Consul catalog, health and agent APIs."""

from .api import Agent, Catalog, Health
from .client import ConsulClient
from .config import DEFAULT_ADDRESS, ClientSettings
from .core import (
    BlockingMode,
    Consistency,
    ConsulError,
    EndpointConfigurationError,
    HashBlocking,
    HealthState,
    IndexBlocking,
    InvalidRequestBodyError,
    InvalidRequestError,
    MalformedHeadersError,
    PayloadDecodeError,
    QueryMetadata,
    QueryOptions,
    RequestConstructionError,
    RequestTimeoutError,
    ResponseError,
    ResponseStatusError,
    TransportError,
    WriteOptions,
)
from .models import (
    AgentCheck,
    AgentService,
    AgentServiceKind,
    CatalogNode,
    CatalogServiceNode,
    HealthCheck,
    HealthCheckDefinition,
)
from .runtime import BlockingQueryWatch, HTTPClient, WatchState

__version__ = "0.1.0"

__all__ = [
    # Client
    "ConsulClient",
    "ClientSettings",
    "DEFAULT_ADDRESS",
    "Catalog",
    "Health",
    "Agent",
    "HTTPClient",
    # Options and metadata
    "Consistency",
    "HealthState",
    "BlockingMode",
    "IndexBlocking",
    "HashBlocking",
    "QueryOptions",
    "WriteOptions",
    "QueryMetadata",
    # Watches
    "BlockingQueryWatch",
    "WatchState",
    # Models
    "AgentCheck",
    "AgentService",
    "AgentServiceKind",
    "CatalogNode",
    "CatalogServiceNode",
    "HealthCheck",
    "HealthCheckDefinition",
    # Errors
    "ConsulError",
    "EndpointConfigurationError",
    "RequestConstructionError",
    "InvalidRequestBodyError",
    "InvalidRequestError",
    "TransportError",
    "RequestTimeoutError",
    "ResponseError",
    "ResponseStatusError",
    "MalformedHeadersError",
    "PayloadDecodeError",
]
