"""Core components."""

from .enums import Consistency, HealthState
from .exceptions import (
    ConsulError,
    EndpointConfigurationError,
    InvalidRequestBodyError,
    InvalidRequestError,
    MalformedHeadersError,
    PayloadDecodeError,
    RequestConstructionError,
    RequestTimeoutError,
    ResponseError,
    ResponseStatusError,
    TransportError,
)
from .metadata import QueryMetadata
from .options import BlockingMode, HashBlocking, IndexBlocking, QueryOptions, WriteOptions
from .projection import (
    RequestOptions,
    collect_query_parameters,
    collect_request_headers,
    derive_timeout,
)

__all__ = [
    # Options
    "Consistency",
    "HealthState",
    "BlockingMode",
    "IndexBlocking",
    "HashBlocking",
    "QueryOptions",
    "WriteOptions",
    "QueryMetadata",
    # Projection
    "RequestOptions",
    "collect_query_parameters",
    "collect_request_headers",
    "derive_timeout",
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
