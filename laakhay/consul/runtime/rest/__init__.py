"""REST runtime abstractions."""

from .http_client import HTTPClient, HTTPResponse
from .request import PreparedRequest, build_request, parse_endpoint, serialize_body
from .runner import RestRunner, decode_payload

__all__ = [
    "HTTPClient",
    "HTTPResponse",
    "PreparedRequest",
    "RestRunner",
    "build_request",
    "decode_payload",
    "parse_endpoint",
    "serialize_body",
]
