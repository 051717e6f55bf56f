"""Runtime orchestration components."""

from .rest import HTTPClient, HTTPResponse, PreparedRequest, RestRunner, build_request
from .watch import BlockingQueryWatch, WatchState

__all__ = [
    "BlockingQueryWatch",
    "WatchState",
    "HTTPClient",
    "HTTPResponse",
    "PreparedRequest",
    "RestRunner",
    "build_request",
]
