"""Custom exception hierarchy."""

from __future__ import annotations


class ConsulError(Exception):
    """Base exception for all library errors."""

    pass


class EndpointConfigurationError(ConsulError):
    """The base Consul endpoint cannot be used to build requests."""

    def __init__(self, message: str, endpoint: str | None = None) -> None:
        super().__init__(message)
        self.endpoint = endpoint


class RequestConstructionError(ConsulError):
    """A request could not be assembled from its path, options and body."""

    pass


class InvalidRequestBodyError(RequestConstructionError):
    """The request body could not be serialized to JSON."""

    pass


class InvalidRequestError(RequestConstructionError):
    """A header name or value is not a valid HTTP token."""

    def __init__(self, message: str, header: str | None = None) -> None:
        super().__init__(message)
        self.header = header


class TransportError(ConsulError):
    """Network-level failure while talking to Consul."""

    pass


class RequestTimeoutError(ConsulError, TimeoutError):
    """The request did not complete within its deadline.

    Not a TransportError: an expired deadline is distinct from a broken
    connection.
    """

    def __init__(self, message: str, timeout: float | None = None) -> None:
        super().__init__(message)
        self.timeout = timeout


class ResponseError(ConsulError):
    """Consul answered, but the response could not be used."""

    pass


class ResponseStatusError(ResponseError):
    """Consul returned a non-success status code."""

    def __init__(self, message: str, status_code: int, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class MalformedHeadersError(ResponseError):
    """One or more protocol headers were present but unparsable.

    Every offending header is listed, not just the first one found.
    """

    def __init__(self, headers: list[str]) -> None:
        super().__init__(f"missing or invalid response headers: {', '.join(headers)}")
        self.headers = list(headers)


class PayloadDecodeError(ResponseError):
    """The response body was not JSON or did not match the expected shape."""

    pass
