"""Unit tests for the exception hierarchy.

Tests focus on meaningful behavior, not just field access.
"""

from laakhay.consul.core import (
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


def test_timeout_is_distinct_from_transport_error():
    """RequestTimeoutError is a TimeoutError but not a TransportError."""
    error = RequestTimeoutError("timed out", timeout=1.5)
    assert isinstance(error, ConsulError)
    assert isinstance(error, TimeoutError)
    assert not isinstance(error, TransportError)
    assert error.timeout == 1.5


def test_construction_errors():
    assert isinstance(InvalidRequestBodyError("bad body"), RequestConstructionError)
    error = InvalidRequestError("bad header", header="X-Bad")
    assert isinstance(error, RequestConstructionError)
    assert error.header == "X-Bad"


def test_response_status_error_carries_code():
    error = ResponseStatusError("unexpected status code: 503", status_code=503, body="down")
    assert error.status_code == 503
    assert error.body == "down"
    assert isinstance(error, ResponseError)


def test_malformed_headers_lists_all():
    error = MalformedHeadersError(["X-Consul-Index", "Age"])
    assert error.headers == ["X-Consul-Index", "Age"]
    assert str(error) == "missing or invalid response headers: X-Consul-Index, Age"
    assert isinstance(error, ResponseError)


def test_endpoint_error_context():
    error = EndpointConfigurationError("bad endpoint", endpoint="mailto:x")
    assert error.endpoint == "mailto:x"
    assert isinstance(error, ConsulError)


def test_payload_decode_error_is_response_error():
    assert isinstance(PayloadDecodeError("bad json"), ResponseError)
