"""Unit tests for build_request.

Tests focus on path extension, query merging, body serialization and header
validation.
"""

from __future__ import annotations

import json
from datetime import timedelta

import pytest
from pydantic import BaseModel, Field
from yarl import URL

from laakhay.consul.core import (
    Consistency,
    EndpointConfigurationError,
    IndexBlocking,
    InvalidRequestBodyError,
    InvalidRequestError,
    QueryOptions,
    WriteOptions,
)
from laakhay.consul.runtime.rest import build_request, parse_endpoint


class TestParseEndpoint:
    """Test endpoint validation."""

    @pytest.mark.parametrize(
        "endpoint",
        ["http://127.0.0.1:8500", "https://consul.example.com/prefix/", URL("http://h:1")],
    )
    def test_accepts_http_urls(self, endpoint):
        assert isinstance(parse_endpoint(endpoint), URL)

    @pytest.mark.parametrize(
        "endpoint",
        ["mailto:ops@example.com", "localhost:8500", "/v1/catalog", "ftp://h/", "not a url"],
    )
    def test_rejects_non_extendable(self, endpoint):
        with pytest.raises(EndpointConfigurationError):
            parse_endpoint(endpoint)

    def test_build_rejects_bad_endpoint(self):
        with pytest.raises(EndpointConfigurationError):
            build_request("urn:isbn:0451450523", "GET", ["v1"])


class TestPath:
    """Test path segment handling."""

    def test_segments_appended(self):
        request = build_request("http://127.0.0.1:8500", "get", ["v1", "catalog", "service", "web"])
        assert request.method == "GET"
        assert str(request.url) == "http://127.0.0.1:8500/v1/catalog/service/web"

    def test_existing_prefix_kept(self):
        request = build_request("https://gw.example.com/consul/", "GET", ["v1", "agent", "self"])
        assert request.url.path == "/consul/v1/agent/self"

    def test_segments_are_escaped(self):
        """A slash inside a segment stays inside that segment."""
        request = build_request("http://h:8500", "GET", ["v1", "catalog", "service", "a/b c"])
        assert request.url.raw_path == "/v1/catalog/service/a%2Fb%20c"


class TestQueryMerge:
    """Test merge-with-override of query parameters."""

    def test_no_options_no_query(self):
        request = build_request("http://h:8500", "GET", ["v1", "catalog", "nodes"])
        assert len(request.url.query) == 0
        assert len(request.headers) == 0
        assert request.body is None

    def test_projected_value_overrides_base(self):
        """?dc=east plus datacenter west gives a single dc=west."""
        request = build_request(
            "http://h:8500?dc=east",
            "GET",
            ["v1", "catalog", "nodes"],
            QueryOptions(datacenter="west"),
        )
        assert request.url.query.getall("dc") == ["west"]

    def test_unrelated_base_params_preserved(self):
        request = build_request(
            "http://h:8500?dc=east&pretty=1",
            "GET",
            ["v1", "catalog", "nodes"],
            QueryOptions(consistency=Consistency.STALE),
        )
        assert request.url.query.getall("dc") == ["east"]
        assert request.url.query.getall("pretty") == ["1"]
        assert request.url.query.getall("stale") == ["1"]

    def test_base_params_preserved_without_options(self):
        request = build_request("http://h:8500?dc=east", "GET", ["v1", "catalog", "nodes"])
        assert request.url.query.getall("dc") == ["east"]

    def test_repeated_node_meta_kept(self):
        """Every node-meta[] entry survives the merge."""
        request = build_request(
            "http://h:8500?node-meta[]=old:1",
            "GET",
            ["v1", "catalog", "nodes"],
            QueryOptions(node_meta={"rack": "r1", "zone": "a"}),
        )
        assert sorted(request.url.query.getall("node-meta[]")) == ["rack:r1", "zone:a"]

    def test_blocking_and_wait(self):
        request = build_request(
            "http://h:8500",
            "GET",
            ["v1", "catalog", "services"],
            QueryOptions(blocking=IndexBlocking(99), blocking_timeout=timedelta(seconds=2)),
        )
        assert request.url.query["index"] == "99"
        assert request.url.query["wait"] == "2000ms"


class TestHeaders:
    """Test header projection and validation."""

    def test_token_and_cache_headers(self):
        request = build_request(
            "http://h:8500",
            "GET",
            ["v1", "catalog", "nodes"],
            QueryOptions(token="secret", use_cache=True, cache_max_age=timedelta(seconds=3)),
        )
        assert request.headers["X-Consul-Token"] == "secret"
        assert request.headers["Cache-Control"] == "max-age=3"

    @pytest.mark.parametrize("token", ["abc\r\nX-Injected: 1", "tab\x00null", "令牌"])
    def test_invalid_header_value_fails_build(self, token):
        with pytest.raises(InvalidRequestError) as exc_info:
            build_request("http://h:8500", "GET", ["v1"], QueryOptions(token=token))
        assert exc_info.value.header == "X-Consul-Token"

    def test_write_options_headers(self):
        request = build_request(
            "http://h:8500",
            "PUT",
            ["v1", "agent", "service", "deregister", "web-1"],
            WriteOptions(token="t", datacenter="dc2"),
        )
        assert request.headers["X-Consul-Token"] == "t"
        assert request.url.query["dc"] == "dc2"


class _Registration(BaseModel):
    name: str = Field(..., alias="Name")
    port: int = Field(..., alias="Port")
    address: str | None = Field(None, alias="Address")


class TestBody:
    """Test body serialization."""

    def test_mapping_body(self):
        request = build_request("http://h:8500", "PUT", ["v1"], body={"Name": "web", "Port": 80})
        assert json.loads(request.body) == {"Name": "web", "Port": 80}
        assert request.headers["Content-Type"] == "application/json"

    def test_model_body_uses_aliases(self):
        body = _Registration(Name="web", Port=80)
        request = build_request("http://h:8500", "PUT", ["v1"], body=body)
        assert json.loads(request.body) == {"Name": "web", "Port": 80}

    def test_nested_model_body(self):
        body = {"Service": _Registration(Name="web", Port=80)}
        request = build_request("http://h:8500", "PUT", ["v1"], body=body)
        assert json.loads(request.body) == {"Service": {"Name": "web", "Port": 80}}

    @pytest.mark.parametrize("body", [{"a": object()}, {"a": float("nan")}, {1, 2}])
    def test_unserializable_body_fails_build(self, body):
        with pytest.raises(InvalidRequestBodyError):
            build_request("http://h:8500", "PUT", ["v1"], body=body)
