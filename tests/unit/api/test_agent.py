"""Unit tests for the Agent subclient."""

from __future__ import annotations

import json

import pytest
from pydantic import BaseModel, ConfigDict, Field

from laakhay.consul.api import Agent
from laakhay.consul.core import ResponseStatusError, WriteOptions
from laakhay.consul.models import AgentServiceKind
from laakhay.consul.runtime import RestRunner

SERVICES = {
    "web-1": {
        "Kind": "",
        "ID": "web-1",
        "Service": "web",
        "Tags": ["prod"],
        "Meta": {"version": "1.2"},
        "Port": 8000,
        "Address": "172.17.0.3",
        "TaggedAddresses": {"lan_ipv4": {"Address": "172.17.0.3", "Port": 8000}},
        "Weights": {"Passing": 1, "Warning": 1},
        "EnableTagOverride": False,
        "ContentHash": "3e4b3b8a3c0e6a5d",
        "Datacenter": "dc1",
    },
    "web-sidecar-proxy": {
        "Kind": "connect-proxy",
        "ID": "web-sidecar-proxy",
        "Service": "web-sidecar-proxy",
        "Port": 21000,
    },
}


def _agent(http) -> Agent:
    return Agent(RestRunner("http://127.0.0.1:8500", http))


class _Registration(BaseModel):
    name: str = Field(..., alias="Name")
    port: int = Field(..., alias="Port")
    tags: list[str] | None = Field(None, alias="Tags")

    model_config = ConfigDict(populate_by_name=True)


class TestAgentQueries:
    """Test agent read endpoints."""

    @pytest.mark.asyncio
    async def test_services(self, scripted_http, response):
        http = scripted_http([response(SERVICES, headers={"X-Consul-ContentHash": "aa11"})])

        services, meta = await _agent(http).services()

        assert http.requests[0].url.path == "/v1/agent/services"
        assert meta.last_content_hash == "aa11"
        assert meta.last_index is None
        assert services["web-1"].tagged_addresses["lan_ipv4"].port == 8000
        assert services["web-1"].weights.passing == 1
        assert services["web-sidecar-proxy"].kind == AgentServiceKind.CONNECT_PROXY

    @pytest.mark.asyncio
    async def test_checks(self, scripted_http, response):
        http = scripted_http(
            [
                response(
                    {
                        "service:web-1": {
                            "Node": "node-1",
                            "CheckID": "service:web-1",
                            "Name": "web",
                            "Status": "critical",
                            "Type": "ttl",
                        }
                    }
                )
            ]
        )

        checks, _ = await _agent(http).checks()

        assert checks["service:web-1"].status == "critical"
        assert checks["service:web-1"].check_type == "ttl"

    @pytest.mark.asyncio
    async def test_watch_services_uses_hash(self, scripted_http, response):
        http = scripted_http(
            [
                response(SERVICES, headers={"X-Consul-ContentHash": "aa11"}),
                response({}, headers={"X-Consul-ContentHash": "bb22"}),
            ]
        )
        watch = _agent(http).watch_services()

        await watch.__anext__()
        services, _ = await watch.__anext__()

        assert services == {}
        assert http.requests[1].url.query["hash"] == "aa11"


class TestAgentWrites:
    """Test agent write endpoints."""

    @pytest.mark.asyncio
    async def test_register_service_mapping(self, scripted_http, response):
        http = scripted_http([response(body=b"")])

        await _agent(http).register_service({"Name": "web", "Port": 8000})

        request = http.requests[0]
        assert request.method == "PUT"
        assert request.url.path == "/v1/agent/service/register"
        assert json.loads(request.body) == {"Name": "web", "Port": 8000}
        assert request.headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_register_service_model(self, scripted_http, response):
        http = scripted_http([response(body=b"")])

        await _agent(http).register_service(
            _Registration(name="web", port=8000), WriteOptions(token="t")
        )

        request = http.requests[0]
        assert json.loads(request.body) == {"Name": "web", "Port": 8000}
        assert request.headers["X-Consul-Token"] == "t"

    @pytest.mark.asyncio
    async def test_deregister_service(self, scripted_http, response):
        http = scripted_http([response(body=b"")])

        await _agent(http).deregister_service("web 1")

        request = http.requests[0]
        assert request.method == "PUT"
        assert request.url.raw_path == "/v1/agent/service/deregister/web%201"
        assert request.body is None

    @pytest.mark.asyncio
    async def test_deregister_unknown_service(self, scripted_http, response):
        http = scripted_http([response(status=404, body=b"Unknown service ID")])

        with pytest.raises(ResponseStatusError) as exc_info:
            await _agent(http).deregister_service("missing")
        assert exc_info.value.status_code == 404
