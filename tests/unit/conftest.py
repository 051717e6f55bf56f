"""Shared fixtures for unit tests."""

from __future__ import annotations

import json
from typing import Any

import pytest
from multidict import CIMultiDict

from laakhay.consul.runtime.rest import HTTPClient, HTTPResponse, PreparedRequest


class ScriptedHTTPClient(HTTPClient):
    """HTTPClient double that replays a script of responses/exceptions.

    Every request sent is recorded in ``requests``.
    """

    def __init__(self, script: list[Any] | None = None) -> None:
        super().__init__()
        self.script = list(script or [])
        self.requests: list[PreparedRequest] = []
        self.closed = False

    async def send(self, request: PreparedRequest) -> HTTPResponse:
        self.requests.append(request)
        if not self.script:
            raise AssertionError(f"unexpected request: {request.method} {request.url}")
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    async def close(self) -> None:
        self.closed = True


def make_response(
    payload: Any = None,
    *,
    status: int = 200,
    headers: dict[str, str] | None = None,
    body: bytes | None = None,
) -> HTTPResponse:
    """Build an HTTPResponse with a JSON body."""
    if body is None:
        body = json.dumps(payload if payload is not None else []).encode()
    return HTTPResponse(status=status, headers=CIMultiDict(headers or {}), body=body)


@pytest.fixture
def scripted_http():
    """Factory for ScriptedHTTPClient instances."""
    return ScriptedHTTPClient


@pytest.fixture
def response():
    """Factory for JSON HTTPResponse instances."""
    return make_response


@pytest.fixture
def service_node_payload():
    """A single /v1/catalog/service entry as Consul renders it."""
    return {
        "ID": "40e4a748-2192-161a-0510-9bf59fe950b5",
        "Node": "node-1",
        "Address": "192.168.10.10",
        "Datacenter": "dc1",
        "TaggedAddresses": {"lan": "192.168.10.10", "wan": "10.0.10.10"},
        "NodeMeta": {"somekey": "somevalue"},
        "CreateIndex": 51,
        "ModifyIndex": 51,
        "ServiceAddress": "172.17.0.3",
        "ServiceEnableTagOverride": False,
        "ServiceID": "web-1",
        "ServiceName": "web",
        "ServicePort": 8000,
        "ServiceMeta": {"web_meta_value": "baz"},
        "ServiceTaggedAddresses": {
            "lan": {"Address": "172.17.0.3", "Port": 8000},
        },
        "ServiceTags": ["prod"],
        "ServiceWeights": {"Passing": 1, "Warning": 1},
        "Namespace": "default",
    }
