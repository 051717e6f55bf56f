"""Shared fixtures for integration tests."""

import os

import pytest
import pytest_asyncio

from laakhay.consul import ConsulClient

# Skip all integration tests unless RUN_LAAKHAY_CONSUL_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_LAAKHAY_CONSUL_TESTS") != "1",
    reason="Requires a Consul agent. Set RUN_LAAKHAY_CONSUL_TESTS=1 to run",
)


@pytest_asyncio.fixture
async def client():
    """Client for the agent named by CONSUL_HTTP_ADDR (default 127.0.0.1:8500)."""
    async with ConsulClient.from_env() as consul:
        yield consul
