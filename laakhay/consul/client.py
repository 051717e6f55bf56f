"""High-level Consul client.

Architecture:
    ``ConsulClient`` owns exactly one ``HTTPClient`` (and so one pooled aiohttp
    session) and one ``RestRunner`` bound to its endpoint. Subclients returned
    by ``catalog()``, ``health()`` and ``agent()`` share that runner, so any
    number of one-shot calls and watches can run concurrently over the same
    connection pool. There is no module-level client or session: independent
    clients are fully independent.
"""

from __future__ import annotations

import logging

from yarl import URL

from .api import Agent, Catalog, Health
from .config import ClientSettings
from .runtime.rest import HTTPClient, RestRunner

logger = logging.getLogger(__name__)


class ConsulClient:
    """Client for the Consul HTTP API.

    Example:
        >>> async with ConsulClient("http://127.0.0.1:8500") as client:
        ...     nodes, meta = await client.catalog().get_service_nodes("web")
    """

    def __init__(
        self,
        base_url: str | URL | None = None,
        *,
        settings: ClientSettings | None = None,
        http_client: HTTPClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Consul endpoint. Defaults to ``settings.address``.
            settings: Request defaults (token, datacenter, namespace).
            http_client: Transport to use instead of a client-owned one. An
                injected transport is not closed by ``close()``.

        Raises:
            EndpointConfigurationError: If the endpoint is not an absolute
                http(s) URL.
        """
        self.settings = settings or ClientSettings()
        self._owns_http = http_client is None
        self._http = http_client or HTTPClient(timeout=self.settings.session_timeout)
        self._runner = RestRunner(base_url or self.settings.address, self._http)
        logger.debug("Consul client created", extra={"endpoint": str(self._runner.base_url)})

    @classmethod
    def from_env(cls, *, http_client: HTTPClient | None = None) -> ConsulClient:
        """Create a client configured from ``CONSUL_*`` environment variables."""
        return cls(settings=ClientSettings.from_env(), http_client=http_client)

    @property
    def base_url(self) -> URL:
        return self._runner.base_url

    def catalog(self) -> Catalog:
        """Gets a ``Catalog`` subclient."""
        return Catalog(self._runner, self.settings)

    def health(self) -> Health:
        """Gets a ``Health`` subclient."""
        return Health(self._runner, self.settings)

    def agent(self) -> Agent:
        """Gets an ``Agent`` subclient."""
        return Agent(self._runner, self.settings)

    async def close(self) -> None:
        """Close the underlying session, if this client created it."""
        if self._owns_http:
            await self._http.close()

    async def __aenter__(self) -> ConsulClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
