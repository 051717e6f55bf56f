"""Catalog operations."""

from __future__ import annotations

from ..core.metadata import QueryMetadata
from ..core.options import QueryOptions
from ..models import CatalogNode, CatalogServiceNode
from ..runtime.watch import BlockingQueryWatch
from .base import APIGroup


class Catalog(APIGroup):
    """Operations on the ``/v1/catalog`` part of the Consul API."""

    async def datacenters(self) -> list[str]:
        """List all known datacenters, sorted by estimated round trip time."""
        datacenters, _ = await self._runner.query(
            ("v1", "catalog", "datacenters"), list[str], self._query_options(None)
        )
        return datacenters

    async def nodes(
        self,
        options: QueryOptions | None = None,
    ) -> tuple[list[CatalogNode], QueryMetadata]:
        """List the nodes registered in the catalog."""
        return await self._runner.query(
            ("v1", "catalog", "nodes"), list[CatalogNode], self._query_options(options)
        )

    async def services(
        self,
        options: QueryOptions | None = None,
    ) -> tuple[dict[str, list[str]], QueryMetadata]:
        """Map every registered service name to its tags."""
        return await self._runner.query(
            ("v1", "catalog", "services"), dict[str, list[str]], self._query_options(options)
        )

    async def get_service_nodes(
        self,
        service: str,
        options: QueryOptions | None = None,
    ) -> tuple[list[CatalogServiceNode], QueryMetadata]:
        """Get the nodes running ``service``."""
        return await self._runner.query(
            ("v1", "catalog", "service", service),
            list[CatalogServiceNode],
            self._query_options(options),
        )

    def watch_nodes(
        self,
        options: QueryOptions | None = None,
    ) -> BlockingQueryWatch[list[CatalogNode]]:
        """Stream the node list every time it changes."""
        return BlockingQueryWatch(
            self._runner,
            ("v1", "catalog", "nodes"),
            list[CatalogNode],
            self._query_options(options),
        )

    def watch_services(
        self,
        options: QueryOptions | None = None,
    ) -> BlockingQueryWatch[dict[str, list[str]]]:
        """Stream the service/tag map every time it changes."""
        return BlockingQueryWatch(
            self._runner,
            ("v1", "catalog", "services"),
            dict[str, list[str]],
            self._query_options(options),
        )

    def watch_service_nodes(
        self,
        service: str,
        options: QueryOptions | None = None,
    ) -> BlockingQueryWatch[list[CatalogServiceNode]]:
        """Stream the nodes running ``service`` after every change.

        Each item holds all nodes running the service at that point. The
        stream ends after the first error, which is raised to the consumer.
        """
        return BlockingQueryWatch(
            self._runner,
            ("v1", "catalog", "service", service),
            list[CatalogServiceNode],
            self._query_options(options),
        )
