"""Health operations."""

from __future__ import annotations

from ..core.enums import HealthState
from ..core.metadata import QueryMetadata
from ..core.options import QueryOptions
from ..models import HealthCheck
from ..runtime.watch import BlockingQueryWatch
from .base import APIGroup


class Health(APIGroup):
    """Operations on the ``/v1/health`` part of the Consul API."""

    async def node_checks(
        self,
        node: str,
        options: QueryOptions | None = None,
    ) -> tuple[list[HealthCheck], QueryMetadata]:
        """Checks registered on ``node``."""
        return await self._runner.query(
            ("v1", "health", "node", node), list[HealthCheck], self._query_options(options)
        )

    async def service_checks(
        self,
        service: str,
        options: QueryOptions | None = None,
    ) -> tuple[list[HealthCheck], QueryMetadata]:
        """Checks associated with ``service``."""
        return await self._runner.query(
            ("v1", "health", "checks", service), list[HealthCheck], self._query_options(options)
        )

    async def checks_in_state(
        self,
        state: HealthState | str,
        options: QueryOptions | None = None,
    ) -> tuple[list[HealthCheck], QueryMetadata]:
        """Checks currently in ``state`` (``any`` matches every state)."""
        return await self._runner.query(
            ("v1", "health", "state", HealthState(state).value),
            list[HealthCheck],
            self._query_options(options),
        )

    def watch_service_checks(
        self,
        service: str,
        options: QueryOptions | None = None,
    ) -> BlockingQueryWatch[list[HealthCheck]]:
        """Stream the checks of ``service`` after every change."""
        return BlockingQueryWatch(
            self._runner,
            ("v1", "health", "checks", service),
            list[HealthCheck],
            self._query_options(options),
        )

    def watch_checks_in_state(
        self,
        state: HealthState | str,
        options: QueryOptions | None = None,
    ) -> BlockingQueryWatch[list[HealthCheck]]:
        """Stream the checks in ``state`` after every change."""
        return BlockingQueryWatch(
            self._runner,
            ("v1", "health", "state", HealthState(state).value),
            list[HealthCheck],
            self._query_options(options),
        )
