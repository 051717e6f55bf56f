"""Local agent operations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from ..core.metadata import QueryMetadata
from ..core.options import QueryOptions, WriteOptions
from ..models import AgentCheck, AgentService
from ..runtime.watch import BlockingQueryWatch
from .base import APIGroup


class Agent(APIGroup):
    """Operations on the ``/v1/agent`` part of the Consul API.

    The agent endpoints answer from the local agent's state and support
    hash-based blocking, so watches here usually carry ``HashBlocking``.
    """

    async def services(
        self,
        options: QueryOptions | None = None,
    ) -> tuple[dict[str, AgentService], QueryMetadata]:
        """Services registered with the local agent, keyed by service ID."""
        return await self._runner.query(
            ("v1", "agent", "services"), dict[str, AgentService], self._query_options(options)
        )

    async def checks(
        self,
        options: QueryOptions | None = None,
    ) -> tuple[dict[str, AgentCheck], QueryMetadata]:
        """Checks registered with the local agent, keyed by check ID."""
        return await self._runner.query(
            ("v1", "agent", "checks"), dict[str, AgentCheck], self._query_options(options)
        )

    def watch_services(
        self,
        options: QueryOptions | None = None,
    ) -> BlockingQueryWatch[dict[str, AgentService]]:
        """Stream the local agent's services after every change."""
        return BlockingQueryWatch(
            self._runner,
            ("v1", "agent", "services"),
            dict[str, AgentService],
            self._query_options(options),
        )

    async def register_service(
        self,
        registration: Mapping[str, Any] | BaseModel,
        options: WriteOptions | None = None,
    ) -> None:
        """Register a service with the local agent.

        ``registration`` is sent as-is, using Consul's field names
        (``{"Name": "web", "Port": 8080, ...}``).
        """
        await self._runner.write(
            "PUT",
            ("v1", "agent", "service", "register"),
            self._write_options(options),
            body=registration,
        )

    async def deregister_service(
        self,
        service_id: str,
        options: WriteOptions | None = None,
    ) -> None:
        """Remove ``service_id`` from the local agent."""
        await self._runner.write(
            "PUT",
            ("v1", "agent", "service", "deregister", service_id),
            self._write_options(options),
        )
