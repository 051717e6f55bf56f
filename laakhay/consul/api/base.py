"""Shared plumbing for API subclients."""

from __future__ import annotations

from ..config import ClientSettings
from ..core.options import QueryOptions, WriteOptions
from ..runtime.rest.runner import RestRunner


class APIGroup:
    """Base for subclients covering one area of the Consul HTTP API.

    Subclients are cheap views over the client's shared runner; creating one
    per call is fine.
    """

    def __init__(self, runner: RestRunner, settings: ClientSettings | None = None) -> None:
        self._runner = runner
        self._settings = settings or ClientSettings()

    def _query_options(self, options: QueryOptions | None) -> QueryOptions | None:
        return self._settings.apply(options, QueryOptions)

    def _write_options(self, options: WriteOptions | None) -> WriteOptions | None:
        return self._settings.apply(options, WriteOptions)
