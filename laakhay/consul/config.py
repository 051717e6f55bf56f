"""Client configuration.

This module centralizes the default endpoint, the environment variables the
client understands and the per-client defaults applied to every request.
"""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TypeVar

from .core.options import QueryOptions, WriteOptions

DEFAULT_ADDRESS = "http://127.0.0.1:8500"

# Environment variables, named as the Consul CLI names them
ENV_HTTP_ADDR = "CONSUL_HTTP_ADDR"
ENV_HTTP_TOKEN = "CONSUL_HTTP_TOKEN"
ENV_HTTP_SSL = "CONSUL_HTTP_SSL"
ENV_NAMESPACE = "CONSUL_NAMESPACE"
ENV_DATACENTER = "CONSUL_DATACENTER"

OptionsT = TypeVar("OptionsT", QueryOptions, WriteOptions)


def _normalize_address(address: str, use_ssl: bool | None) -> str:
    # CONSUL_HTTP_ADDR is commonly given as host:port without a scheme
    if "://" in address:
        return address
    scheme = "https" if use_ssl else "http"
    return f"{scheme}://{address}"


@dataclass(frozen=True)
class ClientSettings:
    """Connection settings and request defaults for a ``ConsulClient``.

    ``token``, ``datacenter`` and ``namespace`` fill in options that leave them
    unset; a value given explicitly on an options object always wins.
    """

    address: str = DEFAULT_ADDRESS
    token: str | None = None
    datacenter: str | None = None
    namespace: str | None = None
    # Session-wide ceiling in seconds; per-request deadlines come from options
    session_timeout: float | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClientSettings:
        """Build settings from ``CONSUL_*`` environment variables."""
        env = os.environ if environ is None else environ

        ssl_raw = env.get(ENV_HTTP_SSL)
        use_ssl = ssl_raw.lower() == "true" if ssl_raw is not None else None

        address = env.get(ENV_HTTP_ADDR) or DEFAULT_ADDRESS
        return cls(
            address=_normalize_address(address, use_ssl),
            token=env.get(ENV_HTTP_TOKEN) or None,
            datacenter=env.get(ENV_DATACENTER) or None,
            namespace=env.get(ENV_NAMESPACE) or None,
        )

    def option_defaults(self) -> dict[str, str]:
        defaults = {
            "token": self.token,
            "datacenter": self.datacenter,
            "namespace": self.namespace,
        }
        return {name: value for name, value in defaults.items() if value is not None}

    def apply(self, options: OptionsT | None, factory: type[OptionsT]) -> OptionsT | None:
        """Fill unset token/datacenter/namespace fields from these settings.

        Returns ``options`` untouched when there is nothing to fill, so a
        client without defaults sends exactly what the caller asked for.
        """
        defaults = self.option_defaults()
        if not defaults:
            return options
        if options is None:
            return factory(**defaults)

        missing = {name: value for name, value in defaults.items() if getattr(options, name) is None}
        if not missing:
            return options
        return dataclasses.replace(options, **missing)
