"""Catalog records.

Field names follow the Consul wire format exactly (case-sensitive) through
aliases; Python attribute names are snake_case.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .health import HealthCheck


class Weights(BaseModel):
    """DNS SRV weights of a service instance."""

    passing: int = Field(..., alias="Passing")
    warning: int = Field(..., alias="Warning")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ServiceAddress(BaseModel):
    """Tagged address of a service instance."""

    address: str = Field(..., alias="Address")
    port: int = Field(..., alias="Port", ge=0, le=65535)

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class CatalogNode(BaseModel):
    """A node registered in the catalog."""

    id: str = Field("", alias="ID")
    node: str = Field(..., alias="Node")
    address: str = Field(..., alias="Address")
    datacenter: str = Field("", alias="Datacenter")
    tagged_addresses: dict[str, str] | None = Field(None, alias="TaggedAddresses")
    meta: dict[str, str] | None = Field(None, alias="Meta")
    create_index: int = Field(0, alias="CreateIndex")
    modify_index: int = Field(0, alias="ModifyIndex")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class CatalogServiceNode(BaseModel):
    """A node running a given service, as returned by ``/v1/catalog/service``."""

    id: str = Field("", alias="ID")
    node: str = Field(..., alias="Node")
    address: str = Field(..., alias="Address")
    datacenter: str = Field("", alias="Datacenter")
    tagged_addresses: dict[str, str] | None = Field(None, alias="TaggedAddresses")
    node_meta: dict[str, str] | None = Field(None, alias="NodeMeta")
    service_id: str = Field(..., alias="ServiceID")
    service_name: str = Field(..., alias="ServiceName")
    service_address: str = Field("", alias="ServiceAddress")
    service_tagged_addresses: dict[str, ServiceAddress] | None = Field(
        None, alias="ServiceTaggedAddresses"
    )
    service_tags: list[str] | None = Field(None, alias="ServiceTags")
    service_meta: dict[str, str] | None = Field(None, alias="ServiceMeta")
    service_port: int = Field(0, alias="ServicePort", ge=0, le=65535)
    service_weights: Weights | None = Field(None, alias="ServiceWeights")
    service_enable_tag_override: bool = Field(False, alias="ServiceEnableTagOverride")
    checks: list[HealthCheck] | None = Field(None, alias="Checks")
    namespace: str | None = Field(None, alias="Namespace")
    create_index: int = Field(0, alias="CreateIndex")
    modify_index: int = Field(0, alias="ModifyIndex")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def effective_address(self) -> str:
        """Service address, falling back to the node address when unset."""
        return self.service_address or self.address
