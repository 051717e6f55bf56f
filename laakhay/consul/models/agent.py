"""Local agent records."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .catalog import ServiceAddress
from .health import HealthCheckDefinition


class AgentServiceKind(str, Enum):
    """Kind of service registered with the agent."""

    DEFAULT = ""
    CONNECT_PROXY = "connect-proxy"
    MESH_GATEWAY = "mesh-gateway"
    TERMINATING_GATEWAY = "terminating-gateway"
    INGRESS_GATEWAY = "ingress-gateway"


class AgentWeights(BaseModel):
    passing: int = Field(..., alias="Passing")
    warning: int = Field(..., alias="Warning")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class AgentCheck(BaseModel):
    """A check registered with the local agent."""

    node: str = Field(..., alias="Node")
    check_id: str = Field(..., alias="CheckID")
    name: str = Field(..., alias="Name")
    status: str = Field(..., alias="Status")
    notes: str = Field("", alias="Notes")
    output: str = Field("", alias="Output")
    service_id: str = Field("", alias="ServiceID")
    service_name: str = Field("", alias="ServiceName")
    check_type: str = Field("", alias="Type")
    namespace: str | None = Field(None, alias="Namespace")
    definition: HealthCheckDefinition | None = Field(None, alias="Definition")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class AgentService(BaseModel):
    """A service registered with the local agent."""

    kind: AgentServiceKind = Field(AgentServiceKind.DEFAULT, alias="Kind")
    id: str = Field(..., alias="ID")
    service: str = Field(..., alias="Service")
    tags: list[str] | None = Field(None, alias="Tags")
    meta: dict[str, str] | None = Field(None, alias="Meta")
    port: int = Field(0, alias="Port", ge=0, le=65535)
    address: str = Field("", alias="Address")
    tagged_addresses: dict[str, ServiceAddress] | None = Field(None, alias="TaggedAddresses")
    weights: AgentWeights | None = Field(None, alias="Weights")
    enable_tag_override: bool = Field(False, alias="EnableTagOverride")
    create_index: int = Field(0, alias="CreateIndex")
    modify_index: int = Field(0, alias="ModifyIndex")
    content_hash: str = Field("", alias="ContentHash")
    namespace: str | None = Field(None, alias="Namespace")
    datacenter: str | None = Field(None, alias="Datacenter")

    model_config = ConfigDict(frozen=True, populate_by_name=True)
