"""Health check records."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .durations import GoDuration


class HealthCheckDefinition(BaseModel):
    """Probe parameters of an HTTP or TCP health check."""

    http: str = Field("", alias="HTTP")
    header: dict[str, list[str]] | None = Field(None, alias="Header")
    method: str = Field("", alias="Method")
    body: str = Field("", alias="Body")
    tls_skip_verify: bool = Field(False, alias="TLSSkipVerify")
    tcp: str = Field("", alias="TCP")
    interval: GoDuration | None = Field(None, alias="Interval")
    timeout: GoDuration | None = Field(None, alias="Timeout")
    deregister_critical_service_after: GoDuration | None = Field(
        None, alias="DeregisterCriticalServiceAfter"
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class HealthCheck(BaseModel):
    """A health check as reported by the health endpoints."""

    node: str = Field(..., alias="Node")
    check_id: str = Field(..., alias="CheckID")
    name: str = Field(..., alias="Name")
    status: str = Field(..., alias="Status")
    notes: str = Field("", alias="Notes")
    output: str = Field("", alias="Output")
    service_id: str = Field("", alias="ServiceID")
    service_name: str = Field("", alias="ServiceName")
    service_tags: list[str] | None = Field(None, alias="ServiceTags")
    check_type: str = Field("", alias="Type")
    namespace: str | None = Field(None, alias="Namespace")
    definition: HealthCheckDefinition | None = Field(None, alias="Definition")
    create_index: int = Field(0, alias="CreateIndex")
    modify_index: int = Field(0, alias="ModifyIndex")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def is_passing(self) -> bool:
        return self.status == "passing"
