"""Canonical check definition model."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from check_definitions.models.check_kind import CheckKind


class CheckDefinition(BaseModel):
    """A decoded check definition with dialects resolved and durations in nanoseconds.

    Frozen only blocks reassigning fields. The script_args list and header
    dict are owned by the definition (never shared with the source document)
    but remain mutable containers; treat them as read-only.
    """

    id: str = Field("", alias="ID", description="The check identifier, may be empty")
    name: str = Field("", alias="Name", description="The human readable check name")
    notes: str = Field("", alias="Notes", description="Free text notes")
    service_id: str = Field(
        "", alias="ServiceID", description="The owning service, empty for node-level checks"
    )
    token: str = Field("", alias="Token", description="The ACL token")
    status: str = Field("", alias="Status", description="The initial status, empty means critical")

    script_args: Optional[List[str]] = Field(None, alias="ScriptArgs")
    http: str = Field("", alias="HTTP")
    header: Optional[Dict[str, List[str]]] = Field(None, alias="Header")
    method: str = Field("", alias="Method")
    tcp: str = Field("", alias="TCP")
    interval: int = Field(0, alias="Interval", description="The run interval in nanoseconds")
    docker_container_id: str = Field("", alias="DockerContainerID")
    shell: str = Field("", alias="Shell")
    grpc: str = Field("", alias="GRPC")
    grpc_use_tls: bool = Field(False, alias="GRPCUseTLS")
    tls_skip_verify: bool = Field(False, alias="TLSSkipVerify")
    alias_node: str = Field("", alias="AliasNode")
    alias_service: str = Field("", alias="AliasService")
    timeout: int = Field(0, alias="Timeout", description="The check timeout in nanoseconds")
    ttl: int = Field(0, alias="TTL", description="The TTL in nanoseconds")
    success_before_passing: int = Field(0, alias="SuccessBeforePassing")
    failures_before_critical: int = Field(0, alias="FailuresBeforeCritical")
    deregister_critical_service_after: int = Field(
        0,
        alias="DeregisterCriticalServiceAfter",
        description="Deregister the service after being critical this long, in nanoseconds",
    )
    output_max_size: int = Field(0, alias="OutputMaxSize", description="Output cap in bytes")

    class Config:
        """Pydantic config."""

        extra = "ignore"
        frozen = True
        populate_by_name = True

    def to_document(self) -> Dict[str, Any]:
        """Serialize to a primary-dialect document.

        Durations are written as integer nanoseconds, so decoding the
        result yields an equal definition.

        Returns:
            A dictionary keyed by primary key names.
        """
        return self.model_dump(by_alias=True, exclude_none=True)

    def kinds(self) -> List[CheckKind]:
        """Get the check kinds whose fields are populated."""
        kinds = []
        if self.script_args:
            kinds.append(CheckKind.DOCKER if self.docker_container_id else CheckKind.SCRIPT)
        if self.http:
            kinds.append(CheckKind.HTTP)
        if self.tcp:
            kinds.append(CheckKind.TCP)
        if self.grpc:
            kinds.append(CheckKind.GRPC)
        if self.ttl > 0:
            kinds.append(CheckKind.TTL)
        if self.alias_node or self.alias_service:
            kinds.append(CheckKind.ALIAS)
        return kinds
