"""Check specification models."""

from typing import Dict, List, Optional

from pydantic import BaseModel


class CheckType(BaseModel):
    """How a check is executed, as consumed by a check runner."""

    check_id: str = ""
    name: str = ""
    status: str = ""
    notes: str = ""

    script_args: Optional[List[str]] = None
    alias_node: str = ""
    alias_service: str = ""
    http: str = ""
    grpc: str = ""
    grpc_use_tls: bool = False
    header: Optional[Dict[str, List[str]]] = None
    method: str = ""
    output_max_size: int = 0
    tcp: str = ""
    interval: int = 0
    docker_container_id: str = ""
    shell: str = ""
    tls_skip_verify: bool = False
    timeout: int = 0
    ttl: int = 0
    success_before_passing: int = 0
    failures_before_critical: int = 0
    deregister_critical_service_after: int = 0

    class Config:
        """Pydantic config."""

        extra = "ignore"
        frozen = True
