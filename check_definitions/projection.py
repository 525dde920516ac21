"""Views derived from a decoded check definition."""

from check_definitions.models.check_definition import CheckDefinition
from check_definitions.models.check_status import HealthStatus
from check_definitions.models.check_type import CheckType
from check_definitions.models.health_check import HealthCheck


def to_health_check(definition: CheckDefinition, node: str) -> HealthCheck:
    """Build the health status view of a check on a node.

    The status defaults to critical and the check id falls back to the
    check name. The definition itself is left untouched.

    Args:
        definition: The decoded check definition.
        node: The node owning the check.

    Returns:
        HealthCheck: The health view.
    """
    check_id = definition.id
    if not check_id and definition.name:
        check_id = definition.name

    return HealthCheck(
        node=node,
        check_id=check_id,
        name=definition.name,
        status=definition.status or HealthStatus.CRITICAL.value,
        notes=definition.notes,
        service_id=definition.service_id,
    )


def to_check_type(definition: CheckDefinition) -> CheckType:
    """Build the execution view of a check. No defaults are applied."""
    return CheckType(
        check_id=definition.id,
        name=definition.name,
        status=definition.status,
        notes=definition.notes,
        script_args=definition.script_args,
        alias_node=definition.alias_node,
        alias_service=definition.alias_service,
        http=definition.http,
        grpc=definition.grpc,
        grpc_use_tls=definition.grpc_use_tls,
        header=definition.header,
        method=definition.method,
        output_max_size=definition.output_max_size,
        tcp=definition.tcp,
        interval=definition.interval,
        docker_container_id=definition.docker_container_id,
        shell=definition.shell,
        tls_skip_verify=definition.tls_skip_verify,
        timeout=definition.timeout,
        ttl=definition.ttl,
        success_before_passing=definition.success_before_passing,
        failures_before_critical=definition.failures_before_critical,
        deregister_critical_service_after=definition.deregister_critical_service_after,
    )
