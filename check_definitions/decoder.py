"""Decoder for check definition documents.

A check definition arrives as a parsed JSON/YAML tree. Keys may use the
primary dialect (``ScriptArgs``, ``DeregisterCriticalServiceAfter``, ...) or
the alternate snake_case dialect (``script_args``,
``deregister_critical_service_after``, ...), and durations may be literals
such as ``"10s"`` or raw nanosecond numbers. Decoding resolves both into a
single :class:`CheckDefinition`.

Decoding happens in two passes. The document is first parsed into a
primary-dialect overlay whose duration slots are left untyped, plus a small
overlay of alternate keys. The overlays are then merged and the duration
slots are normalized.
"""

import json
import math
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

from check_definitions.duration import MAX_DURATION, MIN_DURATION, parse_duration
from check_definitions.errors import MalformedValueError
from check_definitions.models.check_definition import CheckDefinition


class RawCheckDefinition(BaseModel):
    """Primary-dialect overlay, durations kept as they appear in the document."""

    id: str = Field("", alias="ID")
    name: str = Field("", alias="Name")
    notes: str = Field("", alias="Notes")
    service_id: str = Field("", alias="ServiceID")
    token: str = Field("", alias="Token")
    status: str = Field("", alias="Status")

    script_args: Optional[List[str]] = Field(None, alias="ScriptArgs")
    http: str = Field("", alias="HTTP")
    header: Optional[Dict[str, List[str]]] = Field(None, alias="Header")
    method: str = Field("", alias="Method")
    tcp: str = Field("", alias="TCP")
    interval: Any = Field(None, alias="Interval")
    docker_container_id: str = Field("", alias="DockerContainerID")
    shell: str = Field("", alias="Shell")
    grpc: str = Field("", alias="GRPC")
    grpc_use_tls: bool = Field(False, alias="GRPCUseTLS")
    tls_skip_verify: bool = Field(False, alias="TLSSkipVerify")
    alias_node: str = Field("", alias="AliasNode")
    alias_service: str = Field("", alias="AliasService")
    timeout: Any = Field(None, alias="Timeout")
    ttl: Any = Field(None, alias="TTL")
    success_before_passing: int = Field(0, alias="SuccessBeforePassing")
    failures_before_critical: int = Field(0, alias="FailuresBeforeCritical")
    deregister_critical_service_after: Any = Field(None, alias="DeregisterCriticalServiceAfter")
    output_max_size: int = Field(0, alias="OutputMaxSize")

    class Config:
        """Pydantic config."""

        extra = "ignore"
        strict = True


class CheckDefinitionAliases(BaseModel):
    """Alternate-dialect keys, consulted only when the primary value is absent."""

    args: Optional[List[str]] = Field(None, alias="args")
    script_args: Optional[List[str]] = Field(None, alias="script_args")
    deregister_critical_service_after: Any = Field(None, alias="deregister_critical_service_after")
    docker_container_id: str = Field("", alias="docker_container_id")
    tls_skip_verify: bool = Field(False, alias="tls_skip_verify")
    service_id: str = Field("", alias="service_id")

    class Config:
        """Pydantic config."""

        extra = "ignore"
        strict = True


DURATION_FIELDS = ("interval", "timeout", "ttl", "deregister_critical_service_after")

KNOWN_KEYS = frozenset(
    field.alias
    for model in (RawCheckDefinition, CheckDefinitionAliases)
    for field in model.model_fields.values()
)

_FOLDED_KEYS = {key.casefold(): key for key in KNOWN_KEYS}


def resolve_keys(document: Mapping[str, Any]) -> Dict[str, Any]:
    """Map document keys onto known key spellings.

    An exact key match always wins. Otherwise keys are matched
    case-insensitively and the last such spelling wins. Unknown keys and
    null values are dropped.

    Args:
        document: The raw document.

    Returns:
        A dictionary keyed by known key spellings.
    """
    exact: Dict[str, Any] = {}
    folded: Dict[str, Any] = {}

    for key, value in document.items():
        if value is None or not isinstance(key, str):
            continue
        if key in KNOWN_KEYS:
            exact[key] = value
            continue
        known = _FOLDED_KEYS.get(key.casefold())
        if known is not None:
            folded[known] = value

    folded.update(exact)
    return folded


def normalize_duration(field: str, raw: Any) -> int:
    """Normalize a raw duration slot to nanoseconds.

    Args:
        field: The document key the value came from, used in errors.
        raw: None, a duration literal, or a number of nanoseconds.

    Returns:
        int: The duration in nanoseconds, 0 when absent.

    Raises:
        MalformedValueError: If the literal does not parse or the value has another type.
    """
    if raw is None:
        return 0

    if isinstance(raw, str):
        try:
            return parse_duration(raw)
        except ValueError as e:
            raise MalformedValueError(field, raw, str(e)) from e

    # bool is an int subclass but never a duration
    if isinstance(raw, bool):
        raise MalformedValueError(field, raw, "expected a duration string or number")

    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        if not math.isfinite(raw):
            raise MalformedValueError(field, raw, "duration must be finite")
        value = int(raw)
    else:
        raise MalformedValueError(field, raw, "expected a duration string or number")

    if not MIN_DURATION <= value <= MAX_DURATION:
        raise MalformedValueError(field, raw, "duration out of range")
    return value


def _first_populated(*candidates: Optional[List[str]]) -> Optional[List[str]]:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None


def _validate(model, document: Dict[str, Any]):
    try:
        return model.model_validate(document)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        raise MalformedValueError(field, error.get("input"), error["msg"]) from e


def decode_check_definition(document: Mapping[str, Any]) -> CheckDefinition:
    """Decode a parsed check definition document.

    Args:
        document: A parsed JSON/YAML object in either key dialect.

    Returns:
        CheckDefinition: The canonical definition. The identifier is left
        empty when the document has none.

    Raises:
        MalformedValueError: On the first value that cannot be decoded.
    """
    if not isinstance(document, Mapping):
        raise MalformedValueError(None, document, "expected an object")

    resolved = resolve_keys(document)
    raw = _validate(RawCheckDefinition, resolved)
    aliases = _validate(CheckDefinitionAliases, resolved)

    values = raw.model_dump(exclude=set(DURATION_FIELDS))
    values["script_args"] = _first_populated(raw.script_args, aliases.args, aliases.script_args)
    if not values["docker_container_id"]:
        values["docker_container_id"] = aliases.docker_container_id
    if not values["service_id"]:
        values["service_id"] = aliases.service_id
    # Only a true alternate propagates, it never clears the primary flag
    if aliases.tls_skip_verify:
        values["tls_skip_verify"] = True

    raw_durations = {
        field: (RawCheckDefinition.model_fields[field].alias, getattr(raw, field))
        for field in DURATION_FIELDS
    }
    if raw.deregister_critical_service_after is None:
        raw_durations["deregister_critical_service_after"] = (
            "deregister_critical_service_after",
            aliases.deregister_critical_service_after,
        )

    for field, (key, raw_value) in raw_durations.items():
        values[field] = normalize_duration(key, raw_value)

    return CheckDefinition(**values)


def decode_check_definition_json(text: str) -> CheckDefinition:
    """Decode a check definition from JSON text.

    Raises:
        MalformedValueError: If the text is not valid JSON or a value cannot be decoded.
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedValueError(None, text, f"invalid JSON: {e}") from e
    return decode_check_definition(document)
