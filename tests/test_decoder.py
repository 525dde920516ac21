"""
Unit tests for the check definition decoder.

Covers key dialect resolution, duration normalization, strict leaf types
and round-trip stability of decoded definitions.
"""

import pytest
from pydantic import ValidationError

from check_definitions.decoder import (
    decode_check_definition,
    decode_check_definition_json,
    normalize_duration,
    resolve_keys,
)
from check_definitions.duration import MILLISECOND, MINUTE, SECOND
from check_definitions.errors import MalformedValueError
from check_definitions.models.check_definition import CheckDefinition
from check_definitions.models.check_kind import CheckKind


def primary_document():
    return {
        "ID": "web-check",
        "Name": "web",
        "ScriptArgs": ["/bin/check", "--fast"],
        "DockerContainerID": "f972c95ebf0e",
        "Shell": "/bin/sh",
        "TLSSkipVerify": True,
        "ServiceID": "web-1",
        "Interval": "10s",
        "DeregisterCriticalServiceAfter": "90m",
    }


def alternate_document():
    return {
        "ID": "web-check",
        "Name": "web",
        "script_args": ["/bin/check", "--fast"],
        "docker_container_id": "f972c95ebf0e",
        "Shell": "/bin/sh",
        "tls_skip_verify": True,
        "service_id": "web-1",
        "Interval": "10s",
        "deregister_critical_service_after": "90m",
    }


class TestDecodeBasics:
    """Test cases for plain primary-dialect documents."""

    def test_empty_document(self):
        """Test that an empty document decodes to the zero definition."""
        definition = decode_check_definition({})

        assert definition == CheckDefinition()
        assert definition.id == ""
        assert definition.script_args is None
        assert definition.interval == 0

    def test_all_fields(self):
        """Test that every primary key lands in its field."""
        definition = decode_check_definition(
            {
                "ID": "api",
                "Name": "API",
                "Notes": "checks the api",
                "ServiceID": "api-1",
                "Token": "secret",
                "Status": "warning",
                "HTTP": "https://api.local/health",
                "Header": {"X-Trace": ["1", "2"]},
                "Method": "POST",
                "TCP": "api.local:443",
                "GRPC": "api.local:9090/health",
                "GRPCUseTLS": True,
                "AliasNode": "node-a",
                "AliasService": "api",
                "Interval": "15s",
                "Timeout": "2s",
                "TTL": "1m",
                "SuccessBeforePassing": 2,
                "FailuresBeforeCritical": 3,
                "OutputMaxSize": 4096,
            }
        )

        assert definition.id == "api"
        assert definition.notes == "checks the api"
        assert definition.service_id == "api-1"
        assert definition.token == "secret"
        assert definition.status == "warning"
        assert definition.header == {"X-Trace": ["1", "2"]}
        assert definition.method == "POST"
        assert definition.grpc_use_tls is True
        assert definition.alias_node == "node-a"
        assert definition.interval == 15 * SECOND
        assert definition.timeout == 2 * SECOND
        assert definition.ttl == MINUTE
        assert definition.success_before_passing == 2
        assert definition.failures_before_critical == 3
        assert definition.output_max_size == 4096

    def test_identifier_is_not_defaulted(self):
        """Test that an empty id stays empty after decoding."""
        definition = decode_check_definition({"Name": "web-check"})

        assert definition.id == ""
        assert definition.name == "web-check"

    def test_unknown_keys_ignored(self):
        """Test that keys outside both dialects are ignored."""
        definition = decode_check_definition({"Name": "web", "Frobnicate": 1, "nested": {"a": 1}})
        assert definition.name == "web"

    def test_null_values_are_absent(self):
        """Test that null values leave fields at their zero value."""
        definition = decode_check_definition({"Name": None, "Interval": None, "ScriptArgs": None})

        assert definition.name == ""
        assert definition.interval == 0
        assert definition.script_args is None

    def test_definition_is_frozen(self):
        """Test that a decoded definition cannot be reassigned."""
        definition = decode_check_definition({"Name": "web"})
        with pytest.raises(ValidationError):
            definition.name = "other"

    def test_containers_not_shared_with_document(self):
        """Test that changing the source document after decoding leaves the definition intact."""
        document = {"ScriptArgs": ["a"], "Header": {"Accept": ["text/plain"]}}
        definition = decode_check_definition(document)

        document["ScriptArgs"].append("b")
        document["Header"]["Accept"].append("application/json")

        assert definition.script_args == ["a"]
        assert definition.header == {"Accept": ["text/plain"]}


class TestKeyResolution:
    """Test cases for case-insensitive key matching."""

    def test_scenario_lowercase_and_exact_keys(self):
        """Test mixed spellings, alternate script args and a literal interval."""
        definition = decode_check_definition(
            {
                "Name": "web",
                "http": "",
                "HTTP": "http://x",
                "interval": "10s",
                "script_args": ["a", "b"],
            }
        )

        assert definition.script_args == ["a", "b"]
        assert definition.interval == 10 * SECOND
        assert definition.http == "http://x"

    def test_exact_key_wins_regardless_of_order(self):
        """Test that an exact spelling beats a folded one in any order."""
        definition = decode_check_definition({"HTTP": "http://x", "http": ""})
        assert definition.http == "http://x"

    def test_folded_keys(self):
        """Test that case variants of primary keys are accepted."""
        definition = decode_check_definition({"name": "web", "ttl": "30s", "Grpcusetls": True})

        assert definition.name == "web"
        assert definition.ttl == 30 * SECOND
        assert definition.grpc_use_tls is True

    def test_resolve_keys_drops_unknown_and_null(self):
        """Test the key resolution table directly."""
        resolved = resolve_keys({"name": "web", "bogus": 1, "TTL": None, "Args": ["x"]})
        assert resolved == {"Name": "web", "args": ["x"]}


class TestDialectResolution:
    """Test cases for alternate key spellings."""

    def test_dialect_transparency(self):
        """Test that both dialects decode to the same definition."""
        assert decode_check_definition(primary_document()) == decode_check_definition(
            alternate_document()
        )

    def test_args_before_script_args(self):
        """Test that 'args' takes priority over 'script_args'."""
        definition = decode_check_definition({"args": ["first"], "script_args": ["second"]})
        assert definition.script_args == ["first"]

    def test_primary_script_args_win(self):
        """Test that alternates never replace primary script args."""
        definition = decode_check_definition(
            {"ScriptArgs": ["primary"], "args": ["first"], "script_args": ["second"]}
        )
        assert definition.script_args == ["primary"]

    def test_explicit_empty_script_args_kept(self):
        """Test that an explicit empty primary list is not replaced."""
        definition = decode_check_definition({"ScriptArgs": [], "args": ["first"]})
        assert definition.script_args == []

    @pytest.mark.parametrize(
        "primary_key,alternate_key,attribute",
        [
            ("DockerContainerID", "docker_container_id", "docker_container_id"),
            ("ServiceID", "service_id", "service_id"),
        ],
    )
    def test_string_alternates(self, primary_key, alternate_key, attribute):
        """Test that string alternates fill only empty primaries."""
        filled = decode_check_definition({alternate_key: "alt"})
        kept = decode_check_definition({primary_key: "primary", alternate_key: "alt"})
        empty_primary = decode_check_definition({primary_key: "", alternate_key: "alt"})

        assert getattr(filled, attribute) == "alt"
        assert getattr(kept, attribute) == "primary"
        assert getattr(empty_primary, attribute) == "alt"

    @pytest.mark.parametrize(
        "primary,alternate,expected",
        [
            (False, True, True),
            (True, False, True),
            (False, False, False),
            (True, True, True),
        ],
    )
    def test_tls_skip_verify_only_true_alternate_propagates(self, primary, alternate, expected):
        """Test the one-directional merge of the TLS skip verify flag.

        An explicit false alternate must never clear a true primary.
        """
        definition = decode_check_definition(
            {"TLSSkipVerify": primary, "tls_skip_verify": alternate}
        )
        assert definition.tls_skip_verify is expected

    def test_numeric_alternate_deregister(self):
        """Test a numeric alternate deregister duration is taken verbatim."""
        definition = decode_check_definition({"deregister_critical_service_after": 5000000000})
        assert definition.deregister_critical_service_after == 5_000_000_000

    def test_primary_deregister_wins(self):
        """Test the primary deregister duration beats the alternate."""
        definition = decode_check_definition(
            {"DeregisterCriticalServiceAfter": "1m", "deregister_critical_service_after": "1h"}
        )
        assert definition.deregister_critical_service_after == MINUTE


class TestDurationNormalization:
    """Test cases for duration fields."""

    @pytest.mark.parametrize(
        "key,attribute",
        [
            ("Interval", "interval"),
            ("Timeout", "timeout"),
            ("TTL", "ttl"),
            ("DeregisterCriticalServiceAfter", "deregister_critical_service_after"),
        ],
    )
    def test_literal_and_numeric_forms(self, key, attribute):
        """Test literal strings and raw nanosecond numbers for every duration field."""
        assert getattr(decode_check_definition({key: "5s"}), attribute) == 5 * SECOND
        assert getattr(decode_check_definition({key: 1234}), attribute) == 1234
        assert getattr(decode_check_definition({key: 2.9}), attribute) == 2
        assert getattr(decode_check_definition({}), attribute) == 0

    @pytest.mark.parametrize(
        "key", ["Interval", "Timeout", "TTL", "DeregisterCriticalServiceAfter"]
    )
    def test_malformed_literal(self, key):
        """Test that a malformed literal names the field and value."""
        with pytest.raises(MalformedValueError) as exc_info:
            decode_check_definition({key: "bogus"})

        assert exc_info.value.field == key
        assert exc_info.value.value == "bogus"
        assert "bogus" in str(exc_info.value)

    def test_each_field_reads_its_own_slot(self):
        """Test that interval and timeout do not borrow the TTL value."""
        definition = decode_check_definition({"Interval": "10s", "Timeout": 3000, "TTL": "1m"})

        assert definition.interval == 10 * SECOND
        assert definition.timeout == 3000
        assert definition.ttl == MINUTE

    @pytest.mark.parametrize("value", [True, ["10s"], {"seconds": 10}])
    def test_other_types_rejected(self, value):
        """Test that non-string, non-numeric durations are rejected."""
        with pytest.raises(MalformedValueError):
            decode_check_definition({"Interval": value})

    def test_alternate_deregister_error_names_alternate_key(self):
        """Test that the error reports the key the bad value came from."""
        with pytest.raises(MalformedValueError) as exc_info:
            decode_check_definition({"deregister_critical_service_after": "later"})
        assert exc_info.value.field == "deregister_critical_service_after"

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), 1e19])
    def test_numbers_outside_range(self, value):
        """Test that non-finite or oversized numbers are rejected."""
        with pytest.raises(MalformedValueError):
            normalize_duration("Interval", value)

    def test_sub_second_literal(self):
        """Test a fractional literal."""
        assert decode_check_definition({"Timeout": "1.5s"}).timeout == 1500 * MILLISECOND


class TestStrictTypes:
    """Test cases for leaf type checking."""

    @pytest.mark.parametrize(
        "document,field",
        [
            ({"Name": 5}, "Name"),
            ({"ScriptArgs": "/bin/check"}, "ScriptArgs"),
            ({"GRPCUseTLS": "true"}, "GRPCUseTLS"),
            ({"OutputMaxSize": "4096"}, "OutputMaxSize"),
            ({"tls_skip_verify": "yes"}, "tls_skip_verify"),
            ({"args": [1, 2]}, "args.0"),
        ],
    )
    def test_type_mismatch(self, document, field):
        """Test that wrong leaf types are reported as malformed values."""
        with pytest.raises(MalformedValueError) as exc_info:
            decode_check_definition(document)
        assert exc_info.value.field == field

    @pytest.mark.parametrize("document", [[], "Name", 5])
    def test_non_object_document(self, document):
        """Test that the document itself must be an object."""
        with pytest.raises(MalformedValueError) as exc_info:
            decode_check_definition(document)
        assert exc_info.value.field is None


class TestRoundTrip:
    """Test cases for serializing and re-decoding definitions."""

    def test_round_trip_is_stable(self):
        """Test that decode(to_document(decode(doc))) equals decode(doc)."""
        definition = decode_check_definition(alternate_document())
        assert decode_check_definition(definition.to_document()) == definition

    def test_document_uses_primary_keys_and_nanoseconds(self):
        """Test the serialized document shape."""
        document = decode_check_definition(alternate_document()).to_document()

        assert document["ScriptArgs"] == ["/bin/check", "--fast"]
        assert document["ServiceID"] == "web-1"
        assert document["Interval"] == 10 * SECOND
        assert "script_args" not in document

    def test_json_text(self):
        """Test decoding straight from JSON text."""
        definition = decode_check_definition_json('{"Name": "web", "Interval": 10000000000}')
        assert definition.interval == 10 * SECOND

    def test_invalid_json_text(self):
        """Test that invalid JSON is a malformed value."""
        with pytest.raises(MalformedValueError):
            decode_check_definition_json("{not json")


class TestKinds:
    """Test cases for check kind detection."""

    def test_kinds(self):
        """Test that populated kind fields are reported."""
        assert decode_check_definition({"args": ["x"]}).kinds() == [CheckKind.SCRIPT]
        assert decode_check_definition(primary_document()).kinds() == [CheckKind.DOCKER]
        assert decode_check_definition({"HTTP": "http://x", "TTL": "5s"}).kinds() == [
            CheckKind.HTTP,
            CheckKind.TTL,
        ]
        assert decode_check_definition({"AliasService": "web"}).kinds() == [CheckKind.ALIAS]
        assert decode_check_definition({}).kinds() == []
