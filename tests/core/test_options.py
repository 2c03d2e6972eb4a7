"""Tests for `dagfdw.core.options` schema application rules."""

import pytest

from dagfdw.core.errors import (
    InvalidOptionValue,
    MissingRequiredOption,
    NoOptionsAccepted,
    UnknownOption,
    UnsupportedRelationName,
)
from dagfdw.core.grammar import ErrorKind
from dagfdw.core.options import (
    EMPTY_SCHEMA,
    OptionDescriptor,
    OptionSchema,
    ParsedOptions,
    RawOption,
    apply_options,
    normalize_raw_options,
)
from dagfdw.core.parsers import POSITIVE_INT, RELATION_NAME
from dagfdw.core.relations import EDGES_DESC

NODE_ID_SCHEMA = OptionSchema((OptionDescriptor("node_id_len", POSITIVE_INT, required=True),))

MIXED_SCHEMA = OptionSchema(
    (
        OptionDescriptor("node_id_len", POSITIVE_INT, required=True),
        OptionDescriptor("relation", RELATION_NAME, required=True),
        OptionDescriptor("batch_size", POSITIVE_INT),
    )
)


def test_valid_value_is_parsed() -> None:
    parsed = apply_options(NODE_ID_SCHEMA, [RawOption("node_id_len", "5")])
    assert isinstance(parsed, ParsedOptions)
    assert parsed["node_id_len"] == 5
    assert parsed.seen == frozenset({"node_id_len"})


@pytest.mark.parametrize("raw", ["-5", "0", "abc", "5x"])
def test_invalid_values_raise(raw: str) -> None:
    with pytest.raises(InvalidOptionValue) as ei:
        apply_options(NODE_ID_SCHEMA, [("node_id_len", raw)])
    assert ei.value.kind is ErrorKind.INVALID_OPTION_VALUE
    assert ei.value.option_name == "node_id_len"
    assert ei.value.raw_value == raw
    assert str(ei.value) == f'invalid value for option node_id_len: "{raw}"'


def test_missing_required_option() -> None:
    with pytest.raises(MissingRequiredOption) as ei:
        apply_options(NODE_ID_SCHEMA, [])
    assert ei.value.option_name == "node_id_len"
    assert str(ei.value) == "No value for required option node_id_len"


def test_missing_reports_first_in_schema_order() -> None:
    with pytest.raises(MissingRequiredOption) as ei:
        apply_options(MIXED_SCHEMA, {"batch_size": "10"})
    assert ei.value.option_name == "node_id_len"

    with pytest.raises(MissingRequiredOption) as ei:
        apply_options(MIXED_SCHEMA, {"node_id_len": "8"})
    assert ei.value.option_name == "relation"


def test_unknown_option_with_suggestion() -> None:
    with pytest.raises(UnknownOption) as ei:
        apply_options(NODE_ID_SCHEMA, [("noide_id_len", "5")])
    assert ei.value.option_name == "noide_id_len"
    assert ei.value.suggestion == "node_id_len"
    assert ei.value.hint == 'Perhaps you meant "node_id_len".'


def test_unknown_option_without_suggestion() -> None:
    with pytest.raises(UnknownOption) as ei:
        apply_options(NODE_ID_SCHEMA, [("zzzzzzzzzz", "5")])
    assert ei.value.suggestion is None
    assert ei.value.hint is None


def test_suggestion_distance_is_configurable() -> None:
    with pytest.raises(UnknownOption) as ei:
        apply_options(NODE_ID_SCHEMA, [("noide_id_len", "5")], max_distance=0)
    assert ei.value.suggestion is None


def test_empty_schema_rejects_any_option() -> None:
    with pytest.raises(NoOptionsAccepted) as ei:
        apply_options(EMPTY_SCHEMA, [("anything", "1")])
    assert str(ei.value) == "No options are accepted in this context"


def test_empty_schema_accepts_no_options() -> None:
    assert apply_options(EMPTY_SCHEMA, []).values == {}
    assert apply_options(EMPTY_SCHEMA, None).values == {}


def test_first_failure_wins_in_supplied_order() -> None:
    # unknown option comes before the bad value, so it is reported
    with pytest.raises(UnknownOption):
        apply_options(MIXED_SCHEMA, [("relaton", "edges"), ("node_id_len", "x")])
    with pytest.raises(InvalidOptionValue):
        apply_options(MIXED_SCHEMA, [("node_id_len", "x"), ("relaton", "edges")])


def test_repeated_option_overwrites() -> None:
    parsed = apply_options(NODE_ID_SCHEMA, [("node_id_len", "4"), ("node_id_len", "8")])
    assert parsed["node_id_len"] == 8


def test_optional_option_absent_from_values() -> None:
    parsed = apply_options(MIXED_SCHEMA, {"node_id_len": "8", "relation": "edges"})
    assert parsed.get("batch_size") is None
    assert "batch_size" not in parsed.seen
    assert parsed["relation"] is EDGES_DESC


def test_relation_value_error_is_unsupported_relation() -> None:
    with pytest.raises(UnsupportedRelationName) as ei:
        apply_options(MIXED_SCHEMA, {"node_id_len": "8", "relation": "nodes"})
    assert ei.value.kind is ErrorKind.UNSUPPORTED_RELATION_NAME
    assert isinstance(ei.value, InvalidOptionValue)
    assert ei.value.relation_name == "nodes"


def test_schema_is_reusable_after_failure() -> None:
    with pytest.raises(InvalidOptionValue):
        apply_options(NODE_ID_SCHEMA, [("node_id_len", "0")])
    with pytest.raises(MissingRequiredOption):
        apply_options(NODE_ID_SCHEMA, [])
    assert apply_options(NODE_ID_SCHEMA, [("node_id_len", "3")])["node_id_len"] == 3


def test_duplicate_descriptor_names_rejected() -> None:
    with pytest.raises(ValueError, match="duplicate option name"):
        OptionSchema(
            (
                OptionDescriptor("node_id_len", POSITIVE_INT),
                OptionDescriptor("node_id_len", POSITIVE_INT, required=True),
            )
        )


def test_normalize_raw_options_shapes() -> None:
    expected = [RawOption("a", "1"), RawOption("b", "2")]
    assert normalize_raw_options({"a": "1", "b": "2"}) == expected
    assert normalize_raw_options([("a", "1"), RawOption("b", "2")]) == expected
    assert normalize_raw_options(None) == []
