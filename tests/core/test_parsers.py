import pytest

from dagfdw.core.errors import InvalidOptionValue, UnsupportedRelationName
from dagfdw.core.parsers import (
    POSITIVE_INT,
    RELATION_NAME,
    OptionValueError,
    RelationNameError,
    ValueParser,
)
from dagfdw.core.relations import EDGES_DESC


@pytest.mark.parametrize(("raw", "value"), [("5", 5), ("1", 1), ("+7", 7), ("0016", 16)])
def test_positive_int_accepts(raw: str, value: int) -> None:
    assert POSITIVE_INT.parse(raw) == value


@pytest.mark.parametrize(
    "raw", ["-5", "0", "abc", "5x", "", " 5", "5 ", "5.0", "1e3", "٥", "99999999999"]
)
def test_positive_int_rejects(raw: str) -> None:
    with pytest.raises(OptionValueError):
        POSITIVE_INT.parse(raw)


def test_relation_name_returns_registry_object() -> None:
    assert RELATION_NAME.parse("edges") is EDGES_DESC


@pytest.mark.parametrize("raw", ["nodes", "Edges", "edges ", ""])
def test_relation_name_rejects(raw: str) -> None:
    with pytest.raises(RelationNameError, match="unsupported relation name"):
        RELATION_NAME.parse(raw)


def test_parsers_satisfy_protocol() -> None:
    assert isinstance(POSITIVE_INT, ValueParser)
    assert isinstance(RELATION_NAME, ValueParser)


def test_failures_map_to_option_errors() -> None:
    err = OptionValueError("expected a positive integer").to_error("node_id_len", "0")
    assert type(err) is InvalidOptionValue
    assert err.hint == "expected a positive integer"

    rel_err = RelationNameError().to_error("relation", "nodes")
    assert isinstance(rel_err, UnsupportedRelationName)
    assert rel_err.relation_name == "nodes"
