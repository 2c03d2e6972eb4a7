"""Tests for server/table resolution in `dagfdw.core.config`."""

import itertools

import pytest
from pydantic import ValidationError

from dagfdw.core.config import (
    SERVER_SCHEMA,
    TABLE_SCHEMA,
    ServerConfig,
    TableConfig,
    parse_table_options,
    resolve_server,
    resolve_table,
)
from dagfdw.core.errors import (
    InvalidOptionValue,
    MissingRequiredOption,
    UnknownOption,
    UnsupportedRelationName,
)
from dagfdw.core.options import OptionDescriptor, OptionSchema, apply_options
from dagfdw.core.parsers import POSITIVE_INT, RELATION_NAME
from dagfdw.core.relations import EDGES_DESC


def test_schemas_declare_required_options() -> None:
    assert SERVER_SCHEMA.names == ("node_id_len",)
    assert TABLE_SCHEMA.names == ("relation",)
    assert all(d.required for d in SERVER_SCHEMA)
    assert all(d.required for d in TABLE_SCHEMA)


def test_resolve_server() -> None:
    server = resolve_server({"node_id_len": "16"})
    assert server == ServerConfig(node_id_len=16)


def test_resolve_server_errors() -> None:
    with pytest.raises(MissingRequiredOption):
        resolve_server({})
    with pytest.raises(InvalidOptionValue):
        resolve_server({"node_id_len": "0"})
    with pytest.raises(UnknownOption) as ei:
        resolve_server({"node_id_length": "16"})
    assert ei.value.suggestion == "node_id_len"


def test_resolve_table_references_registry_entry() -> None:
    server = resolve_server({"node_id_len": "16"})
    table = resolve_table({"relation": "edges"}, server)
    assert isinstance(table, TableConfig)
    assert table.server is server
    assert table.relation is EDGES_DESC


def test_resolve_table_unknown_relation() -> None:
    server = ServerConfig(node_id_len=16)
    with pytest.raises(UnsupportedRelationName):
        resolve_table({"relation": "nodes"}, server)


def test_parse_table_options_without_server() -> None:
    assert parse_table_options([("relation", "edges")]) is EDGES_DESC
    with pytest.raises(MissingRequiredOption):
        parse_table_options(None)


def test_server_config_is_validated_and_frozen() -> None:
    with pytest.raises(ValidationError):
        ServerConfig(node_id_len=0)
    with pytest.raises(ValidationError):
        ServerConfig(node_id_len=16, extra=1)  # type: ignore[call-arg]
    server = ServerConfig(node_id_len=16)
    with pytest.raises(ValidationError):
        server.node_id_len = 8  # type: ignore[misc]


def test_resolution_is_order_independent() -> None:
    schema = OptionSchema(
        (
            OptionDescriptor("node_id_len", POSITIVE_INT, required=True),
            OptionDescriptor("relation", RELATION_NAME, required=True),
            OptionDescriptor("batch_size", POSITIVE_INT),
        )
    )
    raws = [("node_id_len", "16"), ("relation", "edges"), ("batch_size", "100")]
    results = [dict(apply_options(schema, list(p)).values) for p in itertools.permutations(raws)]
    assert all(r == results[0] for r in results)
    assert results[0]["relation"] is EDGES_DESC


def test_fresh_configs_per_call() -> None:
    a = resolve_server({"node_id_len": "16"})
    b = resolve_server({"node_id_len": "16"})
    assert a == b
    assert a is not b
