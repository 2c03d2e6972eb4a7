"""
Structural validation of a foreign table against its relation shape.

Purpose
- Check that a table's physical columns implement the relation its TableConfig names.

Checks performed (positional, fail-fast)
- Walk expected and physical columns in lock step while both have entries:
  - the physical type must equal the expected type (ColumnTypeMismatch);
  - identifier (VARCHAR) columns must declare exactly
    ``2 * node_id_len + format_overhead`` (ColumnLengthMismatch).
- After the walk, any leftover on either side is a ColumnCountMismatch.

Notes
- Column names are never compared; they only label errors.
- No IO: the physical column list comes from the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .config import ServerConfig, TableConfig
from .constants import HEX_DIGITS_PER_BYTE, VARHDRSZ
from .errors import ColumnCountMismatch, ColumnLengthMismatch, ColumnTypeMismatch
from .grammar import ColumnType
from .schema import PhysicalColumn

__all__ = [
    "expected_identifier_length",
    "validate_table",
]

logger = logging.getLogger(__name__)


def expected_identifier_length(server: ServerConfig, format_overhead: int = VARHDRSZ) -> int:
    """
    Declared length required for identifier columns of tables on ``server``.

    Args:
        server (ServerConfig): Resolved server.
        format_overhead (int): Fixed header the host adds to declared lengths.

    Returns:
        int: ``2 * node_id_len + format_overhead``.

    Examples:
        >>> expected_identifier_length(ServerConfig(node_id_len=16))
        36
    """
    return HEX_DIGITS_PER_BYTE * server.node_id_len + format_overhead


def _coerce_columns(columns: Iterable[PhysicalColumn | Mapping[str, Any]]) -> list[PhysicalColumn]:
    return [
        c if isinstance(c, PhysicalColumn) else PhysicalColumn.model_validate(c) for c in columns
    ]


def _check_column(
    table: TableConfig,
    index: int,
    expected: ColumnType,
    col: PhysicalColumn,
    id_len: int,
    table_name: str | None,
) -> None:
    rel_name = table.relation.name
    if col.type_tag != expected:
        raise ColumnTypeMismatch(
            rel_name, index, col.name, expected, col.type_tag, table_name=table_name
        )
    if expected.is_identifier and col.declared_max_length != id_len:
        raise ColumnLengthMismatch(
            rel_name, index, col.name, id_len, col.declared_max_length, table_name=table_name
        )


def validate_table(
    table: TableConfig,
    physical_columns: Iterable[PhysicalColumn | Mapping[str, Any]],
    *,
    format_overhead: int = VARHDRSZ,
    table_name: str | None = None,
) -> None:
    """
    Validate a table's physical columns against its relation shape.

    Args:
        table (TableConfig): Resolved table configuration.
        physical_columns: Columns of the real table in catalog order (PhysicalColumn
            instances or mappings accepted by PhysicalColumn).
        format_overhead (int): Fixed header included in declared identifier lengths.
        table_name (str | None): Name of the real table, used in error messages.

    Raises:
        ColumnTypeMismatch: If a column has the wrong type for its position.
        ColumnLengthMismatch: If an identifier column has the wrong declared length.
        ColumnCountMismatch: If the table has more or fewer columns than the relation.
    """
    columns = _coerce_columns(physical_columns)
    expected = table.relation.expected_columns
    id_len = expected_identifier_length(table.server, format_overhead)

    for index, (exp, col) in enumerate(zip(expected, columns)):
        _check_column(table, index, exp, col, id_len, table_name)

    if len(expected) != len(columns):
        raise ColumnCountMismatch(
            table.relation.name, len(expected), len(columns), table_name=table_name
        )
    logger.debug(
        "table %s matches relation %s (%d columns)",
        table_name or "<unnamed>",
        table.relation.name,
        len(columns),
    )
