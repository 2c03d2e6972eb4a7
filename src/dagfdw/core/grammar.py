"""
Canonical dagfdw enumerations and naming helpers.

Defines the closed set of physical column types the connector recognizes, the catalog
object kinds that carry options, and the stable error kinds reported to the host.

Design principles
-----------------
1) One naming standard:
   - Enum classes: PascalCase
   - Enum member names: UPPER_SNAKE (Python constants)
   - Enum serialized values (catalog/CLI/definition files): lower_snake
   - Option names and relation names: lower_snake

2) Closed sets:
   - ColumnType lists only the host types the connector can compare against.
     Relation descriptors in ``dagfdw.core.relations`` are built from it.
   - Identifier columns are VARCHAR; their declared length is derived from the
     server's ``node_id_len`` (see ``dagfdw.core.validate``).

Host type mapping
-----------------
| ColumnType | host type name        | host type oid |
|------------|-----------------------|---------------|
| varchar    | character varying     | 1043          |
| text       | text                  | 25            |
| int2       | smallint              | 21            |
| int4       | integer               | 23            |
| int8       | bigint                | 20            |
| bool       | boolean               | 16            |
| float8     | double precision      | 701           |

Examples
--------
>>> from dagfdw.core.grammar import (
...     column_type_from_value,
...     object_kind_from_value,
...     ColumnType,
... )
>>> column_type_from_value("VARCHAR") is ColumnType.VARCHAR
True
>>> object_kind_from_value("server")
<ObjectKind.SERVER: 'server'>
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Final

from .constants import MAX_RELATION_COLUMNS

__all__ = [
    "ColumnType",
    "ObjectKind",
    "ErrorKind",
    "RelationDescriptor",
    "is_lower_snake",
    "assert_lower_snake",
    "column_type_from_value",
    "object_kind_from_value",
    "ensure_all_enum_values_lower_snake",
]


# ============================================================================
# COLUMN TYPES
# ============================================================================


class ColumnType(Enum):
    """
    Physical column types recognized in relation shapes and table layouts.
    """

    VARCHAR = "varchar"
    TEXT = "text"
    INT2 = "int2"
    INT4 = "int4"
    INT8 = "int8"
    BOOL = "bool"
    FLOAT8 = "float8"

    @property
    def oid(self) -> int:
        """Host type oid for this column type."""
        return _TYPE_OIDS[self]

    @property
    def is_identifier(self) -> bool:
        """True for the variable-length string type used to store node IDs."""
        return self is ColumnType.VARCHAR


_TYPE_OIDS: Final[dict[ColumnType, int]] = {
    ColumnType.VARCHAR: 1043,
    ColumnType.TEXT: 25,
    ColumnType.INT2: 21,
    ColumnType.INT4: 23,
    ColumnType.INT8: 20,
    ColumnType.BOOL: 16,
    ColumnType.FLOAT8: 701,
}

# Host spellings accepted on input, normalized to ColumnType values.
_TYPE_ALIASES: Final[dict[str, str]] = {
    "character varying": "varchar",
    "smallint": "int2",
    "integer": "int4",
    "int": "int4",
    "bigint": "int8",
    "boolean": "bool",
    "double precision": "float8",
}


# ============================================================================
# CATALOG OBJECT KINDS
# ============================================================================


class ObjectKind(Enum):
    """
    Catalog objects the host may attach connector options to.
    """

    FOREIGN_DATA_WRAPPER = "foreign_data_wrapper"
    SERVER = "server"
    USER_MAPPING = "user_mapping"
    FOREIGN_TABLE = "foreign_table"


# ============================================================================
# ERROR KINDS
# ============================================================================


class ErrorKind(Enum):
    """
    Stable codes for validation failures. Values are lower_snake.

    The ``sqlstate`` property gives the host error class each kind is reported with.
    """

    NO_OPTIONS_ACCEPTED = "no_options_accepted"
    INVALID_OPTION_VALUE = "invalid_option_value"
    UNKNOWN_OPTION = "unknown_option"
    MISSING_REQUIRED_OPTION = "missing_required_option"
    UNSUPPORTED_RELATION_NAME = "unsupported_relation_name"
    UNSUPPORTED_OBJECT_KIND = "unsupported_object_kind"
    COLUMN_TYPE_MISMATCH = "column_type_mismatch"
    COLUMN_LENGTH_MISMATCH = "column_length_mismatch"
    COLUMN_COUNT_MISMATCH = "column_count_mismatch"

    @property
    def sqlstate(self) -> str:
        return _SQLSTATES[self]


_SQLSTATES: Final[dict[ErrorKind, str]] = {
    ErrorKind.NO_OPTIONS_ACCEPTED: "HV00D",
    ErrorKind.INVALID_OPTION_VALUE: "42601",
    ErrorKind.UNKNOWN_OPTION: "HV00D",
    ErrorKind.MISSING_REQUIRED_OPTION: "HV00J",
    ErrorKind.UNSUPPORTED_RELATION_NAME: "42601",
    ErrorKind.UNSUPPORTED_OBJECT_KIND: "HV000",
    ErrorKind.COLUMN_TYPE_MISMATCH: "HV000",
    ErrorKind.COLUMN_LENGTH_MISMATCH: "HV000",
    ErrorKind.COLUMN_COUNT_MISMATCH: "HV000",
}


# ============================================================================
# RELATION SHAPES
# ============================================================================


@dataclass(frozen=True)
class RelationDescriptor:
    """
    Frozen descriptor for a relation the connector can serve.

    Attributes:
        name (str): Relation name as given in the ``relation`` table option (lower_snake).
        expected_columns (tuple[ColumnType, ...]): Column types in positional order.
            VARCHAR entries are identifier columns whose declared length must match
            the server's node ID length.

    Raises:
        ValueError: If the name is not lower_snake, no columns are declared, or more
            than MAX_RELATION_COLUMNS are declared.

    Examples:
        >>> RelationDescriptor("edges", (ColumnType.VARCHAR, ColumnType.VARCHAR)).column_count
        2
    """

    name: str
    expected_columns: tuple[ColumnType, ...]

    def __post_init__(self) -> None:
        assert_lower_snake(self.name, "relation name")
        if not self.expected_columns:
            raise ValueError(f"relation {self.name!r} declares no columns")
        if len(self.expected_columns) > MAX_RELATION_COLUMNS:
            raise ValueError(
                f"relation {self.name!r} declares {len(self.expected_columns)} columns "
                f"(max {MAX_RELATION_COLUMNS})"
            )

    @property
    def column_count(self) -> int:
        return len(self.expected_columns)


# ============================================================================
# Helpers & Validators (zero I/O)
# ============================================================================

_LOWER_SNAKE_RE: Final[re.Pattern[str]] = re.compile(r"^[a-z0-9]+(?:_[a-z0-9]+)*$")


def is_lower_snake(value: str) -> bool:
    """
    Check whether a string is lower_snake.

    Args:
      value (str): Candidate string to validate.

    Returns:
      bool: True if value matches lower_snake (e.g., "node_id_len"), False otherwise.

    Examples:
      >>> is_lower_snake("node_id_len")
      True
      >>> is_lower_snake("NodeIdLen")
      False
    """
    return bool(_LOWER_SNAKE_RE.match(value or ""))


def assert_lower_snake(value: str, what: str = "value") -> None:
    """
    Validate that a string is lower_snake.

    Args:
      value (str): Candidate string to validate.
      what (str): Human-friendly label used in the error message.

    Raises:
      ValueError: If value is not lower_snake.
    """
    if not is_lower_snake(value):
        raise ValueError(f"{what} must be lower_snake (got: {value!r})")


def column_type_from_value(s: str) -> ColumnType:
    """
    Parse a column type token into a ColumnType.

    Accepts canonical values ("varchar") and the host's long spellings
    ("character varying", "bigint"), case-insensitively.

    Args:
      s (str): Column type token.

    Returns:
      ColumnType: Parsed column type.

    Raises:
      ValueError: If s is not a known column type.
    """
    token = " ".join((s or "").strip().lower().split())
    token = _TYPE_ALIASES.get(token, token)
    allowed = {t.value for t in ColumnType}
    if token not in allowed:
        raise ValueError(f"column type must be one of {sorted(allowed)} (got {s!r})")
    return ColumnType(token)


def object_kind_from_value(s: str) -> ObjectKind:
    """
    Parse a lower_snake object kind string into an ObjectKind.

    Args:
      s (str): Lower_snake object kind string.

    Returns:
      ObjectKind: Parsed object kind.

    Raises:
      ValueError: If s is not lower_snake or is not a known object kind.
    """
    assert_lower_snake(s, "object_kind")
    return ObjectKind(s)


def ensure_all_enum_values_lower_snake(enums: Iterable[type[Enum]]) -> None:
    """
    Assert that every enum member's value is lower_snake.

    Args:
      enums (Iterable[type[Enum]]): Iterable of Enum classes to inspect.

    Raises:
      AssertionError: If any enum member has a non-lower_snake value.

    Examples:
      >>> ensure_all_enum_values_lower_snake([ColumnType, ObjectKind, ErrorKind])
    """
    for E in enums:
        for m in E:
            if not is_lower_snake(m.value):
                raise AssertionError(
                    f"{E.__name__}.{m.name} has non-lower_snake value: {m.value!r}"
                )
