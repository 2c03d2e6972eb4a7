"""
Core exception types raised by option resolution and structural validation.

Provides typed exceptions for dagfdw failures:
- FdwValidationError and its subclasses for user-facing validation failures. Each
  subclass has a stable ``kind`` (lower_snake ErrorKind), the host error class
  (``sqlstate``), structured attributes, and an optional ``hint``.
- DefinitionError for malformed definition files.
- SettingsError for invalid runtime settings.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - Messages are rendered from the structured attributes; callers that need the
      raw values read them from the exception (or ``context()``) instead of parsing
      ``str(exc)``.
    - All validation is fail-fast: the first failing check raises.

Examples:
    Catch an unknown option and show the suggestion.

    >>> from dagfdw.core.errors import UnknownOption
    >>> try:
    ...     raise UnknownOption("noide_id_len", suggestion="node_id_len")
    ... except UnknownOption as e:
    ...     hint = e.hint
    >>> hint
    'Perhaps you meant "node_id_len".'
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, ClassVar

from .grammar import ColumnType, ErrorKind

__all__ = [
    "FdwError",
    "FdwValidationError",
    "NoOptionsAccepted",
    "InvalidOptionValue",
    "UnknownOption",
    "MissingRequiredOption",
    "UnsupportedRelationName",
    "UnsupportedObjectKind",
    "ColumnTypeMismatch",
    "ColumnLengthMismatch",
    "ColumnCountMismatch",
    "DefinitionError",
    "SettingsError",
]


class FdwError(Exception):
    """Base class for all dagfdw errors."""


class FdwValidationError(FdwError, ValueError):
    """
    Base class for validation failures reported to the host.

    Attributes:
        kind (ErrorKind): Stable error code of the subclass.
        hint (str | None): Optional follow-up line for the user.
    """

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    @property
    def sqlstate(self) -> str:
        return self.kind.sqlstate

    def context(self) -> dict[str, Any]:
        """Structured fields of this error (kind included)."""
        return {"kind": self.kind.value}


def _relation_label(relation_name: str, table_name: str | None) -> str:
    if table_name:
        return f'relation "{table_name}" ({relation_name})'
    return f'relation "{relation_name}"'


# -----------------------------------------------------------------------------
# Option errors
# -----------------------------------------------------------------------------


class NoOptionsAccepted(FdwValidationError):
    """Options were supplied to an object that accepts none."""

    kind = ErrorKind.NO_OPTIONS_ACCEPTED

    def __init__(self) -> None:
        super().__init__("No options are accepted in this context")


class InvalidOptionValue(FdwValidationError):
    """A recognized option carried a value its parser rejected."""

    kind = ErrorKind.INVALID_OPTION_VALUE

    def __init__(self, option_name: str, raw_value: str, *, reason: str | None = None) -> None:
        self.option_name = option_name
        self.raw_value = raw_value
        self.reason = reason
        super().__init__(
            f'invalid value for option {option_name}: "{raw_value}"',
            hint=reason,
        )

    def context(self) -> dict[str, Any]:
        return {
            **super().context(),
            "option_name": self.option_name,
            "raw_value": self.raw_value,
            "reason": self.reason,
        }


class UnsupportedRelationName(InvalidOptionValue):
    """
    A relation reference did not name any registered relation.

    Subclasses InvalidOptionValue: an unsupported ``relation`` option value is both.
    """

    kind = ErrorKind.UNSUPPORTED_RELATION_NAME

    def __init__(
        self,
        relation_name: str,
        *,
        option_name: str = "relation",
        supported: Sequence[str] = (),
    ) -> None:
        self.relation_name = relation_name
        self.supported = tuple(supported)
        reason = "unsupported relation name"
        if self.supported:
            reason += f" (supported: {', '.join(self.supported)})"
        super().__init__(option_name, relation_name, reason=reason)

    def context(self) -> dict[str, Any]:
        return {
            **super().context(),
            "relation_name": self.relation_name,
            "supported": list(self.supported),
        }


class UnknownOption(FdwValidationError):
    """An option name is not part of the schema; carries the closest known name, if any."""

    kind = ErrorKind.UNKNOWN_OPTION

    def __init__(self, option_name: str, *, suggestion: str | None = None) -> None:
        self.option_name = option_name
        self.suggestion = suggestion
        super().__init__(
            f'unknown option "{option_name}"',
            hint=f'Perhaps you meant "{suggestion}".' if suggestion else None,
        )

    def context(self) -> dict[str, Any]:
        return {
            **super().context(),
            "option_name": self.option_name,
            "suggestion": self.suggestion,
        }


class MissingRequiredOption(FdwValidationError):
    """A required option was not supplied."""

    kind = ErrorKind.MISSING_REQUIRED_OPTION

    def __init__(self, option_name: str) -> None:
        self.option_name = option_name
        super().__init__(f"No value for required option {option_name}")

    def context(self) -> dict[str, Any]:
        return {**super().context(), "option_name": self.option_name}


class UnsupportedObjectKind(FdwValidationError):
    """Options were validated for a catalog object the connector does not support."""

    kind = ErrorKind.UNSUPPORTED_OBJECT_KIND

    def __init__(self, object_kind: str) -> None:
        self.object_kind = object_kind
        super().__init__(f"Creating {object_kind} objects not supported")

    def context(self) -> dict[str, Any]:
        return {**super().context(), "object_kind": self.object_kind}


# -----------------------------------------------------------------------------
# Structural errors
# -----------------------------------------------------------------------------


class ColumnTypeMismatch(FdwValidationError):
    """A physical column has a different type than the relation expects at that position."""

    kind = ErrorKind.COLUMN_TYPE_MISMATCH

    def __init__(
        self,
        relation_name: str,
        index: int,
        column_name: str,
        expected: ColumnType,
        actual: ColumnType,
        *,
        table_name: str | None = None,
    ) -> None:
        self.relation_name = relation_name
        self.table_name = table_name
        self.index = index
        self.column_name = column_name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{_relation_label(relation_name, table_name)}: "
            f'invalid type of column #{index} "{column_name}": '
            f"{actual.value}, expecting {expected.value}"
        )

    def context(self) -> dict[str, Any]:
        return {
            **super().context(),
            "relation_name": self.relation_name,
            "table_name": self.table_name,
            "index": self.index,
            "column_name": self.column_name,
            "expected": self.expected.value,
            "actual": self.actual.value,
        }


class ColumnLengthMismatch(FdwValidationError):
    """An identifier column's declared length does not fit the configured node ID length."""

    kind = ErrorKind.COLUMN_LENGTH_MISMATCH

    def __init__(
        self,
        relation_name: str,
        index: int,
        column_name: str,
        expected_length: int,
        actual_length: int | None,
        *,
        table_name: str | None = None,
    ) -> None:
        self.relation_name = relation_name
        self.table_name = table_name
        self.index = index
        self.column_name = column_name
        self.expected_length = expected_length
        self.actual_length = actual_length
        actual = "unbounded" if actual_length is None else str(actual_length)
        super().__init__(
            f"{_relation_label(relation_name, table_name)}: "
            f'the VARCHAR column #{index} "{column_name}" length {actual} '
            f"doesn't match the length of node ID representation ({expected_length})"
        )

    def context(self) -> dict[str, Any]:
        return {
            **super().context(),
            "relation_name": self.relation_name,
            "table_name": self.table_name,
            "index": self.index,
            "column_name": self.column_name,
            "expected_length": self.expected_length,
            "actual_length": self.actual_length,
        }


class ColumnCountMismatch(FdwValidationError):
    """The physical table has more or fewer columns than the relation expects."""

    kind = ErrorKind.COLUMN_COUNT_MISMATCH

    def __init__(
        self,
        relation_name: str,
        expected_count: int,
        actual_count: int,
        *,
        table_name: str | None = None,
    ) -> None:
        self.relation_name = relation_name
        self.table_name = table_name
        self.expected_count = expected_count
        self.actual_count = actual_count
        super().__init__(
            f"{_relation_label(relation_name, table_name)}: "
            f"invalid number of columns: {actual_count}, expecting {expected_count}"
        )

    def context(self) -> dict[str, Any]:
        return {
            **super().context(),
            "relation_name": self.relation_name,
            "table_name": self.table_name,
            "expected_count": self.expected_count,
            "actual_count": self.actual_count,
        }


# -----------------------------------------------------------------------------
# Boundary errors
# -----------------------------------------------------------------------------


class DefinitionError(FdwError):
    """
    Raised when a definition file is missing, unreadable, or malformed.

    Examples:
        - TOML syntax error
        - A table referencing an undeclared server
    """


class SettingsError(FdwError):
    """
    Raised when runtime settings are invalid.

    Examples:
        - Negative suggestion distance
        - Unknown log level name
    """
