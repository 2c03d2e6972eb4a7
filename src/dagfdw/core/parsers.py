"""
Typed value parsers for option strings.

Each parser turns one raw option string into a typed value or raises OptionValueError.
The option schema parser (dagfdw.core.options) converts that failure into the
user-facing error for the option being parsed.

Parsers
- PositiveIntParser: whole-string base-10 integer, optional sign, > 0.
- RelationNameParser: exact, case-sensitive relation name -> registry descriptor.

Notes
- Parsers are pure and never perform IO; the relation parser reads only the registry.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any, Final, Protocol, runtime_checkable

from .constants import MAX_OPTION_INT
from .errors import InvalidOptionValue, UnsupportedRelationName
from .grammar import RelationDescriptor
from .relations import lookup_relation, relation_names

__all__ = [
    "ValueParser",
    "OptionValueError",
    "RelationNameError",
    "PositiveIntParser",
    "RelationNameParser",
    "POSITIVE_INT",
    "RELATION_NAME",
]

# ASCII digits only; str.isdigit() would also accept other Unicode digits.
_INT_RE: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")


class OptionValueError(ValueError):
    """A parser rejected a raw value. Carries the reason shown to the user as a hint."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason

    def to_error(self, option_name: str, raw_value: str) -> InvalidOptionValue:
        return InvalidOptionValue(option_name, raw_value, reason=self.reason)


class RelationNameError(OptionValueError):
    """A relation reference named no registered relation."""

    def __init__(self, supported: Sequence[str] = ()) -> None:
        super().__init__("unsupported relation name")
        self.supported = tuple(supported)

    def to_error(self, option_name: str, raw_value: str) -> InvalidOptionValue:
        return UnsupportedRelationName(
            raw_value, option_name=option_name, supported=self.supported
        )


@runtime_checkable
class ValueParser(Protocol):
    """Converts a raw option string into a typed value."""

    def parse(self, raw: str) -> Any: ...


class PositiveIntParser:
    """
    Parse a strictly positive base-10 integer.

    The whole string must be the integer: surrounding whitespace or trailing text
    is rejected.

    Examples:
        >>> POSITIVE_INT.parse("5")
        5
        >>> POSITIVE_INT.parse("5x")
        Traceback (most recent call last):
        ...
        dagfdw.core.parsers.OptionValueError: expected a base-10 integer
    """

    def parse(self, raw: str) -> int:
        if not _INT_RE.fullmatch(raw):
            raise OptionValueError("expected a base-10 integer")
        num = int(raw)
        if num <= 0:
            raise OptionValueError("expected a positive integer")
        if num > MAX_OPTION_INT:
            raise OptionValueError(f"expected an integer not above {MAX_OPTION_INT}")
        return num

    def __repr__(self) -> str:
        return "PositiveIntParser()"


class RelationNameParser:
    """Resolve a relation name to the registry's descriptor object."""

    def parse(self, raw: str) -> RelationDescriptor:
        desc = lookup_relation(raw)
        if desc is None:
            raise RelationNameError(relation_names())
        return desc

    def __repr__(self) -> str:
        return "RelationNameParser()"


POSITIVE_INT: Final[PositiveIntParser] = PositiveIntParser()
RELATION_NAME: Final[RelationNameParser] = RelationNameParser()
