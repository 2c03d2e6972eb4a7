"""
Option schemas and the schema applier.

Purpose
- Declare which options a catalog object accepts (OptionSchema of OptionDescriptor).
- Apply a schema to the raw name/value pairs the host supplies and return the parsed
  values, or raise the first validation error.

Rules (evaluated in order, fail-fast)
1. An empty schema rejects any option: NoOptionsAccepted.
2. Each raw option, in supplied order:
   - known name: parse the value; failure raises InvalidOptionValue (or its subclass
     UnsupportedRelationName). A repeated option overwrites the earlier value.
   - unknown name: UnknownOption, with the closest known name within the suggestion
     distance as hint.
3. The first required descriptor (schema order) that was not supplied raises
   MissingRequiredOption.

Notes
- Descriptors are frozen; the "seen" state lives in per-call OptionSlot objects, so a
  schema can be shared between threads and applied any number of times.
- Nothing is returned on failure; callers never observe a partially parsed schema.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union

from .constants import SUGGESTION_MAX_DISTANCE
from .errors import MissingRequiredOption, NoOptionsAccepted, UnknownOption
from .matching import closest
from .parsers import OptionValueError, ValueParser

__all__ = [
    "RawOption",
    "RawOptions",
    "OptionDescriptor",
    "OptionSchema",
    "OptionSlot",
    "ParsedOptions",
    "EMPTY_SCHEMA",
    "normalize_raw_options",
    "apply_options",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawOption:
    """One option as supplied by the host: a name and its string value."""

    name: str
    value: str


# Anything the applier accepts as raw options.
RawOptions = Union[Mapping[str, str], Iterable[Union[RawOption, tuple[str, str]]]]


@dataclass(frozen=True)
class OptionDescriptor:
    """
    A recognized option within a schema.

    Attributes:
        name (str): Option name (exact, case-sensitive match).
        parser (ValueParser): Converts the raw string into the option value.
        required (bool): Whether the option must be supplied.
    """

    name: str
    parser: ValueParser
    required: bool = False


@dataclass
class OptionSlot:
    """Per-application state of one descriptor: the parsed value and whether it was seen."""

    descriptor: OptionDescriptor
    value: Any = None
    seen: bool = False

    @property
    def missing(self) -> bool:
        return self.descriptor.required and not self.seen


@dataclass(frozen=True)
class OptionSchema:
    """
    Ordered set of option descriptors with unique names.

    Raises:
        ValueError: On duplicate descriptor names.

    Examples:
        >>> from dagfdw.core.parsers import POSITIVE_INT
        >>> schema = OptionSchema((OptionDescriptor("node_id_len", POSITIVE_INT, required=True),))
        >>> schema.names
        ('node_id_len',)
    """

    descriptors: tuple[OptionDescriptor, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for desc in self.descriptors:
            if desc.name in seen:
                raise ValueError(f"duplicate option name {desc.name!r} in schema")
            seen.add(desc.name)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(d.name for d in self.descriptors)

    def __len__(self) -> int:
        return len(self.descriptors)

    def __iter__(self) -> Iterator[OptionDescriptor]:
        return iter(self.descriptors)

    def new_slots(self) -> list[OptionSlot]:
        """Fresh, unseen slots for one application of this schema."""
        return [OptionSlot(d) for d in self.descriptors]


EMPTY_SCHEMA = OptionSchema()


@dataclass(frozen=True)
class ParsedOptions:
    """
    Result of a successful schema application.

    Attributes:
        values (Mapping[str, Any]): Parsed value per supplied option name.
    """

    values: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def seen(self) -> frozenset[str]:
        return frozenset(self.values)

    def __getitem__(self, name: str) -> Any:
        return self.values[name]

    def get(self, name: str, default: Any = None) -> Any:
        return self.values.get(name, default)


def normalize_raw_options(raws: RawOptions | None) -> list[RawOption]:
    """
    Coerce the accepted raw option shapes into a list of RawOption.

    Args:
        raws: A mapping of name -> value, an iterable of RawOption or (name, value)
            pairs, or None for no options.

    Returns:
        list[RawOption]: Options in supplied order.
    """
    if raws is None:
        return []
    if isinstance(raws, Mapping):
        return [RawOption(k, v) for k, v in raws.items()]
    out: list[RawOption] = []
    for item in raws:
        if isinstance(item, RawOption):
            out.append(item)
        else:
            name, value = item
            out.append(RawOption(name, value))
    return out


def apply_options(
    schema: OptionSchema,
    raws: RawOptions | None,
    *,
    max_distance: int = SUGGESTION_MAX_DISTANCE,
) -> ParsedOptions:
    """
    Apply an option schema to raw options.

    Args:
        schema (OptionSchema): Recognized options.
        raws (RawOptions | None): Options supplied by the host, processed in order.
        max_distance (int): Largest edit distance for "did you mean" suggestions.

    Returns:
        ParsedOptions: Parsed values for every supplied option.

    Raises:
        NoOptionsAccepted: If the schema is empty and options were supplied.
        InvalidOptionValue: If a value fails to parse (UnsupportedRelationName for
            relation references).
        UnknownOption: If an option name is not in the schema.
        MissingRequiredOption: If a required option was not supplied.
    """
    options = normalize_raw_options(raws)
    if not schema.descriptors and options:
        raise NoOptionsAccepted()

    slots = schema.new_slots()
    by_name = {slot.descriptor.name: slot for slot in slots}

    for opt in options:
        slot = by_name.get(opt.name)
        if slot is None:
            suggestion = closest(opt.name, schema.names, max_distance)
            logger.debug("unknown option %r (suggestion=%r)", opt.name, suggestion)
            raise UnknownOption(opt.name, suggestion=suggestion)
        try:
            slot.value = slot.descriptor.parser.parse(opt.value)
        except OptionValueError as exc:
            raise exc.to_error(opt.name, opt.value) from exc
        slot.seen = True

    for slot in slots:
        if slot.missing:
            raise MissingRequiredOption(slot.descriptor.name)

    return ParsedOptions(
        MappingProxyType({s.descriptor.name: s.value for s in slots if s.seen})
    )
