"""
Pydantic v2 models for physical table layouts supplied by the host catalog.

Responsibilities
- Define PhysicalColumn, the per-column record compared against relation shapes.
- Normalize free-form type tokens to ColumnType via grammar helpers.

Style
- Zero-IO (stdlib + pydantic only).
- Google-style docstrings with sections such as Attributes, Raises, Examples, and Notes.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import VARHDRSZ
from .grammar import ColumnType, column_type_from_value

__all__ = [
    "PhysicalColumn",
]


class PhysicalColumn(BaseModel):
    """
    One column of the real table definition, in catalog order.

    Attributes:
        name (str): Column name (reported in errors only; never matched).
        type_tag (ColumnType): Column type. Strings are normalized ("character varying"
            -> varchar).
        declared_max_length (int | None): Host type modifier for length-bounded types,
            i.e. the DDL length plus the host's variable-length header; None when the
            column has no declared length. Negative values (the host reports an
            unbounded varchar as -1) are read as None.

    Raises:
        pydantic.ValidationError: If type_tag is unknown or declared_max_length is not
            an integer.

    Examples:
        >>> col = PhysicalColumn.from_ddl("node", "varchar", 32)
        >>> col.type_tag, col.declared_max_length
        (<ColumnType.VARCHAR: 'varchar'>, 36)
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    type_tag: ColumnType
    declared_max_length: int | None = Field(default=None, ge=0)

    @field_validator("type_tag", mode="before")
    @classmethod
    def _normalize_type_tag(cls, v: Any) -> Any:
        if isinstance(v, str):
            return column_type_from_value(v)
        return v

    @field_validator("declared_max_length", mode="before")
    @classmethod
    def _unbounded_length(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool) and v < 0:
            return None
        return v

    @classmethod
    def from_ddl(
        cls,
        name: str,
        type_tag: ColumnType | str,
        length: int | None = None,
    ) -> PhysicalColumn:
        """
        Build a column from its DDL spelling, e.g. ``node varchar(32)``.

        The host stores ``length + VARHDRSZ`` as the type modifier; this mirrors it.
        """
        declared = None if length is None else int(length) + VARHDRSZ
        return cls(name=name, type_tag=type_tag, declared_max_length=declared)
