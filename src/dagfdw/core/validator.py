"""
Host-facing entry points: option validation per catalog object and table loading.

validate_options
- Called when the host creates or alters a catalog object carrying connector options.
- foreign_data_wrapper accepts no options, server and foreign_table options are parsed
  and discarded, and every other object kind is rejected.

load_table
- Resolves a table for planning: server options, then table options against that
  server, then the structural check of the real columns.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .config import TableConfig, parse_table_options, resolve_server, resolve_table
from .constants import SUGGESTION_MAX_DISTANCE, VARHDRSZ
from .errors import UnsupportedObjectKind
from .grammar import ObjectKind
from .options import EMPTY_SCHEMA, RawOptions, apply_options
from .schema import PhysicalColumn
from .validate import validate_table

__all__ = ["validate_options", "load_table"]

logger = logging.getLogger(__name__)


def validate_options(
    kind: ObjectKind | str,
    raws: RawOptions | None,
    *,
    max_distance: int = SUGGESTION_MAX_DISTANCE,
) -> None:
    """
    Validate the options of one catalog object.

    Args:
        kind (ObjectKind | str): The catalog object the options belong to.
        raws: The object's options.
        max_distance (int): Suggestion distance for unknown option names.

    Raises:
        UnsupportedObjectKind: If the connector does not support this object kind.
        FdwValidationError: On any option error.
    """
    try:
        kind = kind if isinstance(kind, ObjectKind) else ObjectKind(kind)
    except ValueError:
        raise UnsupportedObjectKind(str(kind)) from None

    logger.debug("validating %s options", kind.value)
    if kind is ObjectKind.SERVER:
        resolve_server(raws, max_distance=max_distance)
    elif kind is ObjectKind.FOREIGN_TABLE:
        parse_table_options(raws, max_distance=max_distance)
    elif kind is ObjectKind.FOREIGN_DATA_WRAPPER:
        apply_options(EMPTY_SCHEMA, raws, max_distance=max_distance)
    else:
        raise UnsupportedObjectKind(kind.value)


def load_table(
    server_options: RawOptions | None,
    table_options: RawOptions | None,
    physical_columns: Iterable[PhysicalColumn | Mapping[str, Any]],
    *,
    table_name: str | None = None,
    max_distance: int = SUGGESTION_MAX_DISTANCE,
    format_overhead: int = VARHDRSZ,
) -> TableConfig:
    """
    Resolve and structurally validate a foreign table.

    Args:
        server_options: Options of the table's server.
        table_options: Options of the table.
        physical_columns: The table's real columns in catalog order.
        table_name (str | None): Name of the real table, for messages.
        max_distance (int): Suggestion distance for unknown option names.
        format_overhead (int): Header included in declared identifier lengths.

    Returns:
        TableConfig: The validated table configuration.

    Raises:
        FdwValidationError: On the first option or structural error.
    """
    server = resolve_server(server_options, max_distance=max_distance)
    table = resolve_table(table_options, server, max_distance=max_distance)
    validate_table(
        table, physical_columns, format_overhead=format_overhead, table_name=table_name
    )
    return table
