"""
Definition files: servers, foreign tables, and their real columns in one TOML file.

Layout
------
```toml
[servers.dag]
node_id_len = 16

[tables.dag_edges]
server = "dag"
options = { relation = "edges" }
columns = [
    { name = "node", type = "varchar", length = 32 },
    { name = "parent_node", type = "varchar", length = 32 },
]
```

Notes
- Server entries and table ``options`` are raw connector options; values are kept as
  strings (TOML integers/booleans are stringified) and validated later by
  dagfdw.core, exactly as options typed in DDL would be.
- Column ``length`` is the DDL length (``varchar(32)``); see PhysicalColumn.from_ddl.
- This module only checks file structure. Option and column validation is the core's.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from dagfdw.core.errors import DefinitionError
from dagfdw.core.schema import PhysicalColumn

__all__ = ["TableDefinition", "parse_definitions", "load_definitions"]

logger = logging.getLogger(__name__)

_TABLE_KEYS = frozenset({"server", "options", "columns"})
_COLUMN_KEYS = frozenset({"name", "type", "length"})


def _option_str(v: Any) -> str:
    if isinstance(v, bool):
        return "true" if v else "false"
    return str(v)


class TableDefinition(BaseModel):
    """
    One foreign table with its server's options and its real columns.

    Attributes:
        name (str): Table name.
        server_name (str): Name of the server entry the table uses.
        server_options (dict[str, str]): Raw options of that server.
        table_options (dict[str, str]): Raw options of the table.
        columns (list[PhysicalColumn]): Real columns in declared order.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    server_name: str
    server_options: dict[str, str] = Field(default_factory=dict)
    table_options: dict[str, str] = Field(default_factory=dict)
    columns: list[PhysicalColumn] = Field(default_factory=list)

    @field_validator("server_options", "table_options", mode="before")
    @classmethod
    def _stringify_options(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return {str(k): _option_str(val) for k, val in v.items()}
        return v


def _column(entry: Any, where: str) -> PhysicalColumn:
    if not isinstance(entry, dict):
        raise DefinitionError(f"{where}: column entries must be tables (got {entry!r})")
    unknown = set(entry) - _COLUMN_KEYS
    if unknown:
        raise DefinitionError(f"{where}: unknown column keys {sorted(unknown)}")
    try:
        return PhysicalColumn.from_ddl(entry["name"], entry["type"], entry.get("length"))
    except KeyError as exc:
        raise DefinitionError(f"{where}: column is missing {exc.args[0]!r}") from exc
    except (TypeError, ValueError) as exc:
        raise DefinitionError(f"{where}: invalid column {entry!r}: {exc}") from exc


def parse_definitions(data: dict[str, Any]) -> list[TableDefinition]:
    """
    Build table definitions from an already parsed TOML document.

    Args:
        data (dict[str, Any]): Parsed document with ``servers`` and ``tables`` tables.

    Returns:
        list[TableDefinition]: Tables in document order.

    Raises:
        DefinitionError: If the document structure is invalid or a table references an
            undeclared server.
    """
    servers = data.get("servers", {})
    tables = data.get("tables", {})
    if not isinstance(servers, dict) or not isinstance(tables, dict):
        raise DefinitionError("'servers' and 'tables' must be tables")

    out: list[TableDefinition] = []
    for tname, entry in tables.items():
        where = f"tables.{tname}"
        if not isinstance(entry, dict):
            raise DefinitionError(f"{where}: must be a table")
        unknown = set(entry) - _TABLE_KEYS
        if unknown:
            raise DefinitionError(f"{where}: unknown table keys {sorted(unknown)}")
        server_name = entry.get("server")
        if not isinstance(server_name, str):
            raise DefinitionError(f"{where}: 'server' must name a server entry")
        if server_name not in servers:
            raise DefinitionError(f"{where}: unknown server {server_name!r}")
        server_opts = servers[server_name]
        if not isinstance(server_opts, dict):
            raise DefinitionError(f"servers.{server_name}: must be a table")
        raw_columns = entry.get("columns", [])
        if not isinstance(raw_columns, list):
            raise DefinitionError(f"{where}: 'columns' must be an array")
        columns = [_column(c, f"{where}.columns[{i}]") for i, c in enumerate(raw_columns)]
        try:
            out.append(
                TableDefinition(
                    name=tname,
                    server_name=server_name,
                    server_options=server_opts,
                    table_options=entry.get("options", {}),
                    columns=columns,
                )
            )
        except ValidationError as exc:
            raise DefinitionError(f"{where}: {exc}") from exc
    logger.debug("parsed %d table definitions", len(out))
    return out


def load_definitions(path: str | os.PathLike[str]) -> list[TableDefinition]:
    """
    Load table definitions from a TOML file.

    Args:
        path: Definition file path.

    Returns:
        list[TableDefinition]: Tables in file order.

    Raises:
        DefinitionError: If the file cannot be read or parsed, or is malformed.
    """
    p = Path(path)
    try:
        with p.open("rb") as fh:
            data = tomllib.load(fh)
    except OSError as exc:
        raise DefinitionError(f"cannot read definitions {str(p)!r}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise DefinitionError(f"invalid TOML in {str(p)!r}: {exc}") from exc
    return parse_definitions(data)
