"""
dagfdw: option resolution and structural validation for a DAG foreign-data connector.

## Responsibilities
- Validate the options the host attaches to wrappers, servers, and foreign tables.
- Resolve server and table options into immutable configs.
- Check that a foreign table's real columns implement the relation it names.

## Public API
- resolve_server / resolve_table: build ServerConfig / TableConfig from raw options.
- validate_table: structural check of physical columns against a TableConfig.
- validate_options / load_table: host-facing entry points.
- FdwValidationError: base of every validation error (see dagfdw.core.errors).
- FdwSettings: runtime settings (env > TOML > defaults).

## Import DAG discipline
- dagfdw.core depends only on stdlib and pydantic.
- dagfdw.settings, dagfdw.definitions, and dagfdw.cli sit on top of core.
"""

from __future__ import annotations

from .core.config import ServerConfig, TableConfig, resolve_server, resolve_table
from .core.errors import FdwError, FdwValidationError
from .core.schema import PhysicalColumn
from .core.validate import validate_table
from .core.validator import load_table, validate_options
from .settings import FdwSettings

__all__ = [
    "ServerConfig",
    "TableConfig",
    "PhysicalColumn",
    "resolve_server",
    "resolve_table",
    "validate_table",
    "validate_options",
    "load_table",
    "FdwError",
    "FdwValidationError",
    "FdwSettings",
]
