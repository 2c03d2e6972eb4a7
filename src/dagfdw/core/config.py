"""
Server and table configuration resolution.

Purpose
- Define the option schemas for servers and foreign tables.
- Resolve raw server options into a ServerConfig and raw table options into a
  TableConfig bound to an already resolved server.

Ordering
- A table is always resolved against a ServerConfig the caller resolved first; table
  resolution never derives server settings itself.

Notes
- Configs are built fresh on every call and are immutable; nothing is cached.
- TableConfig.relation is the registry's descriptor object, not a copy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from .constants import SUGGESTION_MAX_DISTANCE
from .grammar import RelationDescriptor
from .options import OptionDescriptor, OptionSchema, RawOptions, apply_options
from .parsers import POSITIVE_INT, RELATION_NAME

__all__ = [
    "SERVER_SCHEMA",
    "TABLE_SCHEMA",
    "ServerConfig",
    "TableConfig",
    "resolve_server",
    "parse_table_options",
    "resolve_table",
]

logger = logging.getLogger(__name__)

SERVER_SCHEMA = OptionSchema(
    (OptionDescriptor("node_id_len", POSITIVE_INT, required=True),),
)

TABLE_SCHEMA = OptionSchema(
    (OptionDescriptor("relation", RELATION_NAME, required=True),),
)


class ServerConfig(BaseModel):
    """
    Resolved server configuration.

    Attributes:
        node_id_len (int): Length of a raw node ID in bytes, before hex encoding (> 0).

    Raises:
        pydantic.ValidationError: If node_id_len is not a positive integer.

    Examples:
        >>> ServerConfig(node_id_len=16).node_id_len
        16
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    node_id_len: int = Field(..., gt=0)


@dataclass(frozen=True)
class TableConfig:
    """
    Resolved foreign table configuration.

    Attributes:
        server (ServerConfig): The server the table belongs to.
        relation (RelationDescriptor): Registry entry the table implements.
    """

    server: ServerConfig
    relation: RelationDescriptor


def resolve_server(
    raws: RawOptions | None,
    *,
    max_distance: int = SUGGESTION_MAX_DISTANCE,
) -> ServerConfig:
    """
    Resolve server options into a ServerConfig.

    Args:
        raws: Server options as supplied by the host.
        max_distance (int): Suggestion distance for unknown option names.

    Returns:
        ServerConfig: The resolved configuration.

    Raises:
        FdwValidationError: On any option error (see dagfdw.core.options.apply_options).
    """
    parsed = apply_options(SERVER_SCHEMA, raws, max_distance=max_distance)
    server = ServerConfig(node_id_len=parsed["node_id_len"])
    logger.debug("resolved server: node_id_len=%d", server.node_id_len)
    return server


def parse_table_options(
    raws: RawOptions | None,
    *,
    max_distance: int = SUGGESTION_MAX_DISTANCE,
) -> RelationDescriptor:
    """
    Validate table options on their own and return the referenced relation.

    Used where no server is at hand (option validation on table creation).

    Raises:
        FdwValidationError: On any option error; UnsupportedRelationName for an
            unknown relation.
    """
    parsed = apply_options(TABLE_SCHEMA, raws, max_distance=max_distance)
    return parsed["relation"]


def resolve_table(
    raws: RawOptions | None,
    server: ServerConfig,
    *,
    max_distance: int = SUGGESTION_MAX_DISTANCE,
) -> TableConfig:
    """
    Resolve table options into a TableConfig bound to ``server``.

    Args:
        raws: Table options as supplied by the host.
        server (ServerConfig): The already resolved server of the table.
        max_distance (int): Suggestion distance for unknown option names.

    Returns:
        TableConfig: The resolved configuration.

    Raises:
        FdwValidationError: On any option error.
    """
    relation = parse_table_options(raws, max_distance=max_distance)
    logger.debug("resolved table: relation=%s", relation.name)
    return TableConfig(server=server, relation=relation)
