"""
Canonical descriptor for the 'edges' relation.

Purpose:
- One row per DAG edge: a node and one of its parent nodes.

Shape:
- columns (positional):
    #0 varchar  node ID of the child, hex-encoded
    #1 varchar  node ID of the parent, hex-encoded
- both columns are identifier columns; their declared length must be
  ``2 * node_id_len + VARHDRSZ`` for the table's server.

Notes:
- Column names are not checked; only position, type, and length are.
"""

from __future__ import annotations

from ..grammar import ColumnType, RelationDescriptor

EDGES_DESC = RelationDescriptor(
    name="edges",
    expected_columns=(
        ColumnType.VARCHAR,
        ColumnType.VARCHAR,
    ),
)
