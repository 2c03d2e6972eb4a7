"""
Frozen registry of the relations the connector understands.

Notes:
    - Each relation lives in its own module and declares one RelationDescriptor.
    - Supporting a new relation means adding a module here and a registry entry; option
      parsing, resolution, and structural validation pick it up without changes.
    - The registry is built once at import and exposed read-only, so concurrent lookups
      need no locking.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from ..errors import UnsupportedRelationName
from ..grammar import RelationDescriptor
from .edges import EDGES_DESC

__all__ = [
    "RelationDescriptor",
    "EDGES_DESC",
    "RELATIONS",
    "lookup_relation",
    "get_relation",
    "list_relations",
    "relation_names",
]


def _build_registry(*descs: RelationDescriptor) -> Mapping[str, RelationDescriptor]:
    registry: dict[str, RelationDescriptor] = {}
    for desc in descs:
        if desc.name in registry:
            raise ValueError(f"duplicate relation name {desc.name!r}")
        registry[desc.name] = desc
    return MappingProxyType(registry)


# Registry
RELATIONS: Mapping[str, RelationDescriptor] = _build_registry(
    EDGES_DESC,
)


def lookup_relation(name: str) -> RelationDescriptor | None:
    """
    Find a relation descriptor by exact, case-sensitive name.

    Args:
        name (str): Relation name.

    Returns:
        RelationDescriptor | None: The registry's descriptor object, or None.
    """
    for desc in RELATIONS.values():
        if desc.name == name:
            return desc
    return None


def get_relation(name: str) -> RelationDescriptor:
    """
    Look up a relation descriptor by name.

    Args:
        name (str): Relation name.

    Returns:
        RelationDescriptor: Descriptor for the requested relation.

    Raises:
        UnsupportedRelationName: If no relation has this name.
    """
    desc = lookup_relation(name)
    if desc is None:
        raise UnsupportedRelationName(name, supported=relation_names())
    return desc


def list_relations() -> list[RelationDescriptor]:
    """
    Return all registered relation descriptors.

    Returns:
        list[RelationDescriptor]: Descriptors in registry order.
    """
    return list(RELATIONS.values())


def relation_names() -> list[str]:
    """Registered relation names in registry order."""
    return list(RELATIONS)
