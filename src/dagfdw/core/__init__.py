"""
Core package for dagfdw contracts (grammar, relations, options, resolution, validation).

## Contracts (single source of truth)
- Grammar: column types, catalog object kinds, error kinds, RelationDescriptor.
- Relations: the frozen registry of relation shapes (`relations`).
- Options: option schemas and the schema applier (`options`, `parsers`, `matching`).
- Config: ServerConfig/TableConfig and their resolvers (`config`).
- Validation: positional structural check of a table's columns (`validate`).
- Host entry points: per-object option validation and table loading (`validator`).
- Errors: FdwValidationError hierarchy with stable kinds (`errors`).

## Notes
- Zero-IO policy: stdlib + pydantic only; no file/network IO.
- Fail-fast: every check raises on the first failure.
- Naming policy: enum `.value`, option names, and relation names are lower_snake.

## Downstream usage
- dagfdw.definitions builds PhysicalColumn lists and raw option maps from TOML files.
- dagfdw.cli drives `validate_options` and `load_table` and renders errors.

## Examples
```python
from dagfdw.core.config import resolve_server, resolve_table
from dagfdw.core.validate import validate_table
from dagfdw.core.schema import PhysicalColumn

server = resolve_server({"node_id_len": "16"})
table = resolve_table({"relation": "edges"}, server)
validate_table(
    table,
    [
        PhysicalColumn.from_ddl("node", "varchar", 32),
        PhysicalColumn.from_ddl("parent_node", "varchar", 32),
    ],
)
```
"""
