"""
dagfdw command-line interface.

Commands
- check-options: validate the options of one catalog object
    dagfdw check-options --kind server -o node_id_len=16
- validate: resolve and structurally check every table of a definition file
    dagfdw validate defs.toml [--table dag_edges]
- relations: list the registered relations and their column types
    dagfdw relations [edges]

Exit codes: 0 valid, 1 validation or definition error, 2 usage or settings error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from dagfdw.core.errors import DefinitionError, FdwValidationError, SettingsError
from dagfdw.core.grammar import ObjectKind
from dagfdw.core.options import RawOption
from dagfdw.core.relations import get_relation, list_relations, relation_names
from dagfdw.core.validator import load_table, validate_options
from dagfdw.definitions import load_definitions
from dagfdw.settings import FdwSettings
from dagfdw.utils.logging_utils import (
    configure_cli_logging,
    report_error,
    report_failure,
    report_ok,
)

logger = logging.getLogger(__name__)


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--settings", type=str, default=None, help="Settings TOML path.")
    p.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (DEBUG, INFO, WARNING, ERROR); overrides settings.",
    )


def _load_settings(args: argparse.Namespace) -> FdwSettings:
    """Load settings (env > TOML > defaults), apply --log-level, and set up logging."""
    s = FdwSettings.load(args.settings)
    if args.log_level:
        s = replace(s, log_level=args.log_level.strip().upper())
    s = s.validated()
    configure_cli_logging(s.log_level_value)
    return s


def _parse_option(text: str) -> RawOption:
    name, sep, value = text.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE (got {text!r})")
    return RawOption(name, value)


def _cmd_check_options(argv: list[str]) -> int:
    p = argparse.ArgumentParser(
        prog="check-options",
        description="Validate the connector options of one catalog object.",
        epilog=f"Known relations: {', '.join(relation_names())}.",
    )
    p.add_argument(
        "--kind",
        type=str,
        required=True,
        choices=[k.value for k in ObjectKind],
        help="Catalog object kind the options belong to.",
    )
    p.add_argument(
        "-o",
        "--option",
        dest="options",
        type=_parse_option,
        action="append",
        default=[],
        help="Option as NAME=VALUE (repeatable, applied in order).",
    )
    _add_common_args(p)
    args = p.parse_args(argv)

    try:
        settings = _load_settings(args)
    except SettingsError as exc:
        report_failure(str(exc))
        return 2

    try:
        validate_options(
            args.kind, args.options, max_distance=settings.suggestion_max_distance
        )
    except FdwValidationError as exc:
        report_error(exc)
        return 1
    report_ok(f"{args.kind} options valid")
    return 0


def _cmd_validate(argv: list[str]) -> int:
    p = argparse.ArgumentParser(
        prog="validate",
        description="Resolve and check every foreign table of a definition file.",
    )
    p.add_argument(
        "definitions",
        type=str,
        nargs="?",
        default=None,
        help="Definition TOML path (default: settings definitions_path).",
    )
    p.add_argument("--table", type=str, default=None, help="Check only this table.")
    _add_common_args(p)
    args = p.parse_args(argv)

    try:
        settings = _load_settings(args)
    except SettingsError as exc:
        report_failure(str(exc))
        return 2

    path = args.definitions or settings.definitions_path
    if not path:
        report_failure("no definition file given")
        return 2

    try:
        tables = load_definitions(path)
    except DefinitionError as exc:
        report_failure(str(exc))
        return 1

    if args.table is not None:
        tables = [t for t in tables if t.name == args.table]
        if not tables:
            report_failure(f"no table {args.table!r} in {path}")
            return 2

    failed = 0
    for t in tables:
        try:
            table = load_table(
                t.server_options,
                t.table_options,
                t.columns,
                table_name=t.name,
                max_distance=settings.suggestion_max_distance,
            )
        except FdwValidationError as exc:
            report_error(exc, prefix=f"{t.name}: ")
            failed += 1
            continue
        report_ok(
            f"{t.name}: relation={table.relation.name} "
            f"node_id_len={table.server.node_id_len}"
        )
    logger.info("checked %d tables, %d failed", len(tables), failed)
    return 1 if failed else 0


def _cmd_relations(argv: list[str]) -> int:
    p = argparse.ArgumentParser(
        prog="relations",
        description="List the registered relations and their column types.",
    )
    p.add_argument("name", type=str, nargs="?", default=None, help="Show only this relation.")
    args = p.parse_args(argv)

    if args.name is None:
        descs = list_relations()
    else:
        try:
            descs = [get_relation(args.name)]
        except FdwValidationError as exc:
            report_error(exc)
            return 1
    for desc in descs:
        print(f"{desc.name}: {', '.join(t.value for t in desc.expected_columns)}")
    return 0


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="dagfdw", description="DAG connector option and table validation CLI."
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("check-options")
    sub.add_parser("validate")
    sub.add_parser("relations")
    return p


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        build_argparser().print_help()
        return
    cmd, rest = argv[0], argv[1:]
    if cmd == "check-options":
        code = _cmd_check_options(rest)
    elif cmd == "validate":
        code = _cmd_validate(rest)
    elif cmd == "relations":
        code = _cmd_relations(rest)
    else:
        print(f"Unknown command: {cmd}", file=sys.stderr)
        code = 2
    raise SystemExit(code)


if __name__ == "__main__":
    main()
