from __future__ import annotations

from pathlib import Path

import pytest

from dagfdw import cli

DEFS_OK = """
[servers.dag]
node_id_len = 16

[tables.dag_edges]
server = "dag"
options = { relation = "edges" }
columns = [
    { name = "node", type = "varchar", length = 32 },
    { name = "parent_node", type = "varchar", length = 32 },
]
""".strip()

DEFS_BAD = (
    DEFS_OK
    + """

[tables.short_ids]
server = "dag"
options = { relation = "edges" }
columns = [
    { name = "node", type = "varchar", length = 31 },
    { name = "parent_node", type = "varchar", length = 32 },
]
"""
)


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    for key in ("DAGFDW_SUGGESTION_MAX_DISTANCE", "DAGFDW_LOG_LEVEL", "DAGFDW_DEFINITIONS_PATH"):
        monkeypatch.delenv(key, raising=False)


def _run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as ei:
        cli.main(argv)
    return ei.value.code


def test_no_args_prints_help(capsys) -> None:
    cli.main([])
    assert "check-options" in capsys.readouterr().out


def test_unknown_command(capsys) -> None:
    assert _run(["frobnicate"]) == 2
    assert "Unknown command: frobnicate" in capsys.readouterr().err


def test_check_options_ok(capsys) -> None:
    assert _run(["check-options", "--kind", "server", "-o", "node_id_len=16"]) == 0
    assert capsys.readouterr().out.strip() == "[OK] server options valid"


def test_check_options_invalid_value(capsys) -> None:
    assert _run(["check-options", "--kind", "server", "-o", "node_id_len=0"]) == 1
    err = capsys.readouterr().err
    assert '[ERROR] invalid value for option node_id_len: "0" (invalid_option_value)' in err
    assert "[HINT] expected a positive integer" in err


def test_check_options_suggestion(capsys) -> None:
    assert _run(["check-options", "--kind", "foreign_table", "-o", "relaton=edges"]) == 1
    err = capsys.readouterr().err
    assert '[ERROR] unknown option "relaton" (unknown_option)' in err
    assert '[HINT] Perhaps you meant "relation".' in err


def test_check_options_user_mapping(capsys) -> None:
    assert _run(["check-options", "--kind", "user_mapping"]) == 1
    assert "Creating user_mapping objects not supported" in capsys.readouterr().err


def test_check_options_malformed_pair() -> None:
    # argparse usage error
    assert _run(["check-options", "--kind", "server", "-o", "node_id_len"]) == 2


def test_check_options_bad_log_level(capsys) -> None:
    assert _run(["check-options", "--kind", "server", "--log-level", "LOUD"]) == 2


def test_validate_ok(tmp_path: Path, capsys) -> None:
    p = tmp_path / "defs.toml"
    p.write_text(DEFS_OK)
    assert _run(["validate", str(p)]) == 0
    assert capsys.readouterr().out.strip() == "[OK] dag_edges: relation=edges node_id_len=16"


def test_validate_reports_each_failing_table(tmp_path: Path, capsys) -> None:
    p = tmp_path / "defs.toml"
    p.write_text(DEFS_BAD)
    assert _run(["validate", str(p)]) == 1
    out, err = capsys.readouterr()
    assert "[OK] dag_edges" in out
    assert "[ERROR] short_ids: " in err
    assert "(column_length_mismatch)" in err


def test_validate_single_table(tmp_path: Path, capsys) -> None:
    p = tmp_path / "defs.toml"
    p.write_text(DEFS_BAD)
    assert _run(["validate", str(p), "--table", "dag_edges"]) == 0
    assert _run(["validate", str(p), "--table", "missing"]) == 2
    assert "no table 'missing'" in capsys.readouterr().err


def test_validate_uses_settings_definitions_path(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "defs.toml").write_text(DEFS_OK)
    monkeypatch.setenv("DAGFDW_DEFINITIONS_PATH", "defs.toml")
    assert _run(["validate"]) == 0


def test_validate_without_path(capsys) -> None:
    assert _run(["validate"]) == 2
    assert "no definition file given" in capsys.readouterr().err


def test_validate_missing_file(tmp_path: Path, capsys) -> None:
    assert _run(["validate", str(tmp_path / "nope.toml")]) == 1
    assert "cannot read definitions" in capsys.readouterr().err


@pytest.mark.parametrize("kind", ["SERVER", "table"])
def test_check_options_unknown_kind_is_usage_error(kind: str, capsys) -> None:
    assert _run(["check-options", "--kind", kind, "-o", "node_id_len=16"]) == 2
    assert "invalid choice" in capsys.readouterr().err


def test_check_options_unsupported_relation_lists_known(capsys) -> None:
    assert _run(["check-options", "--kind", "foreign_table", "-o", "relation=nodes"]) == 1
    err = capsys.readouterr().err
    assert "(unsupported_relation_name)" in err
    assert "[HINT] unsupported relation name (supported: edges)" in err


def test_relations_lists_registry(capsys) -> None:
    assert _run(["relations"]) == 0
    assert capsys.readouterr().out.strip() == "edges: varchar, varchar"


def test_relations_single(capsys) -> None:
    assert _run(["relations", "edges"]) == 0
    assert capsys.readouterr().out.strip() == "edges: varchar, varchar"
    assert _run(["relations", "nodes"]) == 1
    assert "(unsupported_relation_name)" in capsys.readouterr().err
