"""
Runtime settings for dagfdw tooling.

Defines FdwSettings, a frozen dataclass carrying runtime configuration for the CLI and
any host glue that wants the same knobs. Defaults come from dagfdw.core.constants.

Precedence
- environment (DAGFDW_*) > TOML > defaults.
- TOML search when no explicit path is given: ./dagfdw.toml (either a [dagfdw] table or
  top-level keys), then ./pyproject.toml under [tool.dagfdw].

Import DAG discipline
- Depends only on stdlib and dagfdw.core.
- dagfdw.core never imports this module; core functions take plain keyword arguments.

Notes
- Loaders are lenient: unparseable values are ignored and the previous value kept.
  Call ``validated()`` to reject out-of-range values.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from dagfdw.core.constants import SUGGESTION_MAX_DISTANCE
from dagfdw.core.errors import SettingsError

__all__ = ["FdwSettings"]

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class FdwSettings:
    """
    Runtime settings for dagfdw.

    Attributes:
        suggestion_max_distance (int): Largest edit distance for "did you mean" hints.
        log_level (str): Root log level name used by the CLI.
        definitions_path (str | None): Definition file used by ``dagfdw validate`` when
            no path is passed on the command line.

    Examples:
        >>> FdwSettings(suggestion_max_distance=2)  # doctest: +ELLIPSIS
        FdwSettings(...)
    """

    suggestion_max_distance: int = SUGGESTION_MAX_DISTANCE
    log_level: str = "WARNING"
    definitions_path: str | None = None

    def validated(self) -> FdwSettings:
        """
        Return self if all values are in range.

        Raises:
            SettingsError: On a negative suggestion distance or an unknown log level.
        """
        if self.suggestion_max_distance < 0:
            raise SettingsError(
                f"suggestion_max_distance must be >= 0 (got {self.suggestion_max_distance})"
            )
        if self.log_level not in _LOG_LEVELS:
            raise SettingsError(
                f"log_level must be one of {sorted(_LOG_LEVELS)} (got {self.log_level!r})"
            )
        return self

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: FdwSettings, cfg: dict[str, Any] | None) -> FdwSettings:
        """Apply a loose config mapping onto FdwSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        if "suggestion_max_distance" in cfg:
            try:
                s = replace(s, suggestion_max_distance=int(cfg["suggestion_max_distance"]))
            except (TypeError, ValueError):
                pass

        if "log_level" in cfg and isinstance(cfg["log_level"], str):
            level = cfg["log_level"].strip().upper()
            if level in _LOG_LEVELS:
                s = replace(s, log_level=level)

        if "definitions_path" in cfg and isinstance(cfg["definitions_path"], str):
            s = replace(s, definitions_path=cfg["definitions_path"] or None)

        return s

    @classmethod
    def from_env(cls, base: FdwSettings | None = None, prefix: str = "DAGFDW_") -> FdwSettings:
        """
        Build FdwSettings from environment variables. Precedence is env > base > defaults.

        Recognized variables:
            - DAGFDW_SUGGESTION_MAX_DISTANCE
            - DAGFDW_LOG_LEVEL
            - DAGFDW_DEFINITIONS_PATH
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        for key in ("suggestion_max_distance", "log_level", "definitions_path"):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> FdwSettings:
        """
        Build FdwSettings from a TOML file.

        Search order when `path` is None:
            1) ./dagfdw.toml (with either a [dagfdw] table or top-level keys)
            2) ./pyproject.toml under [tool.dagfdw]

        Returns defaults if no file is present or readable.
        """
        s = cls()

        def _load_toml(p: Path) -> dict[str, Any] | None:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError):
                return None

        cfg: dict[str, Any] | None = None

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "dagfdw.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if not isinstance(data, dict):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("dagfdw") if isinstance(tool, dict) else None
            elif isinstance(data.get("dagfdw"), dict):
                cfg = data["dagfdw"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> FdwSettings:
        """
        Load FdwSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (dagfdw.toml, pyproject.toml).

        Returns:
            FdwSettings
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s
