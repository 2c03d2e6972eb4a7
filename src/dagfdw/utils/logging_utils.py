"""
Console output for dagfdw command-line tools.

Two channels share the terminal:
- diagnostics: records from the ``dagfdw.*`` module loggers, routed by
  ``configure_cli_logging`` (below-WARNING records to stdout, WARNING and up to stderr);
- results: one line per checked object, written by ``report_ok`` / ``report_error``
  regardless of the log level.

Result lines
    [OK] <message>                     stdout
    [ERROR] <message> (<kind>)         stderr
    [HINT] <hint>                      stderr, only when a hint exists
"""

from __future__ import annotations

import logging
import sys

from dagfdw.core.errors import FdwValidationError

__all__ = ["configure_cli_logging", "report_ok", "report_error", "report_failure"]

_LOG_FORMAT = "%(name)s - %(levelname)s - %(message)s"


class _BelowLevelFilter(logging.Filter):
    """Pass records strictly below ``level``."""

    def __init__(self, level: int) -> None:
        super().__init__()
        self._level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self._level


def _stream_handler(stream, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(stream=stream)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def configure_cli_logging(
    level: int = logging.WARNING,
    *,
    split_level: int = logging.WARNING,
) -> None:
    """
    Install the CLI's root handlers, replacing any existing ones.

    Args:
        level (int): Root level; records below it are dropped.
        split_level (int): Records at or above this level go to stderr, the rest to
            stdout. Clamped to DEBUG.
    """
    split_level = max(split_level, logging.DEBUG)
    formatter = logging.Formatter(_LOG_FORMAT)

    out = _stream_handler(sys.stdout, logging.NOTSET, formatter)
    out.addFilter(_BelowLevelFilter(split_level))
    err = _stream_handler(sys.stderr, split_level, formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(out)
    root.addHandler(err)


def report_ok(message: str) -> None:
    print(f"[OK] {message}", file=sys.stdout)


def report_failure(message: str, *, kind: str | None = None, hint: str | None = None) -> None:
    """Write an ``[ERROR]`` line (and ``[HINT]`` line) for a failure without an error object."""
    suffix = f" ({kind})" if kind else ""
    print(f"[ERROR] {message}{suffix}", file=sys.stderr)
    if hint:
        print(f"[HINT] {hint}", file=sys.stderr)


def report_error(exc: FdwValidationError, *, prefix: str = "") -> None:
    """Write a validation error with its stable kind and hint."""
    report_failure(f"{prefix}{exc}", kind=exc.kind.value, hint=exc.hint)
