"""
dagfdw core defaults.

Defines the numeric constants shared by option parsing and structural validation.
This module is zero-IO and uses only the Python standard library.

Notes:
    - Identifier columns hold node IDs rendered as hex, so each raw byte takes
      ``HEX_DIGITS_PER_BYTE`` characters.
    - The host adds a fixed variable-length header to every declared VARCHAR length
      modifier; ``VARHDRSZ`` is that overhead and the default ``format_overhead``.
    - Changes to these constants change the accepted table layouts; bump with care.
"""

from __future__ import annotations

__all__ = [
    "SUGGESTION_MAX_DISTANCE",
    "MAX_RELATION_COLUMNS",
    "HEX_DIGITS_PER_BYTE",
    "VARHDRSZ",
    "MAX_OPTION_INT",
]

# Largest edit distance for which an unknown option still gets a "did you mean" hint.
SUGGESTION_MAX_DISTANCE: int = 4

# Upper bound on the number of expected columns a relation descriptor may declare.
MAX_RELATION_COLUMNS: int = 8

# Textual encoding of node IDs: two hex digits per byte.
HEX_DIGITS_PER_BYTE: int = 2

# Variable-length header size added by the host to declared VARCHAR lengths.
VARHDRSZ: int = 4

# Integer option values must fit a signed 32-bit host integer.
MAX_OPTION_INT: int = 2**31 - 1
