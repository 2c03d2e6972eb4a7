"""
Closest-match lookup for "did you mean" hints.

Provides a bounded Levenshtein distance and a nearest-candidate search used when an
option name is not recognized.

Notes:
    - Zero-IO, stdlib only.
    - ``closest`` is deterministic: candidates are scanned in the given order and the
      first candidate reaching the minimum distance wins ties.

Examples:
    >>> from dagfdw.core.matching import closest, levenshtein
    >>> levenshtein("noide_id_len", "node_id_len")
    1
    >>> closest("noide_id_len", ["node_id_len"], 4)
    'node_id_len'
    >>> closest("zzzzzzzzzz", ["node_id_len"], 4) is None
    True
"""

from __future__ import annotations

from collections.abc import Iterable

__all__ = ["levenshtein", "closest"]


def levenshtein(a: str, b: str, max_distance: int | None = None) -> int:
    """
    Edit distance between two strings (insertions, deletions, substitutions).

    Args:
        a (str): First string.
        b (str): Second string.
        max_distance (int | None): Optional bound. Once the distance is known to
            exceed it, ``max_distance + 1`` is returned without finishing the table.

    Returns:
        int: The edit distance, or ``max_distance + 1`` when bounded and exceeded.
    """
    if max_distance is not None and abs(len(a) - len(b)) > max_distance:
        return max_distance + 1
    dp = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        prev = dp[0]
        dp[0] = i
        row_min = dp[0]
        for j, cb in enumerate(b, 1):
            ins = dp[j] + 1
            dele = dp[j - 1] + 1
            sub = prev + (0 if ca == cb else 1)
            prev, dp[j] = dp[j], min(ins, dele, sub)
            row_min = min(row_min, dp[j])
        # Row minima never decrease, so the bound is final here.
        if max_distance is not None and row_min > max_distance:
            return max_distance + 1
    return dp[-1]


def closest(query: str, candidates: Iterable[str], max_distance: int) -> str | None:
    """
    Return the candidate nearest to ``query`` within ``max_distance``, if any.

    Args:
        query (str): The unrecognized string.
        candidates (Iterable[str]): Known names, scanned in order.
        max_distance (int): Largest accepted edit distance (inclusive).

    Returns:
        str | None: The first candidate with the smallest distance not above
        ``max_distance``, or None when no candidate qualifies.
    """
    best: str | None = None
    best_dist = max_distance + 1
    for cand in candidates:
        d = levenshtein(query, cand, max_distance)
        if d < best_dist:
            best, best_dist = cand, d
    return best
