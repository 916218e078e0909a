"""Fuzzy matching for typo-tolerant lookups.

This module provides edit distance calculation plus the two consumers of it:
the fuzzy name bonus applied during ranking and the "did you mean" ordering
used when a lookup misses.

Rules:
- Distance 0 earns no fuzzy bonus (exact matches are scored elsewhere)
- Distance 1 earns +15, distance 2 earns +5
- Anything further away earns nothing
"""

from __future__ import annotations

from collections.abc import Iterable


FUZZY_MAX_DISTANCE = 2
FUZZY_BASE_BONUS = 25
FUZZY_DISTANCE_PENALTY = 10


def levenshtein_distance(s1: str, s2: str, max_distance: int | None = None) -> int:
    """Calculate the Levenshtein (edit) distance between two strings.

    Uses dynamic programming for O(m*n) time complexity, with optional
    early termination when distance exceeds max_distance.

    Args:
        s1: First string.
        s2: Second string.
        max_distance: If provided, return max_distance+1 early when
            distance is guaranteed to exceed this threshold.

    Returns:
        The minimum number of single-character edits (insertions,
        deletions, substitutions) needed to change s1 into s2.
        If max_distance is set and exceeded, returns max_distance+1.

    Examples:
        >>> levenshtein_distance("kitten", "sitting")
        3
        >>> levenshtein_distance("modal", "model")
        1
        >>> levenshtein_distance("", "abc")
        3
    """
    if not s1:
        return len(s2)
    if not s2:
        return len(s1)

    # Use shorter string as columns for space efficiency
    if len(s1) > len(s2):
        s1, s2 = s2, s1

    m, n = len(s1), len(s2)

    if max_distance is not None and n - m > max_distance:
        return max_distance + 1

    # Only need two rows at a time
    prev_row = list(range(m + 1))
    curr_row = [0] * (m + 1)

    for j in range(1, n + 1):
        curr_row[0] = j
        row_min = curr_row[0]
        for i in range(1, m + 1):
            cost = 0 if s1[i - 1] == s2[j - 1] else 1
            curr_row[i] = min(
                prev_row[i] + 1,  # deletion
                curr_row[i - 1] + 1,  # insertion
                prev_row[i - 1] + cost,  # substitution
            )
            row_min = min(row_min, curr_row[i])

        if max_distance is not None and row_min > max_distance:
            return max_distance + 1

        prev_row, curr_row = curr_row, prev_row

    return prev_row[m]


def fuzzy_name_bonus(query: str, name: str) -> int:
    """Score bonus for a name that is one or two edits away from the query.

    Both arguments are expected to be lowercased already.
    """
    distance = levenshtein_distance(query, name, FUZZY_MAX_DISTANCE)
    if 0 < distance <= FUZZY_MAX_DISTANCE:
        return max(0, FUZZY_BASE_BONUS - distance * FUZZY_DISTANCE_PENALTY)
    return 0


def rank_by_distance(query: str, candidates: Iterable[str]) -> list[tuple[str, int]]:
    """Order candidates by case-insensitive edit distance to the query.

    The sort is stable, so candidates at the same distance keep the order
    they were supplied in.

    Returns:
        List of (candidate, distance) tuples, closest first.
    """
    query_lower = query.lower()
    scored = [(candidate, levenshtein_distance(query_lower, candidate.lower())) for candidate in candidates]
    scored.sort(key=lambda pair: pair[1])
    return scored
