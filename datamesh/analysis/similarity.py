"""
datamesh/analysis/similarity.py

Column-name similarity scoring.
"""

from __future__ import annotations


def levenshtein_distance(first: str, second: str) -> int:
    """
    Classic dynamic-programming edit distance, two rows at a time.
    """

    if len(first) < len(second):
        first, second = second, first
    if not second:
        return len(first)

    previous = list(range(len(second) + 1))
    for i, first_char in enumerate(first, start=1):
        current = [i]
        for j, second_char in enumerate(second, start=1):
            if first_char == second_char:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j - 1], previous[j], current[j - 1]))
        previous = current
    return previous[-1]


def name_similarity(
    first: str,
    second: str,
    *,
    containment_score: float = 0.8,
) -> float:
    """
    Case-insensitive name similarity in [0, 1].

    Equal names score 1.0, containment scores ``containment_score``, and
    anything else scores one minus the edit distance normalized by the
    longer name.
    """

    left = first.lower()
    right = second.lower()
    if left == right:
        return 1.0
    if left in right or right in left:
        return containment_score

    longest = max(len(left), len(right))
    return 1.0 - levenshtein_distance(left, right) / longest
