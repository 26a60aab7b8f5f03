"""Loose live filter used to narrow the picker while the user types."""

from __future__ import annotations

from collections.abc import Sequence

from thefuzz import fuzz

from branchpick.matching.scorer import is_subsequence

DEFAULT_THRESHOLD = 90
_SUBSTRING_SCORE = 100
_SUBSEQUENCE_SCORE = 95


def fuzzy_filter(
    names: Sequence[str],
    query: str,
    threshold: int = DEFAULT_THRESHOLD,
) -> list[int]:
    """
    Return indices of names matching query, most relevant first.

    Substring hits rank above subsequence hits, which rank above plain fuzzy
    similarity. Only similarity scores >= threshold survive. Ties keep the
    order of ``names``.
    """
    if not query:
        return list(range(len(names)))

    query_lower = query.lower()
    scored: list[tuple[int, int]] = []

    for index, name in enumerate(names):
        name_lower = name.lower()

        if query_lower in name_lower:
            scored.append((_SUBSTRING_SCORE, index))
            continue

        if is_subsequence(query_lower, name_lower):
            scored.append((_SUBSEQUENCE_SCORE, index))
            continue

        similarity = max(
            fuzz.partial_ratio(query_lower, name_lower),
            fuzz.token_sort_ratio(query_lower, name_lower),
        )
        if similarity >= threshold:
            scored.append((similarity, index))

    scored.sort(key=lambda item: (-item[0], item[1]))
    return [index for _, index in scored]
