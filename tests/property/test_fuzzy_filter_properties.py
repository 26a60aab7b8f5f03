from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from branchpick.matching import fuzzy_filter

_CHARS = st.characters(min_codepoint=33, max_codepoint=126)
_NAMES = st.lists(st.text(alphabet=_CHARS, min_size=1, max_size=30), max_size=30)


@given(_NAMES)
def test_empty_query_keeps_every_index_in_order(names: list[str]) -> None:
    assert fuzzy_filter(names, "") == list(range(len(names)))


@given(_NAMES, st.text(alphabet=_CHARS, min_size=1, max_size=8))
def test_filter_returns_unique_valid_indices(names: list[str], query: str) -> None:
    result = fuzzy_filter(names, query)

    assert len(result) == len(set(result))
    assert all(0 <= index < len(names) for index in result)


@given(_NAMES, st.text(alphabet=_CHARS, min_size=1, max_size=8))
def test_substring_matches_are_always_kept(names: list[str], query: str) -> None:
    result = set(fuzzy_filter(names, query))

    for index, name in enumerate(names):
        if query.lower() in name.lower():
            assert index in result
