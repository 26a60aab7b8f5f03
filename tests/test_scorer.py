from __future__ import annotations

import pytest

from branchpick.matching.scorer import EXACT_MATCH_SCORE, is_subsequence, score


def test_exact_match_short_circuits_case_insensitively() -> None:
    assert score("main", "main") == EXACT_MATCH_SCORE
    assert score("MAIN", "main") == EXACT_MATCH_SCORE
    assert score("Feature/Login", "feature/LOGIN") == EXACT_MATCH_SCORE


def test_exact_match_outranks_every_containing_branch() -> None:
    names = ["prod", "production", "feature/prod", "prod/hotfix", "release/prod-fix"]
    scores = {name: score(name, "prod") for name in names}

    assert scores["prod"] == EXACT_MATCH_SCORE
    assert all(value < EXACT_MATCH_SCORE for name, value in scores.items() if name != "prod")


def test_ticket_and_bare_number_bonuses_both_apply() -> None:
    # 600 ticket + 400 number + 250 subsequence + 100 substring - 12 // 5
    assert score("fix/#123-bug", "123") == 1348


def test_number_with_path_token_and_suffix() -> None:
    # 400 number + 1000 suffix + 300 token + 250 subsequence + 100 substring - 10 // 5
    assert score("feature/42", "42") == 2048


def test_bare_number_uses_integer_digits() -> None:
    # "007" is the number 7, which appears in the name; nothing else matches
    assert score("bond-7", "007") == 399


def test_very_long_numeric_pattern_is_scored_without_overflow() -> None:
    digits = "1" * 5000

    assert score("feature/x", digits) <= 0
    # 400 number + 1000 suffix + 300 token + 250 subsequence + 100 substring - 5004 // 5
    assert score(f"fix/{digits}", digits) == 2050 - 5004 // 5
    assert score(f"fix-{digits}", "00" + digits) == 400 - 5004 // 5


def test_all_zero_pattern_matches_single_zero() -> None:
    assert score("hotfix-0", "000") == 400 - 8 // 5


def test_suffix_prefix_subsequence_and_substring_compound() -> None:
    # 1000 suffix + 500 prefix + 250 subsequence + 100 substring - 5 // 5
    assert score("ab-ab", "ab") == 1849


def test_suffix_with_path_token() -> None:
    # 1000 suffix + 300 token + 250 subsequence + 100 substring - 12 // 5
    assert score("feature/prod", "prod") == 1648


def test_prefix_match_gets_common_branch_bonus_only_for_exact_common_name() -> None:
    # 500 prefix + 250 subsequence + 100 substring - 0 + 50 common bonus
    assert score("main", "ma") == 900
    # 300 token + 250 subsequence + 100 substring - 11 // 5, no bonus
    assert score("origin/main", "ma") == 648


def test_common_bonus_applies_to_production() -> None:
    # 500 prefix + 250 subsequence + 100 substring - 10 // 5 + 40 common bonus
    assert score("production", "prod") == 888


def test_subsequence_only_match() -> None:
    # "chestag" is spread across "cheddar/staging": 250 - 15 // 5
    assert score("cheddar/staging", "chestag") == 247


@pytest.mark.parametrize(
    ("branch", "pattern"),
    [
        ("main", "xyz"),
        ("feature/very-long-branch-name", "qq"),
        ("develop", "zz"),
    ],
)
def test_unrelated_names_score_non_positive(branch: str, pattern: str) -> None:
    assert score(branch, pattern) <= 0


def test_longer_names_rank_lower_all_else_equal() -> None:
    assert score("fix/login", "login") > score("fix/extra-long/login", "login")


def test_is_subsequence() -> None:
    assert is_subsequence("chestag", "cheddar/staging") is True
    assert is_subsequence("", "anything") is True
    assert is_subsequence("abc", "acb") is False
