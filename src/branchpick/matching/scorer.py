"""Weighted branch-name scoring against a short user pattern.

Every rule below is additive except the exact match, which returns at once:

======================================  ======
rule                                    points
======================================  ======
exact (case-insensitive) name           10000
``#<pattern>`` ticket reference           +600
bare number anywhere in the name          +400
name ends with pattern                   +1000
name starts with pattern                  +500
``/``-delimited path token                +300
in-order subsequence                      +250
contiguous substring                      +100
length penalty                        -len // 5
common branch name bonus                +20..50
======================================  ======

A result of zero or less means "no match".
"""

from __future__ import annotations

import re

EXACT_MATCH_SCORE = 10000
TICKET_BONUS = 600
NUMBER_BONUS = 400
SUFFIX_BONUS = 1000
PREFIX_BONUS = 500
TOKEN_BONUS = 300
SUBSEQUENCE_BONUS = 250
SUBSTRING_BONUS = 100
LENGTH_PENALTY_DIVISOR = 5

COMMON_BRANCH_BONUS = {
    "master": 50,
    "main": 50,
    "develop": 40,
    "dev": 40,
    "production": 40,
    "prod": 40,
    "staging": 30,
    "stage": 30,
    "test": 20,
}

_NUMBER_PATTERN = re.compile(r"[0-9]+")


def is_subsequence(pattern: str, text: str) -> bool:
    """Check if pattern's chars occur in text in order, gaps allowed."""
    it = iter(text)
    return all(char in it for char in pattern)


def _integer_digits(digits: str) -> str:
    """Canonical integer form of an ASCII digit run, without int() size limits."""
    return digits.lstrip("0") or "0"


def _is_path_token(name: str, pattern: str) -> bool:
    return f"/{pattern}" in name or f"{pattern}/" in name


def score(branch_name: str, pattern: str) -> int:
    name = branch_name.lower()
    needle = pattern.lower()

    if name == needle:
        return EXACT_MATCH_SCORE

    total = 0

    # ticket and number checks stay case-sensitive on the raw inputs
    if _NUMBER_PATTERN.fullmatch(pattern):
        if f"#{pattern}" in branch_name:
            total += TICKET_BONUS
        if _integer_digits(pattern) in branch_name:
            total += NUMBER_BONUS

    if name.endswith(needle):
        total += SUFFIX_BONUS
    if name.startswith(needle):
        total += PREFIX_BONUS
    if _is_path_token(name, needle):
        total += TOKEN_BONUS
    if is_subsequence(needle, name):
        total += SUBSEQUENCE_BONUS
    if needle in name:
        total += SUBSTRING_BONUS

    total -= len(branch_name) // LENGTH_PENALTY_DIVISOR

    bonus = COMMON_BRANCH_BONUS.get(name)
    if bonus is not None and needle in name:
        total += bonus

    return total
