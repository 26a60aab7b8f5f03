"""Candidate scoring and ordering."""

from __future__ import annotations

from collections.abc import Iterable

from branchpick.matching.scorer import score
from branchpick.models import BranchRef, ScoredCandidate


def score_candidates(refs: Iterable[BranchRef], pattern: str) -> list[ScoredCandidate]:
    """Score every ref against pattern, keeping only positive scores."""
    scored: list[ScoredCandidate] = []
    for ref in refs:
        value = score(ref.name, pattern)
        if value > 0:
            scored.append(ScoredCandidate(branch=ref, score=value))
    return scored


def rank(candidates: Iterable[ScoredCandidate]) -> list[ScoredCandidate]:
    # sorted() is stable, so equal (score, locality) keeps input order
    return sorted(candidates, key=lambda item: (-item.score, not item.branch.is_local))
