"""Auto-checkout vs. interactive-selection decision."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from branchpick.models import ScoredCandidate

DEFAULT_DOMINANCE = 2


@dataclass(frozen=True)
class SingleWinner:
    candidate: ScoredCandidate


@dataclass(frozen=True)
class NeedsSelection:
    candidates: tuple[ScoredCandidate, ...]


Decision = SingleWinner | NeedsSelection


def decide(ranked: Sequence[ScoredCandidate], *, dominance: int = DEFAULT_DOMINANCE) -> Decision:
    """Pick the best candidate outright when it clearly dominates the runner-up.

    ``ranked`` must be non-empty and already ordered by ``rank``. Ambiguous
    results hand the whole ranked list to the selector, not just the tied head.
    """
    if not ranked:
        raise ValueError("decide() requires at least one ranked candidate")
    best = ranked[0]
    if len(ranked) == 1 or best.score > dominance * ranked[1].score:
        return SingleWinner(best)
    return NeedsSelection(tuple(ranked))
