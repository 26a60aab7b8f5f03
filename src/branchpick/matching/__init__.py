"""Branch name matching: weighted scorer, ranker and live fuzzy filter."""

from .fuzzy_filter import fuzzy_filter
from .ranker import rank, score_candidates
from .scorer import EXACT_MATCH_SCORE, score

__all__ = [
    "EXACT_MATCH_SCORE",
    "fuzzy_filter",
    "rank",
    "score",
    "score_candidates",
]
