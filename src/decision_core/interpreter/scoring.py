"""Hybrid confidence model for action matching.

Three signals are blended into one score per (input window, action name)
pair::

    combined = w_exact * exact_match_score
             + w_fuzzy * capped_similarity
             + w_semantic * semantic_score

The result is clamped to [0.0, 1.0] whatever the weights are.  The semantic
signal is a strategy object so a real model can replace the placeholder
without touching ranking logic.
"""

from __future__ import annotations

from typing import Protocol

from decision_core.config import InterpreterSettings
from decision_core.similarity import capped_similarity

#: exact_match_score when one string contains the other.
CONTAINMENT_SCORE = 0.95
#: Shortest side that may count as a containment match.
MIN_CONTAINMENT_LENGTH = 3


class SemanticScorer(Protocol):
    """Pluggable semantic similarity signal.  Must return a value in [0, 1]."""

    def score(self, text: str, candidate: str) -> float: ...


class ConstantSemanticScorer:
    """Returns the same score for every pair."""

    def __init__(self, value: float = 0.0) -> None:
        self.value = _clamp(value)

    def score(self, text: str, candidate: str) -> float:
        return self.value


class CharacterOverlapScorer:
    """Jaccard overlap of the character sets of both strings.

    A cheap stand-in for meaning: "distribute" and "distribution" share most
    letters, "inspire" and "suppress" share few.
    """

    def score(self, text: str, candidate: str) -> float:
        left = set(text.lower()) - {" "}
        right = set(candidate.lower()) - {" "}
        if not left and not right:
            return 1.0
        union = left | right
        return len(left & right) / len(union)


def exact_match_score(text: str, candidate: str) -> float:
    """1.0 on equality, :data:`CONTAINMENT_SCORE` on containment, else 0.0."""
    a = text.lower()
    b = candidate.lower()
    if a == b:
        return 1.0
    shorter, longer = (a, b) if len(a) <= len(b) else (b, a)
    if len(shorter) >= MIN_CONTAINMENT_LENGTH and shorter in longer:
        return CONTAINMENT_SCORE
    return 0.0


def combined_confidence(
    text: str,
    candidate: str,
    settings: InterpreterSettings,
    scorer: SemanticScorer,
) -> float:
    """Blend the three signals for *text* against *candidate*."""
    exact = exact_match_score(text, candidate)
    fuzzy = capped_similarity(text, candidate, cap=settings.max_edit_distance)
    semantic = _clamp(scorer.score(text, candidate))
    return _clamp(
        settings.exact_weight * exact
        + settings.fuzzy_weight * fuzzy
        + settings.semantic_weight * semantic
    )


def _clamp(value: float) -> float:
    if value != value:  # NaN
        return 0.0
    return min(1.0, max(0.0, value))
