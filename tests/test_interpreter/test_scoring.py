"""Unit tests for the hybrid confidence model."""

from __future__ import annotations

import pytest

from decision_core.config import InterpreterSettings
from decision_core.interpreter import (
    CharacterOverlapScorer,
    ConstantSemanticScorer,
    combined_confidence,
    exact_match_score,
)

_PAIRS = [
    ("give", "give"),
    ("giv", "give"),
    ("alocate", "allocate"),
    ("food", "negotiate"),
    ("", "inspire"),
    ("x", ""),
]


@pytest.mark.unit
class TestExactMatchScore:
    def test_equal(self):
        assert exact_match_score("Give", "give") == 1.0

    def test_containment(self):
        assert exact_match_score("giv", "give") == 0.95
        assert exact_match_score("negotiates", "negotiate") == 0.95

    def test_short_containment_ignored(self):
        assert exact_match_score("al", "allocate") == 0.0

    def test_unrelated(self):
        assert exact_match_score("food", "allocate") == 0.0


@pytest.mark.unit
class TestSemanticScorers:
    def test_character_overlap(self):
        scorer = CharacterOverlapScorer()
        assert scorer.score("alocate", "allocate") == 1.0
        assert scorer.score("abc", "xyz") == 0.0
        assert scorer.score("ab", "bc") == pytest.approx(1 / 3)

    def test_constant_is_clamped(self):
        assert ConstantSemanticScorer(2.0).score("a", "b") == 1.0
        assert ConstantSemanticScorer(-1.0).score("a", "b") == 0.0


@pytest.mark.unit
class TestCombinedConfidence:
    def test_exact_match_scores_one(self):
        settings = InterpreterSettings()
        score = combined_confidence("give", "give", settings, CharacterOverlapScorer())
        assert score == pytest.approx(1.0)

    def test_default_weighting(self):
        settings = InterpreterSettings()
        score = combined_confidence("giv", "give", settings, ConstantSemanticScorer(0.0))
        assert score == pytest.approx(0.3 * 0.95 + 0.4 * (2 / 3))

    @pytest.mark.parametrize(
        "weights",
        [(0.3, 0.4, 0.3), (5.0, 5.0, 5.0), (-1.0, -1.0, -1.0), (0.0, 0.0, 0.0), (1.0, -3.0, 2.0)],
    )
    @pytest.mark.parametrize(("text", "candidate"), _PAIRS)
    def test_always_in_unit_interval(self, weights, text, candidate):
        exact, fuzzy, semantic = weights
        settings = InterpreterSettings(
            exact_weight=exact, fuzzy_weight=fuzzy, semantic_weight=semantic
        )
        score = combined_confidence(text, candidate, settings, CharacterOverlapScorer())
        assert 0.0 <= score <= 1.0
