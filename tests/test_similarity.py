"""Unit tests for the string similarity kernel."""

from __future__ import annotations

import pytest

from decision_core.similarity import (
    NO_MATCH,
    best_match,
    capped_similarity,
    closest,
    distance,
    rank_candidates,
    similarity,
)

_WORDS = ["", "a", "allocate", "Alokate", "give", "GIVE", "negotiate", "Merchants", "x" * 12]


@pytest.mark.unit
class TestDistance:
    def test_identical_strings(self):
        assert distance("allocate", "allocate") == 0

    def test_case_insensitive(self):
        assert distance("Alice", "aLICE") == 0

    def test_known_values(self):
        assert distance("kitten", "sitting") == 3
        assert distance("allocate", "alokate") == 2
        assert distance("giv", "give") == 1

    def test_empty_side(self):
        assert distance("", "food") == 4
        assert distance("food", "") == 4

    @pytest.mark.parametrize("a", _WORDS)
    @pytest.mark.parametrize("b", _WORDS)
    def test_lower_bound_is_length_difference(self, a, b):
        assert distance(a, b) >= abs(len(a) - len(b))

    @pytest.mark.parametrize("a", _WORDS)
    @pytest.mark.parametrize("b", _WORDS)
    def test_symmetric(self, a, b):
        assert distance(a, b) == distance(b, a)


@pytest.mark.unit
class TestSimilarity:
    @pytest.mark.parametrize("s", _WORDS)
    def test_self_similarity_is_one(self, s):
        assert similarity(s, s) == 1.0

    @pytest.mark.parametrize("a", _WORDS)
    @pytest.mark.parametrize("b", _WORDS)
    def test_symmetric_and_bounded(self, a, b):
        score = similarity(a, b)
        assert score == similarity(b, a)
        assert 0.0 <= score <= 1.0

    def test_two_empty_strings(self):
        assert similarity("", "") == 1.0

    def test_one_typo(self):
        assert similarity("Alise", "Alice") == pytest.approx(0.8)

    def test_completely_different(self):
        assert similarity("abc", "xyz") == 0.0


@pytest.mark.unit
class TestCappedSimilarity:
    def test_exact(self):
        assert capped_similarity("give", "give") == 1.0

    def test_within_cap(self):
        assert capped_similarity("giv", "give") == pytest.approx(2 / 3)

    def test_at_cap_scores_zero(self):
        assert capped_similarity("abc", "xyz") == 0.0

    def test_beyond_cap(self):
        assert capped_similarity("inspire", "allocate") == 0.0

    def test_zero_cap_only_accepts_exact(self):
        assert capped_similarity("give", "give", cap=0) == 1.0
        assert capped_similarity("giv", "give", cap=0) == 0.0


@pytest.mark.unit
class TestBestMatch:
    def test_accepts_typo_above_threshold(self):
        match = best_match("Alise", ["Alice", "Bob"], threshold=0.6)
        assert match.name == "Alice"
        assert match.confidence >= 0.6
        assert match.found

    def test_rejects_below_threshold(self):
        assert best_match("Zzzzz", ["Alice", "Bob"], threshold=0.6) is NO_MATCH

    def test_empty_pool(self):
        match = best_match("Alice", [], threshold=0.0)
        assert not match.found
        assert match.confidence == 0.0

    def test_ties_break_alphabetically(self):
        assert closest("bat", ["hat", "cat"]).name == "cat"


@pytest.mark.unit
class TestRankCandidates:
    def test_best_first(self):
        # "Bob" shares nothing with "Alise" and scores exactly 0.0, so the floor drops it.
        assert rank_candidates("Alise", ["Bob", "Alice", "Alicia"]) == ["Alice", "Alicia"]

    def test_capped(self):
        pool = ["aa", "ab", "ac", "ad", "ae"]
        assert len(rank_candidates("a", pool)) == 3

    def test_ties_alphabetical(self):
        assert rank_candidates("bat", ["rat", "hat", "cat"], limit=3) == ["cat", "hat", "rat"]

    def test_deduplicates_case_insensitively(self):
        assert rank_candidates("food", ["Food", "food", "FOOD"]) == ["Food"]

    def test_floor_excludes(self):
        assert rank_candidates("abc", ["xyz"], floor=0.0) == []

    def test_empty_pool(self):
        assert rank_candidates("abc", []) == []
