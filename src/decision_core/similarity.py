"""String similarity kernel.

Generic edit-distance primitives shared by the interpreter, the parameter
extractor and the validator's suggestion ranking.

Kernel contract:
- Every comparison is case-insensitive.
- Every function is pure: no I/O, no caches, no shared state.  Calls are safe
  from any number of threads at once.
- Cost is ``O(len(a) * len(b))`` per pair.  Callers with very large
  candidate pools should pre-cap the pool before ranking.

Similarity is normalised edit distance::

    similarity(a, b) = 1 - distance(a, b) / max(len(a), len(b))

so identical strings score ``1.0`` and completely different strings of equal
length score ``0.0``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class NameMatch:
    """Best fuzzy match of an input against a list of known names.

    An empty ``name`` means nothing cleared the threshold.  ``confidence`` is
    then ``0.0`` so a miss can never be mistaken for a weak hit.

    Attributes:
        name:       Canonical name as stored in the candidate list.
        confidence: Similarity in [0.0, 1.0].
    """

    name: str
    confidence: float

    @property
    def found(self) -> bool:
        return bool(self.name)


NO_MATCH = NameMatch(name="", confidence=0.0)


def distance(a: str, b: str) -> int:
    """Return the unit-cost Levenshtein distance between *a* and *b*.

    Insertions, deletions and substitutions each cost 1.  Comparison is
    case-insensitive.

    Example::

        distance("allocate", "alokate") == 2
    """
    a = a.lower()
    b = b.lower()
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    # Two-row DP table; ``previous[j]`` is the distance between a[:i-1] and b[:j].
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j], current[j - 1], previous[j - 1]))
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Return normalised similarity of *a* and *b* in [0.0, 1.0].

    Two empty strings are identical and score ``1.0``.
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    score = 1.0 - distance(a, b) / longest
    return min(1.0, max(0.0, score))


def capped_similarity(a: str, b: str, cap: int = 3) -> float:
    """Return ``1 - distance/cap`` when the distance is within *cap*, else ``0.0``.

    This is the typo-tolerance signal of the hybrid confidence model: a
    handful of edits still scores, anything beyond the cap contributes
    nothing regardless of string length.
    """
    d = distance(a, b)
    if cap <= 0:
        return 1.0 if d == 0 else 0.0
    if d > cap:
        return 0.0
    return max(0.0, 1.0 - d / cap)


def closest(value: str, candidates: Iterable[str]) -> NameMatch:
    """Return the most similar candidate with no threshold applied.

    Ties are broken alphabetically (case-insensitive) so the result is stable
    across registry iteration orders.
    """
    best: NameMatch = NO_MATCH
    for candidate in candidates:
        score = similarity(value, candidate)
        if best is NO_MATCH or score > best.confidence or (
            score == best.confidence and candidate.lower() < best.name.lower()
        ):
            best = NameMatch(name=candidate, confidence=score)
    return best


def best_match(value: str, candidates: Iterable[str], threshold: float) -> NameMatch:
    """Return the most similar candidate if it scores at least *threshold*.

    Args:
        value:      Raw text from player input.
        candidates: Known names (e.g. a registry's ``all_names()``).
        threshold:  Minimum similarity to accept, in [0.0, 1.0].

    Returns:
        The best :class:`NameMatch`, or :data:`NO_MATCH` when the candidate
        list is empty or nothing reaches *threshold*.
    """
    match = closest(value, candidates)
    if match.found and match.confidence >= threshold:
        return match
    return NO_MATCH


def rank_candidates(
    value: str,
    candidates: Iterable[str],
    *,
    limit: int = 3,
    floor: float = 0.0,
) -> list[str]:
    """Rank *candidates* by similarity to *value*, best first.

    Used for "did you mean" suggestions.  Duplicates (case-insensitive) are
    collapsed, scores must be strictly above *floor*, ties are broken
    alphabetically and the result is capped at *limit*.

    Returns:
        Up to *limit* candidate names; empty when the pool is empty or no
        candidate clears *floor*.
    """
    seen: set[str] = set()
    scored: list[tuple[float, str]] = []
    for candidate in candidates:
        key = candidate.lower()
        if key in seen:
            continue
        seen.add(key)
        score = similarity(value, candidate)
        if score > floor:
            scored.append((score, candidate))

    scored.sort(key=lambda item: (-item[0], item[1].lower()))
    return [name for _, name in scored[: max(0, limit)]]
