"""Command interpreter: free text -> ranked candidate actions.

Every action name and alias in the catalog is compared against every run of
input tokens with the same word count; the best window per action becomes
that action's :class:`ParseResult`.  Candidates are then filtered, ranked
and checked for near ties.

Ranking order:
    1. Combined confidence, highest first.
    2. Historical usage frequency, highest first.
    3. Canonical action name, alphabetical.

A near tie between the top two candidates is reported on the
:class:`Interpretation` and logged; the interpreter never picks one
silently.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace

from decision_core.catalog import ActionCatalog, ActionDefinition
from decision_core.config import InterpreterSettings
from decision_core.errors import EmptyCatalogError
from decision_core.interpreter.scoring import (
    CharacterOverlapScorer,
    SemanticScorer,
    combined_confidence,
)
from decision_core.interpreter.types import (
    MATCH_ALIAS,
    MATCH_EXACT,
    MATCH_FUZZY,
    Interpretation,
    ParseResult,
)
from decision_core.policies import ToneTable
from decision_core.similarity import NameMatch, best_match, distance
from decision_core.text import content_tokens, parse_number, tokenize, windows
from decision_core.world import EntityRegistry

logger = logging.getLogger(__name__)


class CommandInterpreter:
    """Scores player input against an action catalog.

    Args:
        catalog:         Read-only action catalog.
        settings:        Interpreter settings; defaults to ``config.interpreter``.
        semantic_scorer: Semantic signal; defaults to :class:`CharacterOverlapScorer`.
        usage_frequency: Action name -> historical usage weight.  Read on
                         every call, so the caller may keep updating it.
        tone_table:      Keyword table for :meth:`detect_tone`.
    """

    def __init__(
        self,
        catalog: ActionCatalog,
        *,
        settings: InterpreterSettings | None = None,
        semantic_scorer: SemanticScorer | None = None,
        usage_frequency: Mapping[str, float] | None = None,
        tone_table: ToneTable | None = None,
    ) -> None:
        self._catalog = catalog
        if settings is None:
            from decision_core.config import config

            settings = config.interpreter
        self._settings = settings
        self._scorer = semantic_scorer or CharacterOverlapScorer()
        self._usage: Mapping[str, float] = usage_frequency if usage_frequency is not None else {}
        self._tones = tone_table or ToneTable.default()

    @property
    def settings(self) -> InterpreterSettings:
        return self._settings

    # ── Action matching ──────────────────────────────────────────────────────

    def parse(self, text: str) -> list[ParseResult]:
        """Return candidate actions for *text*, best first.

        Candidates below ``min_candidate_confidence`` are dropped and the list
        is capped at ``max_candidates``.  Empty input yields an empty list.

        Raises:
            EmptyCatalogError: If the catalog holds no actions.
        """
        floor = self._settings.min_candidate_confidence
        results = [r for r in self._score_all(text) if r.confidence >= floor]
        return results[: max(0, self._settings.max_candidates)]

    def score_action(self, text: str, action_name: str) -> ParseResult | None:
        """Score *text* against one action, bypassing the candidate floor.

        Used when the caller has already chosen the action (for example after
        asking the player to resolve an ambiguity).  The best window is only
        removed from the parameters when it reads as the action: a name or
        alias, a typo within ``max_edit_distance``, or a score at or above
        ``min_candidate_confidence``.  Otherwise every content token is kept,
        so "alice food" chosen as ``inspire`` still targets Alice.

        Returns ``None`` when the action is unknown or the input is empty.
        """
        self._action_names()
        action = self._catalog.lookup(action_name)
        tokens = tokenize(text)
        if action is None or not tokens:
            return None
        result = self._score_action(action, tokens)
        if result is None or self._names_the_action(result):
            return result
        return replace(result, raw_parameters=tuple(content_tokens(tokens)))

    def find_ambiguous_matches(
        self, text: str, threshold: float | None = None
    ) -> list[ParseResult]:
        """Return every action scoring at least *threshold*, best first.

        Actions are scored directly, so neither ``min_candidate_confidence``
        nor ``max_candidates`` applies; a threshold below the candidate floor
        returns the weaker matches too.
        """
        if threshold is None:
            threshold = self._settings.ambiguity_threshold
        return [result for result in self._score_all(text) if result.confidence >= threshold]

    def interpret(self, text: str) -> Interpretation:
        """Rank candidates for *text* and decide whether they are ambiguous.

        The result is ambiguous when at least two candidates exist and the
        gap between the top two is within ``near_tie_margin``.
        """
        candidates = tuple(self.parse(text))
        if len(candidates) < 2:
            return Interpretation(text=text, candidates=candidates)

        best = candidates[0].confidence
        margin = best - candidates[1].confidence
        near_tie = self._settings.near_tie_margin
        if margin > near_tie:
            return Interpretation(text=text, candidates=candidates, margin=margin)

        tied = tuple(c.action for c in candidates if best - c.confidence <= near_tie)
        logger.info(
            "Ambiguous command %r: %s within %.3f of each other",
            text,
            ", ".join(tied),
            near_tie,
        )
        return Interpretation(
            text=text,
            candidates=candidates,
            is_ambiguous=True,
            margin=margin,
            tied=tied,
        )

    # ── Signal extraction ────────────────────────────────────────────────────

    def extract_quantity(self, text: str) -> float | None:
        """Return the first number in *text*, or ``None`` if there is none."""
        for token in tokenize(text):
            value = parse_number(token)
            if value is not None:
                return value
        return None

    def detect_tone(self, text: str) -> str:
        """Return the tone of the first tone keyword in *text*."""
        return self._tones.tone_of(tokenize(text))

    def extract_entity_names(
        self,
        text: str,
        registry: EntityRegistry,
        threshold: float | None = None,
    ) -> list[NameMatch]:
        """Fuzzy-match runs of input tokens against *registry*'s names.

        Single-word names are matched against non-stopword tokens; multi-word
        names against runs of the same length.  Each name appears at most
        once, with its best confidence.  Results are ordered by confidence,
        then name.
        """
        if threshold is None:
            threshold = self._settings.entity_threshold
        names = list(registry.all_names())
        if not names:
            return []

        tokens = tokenize(text)
        pools: dict[int, list[str]] = {}
        for name in names:
            pools.setdefault(max(1, len(tokenize(name))), []).append(name)

        found: dict[str, NameMatch] = {}
        for size, pool in pools.items():
            source = content_tokens(tokens) if size == 1 else tokens
            for _, window in windows(source, size):
                match = best_match(window, pool, threshold)
                if not match.found:
                    continue
                previous = found.get(match.name)
                if previous is None or match.confidence > previous.confidence:
                    found[match.name] = match

        return sorted(found.values(), key=lambda m: (-m.confidence, m.name.lower()))

    # ── Internals ────────────────────────────────────────────────────────────

    def _action_names(self) -> list[str]:
        names = list(self._catalog.all_names())
        if not names:
            raise EmptyCatalogError("Action catalog is empty; nothing to match commands against")
        return names

    def _score_all(self, text: str) -> list[ParseResult]:
        """Score every catalog action against *text*, ranked, with no floor."""
        names = self._action_names()
        tokens = tokenize(text)
        if not tokens:
            return []

        results: list[ParseResult] = []
        for name in names:
            action = self._catalog.lookup(name)
            if action is None:
                continue
            result = self._score_action(action, tokens)
            if result is None:
                continue
            logger.debug(
                "Scored %r for %r: %.3f via %r (%s)",
                action.name,
                text,
                result.confidence,
                result.matched_text,
                result.match_type,
            )
            results.append(result)

        results.sort(key=lambda r: (-r.confidence, -r.frequency, r.action))
        return results

    def _names_the_action(self, result: ParseResult) -> bool:
        if result.match_type != MATCH_FUZZY:
            return True
        if result.confidence >= self._settings.min_candidate_confidence:
            return True
        return result.edit_distance <= self._settings.max_edit_distance

    def _score_action(self, action: ActionDefinition, tokens: list[str]) -> ParseResult | None:
        best: tuple[float, int, int, str, str] | None = None
        for candidate in action.names:
            candidate_tokens = tokenize(candidate)
            size = len(candidate_tokens)
            if size == 0:
                continue
            normalized = " ".join(candidate_tokens)
            for start, window in windows(tokens, size):
                score = combined_confidence(window, normalized, self._settings, self._scorer)
                if best is None or score > best[0]:
                    best = (score, start, size, candidate, window)

        if best is None:
            return None

        score, start, size, matched, window = best
        if window == " ".join(tokenize(action.name)):
            match_type = MATCH_EXACT
        elif window == " ".join(tokenize(matched)):
            match_type = MATCH_ALIAS
        else:
            match_type = MATCH_FUZZY

        remaining = tokens[:start] + tokens[start + size :]
        return ParseResult(
            action=action.name,
            confidence=score,
            frequency=float(self._usage.get(action.name, 0.0)),
            raw_parameters=tuple(content_tokens(remaining)),
            matched_text=matched,
            match_type=match_type,
            edit_distance=distance(window, " ".join(tokenize(matched))),
        )
