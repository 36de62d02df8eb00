"""Parameter extractor: raw tokens -> typed, resolved parameters.

Each token is classified in a fixed order:

    1. Numeric (optionally followed by one unit word)  -> QUANTITY
    2. Tone keyword                                     -> TONE
    3. Fuzzy entity resolution, NPC -> Faction -> Resource, first registry
       whose best name clears the threshold wins
    4. Otherwise                                        -> UNKNOWN

Multi-word entity names ("Iron Guild") are matched first, by exact
case-insensitive comparison of the longest run of tokens; single tokens
are resolved fuzzily.  Unresolved tokens become invalid parameters with a
reason rather than errors.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from decision_core.config import ExtractionSettings
from decision_core.extraction.quantity import parse_quantity
from decision_core.extraction.types import ExtractedParameter, ExtractedParameters, ParameterType
from decision_core.policies import ToneTable
from decision_core.similarity import NameMatch, best_match, closest
from decision_core.text import looks_numeric, tokenize
from decision_core.world import EntityKind, WorldRegistries

logger = logging.getLogger(__name__)

#: Registry resolution order.  Earlier kinds win when several clear the threshold.
RESOLUTION_ORDER: tuple[EntityKind, ...] = (EntityKind.NPC, EntityKind.FACTION, EntityKind.RESOURCE)

_KIND_LABELS = {
    EntityKind.NPC: "NPC",
    EntityKind.FACTION: "faction",
    EntityKind.RESOURCE: "resource",
}


class ParameterExtractor:
    """Classifies tokens and resolves entity names against world registries.

    Args:
        registries: Caller-owned NPC, faction and resource registries.
        settings:   Extraction settings; defaults to ``config.extraction``.
        tone_table: Keyword table used to recognise tone tokens.
    """

    def __init__(
        self,
        registries: WorldRegistries,
        *,
        settings: ExtractionSettings | None = None,
        tone_table: ToneTable | None = None,
    ) -> None:
        self._registries = registries
        if settings is None:
            from decision_core.config import config

            settings = config.extraction
        self._settings = settings
        self._tones = tone_table or ToneTable.default()

    @property
    def threshold(self) -> float:
        return self._settings.entity_threshold

    # ── Whole-command extraction ─────────────────────────────────────────────

    def extract(self, tokens: Iterable[str]) -> ExtractedParameters:
        """Classify every token and aggregate the outcome.

        Tone is the first tone keyword, else the table's default.  Confidence
        is the mean over all parameters, ``0.0`` when there are none.
        """
        words = [token for token in tokens if token.strip()]
        multiword = self._multiword_names()
        longest = max((size for size, _ in multiword), default=1)

        params: list[ExtractedParameter] = []
        index = 0
        while index < len(words):
            consumed, param = self._match_multiword(words, index, longest, multiword)
            if param is None:
                consumed, param = 1, self.classify(words[index])
            params.append(param)
            index += consumed

        tone = next(
            (p.tone for p in params if p.type is ParameterType.TONE and p.tone),
            self._tones.default_tone,
        )
        confidence = sum(p.confidence for p in params) / len(params) if params else 0.0
        result = ExtractedParameters(
            parameters=tuple(params),
            tone=tone,
            confidence=confidence,
            rationale=_rationale(params, tone),
        )
        logger.debug("Extracted %s", result.rationale)
        return result

    def extract_text(self, text: str) -> ExtractedParameters:
        """Tokenize *text* and extract every token."""
        return self.extract(tokenize(text))

    def classify(self, token: str) -> ExtractedParameter:
        """Classify a single token."""
        if looks_numeric(token):
            return self.extract_quantity(token)

        tone = self._tones.lookup(token)
        if tone is not None:
            return ExtractedParameter(
                type=ParameterType.TONE,
                raw_text=token,
                confidence=1.0,
                resolved_name=tone,
                tone=tone,
            )

        for kind in RESOLUTION_ORDER:
            param = self._resolve(token, kind)
            if param.is_valid:
                return param
        return self._unknown(token)

    # ── Single-entity extractors ─────────────────────────────────────────────

    def extract_npc(self, text: str) -> ExtractedParameter:
        return self._resolve(text, EntityKind.NPC)

    def extract_faction(self, text: str) -> ExtractedParameter:
        return self._resolve(text, EntityKind.FACTION)

    def extract_resource(self, text: str) -> ExtractedParameter:
        return self._resolve(text, EntityKind.RESOURCE)

    def extract_quantity(self, text: str) -> ExtractedParameter:
        """Parse *text* as a quantity; failures are invalid, never zero."""
        value = parse_quantity(text)
        if value is None:
            if looks_numeric(text):
                reason = f"'{text}' is not a whole number"
            else:
                reason = f"'{text}' is not a valid quantity"
            return ExtractedParameter(
                type=ParameterType.QUANTITY,
                raw_text=text,
                is_valid=False,
                reason=reason,
            )
        return ExtractedParameter(
            type=ParameterType.QUANTITY,
            raw_text=text,
            confidence=1.0,
            resolved_name=str(value),
            quantity=value,
        )

    def extract_tone(self, text: str) -> str:
        return self._tones.tone_of(tokenize(text))

    def fuzzy_match_name(self, value: str, names: Iterable[str]) -> NameMatch:
        """Best name at or above the extraction threshold, else an empty match."""
        return best_match(value, names, self.threshold)

    # ── Bulk extractors ──────────────────────────────────────────────────────

    def extract_all_npcs(self, tokens: Iterable[str]) -> list[ExtractedParameter]:
        return self._classify_all(tokens, ParameterType.NPC)

    def extract_all_factions(self, tokens: Iterable[str]) -> list[ExtractedParameter]:
        return self._classify_all(tokens, ParameterType.FACTION)

    def extract_all_resources(self, tokens: Iterable[str]) -> list[ExtractedParameter]:
        return self._classify_all(tokens, ParameterType.RESOURCE)

    # ── Internals ────────────────────────────────────────────────────────────

    def _classify_all(
        self, tokens: Iterable[str], ptype: ParameterType
    ) -> list[ExtractedParameter]:
        classified = (self.classify(token) for token in tokens if token.strip())
        return [param for param in classified if param.type is ptype]

    def _resolve(self, text: str, kind: EntityKind) -> ExtractedParameter:
        registry = self._registries.registry_for(kind)
        ptype = ParameterType.for_kind(kind)
        label = _KIND_LABELS[kind]

        match = self.fuzzy_match_name(text, registry.all_names())
        if not match.found:
            return ExtractedParameter(
                type=ptype,
                raw_text=text,
                is_valid=False,
                reason=f"No {label} matches '{text}'",
            )

        ref = registry.find_by_name(match.name)
        if ref is None:
            return ExtractedParameter(
                type=ptype,
                raw_text=text,
                is_valid=False,
                reason=f"{label} '{match.name}' is listed but could not be resolved",
            )
        return ExtractedParameter(
            type=ptype,
            raw_text=text,
            confidence=match.confidence,
            resolved_name=match.name,
            ref=ref,
        )

    def _unknown(self, token: str) -> ExtractedParameter:
        nearest_kind: EntityKind | None = None
        nearest = NameMatch(name="", confidence=0.0)
        for kind in RESOLUTION_ORDER:
            candidate = closest(token, self._registries.registry_for(kind).all_names())
            if candidate.found and candidate.confidence > nearest.confidence:
                nearest, nearest_kind = candidate, kind

        reason = f"'{token}' does not match any known NPC, faction or resource"
        if nearest_kind is not None:
            reason += f" (closest: {_KIND_LABELS[nearest_kind]} '{nearest.name}')"
        return ExtractedParameter(
            type=ParameterType.UNKNOWN,
            raw_text=token,
            is_valid=False,
            reason=reason,
            nearest_kind=nearest_kind,
        )

    def _multiword_names(self) -> list[tuple[int, dict[str, tuple[EntityKind, str]]]]:
        """Group multi-word names by word count, keyed by normalised text."""
        grouped: dict[int, dict[str, tuple[EntityKind, str]]] = {}
        for kind in RESOLUTION_ORDER:
            for name in self._registries.registry_for(kind).all_names():
                words = tokenize(name)
                if len(words) < 2:
                    continue
                grouped.setdefault(len(words), {}).setdefault(" ".join(words), (kind, name))
        return sorted(grouped.items(), key=lambda item: item[0], reverse=True)

    def _match_multiword(
        self,
        words: Sequence[str],
        start: int,
        longest: int,
        multiword: list[tuple[int, dict[str, tuple[EntityKind, str]]]],
    ) -> tuple[int, ExtractedParameter | None]:
        if longest < 2:
            return 0, None
        for size, names in multiword:
            if start + size > len(words):
                continue
            window = " ".join(word.lower() for word in words[start : start + size])
            hit = names.get(window)
            if hit is None:
                continue
            kind, name = hit
            ref = self._registries.registry_for(kind).find_by_name(name)
            if ref is None:
                continue
            return size, ExtractedParameter(
                type=ParameterType.for_kind(kind),
                raw_text=" ".join(words[start : start + size]),
                confidence=1.0,
                resolved_name=name,
                ref=ref,
            )
        return 0, None


def _rationale(params: Sequence[ExtractedParameter], tone: str) -> str:
    if not params:
        return f"no parameters; tone {tone}"
    resolved = [p for p in params if p.is_valid]
    unresolved = [p.raw_text for p in params if not p.is_valid]
    kinds = ", ".join(f"{p.type.value}={p.resolved_name or p.raw_text}" for p in resolved)
    text = f"{len(params)} parameter(s), {len(resolved)} resolved"
    if kinds:
        text += f" [{kinds}]"
    if unresolved:
        text += f", {len(unresolved)} unresolved [{', '.join(unresolved)}]"
    return f"{text}; tone {tone}"
