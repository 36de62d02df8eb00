"""Typed parameter values produced by the extractor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from decision_core.world import EntityKind, EntityRef


class ParameterType(Enum):
    """What a raw token was classified as."""

    NPC = "npc"
    FACTION = "faction"
    RESOURCE = "resource"
    QUANTITY = "quantity"
    TONE = "tone"
    UNKNOWN = "unknown"

    @property
    def entity_kind(self) -> EntityKind | None:
        """Matching :class:`EntityKind` for entity types, else ``None``."""
        return _ENTITY_KINDS.get(self)

    @classmethod
    def for_kind(cls, kind: EntityKind) -> ParameterType:
        return _TYPES_BY_KIND[kind]


_ENTITY_KINDS = {
    ParameterType.NPC: EntityKind.NPC,
    ParameterType.FACTION: EntityKind.FACTION,
    ParameterType.RESOURCE: EntityKind.RESOURCE,
}
_TYPES_BY_KIND = {kind: ptype for ptype, kind in _ENTITY_KINDS.items()}


@dataclass(frozen=True)
class ExtractedParameter:
    """One classified token.

    Attributes:
        type:          Classification.
        raw_text:      Token(s) as they appeared in the input.
        confidence:    Match confidence in [0.0, 1.0]; ``0.0`` when invalid.
        resolved_name: Canonical entity name, tone name or normalised number.
        ref:           Weak reference to the resolved entity, if any.
        is_valid:      Whether the token resolved cleanly.
        reason:        Why resolution failed.  Non-empty iff ``is_valid`` is
                       false.
        quantity:      Parsed value for ``QUANTITY`` parameters.
        tone:          Tone name for ``TONE`` parameters.
        nearest_kind:  For ``UNKNOWN`` parameters, the registry whose closest
                       name scored highest (below threshold).
    """

    type: ParameterType
    raw_text: str
    confidence: float = 0.0
    resolved_name: str = ""
    ref: EntityRef | None = None
    is_valid: bool = True
    reason: str = ""
    quantity: int | None = None
    tone: str | None = None
    nearest_kind: EntityKind | None = None

    def __post_init__(self) -> None:
        if not self.is_valid and not self.reason:
            raise ValueError(f"Invalid parameter {self.raw_text!r} must carry a reason")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence out of range: {self.confidence}")


@dataclass(frozen=True)
class ExtractedParameters:
    """Full extraction outcome for one command.

    Counts are derived from :attr:`parameters` on access so they can never
    disagree with the list.
    """

    parameters: tuple[ExtractedParameter, ...] = ()
    tone: str = "neutral"
    confidence: float = 0.0
    rationale: str = ""

    @property
    def valid_count(self) -> int:
        return sum(1 for p in self.parameters if p.is_valid)

    @property
    def invalid_count(self) -> int:
        return sum(1 for p in self.parameters if not p.is_valid)

    def of_type(self, ptype: ParameterType) -> list[ExtractedParameter]:
        return [p for p in self.parameters if p.type is ptype]

    def valid_of_type(self, ptype: ParameterType) -> list[ExtractedParameter]:
        return [p for p in self.parameters if p.type is ptype and p.is_valid]

    @property
    def first_quantity(self) -> int | None:
        """Value of the first valid quantity parameter."""
        for param in self.valid_of_type(ParameterType.QUANTITY):
            return param.quantity
        return None
