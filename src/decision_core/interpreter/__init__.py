"""Command interpreter: action matching, ranking and ambiguity detection."""

from decision_core.interpreter.interpreter import CommandInterpreter
from decision_core.interpreter.scoring import (
    CharacterOverlapScorer,
    ConstantSemanticScorer,
    SemanticScorer,
    combined_confidence,
    exact_match_score,
)
from decision_core.interpreter.types import (
    MATCH_ALIAS,
    MATCH_EXACT,
    MATCH_FUZZY,
    Interpretation,
    ParseResult,
)

__all__ = [
    "MATCH_ALIAS",
    "MATCH_EXACT",
    "MATCH_FUZZY",
    "CharacterOverlapScorer",
    "CommandInterpreter",
    "ConstantSemanticScorer",
    "Interpretation",
    "ParseResult",
    "SemanticScorer",
    "combined_confidence",
    "exact_match_score",
]
