"""Result types produced by the command interpreter."""

from __future__ import annotations

from dataclasses import dataclass

MATCH_EXACT = "exact"
MATCH_ALIAS = "alias"
MATCH_FUZZY = "fuzzy"


@dataclass(frozen=True)
class ParseResult:
    """One candidate interpretation of the player's input.

    Attributes:
        action:         Canonical action name.
        confidence:     Combined confidence in [0.0, 1.0].
        frequency:      Historical usage weight, used only to break ties.
        raw_parameters: Input tokens left after removing the matched words
                        and stopwords.
        matched_text:   The action name or alias that scored best.
        match_type:     ``"exact"``, ``"alias"`` or ``"fuzzy"``.
        edit_distance:  Edit distance between the input window and
                        ``matched_text``.
    """

    action: str
    confidence: float
    frequency: float = 0.0
    raw_parameters: tuple[str, ...] = ()
    matched_text: str = ""
    match_type: str = MATCH_FUZZY
    edit_distance: int = 0


@dataclass(frozen=True)
class Interpretation:
    """Ranked candidates plus the ambiguity decision for one input.

    Attributes:
        text:         The input as given.
        candidates:   Best first, capped at the configured maximum.
        is_ambiguous: The top two candidates are within the near-tie margin;
                      the caller should ask the player rather than pick.
        margin:       Gap between the top two scores, or ``None`` with fewer
                      than two candidates.
        tied:         Actions within the near-tie margin of the top score;
                      empty unless ambiguous.
    """

    text: str
    candidates: tuple[ParseResult, ...] = ()
    is_ambiguous: bool = False
    margin: float | None = None
    tied: tuple[str, ...] = ()

    @property
    def top(self) -> ParseResult | None:
        return self.candidates[0] if self.candidates else None

    @property
    def selected(self) -> ParseResult | None:
        """The top candidate when it can be acted on without asking."""
        if self.is_ambiguous:
            return None
        return self.top
