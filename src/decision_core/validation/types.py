"""Validation diagnostics and the aggregate result.

:class:`ValidationResult` stores only its two lists and the confidence.
Validity, counts and the summary line are folded from the lists on access,
so they cannot drift out of step with them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

# ── Diagnostic codes ────────────────────────────────────────────────────────

INVALID_ACTION = "INVALID_ACTION"
NPC_NOT_FOUND = "NPC_NOT_FOUND"
FACTION_NOT_FOUND = "FACTION_NOT_FOUND"
RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
UNRESOLVED_PARAMETER = "UNRESOLVED_PARAMETER"
INVALID_QUANTITY = "INVALID_QUANTITY"
INSUFFICIENT_RESOURCES = "INSUFFICIENT_RESOURCES"
QUANTITY_OUT_OF_BOUNDS = "QUANTITY_OUT_OF_BOUNDS"
SELF_TARGET = "SELF_TARGET"
PERMISSION_DENIED = "PERMISSION_DENIED"
MISSING_PARAMETER = "MISSING_PARAMETER"
LOW_CONFIDENCE = "LOW_CONFIDENCE"

MAX_SUGGESTIONS = 3


class Severity(IntEnum):
    """Diagnostic severity.  ERROR and CRITICAL block execution."""

    INFO = 0
    WARNING = 1
    ERROR = 2
    CRITICAL = 3

    @property
    def blocking(self) -> bool:
        return self >= Severity.ERROR


@dataclass(frozen=True)
class ValidationError:
    """One problem found in a command.

    Attributes:
        severity:    How serious the problem is.
        code:        Machine-readable code, e.g. ``"NPC_NOT_FOUND"``.
        message:     Player-facing description.
        field:       Which part of the command is at fault (``"action"``,
                     ``"target"``, ``"quantity"``...).
        value:       The offending value as given.
        suggestions: Up to three corrections, best first.
    """

    severity: Severity
    code: str
    message: str
    field: str = ""
    value: str = ""
    suggestions: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if len(self.suggestions) > MAX_SUGGESTIONS:
            object.__setattr__(self, "suggestions", self.suggestions[:MAX_SUGGESTIONS])

    def describe(self) -> str:
        """Return ``"message [field] Suggestions: a, b"``."""
        text = self.message
        if self.field:
            text += f" [{self.field}]"
        if self.suggestions:
            text += f" Suggestions: {', '.join(self.suggestions)}"
        return text


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one command.

    Attributes:
        errors:     ERROR and CRITICAL diagnostics, most severe first.
        warnings:   WARNING and INFO diagnostics, most severe first.
        confidence: Extraction confidence discounted per diagnostic.
    """

    errors: tuple[ValidationError, ...] = ()
    warnings: tuple[ValidationError, ...] = ()
    confidence: float = 0.0

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def is_valid(self) -> bool:
        return self.error_count == 0

    @property
    def has_warnings(self) -> bool:
        return self.warning_count > 0

    @property
    def codes(self) -> set[str]:
        return {issue.code for issue in (*self.errors, *self.warnings)}

    @property
    def summary(self) -> str:
        if not self.is_valid:
            return f"Validation failed: {self.error_count} error(s) found"
        if self.has_warnings:
            return f"Validation passed with {self.warning_count} warning(s)"
        return "Validation passed: command is ready to execute"

    def by_code(self, code: str) -> list[ValidationError]:
        return [issue for issue in (*self.errors, *self.warnings) if issue.code == code]
