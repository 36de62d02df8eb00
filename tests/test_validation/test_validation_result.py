"""Unit tests for ValidationError and the folded ValidationResult aggregates."""

from __future__ import annotations

import pytest

from decision_core.validation import Severity, ValidationError, ValidationResult


def _issue(severity: Severity, code: str = "X") -> ValidationError:
    return ValidationError(severity=severity, code=code, message=f"{code} happened")


@pytest.mark.unit
class TestValidationError:
    def test_describe_full(self):
        error = ValidationError(
            severity=Severity.CRITICAL,
            code="INVALID_ACTION",
            message="Unknown action 'giv'",
            field="action",
            value="giv",
            suggestions=("allocate", "delegate"),
        )
        assert error.describe() == "Unknown action 'giv' [action] Suggestions: allocate, delegate"

    def test_describe_message_only(self):
        assert _issue(Severity.ERROR).describe() == "X happened"

    def test_suggestions_capped_at_three(self):
        error = ValidationError(
            severity=Severity.ERROR,
            code="NPC_NOT_FOUND",
            message="m",
            suggestions=("a", "b", "c", "d"),
        )
        assert error.suggestions == ("a", "b", "c")

    def test_severity_blocking(self):
        assert Severity.CRITICAL.blocking
        assert Severity.ERROR.blocking
        assert not Severity.WARNING.blocking
        assert not Severity.INFO.blocking


@pytest.mark.unit
class TestValidationResultAggregates:
    @pytest.mark.parametrize("errors", [0, 1, 3])
    @pytest.mark.parametrize("warnings", [0, 2])
    def test_validity_follows_error_count(self, errors, warnings):
        result = ValidationResult(
            errors=tuple(_issue(Severity.ERROR) for _ in range(errors)),
            warnings=tuple(_issue(Severity.WARNING) for _ in range(warnings)),
        )
        assert result.is_valid == (result.error_count == 0)
        assert result.has_warnings == (warnings > 0)
        assert result.error_count == errors
        assert result.warning_count == warnings

    def test_summary_passed(self):
        assert ValidationResult().summary == "Validation passed: command is ready to execute"

    def test_summary_warnings(self):
        result = ValidationResult(warnings=(_issue(Severity.WARNING),))
        assert result.summary == "Validation passed with 1 warning(s)"

    def test_summary_failed(self):
        result = ValidationResult(
            errors=(_issue(Severity.CRITICAL), _issue(Severity.ERROR)),
            warnings=(_issue(Severity.WARNING),),
        )
        assert result.summary == "Validation failed: 2 error(s) found"

    def test_codes_and_by_code(self):
        result = ValidationResult(
            errors=(_issue(Severity.ERROR, "A"),),
            warnings=(_issue(Severity.WARNING, "B"), _issue(Severity.INFO, "B")),
        )
        assert result.codes == {"A", "B"}
        assert len(result.by_code("B")) == 2
