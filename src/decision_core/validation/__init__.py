"""Command validation: rule engine, diagnostics and the permission hook."""

from decision_core.validation.permissions import (
    AllowAllPolicy,
    DenyActionsPolicy,
    PermissionDecision,
    PermissionPolicy,
)
from decision_core.validation.types import (
    FACTION_NOT_FOUND,
    INSUFFICIENT_RESOURCES,
    INVALID_ACTION,
    INVALID_QUANTITY,
    LOW_CONFIDENCE,
    MISSING_PARAMETER,
    NPC_NOT_FOUND,
    PERMISSION_DENIED,
    QUANTITY_OUT_OF_BOUNDS,
    RESOURCE_NOT_FOUND,
    SELF_TARGET,
    UNRESOLVED_PARAMETER,
    Severity,
    ValidationError,
    ValidationResult,
)
from decision_core.validation.validator import CommandValidator

__all__ = [
    "FACTION_NOT_FOUND",
    "INSUFFICIENT_RESOURCES",
    "INVALID_ACTION",
    "INVALID_QUANTITY",
    "LOW_CONFIDENCE",
    "MISSING_PARAMETER",
    "NPC_NOT_FOUND",
    "PERMISSION_DENIED",
    "QUANTITY_OUT_OF_BOUNDS",
    "RESOURCE_NOT_FOUND",
    "SELF_TARGET",
    "UNRESOLVED_PARAMETER",
    "AllowAllPolicy",
    "CommandValidator",
    "DenyActionsPolicy",
    "PermissionDecision",
    "PermissionPolicy",
    "Severity",
    "ValidationError",
    "ValidationResult",
]
