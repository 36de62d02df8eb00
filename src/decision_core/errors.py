"""Exception hierarchy for decision_core.

Player-facing problems (typos, unknown entities, bad quantities) are never
raised.  They travel as data: ``None`` sentinels, invalid
:class:`~decision_core.extraction.types.ExtractedParameter` values and
:class:`~decision_core.validation.types.ValidationError` diagnostics.

Exceptions are reserved for faults in what the *caller* supplied, such as
an empty action catalog or a duplicate alias at registration time.
"""

from __future__ import annotations


class DecisionCoreError(RuntimeError):
    """Base exception for decision_core failures."""


class CatalogError(DecisionCoreError):
    """Base exception for action catalog faults."""


class EmptyCatalogError(CatalogError):
    """Raised when interpretation is attempted against a catalog with no actions.

    This is the only condition expected to halt processing; an empty catalog
    is an upstream loading problem, not a player error.
    """


class ActionRegistrationError(CatalogError):
    """Raised when an action name or alias collides with one already registered.

    Args:
        name:     The colliding name or alias (lower-cased).
        existing: Canonical name of the action that already owns it.
    """

    def __init__(self, name: str, existing: str) -> None:
        super().__init__(f"'{name}' is already registered to action '{existing}'")
        self.name = name
        self.existing = existing
