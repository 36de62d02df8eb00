"""
Permission hook for command validation.

Every command passes through exactly one :class:`PermissionPolicy` before it
is accepted.  The validator calls the policy from a single place; there is
no path that skips it, including dry runs.

Policies:
    AllowAllPolicy:   Default.  Every player may issue every action.
    DenyActionsPolicy: Blocks a fixed set of actions, for worlds that lock
                      verbs behind progression or for tests.

A denial becomes a ``PERMISSION_DENIED`` error carrying the policy's reason.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from decision_core.extraction import ExtractedParameters


@dataclass(frozen=True, slots=True)
class PermissionDecision:
    """Answer from a permission policy."""

    allowed: bool
    reason: str = ""


ALLOWED = PermissionDecision(allowed=True)


class PermissionPolicy(Protocol):
    """Decides whether a player may issue an action."""

    def check(
        self,
        player_entity_id: int | None,
        action: str,
        parameters: ExtractedParameters,
    ) -> PermissionDecision: ...


class AllowAllPolicy:
    """Permits everything."""

    def check(
        self,
        player_entity_id: int | None,
        action: str,
        parameters: ExtractedParameters,
    ) -> PermissionDecision:
        return ALLOWED


class DenyActionsPolicy:
    """Denies a fixed set of canonical action names."""

    def __init__(self, actions: Iterable[str], reason: str = "Action is not permitted") -> None:
        self._denied = frozenset(name.lower() for name in actions)
        self._reason = reason

    def check(
        self,
        player_entity_id: int | None,
        action: str,
        parameters: ExtractedParameters,
    ) -> PermissionDecision:
        if action.lower() in self._denied:
            return PermissionDecision(allowed=False, reason=self._reason)
        return ALLOWED
