"""Unit tests for the permission policies."""

from __future__ import annotations

import dataclasses

import pytest

from decision_core.extraction import ExtractedParameters
from decision_core.validation import AllowAllPolicy, DenyActionsPolicy, PermissionDecision


@pytest.mark.unit
class TestPolicies:
    def test_allow_all(self):
        decision = AllowAllPolicy().check(0, "suppress", ExtractedParameters())
        assert decision.allowed
        assert decision.reason == ""

    def test_deny_listed_action(self):
        policy = DenyActionsPolicy(["Suppress"], reason="Not yet")
        decision = policy.check(0, "suppress", ExtractedParameters())
        assert decision == PermissionDecision(allowed=False, reason="Not yet")

    def test_deny_policy_allows_others(self):
        policy = DenyActionsPolicy(["suppress"])
        assert policy.check(None, "inspire", ExtractedParameters()).allowed

    def test_decision_is_immutable(self):
        decision = PermissionDecision(allowed=True)
        with pytest.raises(dataclasses.FrozenInstanceError):
            decision.allowed = False  # type: ignore[misc]
