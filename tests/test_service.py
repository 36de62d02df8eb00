"""Integration tests for DecisionService: text in, decision out."""

from __future__ import annotations

import pytest
import yaml

from decision_core.catalog import ActionDefinition, InMemoryActionCatalog
from decision_core.config import DecisionCoreConfig
from decision_core.interpreter import ConstantSemanticScorer
from decision_core.service import DecisionService
from decision_core.validation import (
    INSUFFICIENT_RESOURCES,
    INVALID_ACTION,
    PERMISSION_DENIED,
    SELF_TARGET,
    DenyActionsPolicy,
)

PLAYER_ID = 0


def _tied_service(registries) -> DecisionService:
    catalog = InMemoryActionCatalog([ActionDefinition(name="hat"), ActionDefinition(name="cat")])
    return DecisionService(
        catalog,
        registries,
        settings=DecisionCoreConfig(),
        semantic_scorer=ConstantSemanticScorer(1.0),
    )


@pytest.mark.unit
class TestSuccessfulDecisions:
    def test_full_pipeline(self, service):
        outcome = service.process("give 50 food to alice", player_entity_id=PLAYER_ID)

        decision = outcome.decision
        assert decision is not None
        assert decision.success
        assert decision.error is None
        assert decision.action == "allocate"
        assert decision.target_npc_id == 1
        assert decision.target_faction_id is None
        assert decision.resource_name == "Food"
        assert decision.quantity == 50
        assert decision.tone == "neutral"
        assert decision.priority == 5
        assert decision.context == "give 50 food to alice"
        assert not outcome.needs_clarification

    def test_typos_and_tone(self, service):
        outcome = service.process("Please alocate 20 gold to Alise", player_entity_id=PLAYER_ID)
        decision = outcome.decision
        assert decision.action == "allocate"
        assert decision.tone == "positive"
        assert decision.target_npc_id == 1
        assert decision.resource_name == "Gold"
        assert decision.success

    def test_faction_target_and_priority(self, service):
        decision = service.process("suppress the rebels now").decision
        assert decision.action == "suppress"
        assert decision.target_faction_id == 11
        assert decision.priority == 7
        assert decision.tone == "aggressive"

    def test_correlation_ids_are_unique_hex(self, service):
        first = service.process("give food to bob").decision
        second = service.process("give food to bob").decision
        assert len(first.correlation_id) == 32
        int(first.correlation_id, 16)
        assert first.correlation_id != second.correlation_id


@pytest.mark.unit
class TestFailedDecisions:
    def test_validation_failure_carries_first_error(self, service):
        outcome = service.process("give 150 food to alice", player_entity_id=PLAYER_ID)
        assert INSUFFICIENT_RESOURCES in outcome.validation.codes
        assert not outcome.decision.success
        assert "short by 50" in outcome.decision.error

    def test_self_target(self, service):
        outcome = service.process("negotiate with hero", player_entity_id=PLAYER_ID)
        assert SELF_TARGET in outcome.validation.codes
        assert not outcome.decision.success

    def test_unmatched_input_gets_feedback_without_decision(self, service):
        outcome = service.process("xyzzy food")
        assert outcome.decision is None
        assert not outcome.needs_clarification
        assert INVALID_ACTION in outcome.validation.codes

    def test_empty_input(self, service):
        outcome = service.process("   ")
        assert outcome.decision is None
        assert outcome.validation.by_code(INVALID_ACTION)[0].message == "No action given"

    def test_permission_policy_applies(self, catalog, registries):
        service = DecisionService(
            catalog,
            registries,
            settings=DecisionCoreConfig(),
            permission_policy=DenyActionsPolicy(["suppress"], reason="Council forbids it"),
        )
        outcome = service.process("suppress rebels")
        assert PERMISSION_DENIED in outcome.validation.codes
        assert outcome.decision.error == "Council forbids it"


@pytest.mark.unit
class TestAmbiguity:
    def test_ambiguous_input_produces_no_decision(self, registries):
        outcome = _tied_service(registries).process("bat")
        assert outcome.interpretation.is_ambiguous
        assert outcome.needs_clarification
        assert outcome.decision is None
        assert outcome.extraction is None
        assert outcome.validation is None

    def test_caller_choice_resolves_ambiguity(self, registries):
        outcome = _tied_service(registries).process("bat", action="hat")
        assert outcome.decision.action == "hat"
        assert outcome.decision.success
        assert not outcome.needs_clarification

    def test_caller_choice_keeps_entity_tokens(self, service):
        decision = service.process("alice food", action="inspire").decision
        assert decision.action == "inspire"
        assert decision.target_npc_id == 1
        assert decision.resource_name == "Food"

    def test_unknown_override_is_reported(self, service):
        outcome = service.process("give food", action="fly")
        assert outcome.decision.action == "fly"
        assert not outcome.decision.success
        assert outcome.decision.error == "Unknown action 'fly'"


@pytest.mark.unit
def test_tone_policy_from_settings(catalog, registries, tmp_path):
    policy = tmp_path / "tones.yaml"
    policy.write_text(yaml.dump({"version": "1", "tones": {"urgent": ["hurry"]}}))
    settings = DecisionCoreConfig()
    settings.policies.tone_policy_path = str(policy)

    service = DecisionService(catalog, registries, settings=settings)

    assert service.process("give food hurry").decision.tone == "urgent"
