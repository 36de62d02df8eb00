"""Decision service: runs the interpreter, extractor and validator in order.

``DecisionService.process`` is the single entry point most callers need::

    service = DecisionService(default_catalog(), registries)
    outcome = service.process("give 50 food to alice", player_entity_id=0)
    if outcome.needs_clarification:
        ask_player(outcome.interpretation.tied)
    elif outcome.decision and outcome.decision.success:
        execute(outcome.decision)

An ambiguous input with no caller-chosen action produces no decision; the
caller is expected to ask the player and call ``process`` again with
``action=`` set.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from dataclasses import dataclass

from decision_core.catalog import ActionCatalog
from decision_core.config import DecisionCoreConfig
from decision_core.extraction import ExtractedParameters, ParameterExtractor, ParameterType
from decision_core.interpreter import (
    CommandInterpreter,
    Interpretation,
    ParseResult,
    SemanticScorer,
)
from decision_core.policies import ToneTable, resolve_tone_table
from decision_core.text import content_tokens, tokenize
from decision_core.validation import CommandValidator, PermissionPolicy, ValidationResult
from decision_core.world import WorldRegistries

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 5


@dataclass(frozen=True)
class InterpretedDecision:
    """A fully interpreted command, ready for an executor.

    Entity fields hold registry ids, not entities; the executor resolves
    them against live state.
    """

    action: str
    target_npc_id: int | None
    target_faction_id: int | None
    resource_name: str | None
    tone: str
    priority: int
    quantity: int | None
    context: str
    correlation_id: str
    success: bool
    error: str | None = None


@dataclass(frozen=True)
class DecisionOutcome:
    """Everything the pipeline produced for one input."""

    interpretation: Interpretation
    extraction: ExtractedParameters | None = None
    validation: ValidationResult | None = None
    decision: InterpretedDecision | None = None

    @property
    def needs_clarification(self) -> bool:
        """The input matched several actions equally well and none was chosen."""
        return self.interpretation.is_ambiguous and self.decision is None


class DecisionService:
    """Wires the three pipeline stages over caller-owned collaborators.

    Args:
        catalog:           Read-only action catalog.
        registries:        Caller-owned world registries.
        settings:          Full configuration; defaults to the module-level
                           ``config``.
        semantic_scorer:   Semantic signal for action matching.
        usage_frequency:   Action name -> usage weight, for tie-breaking.
        permission_policy: Permission hook for validation.
        tone_table:        Tone keywords; defaults to the configured policy
                           file, else the built-in table.
    """

    def __init__(
        self,
        catalog: ActionCatalog,
        registries: WorldRegistries,
        *,
        settings: DecisionCoreConfig | None = None,
        semantic_scorer: SemanticScorer | None = None,
        usage_frequency: Mapping[str, float] | None = None,
        permission_policy: PermissionPolicy | None = None,
        tone_table: ToneTable | None = None,
    ) -> None:
        if settings is None:
            from decision_core.config import config

            settings = config
        tones = tone_table or resolve_tone_table(settings.policies.absolute_tone_policy_path)
        self._catalog = catalog
        self.interpreter = CommandInterpreter(
            catalog,
            settings=settings.interpreter,
            semantic_scorer=semantic_scorer,
            usage_frequency=usage_frequency,
            tone_table=tones,
        )
        self.extractor = ParameterExtractor(
            registries, settings=settings.extraction, tone_table=tones
        )
        self.validator = CommandValidator(
            catalog,
            registries,
            settings=settings.validation,
            permission_policy=permission_policy,
        )

    def process(
        self,
        text: str,
        *,
        player_entity_id: int | None = None,
        action: str | None = None,
    ) -> DecisionOutcome:
        """Interpret, extract and validate *text*.

        Args:
            text:             Raw player input.
            player_entity_id: The player's own NPC id, for self-target checks.
            action:           Action chosen by the caller, overriding ranking.
                              Used to resolve an ambiguous result.

        Returns:
            A :class:`DecisionOutcome`.  ``decision`` is ``None`` when no
            action could be chosen.
        """
        interpretation = self.interpreter.interpret(text)

        if action is not None:
            chosen = self.interpreter.score_action(text, action)
            if chosen is not None:
                action_name, tokens = chosen.action, chosen.raw_parameters
            else:
                action_name, tokens = action, tuple(content_tokens(tokenize(text)))
        elif interpretation.selected is not None:
            chosen = interpretation.selected
            action_name = chosen.action
            tokens = chosen.raw_parameters
        elif interpretation.is_ambiguous:
            return DecisionOutcome(interpretation=interpretation)
        else:
            return self._unmatched(text, interpretation, player_entity_id)

        extraction = self.extractor.extract(tokens)
        validation = self.validator.validate_command(
            action_name,
            extraction,
            player_entity_id=player_entity_id,
        )
        decision = self._decide(text, action_name, chosen, extraction, validation)
        return DecisionOutcome(
            interpretation=interpretation,
            extraction=extraction,
            validation=validation,
            decision=decision,
        )

    def _unmatched(
        self,
        text: str,
        interpretation: Interpretation,
        player_entity_id: int | None,
    ) -> DecisionOutcome:
        """No candidate cleared the floor: validate the leading word as the action."""
        tokens = tokenize(text)
        verb = tokens[0] if tokens else ""
        extraction = self.extractor.extract(content_tokens(tokens[1:]))
        validation = self.validator.validate_command(
            verb, extraction, player_entity_id=player_entity_id
        )
        logger.info("No action matched %r", text)
        return DecisionOutcome(
            interpretation=interpretation, extraction=extraction, validation=validation
        )

    def _decide(
        self,
        text: str,
        action_name: str,
        parse: ParseResult | None,
        extraction: ExtractedParameters,
        validation: ValidationResult,
    ) -> InterpretedDecision:
        definition = self._catalog.lookup(action_name)

        def first_ref(ptype: ParameterType) -> int | None:
            for param in extraction.valid_of_type(ptype):
                if param.ref is not None:
                    return param.ref.entity_id
            return None

        resources = extraction.valid_of_type(ParameterType.RESOURCE)
        decision = InterpretedDecision(
            action=definition.name if definition is not None else action_name,
            target_npc_id=first_ref(ParameterType.NPC),
            target_faction_id=first_ref(ParameterType.FACTION),
            resource_name=resources[0].resolved_name if resources else None,
            tone=extraction.tone,
            priority=definition.priority if definition is not None else DEFAULT_PRIORITY,
            quantity=extraction.first_quantity,
            context=text,
            correlation_id=uuid.uuid4().hex,
            success=validation.is_valid,
            error=validation.errors[0].message if validation.errors else None,
        )
        logger.debug(
            "Decision %s: %s (confidence %.2f, match %s)",
            decision.correlation_id,
            decision.action,
            validation.confidence,
            parse.match_type if parse is not None else "override",
        )
        return decision
