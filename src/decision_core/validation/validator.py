"""Rule engine for interpreted commands.

Every call runs the full rule set, in this order, and never stops early so
the player sees every problem at once:

    1. Action existence          -> CRITICAL INVALID_ACTION
    2. Entity existence          -> ERROR *_NOT_FOUND / UNRESOLVED_PARAMETER,
                                    ERROR INVALID_QUANTITY
    3. Resource availability     -> ERROR INSUFFICIENT_RESOURCES
    4. Quantity bounds           -> ERROR QUANTITY_OUT_OF_BOUNDS
    5. Self-targeting            -> ERROR / WARNING SELF_TARGET
    6. Permission                -> ERROR PERMISSION_DENIED
    7. Completeness and certainty -> WARNING MISSING_PARAMETER / LOW_CONFIDENCE

Validation only reads the catalog and registries.  ``dry_run`` and
``validate_command`` share one code path and differ only in logging.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable

from decision_core.catalog import ActionCatalog, ActionDefinition, ParameterKind
from decision_core.config import ValidationSettings
from decision_core.extraction import ExtractedParameter, ExtractedParameters, ParameterType
from decision_core.similarity import rank_candidates, similarity
from decision_core.validation.permissions import AllowAllPolicy, PermissionPolicy
from decision_core.validation.types import (
    FACTION_NOT_FOUND,
    INSUFFICIENT_RESOURCES,
    INVALID_ACTION,
    INVALID_QUANTITY,
    LOW_CONFIDENCE,
    MAX_SUGGESTIONS,
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
from decision_core.world import EntityKind, WorldRegistries

logger = logging.getLogger(__name__)

NOT_FOUND_CODES: dict[EntityKind, str] = {
    EntityKind.NPC: NPC_NOT_FOUND,
    EntityKind.FACTION: FACTION_NOT_FOUND,
    EntityKind.RESOURCE: RESOURCE_NOT_FOUND,
}

_LABELS = {EntityKind.NPC: "NPC", EntityKind.FACTION: "Faction", EntityKind.RESOURCE: "Resource"}

_SLOT_KINDS: dict[ParameterKind, EntityKind] = {
    ParameterKind.NPC: EntityKind.NPC,
    ParameterKind.FACTION: EntityKind.FACTION,
    ParameterKind.RESOURCE: EntityKind.RESOURCE,
}


class CommandValidator:
    """Checks an action and its extracted parameters against world state.

    Args:
        catalog:           Read-only action catalog.
        registries:        Caller-owned world registries.
        settings:          Validation settings; defaults to ``config.validation``.
        permission_policy: Permission hook; defaults to :class:`AllowAllPolicy`.
    """

    def __init__(
        self,
        catalog: ActionCatalog,
        registries: WorldRegistries,
        *,
        settings: ValidationSettings | None = None,
        permission_policy: PermissionPolicy | None = None,
    ) -> None:
        self._catalog = catalog
        self._registries = registries
        if settings is None:
            from decision_core.config import config

            settings = config.validation
        self._settings = settings
        self._permissions = permission_policy or AllowAllPolicy()

    def validate_command(
        self,
        action_name: str,
        parameters: ExtractedParameters,
        *,
        player_entity_id: int | None = None,
    ) -> ValidationResult:
        """Validate a command.  Reads world state only."""
        result = self._run_checks(action_name, parameters, player_entity_id)
        if not result.is_valid:
            logger.info(
                "Rejected command %r: %s",
                action_name,
                ", ".join(error.code for error in result.errors),
            )
        return result

    def dry_run(
        self,
        action_name: str,
        parameters: ExtractedParameters,
        *,
        player_entity_id: int | None = None,
    ) -> ValidationResult:
        """Preview validation.  Identical checks and result to :meth:`validate_command`."""
        logger.debug("Dry run for %r", action_name)
        return self._run_checks(action_name, parameters, player_entity_id)

    # ── Rule pipeline ────────────────────────────────────────────────────────

    def _run_checks(
        self,
        action_name: str,
        parameters: ExtractedParameters,
        player_entity_id: int | None,
    ) -> ValidationResult:
        action = self._catalog.lookup(action_name) if action_name.strip() else None
        canonical = action.name if action is not None else action_name

        issues: list[ValidationError] = []
        issues.extend(self._check_action(action_name, action))
        issues.extend(self._check_entities(action, parameters))
        issues.extend(self._check_resources(parameters))
        issues.extend(self._check_bounds(action, parameters))
        issues.extend(self._check_self_target(action, parameters, player_entity_id))
        issues.extend(self._check_permission(player_entity_id, canonical, parameters))
        issues.extend(self._check_missing(action, parameters, {issue.code for issue in issues}))
        issues.extend(self._check_confidence(parameters))
        return self._aggregate(issues, parameters.confidence)

    # ── 1. Action existence ──────────────────────────────────────────────────

    def _check_action(
        self, action_name: str, action: ActionDefinition | None
    ) -> list[ValidationError]:
        if action is not None:
            return []
        message = f"Unknown action '{action_name}'" if action_name.strip() else "No action given"
        return [
            ValidationError(
                severity=Severity.CRITICAL,
                code=INVALID_ACTION,
                message=message,
                field="action",
                value=action_name,
                suggestions=tuple(self._suggest_actions(action_name)),
            )
        ]

    def _suggest_actions(self, value: str) -> list[str]:
        """Canonical names ranked by the best similarity of the name or any alias."""
        scored: list[tuple[float, str]] = []
        for name in self._catalog.all_names():
            definition = self._catalog.lookup(name)
            names = definition.names if definition is not None else (name,)
            score = max(similarity(value, candidate) for candidate in names)
            if score > self._settings.suggestion_floor:
                scored.append((score, name))
        scored.sort(key=lambda item: (-item[0], item[1].lower()))
        return [name for _, name in scored[: self._max_suggestions]]

    # ── 2. Entity existence ──────────────────────────────────────────────────

    def _check_entities(
        self,
        action: ActionDefinition | None,
        parameters: ExtractedParameters,
    ) -> list[ValidationError]:
        issues: list[ValidationError] = []
        open_slots = self._unsatisfied_slots(action, parameters)
        takes_free_text = action is not None and action.expects(ParameterKind.STRING)

        for param in parameters.parameters:
            if param.type is ParameterType.TONE:
                continue
            if param.type is ParameterType.QUANTITY:
                if not param.is_valid:
                    issues.append(
                        ValidationError(
                            severity=Severity.ERROR,
                            code=INVALID_QUANTITY,
                            message=param.reason,
                            field="quantity",
                            value=param.raw_text,
                        )
                    )
                continue

            kind = param.type.entity_kind
            if kind is not None:
                issue = self._check_entity(kind, param)
                if issue is not None:
                    issues.append(issue)
                continue

            # UNKNOWN: attribute to the next empty entity slot, else treat as
            # free text for actions that take it, else the nearest registry.
            if open_slots:
                kind = open_slots.pop(0)
            elif takes_free_text:
                continue
            else:
                kind = param.nearest_kind

            if kind is None:
                issues.append(self._unresolved(param))
            else:
                message = f"{_LABELS[kind]} '{param.raw_text}' not found"
                issues.append(self._not_found(kind, param.raw_text, message))
        return issues

    def _check_entity(self, kind: EntityKind, param: ExtractedParameter) -> ValidationError | None:
        if not param.is_valid:
            message = f"{_LABELS[kind]} '{param.raw_text}' not found"
            return self._not_found(kind, param.raw_text, message)
        if param.ref is None:
            return None
        registry = self._registries.registry_for(kind)
        if registry.find_by_id(param.ref.entity_id) is None:
            name = param.resolved_name or param.raw_text
            return self._not_found(kind, name, f"{_LABELS[kind]} '{name}' no longer exists")
        return None

    def _not_found(self, kind: EntityKind, value: str, message: str) -> ValidationError:
        names = self._registries.registry_for(kind).all_names()
        return ValidationError(
            severity=Severity.ERROR,
            code=NOT_FOUND_CODES[kind],
            message=message,
            field=kind.value,
            value=value,
            suggestions=tuple(self._suggest(value, names)),
        )

    def _unresolved(self, param: ExtractedParameter) -> ValidationError:
        pool = [
            name
            for kind in (EntityKind.NPC, EntityKind.FACTION, EntityKind.RESOURCE)
            for name in self._registries.registry_for(kind).all_names()
        ]
        return ValidationError(
            severity=Severity.ERROR,
            code=UNRESOLVED_PARAMETER,
            message=param.reason or f"Could not understand '{param.raw_text}'",
            field="parameter",
            value=param.raw_text,
            suggestions=tuple(self._suggest(param.raw_text, pool)),
        )

    def _unsatisfied_slots(
        self,
        action: ActionDefinition | None,
        parameters: ExtractedParameters,
    ) -> list[EntityKind]:
        """Entity kinds the schema asks for that no valid parameter supplies, in schema order."""
        if action is None:
            return []
        supplied = Counter(
            param.type.entity_kind
            for param in parameters.parameters
            if param.is_valid and param.type.entity_kind is not None
        )
        missing: list[EntityKind] = []
        for slot in action.parameters:
            kind = _SLOT_KINDS.get(slot.kind)
            if kind is None:
                continue
            if supplied[kind] > 0:
                supplied[kind] -= 1
            else:
                missing.append(kind)
        return missing

    # ── 3. Resource availability ─────────────────────────────────────────────

    def _check_resources(self, parameters: ExtractedParameters) -> list[ValidationError]:
        quantity = parameters.first_quantity
        if quantity is None:
            return []

        resources = self._registries.resources
        issues: list[ValidationError] = []
        for param in parameters.valid_of_type(ParameterType.RESOURCE):
            if param.ref is None or resources.find_by_id(param.ref.entity_id) is None:
                continue
            available = resources.available_quantity(param.ref.entity_id)
            if quantity <= available:
                continue
            shortfall = quantity - available
            issues.append(
                ValidationError(
                    severity=Severity.ERROR,
                    code=INSUFFICIENT_RESOURCES,
                    message=(
                        f"Requested {quantity} {param.resolved_name} but only {available} "
                        f"available (short by {shortfall})"
                    ),
                    field="quantity",
                    value=str(quantity),
                )
            )
        return issues

    # ── 4. Quantity bounds ───────────────────────────────────────────────────

    def quantity_bounds(self, action: ActionDefinition | None) -> tuple[int, int]:
        """Return the action's quantity range clamped into the absolute range.

        Bounds the action leaves unset (and every bound of an unknown action)
        come from the configured defaults.
        """
        s = self._settings
        low = action.min_quantity if action is not None else None
        high = action.max_quantity if action is not None else None
        if low is None:
            low = s.default_min_quantity
        if high is None:
            high = s.default_max_quantity
        low = min(max(low, s.absolute_min_quantity), s.absolute_max_quantity)
        high = min(max(high, s.absolute_min_quantity), s.absolute_max_quantity)
        return low, high

    def _check_bounds(
        self,
        action: ActionDefinition | None,
        parameters: ExtractedParameters,
    ) -> list[ValidationError]:
        low, high = self.quantity_bounds(action)
        issues: list[ValidationError] = []
        for param in parameters.valid_of_type(ParameterType.QUANTITY):
            value = param.quantity
            if value is None:
                continue
            if value < low:
                message = f"Quantity {value} is below the minimum of {low}"
            elif value > high:
                message = f"Quantity {value} exceeds the maximum of {high}"
            else:
                continue
            issues.append(
                ValidationError(
                    severity=Severity.ERROR,
                    code=QUANTITY_OUT_OF_BOUNDS,
                    message=message,
                    field="quantity",
                    value=param.raw_text,
                )
            )
        return issues

    # ── 5. Self-targeting ────────────────────────────────────────────────────

    def _check_self_target(
        self,
        action: ActionDefinition | None,
        parameters: ExtractedParameters,
        player_entity_id: int | None,
    ) -> list[ValidationError]:
        if player_entity_id is None:
            return []
        targets = {
            param.ref.entity_id
            for param in parameters.valid_of_type(ParameterType.NPC)
            if param.ref is not None
        }
        if player_entity_id not in targets:
            return []

        if len(targets) > 1:
            return [
                ValidationError(
                    severity=Severity.WARNING,
                    code=SELF_TARGET,
                    message="You are among the targets of this action",
                    field="target",
                    value=str(player_entity_id),
                )
            ]
        if action is not None and not action.targets_others:
            return []
        return [
            ValidationError(
                severity=Severity.ERROR,
                code=SELF_TARGET,
                message="You cannot target yourself with this action",
                field="target",
                value=str(player_entity_id),
            )
        ]

    # ── 6. Permission ────────────────────────────────────────────────────────

    def _check_permission(
        self,
        player_entity_id: int | None,
        action_name: str,
        parameters: ExtractedParameters,
    ) -> list[ValidationError]:
        decision = self._permissions.check(player_entity_id, action_name, parameters)
        if decision.allowed:
            return []
        return [
            ValidationError(
                severity=Severity.ERROR,
                code=PERMISSION_DENIED,
                message=decision.reason or "Permission denied",
                field="action",
                value=action_name,
            )
        ]

    # ── 7. Completeness and certainty ────────────────────────────────────────

    def _check_missing(
        self,
        action: ActionDefinition | None,
        parameters: ExtractedParameters,
        reported: set[str],
    ) -> list[ValidationError]:
        if action is None:
            return []
        issues: list[ValidationError] = []
        for slot in action.parameters:
            if not slot.required:
                continue
            if slot.kind is ParameterKind.QUANTITY:
                supplied = bool(parameters.valid_of_type(ParameterType.QUANTITY))
                already_reported = INVALID_QUANTITY in reported
            elif slot.kind in _SLOT_KINDS:
                kind = _SLOT_KINDS[slot.kind]
                supplied = bool(parameters.valid_of_type(ParameterType.for_kind(kind)))
                already_reported = NOT_FOUND_CODES[kind] in reported
            else:
                continue
            if supplied or already_reported:
                continue
            issues.append(
                ValidationError(
                    severity=Severity.WARNING,
                    code=MISSING_PARAMETER,
                    message=f"'{action.name}' expects a {slot.kind.value} for '{slot.name}'",
                    field=slot.name,
                )
            )
        return issues

    def _check_confidence(self, parameters: ExtractedParameters) -> list[ValidationError]:
        if not parameters.parameters:
            return []
        floor = self._settings.low_confidence_floor
        if parameters.confidence >= floor:
            return []
        return [
            ValidationError(
                severity=Severity.WARNING,
                code=LOW_CONFIDENCE,
                message=(
                    f"Parameters were matched with low confidence ({parameters.confidence:.2f})"
                ),
                field="parameters",
                value=f"{parameters.confidence:.2f}",
            )
        ]

    # ── Aggregation ──────────────────────────────────────────────────────────

    def _aggregate(self, issues: list[ValidationError], base_confidence: float) -> ValidationResult:
        ordered = sorted(issues, key=lambda issue: -issue.severity)
        errors = tuple(issue for issue in ordered if issue.severity.blocking)
        warnings = tuple(issue for issue in ordered if not issue.severity.blocking)

        error_factor = 1.0 - _unit(self._settings.error_penalty)
        warning_factor = 1.0 - _unit(self._settings.warning_penalty)
        confidence = (
            _unit(base_confidence)
            * error_factor ** len(errors)
            * warning_factor ** len(warnings)
        )
        return ValidationResult(errors=errors, warnings=warnings, confidence=_unit(confidence))

    # ── Suggestions ──────────────────────────────────────────────────────────

    @property
    def _max_suggestions(self) -> int:
        return max(0, min(self._settings.max_suggestions, MAX_SUGGESTIONS))

    def _suggest(self, value: str, names: Iterable[str]) -> list[str]:
        return rank_candidates(
            value,
            names,
            limit=self._max_suggestions,
            floor=self._settings.suggestion_floor,
        )


def _unit(value: float) -> float:
    return min(1.0, max(0.0, value))
