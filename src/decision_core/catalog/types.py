"""Immutable action definition types.

An :class:`ActionDefinition` describes one verb the player may issue: its
canonical name, the aliases that mean the same thing, the parameters it
expects and the quantity range it accepts.  Definitions are frozen once
registered; the catalog hands out the same instance to every caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ParameterKind(Enum):
    """Kinds of value an action parameter slot accepts."""

    NPC = "npc"
    FACTION = "faction"
    RESOURCE = "resource"
    QUANTITY = "quantity"
    STRING = "string"


@dataclass(frozen=True)
class ParameterSpec:
    """One slot in an action's ordered parameter schema.

    Attributes:
        name:     Slot name, e.g. ``"target"`` or ``"amount"``.
        kind:     Expected value kind.
        required: Whether the command is incomplete without it.
    """

    name: str
    kind: ParameterKind
    required: bool = True


@dataclass(frozen=True)
class ActionDefinition:
    """A player-executable action.

    Attributes:
        name:                  Canonical action name (e.g. ``"allocate"``).
        aliases:               Synonyms that resolve to this action
                               (e.g. ``("give", "distribute")``).
        parameters:            Ordered parameter schema.
        description:           User-facing one-line description.
        min_quantity:          Lowest quantity this action accepts; ``None``
                               uses the validator's ``default_min_quantity``.
        max_quantity:          Highest quantity this action accepts; ``None``
                               uses ``default_max_quantity``.  Both bounds
                               are clamped into the validator's absolute
                               range before use.
        tags:                  Free-form categories (``"economic"``, ...).
        priority:              1-10, carried onto the interpreted decision.
        requires_confirmation: Execution should ask the player to confirm.
        targets_others:        The action is directed at someone other than
                               the player; a self-target is then an error.
    """

    name: str
    aliases: tuple[str, ...] = ()
    parameters: tuple[ParameterSpec, ...] = ()
    description: str = ""
    min_quantity: int | None = None
    max_quantity: int | None = None
    tags: tuple[str, ...] = field(default=())
    priority: int = 5
    requires_confirmation: bool = False
    targets_others: bool = True

    @property
    def names(self) -> tuple[str, ...]:
        """Canonical name followed by every alias."""
        return (self.name, *self.aliases)

    def expects(self, kind: ParameterKind) -> bool:
        """Return ``True`` if any schema slot accepts *kind*."""
        return any(spec.kind is kind for spec in self.parameters)
