"""Action catalog contract and in-memory implementation.

The catalog is a keyed, read-only registry of :class:`ActionDefinition`
values.  Lookup is case-insensitive and aliases resolve transparently to
their action, so ``lookup("Give")`` and ``lookup("allocate")`` return the
same definition.

Loading a catalog from disk is the caller's concern; this module only defines
the lookup contract, a dict-backed implementation and the built-in action set.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Protocol

from decision_core.catalog.types import ActionDefinition, ParameterKind, ParameterSpec
from decision_core.errors import ActionRegistrationError

logger = logging.getLogger(__name__)


class ActionCatalog(Protocol):
    """Read-only lookup contract consumed by the interpreter and validator."""

    def lookup(self, name_or_alias: str) -> ActionDefinition | None:
        """Return the action registered under *name_or_alias*, if any."""
        ...

    def all_names(self) -> Sequence[str]:
        """Return every canonical action name."""
        ...

    def all_aliases(self) -> Sequence[str]:
        """Return every alias across all actions."""
        ...


class InMemoryActionCatalog:
    """Dict-backed action catalog.

    Names and aliases share a single case-insensitive key space: an alias may
    not shadow another action's name or alias.
    """

    def __init__(self, actions: Iterable[ActionDefinition] = ()) -> None:
        self._actions: dict[str, ActionDefinition] = {}
        self._index: dict[str, str] = {}  # lower-cased name/alias -> canonical name
        for action in actions:
            self.register(action)

    def register(self, action: ActionDefinition) -> None:
        """Add *action* to the catalog.

        Raises:
            ActionRegistrationError: If the name or any alias is already taken.
        """
        keys = [key.strip().lower() for key in action.names]
        for key in keys:
            if key in self._index:
                raise ActionRegistrationError(key, self._index[key])
        if len(set(keys)) != len(keys):
            duplicate = next(key for key in keys if keys.count(key) > 1)
            raise ActionRegistrationError(duplicate, action.name)

        self._actions[action.name] = action
        for key in keys:
            self._index[key] = action.name
        logger.debug("Registered action %r with %d alias(es)", action.name, len(action.aliases))

    def lookup(self, name_or_alias: str) -> ActionDefinition | None:
        canonical = self._index.get(name_or_alias.strip().lower())
        if canonical is None:
            return None
        return self._actions[canonical]

    def all_names(self) -> list[str]:
        return list(self._actions)

    def all_aliases(self) -> list[str]:
        return [alias for action in self._actions.values() for alias in action.aliases]

    def definitions(self) -> list[ActionDefinition]:
        return list(self._actions.values())

    def by_tag(self, tag: str) -> list[ActionDefinition]:
        """Return actions carrying *tag*, in registration order."""
        return [action for action in self._actions.values() if tag in action.tags]

    def __len__(self) -> int:
        return len(self._actions)

    def __contains__(self, name_or_alias: object) -> bool:
        return isinstance(name_or_alias, str) and self.lookup(name_or_alias) is not None


# ---------------------------------------------------------------------------
# Built-in actions
# ---------------------------------------------------------------------------

BUILTIN_ACTIONS: tuple[ActionDefinition, ...] = (
    ActionDefinition(
        name="allocate",
        aliases=("give", "distribute", "provide", "help", "support"),
        parameters=(
            ParameterSpec("resource", ParameterKind.RESOURCE),
            ParameterSpec("target", ParameterKind.NPC, required=False),
            ParameterSpec("amount", ParameterKind.QUANTITY, required=False),
        ),
        description="Allocate resources to NPCs or factions to improve morale and loyalty",
        min_quantity=1,
        max_quantity=500,
        tags=("economic", "positive"),
    ),
    ActionDefinition(
        name="delegate",
        aliases=("assign", "task", "command"),
        parameters=(
            ParameterSpec("target", ParameterKind.NPC),
            ParameterSpec("task", ParameterKind.STRING),
        ),
        description="Delegate a task to an NPC or faction",
        tags=("administrative",),
    ),
    ActionDefinition(
        name="inspire",
        aliases=("rally", "motivate", "encourage"),
        parameters=(ParameterSpec("target", ParameterKind.NPC, required=False),),
        description="Inspire NPCs or entire factions to increase morale",
        tags=("social", "positive"),
    ),
    ActionDefinition(
        name="negotiate",
        aliases=("discuss", "parley", "diplomacy", "peace"),
        parameters=(
            ParameterSpec("target", ParameterKind.FACTION),
            ParameterSpec("offer", ParameterKind.STRING, required=False),
        ),
        description="Negotiate with factions to resolve conflicts",
        tags=("diplomatic",),
    ),
    ActionDefinition(
        name="suppress",
        aliases=("control", "manage", "contain"),
        parameters=(ParameterSpec("target", ParameterKind.FACTION),),
        description="Suppress faction activities or dissent",
        tags=("military", "negative"),
        priority=7,
        requires_confirmation=True,
    ),
)


def default_catalog() -> InMemoryActionCatalog:
    """Return a fresh catalog holding the built-in actions."""
    return InMemoryActionCatalog(BUILTIN_ACTIONS)
