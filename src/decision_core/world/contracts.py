"""Read-only contracts for the world-state collaborators.

The interpretation pipeline never owns world entities.  It reads them through
the registry protocols below and hands back :class:`EntityRef` values: a kind
tag plus an id, never the entity object itself.  Whoever executes a decision
re-resolves the reference against live state.

Registry implementations must tolerate repeated and concurrent reads.  The
pipeline calls only the read methods declared here, on every path including
dry-run validation.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class EntityKind(Enum):
    """Kinds of world entity a command parameter can resolve to."""

    NPC = "npc"
    FACTION = "faction"
    RESOURCE = "resource"


@dataclass(frozen=True)
class EntityRef:
    """Weak reference to a world entity.

    ``None`` stands in for "no entity" wherever an ``EntityRef | None`` is
    expected, so the resolved kind is always known from the value itself.

    Attributes:
        kind:      Which registry the id belongs to.
        entity_id: Registry-scoped identifier.
    """

    kind: EntityKind
    entity_id: int


class EntityRegistry(Protocol):
    """Read-only view of one entity registry (NPCs or factions)."""

    def all_names(self) -> Sequence[str]:
        """Return every registered display name."""
        ...

    def find_by_name(self, name: str) -> EntityRef | None:
        """Return the entity whose name matches *name* exactly (case-insensitive)."""
        ...

    def find_by_id(self, entity_id: int) -> EntityRef | None:
        """Return the entity with *entity_id*, or ``None`` if it no longer exists."""
        ...


class ResourceRegistry(EntityRegistry, Protocol):
    """Entity registry for stockpiled resources."""

    def available_quantity(self, entity_id: int) -> int:
        """Return the quantity currently available for *entity_id* (0 if unknown)."""
        ...


@dataclass(frozen=True)
class WorldRegistries:
    """The three registries the pipeline resolves names against.

    A plain bundle of caller-owned handles; the pipeline holds no other
    reference to world state.
    """

    npcs: EntityRegistry
    factions: EntityRegistry
    resources: ResourceRegistry

    def registry_for(self, kind: EntityKind) -> EntityRegistry:
        """Return the registry that owns entities of *kind*."""
        if kind is EntityKind.NPC:
            return self.npcs
        if kind is EntityKind.FACTION:
            return self.factions
        return self.resources
