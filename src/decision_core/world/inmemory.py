"""Minimal in-memory registries implementing the world contracts.

These are reference implementations for callers without their own entity
store and for the test suite.  They are deliberately thin: a dict of
``id -> name`` (plus quantities for resources) with lookups that satisfy
:mod:`decision_core.world.contracts`.
"""

from __future__ import annotations

from decision_core.world.contracts import EntityKind, EntityRef


class InMemoryEntityRegistry:
    """Dict-backed NPC or faction registry."""

    def __init__(self, kind: EntityKind, entities: dict[int, str] | None = None) -> None:
        self._kind = kind
        self._names: dict[int, str] = dict(entities or {})

    @property
    def kind(self) -> EntityKind:
        return self._kind

    def add(self, entity_id: int, name: str) -> None:
        """Register or rename an entity."""
        self._names[entity_id] = name

    def remove(self, entity_id: int) -> None:
        """Forget an entity; unknown ids are ignored."""
        self._names.pop(entity_id, None)

    def all_names(self) -> list[str]:
        return list(self._names.values())

    def find_by_name(self, name: str) -> EntityRef | None:
        wanted = name.strip().lower()
        for entity_id, entity_name in self._names.items():
            if entity_name.lower() == wanted:
                return EntityRef(kind=self._kind, entity_id=entity_id)
        return None

    def find_by_id(self, entity_id: int) -> EntityRef | None:
        if entity_id in self._names:
            return EntityRef(kind=self._kind, entity_id=entity_id)
        return None

    def snapshot(self) -> dict[int, str]:
        """Return a copy of the registry contents."""
        return dict(self._names)


class InMemoryResourceRegistry(InMemoryEntityRegistry):
    """Dict-backed resource registry with stockpile quantities."""

    def __init__(self, resources: dict[int, tuple[str, int]] | None = None) -> None:
        super().__init__(EntityKind.RESOURCE)
        self._quantities: dict[int, int] = {}
        for entity_id, (name, quantity) in (resources or {}).items():
            self.add_resource(entity_id, name, quantity)

    def add_resource(self, entity_id: int, name: str, quantity: int) -> None:
        """Register a resource with its available quantity."""
        self.add(entity_id, name)
        self._quantities[entity_id] = quantity

    def remove(self, entity_id: int) -> None:
        super().remove(entity_id)
        self._quantities.pop(entity_id, None)

    def available_quantity(self, entity_id: int) -> int:
        return self._quantities.get(entity_id, 0)

    def snapshot(self) -> dict[int, tuple[str, int]]:  # type: ignore[override]
        names = super().snapshot()
        return {entity_id: (name, self._quantities[entity_id]) for entity_id, name in names.items()}
