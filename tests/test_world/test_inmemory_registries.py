"""Unit tests for the in-memory world registries."""

from __future__ import annotations

import pytest

from decision_core.world import (
    EntityKind,
    EntityRef,
    InMemoryEntityRegistry,
    InMemoryResourceRegistry,
    WorldRegistries,
)


@pytest.mark.unit
class TestInMemoryEntityRegistry:
    def test_find_by_name_is_case_insensitive(self, npcs):
        assert npcs.find_by_name("alice") == EntityRef(EntityKind.NPC, 1)
        assert npcs.find_by_name("  ALICE ") == EntityRef(EntityKind.NPC, 1)

    def test_find_by_name_requires_exact_text(self, npcs):
        assert npcs.find_by_name("Alise") is None

    def test_find_by_id(self, npcs):
        assert npcs.find_by_id(2) == EntityRef(EntityKind.NPC, 2)
        assert npcs.find_by_id(99) is None

    def test_refs_carry_registry_kind(self, factions):
        ref = factions.find_by_name("Rebels")
        assert ref is not None
        assert ref.kind is EntityKind.FACTION

    def test_add_and_remove(self):
        registry = InMemoryEntityRegistry(EntityKind.NPC)
        registry.add(5, "Cara")
        assert registry.all_names() == ["Cara"]
        registry.remove(5)
        registry.remove(5)
        assert registry.all_names() == []
        assert registry.find_by_id(5) is None

    def test_snapshot_is_a_copy(self, npcs):
        snapshot = npcs.snapshot()
        snapshot[42] = "Intruder"
        assert npcs.find_by_id(42) is None


@pytest.mark.unit
class TestInMemoryResourceRegistry:
    def test_available_quantity(self, resources):
        assert resources.available_quantity(20) == 100
        assert resources.available_quantity(22) == 0

    def test_unknown_resource_has_nothing_available(self, resources):
        assert resources.available_quantity(999) == 0

    def test_remove_clears_quantity(self):
        registry = InMemoryResourceRegistry({1: ("Stone", 7)})
        registry.remove(1)
        assert registry.available_quantity(1) == 0
        assert registry.snapshot() == {}

    def test_snapshot_includes_quantities(self, resources):
        assert resources.snapshot()[20] == ("Food", 100)


@pytest.mark.unit
def test_world_registries_route_by_kind(registries, npcs, factions, resources):
    bundle: WorldRegistries = registries
    assert bundle.registry_for(EntityKind.NPC) is npcs
    assert bundle.registry_for(EntityKind.FACTION) is factions
    assert bundle.registry_for(EntityKind.RESOURCE) is resources
