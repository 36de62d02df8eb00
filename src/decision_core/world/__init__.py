"""World-state collaborator contracts and in-memory reference registries."""

from decision_core.world.contracts import (
    EntityKind,
    EntityRef,
    EntityRegistry,
    ResourceRegistry,
    WorldRegistries,
)
from decision_core.world.inmemory import InMemoryEntityRegistry, InMemoryResourceRegistry

__all__ = [
    "EntityKind",
    "EntityRef",
    "EntityRegistry",
    "InMemoryEntityRegistry",
    "InMemoryResourceRegistry",
    "ResourceRegistry",
    "WorldRegistries",
]
