"""
Shared pytest fixtures for the decision_core test suite.

This module provides fixtures that are automatically available to all test files:
- A small world (NPCs, factions, resources) backed by the in-memory registries
- The built-in action catalog and a minimal single-action catalog
- Pipeline components wired with explicit default settings

Every fixture is function-scoped so tests can mutate registries freely.
"""

import pytest

from decision_core.catalog import (
    ActionDefinition,
    InMemoryActionCatalog,
    ParameterKind,
    ParameterSpec,
    default_catalog,
)
from decision_core.config import (
    DecisionCoreConfig,
    ExtractionSettings,
    InterpreterSettings,
    ValidationSettings,
)
from decision_core.extraction import ParameterExtractor
from decision_core.interpreter import CommandInterpreter
from decision_core.service import DecisionService
from decision_core.validation import CommandValidator
from decision_core.world import (
    EntityKind,
    InMemoryEntityRegistry,
    InMemoryResourceRegistry,
    WorldRegistries,
)

# ============================================================================
# WORLD FIXTURES
# ============================================================================

#: The player's own NPC id in the test world.
PLAYER_ID = 0


@pytest.fixture
def npcs() -> InMemoryEntityRegistry:
    return InMemoryEntityRegistry(
        EntityKind.NPC,
        {PLAYER_ID: "Hero", 1: "Alice", 2: "Bob", 3: "Old Tom"},
    )


@pytest.fixture
def factions() -> InMemoryEntityRegistry:
    return InMemoryEntityRegistry(EntityKind.FACTION, {10: "Merchants", 11: "Rebels"})


@pytest.fixture
def resources() -> InMemoryResourceRegistry:
    return InMemoryResourceRegistry({20: ("Food", 100), 21: ("Gold", 40), 22: ("Timber", 0)})


@pytest.fixture
def registries(npcs, factions, resources) -> WorldRegistries:
    return WorldRegistries(npcs=npcs, factions=factions, resources=resources)


# ============================================================================
# CATALOG FIXTURES
# ============================================================================


@pytest.fixture
def catalog() -> InMemoryActionCatalog:
    """The built-in actions: allocate, delegate, inspire, negotiate, suppress."""
    return default_catalog()


@pytest.fixture
def allocate_only_catalog() -> InMemoryActionCatalog:
    """A catalog that knows only ``allocate`` with the single alias ``give``."""
    return InMemoryActionCatalog(
        [
            ActionDefinition(
                name="allocate",
                aliases=("give",),
                parameters=(
                    ParameterSpec("resource", ParameterKind.RESOURCE),
                    ParameterSpec("amount", ParameterKind.QUANTITY, required=False),
                ),
            )
        ]
    )


# ============================================================================
# SETTINGS AND COMPONENT FIXTURES
# ============================================================================


@pytest.fixture
def settings() -> DecisionCoreConfig:
    """Built-in defaults, independent of any INI file or environment."""
    return DecisionCoreConfig(
        interpreter=InterpreterSettings(),
        extraction=ExtractionSettings(),
        validation=ValidationSettings(),
    )


@pytest.fixture
def interpreter(catalog, settings) -> CommandInterpreter:
    return CommandInterpreter(catalog, settings=settings.interpreter)


@pytest.fixture
def extractor(registries, settings) -> ParameterExtractor:
    return ParameterExtractor(registries, settings=settings.extraction)


@pytest.fixture
def validator(catalog, registries, settings) -> CommandValidator:
    return CommandValidator(catalog, registries, settings=settings.validation)


@pytest.fixture
def service(catalog, registries, settings) -> DecisionService:
    return DecisionService(catalog, registries, settings=settings)
