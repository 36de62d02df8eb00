"""Action catalog: definitions, lookup contract and built-in actions.

Typical usage::

    from decision_core.catalog import default_catalog

    catalog = default_catalog()
    catalog.lookup("give").name  # "allocate"
"""

from decision_core.catalog.catalog import (
    BUILTIN_ACTIONS,
    ActionCatalog,
    InMemoryActionCatalog,
    default_catalog,
)
from decision_core.catalog.types import ActionDefinition, ParameterKind, ParameterSpec

__all__ = [
    "BUILTIN_ACTIONS",
    "ActionCatalog",
    "ActionDefinition",
    "InMemoryActionCatalog",
    "ParameterKind",
    "ParameterSpec",
    "default_catalog",
]
