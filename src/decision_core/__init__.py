"""Decision Core: natural-language command interpretation for world simulation.

Turns free-form player commands ("give 50 food to Alise, please") into
structured, validated decisions.  Three stages run in order:

    interpreter   rank candidate actions with a hybrid confidence model
    extraction    resolve raw tokens into typed, confidence-annotated parameters
    validation    run every rule and return severity-ranked diagnostics

The package never mutates world state.  Registries and the action catalog are
caller-owned handles passed in explicitly.

Version Management
------------------
``__version__`` is read from the installed package metadata at import time.
The single source of truth is the ``version`` field in ``pyproject.toml``.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version("decision-core")
except PackageNotFoundError:
    __version__ = "0.1.0"
