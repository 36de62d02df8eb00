"""Tests for package version resolution.

``decision_core.__version__`` comes from the installed distribution metadata
(``pyproject.toml``), falling back to a fixed string when the package is
imported from a source checkout without being installed.
"""

from __future__ import annotations

import re
from importlib.metadata import PackageNotFoundError, version

import pytest

import decision_core

_SEMVER_RE = re.compile(
    r"^\d+\.\d+\.\d+"  # major.minor.patch
    r"(-[A-Za-z0-9]+(\.[A-Za-z0-9]+)*)?$"  # optional pre-release
)


@pytest.mark.unit
class TestVersionAttribute:
    """Verify the ``decision_core.__version__`` package attribute."""

    def test_version_is_string(self):
        assert isinstance(decision_core.__version__, str)

    def test_version_is_semver(self):
        assert _SEMVER_RE.match(decision_core.__version__)

    def test_version_matches_metadata_when_installed(self):
        try:
            expected = version("decision-core")
        except PackageNotFoundError:
            pytest.skip("decision-core is not installed")
        assert decision_core.__version__ == expected
