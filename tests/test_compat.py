"""Tests for version ordering and plugin compatibility checks."""

from __future__ import annotations

import pytest

from rivet_core.plugin import IncompatibleVersionError, PluginManifest, check_supported_version
from rivet_core.plugin.compat import is_supported, parse_requirement
from rivet_core.plugin.versions import compare_versions


def _manifest(requires: str, name: str = "build") -> PluginManifest:
    return PluginManifest(name=name, version="1.0.0", requires_rivet=requires)


@pytest.mark.parametrize(
    ("left", "right", "expected"),
    [
        ("1.5.0", "2.0.0", -1),
        ("2.0.0", "1.5.0", 1),
        ("1.2", "1.2.0", 0),
        ("1.10.0", "1.9.0", 1),
        ("1.0.0-rc1", "1.0.0", -1),
        ("1.0.0-alpha", "1.0.0-beta", -1),
        ("v1.0.0+build.5", "1.0.0", 0),
    ],
)
def test_compare_versions(left: str, right: str, expected: int) -> None:
    assert compare_versions(left, right) == expected


@pytest.mark.parametrize(
    ("requirement", "version", "supported"),
    [
        (">=2.0.0", "1.5.0", False),
        (">=2.0.0", "2.0.0", True),
        (">=0.1, <1.0", "0.9.9", True),
        (">=0.1, <1.0", "1.0.0", False),
        ("==0.1.0", "0.1.0", True),
        ("!=0.1.0", "0.1.0", False),
        ("^1.2", "1.9.0", True),
        ("^1.2", "2.0.0", False),
        ("^0.2.3", "0.2.9", True),
        ("^0.2.3", "0.3.0", False),
        ("0.2", "0.2.5", True),
        ("~1.2.0", "1.2.7", True),
        ("~1.2.0", "1.3.0", False),
        ("*", "42.0.0", True),
    ],
)
def test_is_supported(requirement: str, version: str, supported: bool) -> None:
    assert is_supported(requirement, version) is supported


@pytest.mark.parametrize("requirement", ["", "   ", ">=", ">=1.0,", "=> 1.0", "^abc"])
def test_parse_requirement_rejects_malformed_input(requirement: str) -> None:
    with pytest.raises(ValueError):
        parse_requirement(requirement)


def test_check_supported_version_passes_for_compatible_manifest() -> None:
    check_supported_version(_manifest(">=0.1.0"), "0.1.0")


def test_check_supported_version_reports_reason() -> None:
    with pytest.raises(IncompatibleVersionError) as excinfo:
        check_supported_version(_manifest(">=2.0.0"), "1.5.0")

    error = excinfo.value
    assert error.name == "build"
    assert "supported: >=2.0.0" in str(error)
    assert "actual: 1.5.0" in str(error)
