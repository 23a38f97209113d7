"""Tests for the on-disk plugin store."""

from __future__ import annotations

import errno
import os
from pathlib import Path

import pytest

from rivet_core.plugin import PluginManifestError, PluginNotFoundError, PluginStore


def _install(root: Path, name: str, *, requires: str = ">=0.1.0", declared: str | None = None) -> Path:
    plugin_dir = root / name
    plugin_dir.mkdir(parents=True, exist_ok=True)
    (plugin_dir / "plugin.toml").write_text(
        "[plugin]\n"
        f'name = "{declared or name}"\n'
        'version = "0.3.0"\n'
        f'requires_rivet = "{requires}"\n',
        encoding="utf-8",
    )
    return plugin_dir


def test_read_plugin_manifest_returns_installed_manifest(tmp_path: Path) -> None:
    _install(tmp_path, "lint")
    store = PluginStore(tmp_path)

    manifest = store.read_plugin_manifest("lint")

    assert manifest.name == "lint"
    assert manifest.version == "0.3.0"


def test_unknown_plugin_raises_not_found(tmp_path: Path) -> None:
    store = PluginStore(tmp_path)

    with pytest.raises(PluginNotFoundError) as excinfo:
        store.read_plugin_manifest("deploy")

    assert excinfo.value.name == "deploy"


@pytest.mark.parametrize("name", ["", ".", "..", "../lint", "a/b"])
def test_names_that_escape_the_store_are_not_found(tmp_path: Path, name: str) -> None:
    _install(tmp_path, "lint")

    with pytest.raises(PluginNotFoundError):
        PluginStore(tmp_path / "inner").read_plugin_manifest(name)


def test_manifest_name_must_match_folder(tmp_path: Path) -> None:
    _install(tmp_path, "lint", declared="format")

    with pytest.raises(PluginManifestError, match="expected 'lint'"):
        PluginStore(tmp_path).read_plugin_manifest("lint")


def test_installed_binary_path_lives_in_plugin_folder(tmp_path: Path) -> None:
    store = PluginStore(tmp_path)

    path = store.installed_binary_path("lint")

    expected = "lint.exe" if os.name == "nt" else "lint"
    assert path == tmp_path / "lint" / expected


def test_installed_plugins_reports_broken_manifests(tmp_path: Path) -> None:
    _install(tmp_path, "lint")
    broken = tmp_path / "broken"
    broken.mkdir()
    (broken / "plugin.toml").write_text("not toml [", encoding="utf-8")
    (tmp_path / "no_manifest").mkdir()

    plugins = PluginStore(tmp_path).installed_plugins()

    assert [plugin.name for plugin in plugins] == ["broken", "lint"]
    assert plugins[0].manifest is None
    assert plugins[0].error
    assert plugins[1].manifest is not None


def test_installed_plugins_handles_missing_directory(tmp_path: Path) -> None:
    assert PluginStore(tmp_path / "absent").installed_plugins() == ()


def test_name_too_long_for_the_filesystem_is_not_found(tmp_path: Path) -> None:
    store = PluginStore(tmp_path)

    with pytest.raises(PluginNotFoundError):
        store.read_plugin_manifest("x" * 300)


def test_unreadable_plugin_folder_is_a_manifest_error(tmp_path: Path, monkeypatch) -> None:
    def _denied(self: Path) -> bool:
        raise PermissionError(errno.EACCES, "Permission denied", str(self))

    monkeypatch.setattr(Path, "is_file", _denied)

    with pytest.raises(PluginManifestError, match="unable to read manifest"):
        PluginStore(tmp_path).read_plugin_manifest("lint")
