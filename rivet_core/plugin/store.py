"""On-disk store of installed plugin manifests and binaries."""

from __future__ import annotations

import errno
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .errors import PluginManifestError, PluginNotFoundError
from .manifest import MANIFEST_FILE_NAME, PluginManifest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstalledPlugin:
    """Snapshot of one plugin folder, valid or not."""

    name: str
    path: Path
    manifest: PluginManifest | None = None
    error: str | None = None


class PluginStore:
    """Look up plugins installed as ``<plugins_dir>/<name>/{plugin.toml,<name>}``."""

    def __init__(self, plugins_dir: Path) -> None:
        self.plugins_dir = Path(plugins_dir)

    def plugin_dir(self, name: str) -> Path:
        return self.plugins_dir / name

    def manifest_path(self, name: str) -> Path:
        return self.plugin_dir(name) / MANIFEST_FILE_NAME

    def read_plugin_manifest(self, name: str) -> PluginManifest:
        """Return the manifest for ``name``.

        Raises :class:`PluginNotFoundError` when no manifest is installed and
        :class:`PluginManifestError` when the manifest exists but cannot be read.
        """

        if not _is_plain_name(name):
            raise PluginNotFoundError(name)
        path = self.manifest_path(name)
        try:
            found = path.is_file()
        except OSError as exc:
            # A name longer than the filesystem allows cannot be installed.
            if exc.errno == errno.ENAMETOOLONG:
                raise PluginNotFoundError(name) from exc
            raise PluginManifestError(f"unable to read manifest at {path}: {exc}") from exc
        if not found:
            raise PluginNotFoundError(name)
        manifest = PluginManifest.load(path)
        if manifest.name != name:
            raise PluginManifestError(
                f"manifest at {path} declares name {manifest.name!r}, expected {name!r}"
            )
        logger.debug("loaded manifest for %s from %s", name, path)
        return manifest

    def installed_binary_path(self, name: str) -> Path:
        binary = name + ".exe" if os.name == "nt" else name
        return self.plugin_dir(name) / binary

    def installed_plugins(self) -> tuple[InstalledPlugin, ...]:
        """List every plugin folder that carries a manifest, sorted by name."""

        if not self.plugins_dir.is_dir():
            return ()

        results: list[InstalledPlugin] = []
        for child in sorted(self.plugins_dir.iterdir(), key=lambda path: path.name):
            if not child.is_dir() or not (child / MANIFEST_FILE_NAME).is_file():
                continue
            try:
                manifest = self.read_plugin_manifest(child.name)
            except PluginManifestError as exc:
                logger.warning("skipping %s: %s", child, exc)
                results.append(InstalledPlugin(name=child.name, path=child, error=str(exc)))
                continue
            results.append(InstalledPlugin(name=child.name, path=child, manifest=manifest))
        return tuple(results)


def _is_plain_name(name: str) -> bool:
    # Names map straight onto folders; reject anything that could escape plugins_dir.
    return bool(name) and name not in (".", "..") and "/" not in name and "\\" not in name
