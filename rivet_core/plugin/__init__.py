"""Installed external plugins: manifests, store lookup and compatibility."""

from .compat import check_supported_version, is_supported, parse_requirement
from .errors import (
    IncompatibleVersionError,
    PluginError,
    PluginManifestError,
    PluginNotFoundError,
)
from .manifest import MANIFEST_FILE_NAME, PluginManifest
from .store import InstalledPlugin, PluginStore

__all__ = [
    "MANIFEST_FILE_NAME",
    "InstalledPlugin",
    "PluginManifest",
    "PluginStore",
    "PluginError",
    "PluginManifestError",
    "PluginNotFoundError",
    "IncompatibleVersionError",
    "check_supported_version",
    "is_supported",
    "parse_requirement",
]
