"""Handle plugin manifest parsing."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import tomllib

from .compat import parse_requirement
from .errors import PluginManifestError

MANIFEST_FILE_NAME = "plugin.toml"

_REQUIRED_FIELDS = ("name", "version", "requires_rivet")
_OPTIONAL_FIELDS = ("description", "homepage", "license")


@dataclass(frozen=True)
class PluginManifest:
    """Immutable representation of a plugin manifest document."""

    name: str
    version: str
    requires_rivet: str
    description: str | None = None
    homepage: str | None = None
    license: str | None = None

    @staticmethod
    def _normalize_field(label: str, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise PluginManifestError(f"{label} cannot be empty.")
        return normalized

    @classmethod
    def load(cls, path: Path) -> "PluginManifest":
        """Load and validate plugin manifest data from ``plugin.toml``."""

        try:
            with path.open("rb") as handle:
                document = tomllib.load(handle)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise PluginManifestError(f"unable to read manifest at {path}: {exc}") from exc

        plugin_section = document.get("plugin")
        if not isinstance(plugin_section, dict):
            raise PluginManifestError(f"missing or malformed [plugin] section in {path}")

        fields: dict[str, str] = {}
        for key in _REQUIRED_FIELDS:
            raw_value = plugin_section.get(key)
            if raw_value is None:
                raise PluginManifestError(f"missing '{key}' in manifest {path}")
            if not isinstance(raw_value, str):
                raise PluginManifestError(f"'{key}' must be a string")
            fields[key] = cls._normalize_field(key, raw_value)

        for key in _OPTIONAL_FIELDS:
            raw_value = plugin_section.get(key)
            if raw_value is None:
                continue
            if not isinstance(raw_value, str):
                raise PluginManifestError(f"'{key}' must be a string")
            fields[key] = raw_value.strip() or None

        try:
            parse_requirement(fields["requires_rivet"])
        except ValueError as exc:
            raise PluginManifestError(f"invalid requires_rivet in {path}: {exc}") from exc

        return cls(**fields)
