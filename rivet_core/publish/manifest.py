"""Application manifest (``rivet.toml``) parsing."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomllib

from .errors import AppManifestError

DEFAULT_APP_FILE = "rivet.toml"


@dataclass(frozen=True)
class ComponentSpec:
    """One ``[[component]]`` table."""

    id: str
    source: str
    files: tuple[str, ...] = ()


@dataclass(frozen=True)
class AppManifest:
    """Immutable view of an application manifest and where it lives."""

    path: Path
    name: str
    version: str
    description: str | None
    authors: tuple[str, ...]
    components: tuple[ComponentSpec, ...]

    @property
    def app_dir(self) -> Path:
        return self.path.parent

    @classmethod
    def load(cls, path: Path) -> "AppManifest":
        path = Path(path)
        try:
            with path.open("rb") as handle:
                document = tomllib.load(handle)
        except FileNotFoundError as exc:
            raise AppManifestError(f"application manifest {path} does not exist") from exc
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise AppManifestError(f"unable to read application manifest {path}: {exc}") from exc

        application = document.get("application")
        if not isinstance(application, dict):
            raise AppManifestError(f"missing or malformed [application] section in {path}")

        authors = application.get("authors", [])
        if not isinstance(authors, list) or not all(isinstance(a, str) for a in authors):
            raise AppManifestError("'authors' must be a list of strings")

        description = application.get("description")
        if description is not None and not isinstance(description, str):
            raise AppManifestError("'description' must be a string")

        raw_components = document.get("component", [])
        if not isinstance(raw_components, list):
            raise AppManifestError("'component' must be an array of tables")

        components = tuple(_parse_component(item) for item in raw_components)
        seen: set[str] = set()
        for component in components:
            if component.id in seen:
                raise AppManifestError(f"duplicate component id {component.id!r}")
            seen.add(component.id)

        return cls(
            path=path.resolve(),
            name=_required_str(application, "name"),
            version=_required_str(application, "version"),
            description=description,
            authors=tuple(authors),
            components=components,
        )


def _required_str(table: dict[str, Any], key: str) -> str:
    value = table.get(key)
    if not isinstance(value, str) or not value.strip():
        raise AppManifestError(f"'{key}' must be a non-empty string")
    return value.strip()


def _parse_component(item: Any) -> ComponentSpec:
    if not isinstance(item, dict):
        raise AppManifestError("each [[component]] must be a table")
    files = item.get("files", [])
    if not isinstance(files, list) or not all(isinstance(f, str) for f in files):
        raise AppManifestError("component 'files' must be a list of glob patterns")
    return ComponentSpec(
        id=_required_str(item, "id"),
        source=_required_str(item, "source"),
        files=tuple(files),
    )
