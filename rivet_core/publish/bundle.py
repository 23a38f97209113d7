"""Expand an application manifest into a bundle invoice and stage it on disk."""

from __future__ import annotations

import hashlib
import logging
import mimetypes
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

import yaml

from .errors import AppManifestError, BundleWriteError
from .manifest import AppManifest

logger = logging.getLogger(__name__)

INVOICE_FILE_NAME = "invoice.yaml"
PARCELS_DIR_NAME = "parcels"
INVOICE_SCHEMA_VERSION = "1.0.0"

_MEDIA_TYPE_OVERRIDES = {
    ".wasm": "application/wasm",
    ".toml": "application/toml",
}


@dataclass(frozen=True)
class Parcel:
    """A single content-addressed file that belongs to the bundle."""

    sha256: str
    name: str
    size: int
    media_type: str
    source: Path
    member_of: tuple[str, ...] = ()

    @property
    def staged_name(self) -> str:
        return f"{self.sha256}.dat"


@dataclass(frozen=True)
class Invoice:
    """Bundle metadata plus one entry per parcel."""

    name: str
    version: str
    description: str | None = None
    authors: tuple[str, ...] = ()
    parcels: tuple[Parcel, ...] = field(default_factory=tuple)

    @property
    def bundle_id(self) -> str:
        return f"{self.name}/{self.version}"

    def to_dict(self) -> dict[str, Any]:
        bundle: dict[str, Any] = {"name": self.name, "version": self.version}
        if self.description:
            bundle["description"] = self.description
        if self.authors:
            bundle["authors"] = list(self.authors)
        return {
            "bindle_version": INVOICE_SCHEMA_VERSION,
            "bundle": bundle,
            "parcel": [
                {
                    "label": {
                        "sha256": parcel.sha256,
                        "name": parcel.name,
                        "size": parcel.size,
                        "media_type": parcel.media_type,
                    },
                    "conditions": {"member_of": list(parcel.member_of)},
                }
                for parcel in self.parcels
            ],
        }


def _media_type(path: Path) -> str:
    override = _MEDIA_TYPE_OVERRIDES.get(path.suffix.lower())
    if override:
        return override
    guessed, _ = mimetypes.guess_type(path.name)
    return guessed or "application/octet-stream"


def _sha256(path: Path) -> str:
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(1024 * 1024), b""):
            digest.update(chunk)
    return digest.hexdigest()


def _relative_label(app_dir: Path, path: Path) -> str:
    resolved = path.resolve()
    try:
        return resolved.relative_to(app_dir).as_posix()
    except ValueError as exc:
        raise AppManifestError(f"{path} is outside the application directory {app_dir}") from exc


def _component_files(manifest: AppManifest) -> Iterable[tuple[str, Path]]:
    app_dir = manifest.app_dir
    for component in manifest.components:
        source = app_dir / component.source
        if not source.is_file():
            raise AppManifestError(
                f"component {component.id!r} source {component.source!r} does not exist"
            )
        yield component.id, source
        for pattern in component.files:
            matches = sorted(path for path in app_dir.glob(pattern) if path.is_file())
            if not matches:
                raise AppManifestError(
                    f"component {component.id!r} file pattern {pattern!r} matched no files"
                )
            for path in matches:
                yield component.id, path


def expand_manifest(app_file: Path) -> tuple[Invoice, list[Parcel]]:
    """Read ``app_file`` and describe every file the bundle must carry.

    Files with identical content collapse into one parcel whose ``member_of``
    lists every component that uses it. The application manifest itself is
    always included, with no member components.
    """

    manifest = AppManifest.load(app_file)
    app_dir = manifest.app_dir

    labels: dict[str, Path] = {}
    members: dict[str, list[str]] = {}
    _add_file(labels, members, _relative_label(app_dir, manifest.path), manifest.path, None)
    for component_id, path in _component_files(manifest):
        _add_file(labels, members, _relative_label(app_dir, path), path, component_id)

    parcels: list[Parcel] = []
    by_digest: dict[str, int] = {}
    for name in sorted(labels):
        path = labels[name]
        digest = _sha256(path)
        if digest in by_digest:
            index = by_digest[digest]
            existing = parcels[index]
            merged = tuple(dict.fromkeys([*existing.member_of, *members[name]]))
            parcels[index] = Parcel(
                sha256=existing.sha256,
                name=existing.name,
                size=existing.size,
                media_type=existing.media_type,
                source=existing.source,
                member_of=merged,
            )
            continue
        by_digest[digest] = len(parcels)
        parcels.append(
            Parcel(
                sha256=digest,
                name=name,
                size=path.stat().st_size,
                media_type=_media_type(path),
                source=path,
                member_of=tuple(members[name]),
            )
        )

    invoice = Invoice(
        name=manifest.name,
        version=manifest.version,
        description=manifest.description,
        authors=manifest.authors,
        parcels=tuple(parcels),
    )
    logger.debug("expanded %s into %d parcels", app_file, len(parcels))
    return invoice, parcels


def _add_file(
    labels: dict[str, Path],
    members: dict[str, list[str]],
    name: str,
    path: Path,
    component_id: str | None,
) -> None:
    labels.setdefault(name, path)
    bucket = members.setdefault(name, [])
    if component_id is not None and component_id not in bucket:
        bucket.append(component_id)


def write_bundle(invoice: Invoice, parcels: Iterable[Parcel], staging_dir: Path) -> Path:
    """Write ``invoice.yaml`` and ``parcels/<sha256>.dat`` under ``staging_dir``."""

    parcels_dir = staging_dir / PARCELS_DIR_NAME
    try:
        parcels_dir.mkdir(parents=True, exist_ok=True)
        for parcel in parcels:
            shutil.copyfile(parcel.source, parcels_dir / parcel.staged_name)
        invoice_path = staging_dir / INVOICE_FILE_NAME
        with invoice_path.open("w", encoding="utf-8") as handle:
            yaml.safe_dump(invoice.to_dict(), handle, sort_keys=False)
    except OSError as exc:
        raise BundleWriteError(
            f"Failed to write bundle '{invoice.bundle_id}' to {staging_dir}: {exc}"
        ) from exc
    return invoice_path
