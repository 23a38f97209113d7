"""Publish applications as bundles."""

from .bundle import (
    INVOICE_FILE_NAME,
    PARCELS_DIR_NAME,
    Invoice,
    Parcel,
    expand_manifest,
    write_bundle,
)
from .client import BundleClient, redact_url
from .errors import AppManifestError, BundleCommandError, BundleWriteError, PublishError
from .manifest import DEFAULT_APP_FILE, AppManifest, ComponentSpec
from .types import BundleClientConfig, BundlePushResult

__all__ = [
    "DEFAULT_APP_FILE",
    "INVOICE_FILE_NAME",
    "PARCELS_DIR_NAME",
    "AppManifest",
    "AppManifestError",
    "BundleClient",
    "BundleClientConfig",
    "BundleCommandError",
    "BundlePushResult",
    "BundleWriteError",
    "ComponentSpec",
    "Invoice",
    "Parcel",
    "PublishError",
    "expand_manifest",
    "redact_url",
    "write_bundle",
]
