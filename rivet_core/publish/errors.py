"""Typed publish errors."""

from __future__ import annotations


class PublishError(RuntimeError):
    """Base publish error."""


class AppManifestError(PublishError):
    """The application manifest is missing or invalid."""


class BundleWriteError(PublishError):
    """The staged bundle could not be written."""


class BundleCommandError(PublishError):
    """bindle CLI execution failed."""
