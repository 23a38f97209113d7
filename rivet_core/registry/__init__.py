"""Convenience exports for the registry helpers."""

from .entry import FeatureEntry
from .errors import (
    AmbiguousFeatureError,
    FeatureCollisionError,
    FeatureNotFoundError,
    FeatureRegistryError,
)
from .registry import FeatureRegistry

__all__ = [
    "FeatureEntry",
    "FeatureRegistry",
    "FeatureRegistryError",
    "FeatureCollisionError",
    "FeatureNotFoundError",
    "AmbiguousFeatureError",
]
