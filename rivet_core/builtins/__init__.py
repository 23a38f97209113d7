"""Helper utilities for registering built-in rivet commands."""

from __future__ import annotations

from typing import Sequence

from rivet_core.api import FEATURE_ATTRIBUTE
from rivet_core.registry import FeatureEntry, FeatureRegistry

from .commands import CORE_GROUP, HelpCommand, render_overview, usage_name
from .plugins import PluginDoctorCommand, PluginListCommand
from .publish import PublishPrepareCommand, PublishPushCommand

__all__ = [
    "CORE_GROUP",
    "register_builtin_commands",
    "render_overview",
    "usage_name",
]

_BUILTIN_FEATURES: Sequence[type] = (
    HelpCommand,
    PluginListCommand,
    PluginDoctorCommand,
    PublishPrepareCommand,
    PublishPushCommand,
)


def register_builtin_commands(registry: FeatureRegistry) -> None:
    """Register the built-in command classes with the supplied registry."""

    for feature in _BUILTIN_FEATURES:
        metadata = getattr(feature, FEATURE_ATTRIBUTE, None)
        if metadata is None:
            continue
        registry.register(
            FeatureEntry(
                group=metadata["group"],
                name=str(metadata["name"]),
                target=feature,
            )
        )
