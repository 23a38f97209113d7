"""Runtime context shared with built-in commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from rivet_core.config import RivetSettings
from rivet_core.external.identity import HostIdentity
from rivet_core.plugin.store import PluginStore
from rivet_core.registry import FeatureRegistry


@dataclass(frozen=True)
class CommandContext:
    """Information surfaced to commands when they run."""

    settings: RivetSettings
    identity: HostIdentity
    store: PluginStore
    registry: FeatureRegistry
    environ: Mapping[str, str]
