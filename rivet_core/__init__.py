"""Core runtime pieces for the rivet command-line host."""

from .config import RivetSettings, SettingsResolver, default_config_path
from .external import (
    DispatchError,
    ExitBehavior,
    ExitOutcome,
    ExternalDispatcher,
    HostIdentity,
    ProcessLauncher,
    build_environment,
)
from .paths import UserDirs
from .plugin import PluginManifest, PluginStore
from .version import __version__

__all__ = [
    "__version__",
    "DispatchError",
    "ExitBehavior",
    "ExitOutcome",
    "ExternalDispatcher",
    "HostIdentity",
    "PluginManifest",
    "PluginStore",
    "ProcessLauncher",
    "RivetSettings",
    "SettingsResolver",
    "UserDirs",
    "build_environment",
    "default_config_path",
]
