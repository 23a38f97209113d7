"""External plugin dispatch: resolve, validate, prepare, execute, propagate."""

from .errors import (
    DispatchError,
    EnvironmentResolutionError,
    IncompatibleVersion,
    LaunchError,
    PluginNotFound,
    RegistryError,
    UsageError,
)
from .outcome import NO_CODE_FALLBACK, ExitBehavior, ExitKind, ExitOutcome
from .identity import HostIdentity
from .environment import BIN_PATH_ENV, VERSION_ENV, build_environment
from .launcher import ProcessLauncher
from .dispatcher import ExternalDispatcher, ResolvedCommand

__all__ = [
    "BIN_PATH_ENV",
    "VERSION_ENV",
    "NO_CODE_FALLBACK",
    "DispatchError",
    "EnvironmentResolutionError",
    "ExitBehavior",
    "ExitKind",
    "ExitOutcome",
    "ExternalDispatcher",
    "HostIdentity",
    "IncompatibleVersion",
    "LaunchError",
    "PluginNotFound",
    "ProcessLauncher",
    "RegistryError",
    "ResolvedCommand",
    "UsageError",
    "build_environment",
]
