"""Errors that end an external plugin dispatch.

Every failure a dispatch can hit is one of the subclasses below. Each carries
the data its message needs and the exit status the host should end with.
"""

from __future__ import annotations

from pathlib import Path


class DispatchError(Exception):
    """Base class for dispatch failures."""

    exit_code: int = 1


class UsageError(DispatchError):
    """The invocation did not name a subcommand."""

    def __init__(self, message: str = "expected a subcommand") -> None:
        super().__init__(message)
        self.message = message


class PluginNotFound(DispatchError):
    """No installed plugin matches the requested subcommand."""

    exit_code = 2

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown command: {name}")
        self.name = name


class IncompatibleVersion(DispatchError):
    """The plugin's manifest rejects the running host version."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(reason)
        self.name = name
        self.reason = reason

    @property
    def hint(self) -> str:
        return (
            f"Try running `rivet plugin upgrade {self.name}` "
            "to get the latest version of the plugin."
        )


class EnvironmentResolutionError(DispatchError):
    """The host could not determine its own executable path."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class LaunchError(DispatchError):
    """The operating system refused to start the plugin binary."""

    def __init__(self, path: Path, error: OSError) -> None:
        super().__init__(f"failed to launch plugin binary {path}: {error.strerror or error}")
        self.path = path
        self.error = error


class RegistryError(DispatchError):
    """The plugin's manifest exists but could not be read."""

    def __init__(self, name: str, detail: str) -> None:
        super().__init__(f"failed to read manifest for plugin '{name}': {detail}")
        self.name = name
        self.detail = detail
