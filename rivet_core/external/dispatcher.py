"""Run an unrecognized subcommand as an installed plugin binary."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping, Protocol, Sequence, TextIO

from rivet_core.plugin import (
    IncompatibleVersionError,
    PluginManifest,
    PluginManifestError,
    PluginNotFoundError,
    check_supported_version,
)

from .environment import build_environment
from .errors import IncompatibleVersion, PluginNotFound, RegistryError, UsageError
from .identity import HostIdentity
from .launcher import ProcessLauncher
from .outcome import ExitBehavior

logger = logging.getLogger(__name__)

HelpRenderer = Callable[[], None]
CompatibilityCheck = Callable[[PluginManifest, str], None]


class PluginLookup(Protocol):
    """What the dispatcher needs from the plugin store."""

    def read_plugin_manifest(self, name: str) -> PluginManifest: ...

    def installed_binary_path(self, name: str) -> Path: ...


class Launcher(Protocol):
    def launch(self, path: Path, args: Sequence[str], env: Mapping[str, str]): ...


@dataclass(frozen=True)
class ResolvedCommand:
    """Everything needed to start one plugin process."""

    binary_path: Path
    args: tuple[str, ...]
    env: Mapping[str, str]

    def __str__(self) -> str:
        return " ".join([str(self.binary_path), *self.args])


class ExternalDispatcher:
    """Resolve, validate, prepare and execute a plugin for one invocation."""

    def __init__(
        self,
        store: PluginLookup,
        *,
        help_renderer: HelpRenderer,
        identity: HostIdentity | None = None,
        launcher: Launcher | None = None,
        environ: Mapping[str, str] | None = None,
        check: CompatibilityCheck = check_supported_version,
        stderr: TextIO | None = None,
    ) -> None:
        self.store = store
        self.help_renderer = help_renderer
        self.identity = identity or HostIdentity.current()
        self.launcher = launcher or ProcessLauncher()
        self.environ = environ
        self.check = check
        self._stderr = stderr

    @property
    def stderr(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    def dispatch(self, invocation: Sequence[str]) -> ExitBehavior:
        """Run the plugin named by ``invocation[0]`` with the remaining arguments.

        Unknown plugins and incompatible plugins are reported here and turned
        into an :class:`ExitBehavior`. Every other failure is raised as a
        :class:`~rivet_core.external.errors.DispatchError` before any process is
        started. Once the plugin runs, its exit status decides the result.
        """

        if not invocation:
            raise UsageError()
        name, *rest = invocation
        args = tuple(rest)

        try:
            manifest = self.store.read_plugin_manifest(name)
        except PluginNotFoundError:
            return self._unknown_command(PluginNotFound(name))
        except PluginManifestError as exc:
            raise RegistryError(name, str(exc)) from exc

        try:
            self.check(manifest, self.identity.version)
        except IncompatibleVersionError as exc:
            return self._incompatible(IncompatibleVersion(manifest.name, str(exc)))

        command = ResolvedCommand(
            binary_path=self.store.installed_binary_path(name),
            args=args,
            env=build_environment(
                os.environ if self.environ is None else self.environ,
                self.identity,
            ),
        )

        logger.info("Executing command %s", command)
        outcome = self.launcher.launch(command.binary_path, command.args, command.env)
        logger.info("Exiting process with %s", outcome)
        return ExitBehavior.from_outcome(outcome)

    def _unknown_command(self, error: PluginNotFound) -> ExitBehavior:
        print(f"{error}\n", file=self.stderr)
        self.help_renderer()
        return ExitBehavior.exit(error.exit_code)

    def _incompatible(self, error: IncompatibleVersion) -> ExitBehavior:
        print(error.reason, file=self.stderr)
        print(error.hint, file=self.stderr)
        return ExitBehavior.exit(error.exit_code)
