"""rivet CLI entrypoint: built-in commands first, installed plugins otherwise."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Mapping, Sequence

from rivet_core.api import CommandContext
from rivet_core.builtins import CORE_GROUP, register_builtin_commands, render_overview, usage_name
from rivet_core.config import RivetSettings, SettingsResolver
from rivet_core.external import (
    DispatchError,
    ExternalDispatcher,
    HostIdentity,
    ProcessLauncher,
    UsageError,
)
from rivet_core.plugin import PluginStore
from rivet_core.registry import FeatureRegistry
from rivet_core.version import __version__

logger = logging.getLogger("rivet_cli")


def main(
    argv: Sequence[str] | None = None,
    *,
    identity: HostIdentity | None = None,
    environ: Mapping[str, str] | None = None,
    launcher: ProcessLauncher | None = None,
    settings: RivetSettings | None = None,
) -> int:
    """Resolve and run a rivet command, returning the process exit status."""

    tokens = list(argv) if argv is not None else list(sys.argv[1:])
    environ = os.environ if environ is None else environ
    settings = settings or SettingsResolver(env=environ).settings()
    _configure_logging(settings.log_level)

    registry = FeatureRegistry()
    register_builtin_commands(registry)
    store = PluginStore(settings.plugins_dir)

    if not tokens or tokens[0] in ("-h", "--help"):
        render_overview(registry, store)
        return 0

    if tokens[0] == "--version":
        print(f"rivet v{__version__}")
        return 0

    context = CommandContext(
        settings=settings,
        identity=identity or HostIdentity.current(),
        store=store,
        registry=registry,
        environ=environ,
    )

    spec, command_args = _extract_command_spec(tokens, registry.qualified_names())
    if spec is None:
        return _run_external(tokens, context, launcher)
    entry = registry.resolve(spec)

    parser = argparse.ArgumentParser(
        prog=f"rivet {usage_name(entry)}",
        description=entry.summary,
    )
    entry.target.configure(parser)

    try:
        parsed_args = parser.parse_args(command_args)
    except SystemExit as exc:
        return _exit_status(exc.code)

    command = entry.target(context)
    return to_int(command.run(parsed_args))


def _run_external(
    tokens: Sequence[str],
    context: CommandContext,
    launcher: ProcessLauncher | None,
) -> int:
    dispatcher = ExternalDispatcher(
        context.store,
        help_renderer=lambda: render_overview(context.registry, context.store),
        identity=context.identity,
        launcher=launcher,
        environ=context.environ,
    )
    try:
        behavior = dispatcher.dispatch(tokens)
    except UsageError as exc:
        print(f"error: {exc}\n", file=sys.stderr)
        render_overview(context.registry, context.store)
        return exc.exit_code
    except DispatchError as exc:
        logger.debug("dispatch failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code
    return behavior.exit_code


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _extract_command_spec(
    args: Sequence[str], qualified_names: frozenset[str]
) -> tuple[str | None, list[str]]:
    """Match a built-in only in the form it is typed: ``name`` for core commands,
    ``group name`` or ``group:name`` for the rest. Anything else is a plugin."""

    first, *rest = args
    if first in qualified_names:
        return first, list(rest)

    if rest:
        maybe = f"{first}:{rest[0]}"
        if maybe in qualified_names:
            return maybe, list(rest[1:])

    core = f"{CORE_GROUP}:{first}"
    if core in qualified_names:
        return core, list(rest)
    return None, list(rest)


def _exit_status(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


def to_int(result: int | None) -> int:
    return 0 if result is None else result
