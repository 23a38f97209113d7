"""Help and overview rendering shared by the CLI and the ``help`` command."""

from __future__ import annotations

import sys
from argparse import ArgumentParser, Namespace
from typing import TextIO

from rivet_core.api import RivetAbstractCommand, rivetcommand
from rivet_core.plugin import PluginStore
from rivet_core.registry import FeatureEntry, FeatureRegistry

CORE_GROUP = "rivet"


def usage_name(entry: FeatureEntry) -> str:
    """How the command is typed on the command line."""

    if entry.group == CORE_GROUP:
        return entry.name
    return f"{entry.group} {entry.name}"


def render_overview(
    registry: FeatureRegistry,
    store: PluginStore | None = None,
    *,
    include_long: bool = False,
    file: TextIO | None = None,
) -> None:
    """Print the global usage text: built-in commands, then installed plugins."""

    out = file if file is not None else sys.stdout
    print("Usage: rivet <command> [args...]\n", file=out)
    print("Built-in commands:", file=out)
    for entry in registry.entries():
        print(f"  {usage_name(entry):<24} {entry.summary}", file=out)
        if include_long:
            parser = ArgumentParser(prog=f"rivet {usage_name(entry)}", add_help=False)
            entry.target.configure(parser)
            for line in parser.format_usage().strip().splitlines():
                print(f"    {line}", file=out)

    plugins = [plugin for plugin in (store.installed_plugins() if store else ()) if plugin.manifest]
    if plugins:
        print("\nPlugin commands:", file=out)
        for plugin in plugins:
            description = plugin.manifest.description or f"version {plugin.manifest.version}"
            print(f"  {plugin.name:<24} {description}", file=out)

    print("\nAny other command is looked up as an installed plugin.", file=out)


@rivetcommand(name="help", group=CORE_GROUP)
class HelpCommand(RivetAbstractCommand):
    """Display the list of available commands."""

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        parser.add_argument(
            "--long",
            action="store_true",
            dest="long_format",
            help="Show the usage line of each built-in command.",
        )

    def run(self, args: Namespace) -> int:
        render_overview(
            self.context.registry,
            self.context.store,
            include_long=bool(getattr(args, "long_format", False)),
        )
        return 0
