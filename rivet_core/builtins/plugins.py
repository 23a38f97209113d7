"""Built-in commands that report on installed plugins."""

from __future__ import annotations

import sys
from argparse import ArgumentParser, Namespace

from rivet_core.api import RivetAbstractCommand, rivetcommand
from rivet_core.external import EnvironmentResolutionError
from rivet_core.plugin import IncompatibleVersionError, InstalledPlugin, check_supported_version


def _incompatibility(plugin: InstalledPlugin, host_version: str) -> str | None:
    if plugin.manifest is None:
        return None
    try:
        check_supported_version(plugin.manifest, host_version)
    except IncompatibleVersionError as exc:
        return str(exc)
    return None


@rivetcommand(name="list", group="plugin")
class PluginListCommand(RivetAbstractCommand):
    """List installed plugins that can run with this version of rivet."""

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        parser.add_argument(
            "--all",
            action="store_true",
            dest="include_all",
            help="Also show plugins that do not support this version of rivet.",
        )

    def run(self, args: Namespace) -> int:
        include_all = bool(getattr(args, "include_all", False))
        host_version = self.context.identity.version
        plugins = self.context.store.installed_plugins()

        shown = 0
        for plugin in plugins:
            if plugin.manifest is None:
                print(f"[rivet:plugin] skipping {plugin.name}: {plugin.error}", file=sys.stderr)
                continue
            incompatible = _incompatibility(plugin, host_version) is not None
            if incompatible and not include_all:
                continue
            marker = " [incompatible]" if incompatible else ""
            print(f"{plugin.name} {plugin.manifest.version}{marker}")
            shown += 1

        if not shown:
            print("No plugins installed.")
        return 0


@rivetcommand(name="doctor", group="plugin")
class PluginDoctorCommand(RivetAbstractCommand):
    """Check the plugin directory and the state of every installed plugin."""

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        return None

    def run(self, args: Namespace) -> int:
        store = self.context.store
        identity = self.context.identity
        print(f"[rivet:doctor] plugins dir: {store.plugins_dir} (exists={store.plugins_dir.is_dir()})")
        print(f"[rivet:doctor] host version: {identity.version}")
        try:
            binary = identity.binary_path()
        except EnvironmentResolutionError as exc:
            binary = f"unresolved ({exc})"
        print(f"[rivet:doctor] host binary: {binary}")

        plugins = store.installed_plugins()
        print("[rivet:doctor] plugins:")
        if not plugins:
            print("  - no plugins installed")
            return 0

        problems = 0
        for plugin in plugins:
            state = self._state(plugin, identity.version)
            if state != "ok":
                problems += 1
            print(f"  - {plugin.name}: {state}")
        return 1 if problems else 0

    def _state(self, plugin: InstalledPlugin, host_version: str) -> str:
        if plugin.manifest is None:
            return f"broken manifest: {plugin.error}"
        reason = _incompatibility(plugin, host_version)
        if reason:
            return f"incompatible: {reason}"
        if not self.context.store.installed_binary_path(plugin.name).is_file():
            return "missing binary"
        return "ok"
