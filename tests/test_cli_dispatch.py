"""Behavioral tests for the rivet CLI: built-ins first, plugins otherwise."""

from __future__ import annotations

import json
import os
import stat
import sys
import textwrap
from pathlib import Path

import pytest

from rivet_cli import main as cli_main
from rivet_core.config import RivetSettings
from rivet_core.external import HostIdentity

IDENTITY = HostIdentity(version="1.5.0", executable="/usr/local/bin/rivet")

posix_only = pytest.mark.skipif(os.name == "nt", reason="plugin fixtures are shell scripts")


def _settings(tmp_path: Path) -> RivetSettings:
    return RivetSettings(plugins_dir=tmp_path / "plugins", log_level="warning")


def _write_manifest(plugins_dir: Path, name: str, *, requires: str = ">=1.0.0") -> Path:
    plugin_dir = plugins_dir / name
    plugin_dir.mkdir(parents=True, exist_ok=True)
    (plugin_dir / "plugin.toml").write_text(
        textwrap.dedent(
            f"""
            [plugin]
            name = "{name}"
            version = "0.2.0"
            requires_rivet = "{requires}"
            description = "The {name} plugin"
            """
        ).lstrip(),
        encoding="utf-8",
    )
    return plugin_dir


def _install_plugin(plugins_dir: Path, name: str, *, requires: str = ">=1.0.0") -> Path:
    """Install a plugin that records its argv/env in $PLUGIN_OUT and exits with $PLUGIN_EXIT."""

    plugin_dir = _write_manifest(plugins_dir, name, requires=requires)
    recorder = plugin_dir / "record.py"
    recorder.write_text(
        textwrap.dedent(
            """
            import json, os, sys
            with open(os.environ["PLUGIN_OUT"], "w", encoding="utf-8") as handle:
                json.dump({"args": sys.argv[1:], "env": dict(os.environ)}, handle)
            sys.exit(int(os.environ.get("PLUGIN_EXIT", "0")))
            """
        ),
        encoding="utf-8",
    )
    binary = plugin_dir / name
    binary.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{recorder}" "$@"\n', encoding="utf-8")
    binary.chmod(binary.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return binary


def _environ(tmp_path: Path, **extra: str) -> dict[str, str]:
    env = dict(os.environ)
    env["PLUGIN_OUT"] = str(tmp_path / "record.json")
    env.update(extra)
    return env


def _record(tmp_path: Path) -> dict:
    return json.loads((tmp_path / "record.json").read_text(encoding="utf-8"))


def test_no_arguments_prints_overview(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = cli_main([], settings=_settings(tmp_path), identity=IDENTITY)

    assert code == 0
    out = capsys.readouterr().out
    assert "Usage: rivet <command>" in out
    assert "publish prepare" in out
    assert "plugin list" in out


def test_version_flag(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main(["--version"], settings=_settings(tmp_path)) == 0
    assert capsys.readouterr().out.startswith("rivet v")


def test_overview_lists_installed_plugins(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    settings = _settings(tmp_path)
    _write_manifest(settings.plugins_dir, "lint")

    code = cli_main(["help"], settings=settings, identity=IDENTITY)

    assert code == 0
    out = capsys.readouterr().out
    assert "Plugin commands" in out
    assert "The lint plugin" in out


def test_unknown_command_exits_2_with_help(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = cli_main(
        ["deploy", "--env", "prod"],
        settings=_settings(tmp_path),
        identity=IDENTITY,
        environ=_environ(tmp_path),
    )

    assert code == 2
    captured = capsys.readouterr()
    assert "Unknown command: deploy" in captured.err
    assert "Usage: rivet <command>" in captured.out


@posix_only
def test_incompatible_plugin_suggests_upgrade(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    settings = _settings(tmp_path)
    _install_plugin(settings.plugins_dir, "build", requires=">=2.0.0")

    code = cli_main(["build"], settings=settings, identity=IDENTITY, environ=_environ(tmp_path))

    assert code == 1
    assert "rivet plugin upgrade build" in capsys.readouterr().err
    assert not (tmp_path / "record.json").exists()


@posix_only
def test_compatible_plugin_runs_with_host_environment(tmp_path: Path) -> None:
    settings = _settings(tmp_path)
    _install_plugin(settings.plugins_dir, "lint")
    environ = _environ(tmp_path, RIVET_VERSION="0.0.1", RIVET_BIN_PATH="/stale")

    code = cli_main(["lint", "src/", "--strict"], settings=settings, identity=IDENTITY, environ=environ)

    assert code == 0
    record = _record(tmp_path)
    assert record["args"] == ["src/", "--strict"]
    assert record["env"]["RIVET_VERSION"] == "1.5.0"
    assert record["env"]["RIVET_BIN_PATH"] == os.path.abspath("/usr/local/bin/rivet")


@posix_only
@pytest.mark.parametrize("exit_code", [1, 17, 255])
def test_plugin_exit_code_is_passed_through(tmp_path: Path, exit_code: int) -> None:
    settings = _settings(tmp_path)
    _install_plugin(settings.plugins_dir, "lint")

    code = cli_main(
        ["lint"],
        settings=settings,
        identity=IDENTITY,
        environ=_environ(tmp_path, PLUGIN_EXIT=str(exit_code)),
    )

    assert code == exit_code


def test_missing_binary_exits_1(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    settings = _settings(tmp_path)
    _write_manifest(settings.plugins_dir, "lint")

    code = cli_main(["lint", "src/"], settings=settings, identity=IDENTITY, environ=_environ(tmp_path))

    assert code == 1
    assert "failed to launch plugin binary" in capsys.readouterr().err


def test_corrupt_manifest_exits_1(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    settings = _settings(tmp_path)
    plugin_dir = settings.plugins_dir / "lint"
    plugin_dir.mkdir(parents=True)
    (plugin_dir / "plugin.toml").write_text("[plugin\n", encoding="utf-8")

    code = cli_main(["lint"], settings=settings, identity=IDENTITY, environ=_environ(tmp_path))

    assert code == 1
    assert "failed to read manifest for plugin 'lint'" in capsys.readouterr().err


def test_unresolvable_host_binary_exits_1(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    settings = _settings(tmp_path)
    _write_manifest(settings.plugins_dir, "lint")

    code = cli_main(
        ["lint"],
        settings=settings,
        identity=HostIdentity(version="1.5.0", executable=None),
        environ=_environ(tmp_path),
    )

    assert code == 1
    assert "could not determine the rivet binary path" in capsys.readouterr().err


def test_plugin_list_hides_incompatible_by_default(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    settings = _settings(tmp_path)
    _write_manifest(settings.plugins_dir, "lint")
    _write_manifest(settings.plugins_dir, "build", requires=">=2.0.0")

    assert cli_main(["plugin", "list"], settings=settings, identity=IDENTITY) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["lint 0.2.0"]

    assert cli_main(["plugin:list", "--all"], settings=settings, identity=IDENTITY) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["build 0.2.0 [incompatible]", "lint 0.2.0"]


def test_plugin_doctor_reports_states(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    settings = _settings(tmp_path)
    _write_manifest(settings.plugins_dir, "lint")
    _write_manifest(settings.plugins_dir, "build", requires=">=2.0.0")

    code = cli_main(["plugin", "doctor"], settings=settings, identity=IDENTITY)

    assert code == 1
    out = capsys.readouterr().out
    assert "[rivet:doctor] host version: 1.5.0" in out
    assert "  - lint: missing binary" in out
    assert "  - build: incompatible:" in out


def test_builtin_argument_errors_return_argparse_status(tmp_path: Path) -> None:
    code = cli_main(["publish", "prepare"], settings=_settings(tmp_path), identity=IDENTITY)

    assert code == 2


@posix_only
@pytest.mark.parametrize("name", ["list", "push"])
def test_plugin_named_like_a_grouped_builtin_runs(tmp_path: Path, name: str) -> None:
    settings = _settings(tmp_path)
    _install_plugin(settings.plugins_dir, name)

    code = cli_main(
        [name, "--all"],
        settings=settings,
        identity=IDENTITY,
        environ=_environ(tmp_path, PLUGIN_EXIT="7"),
    )

    assert code == 7
    assert _record(tmp_path)["args"] == ["--all"]


def test_oversized_command_name_is_unknown(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    name = "x" * 300

    code = cli_main([name], settings=_settings(tmp_path), identity=IDENTITY, environ=_environ(tmp_path))

    assert code == 2
    captured = capsys.readouterr()
    assert f"Unknown command: {name}" in captured.err
    assert "Usage: rivet <command>" in captured.out
