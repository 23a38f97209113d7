"""Layered settings for the rivet host (CLI > env > user config > defaults)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

import tomllib

from .paths import UserDirs

CONFIG_FILE_NAME = "config.toml"
DEFAULT_LOG_LEVEL = "warning"

_ENV_KEY_MAP: dict[str, str] = {
    "plugins_dir": "RIVET_PLUGINS_DIR",
    "log_level": "RIVET_LOG",
}

logger = logging.getLogger(__name__)


def default_config_path(user_dirs: UserDirs | None = None) -> Path:
    """Return the platform-specific user config file for rivet."""

    return (user_dirs or UserDirs()).config_dir() / CONFIG_FILE_NAME


def _load_config_from_file(path: Path) -> dict[str, str]:
    if not path.exists():
        return {}
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("ignoring unreadable config %s: %s", path, exc)
        return {}
    return {key: str(value) for key, value in data.items() if not isinstance(value, dict)}


@dataclass(frozen=True)
class RivetSettings:
    """Resolved settings consumed by the CLI and the plugin store."""

    plugins_dir: Path
    log_level: str = DEFAULT_LOG_LEVEL


@dataclass
class SettingsResolver:
    """Resolve individual settings while honoring the layered order."""

    user_dirs: UserDirs = field(default_factory=UserDirs)
    cli_overrides: Mapping[str, str] | None = None
    env: Mapping[str, str] | None = None

    def __post_init__(self) -> None:
        self.cli_overrides = dict(self.cli_overrides or {})
        self.env = os.environ if self.env is None else self.env
        self._user_layer: dict[str, str] | None = None

    def resolve(self, key: str) -> str | None:
        if value := self.cli_overrides.get(key):
            return value
        alias = _ENV_KEY_MAP.get(key)
        if alias and (value := self.env.get(alias)):
            return value
        if value := self._user_config_layer().get(key):
            return value
        return self._defaults().get(key)

    def settings(self) -> RivetSettings:
        plugins_dir = Path(self.resolve("plugins_dir") or self.user_dirs.plugins_dir())
        return RivetSettings(
            plugins_dir=plugins_dir.expanduser(),
            log_level=(self.resolve("log_level") or DEFAULT_LOG_LEVEL).lower(),
        )

    def _defaults(self) -> dict[str, str]:
        return {
            "plugins_dir": str(self.user_dirs.plugins_dir()),
            "log_level": DEFAULT_LOG_LEVEL,
        }

    def _user_config_layer(self) -> dict[str, str]:
        if self._user_layer is None:
            self._user_layer = _load_config_from_file(default_config_path(self.user_dirs))
        return self._user_layer
