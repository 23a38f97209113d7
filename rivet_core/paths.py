"""Platform-independent helpers for rivet paths."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

_DEFAULT_APP_NAME = "rivet"
_DEFAULT_APP_AUTHOR = "rivet"


@dataclass(frozen=True)
class UserDirs:
    """Expose the platform-configured locations for config and data trees."""

    app_name: str = _DEFAULT_APP_NAME
    app_author: str = _DEFAULT_APP_AUTHOR
    config_dir_override: Path | None = None
    data_dir_override: Path | None = None

    def config_dir(self) -> Path:
        if self.config_dir_override:
            return self.config_dir_override
        return Path(user_config_dir(self.app_name, appauthor=self.app_author))

    def data_dir(self) -> Path:
        if self.data_dir_override:
            return self.data_dir_override
        return Path(user_data_dir(self.app_name, appauthor=self.app_author))

    def plugins_dir(self) -> Path:
        """Default install root for external plugins."""

        return self.data_dir() / "plugins"
