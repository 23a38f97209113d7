"""Plugin-specific error types."""


class PluginError(Exception):
    """Base type for plugin-related failures."""


class PluginManifestError(PluginError):
    """Raised when the plugin manifest cannot be loaded or validated."""


class PluginNotFoundError(PluginError):
    """Raised when no manifest is installed for the requested plugin."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name


class IncompatibleVersionError(PluginError):
    """Raised when a plugin does not support the running host version."""

    def __init__(self, name: str, requirement: str, host_version: str) -> None:
        message = (
            f"Plugin '{name}' is incompatible with this version of rivet "
            f"(supported: {requirement}, actual: {host_version})"
        )
        super().__init__(message)
        self.name = name
        self.requirement = requirement
        self.host_version = host_version
