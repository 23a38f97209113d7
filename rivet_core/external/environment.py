"""Environment handed to plugin processes."""

from __future__ import annotations

from typing import Mapping

from .identity import HostIdentity

VERSION_ENV = "RIVET_VERSION"
BIN_PATH_ENV = "RIVET_BIN_PATH"


def host_variables(identity: HostIdentity) -> dict[str, str]:
    """The variables that identify the host to a plugin."""

    return {
        VERSION_ENV: identity.version,
        BIN_PATH_ENV: identity.binary_path(),
    }


def build_environment(inherited: Mapping[str, str], identity: HostIdentity) -> dict[str, str]:
    """Copy ``inherited`` and overwrite the host identity variables."""

    overlay = host_variables(identity)
    env = dict(inherited)
    env.update(overlay)
    return env
