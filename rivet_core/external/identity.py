"""Identity of the running rivet host, handed to plugins through their environment."""

from __future__ import annotations

import os
import shutil
import sys
from dataclasses import dataclass

from rivet_core.version import HOST_VERSION

from .errors import EnvironmentResolutionError


@dataclass(frozen=True)
class HostIdentity:
    """Read-only view of the host version and the command used to start the host.

    ``executable`` holds the raw ``argv[0]``; :meth:`binary_path` turns it into
    an absolute path only when a dispatch needs it.
    """

    version: str
    executable: str | None

    @classmethod
    def current(cls) -> "HostIdentity":
        argv0 = sys.argv[0] if sys.argv else None
        return cls(version=HOST_VERSION, executable=argv0 or None)

    def binary_path(self) -> str:
        """Return the absolute path of the host binary as text.

        Raises :class:`EnvironmentResolutionError` when the path is unknown or
        cannot be encoded.
        """

        raw = self.executable
        if not raw:
            raise EnvironmentResolutionError("could not determine the rivet binary path")

        if os.sep in raw or (os.altsep and os.altsep in raw):
            resolved = os.path.abspath(raw)
        else:
            found = shutil.which(raw)
            if found is None:
                raise EnvironmentResolutionError(
                    f"could not locate the rivet binary {raw!r} on PATH"
                )
            resolved = os.path.abspath(found)

        try:
            resolved.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise EnvironmentResolutionError(
                "could not convert the rivet binary path to a string"
            ) from exc
        return resolved
