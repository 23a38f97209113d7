"""Run a plugin binary attached to the user's terminal."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Mapping, Sequence

from .errors import LaunchError
from .outcome import ExitOutcome

logger = logging.getLogger(__name__)


class ProcessLauncher:
    """Spawn one child with inherited stdio and wait for it to finish."""

    def launch(
        self,
        path: Path,
        args: Sequence[str],
        env: Mapping[str, str],
    ) -> ExitOutcome:
        command = [str(path), *args]
        try:
            process = subprocess.Popen(command, env=dict(env))
        except OSError as exc:
            raise LaunchError(path, exc) from exc

        logger.debug("spawned pid=%s for %s", process.pid, path)
        return ExitOutcome.from_returncode(self._wait(process))

    @staticmethod
    def _wait(process: subprocess.Popen) -> int:
        # Ctrl-C reaches the child through the shared process group; the host
        # keeps waiting and lets the child decide how to exit.
        while True:
            try:
                return process.wait()
            except KeyboardInterrupt:
                logger.debug("interrupt received while waiting for pid=%s", process.pid)
