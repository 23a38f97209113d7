"""bindle CLI wrapper used to push staged bundles."""

from __future__ import annotations

import logging
import os
import subprocess
import time
from pathlib import Path
from typing import Mapping
from urllib.parse import urlsplit

from .errors import BundleCommandError
from .types import BundleClientConfig, BundlePushResult

logger = logging.getLogger(__name__)

SERVER_URL_ENV = "BINDLE_URL"
TOKEN_ENV = "BINDLE_TOKEN"


class BundleClient:
    """Thin bindle CLI wrapper with retries and credential-safe logging."""

    def __init__(
        self,
        config: BundleClientConfig | None = None,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.config = config or BundleClientConfig()
        self._environ = environ

    def push(self, staging_dir: Path, bundle_id: str, server_url: str) -> BundlePushResult:
        if not server_url.strip():
            raise BundleCommandError("a bundle server URL is required to push")
        command = [self.config.executable, "push", "-p", str(staging_dir), bundle_id]
        self._run(command, server_url)
        return BundlePushResult(bundle_id=bundle_id, server_url=server_url)

    def _env(self, server_url: str) -> dict[str, str]:
        env = dict(os.environ if self._environ is None else self._environ)
        env[SERVER_URL_ENV] = server_url
        if self.config.token:
            env[TOKEN_ENV] = self.config.token
        return env

    def _run(self, command: list[str], server_url: str) -> subprocess.CompletedProcess[str]:
        timeout = max(float(self.config.timeout_seconds), 1.0)
        retries = max(int(self.config.max_retries), 1)
        backoff = max(float(self.config.backoff_seconds), 0.0)
        env = self._env(server_url)
        printable = " ".join(command)

        for attempt in range(1, retries + 1):
            logger.debug(
                "bindle command attempt=%s/%s server=%s cmd=%s",
                attempt,
                retries,
                redact_url(server_url),
                printable,
            )
            try:
                result = subprocess.run(
                    command,
                    check=False,
                    capture_output=True,
                    text=True,
                    timeout=timeout,
                    env=env,
                )
            except FileNotFoundError as exc:
                raise BundleCommandError(
                    f"{self.config.executable} CLI not found. Install bindle and ensure it is available in PATH."
                ) from exc
            except subprocess.TimeoutExpired as exc:
                if attempt >= retries:
                    raise BundleCommandError(
                        f"bindle command timed out after {timeout:.1f}s"
                    ) from exc
            else:
                if result.returncode == 0:
                    return result
                if attempt >= retries:
                    raise BundleCommandError(
                        _format_failure(printable, server_url, result.returncode, result.stderr)
                    )
            time.sleep(min(backoff * attempt, 2.0))
        raise BundleCommandError("bindle command failed")


def redact_url(url: str) -> str:
    """Hide the password component of ``url`` if it carries one."""

    parsed = urlsplit(url)
    if not parsed.password:
        return url
    safe_netloc = parsed.netloc.replace(parsed.password, "***")
    return url.replace(parsed.netloc, safe_netloc)


def _format_failure(command: str, server_url: str, code: int, stderr: str | None) -> str:
    server = redact_url(server_url)
    detail = (stderr or "").strip()
    if detail:
        return f"bindle command failed (exit={code}) server='{server}' cmd='{command}' err='{detail}'"
    return f"bindle command failed (exit={code}) server='{server}' cmd='{command}'"
