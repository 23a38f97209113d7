"""Bundle client datatypes and configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BundleClientConfig:
    executable: str = "bindle"
    timeout_seconds: float = 120.0
    max_retries: int = 2
    backoff_seconds: float = 0.5
    token: str | None = None


@dataclass(frozen=True)
class BundlePushResult:
    bundle_id: str
    server_url: str
