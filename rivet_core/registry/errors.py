"""Errors raised while registering or looking up built-in rivet commands."""

from __future__ import annotations

from typing import Sequence


class FeatureRegistryError(Exception):
    """Base class for built-in command registry failures."""


class FeatureCollisionError(FeatureRegistryError):
    """Two built-in commands were registered under the same ``group:name``."""


class FeatureNotFoundError(FeatureRegistryError):
    """No built-in command is registered under the requested name."""


class AmbiguousFeatureError(FeatureRegistryError):
    """A bare command name matches built-ins from more than one group."""

    def __init__(self, name: str, candidates: Sequence[str]) -> None:
        message = f"{name!r} names several built-in commands: {', '.join(candidates)}"
        super().__init__(message)
        self.name = name
        self.candidates = tuple(candidates)
