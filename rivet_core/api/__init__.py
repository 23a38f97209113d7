"""Convenience imports for the rivet command API."""

from .abc import RivetAbstractCommand
from .context import CommandContext
from .decorators import FEATURE_ATTRIBUTE, rivetcommand

__all__ = [
    "FEATURE_ATTRIBUTE",
    "CommandContext",
    "RivetAbstractCommand",
    "rivetcommand",
]
