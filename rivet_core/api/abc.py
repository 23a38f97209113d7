"""Abstract base class for built-in rivet commands."""

from __future__ import annotations

from abc import ABC, abstractmethod
from argparse import ArgumentParser, Namespace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CommandContext


class RivetAbstractCommand(ABC):
    """Base interface for rivet commands."""

    def __init__(self, context: "CommandContext") -> None:
        self.context = context

    @classmethod
    @abstractmethod
    def configure(cls, parser: ArgumentParser) -> None:
        """Let the command configure CLI arguments."""

    @abstractmethod
    def run(self, args: Namespace) -> int:
        """Execute the command with parsed arguments."""
