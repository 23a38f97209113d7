"""Command line surface for rivet."""

from .main import main

__all__ = ["main"]
