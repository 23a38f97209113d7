"""Registry entry descriptor exposing qualified command metadata."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Type


@dataclass(frozen=True)
class FeatureEntry:
    """Immutable descriptor for a registered built-in command."""

    group: str
    name: str
    target: Type[Any]

    def __post_init__(self) -> None:
        object.__setattr__(self, "group", self._validate_component("group", self.group))
        object.__setattr__(self, "name", self._validate_component("name", self.name))
        if not isinstance(self.target, type):
            raise TypeError("target must be a class type.")

    @staticmethod
    def _validate_component(label: str, value: str) -> str:
        if not value:
            raise ValueError(f"{label} cannot be empty.")
        if ":" in value:
            raise ValueError(f"{label} may not contain ':'.")
        return value

    @property
    def qualified_name(self) -> str:
        """Return the ``group:name`` identifier for this entry."""

        return f"{self.group}:{self.name}"

    @property
    def summary(self) -> str:
        """First line of the target's docstring."""

        doc = (inspect.getdoc(self.target) or "").strip()
        return doc.splitlines()[0] if doc else ""
