"""In-memory registry for built-in rivet commands."""

from __future__ import annotations

from .entry import FeatureEntry
from .errors import (
    AmbiguousFeatureError,
    FeatureCollisionError,
    FeatureNotFoundError,
)


class FeatureRegistry:
    """A registry that tracks commands by qualified and simple names."""

    def __init__(self) -> None:
        self._by_qualified: dict[str, FeatureEntry] = {}
        self._by_name: dict[str, list[FeatureEntry]] = {}

    def register(self, entry: FeatureEntry) -> None:
        """Register an entry, raising on qualified name collisions."""

        qualified = entry.qualified_name
        if qualified in self._by_qualified:
            raise FeatureCollisionError(f"{qualified} is already registered.")
        self._by_qualified[qualified] = entry
        self._by_name.setdefault(entry.name, []).append(entry)

    def resolve(self, name_or_qualified: str) -> FeatureEntry:
        """Resolve either a simple name or a qualified ``group:name``."""

        if ":" in name_or_qualified:
            entry = self._by_qualified.get(name_or_qualified)
            if entry is None:
                raise FeatureNotFoundError(f"{name_or_qualified} is not registered.")
            return entry

        candidates = self._by_name.get(name_or_qualified)
        if not candidates:
            raise FeatureNotFoundError(f"{name_or_qualified} is not registered.")
        if len(candidates) > 1:
            sorted_candidates = sorted(entry.qualified_name for entry in candidates)
            raise AmbiguousFeatureError(name_or_qualified, sorted_candidates)
        return candidates[0]

    def qualified_names(self) -> frozenset[str]:
        return frozenset(self._by_qualified)

    def entries(self) -> tuple[FeatureEntry, ...]:
        """Return all registered entries in qualified order."""

        return tuple(sorted(self._by_qualified.values(), key=lambda entry: entry.qualified_name))
