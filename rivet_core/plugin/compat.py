"""Decide whether an installed plugin supports the running host version."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Sequence

from .errors import IncompatibleVersionError
from .versions import compare_versions, strip_build_metadata

if TYPE_CHECKING:
    from .manifest import PluginManifest

__all__ = [
    "VersionClause",
    "check_supported_version",
    "is_supported",
    "parse_requirement",
]

_CLAUSE_RE = re.compile(r"^(>=|<=|==|!=|>|<|=|\^|~)?\s*([0-9A-Za-z.\-+]+)$")

_COMPARATORS: dict[str, Callable[[int], bool]] = {
    ">=": lambda c: c >= 0,
    "<=": lambda c: c <= 0,
    ">": lambda c: c > 0,
    "<": lambda c: c < 0,
    "==": lambda c: c == 0,
    "!=": lambda c: c != 0,
}


@dataclass(frozen=True)
class VersionClause:
    """A single ``<op> <version>`` comparison."""

    op: str
    version: str

    def matches(self, candidate: str) -> bool:
        return _COMPARATORS[self.op](compare_versions(candidate, self.version))

    def __str__(self) -> str:
        return f"{self.op}{self.version}"


def _release_numbers(version: str) -> list[int]:
    numbers: list[int] = []
    for segment in strip_build_metadata(version).split("-", 1)[0].split("."):
        if not segment.isdigit():
            break
        numbers.append(int(segment))
    if not numbers:
        raise ValueError(f"version {version!r} has no numeric release part")
    return numbers


def _caret_upper(version: str) -> str:
    numbers = _release_numbers(version)
    padded = numbers + [0] * (3 - len(numbers))
    for index, value in enumerate(padded[: len(numbers)]):
        if value != 0 or index == len(numbers) - 1:
            bumped = padded[:index] + [value + 1] + [0] * (len(padded) - index - 1)
            return ".".join(str(part) for part in bumped)
    raise ValueError(f"cannot compute caret bound for {version!r}")


def _tilde_upper(version: str) -> str:
    numbers = _release_numbers(version)
    if len(numbers) == 1:
        return f"{numbers[0] + 1}.0.0"
    return f"{numbers[0]}.{numbers[1] + 1}.0"


def _expand_clause(op: str | None, version: str) -> list[VersionClause]:
    if op in (None, "^"):
        return [VersionClause(">=", version), VersionClause("<", _caret_upper(version))]
    if op == "~":
        return [VersionClause(">=", version), VersionClause("<", _tilde_upper(version))]
    if op == "=":
        op = "=="
    return [VersionClause(op, version)]


def parse_requirement(requirement: str) -> tuple[VersionClause, ...]:
    """Parse a comma-separated requirement such as ``">=0.2, <1.0"``.

    A bare version behaves like ``^version``; ``*`` accepts every version.
    Raises :class:`ValueError` for malformed input.
    """

    text = (requirement or "").strip()
    if not text:
        raise ValueError("empty version requirement")
    if text == "*":
        return ()

    clauses: list[VersionClause] = []
    for raw in text.split(","):
        part = raw.strip()
        match = _CLAUSE_RE.match(part)
        if not part or match is None:
            raise ValueError(f"invalid version requirement clause {part!r} in {requirement!r}")
        clauses.extend(_expand_clause(match.group(1), match.group(2)))
    return tuple(clauses)


def is_supported(requirement: str, host_version: str) -> bool:
    clauses: Sequence[VersionClause] = parse_requirement(requirement)
    return all(clause.matches(host_version) for clause in clauses)


def check_supported_version(manifest: "PluginManifest", host_version: str) -> None:
    """Raise :class:`IncompatibleVersionError` when ``manifest`` rejects ``host_version``."""

    if not is_supported(manifest.requires_rivet, host_version):
        raise IncompatibleVersionError(manifest.name, manifest.requires_rivet, host_version)
