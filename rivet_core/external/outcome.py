"""Values describing how a child ended and how the host should end."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Host exit status when the child left no numeric code (killed by a signal).
NO_CODE_FALLBACK = 1


@dataclass(frozen=True)
class ExitOutcome:
    """Terminal status of a spawned plugin process."""

    code: int | None
    signal: int | None = None

    @classmethod
    def from_returncode(cls, returncode: int) -> "ExitOutcome":
        # subprocess reports death by signal N as -N on POSIX.
        if returncode < 0:
            return cls(code=None, signal=-returncode)
        return cls(code=returncode)

    @property
    def success(self) -> bool:
        return self.code == 0

    def __str__(self) -> str:
        if self.code is not None:
            return f"exit status: {self.code}"
        if self.signal is not None:
            return f"signal: {self.signal}"
        return "no exit status"


class ExitKind(Enum):
    """How the host process should finish after a dispatch."""

    SUCCESS = "success"
    EXIT = "exit"
    PROPAGATE = "propagate"


@dataclass(frozen=True)
class ExitBehavior:
    """Result of a dispatch, turned into a process status only by the CLI entry point."""

    kind: ExitKind
    code: int = 0

    @classmethod
    def success(cls) -> "ExitBehavior":
        return cls(ExitKind.SUCCESS, 0)

    @classmethod
    def exit(cls, code: int) -> "ExitBehavior":
        return cls(ExitKind.EXIT, code)

    @classmethod
    def propagate(cls, code: int) -> "ExitBehavior":
        return cls(ExitKind.PROPAGATE, code)

    @classmethod
    def from_outcome(cls, outcome: ExitOutcome) -> "ExitBehavior":
        if outcome.success:
            return cls.success()
        if outcome.code is None:
            return cls.propagate(NO_CODE_FALLBACK)
        return cls.propagate(outcome.code)

    @property
    def exit_code(self) -> int:
        return 0 if self.kind is ExitKind.SUCCESS else self.code
