"""Interface the orchestrator expects from a version-control backend."""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Protocol, Sequence


class GitError(RuntimeError):
    """Raised when the git executable cannot be run at all."""


@dataclass(frozen=True, slots=True)
class CommandOutcome:
    """Result of a mutating command; failure means the error stream was non-empty."""

    ok: bool
    status: str
    stderr: str = ""


class VersionControl(Protocol):
    def list_untracked(self) -> Sequence[str]: ...

    def list_staged(self) -> Sequence[str]: ...

    def list_unstaged(self) -> Sequence[str]: ...

    def current_branch(self) -> str: ...

    def last_commit_message(self) -> str: ...

    def stage(self, path: str) -> None: ...

    def unstage(self, path: str) -> None: ...

    def commit(self, flags: AbstractSet[str], message: str) -> CommandOutcome: ...

    def push(self) -> CommandOutcome: ...


__all__ = ["CommandOutcome", "GitError", "VersionControl"]
