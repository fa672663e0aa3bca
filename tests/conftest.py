from __future__ import annotations

from dataclasses import dataclass, field
from typing import AbstractSet

import pytest

from stagewise.ui import HeadlessTerminal
from stagewise.vcs import CommandOutcome
from stagewise.vcs.git import COMMIT_FAILED, COMMIT_OK, PUSH_FAILED, PUSH_OK


@dataclass
class FakeVcs:
    untracked: list[str] = field(default_factory=lambda: ["new.txt"])
    staged: list[str] = field(default_factory=lambda: ["a.py", "b.py"])
    unstaged: list[str] = field(default_factory=lambda: ["c.py"])
    branch: str = "main"
    last_commit: str = "Initial commit"
    push_error: str = ""
    commit_error: str = ""
    commits: list[tuple[frozenset[str], str]] = field(default_factory=list)
    pushes: int = 0
    fetches: int = 0

    def list_untracked(self) -> list[str]:
        self.fetches += 1
        return list(self.untracked)

    def list_staged(self) -> list[str]:
        return list(self.staged)

    def list_unstaged(self) -> list[str]:
        return list(self.unstaged)

    def current_branch(self) -> str:
        return self.branch

    def last_commit_message(self) -> str:
        return self.last_commit

    def stage(self, path: str) -> None:
        for source in (self.untracked, self.unstaged):
            if path in source:
                source.remove(path)
                self.staged.append(path)

    def unstage(self, path: str) -> None:
        if path in self.staged:
            self.staged.remove(path)
            self.unstaged.append(path)

    def commit(self, flags: AbstractSet[str], message: str) -> CommandOutcome:
        self.commits.append((frozenset(flags), message))
        if self.commit_error:
            return CommandOutcome(False, COMMIT_FAILED, self.commit_error)
        return CommandOutcome(True, COMMIT_OK)

    def push(self) -> CommandOutcome:
        self.pushes += 1
        if self.push_error:
            return CommandOutcome(False, PUSH_FAILED, self.push_error)
        return CommandOutcome(True, PUSH_OK)


@pytest.fixture
def vcs() -> FakeVcs:
    return FakeVcs()


@pytest.fixture
def terminal() -> HeadlessTerminal:
    return HeadlessTerminal(80, 24)
