"""Fixed record of the commit options the committing panel can toggle."""

from __future__ import annotations

from dataclasses import dataclass

from stagewise.keymaps import COMMIT_FLAGS, Action, CommitFlag

_BY_ACTION = {flag.action: flag for flag in COMMIT_FLAGS}


@dataclass(slots=True)
class CommitFlags:
    """One boolean per known ``git commit`` option, so unknown flags cannot exist."""

    stage_all: bool = False
    allow_empty: bool = False
    verbose: bool = False
    no_verify: bool = False
    reset_author: bool = False

    @staticmethod
    def flag_for(action: Action) -> CommitFlag | None:
        return _BY_ACTION.get(action)

    def toggle(self, flag: CommitFlag) -> bool:
        value = not getattr(self, flag.field)
        setattr(self, flag.field, value)
        return value

    def is_enabled(self, flag: CommitFlag) -> bool:
        return bool(getattr(self, flag.field))

    def enabled(self) -> tuple[CommitFlag, ...]:
        return tuple(flag for flag in COMMIT_FLAGS if self.is_enabled(flag))

    def names(self) -> frozenset[str]:
        return frozenset(flag.short for flag in self.enabled())


__all__ = ["CommitFlags"]
