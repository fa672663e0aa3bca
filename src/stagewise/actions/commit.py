"""Committing-panel actions: flag toggles and the commit itself."""

from __future__ import annotations

from typing import TYPE_CHECKING

from stagewise.keymaps import Action
from stagewise.runtime import telemetry
from stagewise.vcs import CommitFlags

if TYPE_CHECKING:  # pragma: no cover
    from stagewise.runtime.orchestrator import Orchestrator


def toggle_flag(app: "Orchestrator", action: Action) -> None:
    flag = CommitFlags.flag_for(action)
    if flag is None:
        raise ValueError(f"{action} does not toggle a commit flag")
    enabled = app.flags.toggle(flag)
    telemetry.record_event(
        "commit.flag",
        level="debug",
        data={"flag": flag.short, "enabled": enabled},
    )


def commit(app: "Orchestrator", message: str) -> None:
    outcome = app.vcs.commit(app.flags.names(), message)
    if not outcome.ok:
        app.set_status(outcome.status)


__all__ = ["commit", "toggle_flag"]
