"""Staging-panel actions that talk to the version-control backend."""

from __future__ import annotations

from typing import TYPE_CHECKING

from stagewise.runtime import telemetry
from stagewise.ui import ColorPair
from stagewise.vcs import CommandOutcome

if TYPE_CHECKING:  # pragma: no cover
    from stagewise.runtime.orchestrator import Orchestrator

PUSHING = "Pushing..."


def stage_file(app: "Orchestrator") -> None:
    path = app.selected_path()
    if path is not None:
        app.vcs.stage(path)


def unstage_file(app: "Orchestrator") -> None:
    path = app.selected_path()
    if path is not None:
        app.vcs.unstage(path)


def stage_all_files(app: "Orchestrator") -> None:
    snapshot = app.snapshot
    for path in (*snapshot.untracked, *snapshot.unstaged):
        app.vcs.stage(path)


def push(app: "Orchestrator") -> None:
    if app.push_pending:
        telemetry.record_event("git.push_skipped", level="debug")
        return
    app.push_pending = True
    app.set_status(PUSHING, color=ColorPair.SELECTED)
    # Flushed before the push starts in case the runner blocks this thread.
    app.show_status(PUSHING, color=ColorPair.SELECTED)
    app.run_blocking(lambda: _run_push(app), lambda outcome: _push_done(app, outcome))


def _run_push(app: "Orchestrator") -> CommandOutcome:
    with telemetry.span("git::push", component="vcs"):
        return app.vcs.push()


def _push_done(app: "Orchestrator", outcome: CommandOutcome) -> None:
    app.push_pending = False
    app.set_status(outcome.status)


__all__ = ["PUSHING", "push", "stage_all_files", "stage_file", "unstage_file"]
