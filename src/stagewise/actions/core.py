"""Cursor movement shared by the staging and committing panels."""

from __future__ import annotations

from typing import TYPE_CHECKING

from stagewise.ui import Coord

if TYPE_CHECKING:  # pragma: no cover
    from stagewise.runtime.orchestrator import Orchestrator


def cursor_down(app: "Orchestrator") -> None:
    app.cursor = app.cursor + Coord(0, 1)


def cursor_up(app: "Orchestrator") -> None:
    app.cursor = app.cursor - Coord(0, 1)


def cursor_buffer_start(app: "Orchestrator") -> None:
    row = app.status.anchors.first_row()
    if row is not None:
        app.cursor = Coord(app.cursor.x, row)


def cursor_buffer_end(app: "Orchestrator") -> None:
    row = app.status.anchors.last_row()
    if row is not None:
        app.cursor = Coord(app.cursor.x, row)


__all__ = [
    "cursor_buffer_end",
    "cursor_buffer_start",
    "cursor_down",
    "cursor_up",
]
