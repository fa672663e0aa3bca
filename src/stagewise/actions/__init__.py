"""Handlers for every action that mutates orchestrator state."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Callable, Mapping

from stagewise.keymaps import COMMIT_FLAGS, Action

from .commit import commit, toggle_flag
from .core import cursor_buffer_end, cursor_buffer_start, cursor_down, cursor_up
from .staging import push, stage_all_files, stage_file, unstage_file

if TYPE_CHECKING:  # pragma: no cover
    from stagewise.runtime.orchestrator import Orchestrator

Handler = Callable[["Orchestrator"], None]

ACTION_HANDLERS: Mapping[Action, Handler] = {
    Action.CURSOR_DOWN: cursor_down,
    Action.CURSOR_UP: cursor_up,
    Action.CURSOR_BUFFER_START: cursor_buffer_start,
    Action.CURSOR_BUFFER_END: cursor_buffer_end,
    Action.STAGE_FILE: stage_file,
    Action.STAGE_ALL_FILES: stage_all_files,
    Action.UNSTAGE_FILE: unstage_file,
    Action.PUSH: push,
    **{
        flag.action: partial(toggle_flag, action=flag.action)
        for flag in COMMIT_FLAGS
    },
}

__all__ = [
    "ACTION_HANDLERS",
    "Handler",
    "commit",
    "cursor_buffer_end",
    "cursor_buffer_start",
    "cursor_down",
    "cursor_up",
    "push",
    "stage_all_files",
    "stage_file",
    "toggle_flag",
    "unstage_file",
]
