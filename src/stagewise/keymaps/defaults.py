"""Built-in keymaps and commit flags loaded once at startup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from .models import Action
from .registry import KeymapRegistry

STAGING_MODE = "staging"
COMMITTING_MODE = "committing"


@dataclass(frozen=True, slots=True)
class CommitFlag:
    """A ``git commit`` option the committing panel can toggle."""

    short: str
    long: str
    description: str
    action: Action
    field: str


COMMIT_FLAGS: tuple[CommitFlag, ...] = (
    CommitFlag(
        "-a",
        "--all",
        "Stage all modified and deleted files",
        Action.TOGGLE_COMMIT_STAGE_ALL,
        "stage_all",
    ),
    CommitFlag(
        "-e",
        "--allow-empty",
        "Allow empty commit",
        Action.TOGGLE_COMMIT_ALLOW_EMPTY,
        "allow_empty",
    ),
    CommitFlag(
        "-v",
        "--verbose",
        "Show diff of changes to be commited",
        Action.TOGGLE_COMMIT_VERBOSE,
        "verbose",
    ),
    CommitFlag(
        "-n",
        "--no-verify",
        "Disable hooks",
        Action.TOGGLE_COMMIT_DISABLE_HOOKS,
        "no_verify",
    ),
    CommitFlag(
        "-R",
        "--reset-author",
        "Claim authorship and reset author date",
        Action.TOGGLE_COMMIT_RESET_AUTHOR,
        "reset_author",
    ),
)

STAGING_BINDINGS: tuple[tuple[str, Action], ...] = (
    ("j", Action.CURSOR_DOWN),
    ("k", Action.CURSOR_UP),
    ("gg", Action.CURSOR_BUFFER_START),
    ("G", Action.CURSOR_BUFFER_END),
    ("q", Action.EXIT),
    ("s", Action.STAGE_FILE),
    ("S", Action.STAGE_ALL_FILES),
    ("u", Action.UNSTAGE_FILE),
    ("c", Action.OPEN_COMMIT_MODE),
    ("?", Action.OPEN_HELP_MODE),
    ("p", Action.PUSH),
    ("<Esc>", Action.EXIT),
)

COMMITTING_BINDINGS: tuple[tuple[str, Action], ...] = (
    *((flag.short, flag.action) for flag in COMMIT_FLAGS),
    ("c", Action.OPEN_COMMIT_MSG_MODE),
    ("<Esc>", Action.EXIT),
)

DEFAULT_KEYMAPS: Mapping[str, tuple[tuple[str, Action], ...]] = {
    STAGING_MODE: STAGING_BINDINGS,
    COMMITTING_MODE: COMMITTING_BINDINGS,
}

ACTION_DESCRIPTIONS: Mapping[Action, str] = {
    Action.CURSOR_DOWN: "Move cursor down",
    Action.CURSOR_UP: "Move cursor up",
    Action.CURSOR_BUFFER_START: "Jump to first file",
    Action.CURSOR_BUFFER_END: "Jump to last file",
    Action.EXIT: "Exit",
    Action.STAGE_FILE: "Stage file",
    Action.STAGE_ALL_FILES: "Stage all files",
    Action.UNSTAGE_FILE: "Unstage file",
    Action.OPEN_COMMIT_MODE: "Commit",
    Action.OPEN_HELP_MODE: "Help",
    Action.PUSH: "Push",
    Action.OPEN_COMMIT_MSG_MODE: "Write commit message",
    **{flag.action: f"Toggle {flag.long}" for flag in COMMIT_FLAGS},
}


def describe(action: Action) -> str:
    return ACTION_DESCRIPTIONS.get(action, action.value)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    per_mode_overrides: Mapping[str, Iterable[tuple[str, Action]]] | None = None,
) -> None:
    """Load the built-in tables, then any extra bindings per mode.

    Overrides are appended after the defaults, so they cannot shadow a
    default chord; they only add new ones.
    """

    for mode, specs in DEFAULT_KEYMAPS.items():
        registry.load(mode, specs)

    if per_mode_overrides:
        for mode, specs in per_mode_overrides.items():
            registry.load(mode, specs)


__all__ = [
    "ACTION_DESCRIPTIONS",
    "COMMITTING_BINDINGS",
    "COMMITTING_MODE",
    "COMMIT_FLAGS",
    "CommitFlag",
    "DEFAULT_KEYMAPS",
    "STAGING_BINDINGS",
    "STAGING_MODE",
    "describe",
    "load_default_keymaps",
]
