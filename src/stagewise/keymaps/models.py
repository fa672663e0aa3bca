"""Actions, bindings and the per-mode binding table."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator

ESCAPE = "\x1b"

CHORD_TOKENS: tuple[tuple[str, str], ...] = (
    ("<Esc>", ESCAPE),
    ("<Space>", " "),
)


class Action(Enum):
    """Closed set of commands a resolver can produce."""

    CONFIRM_COMMIT_MSG = "commit.confirm_message"
    CURSOR_BUFFER_END = "cursor.buffer_end"
    CURSOR_BUFFER_START = "cursor.buffer_start"
    CURSOR_DOWN = "cursor.down"
    CURSOR_UP = "cursor.up"
    ERROR = "resolve.decode_error"
    EXIT = "panel.exit"
    MATCHING = "resolve.provisional"
    NO_MATCH = "resolve.no_match"
    OPEN_COMMIT_MODE = "panel.open_commit"
    OPEN_COMMIT_MSG_MODE = "panel.open_commit_message"
    OPEN_HELP_MODE = "panel.open_help"
    PUSH = "git.push"
    STAGE_ALL_FILES = "git.stage_all"
    STAGE_FILE = "git.stage"
    TOGGLE_COMMIT_ALLOW_EMPTY = "commit.toggle_allow_empty"
    TOGGLE_COMMIT_DISABLE_HOOKS = "commit.toggle_no_verify"
    TOGGLE_COMMIT_RESET_AUTHOR = "commit.toggle_reset_author"
    TOGGLE_COMMIT_STAGE_ALL = "commit.toggle_all"
    TOGGLE_COMMIT_VERBOSE = "commit.toggle_verbose"
    UNSTAGE_FILE = "git.unstage"
    WRITE_CHAR = "commit.write_char"

    @property
    def settled(self) -> bool:
        """False only for the provisional signal; everything else ends a cycle."""

        return self is not Action.MATCHING


def config_to_chord(spec: str) -> str:
    """Replace named tokens such as ``<Esc>`` with the raw characters they stand for."""

    chord = spec
    for token, raw in CHORD_TOKENS:
        chord = chord.replace(token, raw)
    return chord


def chord_to_config(chord: str) -> str:
    """Inverse of :func:`config_to_chord`, used when showing chords to people."""

    parts: list[str] = []
    for char in chord:
        for token, raw in CHORD_TOKENS:
            if char == raw:
                parts.append(token)
                break
        else:
            parts.append(char)
    return "".join(parts)


@dataclass(frozen=True, slots=True)
class Binding:
    """A raw chord paired with the action it produces."""

    chord: str
    action: Action
    spec: str = ""

    def __post_init__(self) -> None:
        if not self.chord:
            raise ValueError("chord cannot be empty")
        if not self.spec:
            object.__setattr__(self, "spec", chord_to_config(self.chord))

    @classmethod
    def from_spec(cls, spec: str, action: Action) -> "Binding":
        return cls(chord=config_to_chord(spec), action=action, spec=spec)

    def __len__(self) -> int:
        return len(self.chord)


@dataclass(slots=True)
class BindingTable:
    """Ordered bindings for one mode.

    Order matters: the resolver returns the first exact match it meets, so a
    short chord listed before a longer chord it prefixes always wins.
    """

    mode: str
    bindings: list[Binding] = field(default_factory=list)
    longest_chord: int = 0

    def load(self, specs: Iterable[tuple[str, Action]]) -> None:
        """Append ``(spec, action)`` pairs; existing bindings are kept."""

        for spec, action in specs:
            self.append(Binding.from_spec(spec, action))

    def append(self, binding: Binding) -> None:
        self.bindings.append(binding)
        self.longest_chord = max(self.longest_chord, len(binding))

    def chords(self) -> tuple[str, ...]:
        return tuple(binding.chord for binding in self.bindings)

    def actions(self) -> tuple[Action, ...]:
        return tuple(binding.action for binding in self.bindings)

    def __iter__(self) -> Iterator[Binding]:
        return iter(self.bindings)

    def __len__(self) -> int:
        return len(self.bindings)


__all__ = [
    "Action",
    "Binding",
    "BindingTable",
    "CHORD_TOKENS",
    "ESCAPE",
    "chord_to_config",
    "config_to_chord",
]
