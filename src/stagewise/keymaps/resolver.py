"""Buffered chord resolution plus the unbuffered commit-message resolver."""

from __future__ import annotations

from typing import Optional

from stagewise.runtime.telemetry import span

from .models import ESCAPE, Action, BindingTable

KeyCode = int | str | None

CONFIRM_KEY = "\n"
BACKSPACE_KEY = "\x7f"


def decode_key(key: KeyCode) -> Optional[str]:
    """Turn a raw key code into a single character, or ``None`` if it has none."""

    if key is None:
        return None
    if isinstance(key, str):
        return key if len(key) == 1 else None
    if key < 0:
        return None
    try:
        return chr(key)
    except (ValueError, OverflowError):
        return None


class ChordResolver:
    """Turns key presses into actions for one mode, one key at a time."""

    def __init__(
        self, table: BindingTable, *, logger_name: str | None = None
    ) -> None:
        self.table = table
        self._logger_name = logger_name
        self._buffer: list[str] = []

    @property
    def mode(self) -> str:
        return self.table.mode

    @property
    def pending(self) -> str:
        return "".join(self._buffer)

    def reset(self) -> None:
        self._buffer.clear()

    def resolve(self, key: KeyCode) -> Action:
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": self.mode, "pending": len(self._buffer)},
        ) as handle:
            action = self._resolve(key)
            handle.add_metadata("action", action.value)
            return action

    def _resolve(self, key: KeyCode) -> Action:
        char = decode_key(key)
        if char is None:
            self.reset()
            return Action.ERROR

        self._buffer.append(char)
        if len(self._buffer) > self.table.longest_chord:
            self.reset()
            return Action.NO_MATCH

        chord = self.pending
        provisional = False
        for binding in self.table:
            if binding.chord == chord:
                self.reset()
                return binding.action
            if binding.chord.startswith(chord):
                provisional = True

        if provisional:
            return Action.MATCHING
        self.reset()
        return Action.NO_MATCH


class CommitMessageResolver:
    """Free-text entry for the commit message; no chords, no buffering."""

    def __init__(
        self,
        *,
        exit_key: str = ESCAPE,
        confirm_key: str = CONFIRM_KEY,
        backspace_key: str = BACKSPACE_KEY,
    ) -> None:
        self.exit_key = exit_key
        self.confirm_key = confirm_key
        self.backspace_key = backspace_key
        self._message: list[str] = []

    @property
    def message(self) -> str:
        return "".join(self._message)

    def clear(self) -> None:
        self._message.clear()

    def resolve(self, key: KeyCode) -> Action:
        char = decode_key(key)
        if char is None:
            return Action.ERROR
        if char == self.exit_key:
            return Action.EXIT
        if char == self.confirm_key:
            return Action.CONFIRM_COMMIT_MSG
        if char == self.backspace_key:
            if self._message:
                self._message.pop()
            return Action.WRITE_CHAR
        self._message.append(char)
        return Action.WRITE_CHAR


__all__ = [
    "BACKSPACE_KEY",
    "CONFIRM_KEY",
    "ChordResolver",
    "CommitMessageResolver",
    "KeyCode",
    "decode_key",
]
