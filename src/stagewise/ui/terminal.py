"""Terminal backend boundary and an in-memory backend for scripted runs."""

from __future__ import annotations

from collections import deque
from typing import Iterable, Iterator, Protocol

from stagewise.keymaps import KeyCode

from .surface import ColorScheme, Coord, Surface


class TerminalSetupError(RuntimeError):
    """Raised when the terminal cannot be prepared for drawing."""


class TerminalBackend(Protocol):
    """What the orchestrator needs from a terminal.

    A frame is ``clear()``, any number of widget renders onto ``surface``,
    then ``flush()``.
    """

    surface: Surface
    scheme: ColorScheme

    def size(self) -> Coord: ...

    def clear(self) -> None: ...

    def flush(self) -> None: ...

    def close(self) -> None: ...


class HeadlessTerminal:
    """Backend that draws into memory and reads keys from a script."""

    def __init__(
        self,
        columns: int = 80,
        rows: int = 24,
        *,
        keys: Iterable[KeyCode] = (),
        scheme: ColorScheme | None = None,
    ) -> None:
        if columns <= 0 or rows <= 0:
            raise TerminalSetupError(f"Invalid terminal size {columns}x{rows}")
        self.surface = Surface(columns, rows)
        self.scheme = scheme or ColorScheme.default()
        self.frames: list[str] = []
        self.closed = False
        self._keys: deque[KeyCode] = deque(keys)

    def size(self) -> Coord:
        return self.surface.size

    def clear(self) -> None:
        self.surface.clear()

    def flush(self) -> None:
        self.surface.flush()
        self.frames.append(self.surface.text())

    def close(self) -> None:
        self.closed = True

    def feed(self, *keys: KeyCode) -> None:
        self._keys.extend(keys)

    def read_key(self) -> KeyCode:
        """Next scripted key; ``None`` stands in for undecodable input.

        Raises :class:`EOFError` once the script is used up.
        """

        if not self._keys:
            raise EOFError("no scripted keys left")
        return self._keys.popleft()

    def keys(self) -> Iterator[KeyCode]:
        while self._keys:
            yield self.read_key()


__all__ = ["HeadlessTerminal", "TerminalBackend", "TerminalSetupError"]
