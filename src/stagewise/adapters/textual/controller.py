"""Textual adapter: key normalization, frame conversion and the terminal backend."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from rich.style import Style
from rich.text import Text as RichText

from stagewise.keymaps import Action, KeyCode
from stagewise.runtime.orchestrator import Orchestrator
from stagewise.ui import ColorPair, ColorScheme, Coord, Surface, TextStyle
from stagewise.ui.terminal import TerminalSetupError

_NAMED_KEYS: Dict[str, int] = {
    "escape": 27,
    "enter": 10,
    "return": 10,
    "backspace": 127,
    "tab": 9,
    "space": 32,
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def _call_now(fn: Callable[[], None]) -> None:
    fn()


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_frame: Callable[[RichText], None]
    exit: Callable[[], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop
    # Runs blocking git work off the event loop; the app passes a thread worker
    run_in_background: Callable[[Callable[[], None]], None] = _call_now
    # Hands a callback from the worker thread back to the event loop
    call_soon: Callable[[Callable[[], None]], None] = _call_now


def normalize_key(key: str, character: Optional[str] = None) -> KeyCode:
    """Map a Textual key event onto the raw code the resolvers expect.

    Keys without a printable character and without a known raw equivalent
    (arrows, function keys) map to ``None``, which resolvers report as a
    decode error.
    """

    if key in _NAMED_KEYS:
        return _NAMED_KEYS[key]
    if character and len(character) == 1:
        return ord(character)
    return None


class StyleCache:
    """Memoizes the rich ``Style`` for each (style flags, color pair) combination."""

    def __init__(self, scheme: ColorScheme) -> None:
        self.scheme = scheme
        self._styles: Dict[tuple[TextStyle, ColorPair], Style] = {}

    def get(self, style: TextStyle, color: ColorPair) -> Style:
        key = (style, color)
        if key not in self._styles:
            foreground, background = self.scheme.colors(color)
            self._styles[key] = Style(
                color=foreground,
                bgcolor=background,
                bold=bool(style & TextStyle.BOLD),
                italic=bool(style & TextStyle.ITALIC),
                underline=bool(style & TextStyle.UNDERLINE),
            )
        return self._styles[key]


def surface_to_rich(surface: Surface, styles: StyleCache) -> RichText:
    frame = RichText(no_wrap=True, overflow="crop")
    for row, cells in enumerate(surface.rows_of_cells()):
        if row:
            frame.append("\n")
        run: list[str] = []
        run_key: tuple[TextStyle, ColorPair] | None = None
        for cell in cells:
            key = (cell.style, cell.color)
            if key != run_key and run:
                frame.append("".join(run), style=styles.get(*run_key))
                run = []
            run_key = key
            run.append(cell.char)
        if run and run_key is not None:
            frame.append("".join(run), style=styles.get(*run_key))
    return frame


class TextualTerminal:
    """Terminal backend whose flush hands a rich frame to a Textual widget."""

    def __init__(
        self,
        columns: int,
        rows: int,
        hooks: TextualUIHooks,
        *,
        scheme: ColorScheme | None = None,
    ) -> None:
        if columns <= 0 or rows <= 0:
            raise TerminalSetupError(f"Terminal reports size {columns}x{rows}")
        self.surface = Surface(columns, rows)
        self.scheme = scheme or ColorScheme.default()
        self.hooks = hooks
        self._styles = StyleCache(self.scheme)

    def size(self) -> Coord:
        return self.surface.size

    def resize(self, columns: int, rows: int) -> None:
        self.surface.resize(max(columns, 1), max(rows, 1))

    def clear(self) -> None:
        self.surface.clear()

    def flush(self) -> None:
        self.surface.flush()
        self.hooks.update_frame(surface_to_rich(self.surface, self._styles))

    def close(self) -> None:
        self.hooks.exit()


class TextualStageAdapter:
    """Bridges Textual key events to the orchestrator, one key per cycle."""

    def __init__(self, orchestrator: Orchestrator, hooks: TextualUIHooks) -> None:
        self.orchestrator = orchestrator
        self.hooks = hooks
        orchestrator.run_blocking = self._run_blocking

    def start(self) -> None:
        self.orchestrator.render()

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> Action:
        code = normalize_key(key, character)
        self._log_state("key ->", key=key, code=code)
        action = self.orchestrator.step(code)
        self._log_state("action <-", action=action.value)
        return action

    def resize(self, columns: int, rows: int) -> None:
        terminal = self.orchestrator.terminal
        if isinstance(terminal, TextualTerminal):
            terminal.resize(columns, rows)
        self.orchestrator.rebuild()
        self.orchestrator.render()

    def _run_blocking(
        self, call: Callable[[], Any], done: Callable[[Any], None]
    ) -> None:
        def work() -> None:
            result = call()
            self.hooks.call_soon(lambda: self._finish(done, result))

        self._log_state("background ->")
        self.hooks.run_in_background(work)

    def _finish(self, done: Callable[[Any], None], result: Any) -> None:
        done(result)
        self._log_state("background <-")
        self.orchestrator.refresh()

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "panel": self.orchestrator.panel.value,
            "cursor": self.orchestrator.cursor.as_tuple(),
            "chord": self.orchestrator.panels.pending_chord,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))


__all__ = [
    "StyleCache",
    "TextualStageAdapter",
    "TextualTerminal",
    "TextualUIHooks",
    "normalize_key",
    "surface_to_rich",
]
