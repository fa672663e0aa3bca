"""Executable Textual app that hosts the stage/commit/push front-end."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Callable, Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use stagewise.adapters.textual.app"
    ) from exc

from rich.text import Text as RichText

from stagewise.runtime import telemetry
from stagewise.runtime.orchestrator import Orchestrator
from stagewise.vcs import GitClient

from .controller import TextualStageAdapter, TextualTerminal, TextualUIHooks


class StagewiseApp(App[None]):
    """Full-screen host: one Static widget showing the composed frame."""

    CSS = """
	Screen {
		overflow: hidden;
	}

	#frame {
		width: 1fr;
		height: 1fr;
	}
	"""

    def __init__(self, *, work_dir: Path | None = None) -> None:
        super().__init__()
        self._work_dir = work_dir or Path.cwd()
        self._frame: Static | None = None
        self.adapter: TextualStageAdapter | None = None
        self.logger = telemetry.get_logger("stagewise.app")

    def compose(self) -> ComposeResult:
        self._frame = Static("", id="frame")
        yield self._frame

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_frame=self._update_frame,
            exit=self.exit,
            log=self._log_line,
            run_in_background=self._run_in_worker,
            call_soon=self.call_from_thread,
        )
        terminal = TextualTerminal(self.size.width, self.size.height, hooks)
        orchestrator = Orchestrator(GitClient(self._work_dir), terminal)
        self.adapter = TextualStageAdapter(orchestrator, hooks)
        self.adapter.start()

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter:
            self.adapter.resize(event.size.width, event.size.height)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        self.adapter.handle_textual_key(event.key, character=event.character)
        event.stop()
        event.prevent_default()

    def _run_in_worker(self, work: Callable[[], None]) -> None:
        self.run_worker(work, thread=True, exclusive=True, group="vcs", name="vcs")

    def _update_frame(self, frame: RichText) -> None:
        if self._frame:
            self._frame.update(frame)

    def _log_line(self, line: str) -> None:
        self.logger.debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Stage, commit and push from a chord-driven terminal UI."
    )
    parser.add_argument(
        "--log",
        action="store_true",
        help=f"Write a debug log to ./{telemetry.DEBUG_LOG_FILE}",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log:
        telemetry.enable_debug_log()
    app = StagewiseApp()
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
