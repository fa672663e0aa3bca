"""Key-handling loop: resolve, mutate, rebuild, render."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional

from stagewise.actions import ACTION_HANDLERS, commit
from stagewise.keymaps import Action, KeyCode
from stagewise.modes import Effect, Panel, PanelManager, PanelOutcome
from stagewise.ui import ColorPair, Coord, Layer, Text, TextStyle
from stagewise.ui.layouts import (
    RepoSnapshot,
    StatusLayout,
    build_commit_message_layer,
    build_help_layer,
    build_pre_commit_layer,
    build_status_layer,
)
from stagewise.ui.terminal import TerminalBackend
from stagewise.vcs import CommitFlags, VersionControl

from . import telemetry

CURSOR_START = Coord(2, 2)

BlockingRunner = Callable[[Callable[[], Any], Callable[[Any], None]], None]

_CURSOR_PANELS = (Panel.STAGING, Panel.COMMITTING)


def run_inline(call: Callable[[], Any], done: Callable[[Any], None]) -> None:
    """Default runner: do the blocking work on the calling thread."""

    done(call())


class Orchestrator:
    """Owns panel state, the cursor and the commit flags.

    Every settled key (anything but a provisional chord prefix) triggers a
    full rebuild of every layer from freshly fetched repository state.
    """

    def __init__(
        self,
        vcs: VersionControl,
        terminal: TerminalBackend,
        *,
        panels: PanelManager | None = None,
        run_blocking: BlockingRunner = run_inline,
    ) -> None:
        self.vcs = vcs
        self.terminal = terminal
        self.panels = panels or PanelManager()
        self.logger = telemetry.get_logger("stagewise.runtime")
        self.cursor = CURSOR_START
        self.flags = CommitFlags()
        self.status_message = ""
        self.status_color = ColorPair.H1
        self.push_pending = False
        self.run_blocking = run_blocking
        self.running = True
        self.snapshot = RepoSnapshot()
        self.status: StatusLayout = build_status_layer(self.snapshot)
        self.pre_commit = Layer(name="pre_commit")
        self.commit_message = Layer(name="commit_message")
        self.help = Layer(name="help")
        self.rebuild()

    @property
    def panel(self) -> Panel:
        return self.panels.active

    def fetch_snapshot(self) -> RepoSnapshot:
        return RepoSnapshot(
            branch=self.vcs.current_branch(),
            last_commit=self.vcs.last_commit_message(),
            untracked=tuple(self.vcs.list_untracked()),
            staged=tuple(self.vcs.list_staged()),
            unstaged=tuple(self.vcs.list_unstaged()),
        )

    def files_to_commit(self) -> tuple[str, ...]:
        if self.flags.stage_all:
            return self.snapshot.staged + self.snapshot.unstaged
        return self.snapshot.staged

    def rebuild(self) -> None:
        with telemetry.span("runtime::rebuild", component="ui"):
            self.snapshot = self.fetch_snapshot()
            self.status = build_status_layer(self.snapshot)
            self.pre_commit = build_pre_commit_layer(
                [flag.short for flag in self.flags.enabled()],
                self.terminal.size().x,
            )
            self.commit_message = build_commit_message_layer(
                self.panels.message, self.files_to_commit()
            )
            self.help = build_help_layer(self.panels.keymap_registry)
            self._apply_visibility()

    def _apply_visibility(self) -> None:
        panel = self.panel
        self.status.layer.visible = panel in _CURSOR_PANELS
        self.pre_commit.visible = panel is Panel.COMMITTING
        self.commit_message.visible = panel is Panel.COMMIT_MESSAGE
        self.help.visible = panel is Panel.HELP

    def layers(self) -> list[tuple[Layer, Coord]]:
        rows = self.terminal.size().y
        bottom = Coord(0, rows - self.pre_commit.size().y - 1)
        return [
            (self.status.layer, Coord(0, 0)),
            (self.pre_commit, bottom),
            (self.commit_message, Coord(0, 0)),
            (self.help, Coord(0, 0)),
        ]

    def selected_path(self) -> Optional[str]:
        return self.status.anchors.path_at(self.cursor.y)

    def handle_key(self, key: KeyCode) -> Action:
        if not self.push_pending:
            self.clear_status()
        outcome = self.panels.handle_key(key)
        action = outcome.action

        if not action.settled:
            telemetry.record_event(
                "keymaps.provisional",
                level="debug",
                data={"panel": self.panel.value, "chord": self.panels.pending_chord},
            )
            return action
        if action in (Action.NO_MATCH, Action.ERROR):
            telemetry.record_event(
                "keymaps.unresolved",
                level="debug",
                data={"panel": outcome.previous.value, "action": action.value},
            )

        if outcome.effect is Effect.SHUTDOWN:
            self.close()
            return action
        self._apply(outcome)
        self.rebuild()
        return action

    def _apply(self, outcome: PanelOutcome) -> None:
        if outcome.effect is Effect.COMMIT:
            commit(self, outcome.message)
            return
        if outcome.switched:
            return
        handler = ACTION_HANDLERS.get(outcome.action)
        if handler is not None:
            handler(self)

    def render(self) -> None:
        surface = self.terminal.surface
        self.terminal.clear()
        for layer, origin in self.layers():
            layer.render(surface, origin)
        if self.panel in _CURSOR_PANELS:
            surface.recolor(self.cursor, ColorPair.SELECTED)
        if self.status_message:
            self._status_text(self.status_message, self.status_color).render(
                surface, self.status.message_origin
            )
        self.terminal.flush()

    def set_status(self, text: str, *, color: ColorPair = ColorPair.H1) -> None:
        self.status_message = text
        self.status_color = color

    def clear_status(self) -> None:
        self.set_status("")

    def show_status(self, text: str, *, color: ColorPair = ColorPair.H1) -> None:
        """Draw ``text`` over the current frame and flush it right away."""

        self._status_text(text, color).render(
            self.terminal.surface, self.status.message_origin
        )
        self.terminal.flush()

    @staticmethod
    def _status_text(text: str, color: ColorPair) -> Text:
        return Text(text, style=TextStyle.BOLD, color=color)

    def refresh(self) -> None:
        """Rebuild and redraw outside a key cycle, e.g. when background work ends."""

        if not self.running:
            return
        self.rebuild()
        self.render()

    def step(self, key: KeyCode) -> Action:
        action = self.handle_key(key)
        if self.running:
            self.render()
        return action

    def run(self, keys: Iterable[KeyCode]) -> None:
        """Pull keys one at a time until the staging panel exits or input ends."""

        self.render()
        for key in keys:
            self.step(key)
            if not self.running:
                break

    def close(self) -> None:
        if not self.running:
            return
        self.running = False
        telemetry.record_event("runtime.shutdown", logger_name="stagewise.runtime")
        self.terminal.close()


__all__ = ["BlockingRunner", "CURSOR_START", "Orchestrator", "run_inline"]
