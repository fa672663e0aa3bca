"""Panel state machine: which resolver gets the key and what it switches to."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from stagewise.runtime import telemetry

from stagewise.keymaps import (
    COMMITTING_MODE,
    STAGING_MODE,
    Action,
    ChordResolver,
    CommitMessageResolver,
    KeyCode,
    KeymapRegistry,
    load_default_keymaps,
)


class Panel(Enum):
    STAGING = "staging"
    COMMITTING = "committing"
    COMMIT_MESSAGE = "commit_message"
    HELP = "help"


class Effect(Enum):
    """Side effect the orchestrator must carry out after a transition."""

    NONE = "none"
    SHUTDOWN = "shutdown"
    COMMIT = "commit"
    REFRESH_MESSAGE = "refresh_message"


@dataclass(frozen=True, slots=True)
class PanelOutcome:
    action: Action
    previous: Panel
    current: Panel
    effect: Effect = Effect.NONE
    message: str = ""

    @property
    def switched(self) -> bool:
        return self.previous is not self.current


_TRANSITIONS: Dict[tuple[Panel, Action], tuple[Optional[Panel], Effect]] = {
    (Panel.STAGING, Action.OPEN_COMMIT_MODE): (Panel.COMMITTING, Effect.NONE),
    (Panel.STAGING, Action.OPEN_HELP_MODE): (Panel.HELP, Effect.NONE),
    (Panel.STAGING, Action.EXIT): (None, Effect.SHUTDOWN),
    (Panel.COMMITTING, Action.OPEN_COMMIT_MSG_MODE): (
        Panel.COMMIT_MESSAGE,
        Effect.REFRESH_MESSAGE,
    ),
    (Panel.COMMITTING, Action.EXIT): (Panel.STAGING, Effect.NONE),
    (Panel.COMMIT_MESSAGE, Action.EXIT): (Panel.COMMITTING, Effect.NONE),
    (Panel.COMMIT_MESSAGE, Action.CONFIRM_COMMIT_MSG): (Panel.STAGING, Effect.COMMIT),
}


class PanelManager:
    """Owns the active panel and one resolver per panel that reads chords.

    Help has no resolver: any key, decodable or not, returns to Staging.
    """

    def __init__(
        self,
        *,
        keymap_registry: KeymapRegistry | None = None,
        message_resolver: CommitMessageResolver | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.logger = telemetry.get_logger("stagewise.modes")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="stagewise.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.resolvers: Dict[Panel, ChordResolver] = {
            Panel.STAGING: self.keymap_registry.resolver(STAGING_MODE),
            Panel.COMMITTING: self.keymap_registry.resolver(COMMITTING_MODE),
        }
        self.message_resolver = message_resolver or CommitMessageResolver()
        self._active = Panel.STAGING

    @property
    def active(self) -> Panel:
        return self._active

    @property
    def message(self) -> str:
        return self.message_resolver.message

    @property
    def pending_chord(self) -> str:
        resolver = self.resolvers.get(self._active)
        return resolver.pending if resolver else ""

    def switch_panel(self, panel: Panel) -> None:
        previous = self._active
        if previous is panel:
            return
        resolver = self.resolvers.get(previous)
        if resolver is not None:
            resolver.reset()
        self._active = panel
        telemetry.record_event(
            "panel.switch",
            data={"from": previous.value, "to": panel.value},
            logger_name="stagewise.modes",
        )

    def resolve(self, key: KeyCode) -> Action:
        panel = self._active
        if panel is Panel.HELP:
            return Action.EXIT
        if panel is Panel.COMMIT_MESSAGE:
            return self.message_resolver.resolve(key)
        return self.resolvers[panel].resolve(key)

    def handle_key(self, key: KeyCode) -> PanelOutcome:
        previous = self._active
        with telemetry.span(
            name=f"panel::{previous.value}",
            component="modes",
            metadata={"key": key, "panel": previous.value},
        ) as handle:
            action = self.resolve(key)
            handle.add_metadata("action", action.value)
            outcome = self.apply(action)
        return outcome

    def apply(self, action: Action) -> PanelOutcome:
        previous = self._active
        if previous is Panel.HELP:
            self.switch_panel(Panel.STAGING)
            return PanelOutcome(action, previous, Panel.STAGING)

        target, effect = _TRANSITIONS.get((previous, action), (previous, Effect.NONE))
        message = ""
        if effect is Effect.COMMIT:
            message = self.message_resolver.message
            self.message_resolver.clear()
        if target is not None:
            self.switch_panel(target)
        return PanelOutcome(
            action, previous, self._active, effect=effect, message=message
        )


__all__ = ["Effect", "Panel", "PanelManager", "PanelOutcome"]
