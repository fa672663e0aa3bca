"""Panel state machine routing keys to the right resolver."""

from .panel_manager import Effect, Panel, PanelManager, PanelOutcome

__all__ = [
    "Effect",
    "Panel",
    "PanelManager",
    "PanelOutcome",
]
