"""Textual host for the orchestrator."""

from .controller import (
    TextualStageAdapter,
    TextualTerminal,
    TextualUIHooks,
    normalize_key,
    surface_to_rich,
)

__all__ = [
    "TextualStageAdapter",
    "TextualTerminal",
    "TextualUIHooks",
    "normalize_key",
    "surface_to_rich",
]
