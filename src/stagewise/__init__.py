"""Chord-driven terminal front-end for a stage/commit/push workflow."""

__all__ = [
    "adapters",
    "actions",
    "keymaps",
    "modes",
    "runtime",
    "ui",
    "vcs",
]

__version__ = "0.1.0"
