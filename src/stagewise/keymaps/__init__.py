"""Chord bindings, per-mode tables and the resolvers that consume them."""

from .models import Action, Binding, BindingTable, chord_to_config, config_to_chord
from .registry import KeymapRegistry, RegistryStats, ShadowedBinding
from .resolver import ChordResolver, CommitMessageResolver, KeyCode, decode_key
from .defaults import (
    COMMIT_FLAGS,
    COMMITTING_MODE,
    STAGING_MODE,
    CommitFlag,
    describe,
    load_default_keymaps,
)

__all__ = [
    "Action",
    "Binding",
    "BindingTable",
    "chord_to_config",
    "config_to_chord",
    "KeymapRegistry",
    "RegistryStats",
    "ShadowedBinding",
    "ChordResolver",
    "CommitMessageResolver",
    "KeyCode",
    "decode_key",
    "COMMIT_FLAGS",
    "COMMITTING_MODE",
    "STAGING_MODE",
    "CommitFlag",
    "describe",
    "load_default_keymaps",
]
