from __future__ import annotations

from stagewise.keymaps import (
    COMMITTING_MODE,
    STAGING_MODE,
    Action,
    Binding,
    KeymapRegistry,
    describe,
    load_default_keymaps,
)
from stagewise.keymaps.defaults import COMMITTING_BINDINGS, STAGING_BINDINGS


def test_load_tracks_longest_chord() -> None:
    registry = KeymapRegistry()

    table = registry.load("test", [("a", Action.PUSH), ("<Esc>bc", Action.EXIT)])

    assert table.longest_chord == 3
    assert table.chords() == ("a", "\x1bbc")
    assert table.actions() == (Action.PUSH, Action.EXIT)


def test_reloading_appends_instead_of_replacing() -> None:
    registry = KeymapRegistry()
    specs = [("x", Action.PUSH)]

    registry.load("test", specs)
    registry.load("test", specs)

    assert len(registry.table("test")) == 2
    assert registry.resolver("test").resolve("x") == Action.PUSH


def test_detect_shadowed_reports_duplicates_and_prefixes() -> None:
    registry = KeymapRegistry()
    registry.load(
        "test",
        [("g", Action.CURSOR_UP), ("gg", Action.CURSOR_BUFFER_START), ("g", Action.EXIT)],
    )

    shadowed = registry.detect_shadowed("test")

    assert [(item.binding.spec, item.shadowed_by.spec) for item in shadowed] == [
        ("gg", "g"),
        ("g", "g"),
    ]


def test_defaults_populate_both_modes() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)

    stats = registry.stats()

    assert stats.modes == (COMMITTING_MODE, STAGING_MODE)
    assert stats.binding_count == len(STAGING_BINDINGS) + len(COMMITTING_BINDINGS)
    assert stats.longest_chord == 2
    assert registry.detect_shadowed(STAGING_MODE) == []
    assert registry.detect_shadowed(COMMITTING_MODE) == []


def test_default_committing_table_resolves_flag_chords() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = registry.resolver(COMMITTING_MODE)

    assert resolver.resolve("-") == Action.MATCHING
    assert resolver.resolve("a") == Action.TOGGLE_COMMIT_STAGE_ALL
    assert resolver.resolve("-") == Action.MATCHING
    assert resolver.resolve("R") == Action.TOGGLE_COMMIT_RESET_AUTHOR
    assert resolver.resolve(27) == Action.EXIT


def test_overrides_are_appended_per_mode() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(
        registry, per_mode_overrides={STAGING_MODE: [("x", Action.STAGE_FILE)]}
    )

    assert registry.resolver(STAGING_MODE).resolve("x") == Action.STAGE_FILE


def test_binding_spec_round_trips_to_display_form() -> None:
    binding = Binding(chord="\x1b", action=Action.EXIT)

    assert binding.spec == "<Esc>"
    assert Binding.from_spec("<Space>", Action.PUSH).chord == " "
    assert describe(Action.STAGE_FILE) == "Stage file"
    assert describe(Action.NO_MATCH) == Action.NO_MATCH.value


def test_modes_follow_load_order_and_stats_sorts_them() -> None:
    registry = KeymapRegistry()
    registry.load(STAGING_MODE, [("j", Action.CURSOR_DOWN)])
    registry.load(COMMITTING_MODE, [("c", Action.OPEN_COMMIT_MSG_MODE)])

    assert registry.modes() == (STAGING_MODE, COMMITTING_MODE)
    assert registry.stats().modes == (COMMITTING_MODE, STAGING_MODE)
