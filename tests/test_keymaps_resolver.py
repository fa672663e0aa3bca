from __future__ import annotations

import pytest

from stagewise.keymaps import (
    Action,
    BindingTable,
    ChordResolver,
    CommitMessageResolver,
    config_to_chord,
    decode_key,
)


def make_resolver(*specs: tuple[str, Action]) -> ChordResolver:
    table = BindingTable(mode="test")
    table.load(specs)
    return ChordResolver(table)


def cursor_resolver() -> ChordResolver:
    return make_resolver(
        ("k", Action.CURSOR_UP),
        ("j", Action.CURSOR_DOWN),
        ("gg", Action.CURSOR_BUFFER_START),
        ("G", Action.CURSOR_BUFFER_END),
        ("<Esc>", Action.EXIT),
    )


def test_config_tokens_become_raw_characters() -> None:
    assert config_to_chord("<Esc>cc") == "\x1bcc"
    assert config_to_chord("<Space>Eg") == " Eg"


def test_single_and_multi_key_chords_resolve() -> None:
    resolver = cursor_resolver()

    assert resolver.resolve(ord("k")) == Action.CURSOR_UP
    assert resolver.resolve(ord("j")) == Action.CURSOR_DOWN
    assert resolver.resolve(ord("G")) == Action.CURSOR_BUFFER_END

    assert resolver.resolve(ord("g")) == Action.MATCHING
    assert resolver.resolve(ord("g")) == Action.CURSOR_BUFFER_START

    assert resolver.resolve(ord("g")) == Action.MATCHING
    assert resolver.resolve(ord("h")) == Action.NO_MATCH
    assert resolver.resolve(ord("h")) == Action.NO_MATCH

    assert resolver.resolve(27) == Action.EXIT


@pytest.mark.parametrize("spec", ["k", "gg", "<Esc>", "abc"])
def test_every_prefix_step_is_provisional(spec: str) -> None:
    resolver = make_resolver(
        ("k", Action.CURSOR_UP),
        ("gg", Action.CURSOR_BUFFER_START),
        ("<Esc>", Action.EXIT),
        ("abc", Action.PUSH),
    )
    chord = config_to_chord(spec)

    for char in chord[:-1]:
        assert resolver.resolve(char) == Action.MATCHING
    assert resolver.resolve(chord[-1]) != Action.MATCHING
    assert resolver.pending == ""


def test_no_match_clears_buffer() -> None:
    resolver = cursor_resolver()

    assert resolver.resolve("g") == Action.MATCHING
    assert resolver.pending == "g"
    assert resolver.resolve("x") == Action.NO_MATCH
    assert resolver.pending == ""
    assert resolver.resolve("k") == Action.CURSOR_UP


def test_empty_table_never_matches() -> None:
    resolver = make_resolver()

    assert resolver.resolve("a") == Action.NO_MATCH
    assert resolver.resolve(27) == Action.NO_MATCH
    assert resolver.pending == ""


def test_buffer_never_exceeds_longest_chord() -> None:
    resolver = make_resolver(("ab", Action.PUSH), ("aa", Action.EXIT))

    assert resolver.resolve("a") == Action.MATCHING
    assert len(resolver.pending) <= resolver.table.longest_chord
    assert resolver.resolve("c") == Action.NO_MATCH
    assert resolver.pending == ""


def test_first_exact_match_wins_over_longer_chord() -> None:
    resolver = make_resolver(("g", Action.CURSOR_UP), ("gg", Action.CURSOR_BUFFER_START))

    assert resolver.resolve("g") == Action.CURSOR_UP
    assert resolver.resolve("g") == Action.CURSOR_UP


def test_exact_match_later_in_table_still_beats_prefix() -> None:
    resolver = make_resolver(("gg", Action.CURSOR_BUFFER_START), ("g", Action.CURSOR_UP))

    assert resolver.resolve("g") == Action.CURSOR_UP


@pytest.mark.parametrize("key", [None, -1, 0x110000, "ab", ""])
def test_undecodable_keys_report_error_and_reset(key: object) -> None:
    resolver = cursor_resolver()
    resolver.resolve("g")

    assert resolver.resolve(key) == Action.ERROR  # type: ignore[arg-type]
    assert resolver.pending == ""
    assert resolver.resolve("g") == Action.MATCHING


def test_decode_key_accepts_codes_and_single_characters() -> None:
    assert decode_key(97) == "a"
    assert decode_key("a") == "a"
    assert decode_key(None) is None
    assert decode_key(-5) is None


def test_commit_message_resolver_edits_message() -> None:
    resolver = CommitMessageResolver()

    for char in "fix bug":
        assert resolver.resolve(char) == Action.WRITE_CHAR
    assert resolver.resolve(0x7F) == Action.WRITE_CHAR

    assert resolver.message == "fix bu"
    assert resolver.resolve("\n") == Action.CONFIRM_COMMIT_MSG
    assert resolver.resolve(27) == Action.EXIT
    assert resolver.message == "fix bu"


def test_commit_message_backspace_on_empty_is_noop() -> None:
    resolver = CommitMessageResolver()

    assert resolver.resolve(0x7F) == Action.WRITE_CHAR
    assert resolver.message == ""
    assert resolver.resolve(None) == Action.ERROR


def test_commit_message_keys_are_configurable() -> None:
    resolver = CommitMessageResolver(exit_key="q", confirm_key="\r", backspace_key="\b")

    resolver.resolve("a")
    resolver.resolve("\b")
    assert resolver.message == ""
    assert resolver.resolve("q") == Action.EXIT
    assert resolver.resolve("\r") == Action.CONFIRM_COMMIT_MSG
    assert resolver.resolve("\n") == Action.WRITE_CHAR
    assert resolver.message == "\n"
