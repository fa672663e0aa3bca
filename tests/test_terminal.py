from __future__ import annotations

import pytest

from stagewise.ui import Coord, HeadlessTerminal, TerminalSetupError


def test_read_key_returns_scripted_keys_in_order() -> None:
    terminal = HeadlessTerminal(10, 2, keys=["j", None])
    terminal.feed(27)

    assert terminal.read_key() == "j"
    assert terminal.read_key() is None
    assert terminal.read_key() == 27


def test_read_key_after_script_ends_raises_eof() -> None:
    terminal = HeadlessTerminal(10, 2)

    with pytest.raises(EOFError):
        terminal.read_key()
    assert list(terminal.keys()) == []


def test_keys_drains_the_script() -> None:
    terminal = HeadlessTerminal(10, 2, keys="ab")

    assert list(terminal.keys()) == ["a", "b"]
    terminal.feed("c")
    assert list(terminal.keys()) == ["c"]


def test_flush_records_frame_text() -> None:
    terminal = HeadlessTerminal(10, 2)
    terminal.surface.put(Coord(0, 0), "hi")

    terminal.flush()
    terminal.close()

    assert terminal.frames == ["hi"]
    assert terminal.closed


@pytest.mark.parametrize("size", [(0, 24), (80, 0), (-1, -1)])
def test_invalid_size_is_rejected(size: tuple[int, int]) -> None:
    with pytest.raises(TerminalSetupError):
        HeadlessTerminal(*size)
