from __future__ import annotations

from stagewise.actions.staging import PUSHING
from stagewise.keymaps import Action
from stagewise.modes import Panel
from stagewise.runtime.orchestrator import CURSOR_START, Orchestrator
from stagewise.ui import ColorPair, Coord, HeadlessTerminal
from stagewise.vcs.git import COMMIT_FAILED, PUSH_FAILED, PUSH_OK

from conftest import FakeVcs


def make_app(vcs: FakeVcs, terminal: HeadlessTerminal) -> Orchestrator:
    app = Orchestrator(vcs, terminal)
    app.render()
    return app


def press(app: Orchestrator, keys) -> list[Action]:
    return [app.step(key) for key in keys]


def test_initial_frame_shows_status(vcs, terminal) -> None:
    app = make_app(vcs, terminal)

    assert app.panel is Panel.STAGING
    assert app.cursor == CURSOR_START
    assert terminal.surface.line(0) == "Head:    main Initial commit"
    assert terminal.surface.line(6) == "  a.py"


def test_cursor_moves_freely_and_selects_paths(vcs, terminal) -> None:
    app = make_app(vcs, terminal)
    assert app.selected_path() is None

    press(app, "j")
    assert app.selected_path() == "new.txt"

    press(app, "kkkk")
    assert app.cursor == Coord(2, -1)
    assert app.selected_path() is None


def test_buffer_start_and_end_jump_to_file_rows(vcs, terminal) -> None:
    app = make_app(vcs, terminal)

    press(app, "G")
    assert app.cursor.y == 10
    assert app.selected_path() == "c.py"

    press(app, "gg")
    assert app.cursor.y == 3
    assert app.selected_path() == "new.txt"


def test_stage_moves_selected_file_into_staged_list(vcs, terminal) -> None:
    app = make_app(vcs, terminal)

    press(app, "js")

    assert vcs.staged == ["a.py", "b.py", "new.txt"]
    assert terminal.surface.line(2) == "Untracked Files (0)"
    assert terminal.surface.line(4) == "Staged changes (3)"


def test_unstage_selected_staged_file(vcs, terminal) -> None:
    app = make_app(vcs, terminal)

    press(app, "jjjj")
    assert app.selected_path() == "a.py"
    press(app, "u")

    assert vcs.staged == ["b.py"]
    assert vcs.unstaged == ["c.py", "a.py"]


def test_stage_on_empty_row_does_nothing(vcs, terminal) -> None:
    app = make_app(vcs, terminal)

    press(app, "s")

    assert vcs.staged == ["a.py", "b.py"]


def test_stage_all_takes_untracked_and_unstaged(vcs, terminal) -> None:
    app = make_app(vcs, terminal)

    press(app, "S")

    assert vcs.staged == ["a.py", "b.py", "new.txt", "c.py"]
    assert vcs.untracked == []
    assert vcs.unstaged == []


def test_provisional_key_skips_rebuild(vcs, terminal) -> None:
    app = make_app(vcs, terminal)
    fetches = vcs.fetches

    assert app.step("g") is Action.MATCHING
    assert vcs.fetches == fetches

    app.step("x")
    assert vcs.fetches == fetches + 1


def test_commit_uses_message_and_enabled_flags(vcs, terminal) -> None:
    app = make_app(vcs, terminal)

    press(app, "c-ac")
    assert app.panel is Panel.COMMIT_MESSAGE
    press(app, "fix bug")
    press(app, ["\x7f", "\n"])

    assert vcs.commits == [(frozenset({"-a"}), "fix bu")]
    assert app.panel is Panel.STAGING
    assert app.flags.stage_all
    assert app.panels.message == ""


def test_commit_message_lists_files_to_commit(vcs, terminal) -> None:
    app = make_app(vcs, terminal)

    press(app, "cc")
    assert terminal.surface.line(4) == " a.py"
    assert terminal.surface.line(5) == " b.py"
    assert terminal.surface.line(6) == ""

    press(app, ["\x1b", "-", "a", "c"])
    assert terminal.surface.line(6) == " c.py"


def test_failed_commit_shows_status(vcs, terminal) -> None:
    vcs.commit_error = "nothing to commit"
    app = make_app(vcs, terminal)

    press(app, ["c", "c", "x", "\n"])

    assert app.status_message == COMMIT_FAILED
    assert terminal.surface.line(12) == COMMIT_FAILED


def test_committing_panel_draws_flag_picker_at_bottom(vcs, terminal) -> None:
    app = make_app(vcs, terminal)

    press(app, "c")

    assert terminal.surface.line(12) == "=" * 80
    assert terminal.surface.line(14) == "Arguments"
    assert terminal.surface.line(0) == "Head:    main Initial commit"

    press(app, ["\x1b"])
    assert app.panel is Panel.STAGING
    assert terminal.surface.line(12) == ""


def test_push_flushes_notice_then_result(vcs, terminal) -> None:
    app = make_app(vcs, terminal)
    frames = len(terminal.frames)

    press(app, "p")

    assert vcs.pushes == 1
    assert len(terminal.frames) == frames + 2
    assert PUSHING in terminal.frames[-2].splitlines()[12]
    assert terminal.surface.line(12) == PUSH_OK


def test_push_result_is_transient(vcs, terminal) -> None:
    app = make_app(vcs, terminal)

    press(app, "pj")

    assert app.status_message == ""
    assert terminal.surface.line(12) == ""


def test_failed_push_reports_failure(vcs, terminal) -> None:
    vcs.push_error = "rejected"
    app = make_app(vcs, terminal)

    press(app, "p")

    assert app.status_message == PUSH_FAILED


def test_cursor_cell_is_recolored(vcs, terminal) -> None:
    app = make_app(vcs, terminal)

    press(app, "j")

    assert terminal.surface.cell(Coord(2, 3)).color is ColorPair.SELECTED
    assert terminal.surface.cell(Coord(3, 3)).color is ColorPair.UNTRACKED


def test_help_panel_replaces_status_until_any_key(vcs, terminal) -> None:
    app = make_app(vcs, terminal)

    press(app, "?")
    assert app.panel is Panel.HELP
    assert terminal.surface.line(0) == "Staging"
    assert terminal.surface.cell(CURSOR_START).color is not ColorPair.SELECTED

    press(app, [None])
    assert app.panel is Panel.STAGING
    assert terminal.surface.line(0).startswith("Head:")


def test_undecodable_key_is_ignored(vcs, terminal) -> None:
    app = make_app(vcs, terminal)

    assert app.step(None) is Action.ERROR
    assert app.running
    assert app.cursor == CURSOR_START


def test_quit_closes_terminal(vcs, terminal) -> None:
    app = make_app(vcs, terminal)
    frames = len(terminal.frames)

    assert app.step("q") is Action.EXIT

    assert not app.running
    assert terminal.closed
    assert len(terminal.frames) == frames


def test_escape_in_staging_also_quits(vcs, terminal) -> None:
    app = make_app(vcs, terminal)

    app.step(27)

    assert terminal.closed


def test_run_stops_at_quit(vcs) -> None:
    terminal = HeadlessTerminal(80, 24, keys=["j", "q", "S"])
    app = Orchestrator(vcs, terminal)

    app.run(terminal.keys())

    assert terminal.closed
    assert app.cursor == Coord(2, 3)
    assert vcs.staged == ["a.py", "b.py"]
    assert vcs.untracked == ["new.txt"]


def test_second_push_is_ignored_while_first_is_running(vcs, terminal) -> None:
    pending = []
    app = Orchestrator(
        vcs, terminal, run_blocking=lambda call, done: pending.append((call, done))
    )
    app.render()

    press(app, "pjp")

    assert len(pending) == 1
    assert vcs.pushes == 0
    assert terminal.surface.line(12) == PUSHING

    call, done = pending[0]
    done(call())
    app.refresh()

    assert vcs.pushes == 1
    assert not app.push_pending
    assert terminal.surface.line(12) == PUSH_OK
