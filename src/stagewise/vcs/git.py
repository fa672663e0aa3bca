"""``git`` command-line backend."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import AbstractSet, Sequence

from stagewise.keymaps import COMMIT_FLAGS
from stagewise.runtime import telemetry

from .base import CommandOutcome, GitError

PUSH_OK = "Push Successful!"
PUSH_FAILED = "Push Failed"
COMMIT_OK = "Commit created"
COMMIT_FAILED = "Commit failed"


def parse_porcelain(output: str) -> tuple[list[str], list[str]]:
    """Split ``git status --porcelain -z`` output into (staged, unstaged) paths.

    A path counts as staged when only the index column is set and as unstaged
    when only the worktree column is set; untracked entries are in neither.
    Renames and copies carry their source path as an extra NUL field, which
    is skipped.
    """

    staged: list[str] = []
    unstaged: list[str] = []
    fields = iter(output.split("\0"))
    for entry in fields:
        if len(entry) < 4:
            continue
        index, worktree, path = entry[0], entry[1], entry[3:]
        if index in "RC" or worktree in "RC":
            next(fields, None)
        if worktree == " ":
            staged.append(path)
        elif index == " ":
            unstaged.append(path)
    return staged, unstaged


class GitClient:
    """Runs git against the repository containing ``work_dir``.

    Paths git reports are relative to the repository root, so every command
    runs there, whichever subdirectory the app was started from.
    """

    def __init__(self, work_dir: Path | str, *, executable: str = "git") -> None:
        self.work_dir = Path(work_dir)
        self.executable = executable
        self.logger = telemetry.get_logger("stagewise.vcs")
        self._root: Path | None = None

    @property
    def root(self) -> Path:
        if self._root is None:
            proc = self._invoke(self.work_dir, ("rev-parse", "--show-toplevel"))
            top = proc.stdout.strip() if proc.returncode == 0 else ""
            self._root = Path(top) if top else self.work_dir
        return self._root

    def _run(self, *args: str) -> subprocess.CompletedProcess[str]:
        return self._invoke(self.root, args)

    def _invoke(
        self, cwd: Path, args: Sequence[str]
    ) -> subprocess.CompletedProcess[str]:
        command = [self.executable, "-C", str(cwd), *args]
        with telemetry.span(
            "git::run",
            component="vcs",
            metadata={"command": args[0] if args else ""},
        ) as handle:
            try:
                proc = subprocess.run(
                    command,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.PIPE,
                    text=True,
                    encoding="utf-8",
                    errors="replace",
                    check=False,
                )
            except OSError as exc:
                raise GitError(f"Could not run {self.executable}: {exc}") from exc
            handle.add_metadata("returncode", proc.returncode)
            return proc

    def _query(self, *args: str) -> str:
        proc = self._run(*args)
        if proc.returncode != 0:
            telemetry.record_event(
                "git.query_failed",
                level="warning",
                logger_name="stagewise.vcs",
                data={"args": " ".join(args), "stderr": proc.stderr.strip()},
            )
            return ""
        return proc.stdout

    def list_untracked(self) -> Sequence[str]:
        output = self._query("ls-files", "-z", "--others", "--exclude-standard")
        return [path for path in output.split("\0") if path]

    def _status(self) -> tuple[list[str], list[str]]:
        return parse_porcelain(self._query("status", "--porcelain", "-z"))

    def list_staged(self) -> Sequence[str]:
        return self._status()[0]

    def list_unstaged(self) -> Sequence[str]:
        return self._status()[1]

    def current_branch(self) -> str:
        return self._query("branch", "--show-current").strip()

    def last_commit_message(self) -> str:
        message = self._query("--no-pager", "log", "-1", "--pretty=%B").strip()
        return message.splitlines()[0] if message else ""

    def stage(self, path: str) -> None:
        self._mutate("add", "--", path)

    def unstage(self, path: str) -> None:
        self._mutate("reset", "--", path)

    def _mutate(self, *args: str) -> None:
        proc = self._run(*args)
        if proc.returncode != 0:
            telemetry.record_event(
                "git.command_failed",
                level="warning",
                logger_name="stagewise.vcs",
                data={"args": " ".join(args), "stderr": proc.stderr.strip()},
            )

    def commit(self, flags: AbstractSet[str], message: str) -> CommandOutcome:
        ordered = [flag.short for flag in COMMIT_FLAGS if flag.short in flags]
        proc = self._run("commit", "-m", message, *ordered)
        return self._outcome("commit", proc, COMMIT_OK, COMMIT_FAILED)

    def push(self) -> CommandOutcome:
        proc = self._run("push")
        return self._outcome("push", proc, PUSH_OK, PUSH_FAILED)

    def _outcome(
        self,
        name: str,
        proc: subprocess.CompletedProcess[str],
        ok_status: str,
        failed_status: str,
    ) -> CommandOutcome:
        stderr = proc.stderr or ""
        ok = stderr == ""
        telemetry.record_event(
            f"git.{name}",
            level="info" if ok else "warning",
            logger_name="stagewise.vcs",
            data={"returncode": proc.returncode, "stderr": stderr.strip()},
        )
        return CommandOutcome(
            ok=ok, status=ok_status if ok else failed_status, stderr=stderr
        )


__all__ = [
    "COMMIT_FAILED",
    "COMMIT_OK",
    "GitClient",
    "PUSH_FAILED",
    "PUSH_OK",
    "parse_porcelain",
]
