"""Builders that turn repository state into freshly composed layers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from stagewise.keymaps import (
    COMMIT_FLAGS,
    COMMITTING_MODE,
    STAGING_MODE,
    KeymapRegistry,
    describe,
)

from .surface import ColorPair, Coord, TextStyle
from .widgets import ArgList, FileList, KeyList, Layer, ListHeader, Text

FILE_INDENT = 2


@dataclass(frozen=True, slots=True)
class RepoSnapshot:
    """Everything the status layer shows, fetched once per rebuild."""

    branch: str = ""
    last_commit: str = ""
    untracked: tuple[str, ...] = ()
    staged: tuple[str, ...] = ()
    unstaged: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class FileSpan:
    """A file list and the row/column where its first path is drawn."""

    origin: Coord
    paths: tuple[str, ...] = ()

    @property
    def end_row(self) -> int:
        return self.origin.y + len(self.paths)

    def contains(self, row: int) -> bool:
        return self.origin.y <= row < self.end_row

    def path_at(self, row: int) -> Optional[str]:
        if not self.contains(row):
            return None
        return self.paths[row - self.origin.y]


@dataclass(frozen=True, slots=True)
class FileAnchors:
    untracked: FileSpan
    staged: FileSpan
    unstaged: FileSpan

    def spans(self) -> tuple[FileSpan, FileSpan, FileSpan]:
        return (self.untracked, self.staged, self.unstaged)

    def path_at(self, row: int) -> Optional[str]:
        """First span (untracked, staged, unstaged) whose rows contain ``row``."""

        for span in self.spans():
            if span.contains(row):
                return span.path_at(row)
        return None

    def first_row(self) -> Optional[int]:
        for span in self.spans():
            if span.paths:
                return span.origin.y
        return None

    def last_row(self) -> Optional[int]:
        for span in reversed(self.spans()):
            if span.paths:
                return span.end_row - 1
        return None

    @property
    def end_row(self) -> int:
        return self.unstaged.end_row


@dataclass(frozen=True, slots=True)
class StatusLayout:
    layer: Layer
    anchors: FileAnchors

    @property
    def message_origin(self) -> Coord:
        """Where transient statuses (push result and the like) are drawn."""

        return Coord(0, self.anchors.end_row + 1)


def build_status_layer(snapshot: RepoSnapshot) -> StatusLayout:
    layer = Layer(name="status")

    head = Text("Head:    ")
    branch = Text(snapshot.branch, color=ColorPair.H3)
    last_commit = Text(snapshot.last_commit)

    untracked = FileList(snapshot.untracked, color=ColorPair.UNTRACKED)
    staged = FileList(snapshot.staged, style=TextStyle.BOLD)
    unstaged = FileList(snapshot.unstaged, style=TextStyle.BOLD)

    untracked_header = Coord(0, 2)
    untracked_at = Coord(FILE_INDENT, untracked_header.y + 1)
    staged_header = Coord(0, untracked_at.y + len(untracked) + 1)
    staged_at = Coord(FILE_INDENT, staged_header.y + 1)
    unstaged_header = Coord(0, staged_at.y + len(staged) + 1)
    unstaged_at = Coord(FILE_INDENT, unstaged_header.y + 1)

    layer.push(head, Coord(0, 0))
    layer.push(branch, Coord(head.size().x, 0))
    layer.push(last_commit, Coord(head.size().x + branch.size().x + 1, 0))
    layer.push(ListHeader.of("Untracked Files", len(untracked)), untracked_header)
    layer.push(untracked, untracked_at)
    layer.push(ListHeader.of("Staged changes", len(staged)), staged_header)
    layer.push(staged, staged_at)
    layer.push(ListHeader.of("Unstaged changes", len(unstaged)), unstaged_header)
    layer.push(unstaged, unstaged_at)

    anchors = FileAnchors(
        untracked=FileSpan(untracked_at, snapshot.untracked),
        staged=FileSpan(staged_at, snapshot.staged),
        unstaged=FileSpan(unstaged_at, snapshot.unstaged),
    )
    return StatusLayout(layer=layer, anchors=anchors)


def build_arg_list(enabled: Sequence[str] = ()) -> ArgList:
    args = ArgList()
    for flag in COMMIT_FLAGS:
        args.push_arg(flag.short, flag.description, flag.long)
    for short in enabled:
        args.toggle(short)
    return args


def build_pre_commit_layer(enabled: Sequence[str], columns: int) -> Layer:
    """Flag picker drawn over the bottom of the status layer."""

    layer = Layer(name="pre_commit")
    args = build_arg_list(enabled)
    below_args = 4 + args.size().y

    layer.push(Text("=" * columns, color=ColorPair.SEPARATOR), Coord(0, 0))
    layer.push(Text("Arguments", color=ColorPair.H3), Coord(0, 2))
    layer.push(Text("Create", color=ColorPair.H3), Coord(0, below_args))
    layer.push(Text("c", color=ColorPair.UNTRACKED), Coord(1, below_args + 1))
    layer.push(Text("Commit"), Coord(3, below_args + 1))
    layer.push(args, Coord(1, 3))
    return layer


def build_commit_message_layer(message: str, files: Sequence[str]) -> Layer:
    layer = Layer(name="commit_message")
    layer.push(
        Text("Please enter the commit message for your changes.", color=ColorPair.H3),
        Coord(0, 0),
    )
    layer.push(Text(" > ", color=ColorPair.H3), Coord(0, 1))
    layer.push(Text(message, color=ColorPair.H1), Coord(3, 1))
    layer.push(
        Text("Changes to be committed:", style=TextStyle.BOLD, color=ColorPair.H3),
        Coord(0, 3),
    )
    layer.push(FileList(tuple(files), color=ColorPair.UNTRACKED), Coord(1, 4))
    return layer


def build_key_list(registry: KeymapRegistry, mode: str) -> KeyList:
    keys = KeyList()
    for binding in registry.iter_bindings(mode):
        keys.push_key(binding.spec, describe(binding.action))
    return keys


def build_help_layer(registry: KeymapRegistry) -> Layer:
    layer = Layer(name="help")
    staging = build_key_list(registry, STAGING_MODE)
    committing = build_key_list(registry, COMMITTING_MODE)
    committing_header = 2 + staging.size().y

    layer.push(Text("Staging", style=TextStyle.BOLD, color=ColorPair.H3), Coord(0, 0))
    layer.push(staging, Coord(1, 1))
    layer.push(
        Text("Committing", style=TextStyle.BOLD, color=ColorPair.H3),
        Coord(0, committing_header),
    )
    layer.push(committing, Coord(1, committing_header + 1))
    layer.push(
        Text("Press any key to return"),
        Coord(0, committing_header + committing.size().y + 2),
    )
    return layer


__all__ = [
    "FileAnchors",
    "FileSpan",
    "RepoSnapshot",
    "StatusLayout",
    "build_arg_list",
    "build_commit_message_layer",
    "build_help_layer",
    "build_key_list",
    "build_pre_commit_layer",
    "build_status_layer",
]
