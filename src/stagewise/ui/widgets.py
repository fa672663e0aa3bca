"""Retained-mode widgets and the layer that composes them.

Every widget answers two questions: how big it is when drawn at the origin
(``size``) and how to draw itself with its top-left corner at a given point
(``render``). Widgets never hold a reference to the layer that owns them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Sequence

from .surface import ColorPair, Coord, Surface, TextStyle


class Widget(Protocol):
    def size(self) -> Coord: ...

    def render(self, surface: Surface, origin: Coord) -> None: ...


def _widest(lines: Sequence[str]) -> int:
    return max((len(line) for line in lines), default=0)


@dataclass(slots=True)
class Text:
    """A single line of styled text."""

    content: str = ""
    style: TextStyle = TextStyle.NORMAL
    color: ColorPair = ColorPair.DEFAULT

    def size(self) -> Coord:
        return Coord(len(self.content), 1 if self.content else 0)

    def render(self, surface: Surface, origin: Coord) -> None:
        with surface.styled(self.style, self.color):
            surface.put(origin, self.content)


@dataclass(slots=True)
class FileList:
    """One path per line, all in the same style."""

    paths: Sequence[str] = ()
    style: TextStyle = TextStyle.NORMAL
    color: ColorPair = ColorPair.DEFAULT

    def __len__(self) -> int:
        return len(self.paths)

    def size(self) -> Coord:
        return Coord(_widest(self.paths), len(self.paths))

    def render(self, surface: Surface, origin: Coord) -> None:
        with surface.styled(self.style, self.color):
            for row, path in enumerate(self.paths):
                surface.put(origin + Coord(0, row), path)


@dataclass(slots=True)
class ArgEntry:
    flag: str
    description: str
    longform: str
    enabled: bool = False

    def formatted(self) -> str:
        return f"{self.flag} {self.description} ({self.longform})"


@dataclass(slots=True)
class ArgList:
    """Toggleable command-line flags shown as ``<flag> <description> (<longform>)``.

    The short flag is drawn in the untracked color and turns bold when the
    entry is enabled; the long form switches to the enabled color.
    """

    entries: list[ArgEntry] = field(default_factory=list)

    def push_arg(self, flag: str, description: str, longform: str) -> None:
        self.entries.append(ArgEntry(flag, description, longform))

    def toggle(self, flag: str) -> bool:
        for entry in self.entries:
            if entry.flag == flag:
                entry.enabled = not entry.enabled
                return entry.enabled
        raise KeyError(f"Unknown flag '{flag}'")

    def enabled_flags(self) -> tuple[str, ...]:
        return tuple(entry.flag for entry in self.entries if entry.enabled)

    def size(self) -> Coord:
        return Coord(
            _widest([entry.formatted() for entry in self.entries]), len(self.entries)
        )

    def render(self, surface: Surface, origin: Coord) -> None:
        for row, entry in enumerate(self.entries):
            at = origin + Coord(0, row)
            flag_style = TextStyle.BOLD if entry.enabled else TextStyle.NORMAL
            with surface.styled(flag_style, ColorPair.UNTRACKED):
                surface.put(at, entry.flag)
            description_at = at + Coord(len(entry.flag) + 1, 0)
            surface.put(description_at, entry.description)
            paren_at = description_at + Coord(len(entry.description) + 1, 0)
            surface.put(paren_at, "(")
            long_color = ColorPair.ENABLED if entry.enabled else ColorPair.H3
            with surface.styled(color=long_color):
                surface.put(paren_at + Coord(1, 0), entry.longform)
            surface.put(paren_at + Coord(len(entry.longform) + 1, 0), ")")


@dataclass(slots=True)
class KeyList:
    """Chord/description pairs, one per line."""

    entries: list[tuple[str, str]] = field(default_factory=list)

    def push_key(self, chord: str, description: str) -> None:
        self.entries.append((chord, description))

    def size(self) -> Coord:
        return Coord(
            _widest([f"{chord} {desc}" for chord, desc in self.entries]),
            len(self.entries),
        )

    def render(self, surface: Surface, origin: Coord) -> None:
        for row, (chord, description) in enumerate(self.entries):
            at = origin + Coord(0, row)
            with surface.styled(color=ColorPair.UNTRACKED):
                surface.put(at, chord)
            surface.put(at + Coord(len(chord) + 1, 0), description)


@dataclass(slots=True)
class ListHeader:
    """Bold title followed by the item count in parentheses."""

    title: Text = field(
        default_factory=lambda: Text(style=TextStyle.BOLD, color=ColorPair.H3)
    )
    amount: Text = field(default_factory=Text)

    @classmethod
    def of(cls, title: str, amount: int) -> "ListHeader":
        header = cls()
        header.set_title(title)
        header.set_amount(amount)
        return header

    def set_title(self, title: str) -> None:
        self.title.content = title

    def set_amount(self, amount: int) -> None:
        self.amount.content = f"({amount})"

    def size(self) -> Coord:
        return Coord(self.title.size().x + self.amount.size().x + 1, 1)

    def render(self, surface: Surface, origin: Coord) -> None:
        self.title.render(surface, origin)
        self.amount.render(surface, origin + Coord(self.title.size().x + 1, 0))


@dataclass(slots=True)
class Layer:
    """Named group of widgets at fixed offsets, drawn or hidden as a unit."""

    name: str = ""
    visible: bool = True
    children: list[tuple[Widget, Coord]] = field(default_factory=list)

    def push(self, widget: Widget, offset: Coord) -> None:
        self.children.append((widget, offset))

    def __len__(self) -> int:
        return len(self.children)

    def size(self) -> Coord:
        min_x = min_y = max_x = max_y = 0
        for widget, offset in self.children:
            extent = offset + widget.size()
            min_x = min(min_x, offset.x)
            min_y = min(min_y, offset.y)
            max_x = max(max_x, extent.x)
            max_y = max(max_y, extent.y)
        return Coord(max_x - min_x, max_y - min_y)

    def render(self, surface: Surface, origin: Coord) -> None:
        if not self.visible:
            return
        for widget, offset in self.children:
            widget.render(surface, origin + offset)


__all__ = [
    "ArgEntry",
    "ArgList",
    "FileList",
    "KeyList",
    "Layer",
    "ListHeader",
    "Text",
    "Widget",
]
