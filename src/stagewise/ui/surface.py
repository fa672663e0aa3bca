"""Character-grid drawing surface shared by every widget."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Callable, Iterator, Mapping, Optional


@dataclass(frozen=True, slots=True)
class Coord:
    """Column/row pair; also used for (width, height) sizes."""

    x: int = 0
    y: int = 0

    def __add__(self, other: "Coord") -> "Coord":
        return Coord(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Coord") -> "Coord":
        return Coord(self.x - other.x, self.y - other.y)

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)


class TextStyle(IntFlag):
    NORMAL = 0
    BOLD = 1
    ITALIC = 2
    UNDERLINE = 4


class ColorPair(IntEnum):
    """Named color pairs the terminal defines once at startup."""

    DEFAULT = 1
    H1 = 2
    H2 = 3
    H3 = 4
    SELECTED = 5
    UNTRACKED = 6
    SEPARATOR = 7
    ENABLED = 8


@dataclass(frozen=True, slots=True)
class ColorScheme:
    """Foreground/background color names per pair; ``None`` keeps the terminal default."""

    pairs: Mapping[ColorPair, tuple[Optional[str], Optional[str]]]

    def colors(self, pair: ColorPair) -> tuple[Optional[str], Optional[str]]:
        return self.pairs.get(pair, (None, None))

    @classmethod
    def default(cls) -> "ColorScheme":
        return cls(
            pairs={
                ColorPair.DEFAULT: (None, None),
                ColorPair.H1: ("green", None),
                ColorPair.H2: ("red", None),
                ColorPair.H3: ("blue", None),
                ColorPair.SELECTED: ("black", "white"),
                ColorPair.UNTRACKED: ("magenta", None),
                ColorPair.SEPARATOR: ("black", "blue"),
                ColorPair.ENABLED: ("yellow", None),
            }
        )


@dataclass(slots=True)
class Cell:
    char: str = " "
    style: TextStyle = TextStyle.NORMAL
    color: ColorPair = ColorPair.DEFAULT


@dataclass(slots=True)
class DrawState:
    style: TextStyle = TextStyle.NORMAL
    color: ColorPair = ColorPair.DEFAULT


class Surface:
    """Fixed-size grid of cells plus the current drawing attributes.

    Writes outside the grid are clipped. Attributes are changed only through
    :meth:`styled`, which restores whatever was active before it on exit.
    """

    def __init__(
        self,
        columns: int,
        rows: int,
        *,
        on_flush: Callable[["Surface"], None] | None = None,
    ) -> None:
        self.columns = columns
        self.rows = rows
        self.state = DrawState()
        self.frames = 0
        self._on_flush = on_flush
        self._cells: list[list[Cell]] = []
        self.clear()

    @property
    def size(self) -> Coord:
        return Coord(self.columns, self.rows)

    def resize(self, columns: int, rows: int) -> None:
        self.columns = columns
        self.rows = rows
        self.clear()

    def clear(self) -> None:
        self._cells = [
            [Cell() for _ in range(self.columns)] for _ in range(self.rows)
        ]

    def flush(self) -> None:
        self.frames += 1
        if self._on_flush is not None:
            self._on_flush(self)

    @contextmanager
    def styled(
        self,
        style: TextStyle = TextStyle.NORMAL,
        color: ColorPair | None = None,
    ) -> Iterator[DrawState]:
        saved = DrawState(self.state.style, self.state.color)
        self.state.style = saved.style | style
        if color is not None:
            self.state.color = color
        try:
            yield self.state
        finally:
            self.state.style = saved.style
            self.state.color = saved.color

    def put(self, origin: Coord, text: str) -> None:
        if not 0 <= origin.y < self.rows:
            return
        row = self._cells[origin.y]
        for offset, char in enumerate(text):
            x = origin.x + offset
            if x >= self.columns:
                break
            if x < 0:
                continue
            row[x] = Cell(char, self.state.style, self.state.color)

    def cell(self, at: Coord) -> Optional[Cell]:
        if 0 <= at.y < self.rows and 0 <= at.x < self.columns:
            return self._cells[at.y][at.x]
        return None

    def recolor(self, at: Coord, color: ColorPair) -> None:
        """Swap the color of one cell, keeping its character and style."""

        cell = self.cell(at)
        if cell is not None:
            cell.color = color

    def rows_of_cells(self) -> list[list[Cell]]:
        return self._cells

    def line(self, row: int) -> str:
        return "".join(cell.char for cell in self._cells[row]).rstrip()

    def lines(self) -> list[str]:
        return [self.line(row) for row in range(self.rows)]

    def text(self) -> str:
        return "\n".join(self.lines()).rstrip("\n")


__all__ = [
    "Cell",
    "ColorPair",
    "ColorScheme",
    "Coord",
    "DrawState",
    "Surface",
    "TextStyle",
]
