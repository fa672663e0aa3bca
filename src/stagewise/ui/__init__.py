"""Drawing surface, widgets, layers and the terminal boundary."""

from .surface import Cell, ColorPair, ColorScheme, Coord, Surface, TextStyle
from .widgets import ArgList, FileList, KeyList, Layer, ListHeader, Text, Widget
from .terminal import HeadlessTerminal, TerminalBackend, TerminalSetupError

__all__ = [
    "Cell",
    "ColorPair",
    "ColorScheme",
    "Coord",
    "Surface",
    "TextStyle",
    "ArgList",
    "FileList",
    "KeyList",
    "Layer",
    "ListHeader",
    "Text",
    "Widget",
    "HeadlessTerminal",
    "TerminalBackend",
    "TerminalSetupError",
]
