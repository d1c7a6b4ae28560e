"""Styled text primitives used by the console views."""

from __future__ import annotations

import enum
import unicodedata
from dataclasses import dataclass, field, replace

# Durations are refreshed once a second, so a short width leaves room
# for the unit without pretending to more precision than there is.
DUR_LEN = 6
# Digits after the decimal point for durations shown in a detail list.
DUR_LIST_PRECISION = 2
# Digits after the decimal point for durations shown in a table.
DUR_TABLE_PRECISION = 0
TABLE_HIGHLIGHT_SYMBOL = ">> "


class Modifier(enum.Flag):
    """Text attributes that can be switched on or off."""

    BOLD = enum.auto()
    DIM = enum.auto()
    ITALIC = enum.auto()
    UNDERLINED = enum.auto()
    SLOW_BLINK = enum.auto()
    RAPID_BLINK = enum.auto()
    REVERSED = enum.auto()
    HIDDEN = enum.auto()
    CROSSED_OUT = enum.auto()


@dataclass(frozen=True)
class Color:
    """A terminal colour: a named ANSI colour, a 256-palette index or RGB."""

    kind: str
    value: tuple[int, ...] = ()

    @classmethod
    def indexed(cls, index: int) -> Color:
        if not 0 <= index <= 255:
            raise ValueError(f"colour index out of range: {index}")
        return cls("indexed", (index,))

    @classmethod
    def rgb(cls, red: int, green: int, blue: int) -> Color:
        components = (red, green, blue)
        if any(not 0 <= c <= 255 for c in components):
            raise ValueError(f"RGB component out of range: {components}")
        return cls("rgb", components)

    @property
    def is_indexed(self) -> bool:
        return self.kind == "indexed"

    @property
    def is_rgb(self) -> bool:
        return self.kind == "rgb"


Color.RESET = Color("reset")
Color.BLACK = Color("black")
Color.RED = Color("red")
Color.GREEN = Color("green")
Color.YELLOW = Color("yellow")
Color.BLUE = Color("blue")
Color.MAGENTA = Color("magenta")
Color.CYAN = Color("cyan")
Color.GRAY = Color("gray")
Color.DARK_GRAY = Color("dark_gray")
Color.LIGHT_RED = Color("light_red")
Color.LIGHT_GREEN = Color("light_green")
Color.LIGHT_YELLOW = Color("light_yellow")
Color.LIGHT_BLUE = Color("light_blue")
Color.LIGHT_MAGENTA = Color("light_magenta")
Color.LIGHT_CYAN = Color("light_cyan")
Color.WHITE = Color("white")


@dataclass(frozen=True)
class Style:
    """A foreground colour plus the modifiers to add and to remove."""

    fg: Color | None = None
    modifiers: Modifier = Modifier(0)
    removed: Modifier = Modifier(0)

    def with_fg(self, color: Color | None) -> Style:
        return replace(self, fg=color)

    def add_modifier(self, modifier: Modifier) -> Style:
        return replace(
            self, modifiers=self.modifiers | modifier, removed=self.removed & ~modifier
        )

    def remove_modifier(self, modifier: Modifier) -> Style:
        return replace(
            self, modifiers=self.modifiers & ~modifier, removed=self.removed | modifier
        )


def _char_width(char: str) -> int:
    if unicodedata.combining(char):
        return 0
    return 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1


@dataclass(frozen=True)
class Span:
    """A run of text sharing one style."""

    content: str
    style: Style = Style()

    def width(self) -> int:
        """Number of terminal columns the text occupies."""
        return sum(_char_width(c) for c in self.content)


@dataclass
class Line:
    """A single line of text made of styled spans."""

    spans: list[Span] = field(default_factory=list)

    def width(self) -> int:
        return sum(span.width() for span in self.spans)

    def push_span(self, span: Span) -> None:
        self.spans.append(span)

    def plain(self) -> str:
        """The line's text without styling."""
        return "".join(span.content for span in self.spans)


@dataclass(frozen=True)
class Block:
    """A titled area, optionally drawn with a border."""

    title: str | Line | None = None
    bordered: bool = False
    rounded: bool = False


def bold(text: str) -> Span:
    """A span holding ``text`` in bold."""
    return Span(text, Style().add_modifier(Modifier.BOLD))