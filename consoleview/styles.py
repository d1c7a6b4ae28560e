"""Colour palettes and formatting of durations and headers."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from consoleview.text import Block, Color, Modifier, Span, Style

_NANOS_PER_SEC = 1_000_000_000
_SECS_PER_MIN = 60
_SECS_PER_HOUR = 60 * 60
_SECS_PER_DAY = 60 * 60 * 24


class Palette(enum.Enum):
    """How many colours the terminal may use."""

    NO_COLORS = "off"
    ANSI8 = "8"
    ANSI16 = "16"
    ANSI256 = "256"
    ALL = "all"


def parse_palette(text: str) -> Palette:
    """Parse a palette name as given on the command line or in a config."""
    value = text.strip()
    fixed = {
        "0": Palette.NO_COLORS,
        "8": Palette.ANSI8,
        "16": Palette.ANSI16,
        "256": Palette.ANSI256,
    }
    if value in fixed:
        return fixed[value]
    lowered = value.lower()
    if lowered == "all":
        return Palette.ALL
    if lowered == "off":
        return Palette.NO_COLORS
    raise ValueError("invalid color palette")


@dataclass(frozen=True)
class ColorToggles:
    """Switches for colouring particular kinds of content."""

    color_durations: bool = True
    color_terminated: bool = True


class DurationKind(enum.Enum):
    """Which units a formatted duration uses."""

    DAYS = "days"
    DAYS_HOURS = "days_hours"
    HOURS_MINUTES = "hours_minutes"
    MINUTES_SECONDS = "minutes_seconds"
    DEBUG = "debug"


@dataclass(frozen=True)
class FormattedDuration:
    """A formatted duration together with the units it was written in."""

    kind: DurationKind
    text: str


def format_duration_debug(nanos: int, precision: int | None = None, width: int = 0) -> str:
    """Format a duration in the smallest fitting unit (s, ms, µs or ns).

    ``precision`` fixes the digits after the point (at most nine), rounding
    half up; ``None`` writes as many as are needed. The result is
    right-aligned to ``width`` characters.
    """
    if nanos < 0:
        raise ValueError("duration must not be negative")
    secs, sub = divmod(nanos, _NANOS_PER_SEC)
    if secs > 0:
        integer, frac, divisor, suffix = secs, sub, 100_000_000, "s"
    elif sub >= 1_000_000:
        integer, frac = divmod(sub, 1_000_000)
        divisor, suffix = 100_000, "ms"
    elif sub >= 1_000:
        integer, frac = divmod(sub, 1_000)
        divisor, suffix = 100, "µs"
    else:
        integer, frac, divisor, suffix = sub, 0, 1, "ns"

    limit = 9 if precision is None else min(precision, 9)
    digits = ""
    while frac > 0 and len(digits) < limit:
        digit, frac = divmod(frac, divisor)
        digits += str(digit)
        divisor //= 10

    if frac > 0 and frac >= divisor * 5:
        if digits:
            bumped = int(digits) + 1
            if bumped >= 10 ** len(digits):
                integer += 1
                bumped = 0
            digits = str(bumped).zfill(len(digits))
        else:
            integer += 1

    shown = len(digits) if precision is None else min(precision, 9)
    digits = digits.ljust(shown, "0")
    text = str(integer) + (f".{digits}" if shown else "") + suffix
    return text.rjust(width)


_SHORT_PALETTE_STYLES = {
    DurationKind.DAYS: Color.BLUE,
    DurationKind.DAYS_HOURS: Color.BLUE,
    DurationKind.HOURS_MINUTES: Color.CYAN,
    DurationKind.MINUTES_SECONDS: Color.GREEN,
}
_SHORT_PALETTE_DEBUG = (
    (("ps",), Color.GRAY),
    (("ns",), Color.GRAY),
    (("µs", "us"), Color.MAGENTA),
    (("ms",), Color.RED),
    (("s",), Color.YELLOW),
)
_WIDE_PALETTE_STYLES = {
    DurationKind.DAYS: Color.indexed(33),  # dodger blue 1
    DurationKind.DAYS_HOURS: Color.indexed(33),  # dodger blue 1
    DurationKind.HOURS_MINUTES: Color.indexed(39),  # deep sky blue 1
    DurationKind.MINUTES_SECONDS: Color.indexed(45),  # turquoise 2
}
_WIDE_PALETTE_DEBUG = (
    (("ps",), Color.indexed(40)),  # green 3
    (("ns",), Color.indexed(41)),  # spring green 3
    (("µs", "us"), Color.indexed(42)),  # spring green 2
    (("ms",), Color.indexed(43)),  # cyan 3
    (("s",), Color.indexed(44)),  # dark turquoise
)

_ANSI8_SUBSTITUTES = {
    Color.LIGHT_RED: Color.RED,
    Color.LIGHT_GREEN: Color.GREEN,
    Color.LIGHT_YELLOW: Color.YELLOW,
    Color.LIGHT_BLUE: Color.BLUE,
    Color.LIGHT_MAGENTA: Color.MAGENTA,
    Color.CYAN: Color.CYAN,
}


def _duration_style(formatted: FormattedDuration, by_kind, by_suffix) -> Style:
    if formatted.kind in by_kind:
        return Style(fg=by_kind[formatted.kind])
    for suffixes, color in by_suffix:
        if formatted.text.endswith(suffixes):
            return Style(fg=color)
    return Style()


@dataclass
class Styles:
    """Display settings: palette, colour toggles and UTF-8 support."""

    palette: Palette = Palette.NO_COLORS
    toggles: ColorToggles = field(default_factory=ColorToggles)
    utf8: bool = False

    def if_utf8(self, utf8: str, ascii: str) -> str:
        return utf8 if self.utf8 else ascii

    def time_units(self, nanos: int, precision: int, width: int | None = None) -> Span:
        """A span holding a formatted duration, coloured by its units.

        The text is right-aligned to ``width``; ``None`` or 0 means no padding.
        """
        formatted = self.duration_text(nanos, width or 0, precision)
        if not self.toggles.color_durations or self.palette is Palette.NO_COLORS:
            return Span(formatted.text)
        if self.palette in (Palette.ANSI8, Palette.ANSI16):
            style = _duration_style(formatted, _SHORT_PALETTE_STYLES, _SHORT_PALETTE_DEBUG)
        else:
            style = _duration_style(formatted, _WIDE_PALETTE_STYLES, _WIDE_PALETTE_DEBUG)
        return Span(formatted.text, style)

    def duration_text(self, nanos: int, width: int, precision: int) -> FormattedDuration:
        """Format a duration, choosing units by its magnitude."""
        secs = nanos // _NANOS_PER_SEC
        leading = max(width - 4, 0)

        if secs >= _SECS_PER_DAY * 100:
            days = secs // _SECS_PER_DAY
            return FormattedDuration(DurationKind.DAYS, f"{str(days).rjust(width)}d")
        if secs >= _SECS_PER_DAY:
            hours = secs // _SECS_PER_HOUR
            text = f"{str(hours // 24).rjust(leading)}d{hours % 24:02d}h"
            return FormattedDuration(DurationKind.DAYS_HOURS, text)
        if secs >= _SECS_PER_HOUR:
            mins = secs // _SECS_PER_MIN
            text = f"{str(mins // 60).rjust(leading)}h{mins % 60:02d}m"
            return FormattedDuration(DurationKind.HOURS_MINUTES, text)
        if secs >= _SECS_PER_MIN:
            text = f"{str(secs // 60).rjust(leading)}m{secs % 60:02d}s"
            return FormattedDuration(DurationKind.MINUTES_SECONDS, text)

        text = format_duration_debug(nanos, precision, width)
        if not self.utf8:
            offset = text.find("µs")
            if offset >= 0:
                text = text[:offset] + "us"
        return FormattedDuration(DurationKind.DEBUG, text)

    def terminated(self) -> Style:
        if not self.toggles.color_terminated:
            return Style()
        return Style().add_modifier(Modifier.DIM)

    def fg(self, color: Color) -> Style:
        resolved = self.color(color)
        return Style(fg=resolved) if resolved is not None else Style()

    def warning_wide(self) -> Span:
        return Span(
            self.if_utf8("\u26A0 ", "/!\\ "),
            self.fg(Color.LIGHT_YELLOW).add_modifier(Modifier.BOLD),
        )

    def warning_narrow(self) -> Span:
        return Span(
            self.if_utf8("\u26A0 ", "! "),
            self.fg(Color.LIGHT_YELLOW).add_modifier(Modifier.BOLD),
        )

    def selected(self, value: str) -> Span:
        cyan = self.color(Color.CYAN)
        if cyan is not None:
            style = Style(fg=cyan)
        else:
            style = Style().remove_modifier(Modifier.REVERSED)
        return Span(value, style)

    def ascending(self, value: str) -> Span:
        return self.selected(value + self.if_utf8("▵", "+"))

    def descending(self, value: str) -> Span:
        return self.selected(value + self.if_utf8("▿", "-"))

    def color(self, color: Color) -> Color | None:
        """The colour to use for ``color`` under this palette, or None."""
        palette = self.palette
        if palette is Palette.NO_COLORS:
            return None
        if palette is Palette.ALL:
            return color
        if palette is Palette.ANSI256:
            return None if color.is_rgb else color
        if color.is_rgb or (palette is Palette.ANSI16 and color.is_indexed):
            return None
        if palette is Palette.ANSI16:
            return color
        return _ANSI8_SUBSTITUTES.get(color, color)

    def border_block(self, title: str | None = None) -> Block:
        if self.utf8:
            return Block(title, bordered=True, rounded=True)
        return Block(title)