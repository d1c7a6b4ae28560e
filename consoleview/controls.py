"""The bar of key bindings shown above each view."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from consoleview.styles import Styles
from consoleview.text import Line, Span, bold


@dataclass(frozen=True)
class KeyDisplay:
    """A key as shown to the user.

    ``base`` is plain ASCII; ``utf8``, when given, is a richer form used
    on terminals that support UTF-8.
    """

    base: str
    utf8: str | None = None


@dataclass(frozen=True)
class ControlDisplay:
    """An action together with the keys that trigger it."""

    action: str
    keys: tuple[KeyDisplay, ...]

    def to_spans(self, styles: Styles, indent: int = 0) -> Line:
        """Render as ``<indent><action> = <key> or <key>``."""
        spans = [Span(" " * indent), Span(self.action), Span(" = ")]
        for idx, key in enumerate(self.keys):
            if idx > 0:
                spans.append(Span(" or "))
            text = key.base if key.utf8 is None else styles.if_utf8(key.utf8, key.base)
            spans.append(bold(text))
        return Line(spans)


UNIVERSAL_CONTROLS: tuple[ControlDisplay, ...] = (
    ControlDisplay("toggle pause", (KeyDisplay("space"),)),
    ControlDisplay("quit", (KeyDisplay("q"),)),
)
"""Controls available in every view."""


class Controls:
    """The controls of a view, wrapped into lines no wider than ``width``."""

    def __init__(
        self, view_controls: Sequence[ControlDisplay], width: int, styles: Styles
    ) -> None:
        items = [c.to_spans(styles, 0) for c in (*view_controls, *UNIVERSAL_CONTROLS)]
        lines = [Line([Span("controls: ")])]
        separator = Span(", ")

        for idx, item in enumerate(items):
            current = lines[-1]
            # The first item on a line always goes there, even when it is
            # wider than the line: there is nothing better to do with it.
            if idx == 0 or current.width() == 0:
                current.spans.extend(item.spans)
                continue

            total = current.width() + separator.width() + item.width()
            current.push_span(separator)
            if total <= width:
                current.spans.extend(item.spans)
            else:
                lines.append(item)

        self.lines: list[Line] = lines

    def height(self) -> int:
        """Number of lines the controls occupy."""
        return len(self.lines)


def controls_paragraph(
    view_controls: Sequence[ControlDisplay], styles: Styles
) -> list[Line]:
    """The controls as a list, one per line, for the help popup."""
    lines = [Line([Span("controls:")])]
    lines.extend(c.to_spans(styles, 2) for c in view_controls)
    lines.extend(c.to_spans(styles, 2) for c in UNIVERSAL_CONTROLS)
    return lines