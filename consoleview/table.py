"""Keyboard-driven state of a sortable, scrollable table."""

from __future__ import annotations

import enum
import weakref
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from consoleview.controls import ControlDisplay, KeyDisplay, controls_paragraph
from consoleview.styles import Styles
from consoleview.text import Line

_MAX_WIDTH = 100


class KeyCode(enum.Enum):
    """Keys the tables respond to; printable keys use ``CHAR``."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    ESC = "esc"
    BACKSPACE = "backspace"
    TAB = "tab"
    CHAR = "char"


@dataclass(frozen=True)
class KeyEvent:
    """A key press."""

    code: KeyCode
    char: str | None = None

    @classmethod
    def for_char(cls, char: str) -> KeyEvent:
        return cls(KeyCode.CHAR, char)


class Width:
    """A column width that grows to fit its content, up to 100 columns."""

    def __init__(self, current: int) -> None:
        self._current = current

    def update_str(self, text: str) -> str:
        """Grow to fit ``text`` and hand it back."""
        self.update_len(len(text))
        return text

    def update_len(self, length: int) -> None:
        # Cap so that one very long value does not swamp the layout.
        self._current = min(max(self._current, length), _MAX_WIDTH)

    def chars(self) -> int:
        return self._current


def view_controls() -> tuple[ControlDisplay, ...]:
    """The controls shared by all table views."""
    return (
        ControlDisplay(
            "select column (sort)",
            (KeyDisplay("left, right", "\u2190\u2192"), KeyDisplay("h, l")),
        ),
        ControlDisplay(
            "scroll",
            (KeyDisplay("up, down", "\u2191\u2193"), KeyDisplay("k, j")),
        ),
        ControlDisplay("view details", (KeyDisplay("enter", "\u21B5"),)),
        ControlDisplay("invert sort (highest/lowest)", (KeyDisplay("i"),)),
        ControlDisplay("scroll to top", (KeyDisplay("gg"),)),
        ControlDisplay("scroll to bottom", (KeyDisplay("G"),)),
    )


@dataclass
class TableListState:
    """Selection, sorting and scroll position of a table.

    ``sort_type`` is an enum whose values are the indices of the columns a
    table can be sorted by. Rows are held through weak references, so rows
    whose owner has gone away drop out of the selection.
    """

    header: Sequence[str]
    sort_type: type[enum.Enum]
    sort_by: Any = None
    sorted_items: list[weakref.ref] = field(default_factory=list)
    selected_column: int = field(init=False)
    sort_descending: bool = False
    selected: int | None = None
    _last_key_event: KeyEvent | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.header:
            raise ValueError("a table needs at least one column")
        if self.sort_by is None:
            self.sort_by = next(iter(self.sort_type))
        self.selected_column = self.sort_by.value

    def __len__(self) -> int:
        return len(self.sorted_items)

    def update_input(self, event: object) -> None:
        """Handle an input event; only key presses have any effect."""
        if isinstance(event, KeyEvent):
            self.key_input(event)

    def key_input(self, event: KeyEvent) -> None:
        last_column = len(self.header) - 1
        code, char = event.code, event.char if event.code is KeyCode.CHAR else None

        if code is KeyCode.LEFT or char == "h":
            self.selected_column = (
                last_column if self.selected_column == 0 else self.selected_column - 1
            )
        elif code is KeyCode.RIGHT or char == "l":
            self.selected_column = (
                0 if self.selected_column == last_column else self.selected_column + 1
            )
        elif char == "i":
            self.sort_descending = not self.sort_descending
        elif code is KeyCode.DOWN or char == "j":
            self.scroll_next()
        elif code is KeyCode.UP or char == "k":
            self.scroll_prev()
        elif char == "G":
            self.scroll_to_last()
        elif char == "g" and self._last_key_event == KeyEvent.for_char("g"):
            self.scroll_to_first()

        try:
            self.sort_by = self.sort_type(self.selected_column)
        except ValueError:
            pass

        self._last_key_event = KeyEvent(event.code, event.char)

    def _scroll_with(self, step) -> None:
        if not self.sorted_items:
            self.selected = None
            return
        current = self.selected if self.selected is not None else 0
        self.selected = step(len(self.sorted_items), current)

    def scroll_next(self) -> None:
        self._scroll_with(lambda n, i: 0 if i >= n - 1 else i + 1)

    def scroll_prev(self) -> None:
        self._scroll_with(lambda n, i: n - 1 if i == 0 else i - 1)

    def scroll_to_last(self) -> None:
        self._scroll_with(lambda n, _: n - 1)

    def scroll_to_first(self) -> None:
        self._scroll_with(lambda _, __: 0)

    def selected_item(self) -> Any | None:
        """The row under the cursor, or None if there is none or it is gone.

        Rows are displayed reversed unless the sort is descending.
        """
        if self.selected is None:
            return None
        count = len(self.sorted_items)
        if self.sort_descending:
            index = self.selected
        else:
            index = count - (self.selected + 1)
        if not 0 <= index < count:
            return None
        return self.sorted_items[index]()

    def help_content(self, styles: Styles) -> list[Line]:
        return controls_paragraph(view_controls(), styles)