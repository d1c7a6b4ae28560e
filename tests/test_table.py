import enum
import weakref

import pytest

from consoleview.controls import UNIVERSAL_CONTROLS
from consoleview.styles import Styles
from consoleview.table import (
    KeyCode,
    KeyEvent,
    TableListState,
    Width,
    view_controls,
)

HEADER = ("ID", "Name", "Total")


class Sort(enum.Enum):
    ID = 0
    TOTAL = 2


class Row:
    def __init__(self, name):
        self.name = name


def make_state(rows=(), sort_by=None):
    state = TableListState(HEADER, Sort, sort_by)
    state.sorted_items.extend(weakref.ref(r) for r in rows)
    return state


def key(char):
    return KeyEvent.for_char(char)


def test_width_grows_and_never_shrinks():
    width = Width(3)
    assert width.update_str("abcdef") == "abcdef"
    assert width.chars() == 6
    width.update_len(2)
    assert width.chars() == 6


def test_width_is_capped_at_100():
    width = Width(5)
    width.update_str("x" * 500)
    assert width.chars() == 100


def test_default_selected_column_follows_sort():
    assert make_state().selected_column == Sort.ID.value
    assert make_state(sort_by=Sort.TOTAL).selected_column == Sort.TOTAL.value


def test_empty_header_rejected():
    with pytest.raises(ValueError):
        TableListState((), Sort)


def test_left_wraps_and_sort_changes():
    state = make_state()
    state.key_input(KeyEvent(KeyCode.LEFT))
    assert state.selected_column == len(HEADER) - 1
    assert state.sort_by is Sort.TOTAL


def test_column_without_sort_keeps_previous_sort():
    state = make_state(sort_by=Sort.TOTAL)
    state.key_input(key("h"))
    assert state.selected_column == 1
    assert state.sort_by is Sort.TOTAL


def test_right_wraps_to_first():
    state = make_state(sort_by=Sort.TOTAL)
    state.key_input(key("l"))
    assert state.selected_column == 0
    assert state.sort_by is Sort.ID


def test_invert_sort():
    state = make_state()
    state.key_input(key("i"))
    assert state.sort_descending is True
    state.key_input(key("i"))
    assert state.sort_descending is False


def test_scroll_on_empty_clears_selection():
    state = make_state()
    state.selected = 3
    state.scroll_next()
    assert state.selected is None


def test_scroll_next_and_prev_wrap():
    rows = [Row(n) for n in "abc"]
    state = make_state(rows)
    for expected in (1, 2, 0):
        state.key_input(KeyEvent(KeyCode.DOWN))
        assert state.selected == expected
    state.key_input(key("k"))
    assert state.selected == len(rows) - 1


def test_gg_and_G():
    rows = [Row(n) for n in "abcd"]
    state = make_state(rows)
    state.key_input(key("G"))
    assert state.selected == len(rows) - 1
    state.key_input(key("g"))
    assert state.selected == len(rows) - 1
    state.key_input(key("g"))
    assert state.selected == 0


def test_g_separated_by_other_key_does_nothing():
    rows = [Row(n) for n in "abcd"]
    state = make_state(rows)
    state.scroll_to_last()
    state.update_input(key("g"))
    state.update_input(key("x"))
    state.update_input(key("g"))
    assert state.selected == len(rows) - 1


def test_non_key_event_ignored():
    state = make_state([Row("a")])
    state.update_input("mouse")
    assert state.selected is None
    assert state.selected_column == 0


def test_selected_item_reversed_when_ascending():
    rows = [Row(n) for n in "abc"]
    state = make_state(rows)
    state.scroll_to_first()
    assert state.selected_item() is rows[-1]
    state.sort_descending = True
    assert state.selected_item() is rows[0]


def test_selected_item_none_cases():
    rows = [Row("a")]
    state = make_state(rows)
    assert state.selected_item() is None
    state.selected = 5
    assert state.selected_item() is None


def test_selected_item_dropped_row():
    state = make_state([Row("gone")])
    state.scroll_to_first()
    assert state.selected_item() is None
    assert len(state) == 1


def test_help_content():
    lines = make_state().help_content(Styles())
    assert lines[0].plain() == "controls:"
    assert len(lines) == 1 + len(view_controls()) + len(UNIVERSAL_CONTROLS)
    assert lines[1].plain() == "  select column (sort) = left, right or h, l"