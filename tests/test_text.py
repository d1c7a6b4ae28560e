import pytest

from consoleview.text import (
    Block,
    Color,
    Line,
    Modifier,
    Span,
    Style,
    bold,
)


def test_add_modifier_sets_flag():
    style = Style().add_modifier(Modifier.BOLD)
    assert Modifier.BOLD in style.modifiers
    assert Modifier.BOLD not in style.removed


def test_remove_modifier_moves_flag_to_removed():
    style = Style().add_modifier(Modifier.BOLD).remove_modifier(Modifier.BOLD)
    assert Modifier.BOLD not in style.modifiers
    assert Modifier.BOLD in style.removed


def test_add_after_remove_clears_removed():
    style = Style().remove_modifier(Modifier.REVERSED).add_modifier(Modifier.REVERSED)
    assert Modifier.REVERSED in style.modifiers
    assert Modifier.REVERSED not in style.removed


def test_style_is_immutable_value():
    base = Style()
    changed = base.add_modifier(Modifier.DIM)
    assert base == Style()
    assert changed != base


def test_with_fg_sets_colour():
    style = Style().with_fg(Color.RED)
    assert style.fg == Color.RED
    assert style.modifiers == Modifier(0)


def test_indexed_colour():
    color = Color.indexed(33)
    assert color.is_indexed
    assert color.value == (33,)
    assert color == Color.indexed(33)


def test_rgb_colour():
    color = Color.rgb(10, 20, 30)
    assert color.is_rgb
    assert color.value == (10, 20, 30)


@pytest.mark.parametrize("index", [-1, 256])
def test_indexed_out_of_range(index):
    with pytest.raises(ValueError):
        Color.indexed(index)


def test_rgb_out_of_range():
    with pytest.raises(ValueError):
        Color.rgb(0, 300, 0)


def test_named_colours_differ():
    assert Color.RED != Color.LIGHT_RED
    assert Color.CYAN == Color("cyan")


def test_span_width_ascii():
    assert Span("controls: ").width() == len("controls: ")


def test_span_width_wide_characters():
    assert Span("漢字").width() == 4


def test_line_width_sums_spans():
    line = Line([Span("ab"), Span("cde")])
    assert line.width() == Span("ab").width() + Span("cde").width()


def test_push_span_and_plain():
    line = Line([Span("controls: ")])
    line.push_span(Span(", "))
    line.push_span(bold("quit"))
    assert line.plain() == "controls: , quit"
    assert len(line.spans) == 3


def test_empty_line():
    assert Line().width() == 0
    assert Line().plain() == ""


def test_bold():
    span = bold("ID: ")
    assert span.content == "ID: "
    assert Modifier.BOLD in span.style.modifiers


def test_block_defaults():
    block = Block("Help")
    assert block.title == "Help"
    assert not block.bordered