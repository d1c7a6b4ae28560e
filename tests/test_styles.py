import pytest

from consoleview.styles import (
    ColorToggles,
    DurationKind,
    Palette,
    Styles,
    format_duration_debug,
    parse_palette,
)
from consoleview.text import Color, Modifier, Style

SEC = 1_000_000_000
DAY = 86_400 * SEC
HOUR = 3_600 * SEC
MINUTE = 60 * SEC


@pytest.mark.parametrize(
    "text,expected",
    [
        ("0", Palette.NO_COLORS),
        ("8", Palette.ANSI8),
        (" 16 ", Palette.ANSI16),
        ("256", Palette.ANSI256),
        ("ALL", Palette.ALL),
        ("Off", Palette.NO_COLORS),
    ],
)
def test_parse_palette(text, expected):
    assert parse_palette(text) is expected


def test_parse_palette_invalid():
    with pytest.raises(ValueError, match="invalid color palette"):
        parse_palette("bogus")


def test_palette_serialized_names():
    assert Palette("off") is Palette.NO_COLORS
    assert Palette("all") is Palette.ALL


def test_default_palette_is_no_colors():
    assert Styles().palette is Palette.NO_COLORS


@pytest.mark.parametrize(
    "nanos,kind,text",
    [
        (102 * DAY, DurationKind.DAYS, "102d"),
        (12 * DAY + 3 * HOUR, DurationKind.DAYS_HOURS, "12d03h"),
        (14 * HOUR + 32 * MINUTE, DurationKind.HOURS_MINUTES, "14h32m"),
        (43 * MINUTE + 2 * SEC, DurationKind.MINUTES_SECONDS, "43m02s"),
    ],
)
def test_duration_text_units(nanos, kind, text):
    formatted = Styles().duration_text(nanos, 0, 0)
    assert formatted.kind is kind
    assert formatted.text == text


def test_duration_text_debug_examples():
    styles = Styles(utf8=True)
    assert styles.duration_text(628_760_000, 0, 2).text == "628.76ms"
    assert styles.duration_text(32, 0, 0).text == "32ns"
    assert styles.duration_text(32, 0, 0).kind is DurationKind.DEBUG


def test_duration_text_pads_to_width():
    formatted = Styles().duration_text(12 * DAY + 3 * HOUR, 6, 0)
    assert formatted.text == "12d03h"
    for nanos in (5 * MINUTE, 2 * HOUR, 3 * SEC, 400_000):
        assert len(Styles(utf8=True).duration_text(nanos, 6, 0).text) == 6


def test_micro_sign_replaced_without_utf8():
    utf8 = Styles(utf8=True).duration_text(544_770, 0, 2).text
    ascii_text = Styles(utf8=False).duration_text(544_770, 0, 2).text
    assert utf8 == "544.77µs"
    assert ascii_text == utf8.replace("µs", "us")


def test_format_duration_debug_rounds_half_up():
    assert format_duration_debug(1_999_999_999, 2) == "2.00s"


def test_format_duration_debug_natural_precision():
    assert format_duration_debug(1_500_000_000) == "1.5s"


def test_format_duration_debug_precision_pads_with_zeros():
    text = format_duration_debug(3 * SEC, 2)
    assert text.startswith("3.")
    assert len(text.split(".")[1]) == len("00s")


def test_format_duration_debug_width():
    assert format_duration_debug(32, 0, 6).strip() == "32ns"
    assert len(format_duration_debug(32, 0, 6)) == 6


def test_format_duration_debug_negative():
    with pytest.raises(ValueError):
        format_duration_debug(-1)


def test_time_units_no_colors():
    span = Styles().time_units(628_760_000, 2)
    assert span.content == "628.76ms"
    assert span.style == Style()


def test_time_units_toggle_off():
    styles = Styles(palette=Palette.ALL, toggles=ColorToggles(color_durations=False))
    assert styles.time_units(102 * DAY, 0).style == Style()


def test_time_units_ansi256_days():
    span = Styles(palette=Palette.ANSI256).time_units(102 * DAY, 0)
    assert span.style.fg == Color.indexed(33)


def test_time_units_ansi8_colours():
    styles = Styles(palette=Palette.ANSI8, utf8=True)
    assert styles.time_units(628_760_000, 2).style.fg == Color.RED
    assert styles.time_units(544_770, 2).style.fg == Color.MAGENTA
    assert styles.time_units(32, 0).style.fg == Color.GRAY
    assert styles.time_units(3 * SEC, 0).style.fg == Color.YELLOW
    assert styles.time_units(14 * HOUR, 0).style.fg == Color.CYAN


def test_time_units_width_none_equals_zero():
    styles = Styles(utf8=True)
    assert styles.time_units(32, 0, None) == styles.time_units(32, 0, 0)


def test_color_matrix():
    assert Styles(palette=Palette.NO_COLORS).color(Color.RED) is None
    assert Styles(palette=Palette.ALL).color(Color.rgb(1, 2, 3)) == Color.rgb(1, 2, 3)
    assert Styles(palette=Palette.ANSI256).color(Color.rgb(1, 2, 3)) is None
    assert Styles(palette=Palette.ANSI256).color(Color.indexed(40)) == Color.indexed(40)
    assert Styles(palette=Palette.ANSI16).color(Color.indexed(40)) is None
    assert Styles(palette=Palette.ANSI16).color(Color.LIGHT_RED) == Color.LIGHT_RED
    assert Styles(palette=Palette.ANSI8).color(Color.rgb(1, 2, 3)) is None


@pytest.mark.parametrize(
    "light,base",
    [
        (Color.LIGHT_RED, Color.RED),
        (Color.LIGHT_GREEN, Color.GREEN),
        (Color.LIGHT_YELLOW, Color.YELLOW),
        (Color.LIGHT_BLUE, Color.BLUE),
        (Color.LIGHT_MAGENTA, Color.MAGENTA),
        (Color.CYAN, Color.CYAN),
    ],
)
def test_ansi8_substitutes_light_colours(light, base):
    assert Styles(palette=Palette.ANSI8).color(light) == base


def test_fg_without_colour():
    assert Styles().fg(Color.RED) == Style()
    assert Styles(palette=Palette.ALL).fg(Color.RED) == Style(fg=Color.RED)


def test_terminated():
    assert Modifier.DIM in Styles().terminated().modifiers
    off = Styles(toggles=ColorToggles(color_terminated=False))
    assert off.terminated() == Style()


def test_warnings():
    assert Styles(utf8=False).warning_wide().content == "/!\\ "
    assert Styles(utf8=False).warning_narrow().content == "! "
    assert Styles(utf8=True).warning_wide().content == "\u26A0 "
    span = Styles(palette=Palette.ANSI8).warning_wide()
    assert span.style.fg == Color.YELLOW
    assert Modifier.BOLD in span.style.modifiers


def test_sort_markers():
    assert Styles(utf8=True).ascending("ID").content == "ID▵"
    assert Styles(utf8=True).descending("ID").content == "ID▿"
    assert Styles(utf8=False).ascending("ID").content == "ID+"
    assert Styles(utf8=False).descending("ID").content == "ID-"


def test_selected_style():
    assert Styles(palette=Palette.ALL).selected("x").style.fg == Color.CYAN
    plain = Styles().selected("x").style
    assert plain.fg is None
    assert Modifier.REVERSED in plain.removed


def test_if_utf8():
    assert Styles(utf8=True).if_utf8("a", "b") == "a"
    assert Styles(utf8=False).if_utf8("a", "b") == "b"


def test_border_block():
    block = Styles(utf8=True).border_block("Help")
    assert block.bordered and block.rounded
    assert block.title == "Help"
    assert not Styles(utf8=False).border_block("Help").bordered