# consoleview

Building blocks for a text-mode console that inspects running async tasks:
a small styled-text model, colour palettes and duration formatting,
key-binding help lines, sortable table state, task warnings (lints) and
compact latency histograms. The package has no dependencies beyond the
standard library.

## Installation

```
pip install consoleview
```

For running the test suite:

```
pip install "consoleview[test]"
pytest
```

## Modules

- `consoleview.text` — the styled-text model: `Color` (named colours such
  as `Color.CYAN`, plus `Color.indexed()` and `Color.rgb()`), the
  `Modifier` flags, `Style` (`with_fg`, `add_modifier`, `remove_modifier`),
  `Span`, `Line` (`width`, `push_span`, `plain`), `Block`, and `bold()`.
- `consoleview.styles` — `Palette`, parsed with `parse_palette()` from
  `0`, `8`, `16`, `256`, `all` or `off` (case-insensitive for the words,
  raising `ValueError` otherwise); `ColorToggles`; and `Styles`, which
  resolves colours for the palette (`color`, `fg`), builds header and
  warning spans (`ascending`, `descending`, `selected`, `warning_wide`,
  `warning_narrow`), and formats durations given in nanoseconds with
  `time_units()` / `duration_text()` as `102d`, `12d03h`, `14h32m`,
  `43m02s` or `628.76ms`. `format_duration_debug()` formats a duration in
  s, ms, µs or ns with a chosen precision.
- `consoleview.controls` — `KeyDisplay`, `ControlDisplay` and `Controls`,
  which wraps the "controls:" line to a given width (`Controls.lines`,
  `Controls.height()`), and `controls_paragraph()`, one control per line
  for a help popup.
- `consoleview.table` — `TableListState`, which tracks the selected
  column, sort field, sort direction and selected row in response to
  `KeyEvent`s (arrow keys, `h`/`l`, `j`/`k`, `i`, `G`, `gg`) and returns
  the selected row through weak references; `Width`, a column width that
  grows to fit content up to 100; and `view_controls()`.
- `consoleview.warnings` — task lints `SelfWakePercent`, `LostWaker`,
  `NeverYielded`, `AutoBoxedFuture` and `LargeFuture`. Each checks any
  object with the methods described by the `TaskLike` protocol. `Linter`
  wraps a lint; a positive `check()` returns a `Lint` carrying a handle,
  and `count()` is the number of handles still alive.
- `consoleview.histogram` — `DurationHistogram` (`record`, `min`, `max`,
  `value_at_percentile`, `iter_linear`), `chart_data()`, `bar_symbols()`,
  `MiniHistogram.render()`, which draws a labelled bar chart into a list
  of strings, `percentile_lines()` for p10 … p99, and
  `split_durations_area()`.

## Example

```python
from consoleview.styles import Palette, Styles

styles = Styles(palette=Palette.ANSI256, utf8=True)
span = styles.time_units(1_500_000, 2, None)
print(span.content)   # 1.50ms
```

```python
from consoleview.histogram import DurationHistogram, MiniHistogram

hist = DurationHistogram()
for value in (1_000, 2_000, 2_000, 5_000):
    hist.record(value)
print(hist.value_at_percentile(50))   # 2000
print("\n".join(MiniHistogram(histogram=hist).render(30, 5)))
```

## Checking documentation images

The `consoleview-dev` command has one subcommand, `check-docs-images`. It
reads `tokio-console/README.md` below the base directory (the current
directory by default), finds the screenshot links in it and checks that
each linked image file exists:

```
consoleview-dev check-docs-images
consoleview-dev check-docs-images --base-dir path/to/checkout
```

It exits with status 0 when every image is present, and with status 1,
listing the missing paths, when some are missing or none are found.
The same check is available as `consoleview.docs_images.check_docs_images()`,
which raises `DocsImagesError`.

## What this package does not do

It provides the pieces of a console, not the console itself: it does not
connect to a running program, collect task or resource data, draw to a
terminal or read keyboard input. Rendering produces `Line` and `Span`
values or plain strings for the caller to display, and tasks for the lints
are supplied by the caller.