"""Duration histograms and the small chart and percentile list that show them."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from fractions import Fraction

from consoleview.styles import Styles, format_duration_debug
from consoleview.text import DUR_LIST_PRECISION, Block, Line, bold

# Wide enough for a legend such as "0647.17µs  909.31µs" plus some bars.
MIN_HISTOGRAM_BLOCK_WIDTH = 22

PERCENTILES = (10, 25, 50, 75, 90, 95, 99)

NINE_LEVELS: tuple[str, ...] = (" ", "▁", "▂", "▃", "▄", "▅", "▆", "▇", "█")
"""Bar symbols from empty to full, in eighths."""


@dataclass
class DurationHistogram:
    """Recorded durations in nanoseconds, plus a tally of high outliers."""

    high_outliers: int = 0
    highest_outlier: int | None = None
    _counts: Counter = field(default_factory=Counter, repr=False)

    def __len__(self) -> int:
        return sum(self._counts.values())

    def record(self, value: int) -> None:
        """Record one duration of ``value`` nanoseconds."""
        if value < 0:
            raise ValueError("duration must not be negative")
        self._counts[value] += 1

    def min(self) -> int:
        """The smallest recorded value, or 0 when nothing was recorded."""
        return min(self._counts, default=0)

    def max(self) -> int:
        """The largest recorded value, or 0 when nothing was recorded."""
        return max(self._counts, default=0)

    def value_at_percentile(self, percentile: float) -> int:
        """The smallest value at or below which ``percentile`` % of records lie."""
        total = len(self)
        if total == 0:
            return 0
        clamped = min(max(Fraction(percentile), Fraction(0)), Fraction(100))
        target = max(1, math.ceil(clamped * total / 100))
        seen = 0
        for value, count in sorted(self._counts.items()):
            seen += count
            if seen >= target:
                return value
        return self.max()

    def iter_linear(self, step: int) -> Iterator[int]:
        """Counts of records in consecutive buckets ``step`` wide, from zero."""
        if step <= 0:
            raise ValueError("step must be positive")
        items = sorted(self._counts.items())
        pos = 0
        upper = step
        while pos < len(items):
            count = 0
            while pos < len(items) and items[pos][0] < upper:
                count += items[pos][1]
                pos += 1
            yield count
            upper += step


@dataclass
class HistogramMetadata:
    """Figures the chart's legend is drawn from."""

    max_value: int = 0
    min_value: int = 0
    max_bucket: int = 0
    high_outliers: int = 0
    highest_outlier: int | None = None


def chart_data(
    histogram: DurationHistogram, width: int
) -> tuple[list[int], HistogramMetadata]:
    """Bucket the histogram into about ``width`` bars, dropping leading empties."""
    if width <= 0:
        raise ValueError("chart width must be positive")
    step = math.ceil((histogram.max() - histogram.min()) / width) + 1
    data: list[int] = []
    for count in histogram.iter_linear(step):
        # Leading empty buckets carry no information; skip them.
        if count == 0 and not data:
            continue
        data.append(count)
    metadata = HistogramMetadata(
        max_value=histogram.max(),
        min_value=histogram.min(),
        max_bucket=max(data, default=0),
        high_outliers=histogram.high_outliers,
        highest_outlier=histogram.highest_outlier,
    )
    return data, metadata


def bar_symbols(
    data: Sequence[int],
    height: int,
    maximum: int | None = None,
    bar_set: Sequence[str] = NINE_LEVELS,
) -> list[str]:
    """Rows, top first, of a bar chart of ``data`` that is ``height`` rows tall.

    Any non-zero value gets at least the smallest bar, however small it is
    next to ``maximum`` (by default the largest value).
    """
    top = maximum if maximum is not None else max(data, default=1)
    levels = []
    for value in data:
        if top == 0:
            levels.append(0)
            continue
        scaled = value * height * 8 // top
        levels.append(1 if value > 0 and scaled == 0 else scaled)

    rows = [""] * height
    for j in reversed(range(height)):
        row = []
        for i, level in enumerate(levels):
            row.append(bar_set[min(level, 8)])
            levels[i] = level - 8 if level > 8 else 0
        rows[j] = "".join(row)
    return rows


def _put(canvas: list[list[str]], x: int, y: int, text: str, right: int) -> None:
    if not 0 <= y < len(canvas):
        return
    for offset, char in enumerate(text):
        col = x + offset
        if 0 <= col < right:
            canvas[y][col] = char


def _title_text(title: str | Line | None) -> str:
    if title is None:
        return ""
    return title.plain() if isinstance(title, Line) else title


@dataclass
class MiniHistogram:
    """A small labelled bar chart of a duration histogram."""

    histogram: DurationHistogram | None = None
    block: Block | None = None
    maximum: int | None = None
    bar_set: tuple[str, ...] = NINE_LEVELS
    duration_precision: int = 4

    def render(self, width: int, height: int) -> list[str]:
        """Draw into an area of ``width`` by ``height`` and return its rows."""
        canvas = [[" "] * width for _ in range(height)]
        x0, y0, w, h = 0, 0, width, height

        if self.block is not None:
            title = _title_text(self.block.title)
            if self.block.bordered:
                self._draw_border(canvas, width, height, title)
                x0, y0, w, h = 1, 1, max(width - 2, 0), max(height - 2, 0)
            elif title:
                _put(canvas, 0, 0, title, width)
                y0, h = 1, max(height - 1, 0)

        if h < 1 or self.histogram is None or w < 4:
            return ["".join(row) for row in canvas]

        # The width of the quantity label depends on the data and the data on
        # the width, so assume a three-digit label.
        data, metadata = chart_data(self.histogram, w - 3)
        max_qty_label = str(metadata.max_bucket)
        max_record_label = format_duration_debug(
            metadata.max_value, self.duration_precision
        )
        min_record_label = format_duration_debug(
            metadata.min_value, self.duration_precision
        )
        right, bottom = x0 + w, y0 + h

        if metadata.high_outliers > 0:
            if metadata.highest_outlier is None:
                raise ValueError("if there are outliers, the highest should be set")
            note = (
                f"{metadata.high_outliers} outliers "
                f"(highest: {format_duration_debug(metadata.highest_outlier)})"
            )
            _put(canvas, right - len(note), bottom - 1, note, right)
            legend_height = 2
        else:
            legend_height = 1

        _put(canvas, x0, y0, max_qty_label, right)
        _put(canvas, x0 + len(max_qty_label), bottom - legend_height, min_record_label, right)
        _put(
            canvas,
            right - len(max_record_label),
            bottom - legend_height,
            max_record_label,
            right,
        )

        bars_x = x0 + len(max_qty_label)
        bars_width = w - len(max_qty_label)
        bars_height = h - legend_height
        if bars_width > 0 and bars_height > 0:
            rows = bar_symbols(data[:bars_width], bars_height, self.maximum, self.bar_set)
            for j, row in enumerate(rows):
                for i, char in enumerate(row):
                    canvas[y0 + j][bars_x + i] = char
        return ["".join(row) for row in canvas]

    def _draw_border(
        self, canvas: list[list[str]], width: int, height: int, title: str
    ) -> None:
        if width < 2 or height < 2:
            return
        assert self.block is not None
        corners = "╭╮╰╯" if self.block.rounded else "┌┐└┘"
        for col in range(1, width - 1):
            canvas[0][col] = "─"
            canvas[height - 1][col] = "─"
        for row in range(1, height - 1):
            canvas[row][0] = "│"
            canvas[row][width - 1] = "│"
        canvas[0][0], canvas[0][width - 1] = corners[0], corners[1]
        canvas[height - 1][0], canvas[height - 1][width - 1] = corners[2], corners[3]
        _put(canvas, 1, 0, title, width - 1)


def percentile_lines(
    histogram: DurationHistogram | None, styles: Styles
) -> list[Line]:
    """One line per notable percentile, e.g. ``p50: 12.34ms``."""
    if histogram is None:
        return []
    return [
        Line(
            [
                bold(f"p{p:>2}: "),
                styles.time_units(
                    histogram.value_at_percentile(p), DUR_LIST_PRECISION, None
                ),
            ]
        )
        for p in PERCENTILES
    ]


def split_durations_area(
    styles: Styles,
    width: int,
    percentiles_title: str = "Percentiles",
    percentiles_width: int = 0,
) -> tuple[int, int | None]:
    """Widths of the percentiles list and of the chart beside it.

    The chart is shown only with UTF-8 and only if enough width is left;
    otherwise the second width is None and the list takes everything.
    A ``percentiles_width`` of 0 sizes the list to fit its title.
    """
    if not styles.utf8:
        return width, None
    if percentiles_width > 0:
        fixed = percentiles_width
    else:
        # Room for the title or a line like "p99: 544.77µs", plus borders.
        fixed = max(len(percentiles_title), 13) + 2
    if width < fixed + MIN_HISTOGRAM_BLOCK_WIDTH:
        return width, None
    return fixed, width - fixed