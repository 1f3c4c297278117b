"""Paint display lines for a terminal."""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable

import click

from .models import Line, Span


def cell_width(char: str) -> int:
    """Number of terminal cells a single character occupies.

    Wide and fullwidth East Asian characters take two cells; combining marks
    take none.

    Examples:
        cell_width("a")  # 1
        cell_width("日")  # 2
    """
    if unicodedata.combining(char):
        return 0
    if unicodedata.east_asian_width(char) in ("W", "F"):
        return 2
    return 1


def clip_to_cells(text: str, cells: int) -> tuple[str, int]:
    """Return the longest prefix of `text` fitting in `cells` and its width.

    A wide character that would straddle the limit is dropped.
    """
    used = 0
    for index, char in enumerate(text):
        width = cell_width(char)
        if used + width > cells:
            return text[:index], used
        used += width
    return text, used


def style_span(span: Span, color: bool = True) -> str:
    """Return span text wrapped in ANSI styling codes.

    Plain spans, and every span when `color` is False, come back unchanged.
    """
    if not color or span.style.is_plain:
        return span.text
    return click.style(
        span.text,
        fg=span.style.fg,
        bold=span.style.bold or None,
        italic=span.style.italic or None,
    )


def render_line(line: Line, width: int | None = None, color: bool = True) -> str:
    """Render one line, clipped to `width` terminal cells when given.

    Examples:
        render_line(Line.raw("hello"), width=3)  # "hel"
        render_line(Line.raw("日本語"), width=5)  # "日本"
    """
    parts = []
    remaining = width
    for span in line.styled_spans():
        text = span.text
        if remaining is not None:
            if remaining <= 0:
                break
            text, used = clip_to_cells(span.text, remaining)
            # Nothing after a clipped character is drawn
            remaining = remaining - used if text == span.text else 0
        parts.append(style_span(Span(text, span.style), color))
    return "".join(parts)


def render_lines(
    lines: Iterable[Line],
    width: int | None = None,
    height: int | None = None,
    color: bool = True,
) -> list[str]:
    """Render lines into a rectangular region.

    Args:
        lines: Lines to paint, top to bottom.
        width: Number of terminal cells available; longer lines are clipped.
        height: Number of rows available; extra lines are dropped.
        color: Emit ANSI styling; when False the output is plain text.

    Returns:
        list[str]: One string per painted row, without trailing newlines.

    Raises:
        ValueError: If `width` or `height` is negative.

    Examples:
        render_lines(Document("# Title").get_lines(), width=80, height=24)
    """
    if width is not None and width < 0:
        raise ValueError("`width` must not be negative")
    if height is not None and height < 0:
        raise ValueError("`height` must not be negative")

    rows = []
    for line in lines:
        if height is not None and len(rows) >= height:
            break
        rows.append(render_line(line, width, color))
    return rows
