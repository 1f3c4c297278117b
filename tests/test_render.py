from __future__ import annotations

import click
import pytest

from term_markdown.models import Line, Span, Style
from term_markdown.render import cell_width, clip_to_cells, render_line, render_lines, style_span


def test_plain_span_is_unstyled():
    assert style_span(Span("text")) == "text"


def test_styled_span_uses_click_style():
    span = Span("text", Style(bold=True, italic=True, fg="cyan"))

    assert style_span(span) == click.style("text", fg="cyan", bold=True, italic=True)
    assert style_span(span, color=False) == "text"


def test_line_style_applies_to_every_span():
    line = Line((Span("a"), Span("b", Style(italic=True))), Style(bold=True))

    assert render_line(line) == click.style("a", bold=True) + click.style(
        "b", bold=True, italic=True
    )


def test_render_line_clips_across_spans():
    line = Line((Span("abc"), Span("def", Style(bold=True)), Span("ghi")))

    assert render_line(line, width=4, color=False) == "abcd"
    assert render_line(line, width=4) == "abc" + click.style("d", bold=True)
    assert render_line(line, width=0) == ""


def test_render_lines_bounds_rows():
    lines = [Line.raw("one"), Line(), Line.raw("three")]

    assert render_lines(lines) == ["one", "", "three"]
    assert render_lines(lines, height=2) == ["one", ""]
    assert render_lines(lines, height=0) == []
    assert render_lines(lines, width=2, height=5) == ["on", "", "th"]


@pytest.mark.parametrize("arguments", [{"width": -1}, {"height": -1}])
def test_render_lines_rejects_negative_sizes(arguments):
    with pytest.raises(ValueError):
        render_lines([Line.raw("x")], **arguments)


@pytest.mark.parametrize("char, expected", [("a", 1), ("日", 2), ("Ａ", 2), ("\u0301", 0)])
def test_cell_width(char: str, expected: int):
    assert cell_width(char) == expected


def test_clip_to_cells_drops_straddling_wide_character():
    assert clip_to_cells("日本語", 5) == ("日本", 4)
    assert clip_to_cells("ab", 5) == ("ab", 2)


def test_wide_text_is_clipped_by_cells():
    line = Line((Span("日本"), Span("x"), Span("語")))

    assert render_line(line, width=3, color=False) == "日"
    assert render_line(line, width=5, color=False) == "日本x"
    assert render_lines([Line.raw("e\u0301te")], width=2) == ["e\u0301t"]
