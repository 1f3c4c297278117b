"""Constants used across the term-markdown package."""

from __future__ import annotations

# Colour names understood by `click.style`
ANSI_COLORS = (
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
    "bright_black",
    "bright_red",
    "bright_green",
    "bright_yellow",
    "bright_blue",
    "bright_magenta",
    "bright_cyan",
    "bright_white",
)

DEFAULT_HEADING_COLOR = "blue"
DEFAULT_LIST_INDENT = "  "
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024

UNORDERED_ITEM_MARKER = "* "

MARKDOWN_EXTENSIONS = (".md", ".markdown", ".mdown", ".mkd", ".mkdn", ".txt")

# Keys that end the interactive selection loop
QUIT_KEYS = ("q", "Q", "\x1b")
