"""
term-markdown: Markdown rendered as styled terminal lines with selectable links.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    term-markdown README.md
    term-markdown README.md --links

Library Usage:
    from term_markdown import Document, render_lines

    document = Document("# Title\\n\\nRead [the docs](https://example.com).")
    for row in render_lines(document.get_lines(), width=80):
        print(row)
    document.handle_input("0")  # "(https://example.com)"
"""

__version__ = "0.1.0"

from .config import ConfigError, RenderConfig
from .document import Document
from .exceptions import MalformedEventStreamError, RenderError, UnsupportedConstructError
from .links import LinkRegistry, format_link_destination
from .models import Event, EventKind, Line, LinkType, Span, Style, Tag, TagKind, TranslationResult
from .render import render_lines
from .selection import key_to_index, select_link
from .tokenizer import tokenize
from .translator import Translator, translate_events

__all__ = [
    # Core functionality
    "Document",
    "tokenize",
    "translate_events",
    "Translator",
    "render_lines",
    # Links
    "LinkRegistry",
    "format_link_destination",
    "key_to_index",
    "select_link",
    # Data models
    "Event",
    "EventKind",
    "Line",
    "LinkType",
    "Span",
    "Style",
    "Tag",
    "TagKind",
    "TranslationResult",
    "RenderConfig",
    # Exceptions
    "ConfigError",
    "MalformedEventStreamError",
    "RenderError",
    "UnsupportedConstructError",
    # Version
    "__version__",
]
