"""A parsed Markdown document ready for display and link selection."""

from __future__ import annotations

from collections.abc import Callable

from .config import RenderConfig
from .links import LinkRegistry
from .models import Line
from .selection import select_link
from .tokenizer import tokenize
from .translator import translate_events


class Document:
    """Markdown text parsed once into display lines and a link registry.

    The input is tokenized and translated at construction; the result never
    changes afterwards. Build a new document to pick up edits.

    Args:
        text: Markdown source.
        config: Rendering configuration; defaults to a new `RenderConfig`.
        warn: Optional callback for non-fatal diagnostics such as unsupported
            constructs.
        parse: When False, skip parsing; `get_lines` then falls back to the
            raw input.

    Raises:
        MalformedEventStreamError: If the tokenizer produced an unbalanced
            event stream.
        UnsupportedConstructError: If `config.strict` is set and the text uses
            an unsupported construct.

    Examples:
        document = Document("# Title\\n\\nSee [docs](https://example.com)")
        document.handle_input("0")  # "(https://example.com)"
    """

    def __init__(
        self,
        text: str,
        config: RenderConfig | None = None,
        warn: Callable[[str], None] | None = None,
        parse: bool = True,
    ):
        self._input = text
        self._config = config or RenderConfig()
        self._links = LinkRegistry()
        self._parsed: tuple[Line, ...] | None = None
        self._diagnostics: tuple[str, ...] = ()
        if parse:
            self._parse(warn)

    @classmethod
    def from_str(
        cls,
        text: str,
        config: RenderConfig | None = None,
        warn: Callable[[str], None] | None = None,
    ) -> Document:
        return cls(text, config, warn)

    def _parse(self, warn: Callable[[str], None] | None) -> None:
        events = tokenize(self._input, self._config)
        result = translate_events(events, self._links, self._config, warn)
        self._parsed = result.lines
        self._diagnostics = result.diagnostics

    @property
    def input(self) -> str:
        return self._input

    @property
    def links(self) -> LinkRegistry:
        return self._links

    @property
    def diagnostics(self) -> tuple[str, ...]:
        return self._diagnostics

    @property
    def is_parsed(self) -> bool:
        return self._parsed is not None

    def get_lines(self) -> tuple[Line, ...]:
        """Return the parsed lines, or the raw input as one unstyled line."""
        if self._parsed is not None:
            return self._parsed
        return (Line.raw(self._input),)

    def handle_input(self, key: str) -> str | None:
        """Return the link selected by a single decoded key, if any."""
        return select_link(self._links, key)

    def __repr__(self) -> str:
        return f"Document(lines={len(self.get_lines())}, links={len(self._links)})"
