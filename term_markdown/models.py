"""Data models for term-markdown."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto

from .constants import UNORDERED_ITEM_MARKER


class EventKind(Enum):
    """Kinds of events produced by a markdown tokenizer.

    ``START`` and ``END`` carry a `Tag`; the text-like leaves carry a payload
    in `Event.text`.
    """

    START = auto()
    END = auto()
    TEXT = auto()
    CODE = auto()
    HTML = auto()
    INLINE_HTML = auto()
    INLINE_MATH = auto()
    DISPLAY_MATH = auto()
    SOFT_BREAK = auto()
    HARD_BREAK = auto()
    FOOTNOTE_REFERENCE = auto()
    RULE = auto()
    TASK_LIST_MARKER = auto()


TEXT_EVENT_KINDS = frozenset(
    {
        EventKind.TEXT,
        EventKind.CODE,
        EventKind.HTML,
        EventKind.INLINE_HTML,
        EventKind.INLINE_MATH,
        EventKind.DISPLAY_MATH,
    }
)


class TagKind(Enum):
    """Block and inline containers opened by ``START`` and closed by ``END``."""

    HEADING = auto()
    PARAGRAPH = auto()
    STRONG = auto()
    EMPHASIS = auto()
    CODE_BLOCK = auto()
    LIST = auto()
    ITEM = auto()
    LINK = auto()
    IMAGE = auto()
    BLOCKQUOTE = auto()
    STRIKETHROUGH = auto()
    SUPERSCRIPT = auto()
    SUBSCRIPT = auto()
    FOOTNOTE_DEFINITION = auto()


UNSUPPORTED_TAG_KINDS = frozenset(
    {
        TagKind.BLOCKQUOTE,
        TagKind.STRIKETHROUGH,
        TagKind.SUPERSCRIPT,
        TagKind.SUBSCRIPT,
    }
)


class LinkType(Enum):
    """How a link destination was written in the source.

    Attributes:
        INLINE: ``[text](url)``.
        REFERENCE: ``[text][id]``.
        SHORTCUT: ``[text]`` resolved against a definition.
        REFERENCE_UNKNOWN: ``[text][id]`` with no matching definition.
        COLLAPSED: ``[text][]``.
        COLLAPSED_UNKNOWN: ``[text][]`` with no matching definition.
        SHORTCUT_UNKNOWN: ``[text]`` with no matching definition.
        AUTOLINK: ``<https://example.com>``.
        EMAIL: ``<user@example.com>``.
        WIKI_LINK: ``[[page]]`` or ``[[page|text]]``.
    """

    INLINE = auto()
    REFERENCE = auto()
    SHORTCUT = auto()
    REFERENCE_UNKNOWN = auto()
    COLLAPSED = auto()
    COLLAPSED_UNKNOWN = auto()
    SHORTCUT_UNKNOWN = auto()
    AUTOLINK = auto()
    EMAIL = auto()
    WIKI_LINK = auto()


@dataclass(frozen=True)
class Tag:
    """A container tag with the arguments its kind needs.

    Attributes:
        kind: Which container this is.
        level: Heading level (1-6) for ``HEADING``.
        start: First number of an ordered ``LIST``; None for unordered lists.
        link_type: Link flavour for ``LINK``.
        dest_url: Link destination.
        title: Link title.
        id: Reference label for reference-style links.
        has_pothole: Whether a wiki link carries separate display text.
    """

    kind: TagKind
    level: int | None = None
    start: int | None = None
    link_type: LinkType | None = None
    dest_url: str = ""
    title: str = ""
    id: str = ""
    has_pothole: bool = False


@dataclass(frozen=True)
class Event:
    """A single event of the markdown event stream."""

    kind: EventKind
    tag: Tag | None = None
    text: str = ""
    checked: bool = False

    @classmethod
    def start(cls, kind: TagKind, **arguments: object) -> Event:
        return cls(EventKind.START, tag=Tag(kind, **arguments))

    @classmethod
    def end(cls, kind: TagKind, **arguments: object) -> Event:
        return cls(EventKind.END, tag=Tag(kind, **arguments))


@dataclass(frozen=True)
class Style:
    """Display attributes for a run of text.

    Attributes:
        bold: Render in bold.
        italic: Render in italics.
        fg: Foreground colour name, or None for the terminal default.
    """

    bold: bool = False
    italic: bool = False
    fg: str | None = None

    def patch(self, other: Style) -> Style:
        """Layer `other` on top of this style.

        Modifiers accumulate; a colour set on `other` wins.
        """
        return Style(
            bold=self.bold or other.bold,
            italic=self.italic or other.italic,
            fg=other.fg if other.fg is not None else self.fg,
        )

    def add_bold(self) -> Style:
        return replace(self, bold=True)

    def add_italic(self) -> Style:
        return replace(self, italic=True)

    @property
    def is_plain(self) -> bool:
        return self == PLAIN


PLAIN = Style()


@dataclass(frozen=True)
class Span:
    """A fragment of text with one style."""

    text: str
    style: Style = PLAIN

    @classmethod
    def raw(cls, text: str) -> Span:
        return cls(text)


@dataclass(frozen=True)
class Line:
    """One display row.

    Attributes:
        spans: Styled fragments, left to right.
        style: Line-level style applied underneath every span.
    """

    spans: tuple[Span, ...] = ()
    style: Style = PLAIN

    @classmethod
    def raw(cls, text: str) -> Line:
        return cls((Span.raw(text),))

    @property
    def text(self) -> str:
        return "".join(span.text for span in self.spans)

    def is_blank(self) -> bool:
        return not self.text

    def styled_spans(self) -> list[Span]:
        """Return spans with the line style patched underneath each one."""
        return [Span(span.text, self.style.patch(span.style)) for span in self.spans]


@dataclass
class LineBuilder:
    """A line under construction; frozen into a `Line` when flushed."""

    style: Style = PLAIN
    spans: list[Span] = field(default_factory=list)

    def push(self, span: Span) -> None:
        self.spans.append(span)

    def is_empty(self) -> bool:
        return not self.spans

    def freeze(self) -> Line:
        return Line(tuple(self.spans), self.style)


class ContextKind(Enum):
    """Entries of the formatting context stack.

    Attributes:
        NORMAL: Base context, always at the bottom of the stack.
        HEADING: Inside a heading; its line style covers all contained text.
        STRONG: Adds bold to nested text.
        EMPHASIS: Adds italics to nested text.
        CODE: Inside a code block; currently carries no styling.
        LIST: Inside a list; tracks numbering and nesting.
    """

    NORMAL = auto()
    HEADING = auto()
    STRONG = auto()
    EMPHASIS = auto()
    CODE = auto()
    LIST = auto()


class ListKind(Enum):
    ORDERED = auto()
    UNORDERED = auto()


@dataclass
class Context:
    """One entry of the formatting context stack.

    Attributes:
        kind: Context variant.
        level: Heading level for ``HEADING`` contexts.
        list_kind: Ordered or unordered, for ``LIST`` contexts.
        nesting: Number of enclosing lists when a ``LIST`` context was opened.
        item_count: Items seen so far inside a ``LIST`` context.
    """

    kind: ContextKind
    level: int | None = None
    list_kind: ListKind | None = None
    nesting: int = 0
    item_count: int = 0

    def item_marker(self) -> str:
        if self.list_kind is ListKind.ORDERED:
            return f"{self.item_count}. "
        return UNORDERED_ITEM_MARKER


@dataclass(frozen=True)
class TranslationResult:
    """Structured result of translating an event stream.

    Attributes:
        lines: Display lines in document order.
        diagnostics: Non-fatal warnings raised while translating.
    """

    lines: tuple[Line, ...]
    diagnostics: tuple[str, ...] = ()
