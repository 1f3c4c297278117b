"""Translate markdown events into styled terminal lines."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .config import RenderConfig
from .exceptions import MalformedEventStreamError, UnsupportedConstructError, describe_tag
from .links import LinkRegistry
from .models import (
    PLAIN,
    TEXT_EVENT_KINDS,
    UNSUPPORTED_TAG_KINDS,
    Context,
    ContextKind,
    Event,
    EventKind,
    Line,
    LineBuilder,
    ListKind,
    Span,
    Style,
    Tag,
    TagKind,
    TranslationResult,
)

# Tags that open a context of their own; every other tag is a transparent wrapper.
_TAG_CONTEXTS = {
    TagKind.HEADING: ContextKind.HEADING,
    TagKind.STRONG: ContextKind.STRONG,
    TagKind.EMPHASIS: ContextKind.EMPHASIS,
    TagKind.CODE_BLOCK: ContextKind.CODE,
    TagKind.LIST: ContextKind.LIST,
}


def heading_style(level: int, config: RenderConfig) -> Style:
    """Line style for a heading.

    Level 1 is bold, level 2 italic, and deeper levels use the configured
    heading colour.

    Examples:
        heading_style(1, RenderConfig())  # Style(bold=True)
        heading_style(4, RenderConfig())  # Style(fg="blue")
    """
    if level == 1:
        return Style(bold=True)
    if level == 2:
        return Style(italic=True)
    return Style(fg=config.heading_color)


def inline_style(stack: list[Context]) -> Style:
    """Compute the style of a text leaf from the context stack.

    Scans from the innermost context outwards, adding bold for each strong
    context and italics for each emphasis context. A heading stops the scan
    because the heading line already carries its style.
    """
    style = PLAIN
    for context in reversed(stack):
        if context.kind is ContextKind.HEADING:
            break
        if context.kind is ContextKind.STRONG:
            style = style.add_bold()
        elif context.kind is ContextKind.EMPHASIS:
            style = style.add_italic()
    return style


def count_lists(stack: list[Context]) -> int:
    return sum(1 for context in stack if context.kind is ContextKind.LIST)


def innermost_list(stack: list[Context]) -> Context | None:
    for context in reversed(stack):
        if context.kind is ContextKind.LIST:
            return context
    return None


class Translator:
    """Left-to-right fold from markdown events to display lines.

    Link destinations are registered in `links` as link events are seen.
    Unsupported constructs are reported through `warn`, once per kind, unless
    the configuration is strict.

    Args:
        links: Registry that receives formatted link destinations.
        config: Rendering configuration; defaults to a new `RenderConfig`.
        warn: Optional callback for non-fatal diagnostics.

    Examples:
        translator = Translator(LinkRegistry())
        result = translator.translate(tokenize("# Title"))
    """

    def __init__(
        self,
        links: LinkRegistry,
        config: RenderConfig | None = None,
        warn: Callable[[str], None] | None = None,
    ):
        self.links = links
        self.config = config or RenderConfig()
        self.warn = warn
        self.stack: list[Context] = [Context(ContextKind.NORMAL)]
        self.current = LineBuilder()
        self.lines: list[Line] = []
        self.diagnostics: list[str] = []
        self._separator_pending = False
        self._reported: set[TagKind] = set()

    def translate(self, events: Iterable[Event]) -> TranslationResult:
        """Consume `events` and return the finished lines.

        Raises:
            MalformedEventStreamError: If start and end events do not nest.
            UnsupportedConstructError: In strict mode, when an unsupported
                construct is encountered.
        """
        for event in events:
            self.handle(event)
        return self.finish()

    def handle(self, event: Event) -> None:
        if event.kind is EventKind.START:
            self._start(event)
        elif event.kind is EventKind.END:
            self._end(event)
        elif event.kind in TEXT_EVENT_KINDS:
            self.current.push(Span(event.text, inline_style(self.stack)))
        elif event.kind is EventKind.SOFT_BREAK:
            self.current.push(Span.raw(" "))
        elif event.kind is EventKind.HARD_BREAK:
            self._push_current()
        # Footnote references, rules and task markers have no display

    def finish(self) -> TranslationResult:
        if len(self.stack) > 1:
            raise MalformedEventStreamError(
                f"Event stream ended with an open {self.stack[-1].kind.name.lower()} context",
                context=self.stack[-1],
            )
        self._flush_current()
        return TranslationResult(lines=tuple(self.lines), diagnostics=tuple(self.diagnostics))

    def _start(self, event: Event) -> None:
        tag = _require_tag(event)

        if tag.kind in UNSUPPORTED_TAG_KINDS:
            self._report_unsupported(tag.kind)
            return

        if tag.kind is TagKind.HEADING:
            level = tag.level or 1
            self._flush_current()
            self.current = LineBuilder(style=heading_style(level, self.config))
            self.stack.append(Context(ContextKind.HEADING, level=level))
        elif tag.kind is TagKind.PARAGRAPH:
            self._flush_current()
        elif tag.kind is TagKind.LIST:
            self._flush_current()
            list_kind = ListKind.UNORDERED if tag.start is None else ListKind.ORDERED
            self.stack.append(
                Context(ContextKind.LIST, list_kind=list_kind, nesting=count_lists(self.stack))
            )
        elif tag.kind is TagKind.ITEM:
            self._start_item()
        elif tag.kind is TagKind.LINK:
            self.links.register(tag)
        elif tag.kind in _TAG_CONTEXTS:
            self.stack.append(Context(_TAG_CONTEXTS[tag.kind]))

    def _end(self, event: Event) -> None:
        tag = _require_tag(event)

        if tag.kind is TagKind.HEADING:
            self._pop(event)
            self._push_current()
            self._push(Line())
        elif tag.kind is TagKind.PARAGRAPH:
            self._push_current()
            self._separator_pending = True
        elif tag.kind is TagKind.ITEM:
            self._flush_current()
        elif tag.kind is TagKind.LIST:
            self._pop(event)
            if innermost_list(self.stack) is None:
                self._end_top_level_list()
        elif tag.kind in _TAG_CONTEXTS:
            self._pop(event)

    def _start_item(self) -> None:
        self._flush_current()
        context = innermost_list(self.stack)
        if context is None:
            return
        context.item_count += 1
        indent = self.config.list_indent * context.nesting
        self.current.push(Span.raw(f"{indent}{context.item_marker()}"))

    def _end_top_level_list(self) -> None:
        """Hook run when the outermost list closes; lists add no trailing blank."""

    def _pop(self, event: Event) -> Context:
        tag = _require_tag(event)
        expected = _TAG_CONTEXTS[tag.kind]
        top = self.stack[-1]
        if top.kind is ContextKind.NORMAL:
            raise MalformedEventStreamError(
                f"End of {describe_tag(tag.kind)} without a matching start", event, top
            )
        if top.kind is not expected:
            raise MalformedEventStreamError(
                f"End of {describe_tag(tag.kind)} while a {top.kind.name.lower()} context is open",
                event,
                top,
            )
        return self.stack.pop()

    def _report_unsupported(self, kind: TagKind) -> None:
        if self.config.strict:
            raise UnsupportedConstructError(kind)
        if kind in self._reported:
            return
        self._reported.add(kind)
        message = f"Warning: {describe_tag(kind)} is not supported; rendering its contents unstyled"
        self.diagnostics.append(message)
        if self.warn is not None:
            self.warn(message)

    def _push(self, line: Line) -> None:
        if self._separator_pending:
            self._separator_pending = False
            self.lines.append(Line())
        self.lines.append(line)

    def _push_current(self) -> None:
        self._push(self.current.freeze())
        self.current = LineBuilder()

    def _flush_current(self) -> None:
        if not self.current.is_empty():
            self._push_current()
        else:
            self.current = LineBuilder()


def _require_tag(event: Event) -> Tag:
    if event.tag is None:
        raise MalformedEventStreamError(f"{event.kind.name} event without a tag", event)
    return event.tag


def translate_events(
    events: Iterable[Event],
    links: LinkRegistry,
    config: RenderConfig | None = None,
    warn: Callable[[str], None] | None = None,
) -> TranslationResult:
    """Translate a markdown event stream into display lines.

    Args:
        events: Well-formed event stream from a tokenizer.
        links: Registry that receives formatted link destinations.
        config: Rendering configuration; defaults to a new `RenderConfig`.
        warn: Optional callback for non-fatal diagnostics.

    Returns:
        TranslationResult: Finished lines and any diagnostics raised.

    Raises:
        MalformedEventStreamError: If start and end events do not nest.
        UnsupportedConstructError: In strict mode, when an unsupported
            construct is encountered.

    Examples:
        translate_events([Event(EventKind.TEXT, text="hi")], LinkRegistry())
    """
    return Translator(links, config, warn).translate(events)
