"""Markdown tokenizer producing the event stream consumed by the translator.

Parsing is delegated to markdown-it-py. Its token list is flattened into
start/end/leaf `Event` objects, with link flavours recovered by wrapping the
inline ``link`` rule.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from markdown_it import MarkdownIt
from markdown_it.helpers import parseLinkLabel
from markdown_it.rules_inline import StateInline, link as parse_link
from markdown_it.token import Token
from mdit_py_plugins.dollarmath import dollarmath_plugin
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from .config import RenderConfig
from .models import Event, EventKind, LinkType, Tag, TagKind

LINK_TYPE_META = "link_type"
LINK_ID_META = "link_id"

TASK_CHECKBOX_CLASS = "task-list-item-checkbox"

# Container tokens that map one-to-one onto tags without arguments
_CONTAINER_TAGS = {
    "paragraph": TagKind.PARAGRAPH,
    "blockquote": TagKind.BLOCKQUOTE,
    "list_item": TagKind.ITEM,
    "strong": TagKind.STRONG,
    "em": TagKind.EMPHASIS,
    "s": TagKind.STRIKETHROUGH,
    "sup": TagKind.SUPERSCRIPT,
    "sub": TagKind.SUBSCRIPT,
    "footnote": TagKind.FOOTNOTE_DEFINITION,
    "footnote_reference": TagKind.FOOTNOTE_DEFINITION,
}

_INLINE_LEAVES = {
    "text": EventKind.TEXT,
    "code_inline": EventKind.CODE,
    "math_inline": EventKind.INLINE_MATH,
    "math_inline_double": EventKind.DISPLAY_MATH,
}

_BLOCK_LEAVES = {
    "html_block": EventKind.HTML,
    "math_block": EventKind.DISPLAY_MATH,
    "math_block_label": EventKind.DISPLAY_MATH,
}


def classify_link(src: str, label_end: int, end: int) -> tuple[LinkType, str]:
    """Work out how a parsed link was written.

    Args:
        src: Inline source the link was parsed from.
        label_end: Index of the ``]`` closing the link text.
        end: Index just past the whole link.

    Returns:
        tuple[LinkType, str]: Link type and, for full reference links, the
            reference label as written.

    Examples:
        classify_link("[a](b)", 2, 6)  # (LinkType.INLINE, "")
        classify_link("[a][b]", 2, 6)  # (LinkType.REFERENCE, "b")
    """
    after = label_end + 1
    if end <= after:
        return LinkType.SHORTCUT, ""
    if src[after] == "(":
        return LinkType.INLINE, ""
    if src[after:end] == "[]":
        return LinkType.COLLAPSED, ""
    return LinkType.REFERENCE, src[after + 1 : end - 1]


def _link_rule(state: StateInline, silent: bool) -> bool:
    start = state.pos
    first_new_token = len(state.tokens)
    if not parse_link(state, silent):
        return False
    if silent:
        return True

    label_end = parseLinkLabel(state, start, True)
    link_type, link_id = classify_link(state.src, label_end, state.pos)
    for token in state.tokens[first_new_token:]:
        if token.type == "link_open":
            token.meta[LINK_TYPE_META] = link_type
            token.meta[LINK_ID_META] = link_id
            break
    return True


def _keep_destination(url: str) -> str:
    return url


def create_parser(config: RenderConfig | None = None) -> MarkdownIt:
    """Build a CommonMark parser with the extensions enabled in `config`.

    Examples:
        md = create_parser(RenderConfig(strikethrough=True))
    """
    config = config or RenderConfig()
    md = MarkdownIt("commonmark")
    # Destinations are shown as written, without percent-encoding or punycode
    md.normalizeLink = _keep_destination
    md.normalizeLinkText = _keep_destination
    md.inline.ruler.at("link", _link_rule)
    if config.strikethrough:
        md.enable("strikethrough")
    if config.tasklists:
        md.use(tasklists_plugin)
    if config.footnotes:
        md.use(footnote_plugin)
    if config.math:
        md.use(dollarmath_plugin)
    return md


def _link_event(token: Token, kind: EventKind) -> Event:
    if kind is EventKind.END:
        return Event.end(TagKind.LINK)

    href = str(token.attrGet("href") or "")
    link_id = ""
    if token.markup == "autolink":
        if href.startswith("mailto:"):
            link_type = LinkType.EMAIL
            href = href[len("mailto:") :]
        else:
            link_type = LinkType.AUTOLINK
    else:
        link_type = token.meta.get(LINK_TYPE_META, LinkType.INLINE)
        link_id = token.meta.get(LINK_ID_META, "")

    return Event.start(
        TagKind.LINK,
        link_type=link_type,
        dest_url=href,
        title=str(token.attrGet("title") or ""),
        id=link_id,
    )


def _block_lines(kind: EventKind, content: str) -> Iterator[Event]:
    """Emit one leaf per source line, separated by hard breaks."""
    if content.endswith("\n"):
        content = content[:-1]
    if not content:
        return
    for index, line in enumerate(content.split("\n")):
        if index:
            yield Event(EventKind.HARD_BREAK)
        yield Event(kind, text=line)


def _container_event(token: Token) -> Event | None:
    if token.type.endswith("_open"):
        name, kind = token.type[: -len("_open")], EventKind.START
    elif token.type.endswith("_close"):
        name, kind = token.type[: -len("_close")], EventKind.END
    else:
        return None

    if name == "paragraph" and token.hidden:
        return None
    if name == "link":
        return _link_event(token, kind)
    if name == "heading":
        return Event(kind, tag=Tag(TagKind.HEADING, level=int(token.tag[1:])))
    if name == "bullet_list":
        return Event(kind, tag=Tag(TagKind.LIST))
    if name == "ordered_list":
        return Event(kind, tag=Tag(TagKind.LIST, start=int(token.attrGet("start") or 1)))
    if name in _CONTAINER_TAGS:
        return Event(kind, tag=Tag(_CONTAINER_TAGS[name]))
    return None


def iter_events(tokens: Iterable[Token]) -> Iterator[Event]:
    """Flatten markdown-it tokens into the translator's event vocabulary."""
    for token in tokens:
        if token.type == "inline":
            yield from iter_events(token.children or [])
        elif token.type in _INLINE_LEAVES:
            # Emphasis delimiters leave empty text tokens behind
            if token.content:
                yield Event(_INLINE_LEAVES[token.type], text=token.content)
        elif token.type in _BLOCK_LEAVES:
            yield from _block_lines(_BLOCK_LEAVES[token.type], token.content)
        elif token.type in ("fence", "code_block"):
            yield Event.start(TagKind.CODE_BLOCK)
            yield from _block_lines(EventKind.TEXT, token.content)
            yield Event.end(TagKind.CODE_BLOCK)
        elif token.type == "html_inline":
            if TASK_CHECKBOX_CLASS in token.content:
                yield Event(EventKind.TASK_LIST_MARKER, checked="checked" in token.content)
            else:
                yield Event(EventKind.INLINE_HTML, text=token.content)
        elif token.type == "image":
            yield Event.start(
                TagKind.IMAGE,
                dest_url=str(token.attrGet("src") or ""),
                title=str(token.attrGet("title") or ""),
            )
            yield from iter_events(token.children or [])
            yield Event.end(TagKind.IMAGE)
        elif token.type == "softbreak":
            yield Event(EventKind.SOFT_BREAK)
        elif token.type == "hardbreak":
            yield Event(EventKind.HARD_BREAK)
        elif token.type == "hr":
            yield Event(EventKind.RULE)
        elif token.type == "footnote_ref":
            yield Event(EventKind.FOOTNOTE_REFERENCE, text=str(token.meta.get("label", "")))
        else:
            event = _container_event(token)
            if event is not None:
                yield event


def merge_text(events: Iterable[Event]) -> Iterator[Event]:
    """Join runs of adjacent ``TEXT`` events into one event."""
    pending: Event | None = None
    for event in events:
        if event.kind is EventKind.TEXT:
            if pending is None:
                pending = event
            else:
                pending = Event(EventKind.TEXT, text=pending.text + event.text)
            continue
        if pending is not None:
            yield pending
            pending = None
        yield event
    if pending is not None:
        yield pending


def trim_task_markers(events: Iterable[Event]) -> Iterator[Event]:
    """Drop the space left between a task marker and the item text."""
    after_marker = False
    for event in events:
        if after_marker and event.kind is EventKind.TEXT and event.text.startswith(" "):
            event = Event(EventKind.TEXT, text=event.text[1:])
        after_marker = event.kind is EventKind.TASK_LIST_MARKER
        yield event


def tokenize(text: str, config: RenderConfig | None = None) -> list[Event]:
    """Tokenize Markdown text into a balanced event stream.

    Args:
        text: Markdown source.
        config: Configuration selecting syntax extensions; defaults to a new
            `RenderConfig`.

    Returns:
        list[Event]: Events in document order.

    Examples:
        tokenize("# Title")  # [Start(HEADING), Text("Title"), End(HEADING)]
    """
    md = create_parser(config)
    return list(trim_task_markers(merge_text(iter_events(md.parse(text)))))
