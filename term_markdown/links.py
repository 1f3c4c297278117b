"""Link destination formatting and the per-document link registry."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterator

from .models import LinkType, Tag


def format_link_destination(tag: Tag) -> str:
    """Render a link tag as the string shown in the link list.

    Args:
        tag: A ``LINK`` tag carrying the link type, destination, title and
            reference id.

    Returns:
        str: Display string for the destination. Link types that cannot be
            resolved to a destination render as a fixed bracketed label.

    Raises:
        ValueError: If the tag has no link type.

    Examples:
        format_link_destination(Tag(TagKind.LINK, link_type=LinkType.INLINE, dest_url="a"))  # "(a)"
        format_link_destination(Tag(TagKind.LINK, link_type=LinkType.REFERENCE, id="1"))  # "[1]"
    """
    link_type = tag.link_type
    if link_type is LinkType.INLINE:
        return f"({tag.dest_url})"
    if link_type is LinkType.REFERENCE:
        return f"[{tag.id}]"
    if link_type is LinkType.SHORTCUT:
        return f"[{tag.title}]"
    if link_type is LinkType.REFERENCE_UNKNOWN:
        return "[unknown]"
    if link_type is LinkType.COLLAPSED:
        return "[collapsed]"
    if link_type is LinkType.COLLAPSED_UNKNOWN:
        return "[collapsed unknown]"
    if link_type is LinkType.SHORTCUT_UNKNOWN:
        return "[shortcut unknown]"
    if link_type in (LinkType.AUTOLINK, LinkType.EMAIL):
        return tag.dest_url
    if link_type is LinkType.WIKI_LINK:
        return "[wiki]"
    raise ValueError(f"Link tag has no link type: {tag!r}")


class LinkRegistry:
    """Deduplicated link destinations kept in lexicographic order.

    Entries are compared as plain strings, so iteration order follows code
    points rather than the order links appear in the document.

    Examples:
        registry = LinkRegistry()
        registry.add("(https://b.example)")
        registry.add("(https://a.example)")
        list(registry)  # ["(https://a.example)", "(https://b.example)"]
    """

    def __init__(self) -> None:
        self._entries: list[str] = []

    def add(self, destination: str) -> bool:
        """Insert a formatted destination.

        Returns:
            bool: True when the entry is new, False when it was already present.
        """
        index = bisect_left(self._entries, destination)
        if index < len(self._entries) and self._entries[index] == destination:
            return False
        self._entries.insert(index, destination)
        return True

    def register(self, tag: Tag) -> str:
        """Format a link tag and insert the result."""
        destination = format_link_destination(tag)
        self.add(destination)
        return destination

    def get(self, index: int) -> str | None:
        """Return the entry at `index`, or None when out of range."""
        if 0 <= index < len(self._entries):
            return self._entries[index]
        return None

    def __getitem__(self, index: int) -> str:
        return self._entries[index]

    def __contains__(self, destination: object) -> bool:
        if not isinstance(destination, str):
            return False
        index = bisect_left(self._entries, destination)
        return index < len(self._entries) and self._entries[index] == destination

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"LinkRegistry({self._entries!r})"
