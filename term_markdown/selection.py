"""Map single key presses to entries of the link registry."""

from __future__ import annotations

from .links import LinkRegistry

_DIGITS = "0123456789"


def key_to_index(key: str) -> int | None:
    """Translate a decoded key into a link index.

    Only the ASCII digits ``0`` to ``9`` select anything; every other key,
    including non-ASCII digits and multi-character key names, yields None.

    Examples:
        key_to_index("3")  # 3
        key_to_index("q")  # None
    """
    if len(key) != 1 or key not in _DIGITS:
        return None
    return _DIGITS.index(key)


def select_link(links: LinkRegistry, key: str) -> str | None:
    """Return the link selected by `key`, or None when nothing is selected."""
    index = key_to_index(key)
    if index is None:
        return None
    return links.get(index)
