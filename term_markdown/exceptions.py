"""Package-specific exception types."""

from __future__ import annotations

from .models import Context, Event, TagKind


class RenderError(ValueError):
    """Base class for errors raised while translating markdown events.

    Represents errors encountered while turning an event stream into lines.
    """


class MalformedEventStreamError(RenderError):
    """Raised when the event stream does not nest properly.

    An unmatched end event, an attempt to pop the base context, or a context
    still open at the end of the stream all mean the tokenizer broke its
    contract.

    Args:
        message: Description of the violation.
        event: Offending event, or None when the stream ended early.
        context: Context on top of the stack when the violation was found.
    """

    def __init__(self, message: str, event: Event | None = None, context: Context | None = None):
        self.event = event
        self.context = context
        super().__init__(message)


class UnsupportedConstructError(RenderError):
    """Raised in strict mode when a construct has no rendering.

    Args:
        kind: Tag kind of the unsupported construct.
    """

    def __init__(self, kind: TagKind):
        self.kind = kind
        super().__init__(f"Unsupported markdown construct: {describe_tag(kind)}")


def describe_tag(kind: TagKind) -> str:
    return kind.name.lower().replace("_", " ")
