from __future__ import annotations


class ChatlogError(ValueError):
    """
    Base for request-terminal validation failures.

    Subclasses ValueError so callers that already map ValueError -> 422
    keep working.
    """


class InvalidDate(ChatlogError):
    pass


class MissingRange(ChatlogError):
    pass


class InvalidEvent(ChatlogError):
    pass
