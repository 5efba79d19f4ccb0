"""Errors raised by the raw console.

Every failure of ``DebugSession.write`` is one of these. None of them
leaves the session unusable.
"""

from __future__ import annotations


class ConsoleError(Exception):
    """Base class for raw console failures."""


class InputTooLarge(ConsoleError, ValueError):
    """The written sentence exceeds the console input buffer."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Input of {size} characters exceeds limit of {limit}")
        self.size = size
        self.limit = limit


class ParseError(ConsoleError, ValueError):
    """The hex sentence is malformed."""

    def __init__(self, message: str, word: str) -> None:
        super().__init__(message)
        self.word = word


class WordTooLong(ParseError):
    def __init__(self, word: str, limit: int) -> None:
        super().__init__(
            f"Word {word[:limit]!r}... is longer than {limit} characters", word
        )
        self.limit = limit


class InvalidToken(ParseError):
    def __init__(self, word: str) -> None:
        super().__init__(f"Word {word!r} is not a hex byte (00-ff)", word)


class BuildError(ConsoleError, ValueError):
    """Parsed bytes do not form a request."""


class TooShort(BuildError):
    def __init__(self, count: int, minimum: int) -> None:
        super().__init__(
            f"Need at least {minimum} bytes (type + command), got {count}"
        )
        self.count = count
        self.minimum = minimum


class TransportError(ConsoleError):
    """The exchange with the controller failed.

    ``result`` holds the controller's non-zero result code when the
    failure was reported by the controller itself.
    """

    def __init__(self, reason: str, result: int | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.result = result
