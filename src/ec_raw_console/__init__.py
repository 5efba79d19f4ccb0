"""Raw command/response console for an embedded controller mailbox."""

from .errors import (
    ConsoleError,
    InputTooLarge,
    ParseError,
    WordTooLong,
    InvalidToken,
    BuildError,
    TooShort,
    TransportError,
)
from .session import DebugSession, RawConsole
