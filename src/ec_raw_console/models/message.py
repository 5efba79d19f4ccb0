"""Mailbox message types, flags, and the request/response records."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag


class MessageType(IntEnum):
    """Known mailbox message types (bytes 0-1 of a raw request)."""

    LEGACY = 0x00F0
    PROPERTY = 0x00F2
    TELEMETRY_SHORT = 0x00F5
    TELEMETRY_LONG = 0x00F6


class MessageFlag(IntFlag):
    """Flags carried alongside a request to the transport."""

    NONE = 0
    NO_RESPONSE = 0x01
    EXTENDED_DATA = 0x02
    RAW_REQUEST = 0x04
    RAW_RESPONSE = 0x08
    RAW = RAW_REQUEST | RAW_RESPONSE


@dataclass(frozen=True)
class Request:
    """A raw request destined for the controller mailbox."""

    type: int
    command: int
    payload: bytes = b""
    flags: MessageFlag = MessageFlag.RAW
    response_size: int = 0

    @property
    def extended(self) -> bool:
        return bool(self.flags & MessageFlag.EXTENDED_DATA)

    def __repr__(self) -> str:
        return (
            f"Request(type=0x{self.type:04X}, command=0x{self.command:02X}, "
            f"payload={self.payload.hex(' ') if self.payload else '(empty)'}, "
            f"response_size={self.response_size})"
        )


@dataclass(frozen=True)
class Response:
    """Bytes returned by the controller for one request."""

    data: bytes = b""

    @property
    def length(self) -> int:
        return len(self.data)

    def __repr__(self) -> str:
        return f"Response(length={self.length})"
