"""The raw console session.

A ``DebugSession`` ties the hex sentence parser, the request builder,
the transport and the dump formatter together around a single response
buffer::

    session = DebugSession(transport)
    session.write("00 f0 38 00 03 00")
    print(session.read())   # hex dump of the controller's reply
    session.read()          # "" -- each response is delivered once

Only one response is held at a time. A successful write discards any
unread response, even one written by another caller.
"""

from __future__ import annotations

import logging
import threading
from typing import Protocol

from .errors import InputTooLarge, TransportError
from .models.message import Request, Response
from .protocol.hex_sentence import parse_hex_sentence
from .protocol.hexdump import format_response
from .protocol.request import (
    EC_MAILBOX_DATA_SIZE_EXTENDED,
    TYPE_AND_DATA_SIZE,
    build_request,
)

logger = logging.getLogger(__name__)

# Raw responses take up more room once rendered as hex
FORMATTED_BUFFER_SIZE = EC_MAILBOX_DATA_SIZE_EXTENDED * 4


class Transport(Protocol):
    """Blocking request/response exchange with the controller."""

    def send(self, request: Request) -> Response:
        ...


class RawConsole(Protocol):
    """The write/read pair exposed to console front ends."""

    def write(self, text: str | bytes | bytearray) -> int:
        ...

    def read(self) -> str:
        ...


class DebugSession:
    """Serializes raw writes and one-shot reads against one transport."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport
        self._lock = threading.Lock()
        self._response = b""
        self._has_unread_response = False

    @property
    def has_unread_response(self) -> bool:
        with self._lock:
            return self._has_unread_response

    def _clear(self) -> None:
        self._response = b""
        self._has_unread_response = False

    def write(self, text: str | bytes | bytearray) -> int:
        """Send the request described by a hex sentence.

        The lock is held for the whole call, including the transport
        round trip, so a concurrent ``read`` never sees a half-updated
        buffer.

        Args:
            text: Hex sentence, e.g. ``"00 f0 38 00 03 00"``. Bytes-like
                input (``bytes``, ``bytearray``, ``memoryview``) is decoded
                as ASCII.

        Returns:
            Number of characters consumed (all of ``text``).

        Raises:
            InputTooLarge: ``text`` exceeds ``FORMATTED_BUFFER_SIZE``.
            ParseError: The sentence is malformed. Any unread response
                is kept.
            TooShort: Fewer than three bytes were given. Any unread
                response is kept.
            TransportError: The exchange failed. No response is kept.
        """
        with self._lock:
            if len(text) > FORMATTED_BUFFER_SIZE:
                raise InputTooLarge(len(text), FORMATTED_BUFFER_SIZE)
            if not isinstance(text, str):
                text = bytes(text).decode("ascii", errors="replace")

            data = parse_hex_sentence(text, TYPE_AND_DATA_SIZE)
            request = build_request(data)
            logger.debug("Sending %r", request)

            # The stale response goes away even if the transport fails
            self._clear()

            response = self._transport.send(request)
            if response.length > request.response_size:
                raise TransportError(
                    f"Transport returned {response.length} bytes for a "
                    f"{request.response_size}-byte response buffer"
                )
            self._response = response.data
            self._has_unread_response = True
            logger.debug("Buffered %d response bytes", response.length)
            return len(text)

    def read(self) -> str:
        """Return the buffered response as a hex dump, once.

        Returns ``""`` when no unread response is buffered.
        """
        with self._lock:
            if not self._has_unread_response:
                return ""
            text = format_response(self._response)
            self._clear()
            return text
