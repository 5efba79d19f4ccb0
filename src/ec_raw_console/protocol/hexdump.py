"""Hex dump rendering for controller responses.

Each line shows up to 16 bytes::

    00000000: 00 31 32 2f 32 31 2f 31 38 00 38 00 01 00 2f 00  .12/21/18.8.../.
"""

from __future__ import annotations

from .request import EC_MAILBOX_DATA_SIZE_EXTENDED

ROW_SIZE = 16
PLACEHOLDER = "."

_LABEL_WIDTH = len("00000000: ")
_HEX_WIDTH = ROW_SIZE * 3 - 1
LINE_WIDTH = _LABEL_WIDTH + _HEX_WIDTH + 2 + ROW_SIZE + 1
DUMP_BUFFER_SIZE = (EC_MAILBOX_DATA_SIZE_EXTENDED // ROW_SIZE) * LINE_WIDTH


def _printable(byte: int) -> str:
    return chr(byte) if 0x20 <= byte < 0x7F else PLACEHOLDER


def format_line(offset: int, chunk: bytes) -> str:
    """Render one dump line for up to ``ROW_SIZE`` bytes at ``offset``."""
    hex_part = " ".join(f"{b:02x}" for b in chunk)
    ascii_part = "".join(_printable(b) for b in chunk)
    return f"{offset:08x}: {hex_part:<{_HEX_WIDTH}}  {ascii_part}\n"


def format_response(data: bytes, length: int | None = None) -> str:
    """Render the first ``length`` bytes of ``data`` as a hex dump.

    Args:
        data: Raw response buffer.
        length: Number of valid bytes; defaults to ``len(data)``.

    Returns:
        The dump text, or ``""`` when ``length`` is 0.

    Raises:
        ValueError: If ``length`` is negative, exceeds ``len(data)``, or
            exceeds the extended response capacity.
    """
    if length is None:
        length = len(data)
    if not 0 <= length <= len(data):
        raise ValueError(f"Length {length} outside buffer of {len(data)} bytes")
    if length > EC_MAILBOX_DATA_SIZE_EXTENDED:
        raise ValueError(
            f"Length {length} exceeds response capacity "
            f"{EC_MAILBOX_DATA_SIZE_EXTENDED}"
        )

    lines = [
        format_line(offset, data[offset : min(offset + ROW_SIZE, length)])
        for offset in range(0, length, ROW_SIZE)
    ]
    return "".join(lines)
