"""Raw request builder.

Request layout (as parsed from the hex sentence)::

    +-----------+---------+---------------------+
    |   Type    | Command |       Payload       |
    | 2 bytes BE|  1 byte | 0..32 bytes         |
    +-----------+---------+---------------------+

- Type: mailbox message type, e.g. 00 F0 (legacy command) or
  00 F2 (NVRAM property)
- Command: command code, the first byte of mailbox data
- Payload: remaining mailbox data

Requests of type 00 F6 (long telemetry) use the extended response
capacity; every other type uses the default one.
"""

from __future__ import annotations

from ..errors import TooShort
from ..models.message import MessageFlag, MessageType, Request

EC_MAILBOX_DATA_SIZE = 32
EC_MAILBOX_DATA_SIZE_EXTENDED = 256
EXTENDED_MESSAGE_TYPE = MessageType.TELEMETRY_LONG

HEADER_SIZE = 3  # 2 (type) + 1 (command)
TYPE_AND_DATA_SIZE = EC_MAILBOX_DATA_SIZE + 2


def response_capacity(msg_type: int) -> tuple[int, MessageFlag]:
    """Return the response capacity and extra flags for a message type."""
    if msg_type == EXTENDED_MESSAGE_TYPE:
        return EC_MAILBOX_DATA_SIZE_EXTENDED, MessageFlag.EXTENDED_DATA
    return EC_MAILBOX_DATA_SIZE, MessageFlag.NONE


def build_request(data: bytes) -> Request:
    """Interpret parsed sentence bytes as a raw mailbox request.

    Args:
        data: Bytes produced by the hex sentence parser.

    Returns:
        A ``Request`` flagged as raw, with its response capacity set.

    Raises:
        TooShort: If fewer than three bytes were given.
    """
    if len(data) < HEADER_SIZE:
        raise TooShort(len(data), HEADER_SIZE)

    msg_type = int.from_bytes(data[0:2], "big")
    size, extra = response_capacity(msg_type)
    return Request(
        type=msg_type,
        command=data[2],
        payload=bytes(data[3:]),
        flags=MessageFlag.RAW | extra,
        response_size=size,
    )
