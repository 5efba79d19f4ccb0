"""Mailbox packet codec used between the host and the controller.

Request packet::

    +---------+----------+------------+---------+----------+-----------+----------------+
    | Version | Checksum | Mailbox ID | MB ver. | Reserved | Data size |      Data      |
    | 1 byte  | 1 byte   | 2 bytes LE | 1 byte  | 1 byte   | 2 bytes LE| command+payload|
    +---------+----------+------------+---------+----------+-----------+----------------+

Response packet::

    +------------+------------+----------+----------+--------------+
    |   Result   | Data size  | Checksum | Reserved |     Data     |
    | 2 bytes LE | 2 bytes LE | 1 byte   | 1 byte   | 0..capacity  |
    +------------+------------+----------+----------+--------------+

- Mailbox ID: the request's message type
- Checksum: chosen so that the 8-bit sum of the whole packet is zero
- Result: zero on success, otherwise a controller error code
"""

from __future__ import annotations

from ..errors import TransportError
from ..models.message import Request, Response
from ..utils.checksum import checksum8, verify8

STRUCT_VERSION = 3
MAILBOX_VERSION = 0
REQUEST_HEADER_SIZE = 8
RESPONSE_HEADER_SIZE = 6


def encode_request(request: Request) -> bytes:
    """Serialize a request into a mailbox packet."""
    data = bytes([request.command]) + request.payload
    header = bytearray(REQUEST_HEADER_SIZE)
    header[0] = STRUCT_VERSION
    header[2:4] = request.type.to_bytes(2, "little")
    header[4] = MAILBOX_VERSION
    header[6:8] = len(data).to_bytes(2, "little")
    packet = bytearray(header + data)
    packet[1] = checksum8(packet)
    return bytes(packet)


def response_data_size(header: bytes) -> int | None:
    """Return the data size announced by a response header, if complete."""
    if len(header) < RESPONSE_HEADER_SIZE:
        return None
    return int.from_bytes(header[2:4], "little")


def encode_response(data: bytes, result: int = 0) -> bytes:
    """Serialize a response packet, as the controller side does."""
    packet = bytearray(RESPONSE_HEADER_SIZE)
    packet[0:2] = result.to_bytes(2, "little")
    packet[2:4] = len(data).to_bytes(2, "little")
    packet += data
    packet[4] = checksum8(packet)
    return bytes(packet)


def decode_response(packet: bytes, capacity: int) -> Response:
    """Parse a mailbox response packet.

    Args:
        packet: Complete response packet (header + data).
        capacity: Largest data size the request allows.

    Returns:
        The ``Response`` holding the data bytes.

    Raises:
        TransportError: On a truncated packet, a checksum mismatch, a
            non-zero result code, or data larger than ``capacity``.
    """
    size = response_data_size(packet)
    if size is None:
        raise TransportError(f"Response header truncated ({len(packet)} bytes)")
    if len(packet) < RESPONSE_HEADER_SIZE + size:
        raise TransportError(
            f"Response truncated: expected {size} data bytes, "
            f"got {len(packet) - RESPONSE_HEADER_SIZE}"
        )
    packet = packet[: RESPONSE_HEADER_SIZE + size]
    if not verify8(packet):
        raise TransportError("Response checksum mismatch")

    result = int.from_bytes(packet[0:2], "little")
    if result != 0:
        raise TransportError(f"Controller returned error 0x{result:04X}", result)
    if size > capacity:
        raise TransportError(
            f"Response of {size} bytes exceeds capacity of {capacity}"
        )
    return Response(data=bytes(packet[RESPONSE_HEADER_SIZE:]))
