"""Tests for raw request building."""

import pytest

from ec_raw_console.errors import TooShort
from ec_raw_console.models.message import MessageFlag, MessageType, Request
from ec_raw_console.protocol.request import (
    EC_MAILBOX_DATA_SIZE,
    EC_MAILBOX_DATA_SIZE_EXTENDED,
    build_request,
    response_capacity,
)


def test_message_type_values():
    """Verify the known mailbox message types."""
    assert MessageType.LEGACY == 0x00F0
    assert MessageType.PROPERTY == 0x00F2
    assert MessageType.TELEMETRY_SHORT == 0x00F5
    assert MessageType.TELEMETRY_LONG == 0x00F6


def test_build_legacy_request():
    """Type is big-endian, command is byte 2, payload the rest."""
    request = build_request(bytes([0x00, 0xF0, 0x38, 0x00, 0x03, 0x00]))
    assert request.type == MessageType.LEGACY
    assert request.command == 0x38
    assert request.payload == bytes([0x00, 0x03, 0x00])
    assert request.response_size == EC_MAILBOX_DATA_SIZE
    assert request.flags == MessageFlag.RAW
    assert not request.extended


def test_build_minimum_request():
    """Three bytes give a request with an empty payload."""
    request = build_request(bytes([0x12, 0x34, 0x56]))
    assert request.type == 0x1234
    assert request.command == 0x56
    assert request.payload == b""


def test_too_short():
    for data in (b"", b"\x00", b"\x00\xf0"):
        with pytest.raises(TooShort) as excinfo:
            build_request(data)
        assert excinfo.value.count == len(data)


def test_extended_type_selects_extended_capacity():
    request = build_request(bytes([0x00, 0xF6, 0x01]))
    assert request.response_size == EC_MAILBOX_DATA_SIZE_EXTENDED
    assert request.extended
    assert request.flags & MessageFlag.RAW == MessageFlag.RAW


def test_response_capacity_depends_only_on_type():
    assert response_capacity(MessageType.TELEMETRY_LONG) == (
        EC_MAILBOX_DATA_SIZE_EXTENDED,
        MessageFlag.EXTENDED_DATA,
    )
    for msg_type in (0x0000, MessageType.LEGACY, MessageType.TELEMETRY_SHORT, 0xF600):
        assert response_capacity(msg_type) == (EC_MAILBOX_DATA_SIZE, MessageFlag.NONE)


def test_request_repr():
    r = repr(Request(type=0x00F0, command=0x38, payload=b"\x03"))
    assert "0x00F0" in r
    assert "0x38" in r
