"""Tests for the USB HID transport, with the HID device mocked."""

from __future__ import annotations

import sys
from unittest.mock import MagicMock, patch

import pytest

from ec_raw_console.errors import TransportError
from ec_raw_console.models.message import Request
from ec_raw_console.protocol.framing import HID_REPORT_SIZE, build_reports, join_reports
from ec_raw_console.protocol.mailbox import encode_request, encode_response
from ec_raw_console.protocol.request import build_request
from ec_raw_console.transport.usb_connection import USBConnection


def _open_with_fake_hid(reports: list[bytes]) -> tuple[USBConnection, MagicMock]:
    """Open a connection through a mocked ``hid`` module."""
    device = MagicMock()
    device.get_manufacturer_string.return_value = "Acme"
    device.get_product_string.return_value = "EC Bridge"
    device.read.side_effect = [list(r) for r in reports] + [[]]
    device.write.side_effect = lambda report: len(report)
    fake_hid = MagicMock()
    fake_hid.device.return_value = device

    conn = USBConnection()
    with patch.dict(sys.modules, {"hid": fake_hid}):
        info = conn.open()
    assert info.product == "EC Bridge"
    return conn, device


def test_open_uses_hidapi():
    conn, device = _open_with_fake_hid([])
    assert conn.connected
    assert conn.device_info.manufacturer == "Acme"
    device.set_nonblocking.assert_called_once_with(False)


def test_send_short_exchange():
    """Request reports go out, the response packet is decoded."""
    reply = build_reports(encode_response(b"12/21/18"))
    conn, device = _open_with_fake_hid(reply)

    request = build_request(bytes.fromhex("00f0380003 00"))
    response = conn.send(request)

    assert response.data == b"12/21/18"
    written = [c.args[0] for c in device.write.call_args_list]
    assert all(len(r) == HID_REPORT_SIZE for r in written)
    assert join_reports(written) == encode_request(request)


def test_send_extended_exchange_spans_reports():
    data = bytes(range(256))
    reply = build_reports(encode_response(data))
    assert len(reply) > 1
    conn, device = _open_with_fake_hid(reply)

    response = conn.send(build_request(bytes([0x00, 0xF6, 0x01])))
    assert response.data == data
    assert device.read.call_count == len(reply)


def test_send_timeout():
    conn, device = _open_with_fake_hid([])
    with pytest.raises(TransportError, match="Timed out"):
        conn.send(Request(type=0x00F0, command=0x01, response_size=32))


def test_send_controller_error():
    reply = build_reports(encode_response(b"", result=0x0010))
    conn, device = _open_with_fake_hid(reply)
    with pytest.raises(TransportError) as excinfo:
        conn.send(Request(type=0x00F0, command=0x01, response_size=32))
    assert excinfo.value.result == 0x10


def test_send_rejects_oversized_header_without_waiting():
    """A header announcing more than the request allows fails at once."""
    reply = build_reports(encode_response(bytes(0x1000)))
    conn, device = _open_with_fake_hid(reply)
    with pytest.raises(TransportError, match="exceeds capacity of 32"):
        conn.send(Request(type=0x00F0, command=0x01, response_size=32))
    assert device.read.call_count == 1


def test_send_requires_connection():
    conn = USBConnection()
    with pytest.raises(ConnectionError):
        conn.send(Request(type=0x00F0, command=0x01, response_size=32))


def test_write_rejects_bad_report_size():
    conn, device = _open_with_fake_hid([])
    with pytest.raises(ValueError):
        conn.write(b"\x00" * 10)


def test_close():
    conn, device = _open_with_fake_hid([])
    conn.close()
    assert not conn.connected
    device.close.assert_called_once()
    conn.close()  # closing twice is a no-op


def test_open_failure_raises_connection_error():
    fake_hid = MagicMock()
    fake_hid.device.return_value.open.side_effect = OSError("open failed")
    fake_usb_core = MagicMock()
    fake_usb_core.find.return_value = None
    fake_usb = MagicMock(core=fake_usb_core)

    conn = USBConnection()
    with patch.dict(
        sys.modules,
        {"hid": fake_hid, "usb": fake_usb, "usb.core": fake_usb_core, "usb.util": fake_usb.util},
    ):
        with pytest.raises(ConnectionError):
            conn.open()
    assert not conn.connected
