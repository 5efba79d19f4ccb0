"""Tests for HID report framing."""

from ec_raw_console.protocol.framing import (
    HID_REPORT_SIZE,
    MAX_CHUNK_SIZE,
    build_reports,
    join_reports,
    unwrap_report,
)


def test_single_report():
    """Small packets fit in one 64-byte report with a length prefix."""
    reports = build_reports(b"\x03\x00\xf0")
    assert len(reports) == 1
    assert len(reports[0]) == HID_REPORT_SIZE
    assert reports[0][0] == 3
    assert reports[0][1:4] == b"\x03\x00\xf0"
    assert reports[0][4:] == b"\x00" * (HID_REPORT_SIZE - 4)


def test_empty_packet_still_sends_report():
    reports = build_reports(b"")
    assert len(reports) == 1
    assert reports[0][0] == 0


def test_chunked_reports():
    """Packets larger than one report are split in 63-byte chunks."""
    packet = bytes(range(200))
    reports = build_reports(packet)
    assert len(reports) == 4
    for report in reports:
        assert len(report) == HID_REPORT_SIZE
    assert [r[0] for r in reports] == [63, 63, 63, 11]
    assert join_reports(reports) == packet


def test_exact_multiple_has_no_trailing_report():
    reports = build_reports(bytes(MAX_CHUNK_SIZE * 2))
    assert len(reports) == 2


def test_unwrap_ignores_padding_and_bad_length():
    assert unwrap_report(b"") == b""
    assert unwrap_report(b"\x02ab\x00\x00") == b"ab"
    report = bytes([0xFF]) + bytes(range(1, 64))
    assert len(unwrap_report(report)) == MAX_CHUNK_SIZE
