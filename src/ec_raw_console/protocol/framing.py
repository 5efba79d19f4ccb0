"""Splitting mailbox packets across 64-byte USB HID reports.

Report layout::

    +-----------+------------------+---------+
    | Chunk len |      Chunk       | Padding |
    | 1 byte    | up to 63 bytes   | to 64 B |
    +-----------+------------------+---------+
"""

from __future__ import annotations

HID_REPORT_SIZE = 64
MAX_CHUNK_SIZE = HID_REPORT_SIZE - 1


def build_reports(packet: bytes) -> list[bytes]:
    """Split a packet into 64-byte HID reports.

    An empty packet still produces one (empty) report.
    """
    reports: list[bytes] = []
    offset = 0
    while True:
        chunk = packet[offset : offset + MAX_CHUNK_SIZE]
        report = bytes([len(chunk)]) + chunk + b"\x00" * (MAX_CHUNK_SIZE - len(chunk))
        reports.append(report)
        offset += MAX_CHUNK_SIZE
        if offset >= len(packet):
            break
    return reports


def unwrap_report(report: bytes) -> bytes:
    """Return the meaningful bytes of a single report."""
    if len(report) < 1:
        return b""
    chunk_size = min(report[0], MAX_CHUNK_SIZE)
    return bytes(report[1 : 1 + chunk_size])


def join_reports(reports: list[bytes]) -> bytes:
    """Concatenate the meaningful bytes of several reports."""
    return b"".join(unwrap_report(report) for report in reports)
