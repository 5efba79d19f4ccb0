"""8-bit mailbox checksum."""

from __future__ import annotations


def checksum8(data: bytes) -> int:
    """Return the byte that makes the 8-bit sum of ``data`` plus itself zero.

    A packet carrying its own checksum byte therefore sums to zero, which
    is how both ends verify it.
    """
    return (-sum(data)) & 0xFF


def verify8(packet: bytes) -> bool:
    """Return True if the 8-bit sum over ``packet`` is zero."""
    return sum(packet) & 0xFF == 0
