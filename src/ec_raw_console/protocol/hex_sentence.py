"""Hex sentence tokenizer.

A hex sentence is a run of ASCII hexadecimal words separated by
whitespace, one word per byte::

    "   00 f2 0    000076 6 0  ff"  ->  00 f2 00 76 06 00 ff
"""

from __future__ import annotations

import re
from typing import Iterator

from ..errors import InvalidToken, WordTooLong

MAX_WORD_SIZE = 16

# C isspace(): space, \t, \n, \v, \f, \r
_WORD_RE = re.compile(r"[^ \t\n\v\f\r]+")
_HEX_RE = re.compile(r"\+?(?:0[xX])?[0-9a-fA-F]+")


def iter_words(text: str) -> Iterator[str]:
    """Yield the whitespace-separated words of ``text`` lazily."""
    for match in _WORD_RE.finditer(text):
        yield match.group()


def parse_word(word: str) -> int:
    """Convert a single hex word into a byte value.

    Raises:
        WordTooLong: If the word exceeds ``MAX_WORD_SIZE`` characters.
        InvalidToken: If the word is not a hex number in 0..255.
    """
    if len(word) > MAX_WORD_SIZE:
        raise WordTooLong(word, MAX_WORD_SIZE)
    if not _HEX_RE.fullmatch(word):
        raise InvalidToken(word)
    value = int(word, 16)
    if value > 0xFF:
        raise InvalidToken(word)
    return value


def parse_hex_sentence(text: str, max_out: int) -> bytes:
    """Convert an ASCII hex sentence into bytes.

    Parsing stops once ``max_out`` bytes have been produced; any words
    after that point are ignored without being checked.

    Args:
        text: Whitespace-separated hex words.
        max_out: Maximum number of bytes to produce.

    Returns:
        The parsed bytes. Empty or all-whitespace input yields ``b""``.

    Raises:
        WordTooLong: A word is longer than ``MAX_WORD_SIZE`` characters.
        InvalidToken: A word is not a valid hex byte.
    """
    out = bytearray()
    if max_out <= 0:
        return bytes(out)
    for word in iter_words(text):
        out.append(parse_word(word))
        if len(out) >= max_out:
            break
    return bytes(out)
