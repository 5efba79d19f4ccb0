"""Protocol layer: hex sentence parsing, request building, dumps, and mailbox packets."""

from .hex_sentence import parse_hex_sentence
from .request import build_request
from .hexdump import format_response
