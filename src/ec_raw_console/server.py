"""MCP server entry point for the EC raw console.

Exposes the raw write/read console as tools via the Model Context
Protocol using the official Python MCP SDK with stdio transport.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .errors import ConsoleError
from .models.message import MessageType
from .protocol.request import response_capacity
from .session import DebugSession
from .transport.usb_connection import PRODUCT_ID, VENDOR_ID, USBConnection

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "ec-raw-console",
    instructions="Raw mailbox console for an embedded controller",
)

# Global connection state
_connection: USBConnection | None = None
_session: DebugSession | None = None

MESSAGE_TYPE_DESCRIPTIONS = {
    MessageType.LEGACY: "Execute legacy command",
    MessageType.PROPERTY: "Read/write NVRAM property",
    MessageType.TELEMETRY_SHORT: "Short telemetry",
    MessageType.TELEMETRY_LONG: "Long telemetry (extended response)",
}


def _get_session() -> DebugSession:
    """Get the console session, raising if not connected."""
    if _session is None or _connection is None or not _connection.connected:
        raise RuntimeError(
            "Not connected to device. Use the 'connect' tool first."
        )
    return _session


# ─── CONNECTION TOOLS ─────────────────────────────────────────────────

@mcp.tool()
def connect(vendor_id: int = VENDOR_ID, product_id: int = PRODUCT_ID) -> dict[str, Any]:
    """Open the USB connection to the controller bridge.

    Args:
        vendor_id: USB vendor ID of the bridge.
        product_id: USB product ID of the bridge.
    """
    global _connection, _session
    if _connection is not None and _connection.connected:
        return {
            "connected": True,
            "message": "Already connected",
            "product": _connection.device_info.product,
        }

    _connection = USBConnection(vendor_id=vendor_id, product_id=product_id)
    info = _connection.open()
    _session = DebugSession(_connection)

    return {
        "connected": True,
        "product": info.product,
        "manufacturer": info.manufacturer,
    }


@mcp.tool()
def disconnect() -> dict[str, bool]:
    """Close the USB connection and drop any unread response."""
    global _connection, _session
    if _connection is not None:
        _connection.close()
    _connection = None
    _session = None
    return {"disconnected": True}


# ─── RAW CONSOLE TOOLS ───────────────────────────────────────────────

@mcp.tool()
def raw_write(sentence: str) -> dict[str, Any]:
    """Send a raw request written as a hex sentence.

    Bytes 0-1 are the message type (00 f0 legacy command, 00 f2 NVRAM
    property, 00 f6 long telemetry), byte 2 the command code, and any
    further bytes the request data.

    Args:
        sentence: Whitespace-separated hex bytes, e.g. "00 f0 38 00 03 00".
    """
    session = _get_session()
    try:
        written = session.write(sentence)
    except ConsoleError as e:
        logger.debug("raw_write failed: %s", e)
        return {"error": str(e), "kind": type(e).__name__}
    return {"written": written}


@mcp.tool()
def raw_read() -> dict[str, str]:
    """Read the response to the last raw_write as a hex dump.

    Each response is returned only once; later reads return an empty
    string until the next successful raw_write.
    """
    return {"response": _get_session().read()}


@mcp.tool()
def session_status() -> dict[str, Any]:
    """Report whether a connection is open and a response is waiting."""
    connected = _connection is not None and _connection.connected
    return {
        "connected": connected,
        "has_unread_response": bool(_session and _session.has_unread_response),
    }


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("ec://message-types")
def resource_message_types() -> str:
    """Known mailbox message types and their response capacities."""
    types = []
    for msg_type, description in MESSAGE_TYPE_DESCRIPTIONS.items():
        size, _ = response_capacity(msg_type)
        types.append({
            "type": f"{msg_type.value >> 8:02x} {msg_type.value & 0xFF:02x}",
            "name": msg_type.name,
            "description": description,
            "response_capacity": size,
        })
    return json.dumps({"message_types": types})


# ─── MCP PROMPTS ─────────────────────────────────────────────────────

@mcp.prompt()
def query_firmware_build_date() -> str:
    """Walk through reading the controller firmware build date."""
    return """Request EC info type 3 (firmware build date) with a legacy command.

1. Call raw_write with the sentence "00 f0 38 00 03 00".
2. Call raw_read once. The ASCII column of the dump holds the date,
   e.g. ".12/21/18.8...".

A second raw_read returns nothing; repeat raw_write to query again."""


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
