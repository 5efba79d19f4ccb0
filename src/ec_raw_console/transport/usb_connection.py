"""USB HID connection to the controller's debug bridge.

Supports both ``hidapi`` (preferred) and ``pyusb`` backends. Mailbox
packets are split across 64-byte HID reports on the way out, and
response reports are collected until the announced packet size has
arrived.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..errors import TransportError
from ..models.message import Request, Response
from ..protocol.framing import HID_REPORT_SIZE, build_reports, unwrap_report
from ..protocol.mailbox import (
    RESPONSE_HEADER_SIZE,
    decode_response,
    encode_request,
    response_data_size,
)

logger = logging.getLogger(__name__)

VENDOR_ID = 0x0483
PRODUCT_ID = 0x5750
HID_INTERFACE = 0
EP_IN = 0x81
EP_OUT = 0x01
READ_TIMEOUT_MS = 1000


@dataclass
class DeviceInfo:
    """Descriptor strings of the opened bridge."""

    manufacturer: str = ""
    product: str = ""


class USBConnection:
    """A mailbox transport over the bridge's HID interface.

    Usage::

        conn = USBConnection()
        conn.open()
        response = conn.send(request)
        conn.close()
    """

    def __init__(
        self,
        vendor_id: int = VENDOR_ID,
        product_id: int = PRODUCT_ID,
        timeout_ms: int = READ_TIMEOUT_MS,
    ) -> None:
        self._vendor_id = vendor_id
        self._product_id = product_id
        self._timeout_ms = timeout_ms
        self._device = None
        self._backend: str = ""
        self.device_info = DeviceInfo()

    @property
    def connected(self) -> bool:
        return self._device is not None

    def open(self) -> DeviceInfo:
        """Open the bridge with hidapi, falling back to pyusb.

        Raises:
            ConnectionError: If neither backend can open the device.
        """
        try:
            self._open_hidapi()
        except Exception as e:
            logger.debug("hidapi backend failed: %s, trying pyusb", e)
            try:
                self._open_pyusb()
            except Exception as err:
                raise ConnectionError(
                    f"Could not open bridge {self._vendor_id:#06x}:"
                    f"{self._product_id:#06x}: {err}"
                ) from err

        logger.info(
            "Bridge opened via %s: %s %s",
            self._backend,
            self.device_info.manufacturer,
            self.device_info.product,
        )
        return self.device_info

    def _open_hidapi(self) -> None:
        import hid

        device = hid.device()
        device.open(self._vendor_id, self._product_id)
        device.set_nonblocking(False)
        self.device_info = DeviceInfo(
            device.get_manufacturer_string() or "",
            device.get_product_string() or "",
        )
        self._device, self._backend = device, "hidapi"

    def _open_pyusb(self) -> None:
        import usb.core
        import usb.util

        dev = usb.core.find(idVendor=self._vendor_id, idProduct=self._product_id)
        if dev is None:
            raise ConnectionError("Device not found via pyusb")
        if dev.is_kernel_driver_active(HID_INTERFACE):
            dev.detach_kernel_driver(HID_INTERFACE)
        usb.util.claim_interface(dev, HID_INTERFACE)
        self.device_info = DeviceInfo(
            usb.util.get_string(dev, dev.iManufacturer) or "",
            usb.util.get_string(dev, dev.iProduct) or "",
        )
        self._device, self._backend = dev, "pyusb"

    def close(self) -> None:
        """Release the bridge. Closing a closed connection does nothing."""
        if self._device is None:
            return
        try:
            if self._backend == "hidapi":
                self._device.close()
            else:
                import usb.util
                usb.util.release_interface(self._device, HID_INTERFACE)
        except Exception as e:
            logger.warning("Error closing bridge: %s", e)
        finally:
            self._device = None
            logger.info("Bridge closed")

    def write(self, report: bytes) -> int:
        """Write one 64-byte HID report.

        Raises:
            ConnectionError: If not connected.
            ValueError: If the report is not 64 bytes.
        """
        if self._device is None:
            raise ConnectionError("Not connected to device")
        if len(report) != HID_REPORT_SIZE:
            raise ValueError(
                f"HID report must be {HID_REPORT_SIZE} bytes, got {len(report)}"
            )
        if self._backend == "hidapi":
            return self._device.write(report)
        return self._device.write(EP_OUT, report, timeout=self._timeout_ms)

    def read(self) -> bytes | None:
        """Read one 64-byte HID report, or None if the read timed out.

        Raises:
            ConnectionError: If not connected.
        """
        if self._device is None:
            raise ConnectionError("Not connected to device")

        if self._backend == "hidapi":
            data = self._device.read(HID_REPORT_SIZE, self._timeout_ms)
            if data:
                return bytes(data)
            return None

        import usb.core

        try:
            data = self._device.read(EP_IN, HID_REPORT_SIZE, timeout=self._timeout_ms)
        except usb.core.USBTimeoutError:
            return None
        return bytes(data)

    def send(self, request: Request) -> Response:
        """Perform one mailbox exchange.

        Args:
            request: The raw request to deliver.

        Returns:
            The controller's response, at most ``request.response_size``
            bytes.

        Raises:
            ConnectionError: If not connected.
            TransportError: On timeout, on a header announcing more data
                than ``request.response_size``, or on a malformed or
                failed response.
        """
        packet = encode_request(request)
        for report in build_reports(packet):
            self.write(report)
        logger.debug("Sent %d-byte mailbox packet", len(packet))

        received = b""
        expected: int | None = None
        while expected is None or len(received) < expected:
            report = self.read()
            if report is None:
                raise TransportError(
                    f"Timed out after {len(received)} response bytes"
                )
            received += unwrap_report(report)
            if expected is None:
                size = response_data_size(received)
                if size is None:
                    continue
                if size > request.response_size:
                    raise TransportError(
                        f"Response of {size} bytes exceeds capacity of "
                        f"{request.response_size}"
                    )
                expected = RESPONSE_HEADER_SIZE + size

        return decode_response(received, request.response_size)
