"""Physical transports that carry mailbox packets to the controller."""

from .usb_connection import USBConnection
