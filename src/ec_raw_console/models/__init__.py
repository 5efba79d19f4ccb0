"""Data models for mailbox requests and responses."""

from .message import MessageFlag, MessageType, Request, Response
