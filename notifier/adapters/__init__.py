"""
Adapters for the notifier hexagonal architecture.

This module contains the concrete implementations of port interfaces
that handle file and network I/O.
"""

from .storage import JsonRecordStore
from .sendgrid import SendGridTransport

__all__ = ["JsonRecordStore", "SendGridTransport"]
