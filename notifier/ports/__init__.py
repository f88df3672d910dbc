"""
Port interfaces for the notifier hexagonal architecture.

This module defines the port interfaces (Protocols) that define
the contracts between the dedup gate and external adapters.
"""

from .transport import MailTransportPort
from .record_store import RecordStorePort

__all__ = ["MailTransportPort", "RecordStorePort"]
