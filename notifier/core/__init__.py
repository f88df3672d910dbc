"""
Core domain models and pure functions for the notifier.

This module contains the domain models, error types and pure
business logic that are independent of file and network I/O.
"""

from .models import Frequency, Recipient, SendGridConfig, NotifierConfig, SendResult
from .errors import (
    NotifierError,
    ConfigInvalid,
    StoreUnavailable,
    CorruptStore,
    DeliveryFailed,
    RecordPersistFailed,
)
from .config import resolve_config
from .policy import dedup_key, is_deduplicated

__all__ = [
    "Frequency", "Recipient", "SendGridConfig", "NotifierConfig", "SendResult",
    "NotifierError", "ConfigInvalid", "StoreUnavailable", "CorruptStore",
    "DeliveryFailed", "RecordPersistFailed",
    "resolve_config", "dedup_key", "is_deduplicated",
]
