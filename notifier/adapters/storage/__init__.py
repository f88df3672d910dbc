"""
Storage adapters for the notifier.

This module contains the JSON file based record store used
to remember which notifications were already delivered.
"""

from .json_store import JsonRecordStore

__all__ = ["JsonRecordStore"]
