"""
Orchestrators for the notifier.
"""

from .gate import DedupGate

__all__ = ["DedupGate"]
