"""
Core components for the Pick-n-Pull inventory watch.

This module contains the components that fetch the current inventory,
persist the last known snapshot, detect new items, and deliver
notifications.
"""

from .inventory_differ import diff
from .message_formatter import MessageFormatter
from .snapshot_store import JsonSnapshotStore
from .telegram_notifier import TelegramNotifier

__all__ = [
    "diff",
    "MessageFormatter",
    "JsonSnapshotStore",
    "TelegramNotifier",
]
