"""
Data models for the Pick-n-Pull inventory watch.

This module contains the data classes used throughout the application for
representing inventory snapshots, configuration, and cycle results.
"""

from .config import Configuration, SearchFilter, TelegramConfig
from .cycle import CycleOutcome, CycleResult, CycleStep
from .delivery import DeliveryResult
from .inventory import InventoryItem, Snapshot

__all__ = [
    "InventoryItem",
    "Snapshot",
    "DeliveryResult",
    "CycleOutcome",
    "CycleResult",
    "CycleStep",
    "Configuration",
    "SearchFilter",
    "TelegramConfig",
]
