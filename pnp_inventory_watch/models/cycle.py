"""
Check cycle result models.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .inventory import InventoryItem


class CycleOutcome(Enum):
    """Terminal state of one inventory check cycle."""

    NO_NEW_ITEMS = "no_new_items"
    NOTIFIED = "notified"
    NOTIFY_FAILED = "notify_failed"
    ABORTED = "aborted"


class CycleStep(Enum):
    """Cycle steps that can fail."""

    FETCH = "fetch"
    LOAD = "load"
    SAVE = "save"
    NOTIFY = "notify"


@dataclass
class CycleResult:
    """What one call to CheckOrchestrator.run_once() did."""

    outcome: CycleOutcome
    new_items: List[InventoryItem] = field(default_factory=list)
    failed_step: Optional[CycleStep] = None
    error_message: Optional[str] = None

    @property
    def record_saved(self) -> bool:
        """True when the persisted record was replaced during the cycle."""
        return self.outcome in (CycleOutcome.NOTIFIED, CycleOutcome.NOTIFY_FAILED)
