"""
Protocol interfaces for the Pick-n-Pull inventory watch.

These protocols are the seams between the check orchestrator and its
collaborators, so each collaborator can be swapped out in tests.
"""

from typing import List, Protocol

from .models.delivery import DeliveryResult
from .models.inventory import InventoryItem


class IInventorySource(Protocol):
    """Protocol for producing the current inventory snapshot."""

    async def fetch_current_snapshot(self) -> List[InventoryItem]:
        """Fetch every item currently listed for the watched search."""
        ...


class ISnapshotStore(Protocol):
    """Protocol for loading and saving the last acted-upon snapshot."""

    def load(self) -> List[InventoryItem]:
        """Load the persisted snapshot, or an empty one if none exists."""
        ...

    def save(self, snapshot: List[InventoryItem]) -> None:
        """Atomically replace the persisted snapshot."""
        ...


class INotifier(Protocol):
    """Protocol for delivering a text message to the configured recipient."""

    async def notify(self, text: str) -> DeliveryResult:
        """Send a text message."""
        ...

    def test_connection(self) -> bool:
        """Test connection to the messaging platform."""
        ...
