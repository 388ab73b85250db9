"""
Check orchestrator for the Pick-n-Pull inventory watch.

One cycle fetches the current inventory, compares it against the persisted
record, and when new items appear saves the new snapshot before sending a
single notification. Saving first means a failed delivery is never repeated
by the next cycle, at the cost of that notification being lost.
"""

from typing import List, Optional

from .components.inventory_differ import diff
from .components.message_formatter import MessageFormatter
from .components.snapshot_store import JsonSnapshotStore
from .components.telegram_notifier import TelegramNotifier
from .interfaces import IInventorySource, INotifier, ISnapshotStore
from .models.config import Configuration
from .models.cycle import CycleOutcome, CycleResult, CycleStep
from .models.inventory import InventoryItem
from .utils.error_handling import (
    ErrorCategory,
    ErrorSeverity,
    ErrorTracker,
    InventoryWatchError,
    NotifyError,
    PersistError,
    RecordCorruptError,
    SourceUnavailableError,
    get_error_tracker,
)
from .utils.logging import get_logger


class CycleAborted(Exception):
    """Internal signal that a cycle step failed and the cycle must stop."""

    def __init__(self, step: CycleStep, error: InventoryWatchError):
        super().__init__(str(error))
        self.step = step
        self.error = error


class CheckOrchestrator:
    """
    Runs inventory check cycles.

    Cycles must not overlap; each one holds the snapshot store for its whole
    duration and reads and writes it at most once.
    """

    def __init__(
        self,
        source: IInventorySource,
        store: ISnapshotStore,
        notifier: INotifier,
        formatter: Optional[MessageFormatter] = None,
        error_tracker: Optional[ErrorTracker] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            source: Produces the current inventory snapshot
            store: Loads and saves the persisted snapshot
            notifier: Delivers the notification text
            formatter: Renders new items as a message
            error_tracker: Where failures are recorded
        """
        self.source = source
        self.store = store
        self.notifier = notifier
        self.formatter = formatter or MessageFormatter()
        self.error_tracker = error_tracker or get_error_tracker()
        self.logger = get_logger("orchestrator")

    @classmethod
    def from_config(cls, config: Configuration) -> "CheckOrchestrator":
        """Build an orchestrator with the production collaborators."""
        from .components.inventory_source import PickNPullInventorySource

        return cls(
            source=PickNPullInventorySource(
                config.search,
                headless=config.headless,
                page_timeout=config.page_timeout,
            ),
            store=JsonSnapshotStore(config.record_file),
            notifier=TelegramNotifier(
                bot_token=config.telegram.bot_token,
                chat_id=config.telegram.chat_id,
            ),
            formatter=MessageFormatter(label=config.search.label),
        )

    async def run_once(self) -> CycleResult:
        """
        Run one complete check cycle.

        Never raises: every failure is logged, recorded, and reflected in
        the returned CycleResult.
        """
        self.logger.info("Starting inventory check.")
        try:
            result = await self._run_cycle()
        except CycleAborted as aborted:
            self._report(aborted.step, aborted.error)
            return CycleResult(
                outcome=CycleOutcome.ABORTED,
                failed_step=aborted.step,
                error_message=str(aborted.error),
            )
        except Exception as e:
            self.logger.error(
                f"An error occurred during the inventory check: {e}", exc_info=True
            )
            self.error_tracker.record_error(
                component="orchestrator",
                category=ErrorCategory.SYSTEM,
                severity=ErrorSeverity.CRITICAL,
                message=str(e),
                exception=e,
            )
            return CycleResult(outcome=CycleOutcome.ABORTED, error_message=str(e))

        self.logger.info(
            "Inventory check completed.", extra={"outcome": result.outcome.value}
        )
        return result

    async def _run_cycle(self) -> CycleResult:
        current = await self._fetch()
        previous = self._load()

        new_items = diff(current, previous)
        if not new_items:
            self.logger.info("No new entries found.")
            return CycleResult(outcome=CycleOutcome.NO_NEW_ITEMS)

        self.logger.info(
            f"Found {len(new_items)} new entries. Updating record.",
            extra={"new_ids": [item.id for item in new_items]},
        )
        self._save(current)

        error = await self._notify(new_items)
        if error is not None:
            self._report(CycleStep.NOTIFY, error)
            return CycleResult(
                outcome=CycleOutcome.NOTIFY_FAILED,
                new_items=new_items,
                failed_step=CycleStep.NOTIFY,
                error_message=str(error),
            )

        return CycleResult(outcome=CycleOutcome.NOTIFIED, new_items=new_items)

    async def _fetch(self) -> List[InventoryItem]:
        try:
            current = await self.source.fetch_current_snapshot()
        except SourceUnavailableError as e:
            raise CycleAborted(CycleStep.FETCH, e) from e
        except Exception as e:
            raise CycleAborted(
                CycleStep.FETCH, SourceUnavailableError(str(e))
            ) from e

        self.logger.info(
            f"Fetched {len(current)} items from the inventory source.",
            extra={"item_count": len(current)},
        )
        return current

    def _load(self) -> List[InventoryItem]:
        try:
            return self.store.load()
        except RecordCorruptError as e:
            raise CycleAborted(CycleStep.LOAD, e) from e
        except Exception as e:
            raise CycleAborted(CycleStep.LOAD, RecordCorruptError(str(e))) from e

    def _save(self, snapshot: List[InventoryItem]) -> None:
        try:
            self.store.save(snapshot)
        except PersistError as e:
            raise CycleAborted(CycleStep.SAVE, e) from e
        except Exception as e:
            raise CycleAborted(CycleStep.SAVE, PersistError(str(e))) from e

    async def _notify(self, new_items: List[InventoryItem]) -> Optional[NotifyError]:
        """Send the notification; returns the failure instead of raising it."""
        try:
            text = self.formatter.format_new_items(new_items)
            delivery = await self.notifier.notify(text)
            if not delivery.success:
                return NotifyError(
                    delivery.error_message or "Notification was not delivered"
                )
        except Exception as e:
            return NotifyError(str(e))

        self.logger.info(
            "Sent notification.",
            extra={
                "new_item_count": len(new_items),
                "delivery_time": delivery.delivery_time.isoformat(),
            },
        )
        return None

    def _report(self, step: CycleStep, error: InventoryWatchError) -> None:
        self.logger.error(
            f"An error occurred during the inventory check: {error}",
            extra={"step": step.value, "error_type": type(error).__name__},
        )
        self.error_tracker.record_error(
            component="orchestrator",
            category=error.category,
            severity=error.severity,
            message=str(error),
            exception=error,
            context={"step": step.value},
        )
