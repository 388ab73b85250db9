"""
Error handling utilities for the Pick-n-Pull inventory watch.

This module defines the error taxonomy of an inventory check and a
process-wide tracker that keeps a bounded history of reported failures.
"""

import traceback
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional

from .logging import get_logger


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for classification."""

    SOURCE = "source"
    STORAGE = "storage"
    MESSAGE_DELIVERY = "message_delivery"
    CONFIGURATION = "configuration"
    SYSTEM = "system"


class InventoryWatchError(Exception):
    """Base class for failures inside an inventory check cycle."""

    category = ErrorCategory.SYSTEM
    severity = ErrorSeverity.HIGH


class SourceUnavailableError(InventoryWatchError):
    """The current inventory snapshot could not be fetched."""

    category = ErrorCategory.SOURCE


class RecordCorruptError(InventoryWatchError):
    """The persisted record exists but cannot be read or parsed."""

    category = ErrorCategory.STORAGE
    severity = ErrorSeverity.CRITICAL


class PersistError(InventoryWatchError):
    """Writing the updated record failed."""

    category = ErrorCategory.STORAGE
    severity = ErrorSeverity.CRITICAL


class NotifyError(InventoryWatchError):
    """Sending the notification failed after the record was saved."""

    category = ErrorCategory.MESSAGE_DELIVERY
    severity = ErrorSeverity.MEDIUM


@dataclass
class ErrorInfo:
    """Information about an error occurrence."""

    timestamp: datetime
    component: str
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    exception_type: str
    traceback: str
    context: Dict[str, Any]


class ErrorTracker:
    """
    Tracks errors and provides statistics for monitoring.
    """

    def __init__(self, max_errors: int = 1000):
        """
        Initialize error tracker.

        Args:
            max_errors: Maximum number of errors to keep in memory
        """
        self.max_errors = max_errors
        self.errors: List[ErrorInfo] = []
        self.error_counts: Dict[str, int] = {}
        self.logger = get_logger("error_tracker")

    def record_error(
        self,
        component: str,
        category: ErrorCategory,
        severity: ErrorSeverity,
        message: str,
        exception: Optional[Exception] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> ErrorInfo:
        """
        Record an error occurrence.

        Args:
            component: Component where error occurred
            category: Error category
            severity: Error severity
            message: Error message
            exception: Exception object if available
            context: Additional context information

        Returns:
            ErrorInfo object
        """
        error_info = ErrorInfo(
            timestamp=datetime.now(),
            component=component,
            category=category,
            severity=severity,
            message=message,
            exception_type=type(exception).__name__ if exception else "Unknown",
            traceback="".join(traceback.format_exception(exception))
            if exception
            else "",
            context=context or {},
        )

        self.errors.append(error_info)
        if len(self.errors) > self.max_errors:
            self.errors.pop(0)

        error_key = f"{component}.{category.value}.{severity.value}"
        self.error_counts[error_key] = self.error_counts.get(error_key, 0) + 1

        self.logger.debug(
            f"Error recorded: {message}",
            extra={
                "component": component,
                "category": category.value,
                "severity": severity.value,
                "exception_type": error_info.exception_type,
                "context": context,
            },
        )

        return error_info

    def get_error_stats(self) -> Dict[str, Any]:
        """Get error statistics."""
        last_day = datetime.now() - timedelta(days=1)

        return {
            "total_errors": len(self.errors),
            "errors_last_day": len([e for e in self.errors if e.timestamp >= last_day]),
            "error_counts": self.error_counts.copy(),
            "severity_breakdown": {
                severity.value: len([e for e in self.errors if e.severity == severity])
                for severity in ErrorSeverity
            },
            "category_breakdown": {
                category.value: len([e for e in self.errors if e.category == category])
                for category in ErrorCategory
            },
        }


# Global error tracker instance
_error_tracker: Optional[ErrorTracker] = None


def get_error_tracker() -> ErrorTracker:
    """Get global error tracker instance."""
    global _error_tracker
    if _error_tracker is None:
        _error_tracker = ErrorTracker()
    return _error_tracker
