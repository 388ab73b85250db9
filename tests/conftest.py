"""
Pytest configuration and shared fixtures.

This module provides common fixtures and test doubles for all tests in the
Pick-n-Pull inventory watch test suite.
"""

import os
from datetime import datetime
from typing import List, Optional

import pytest

from pnp_inventory_watch.models.delivery import DeliveryResult
from pnp_inventory_watch.models.inventory import InventoryItem
from pnp_inventory_watch.utils.error_handling import (
    ErrorTracker,
    SourceUnavailableError,
)


def make_item(item_id: str, **overrides) -> InventoryItem:
    """Create an InventoryItem with plausible attribute values."""
    values = {
        "make": "HYUNDAI",
        "model": "ACCENT",
        "year": "2012",
        "color": "Silver",
        "location": "Edmonton",
        "date_added": "10/15/2026",
    }
    values.update(overrides)
    return InventoryItem(id=item_id, **values)


class FakeInventorySource:
    """Inventory source returning a fixed snapshot, or failing."""

    def __init__(self, snapshot: Optional[List[InventoryItem]] = None, error=None):
        self.snapshot = snapshot or []
        self.error = error
        self.calls = 0

    async def fetch_current_snapshot(self) -> List[InventoryItem]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.snapshot)


class FakeNotifier:
    """Notifier that records every message it is asked to send."""

    def __init__(self, succeed: bool = True, error: Optional[Exception] = None):
        self.succeed = succeed
        self.error = error
        self.messages: List[str] = []

    async def notify(self, text: str) -> DeliveryResult:
        self.messages.append(text)
        if self.error is not None:
            raise self.error
        if self.succeed:
            return DeliveryResult(
                success=True, delivery_time=datetime.now(), error_message=None
            )
        return DeliveryResult(
            success=False,
            delivery_time=datetime.now(),
            error_message="Telegram API error: chat not found",
        )

    def test_connection(self) -> bool:
        return self.succeed


# Factory fixtures
@pytest.fixture
def item_factory():
    """Factory for InventoryItem objects."""
    return make_item


@pytest.fixture
def source_factory():
    """Factory for fake inventory sources."""
    return FakeInventorySource


@pytest.fixture
def notifier_factory():
    """Factory for fake notifiers."""
    return FakeNotifier


# Test data fixtures
@pytest.fixture
def sample_item():
    """Create a sample InventoryItem for testing."""
    return make_item("1")


@pytest.fixture
def sample_snapshot():
    """Create a two-item snapshot for testing."""
    return [
        make_item("1", year="2011", color="Red", date_added="10/14/2026"),
        make_item("2", year="2013", color="Blue", date_added="10/16/2026"),
    ]


@pytest.fixture
def record_file(tmp_path):
    """Path for an inventory record that does not exist yet."""
    return tmp_path / "inventory_record.json"


@pytest.fixture
def error_tracker():
    """A fresh error tracker, isolated from the process-wide one."""
    return ErrorTracker()


@pytest.fixture
def failing_source():
    """An inventory source whose fetch always fails."""
    return FakeInventorySource(error=SourceUnavailableError("Timeout 10000ms exceeded"))


# Environment fixtures
@pytest.fixture
def mock_env_vars():
    """Mock environment variables for testing."""
    env_vars = {
        "TELEGRAM_BOT_TOKEN": "test_bot_token",
        "TELEGRAM_CHAT_ID": "test_chat_id",
    }

    original_values = {}
    for key, value in env_vars.items():
        original_values[key] = os.environ.get(key)
        os.environ[key] = value

    yield env_vars

    for key, original_value in original_values.items():
        if original_value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = original_value


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")


def pytest_collection_modifyitems(config, items):
    """Add the unit marker to every test not marked otherwise."""
    for item in items:
        if not any(
            marker.name in ["integration", "slow"] for marker in item.iter_markers()
        ):
            item.add_marker(pytest.mark.unit)
