"""
Unit tests for the Pick-n-Pull inventory source.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from pnp_inventory_watch.components.inventory_source import (
    PickNPullInventorySource,
    parse_rows,
)
from pnp_inventory_watch.models.config import SearchFilter
from pnp_inventory_watch.utils.error_handling import SourceUnavailableError

ROW = [" 1234 ", "HYUNDAI", "ACCENT", "2012", "Silver", "Edmonton", " 10/15/2026\n"]


@pytest.fixture
def search():
    return SearchFilter(make="147", model="2683", zip_code="T5S1R2")


def mock_playwright(rows=None, goto_error=None):
    """Build a patched async_playwright() context with a fake browser."""
    page = MagicMock()
    page.goto = AsyncMock(side_effect=goto_error)
    page.wait_for_selector = AsyncMock()
    page.evaluate = AsyncMock(return_value=rows or [])

    browser = MagicMock()
    browser.new_page = AsyncMock(return_value=page)
    browser.close = AsyncMock()

    playwright = MagicMock()
    playwright.chromium.launch = AsyncMock(return_value=browser)

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=playwright)
    context.__aexit__ = AsyncMock(return_value=False)
    return context, page, browser


class TestParseRows:
    """Test cases for parse_rows()."""

    def test_maps_columns_and_strips_text(self):
        """Cells map onto item fields in table order."""
        items = parse_rows([ROW])

        assert len(items) == 1
        item = items[0]
        assert item.id == "1234"
        assert item.make == "HYUNDAI"
        assert item.model == "ACCENT"
        assert item.year == "2012"
        assert item.color == "Silver"
        assert item.location == "Edmonton"
        assert item.date_added == "10/15/2026"

    def test_skips_short_rows(self):
        """Placeholder rows without all columns are skipped."""
        items = parse_rows([["No vehicles found"], ROW])

        assert [item.id for item in items] == ["1234"]

    def test_skips_rows_without_id(self):
        """Rows with an empty id cell are skipped."""
        items = parse_rows([[" "] + ROW[1:]])

        assert items == []

    def test_keeps_source_order(self):
        """Items are returned in the order rows appear."""
        rows = [["b"] + ROW[1:], ["a"] + ROW[1:]]

        assert [item.id for item in parse_rows(rows)] == ["b", "a"]


class TestPickNPullInventorySource:
    """Test cases for PickNPullInventorySource."""

    def test_url_from_search(self, search):
        """The source scrapes the URL built from the search filter."""
        source = PickNPullInventorySource(search)

        assert source.url == search.build_url()

    @pytest.mark.asyncio
    async def test_fetch_current_snapshot(self, search):
        """Rows read from the page become inventory items."""
        context, page, browser = mock_playwright(rows=[ROW])

        with patch(
            "pnp_inventory_watch.components.inventory_source.async_playwright",
            return_value=context,
        ):
            items = await PickNPullInventorySource(search, page_timeout=5).fetch_current_snapshot()

        assert [item.id for item in items] == ["1234"]
        page.goto.assert_awaited_once_with(search.build_url(), wait_until="networkidle")
        page.wait_for_selector.assert_awaited_once_with("table", timeout=5000)
        browser.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_navigation_failure(self, search):
        """Browser errors surface as SourceUnavailableError and close the browser."""
        context, page, browser = mock_playwright(goto_error=RuntimeError("net::ERR_NAME_NOT_RESOLVED"))

        with patch(
            "pnp_inventory_watch.components.inventory_source.async_playwright",
            return_value=context,
        ):
            with pytest.raises(SourceUnavailableError, match="ERR_NAME_NOT_RESOLVED"):
                await PickNPullInventorySource(search).fetch_current_snapshot()

        browser.close.assert_awaited_once()
