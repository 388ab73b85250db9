"""
Inventory source backed by the Pick-n-Pull vehicle search page.

The search results are rendered client-side, so the page is loaded in
headless Chromium with Playwright and the results table is read once it
appears.
"""

from typing import List, Sequence

from playwright.async_api import async_playwright

from ..models.config import SearchFilter
from ..models.inventory import InventoryItem
from ..utils.error_handling import SourceUnavailableError
from ..utils.logging import get_logger

# Column order of the results table.
COLUMNS = ("id", "make", "model", "year", "color", "location", "date_added")

ROWS_SCRIPT = """
() => Array.from(document.querySelectorAll('table tbody tr')).map(
    row => Array.from(row.querySelectorAll('td')).map(td => td.textContent)
)
"""

logger = get_logger("inventory.source")


def parse_rows(rows: Sequence[Sequence[str]]) -> List[InventoryItem]:
    """
    Convert the cell texts of each results row into inventory items.

    Rows with fewer cells than the table has columns (such as a "no
    results" placeholder) are skipped.
    """
    items = []
    for index, cells in enumerate(rows):
        if len(cells) < len(COLUMNS):
            logger.warning(
                "Skipping results row with missing columns",
                extra={"row": index, "cell_count": len(cells)},
            )
            continue

        values = {name: (cells[i] or "").strip() for i, name in enumerate(COLUMNS)}
        if not values["id"]:
            logger.warning("Skipping results row without an id", extra={"row": index})
            continue

        items.append(InventoryItem(**values))

    return items


class PickNPullInventorySource:
    """Scrapes the current inventory for one search filter."""

    def __init__(
        self, search: SearchFilter, headless: bool = True, page_timeout: int = 10
    ):
        """
        Initialize the inventory source.

        Args:
            search: Search filter to build the results URL from
            headless: Whether to run the browser without a window
            page_timeout: Seconds to wait for the results table
        """
        self.url = search.build_url()
        self.headless = headless
        self.page_timeout = page_timeout

    async def fetch_current_snapshot(self) -> List[InventoryItem]:
        """
        Scrape every row of the results table.

        Raises:
            SourceUnavailableError: If the page could not be loaded or the
                results table never appeared.
        """
        try:
            logger.info("Launching browser.")
            async with async_playwright() as playwright:
                browser = await playwright.chromium.launch(
                    headless=self.headless,
                    args=["--no-sandbox", "--disable-setuid-sandbox"],
                )
                try:
                    page = await browser.new_page()

                    logger.info(
                        "Navigating to URL, waiting for table data to load...",
                        extra={"url": self.url},
                    )
                    await page.goto(self.url, wait_until="networkidle")
                    await page.wait_for_selector(
                        "table", timeout=self.page_timeout * 1000
                    )
                    rows = await page.evaluate(ROWS_SCRIPT)
                finally:
                    await browser.close()
        except Exception as e:
            raise SourceUnavailableError(f"Error scraping webpage: {e}") from e

        items = parse_rows(rows)
        logger.info(
            "Successfully scraped data from the webpage.",
            extra={"item_count": len(items)},
        )
        return items
