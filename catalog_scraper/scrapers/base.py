"""Base page fetcher interface.

Shop-specific fetchers inherit from BasePageFetcher (or the Playwright-backed
BaseScraperAdapter) and return plain page snapshots. Field extraction from a
snapshot is done by ProductExtractor, independently of any browser.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

import structlog
from playwright.async_api import Error as PlaywrightError, Page

from catalog_scraper.core.exceptions import ScraperError
from catalog_scraper.scrapers.utils.browser_manager import BrowserManager


@dataclass
class CategoryLink:
    """A product link found on a category listing page."""

    url: str
    title: str = ""

    def __post_init__(self):
        """Validate data after initialization."""
        if not self.url:
            raise ValueError("url is required")


@dataclass
class ProductPageSnapshot:
    """Rendered HTML of a product page, taken once its product form is present."""

    url: str  # Final address after redirects
    html: str
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        """Validate data after initialization."""
        if not self.url:
            raise ValueError("url is required")


class BasePageFetcher(ABC):
    """Abstract base class for all page fetchers.

    A fetcher knows how to reach a shop's pages; it does not interpret
    product fields.
    """

    shop_slug: str = ""  # Must be overridden in subclass (e.g., "zooart")
    shop_name: str = ""

    def __init__(self):
        self.logger = structlog.get_logger(adapter=self.shop_slug)

    @abstractmethod
    async def fetch_category_links(self, url: str) -> List[CategoryLink]:
        """Collect product links from a category page, in page order.

        Raises:
            ScraperError: If the category page cannot be loaded
        """

    @abstractmethod
    async def fetch_product_page(self, url: str) -> ProductPageSnapshot:
        """Load a product page and snapshot its rendered HTML.

        Raises:
            ScraperError: If navigation fails or the product form never renders
        """

    async def cleanup(self) -> None:
        """Release resources (browser, connections)."""


class BaseScraperAdapter(BasePageFetcher):
    """Base class for Playwright-driven fetchers.

    Reuses one page for every request, like a person clicking through the
    shop in a single tab.
    """

    def __init__(self, browser_manager: BrowserManager):
        super().__init__()
        self.browser_manager = browser_manager
        self._page: Optional[Page] = None

    async def _get_page(self) -> Page:
        if self._page is None or self._page.is_closed():
            self._page = await self.browser_manager.new_page()
        return self._page

    async def _safe_scrape(
        self,
        page: Page,
        url: str,
        wait_selector: Optional[str] = None,
        navigation_timeout: int = 60000,
        selector_timeout: int = 10000,
    ) -> None:
        """Navigate to a URL and wait for the page to settle.

        Args:
            page: Playwright Page instance
            url: URL to open
            wait_selector: Optional CSS selector that must appear
            navigation_timeout: Navigation timeout in milliseconds
            selector_timeout: Timeout for ``wait_selector`` in milliseconds

        Raises:
            ScraperError: On any Playwright navigation or wait failure
        """
        self.logger.info("scraping_url", url=url)
        try:
            await page.goto(url, wait_until="networkidle", timeout=navigation_timeout)
            if wait_selector:
                await page.wait_for_selector(wait_selector, timeout=selector_timeout)
        except PlaywrightError as e:
            raise ScraperError(self.shop_name or self.shop_slug, f"{url}: {e.message}")

    async def cleanup(self) -> None:
        """Close the page and shut the browser down."""
        if self._page is not None:
            if not self._page.is_closed():
                await self._page.close()
            self._page = None
        await self.browser_manager.stop()
