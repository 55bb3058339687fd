"""ZooArt (zooart.com.pl) scraper adapter.

Loads category listings and product pages via Playwright. The listing is
lazy-loaded, so the page is scrolled to the bottom before links are read.
"""

import asyncio
from typing import List, Optional
from urllib.parse import urljoin

import structlog
from bs4 import BeautifulSoup
from playwright.async_api import Error as PlaywrightError, Page

from catalog_scraper.config import settings
from catalog_scraper.core.exceptions import ScraperError
from catalog_scraper.scrapers.base import (
    BaseScraperAdapter,
    CategoryLink,
    ProductPageSnapshot,
)
from catalog_scraper.scrapers.extractor import ProductExtractor, SelectorSet
from catalog_scraper.scrapers.utils.browser_manager import BrowserManager


logger = structlog.get_logger()

_COOKIE_BUTTON = "button.btn_accept_all_cookies"
_LISTING_SELECTOR = "#search .product_wrapper"
_PRODUCT_LINK_SELECTOR = "#search .product_wrapper a.product-name"
_PRODUCT_FORM_SELECTOR = "#projector_form"

ZOOART_SELECTORS = SelectorSet(
    title="h1",
    brand=".producer a.brand",
    product_code=".code strong",
    series=".series a",
    short_description=".projector_description",
    long_description=".projector_longdescription",
    catalog_price="#projector_price_srp",
    unit_price="#unit_converted_price",
    availability="#projector_status div",
    shipping="#projector_delivery_days",
    loyalty_points="#projector_points_recive_points",
    labels=".label_icons span",
    gallery_images="#bx-pager img",
    main_photo="#projector_main_photo a",
    sizes=".sizes a.select_button",
    product_id='input[name="product"]',
)

# Scrolls in 100px steps until the bottom, then lets the last batch render
_AUTO_SCROLL_JS = """
async () => {
    await new Promise((resolve) => {
        let totalHeight = 0;
        const distance = 100;
        const timer = setInterval(() => {
            const scrollHeight = document.body.scrollHeight;
            window.scrollBy(0, distance);
            totalHeight += distance;
            if (totalHeight >= scrollHeight - window.innerHeight) {
                clearInterval(timer);
                setTimeout(resolve, 500);
            }
        }, 100);
    });
}
"""


def parse_category_links(html: str, page_url: str) -> List[CategoryLink]:
    """Product links of a listing page, in page order, as absolute URLs."""
    soup = BeautifulSoup(html, "html.parser")
    links = []
    for anchor in soup.select(_PRODUCT_LINK_SELECTOR):
        href = anchor.get("href")
        if not href:
            continue
        links.append(
            CategoryLink(url=urljoin(page_url, href), title=anchor.get_text().strip())
        )
    return links


def create_zooart_extractor(site_origin: Optional[str] = None) -> ProductExtractor:
    """ProductExtractor configured for ZooArt product pages."""
    return ProductExtractor(ZOOART_SELECTORS, site_origin or settings.SITE_ORIGIN)


class ZooartPageFetcher(BaseScraperAdapter):
    """ZooArt category and product page fetcher."""

    shop_slug = "zooart"
    shop_name = "ZooArt"

    def __init__(
        self,
        browser_manager: BrowserManager,
        navigation_timeout: int = settings.NAVIGATION_TIMEOUT_MS,
        selector_timeout: int = settings.SELECTOR_TIMEOUT_MS,
        cookie_timeout: int = settings.COOKIE_TIMEOUT_MS,
    ):
        super().__init__(browser_manager)
        self.navigation_timeout = navigation_timeout
        self.selector_timeout = selector_timeout
        self.cookie_timeout = cookie_timeout
        self.logger = logger.bind(adapter=self.shop_slug)

    async def fetch_category_links(self, url: str) -> List[CategoryLink]:
        """Collect every product link on a category page."""
        page = await self._get_page()
        self.logger.info("navigating_to_category", url=url)

        await self._safe_scrape(
            page, url,
            navigation_timeout=self.navigation_timeout,
        )
        await self._accept_cookies(page)

        try:
            await page.wait_for_selector(_LISTING_SELECTOR, timeout=self.selector_timeout)
            await page.evaluate(_AUTO_SCROLL_JS)
            await asyncio.sleep(2.0)
            html = await page.content()
        except PlaywrightError as e:
            raise ScraperError(self.shop_name, f"{url}: {e.message}")

        links = parse_category_links(html, page.url)
        self.logger.info("category_links_found", url=url, count=len(links))
        return links

    async def fetch_product_page(self, url: str) -> ProductPageSnapshot:
        """Open a product page and snapshot it once the product form is rendered."""
        page = await self._get_page()
        await self._safe_scrape(
            page, url, _PRODUCT_FORM_SELECTOR,
            navigation_timeout=self.navigation_timeout,
            selector_timeout=self.selector_timeout,
        )
        try:
            html = await page.content()
        except PlaywrightError as e:
            raise ScraperError(self.shop_name, f"{url}: {e.message}")
        return ProductPageSnapshot(url=page.url, html=html)

    async def _accept_cookies(self, page: Page) -> None:
        """Dismiss the cookie consent banner if it shows up."""
        try:
            await page.wait_for_selector(_COOKIE_BUTTON, timeout=self.cookie_timeout)
            await page.click(_COOKIE_BUTTON)
            self.logger.debug("cookie_banner_accepted")
        except PlaywrightError:
            self.logger.info("cookie_banner_not_found")
