"""Product field extraction from rendered product pages.

Every scalar text field follows the same rule: select the node, read its
text, trim it, and fall back to an empty string when the node is missing.
Numeric fields go through PriceNormalizer.parse_number and are None when
absent or unparseable.
"""

import re
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urljoin

import structlog
from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from catalog_scraper.schemas.product import (
    CatalogRecord,
    FailedProductRecord,
    ProductRecord,
    SizeVariant,
    utc_timestamp,
)
from catalog_scraper.scrapers.base import ProductPageSnapshot
from catalog_scraper.scrapers.utils.normalizer import PriceNormalizer

logger = structlog.get_logger(__name__)

_BLOCK_TAGS = frozenset({
    "address", "article", "blockquote", "br", "dd", "div", "dl", "dt",
    "h1", "h2", "h3", "h4", "h5", "h6", "hr", "li", "ol", "p", "pre",
    "section", "table", "tbody", "td", "th", "thead", "tr", "ul",
})
_SKIPPED_TAGS = frozenset({"script", "style", "template"})
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class SelectorSet:
    """CSS selectors for each product field on a shop's product page."""

    title: str
    brand: str
    product_code: str
    series: str
    short_description: str
    long_description: str
    catalog_price: str
    unit_price: str
    availability: str
    shipping: str
    loyalty_points: str
    labels: str
    gallery_images: str
    main_photo: str
    sizes: str
    product_id: str
    gallery_image_attr: str = "data-zoom-image"


class ProductExtractor:
    """Turns a product page snapshot into a ProductRecord."""

    def __init__(self, selectors: SelectorSet, site_origin: str):
        """
        Args:
            selectors: Field selectors for the shop
            site_origin: Scheme and host prefixed to gallery image paths
        """
        self.selectors = selectors
        self.site_origin = site_origin.rstrip("/")

    def extract(self, snapshot: ProductPageSnapshot) -> CatalogRecord:
        """Extract one product record.

        Never raises: any failure yields a FailedProductRecord for the
        snapshot URL so that one bad page cannot stop a batch.
        """
        try:
            return self._extract(snapshot)
        except Exception as e:
            logger.error("product_extraction_failed", url=snapshot.url, error=str(e))
            return self.failure(snapshot.url, str(e))

    @staticmethod
    def failure(url: str, error: str) -> FailedProductRecord:
        """Failure-shaped record for a product page that could not be scraped."""
        return FailedProductRecord(
            url=url,
            error=f"Failed to scrape product page. {error}",
            scraped_at=utc_timestamp(),
        )

    def _extract(self, snapshot: ProductPageSnapshot) -> ProductRecord:
        soup = BeautifulSoup(snapshot.html, "html.parser")
        sel = self.selectors

        record = ProductRecord(
            title=_text(soup, sel.title),
            url=snapshot.url,
            brand=_text(soup, sel.brand),
            product_code=_text(soup, sel.product_code),
            series=_text(soup, sel.series),
            short_description=_text(soup, sel.short_description),
            long_description=_block_text(soup, sel.long_description),
            catalog_price=PriceNormalizer.parse_number(_raw_text(soup, sel.catalog_price)),
            unit_price=PriceNormalizer.parse_number(_raw_text(soup, sel.unit_price)),
            availability=_text(soup, sel.availability),
            shipping=_text(soup, sel.shipping),
            loyalty_points=PriceNormalizer.parse_number(_raw_text(soup, sel.loyalty_points)),
            labels=[el.get_text().strip() for el in soup.select(sel.labels)],
            images=self._images(soup, snapshot.url),
            sizes=self._sizes(soup),
            product_id=_attr(soup.select_one(sel.product_id), "value"),
            scraped_at=utc_timestamp(),
        )
        logger.debug("product_extracted", url=record.url, title=record.title)
        return record

    def _images(self, soup: BeautifulSoup, page_url: str) -> List[str]:
        """Gallery zoom images, or the single main photo when the gallery is empty."""
        images = []
        for img in soup.select(self.selectors.gallery_images):
            path = img.get(self.selectors.gallery_image_attr)
            if path:
                images.append(f"{self.site_origin}{path}")

        if not images:
            main_photo = soup.select_one(self.selectors.main_photo)
            href = _attr(main_photo, "href")
            if href:
                images.append(urljoin(page_url, href))

        return images

    def _sizes(self, soup: BeautifulSoup) -> List[SizeVariant]:
        return [
            SizeVariant(
                type=_attr(button, "data-type"),
                name=button.get_text().strip(),
                price=PriceNormalizer.parse_number(button.get("data-price")),
            )
            for button in soup.select(self.selectors.sizes)
        ]


def _raw_text(soup: BeautifulSoup, selector: str) -> Optional[str]:
    node = soup.select_one(selector)
    return node.get_text() if node else None


def _text(soup: BeautifulSoup, selector: str) -> str:
    raw = _raw_text(soup, selector)
    return raw.strip() if raw else ""


def _block_text(soup: BeautifulSoup, selector: str) -> str:
    """Text with one line per text block, as a rendered description reads.

    Block elements and <br> start a new line; inline markup such as <b> or
    <a> stays within its line. Whitespace inside a line is collapsed and
    empty lines are dropped.
    """
    node = soup.select_one(selector)
    if node is None:
        return ""

    parts: List[str] = []
    _collect_text(node, parts)
    lines = (" ".join(line.split()) for line in "".join(parts).split("\n"))
    return "\n".join(line for line in lines if line)


def _collect_text(node: Tag, parts: List[str]) -> None:
    for child in node.children:
        if isinstance(child, Tag):
            if child.name in _SKIPPED_TAGS:
                continue
            is_block = child.name in _BLOCK_TAGS
            if is_block:
                parts.append("\n")
            _collect_text(child, parts)
            if is_block:
                parts.append("\n")
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            parts.append(_WHITESPACE.sub(" ", str(child)))


def _attr(node: Optional[Tag], name: str) -> str:
    if node is None:
        return ""
    value = node.get(name)
    if isinstance(value, list):  # multi-valued attributes such as class
        value = " ".join(value)
    return value.strip() if value else ""
