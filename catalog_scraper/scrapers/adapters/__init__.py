"""Shop-specific page fetchers.

Each adapter module implements a class that inherits from
BaseScraperAdapter and publishes the SelectorSet for its product pages.
"""

from .zooart import (
    ZOOART_SELECTORS,
    ZooartPageFetcher,
    create_zooart_extractor,
    parse_category_links,
)

__all__ = [
    "ZOOART_SELECTORS",
    "ZooartPageFetcher",
    "create_zooart_extractor",
    "parse_category_links",
]
