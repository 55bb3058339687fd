"""Scraper system for fetching product pages from e-commerce shops.

This package provides:
- Base fetcher classes for building shop-specific scrapers
- ProductExtractor for turning product pages into records
- Utility modules for browser management and data normalization
"""

from .base import (
    BasePageFetcher,
    BaseScraperAdapter,
    CategoryLink,
    ProductPageSnapshot,
)
from .extractor import ProductExtractor, SelectorSet

__all__ = [
    # Base classes
    "BasePageFetcher",
    "BaseScraperAdapter",
    # Data structures
    "CategoryLink",
    "ProductPageSnapshot",
    # Extraction
    "ProductExtractor",
    "SelectorSet",
]
