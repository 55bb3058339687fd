"""Scraper utilities for browser management and data normalization."""

from .normalizer import CurrencyConverter, PriceNormalizer
from .title_formatter import TitleFormatter


__all__ = [
    "PriceNormalizer",
    "CurrencyConverter",
    "TitleFormatter",
]
