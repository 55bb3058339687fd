"""Data normalization utilities for number parsing and price conversion."""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union


Number = Union[int, float, Decimal]

# Longest leading float literal, ASCII digits only
_LEADING_FLOAT = re.compile(r"[0-9]+(?:\.[0-9]*)?|\.[0-9]+")
_NON_NUMERIC = re.compile(r"[^0-9.]")


class PriceNormalizer:
    """Parsing of loosely formatted numbers scraped from Polish shop pages."""

    @staticmethod
    def parse_number(raw: Optional[str]) -> Optional[float]:
        """Parse a localized number string.

        Handles various formats:
        - "12,50 zł" -> 12.5
        - "1 299,00 zł" -> 1299.0
        - "Punkty: 45" -> 45.0
        - "abc" -> None

        The first comma is taken as the decimal separator, everything that is
        not a digit or a period is dropped, and the longest leading float
        literal is read. Never raises.

        Args:
            raw: Raw text from the page, or None when the node is missing

        Returns:
            Parsed value, or None if nothing numeric is left
        """
        if not raw:
            return None

        cleaned = _NON_NUMERIC.sub("", raw.replace(",", ".", 1))

        match = _LEADING_FLOAT.match(cleaned)
        if not match:
            return None

        try:
            return float(match.group(0))
        except ValueError:
            return None


class CurrencyConverter:
    """Fixed-rate currency conversion with a profit margin."""

    _CENT = Decimal("0.01")

    @classmethod
    def convert(cls, price: Number, rate: Number, margin: Number) -> float:
        """Convert a source-currency price and add the profit margin.

        ``price * rate * (1 + margin)``, rounded to cents with halves going
        away from zero. Inputs go through their decimal string form so that
        0.23 means exactly 0.23.

        Args:
            price: Price in the source currency
            rate: Units of target currency per unit of source currency
            margin: Profit margin as a fraction (0.10 = 10%)

        Returns:
            Converted price with at most two decimal places
        """
        converted = _to_decimal(price) * _to_decimal(rate)
        with_margin = converted * (Decimal("1") + _to_decimal(margin))
        return float(with_margin.quantize(cls._CENT, rounding=ROUND_HALF_UP))


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Not a finite number: {value!r}")
