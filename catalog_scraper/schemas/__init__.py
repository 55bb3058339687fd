"""Record schemas shared by the scraper, the pipeline and batch storage."""

from .product import (
    CatalogRecord,
    FailedProductRecord,
    ProductRecord,
    SizeVariant,
    dump_record,
    parse_record,
    utc_timestamp,
)

__all__ = [
    "CatalogRecord",
    "FailedProductRecord",
    "ProductRecord",
    "SizeVariant",
    "dump_record",
    "parse_record",
    "utc_timestamp",
]
