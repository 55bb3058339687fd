"""Pydantic schemas for scraped product records.

A batch file is a JSON array whose items are either a full product record or
a failure record (``url``, ``error``, ``scrapedAt`` only). JSON keys are
camelCase; Python attributes are snake_case.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


class _RecordModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class SizeVariant(_RecordModel):
    """A purchasable option (e.g. package size) with its own price."""

    type: str = ""
    name: str = ""
    price: Optional[float] = None


class ProductRecord(_RecordModel):
    """A successfully extracted product page."""

    title: str = ""
    url: str
    brand: str = ""
    product_code: str = ""
    series: str = ""
    short_description: str = ""
    long_description: str = ""
    catalog_price: Optional[float] = Field(
        None, description="Catalog price in source currency; None when absent"
    )
    unit_price: Optional[float] = Field(
        None, description="Price per unit in source currency; None when absent"
    )
    availability: str = ""
    shipping: str = ""
    loyalty_points: Optional[float] = None
    labels: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    sizes: List[SizeVariant] = Field(default_factory=list)
    product_id: str = ""
    scraped_at: str = Field(default_factory=utc_timestamp)

    @property
    def is_failure(self) -> bool:
        return False


class FailedProductRecord(_RecordModel):
    """A product page that could not be scraped."""

    url: str
    error: str
    scraped_at: str = Field(default_factory=utc_timestamp)

    @property
    def is_failure(self) -> bool:
        return True


CatalogRecord = Union[ProductRecord, FailedProductRecord]


def parse_record(data: Dict[str, Any]) -> CatalogRecord:
    """Build the record shape matching a JSON object.

    The presence of ``error`` selects the failure shape. Both shapes forbid
    unknown keys, so an object mixing the two is rejected.

    Raises:
        pydantic.ValidationError: If the object fits neither shape
    """
    if "error" in data:
        return FailedProductRecord.model_validate(data)
    return ProductRecord.model_validate(data)


def dump_record(record: CatalogRecord) -> Dict[str, Any]:
    """JSON-ready dict of a record, with camelCase keys."""
    return record.model_dump(mode="json", by_alias=True)
