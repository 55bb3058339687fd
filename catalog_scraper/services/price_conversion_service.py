"""Batch price conversion.

Reads a persisted batch in source currency and writes a sibling batch with
converted prices. Only ``sizes[0].price`` and ``unitPrice`` are converted;
both are left alone when absent. Running this separately from the scrape
lets a batch be re-priced with a new rate or margin without re-scraping.
"""

from pathlib import Path
from typing import List, Optional, Sequence

import structlog

from catalog_scraper.config import settings
from catalog_scraper.schemas.product import CatalogRecord, ProductRecord
from catalog_scraper.scrapers.utils.normalizer import CurrencyConverter
from catalog_scraper.storage.json_storage import BatchStorage, PathLike, write_batch

logger = structlog.get_logger(__name__)


class PriceConversionService:
    """Applies a fixed rate and profit margin to every record of a batch."""

    def __init__(
        self,
        rate: float = settings.PLN_TO_EUR,
        margin: float = settings.PROFIT_MARGIN,
    ):
        self.rate = rate
        self.margin = margin
        self.logger = logger.bind(service="price_conversion", rate=rate, margin=margin)

    def convert_price(self, price: float) -> float:
        return CurrencyConverter.convert(price, self.rate, self.margin)

    def convert_record(self, record: CatalogRecord) -> CatalogRecord:
        """Copy of the record with its price fields converted.

        Failure records carry no prices and come back unchanged.
        """
        if not isinstance(record, ProductRecord):
            return record

        converted = record.model_copy(deep=True)
        if converted.sizes and converted.sizes[0].price is not None:
            converted.sizes[0].price = self.convert_price(converted.sizes[0].price)
        if converted.unit_price is not None:
            converted.unit_price = self.convert_price(converted.unit_price)
        return converted

    def convert_records(self, records: Sequence[CatalogRecord]) -> List[CatalogRecord]:
        return [self.convert_record(record) for record in records]

    def convert_file(
        self,
        input_path: PathLike,
        output_path: Optional[PathLike] = None,
    ) -> Path:
        """Convert a batch file and write the result next to it.

        Args:
            input_path: Batch file in source currency
            output_path: Target file; defaults to the ``-eur`` sibling

        Returns:
            Path of the written file

        Raises:
            StorageError: If the input batch cannot be read
        """
        records = BatchStorage.load_batch(input_path)
        converted = self.convert_records(records)
        target = Path(output_path) if output_path else BatchStorage.converted_path(input_path)

        write_batch(target, converted)
        self.logger.info(
            "prices_converted",
            input=str(input_path),
            output=str(target),
            count=len(converted),
        )
        return target
