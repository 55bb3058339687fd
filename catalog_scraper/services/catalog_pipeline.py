"""Catalog scraping orchestration.

This service connects the page fetcher, the product extractor and the
post-processing steps with batch storage. It handles the complete flow:
category links -> product pages -> records -> title fix -> translation ->
one batch file.

Products are processed strictly one after another, with a randomized pause
between consecutive pages.
"""

import asyncio
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable, List, Optional

import structlog

from catalog_scraper.config import Settings, settings
from catalog_scraper.core.exceptions import (
    CategoryUnavailableError,
    TranslationParseError,
    TranslationRequestError,
)
from catalog_scraper.schemas.product import CatalogRecord, ProductRecord, dump_record
from catalog_scraper.scrapers.base import BasePageFetcher, CategoryLink
from catalog_scraper.scrapers.extractor import ProductExtractor
from catalog_scraper.scrapers.utils.title_formatter import TitleFormatter
from catalog_scraper.services.translation_service import BaseTranslator
from catalog_scraper.storage.json_storage import BatchStorage

logger = structlog.get_logger(__name__)


@dataclass
class PipelineOptions:
    """Run variant: what used to differ between copies of the scraper script."""

    rate: float = 0.23
    margin_fraction: float = 0.10
    testing: bool = False
    brit_food_title_fix: bool = True
    brand_guard: str = "brit"
    delay_min: float = 2.0
    delay_max: float = 4.0
    translation_failure_marker: str = " (Translation Failed)"

    def __post_init__(self):
        """Validate data after initialization."""
        if self.delay_min < 0 or self.delay_min > self.delay_max:
            raise ValueError("delay interval must satisfy 0 <= delay_min <= delay_max")

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "PipelineOptions":
        return cls(
            rate=config.PLN_TO_EUR,
            margin_fraction=config.PROFIT_MARGIN,
            testing=config.TESTING,
            brit_food_title_fix=config.BRIT_FOOD_TITLE_FIX,
            brand_guard=config.BRAND_GUARD,
            delay_min=config.DELAY_MIN_SECONDS,
            delay_max=config.DELAY_MAX_SECONDS,
            translation_failure_marker=config.TRANSLATION_FAILURE_MARKER,
        )


@dataclass
class PipelineResult:
    """Outcome of one run."""

    records: List[CatalogRecord] = field(default_factory=list)
    path: Optional[Path] = None  # None when nothing was written

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.records if not r.is_failure)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.records if r.is_failure)


def apply_title_fix(record: ProductRecord, brand_guard: str) -> bool:
    """Reformat the record title in place.

    Returns:
        True if the title changed
    """
    formatted = TitleFormatter.format(record.title, brand_guard)
    if formatted == record.title:
        return False
    record.title = formatted
    return True


async def apply_translation(
    record: ProductRecord,
    translator: BaseTranslator,
    failure_marker: str = "",
) -> bool:
    """Replace the record descriptions with their translations, in place.

    Does nothing when both descriptions are empty. Each description is only
    replaced by a non-empty translation. When the model answers with
    something other than the expected JSON, the originals are kept and
    ``failure_marker`` is appended to both; when the API cannot be reached,
    or the translator fails in any other way, the originals are kept as
    they are.

    Returns:
        True if the translation was applied
    """
    if not (record.short_description or record.long_description):
        return False

    try:
        result = await translator.translate(
            record.short_description, record.long_description
        )
    except TranslationParseError as e:
        logger.error("translation_parse_failed", url=record.url, error=e.message)
        if failure_marker:
            record.short_description += failure_marker
            record.long_description += failure_marker
        return False
    except TranslationRequestError as e:
        logger.error("translation_request_failed", url=record.url, error=e.message)
        return False
    except Exception as e:
        logger.error(
            "translation_failed",
            url=record.url,
            error=str(e),
            error_type=type(e).__name__,
        )
        return False

    if result.short_description:
        record.short_description = result.short_description
    if result.long_description:
        record.long_description = result.long_description
    return True


class CatalogPipeline:
    """End-to-end scrape of one category into one batch."""

    def __init__(
        self,
        fetcher: BasePageFetcher,
        extractor: ProductExtractor,
        storage: BatchStorage,
        translator: Optional[BaseTranslator] = None,
        options: Optional[PipelineOptions] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            fetcher: Page fetcher for the shop
            extractor: Field extractor matching the fetcher's pages
            storage: Where the finished batch is written
            translator: Description translator; None skips translation
            options: Run variant; defaults to the global settings
            sleep: Awaitable pause between products
            rng: Random source for the pause length
        """
        self.fetcher = fetcher
        self.extractor = extractor
        self.storage = storage
        self.translator = translator
        self.options = options or PipelineOptions.from_settings()
        self._sleep = sleep
        self._rng = rng or random.Random()
        self.logger = logger.bind(service="catalog_pipeline")

    async def run(self, category_url: str) -> PipelineResult:
        """Scrape every product of a category and persist the batch.

        Raises:
            CategoryUnavailableError: If the category page cannot be scraped;
                no batch is written
        """
        links = await self._collect_links(category_url)
        if not links:
            self.logger.warning("no_product_links_found", url=category_url)
            return PipelineResult()

        if self.options.testing:
            self.logger.info("testing_mode", scraping=1, available=len(links))
            links = links[:1]

        self.logger.info("scrape_started", products=len(links))
        records: List[CatalogRecord] = []

        for index, link in enumerate(links):
            self.logger.info(
                "processing_product",
                position=f"{index + 1}/{len(links)}",
                title=link.title,
            )
            records.append(await self.process_link(link))

            if index < len(links) - 1:
                await self._pause()

        result = PipelineResult(records=records)
        self.logger.info(
            "scrape_completed",
            total=len(records),
            succeeded=result.succeeded,
            failed=result.failed,
        )

        if records:
            result.path = self.storage.save_batch(records)
            self.logger.debug("sample_record", record=dump_record(records[0]))

        return result

    async def process_link(self, link: CategoryLink) -> CatalogRecord:
        """Fetch, extract and post-process one product."""
        try:
            snapshot = await self.fetcher.fetch_product_page(link.url)
        except Exception as e:
            self.logger.error("product_fetch_failed", url=link.url, error=str(e))
            return self.extractor.failure(link.url, str(e))

        record = self.extractor.extract(snapshot)
        if isinstance(record, ProductRecord):
            await self.post_process(record)
        return record

    async def post_process(self, record: ProductRecord) -> None:
        """Title fix and translation, each only when enabled."""
        if self.options.brit_food_title_fix:
            apply_title_fix(record, self.options.brand_guard)

        if self.translator is not None:
            await apply_translation(
                record, self.translator, self.options.translation_failure_marker
            )

    async def close(self) -> None:
        """Shut down the fetcher and the translator."""
        try:
            await self.fetcher.cleanup()
        finally:
            if self.translator is not None:
                await self.translator.close()

    async def _collect_links(self, category_url: str) -> List[CategoryLink]:
        try:
            return await self.fetcher.fetch_category_links(category_url)
        except Exception as e:
            raise CategoryUnavailableError(category_url, str(e))

    async def _pause(self) -> None:
        delay = self._rng.uniform(self.options.delay_min, self.options.delay_max)
        self.logger.info("waiting_between_products", seconds=round(delay, 1))
        await self._sleep(delay)
