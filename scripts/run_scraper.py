"""Scrape the configured category into a timestamped JSON batch.

Configuration comes from environment variables / .env (see
catalog_scraper.config.Settings).

Usage:
    python scripts/run_scraper.py
    python scripts/run_scraper.py --testing
    python scripts/run_scraper.py --category-url "https://zooart.com.pl/..."

Setup (run once):
    pip install -e .
    playwright install chromium
"""

import argparse
import asyncio
import sys

import structlog

from catalog_scraper.config import settings
from catalog_scraper.core.exceptions import FatalScrapeError
from catalog_scraper.core.logging import configure_logging
from catalog_scraper.scrapers.adapters.zooart import (
    ZooartPageFetcher,
    create_zooart_extractor,
)
from catalog_scraper.scrapers.utils.browser_manager import create_browser_manager
from catalog_scraper.services.catalog_pipeline import CatalogPipeline, PipelineOptions
from catalog_scraper.services.translation_service import create_translator
from catalog_scraper.storage.json_storage import BatchStorage

log = structlog.get_logger("run_scraper")


async def run(category_url: str, testing: bool) -> int:
    """Run one scrape.

    Returns:
        Process exit code
    """
    options = PipelineOptions.from_settings()
    options.testing = testing

    try:
        # Fails before any browser work when the API key is missing
        translator = create_translator()
    except FatalScrapeError as e:
        log.error("fatal_configuration_error", error=e.message)
        return 1

    pipeline = CatalogPipeline(
        fetcher=ZooartPageFetcher(create_browser_manager()),
        extractor=create_zooart_extractor(),
        storage=BatchStorage(settings.OUTPUT_DIR, settings.PROJECT_NAME),
        translator=translator,
        options=options,
    )

    try:
        result = await pipeline.run(category_url)
    except FatalScrapeError as e:
        log.error("scrape_aborted", error=e.message)
        return 1
    finally:
        await pipeline.close()

    if result.path is None:
        log.warning("no_batch_written")
        return 0

    log.info(
        "batch_written",
        path=str(result.path),
        succeeded=result.succeeded,
        failed=result.failed,
    )
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Scrape a category into a JSON batch")
    parser.add_argument(
        "--category-url",
        default=settings.CATEGORY_URL,
        help="Category listing to scrape (default: CATEGORY_URL)",
    )
    parser.add_argument(
        "--testing",
        action="store_true",
        default=settings.TESTING,
        help="Scrape only the first product",
    )
    args = parser.parse_args()

    configure_logging(settings.DEBUG)
    sys.exit(asyncio.run(run(args.category_url, args.testing)))


if __name__ == "__main__":
    main()
