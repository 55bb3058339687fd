"""Convert the prices of a scraped batch and write the ``-eur`` sibling file.

Rate and margin come from PLN_TO_EUR and PROFIT_MARGIN (environment / .env).

Usage:
    python scripts/convert_prices.py scraped/zooart/2025-07-30--18_15.json
    python scripts/convert_prices.py in.json --output out.json
"""

import argparse
import sys

import structlog

from catalog_scraper.config import settings
from catalog_scraper.core.exceptions import StorageError
from catalog_scraper.core.logging import configure_logging
from catalog_scraper.services.catalog_pipeline import PipelineOptions
from catalog_scraper.services.price_conversion_service import PriceConversionService

log = structlog.get_logger("convert_prices")


def main() -> None:
    parser = argparse.ArgumentParser(description="Convert batch prices to EUR with margin")
    parser.add_argument("input", help="Batch JSON file in source currency")
    parser.add_argument("--output", help="Target file (default: <input>-eur.json)")
    args = parser.parse_args()

    configure_logging(settings.DEBUG)

    options = PipelineOptions.from_settings()
    service = PriceConversionService(rate=options.rate, margin=options.margin_fraction)

    try:
        output = service.convert_file(args.input, args.output)
    except StorageError as e:
        log.error("price_conversion_failed", error=e.message)
        sys.exit(1)

    log.info("converted_batch_saved", path=str(output))


if __name__ == "__main__":
    main()
