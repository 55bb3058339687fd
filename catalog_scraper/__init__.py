"""Category scraper for the zooart.com.pl storefront.

Fetches a category listing, extracts every product page into a normalized
record, optionally reformats titles and translates descriptions, and writes
the run as a timestamped JSON batch. A separate post-process converts the
batch prices into another currency with a profit margin.
"""

__version__ = "1.0.0"
