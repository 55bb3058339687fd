"""Custom exception classes for the scraper."""


class CatalogScraperException(Exception):
    """Base exception for all catalog scraper errors."""

    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(self.message)


class ScraperError(CatalogScraperException):
    """Raised when a page cannot be loaded or read."""

    def __init__(self, platform: str, message: str):
        super().__init__(f"Scraper error for {platform}: {message}")


class TranslationError(CatalogScraperException):
    """Raised when product descriptions could not be translated."""


class TranslationRequestError(TranslationError):
    """The translation API could not be reached or answered with an error."""


class TranslationParseError(TranslationError):
    """The translation API answered with content that is not the expected JSON."""


class FatalScrapeError(CatalogScraperException):
    """Raised when the whole run must stop and no batch may be written."""


class MissingCredentialError(FatalScrapeError):
    """Raised when a required API credential is not configured."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Required credential {name} is not set")


class CategoryUnavailableError(FatalScrapeError):
    """Raised when the category listing page cannot be scraped."""

    def __init__(self, url: str, reason: str):
        self.url = url
        super().__init__(f"Category page {url} is unavailable: {reason}")


class StorageError(CatalogScraperException):
    """Raised when a batch file cannot be read or does not hold valid records."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Batch file {path}: {message}")
