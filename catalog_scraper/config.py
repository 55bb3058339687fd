"""Application configuration via Pydantic Settings."""

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global scraper settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Target shop
    PROJECT_NAME: str = "zooart"
    CATEGORY_URL: str = (
        "https://zooart.com.pl/pol_m_Psy_Karma-dla-psow_Karma-bytowa-dla-psow_"
        "Sucha-karma-dla-psow-1345.html?filter_producer=1331637976"
    )
    SITE_ORIGIN: str = "https://zooart.com.pl"

    # Output
    OUTPUT_DIR: str = "scraped"

    # Run mode
    DEBUG: bool = False
    HEADLESS: bool = True
    TESTING: bool = False  # Scrape only the first product
    BRIT_FOOD_TITLE_FIX: bool = True
    BRAND_GUARD: str = "brit"

    # Politeness delay between product pages (seconds)
    DELAY_MIN_SECONDS: float = 2.0
    DELAY_MAX_SECONDS: float = 4.0

    # Browser timeouts (milliseconds)
    NAVIGATION_TIMEOUT_MS: int = 60000
    SELECTOR_TIMEOUT_MS: int = 10000
    COOKIE_TIMEOUT_MS: int = 5000
    BLOCK_RESOURCES: bool = False
    USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
    )

    # Translation (OpenAI chat completions)
    TRANSLATION_ENABLED: bool = True
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4.1"
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    AI_MAX_TOKENS: int = 3000
    AI_TEMPERATURE: float = 0.5
    TRANSLATION_TIMEOUT_SECONDS: float = 120.0
    TRANSLATION_FAILURE_MARKER: str = " (Translation Failed)"  # Empty string disables

    # Pricing post-process
    PLN_TO_EUR: float = 0.23
    PROFIT_MARGIN: float = 0.10

    @model_validator(mode="after")
    def check_delay_interval(self) -> "Settings":
        """The jittered delay needs a non-empty, non-negative interval."""
        if self.DELAY_MIN_SECONDS < 0:
            raise ValueError("DELAY_MIN_SECONDS must not be negative")
        if self.DELAY_MIN_SECONDS > self.DELAY_MAX_SECONDS:
            raise ValueError(
                "DELAY_MIN_SECONDS must not be greater than DELAY_MAX_SECONDS"
            )
        return self


settings = Settings()
