"""Playwright browser lifecycle for the storefront fetchers.

One Chromium process and one context per run: the pipeline fetches pages one
after another, so a single reused context keeps cookies (the accepted cookie
banner) across the category page and every product page.
"""

import asyncio
from typing import Dict, Optional

import structlog
from playwright.async_api import (
    Browser,
    BrowserContext,
    Page,
    Playwright,
    async_playwright,
)

from catalog_scraper.config import settings

logger = structlog.get_logger()

_LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]
_BLOCKED_RESOURCES = "**/*.{woff,woff2,ttf,eot,mp4,webm}"


class BrowserManager:
    """Launches Chromium on demand and hands out pages of a shared context."""

    def __init__(
        self,
        user_agent: str,
        headless: bool = True,
        block_resources: bool = False,
        locale: str = "pl-PL",
        timezone_id: str = "Europe/Warsaw",
        viewport: Optional[Dict[str, int]] = None,
    ):
        """
        Args:
            user_agent: User-Agent header for every request of the context
            headless: Run without a visible window
            block_resources: Abort font and video requests
            locale: Browser locale; prices are rendered for it
            timezone_id: Browser timezone
            viewport: Window size; desktop 1920x1080 by default
        """
        self.user_agent = user_agent
        self.headless = headless
        self.block_resources = block_resources
        self.locale = locale
        self.timezone_id = timezone_id
        self.viewport = viewport or {"width": 1920, "height": 1080}

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._lock = asyncio.Lock()

    @property
    def is_running(self) -> bool:
        return self._browser is not None

    async def start(self) -> None:
        """Launch Chromium unless it is already running."""
        async with self._lock:
            if self._browser is not None:
                return
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.headless, args=_LAUNCH_ARGS
            )
            logger.info("browser_started", headless=self.headless)

    async def stop(self) -> None:
        """Close context, browser and the Playwright driver, in that order."""
        async with self._lock:
            if self._context is not None:
                await self._context.close()
                self._context = None
            if self._browser is not None:
                await self._browser.close()
                self._browser = None
            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None
            logger.info("browser_stopped")

    async def new_page(self) -> Page:
        context = await self._get_context()
        return await context.new_page()

    async def _get_context(self) -> BrowserContext:
        if self._context is not None:
            return self._context

        await self.start()
        context = await self._browser.new_context(
            user_agent=self.user_agent,
            viewport=self.viewport,
            locale=self.locale,
            timezone_id=self.timezone_id,
        )
        if self.block_resources:
            await context.route(_BLOCKED_RESOURCES, lambda route: route.abort())

        self._context = context
        logger.debug("browser_context_created", locale=self.locale)
        return context


def create_browser_manager() -> BrowserManager:
    """BrowserManager configured from the global settings."""
    return BrowserManager(
        user_agent=settings.USER_AGENT,
        headless=settings.HEADLESS,
        block_resources=settings.BLOCK_RESOURCES,
    )
