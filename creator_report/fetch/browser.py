"""
Headless browser access via Playwright.

The pipeline never hands live browser objects to the extractors. Pages
are rendered in a real browser, serialized to HTML, and the extractors
work on that snapshot. This keeps extraction pure and testable without
a browser.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from playwright.async_api import Browser, Page, async_playwright
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from ..config import BrowserConfig

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageSnapshot:
    """Serialized DOM of a rendered page.

    Attributes:
        url: Final page URL after redirects, used to resolve relative links
        html: Outer HTML of the rendered document
    """
    url: str
    html: str


class BrowserSession:
    """One launched browser shared by every stage of a run.

    Use BrowserSession.open() so the browser is always closed.
    """

    def __init__(self, browser: Browser, cfg: BrowserConfig) -> None:
        self._browser = browser
        self._cfg = cfg

    @classmethod
    @asynccontextmanager
    async def open(cls, cfg: BrowserConfig) -> AsyncIterator[BrowserSession]:
        """Launch the configured browser and close it on exit.

        Args:
            cfg: Browser configuration

        Yields:
            The open BrowserSession
        """
        playwright = await async_playwright().start()
        try:
            browser_launcher = getattr(playwright, cfg.browser_type)
            browser: Browser = await browser_launcher.launch(
                headless=cfg.headless, args=list(cfg.args)
            )
            logger.debug("Launched %s (headless=%s)", cfg.browser_type, cfg.headless)
            try:
                yield cls(browser, cfg)
            finally:
                await browser.close()
        finally:
            await playwright.stop()

    async def new_page(self) -> Page:
        """Open a page whose navigations use the fixed timeout."""
        page = await self._browser.new_page()
        page.set_default_navigation_timeout(self._cfg.navigation_timeout_ms)
        return page


async def render_page(
    page: Page,
    url: str,
    cfg: BrowserConfig,
    wait_for: str | None = None,
) -> PageSnapshot:
    """Navigate to a URL and snapshot the rendered DOM.

    Args:
        page: Page handle to navigate
        url: Absolute URL to load
        cfg: Browser configuration (load state and timeouts)
        wait_for: Optional selector to wait for after navigation; a timeout
            is not an error, the snapshot is taken without it

    Returns:
        PageSnapshot of the loaded page

    Raises:
        playwright.async_api.Error: If navigation fails or times out
    """
    await page.goto(url, wait_until=cfg.wait_until, timeout=cfg.navigation_timeout_ms)
    if wait_for:
        try:
            await page.wait_for_selector(wait_for, timeout=cfg.grid_timeout_ms)
        except PlaywrightTimeoutError:
            logger.debug("Selector %r not found on %s", wait_for, url)
    html = await page.content()
    return PageSnapshot(url=page.url, html=html)
