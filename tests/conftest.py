"""Fake browser objects shaped like the Playwright async API."""

from __future__ import annotations

from contextlib import asynccontextmanager

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError


class FakePage:
    """Serves canned HTML per URL; URLs in `failures` raise on goto."""

    def __init__(self, pages: dict[str, str], failures: set[str], visited: list[str]):
        self._pages = pages
        self._failures = failures
        self._visited = visited
        self.url = "about:blank"
        self.navigation_timeout = None

    def set_default_navigation_timeout(self, timeout):
        self.navigation_timeout = timeout

    async def goto(self, url, wait_until=None, timeout=None):
        self._visited.append(url)
        if url in self._failures:
            raise RuntimeError(f"net::ERR_FAILED at {url}")
        self.url = url

    async def wait_for_selector(self, selector, timeout=None):
        marker = f'class="{selector.lstrip(".")}"'
        if marker not in self._pages.get(self.url, ""):
            raise PlaywrightTimeoutError(f"Timeout waiting for {selector}")

    async def content(self):
        return self._pages.get(self.url, "<html><body></body></html>")


class FakeSession:
    def __init__(self, pages, failures):
        self.pages = pages
        self.failures = failures
        self.visited: list[str] = []
        self.opened_pages: list[FakePage] = []

    async def new_page(self):
        page = FakePage(self.pages, self.failures, self.visited)
        self.opened_pages.append(page)
        return page


class FakeBrowser:
    """Session factory recording how often the session was opened and closed."""

    def __init__(self, pages: dict[str, str] | None = None, failures: set[str] | None = None):
        self.session = FakeSession(pages or {}, failures or set())
        self.opened = 0
        self.closed = 0

    @asynccontextmanager
    async def open(self, cfg):
        self.opened += 1
        try:
            yield self.session
        finally:
            self.closed += 1


@pytest.fixture
def fake_browser_cls():
    return FakeBrowser
