"""Tests for the Playwright session adapter with a stubbed playwright driver."""

from __future__ import annotations

import asyncio

import pytest

from creator_report.config import BrowserConfig
from creator_report.fetch import browser as browser_module
from creator_report.fetch.browser import BrowserSession


class RecordingPage:
    def __init__(self):
        self.navigation_timeout = None

    def set_default_navigation_timeout(self, timeout):
        self.navigation_timeout = timeout


class RecordingBrowser:
    def __init__(self):
        self.closed = 0
        self.pages: list[RecordingPage] = []

    async def new_page(self):
        page = RecordingPage()
        self.pages.append(page)
        return page

    async def close(self):
        self.closed += 1


class RecordingLauncher:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.launch_kwargs: list[dict] = []
        self.browser = RecordingBrowser()

    async def launch(self, **kwargs):
        self.launch_kwargs.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.browser


class RecordingPlaywright:
    def __init__(self, launcher: RecordingLauncher):
        self.chromium = launcher
        self.stopped = 0

    async def stop(self):
        self.stopped += 1


class RecordingStarter:
    def __init__(self, playwright: RecordingPlaywright):
        self._playwright = playwright

    async def start(self):
        return self._playwright


def _install(monkeypatch, error: Exception | None = None):
    launcher = RecordingLauncher(error)
    playwright = RecordingPlaywright(launcher)
    monkeypatch.setattr(browser_module, "async_playwright", lambda: RecordingStarter(playwright))
    return launcher, playwright


def test_open_launches_with_configured_flags_and_page_timeout(monkeypatch):
    launcher, playwright = _install(monkeypatch)
    cfg = BrowserConfig(headless=False, navigation_timeout_ms=1234)

    async def scenario():
        async with BrowserSession.open(cfg) as session:
            return await session.new_page()

    page = asyncio.run(scenario())

    assert launcher.launch_kwargs == [
        {"headless": False, "args": ["--no-sandbox", "--disable-setuid-sandbox"]}
    ]
    assert page.navigation_timeout == 1234
    assert launcher.browser.closed == 1
    assert playwright.stopped == 1


def test_open_releases_browser_when_body_raises(monkeypatch):
    launcher, playwright = _install(monkeypatch)

    async def scenario():
        async with BrowserSession.open(BrowserConfig()):
            raise RuntimeError("listing exploded")

    with pytest.raises(RuntimeError, match="listing exploded"):
        asyncio.run(scenario())

    assert launcher.browser.closed == 1
    assert playwright.stopped == 1


def test_launch_failure_propagates_and_stops_playwright(monkeypatch):
    launcher, playwright = _install(monkeypatch, error=RuntimeError("Executable doesn't exist"))

    async def scenario():
        async with BrowserSession.open(BrowserConfig()):
            pytest.fail("session body must not run")

    with pytest.raises(RuntimeError, match="Executable doesn't exist"):
        asyncio.run(scenario())

    assert launcher.browser.closed == 0
    assert playwright.stopped == 1
