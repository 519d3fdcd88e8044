"""
Page loading.

This package handles browser automation: launching the browser,
navigating, and snapshotting rendered pages.
"""

from .browser import BrowserSession, PageSnapshot, render_page

__all__ = ["BrowserSession", "PageSnapshot", "render_page"]
