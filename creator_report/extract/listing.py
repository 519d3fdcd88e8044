"""Creator discovery on rendered category pages."""

from __future__ import annotations

from urllib.parse import urljoin

from bs4 import BeautifulSoup

from ..core.types import UNKNOWN_CREATOR, Creator
from ..fetch.browser import PageSnapshot


def extract_listing(
    snapshot: PageSnapshot,
    grid_selector: str = ".grid",
    heading_selector: str = "h3",
) -> list[Creator]:
    """Extract the creator stubs shown on a category page.

    Every link inside the first grid container becomes one Creator, in
    document order. A page without the grid yields no creators.

    Args:
        snapshot: Rendered category page
        grid_selector: CSS selector of the grid container
        heading_selector: CSS selector of the name element inside a link

    Returns:
        List of Creator stubs, possibly empty
    """
    soup = BeautifulSoup(snapshot.html, "html.parser")
    grid = soup.select_one(grid_selector)
    if grid is None:
        return []

    creators: list[Creator] = []
    for link in grid.find_all("a"):
        heading = link.select_one(heading_selector)
        name = heading.get_text().strip() if heading is not None else ""
        href = link.get("href")
        url = urljoin(snapshot.url, href) if href else ""
        creators.append(Creator(name=name or UNKNOWN_CREATOR, url=url))
    return creators
