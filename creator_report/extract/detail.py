"""
Financial attribute extraction from rendered creator pages.

Each attribute is located by its visible label rather than by a CSS
path, since the page markup has no stable ids or classes.
"""

from __future__ import annotations

from bs4 import BeautifulSoup

from ..core.types import Creator, CreatorDetails
from ..fetch.browser import PageSnapshot
from .labels import ValueFinder, find_value_near_label, parse_amount, parse_int, parse_price

MINUTES_LABEL = "Minutes purchased"
PRICE_LABEL = "Price per minute"
MARKET_CAP_LABEL = "Market Cap"


def extract_detail(
    snapshot: PageSnapshot,
    creator: Creator,
    find_value: ValueFinder = find_value_near_label,
) -> CreatorDetails:
    """Read a creator's statistics from its rendered detail page.

    Missing labels and unparseable values resolve to 0, so the returned
    record always has all three attributes set.

    Args:
        snapshot: Rendered creator page
        creator: The stub being enriched; name and url are carried over
        find_value: Label lookup strategy

    Returns:
        CreatorDetails for this creator
    """
    soup = BeautifulSoup(snapshot.html, "html.parser")
    return CreatorDetails.from_creator(
        creator,
        minutes_purchased=parse_int(find_value(soup, MINUTES_LABEL)),
        price_per_minute=parse_price(find_value(soup, PRICE_LABEL)),
        market_cap=parse_amount(find_value(soup, MARKET_CAP_LABEL)),
    )
