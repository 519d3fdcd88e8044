"""
Label-anchored value lookup and lenient numeric parsing.

Creator pages show their statistics as a label element followed by a
sibling block whose first paragraph holds the value, e.g.:

    <div><span>Market Cap</span><div><p>$12,345</p></div></div>

The parsers mirror JavaScript's parseInt/parseFloat: they read the
longest numeric prefix and fall back to 0 instead of raising.
"""

from __future__ import annotations

import re
from typing import Callable

from bs4 import BeautifulSoup
from bs4.element import PreformattedString

# Signature of a label lookup strategy, see find_value_near_label().
ValueFinder = Callable[[BeautifulSoup, str], str | None]

_INT_PREFIX_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_CURRENCY_RE = re.compile(r"^\s*[$€£¥]")


def find_value_near_label(soup: BeautifulSoup, label: str) -> str | None:
    """Find the value text displayed next to a label.

    Takes the first text node (document order) containing the label,
    moves to its parent element, then to that element's next sibling
    element, and returns the text of the first <p> inside it.

    Args:
        soup: Parsed page
        label: Label text to search for (substring match)

    Returns:
        The raw value text, or None if any step of the lookup fails
    """
    for text in soup.find_all(string=True):
        # Comments and doctype are strings too but not page text.
        if isinstance(text, PreformattedString):
            continue
        if label not in text:
            continue
        parent = text.parent
        if parent is None:
            return None
        sibling = parent.find_next_sibling(True)
        if sibling is None:
            return None
        paragraph = sibling.find("p")
        if paragraph is None:
            return None
        return paragraph.get_text()
    return None


def parse_int(raw: str | None) -> int:
    """Parse the leading integer of a value, ignoring thousands separators.

    Examples:
        >>> parse_int("1,234 min")
        1234
        >>> parse_int("n/a")
        0
    """
    if raw is None:
        return 0
    match = _INT_PREFIX_RE.match(raw.replace(",", ""))
    return int(match.group(1)) if match else 0


def parse_price(raw: str | None) -> float:
    """Parse a price such as "$1.50", dropping the currency symbol."""
    if raw is None:
        return 0.0
    return _parse_float(_CURRENCY_RE.sub("", raw))


def parse_amount(raw: str | None) -> float:
    """Parse a large amount such as "$1,234,567.8"."""
    if raw is None:
        return 0.0
    return _parse_float(_CURRENCY_RE.sub("", raw).replace(",", ""))


def _parse_float(text: str) -> float:
    match = _FLOAT_PREFIX_RE.match(text)
    return float(match.group(1)) if match else 0.0
