"""Tests for listing and detail extraction on page snapshots."""

from bs4 import BeautifulSoup

from creator_report.core.types import UNKNOWN_CREATOR, Creator
from creator_report.extract.detail import extract_detail
from creator_report.extract.labels import (
    find_value_near_label,
    parse_amount,
    parse_int,
    parse_price,
)
from creator_report.extract.listing import extract_listing
from creator_report.fetch.browser import PageSnapshot

CATEGORY_URL = "https://time.fun/categories?category=1"

CATEGORY_HTML = """
<html><body>
  <nav class="header"><a href="/about"><h3>About</h3></a></nav>
  <div class="grid">
    <a href="/profile/alice"><div><h3>  Alice  </h3><p>Founder</p></div></a>
    <a href="https://time.fun/profile/bob"><h3>Bob</h3></a>
    <a href="/profile/anon"><span>no heading</span></a>
    <a href="/profile/blank"><h3>   </h3></a>
  </div>
  <div class="grid"><a href="/profile/zed"><h3>Zed</h3></a></div>
</body></html>
"""

DETAIL_HTML = """
<html><body>
  <!-- Market Cap section below -->
  <div class="stats">
    <div><span>Minutes purchased</span><div><p>1,234</p></div></div>
    <div><span>Price per minute</span><div><p>$2.50</p><p>ignored</p></div></div>
    <div><span>Market Cap</span><div><p>$1,234,567.89</p></div></div>
  </div>
</body></html>
"""


def _detail_snapshot(html: str) -> PageSnapshot:
    return PageSnapshot(url="https://time.fun/profile/alice", html=html)


def test_extract_listing_reads_first_grid_in_dom_order():
    creators = extract_listing(PageSnapshot(url=CATEGORY_URL, html=CATEGORY_HTML))

    assert creators == [
        Creator(name="Alice", url="https://time.fun/profile/alice"),
        Creator(name="Bob", url="https://time.fun/profile/bob"),
        Creator(name=UNKNOWN_CREATOR, url="https://time.fun/profile/anon"),
        Creator(name=UNKNOWN_CREATOR, url="https://time.fun/profile/blank"),
    ]


def test_extract_listing_without_grid_is_empty():
    html = "<html><body><p>Nothing here</p></body></html>"
    assert extract_listing(PageSnapshot(url=CATEGORY_URL, html=html)) == []


def test_extract_listing_with_empty_grid_is_empty():
    html = '<html><body><div class="grid"></div></body></html>'
    assert extract_listing(PageSnapshot(url=CATEGORY_URL, html=html)) == []


def test_extract_listing_keeps_duplicates():
    html = (
        '<div class="grid">'
        '<a href="/profile/a"><h3>A</h3></a>'
        '<a href="/profile/a"><h3>A</h3></a>'
        "</div>"
    )
    creators = extract_listing(PageSnapshot(url=CATEGORY_URL, html=html))
    assert len(creators) == 2


def test_find_value_near_label_reads_first_paragraph_of_sibling():
    soup = BeautifulSoup(DETAIL_HTML, "html.parser")
    assert find_value_near_label(soup, "Price per minute") == "$2.50"
    assert find_value_near_label(soup, "Followers") is None


def test_find_value_near_label_ignores_comments():
    soup = BeautifulSoup(DETAIL_HTML, "html.parser")
    # The comment mentions "Market Cap" before the real label does.
    assert find_value_near_label(soup, "Market Cap") == "$1,234,567.89"


def test_find_value_near_label_without_sibling_block():
    soup = BeautifulSoup("<div><span>Market Cap</span></div>", "html.parser")
    assert find_value_near_label(soup, "Market Cap") is None


def test_extract_detail_parses_all_fields_and_keeps_identity():
    creator = Creator(name="Alice", url="https://time.fun/profile/alice")
    detail = extract_detail(_detail_snapshot(DETAIL_HTML), creator)

    assert detail.name == creator.name
    assert detail.url == creator.url
    assert detail.minutes_purchased == 1234
    assert detail.price_per_minute == 2.5
    assert detail.market_cap == 1234567.89


def test_extract_detail_defaults_missing_labels_to_zero():
    html = "<html><body><div><span>Minutes purchased</span><div><p>42</p></div></div></body></html>"
    creator = Creator(name="Bob", url="https://time.fun/profile/bob")
    detail = extract_detail(_detail_snapshot(html), creator)

    assert detail.minutes_purchased == 42
    assert detail.price_per_minute == 0
    assert detail.market_cap == 0
    assert detail.to_dict()["pricePerMinute"] == 0


def test_extract_detail_defaults_unparseable_values_to_zero():
    html = (
        "<div><span>Minutes purchased</span><div><p>lots</p></div></div>"
        "<div><span>Price per minute</span><div><p>free</p></div></div>"
        "<div><span>Market Cap</span><div><p>--</p></div></div>"
    )
    detail = extract_detail(_detail_snapshot(html), Creator(name="C", url="u"))

    assert (detail.minutes_purchased, detail.price_per_minute, detail.market_cap) == (0, 0, 0)


def test_extract_detail_uses_injected_value_finder():
    values = {"Minutes purchased": "7", "Price per minute": "$1", "Market Cap": "$3,000"}
    detail = extract_detail(
        _detail_snapshot("<html></html>"),
        Creator(name="D", url="u"),
        find_value=lambda soup, label: values.get(label),
    )

    assert (detail.minutes_purchased, detail.price_per_minute, detail.market_cap) == (7, 1.0, 3000.0)


def test_parse_int_reads_leading_integer():
    assert parse_int("1,234 minutes") == 1234
    assert parse_int(" 15") == 15
    assert parse_int("1.9") == 1
    assert parse_int("abc") == 0
    assert parse_int(None) == 0


def test_parse_price_strips_currency_symbol():
    assert parse_price("$0.75") == 0.75
    assert parse_price("3/min") == 3.0
    assert parse_price("") == 0.0
    assert parse_price(None) == 0.0


def test_parse_amount_strips_all_thousands_separators():
    assert parse_amount("$1,234,567") == 1234567.0
    assert parse_amount("$12.5K") == 12.5
    assert parse_amount("N/A") == 0.0
