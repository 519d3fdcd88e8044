"""
Data extraction from rendered page snapshots.

This package turns category pages into creator stubs and creator pages
into detail records.
"""

from .detail import extract_detail
from .labels import find_value_near_label, parse_amount, parse_int, parse_price
from .listing import extract_listing

__all__ = [
    "extract_detail",
    "extract_listing",
    "find_value_near_label",
    "parse_amount",
    "parse_int",
    "parse_price",
]
