"""
Core domain models and helpers.

This package contains data types and logic that are independent of any
specific pipeline stage.
"""

from .registry import CATEGORIES
from .slug import slugify, title_from_slug
from .types import UNKNOWN_CREATOR, Category, Creator, CreatorDetails

__all__ = [
    "CATEGORIES",
    "UNKNOWN_CREATOR",
    "Category",
    "Creator",
    "CreatorDetails",
    "slugify",
    "title_from_slug",
]
