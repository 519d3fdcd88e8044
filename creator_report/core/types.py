"""
Core data types for the creator report pipeline.

This module defines the records that flow between the pipeline stages:
- Category: A fixed partition of the remote directory
- Creator: Minimal identity record discovered on a category page
- CreatorDetails: Creator enriched with financial attributes
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

UNKNOWN_CREATOR = "Unknown Creator"


@dataclass(frozen=True)
class Category:
    """A category of the remote creator directory.

    Attributes:
        label: Human-readable category name (e.g., "Founders")
        remote_id: Numeric identifier used in the category page URL
    """
    label: str
    remote_id: int

    def url(self, base_url: str, path_template: str) -> str:
        """Build the absolute URL of this category's listing page."""
        return base_url.rstrip("/") + path_template.format(id=self.remote_id)


@dataclass(frozen=True)
class Creator:
    """A creator stub discovered on a category listing page.

    The URL is the identity key within a category; the same creator may
    appear in several categories.

    Attributes:
        name: Display name, or UNKNOWN_CREATOR when the page had none
        url: Absolute URL of the creator's detail page
    """
    name: str
    url: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "url": self.url}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Creator:
        return cls(name=data.get("name") or UNKNOWN_CREATOR, url=data.get("url", ""))


@dataclass(frozen=True)
class CreatorDetails:
    """A creator with the financial attributes read from its detail page.

    The detail extractor always populates the numeric fields (0 when a
    label is missing or its value does not parse). None only appears for
    records loaded from files that lack a key.

    Attributes:
        name: Display name copied from the stub
        url: Detail page URL copied from the stub
        minutes_purchased: Total minutes purchased
        price_per_minute: Current price of one minute in dollars
        market_cap: Market capitalization in dollars
    """
    name: str
    url: str
    minutes_purchased: int | None = None
    price_per_minute: float | None = None
    market_cap: float | None = None

    @classmethod
    def from_creator(
        cls,
        creator: Creator,
        minutes_purchased: int,
        price_per_minute: float,
        market_cap: float,
    ) -> CreatorDetails:
        return cls(
            name=creator.name,
            url=creator.url,
            minutes_purchased=minutes_purchased,
            price_per_minute=price_per_minute,
            market_cap=market_cap,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "url": self.url,
            "minutesPurchased": self.minutes_purchased,
            "pricePerMinute": self.price_per_minute,
            "marketCap": self.market_cap,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CreatorDetails:
        # Keys follow the camelCase layout of the persisted partitions.
        return cls(
            name=data.get("name") or UNKNOWN_CREATOR,
            url=data.get("url", ""),
            minutes_purchased=data.get("minutesPurchased"),
            price_per_minute=data.get("pricePerMinute"),
            market_cap=data.get("marketCap"),
        )
