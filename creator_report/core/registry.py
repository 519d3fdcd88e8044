"""Fixed registry of the directory categories scraped on every run."""

from __future__ import annotations

from .types import Category

CATEGORIES: tuple[Category, ...] = (
    Category(label="Founders", remote_id=1),
    Category(label="Influencers", remote_id=2),
    Category(label="Personalities", remote_id=3),
    Category(label="Investors", remote_id=4),
    Category(label="Developers", remote_id=5),
    Category(label="Time.fun Team", remote_id=8),
    Category(label="Data Analysis", remote_id=9),
    Category(label="Trading Analysis", remote_id=10),
)

