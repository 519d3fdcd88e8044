"""
Creator Report - time.fun creator directory scraper.

This package lists the creators of every time.fun category, scrapes each
creator's page for minutes purchased, price per minute and market cap,
and writes a text report sorted by market cap.

Main entry point is the CLI via the `creator-report` command.

Example:
    $ creator-report -o data/
"""

__all__ = ["__version__", "Creator", "CreatorDetails", "PartitionStore", "slugify"]
__version__ = "0.1.0"

from .core.slug import slugify
from .core.types import Creator, CreatorDetails
from .storage import PartitionStore
