"""Category label <-> storage slug conversion."""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")


def slugify(label: str) -> str:
    """Convert a category label to the slug used as its storage key.

    Lowercases the label and replaces each run of whitespace with a
    single hyphen. Punctuation is kept so the slug can be turned back
    into a readable title.

    Args:
        label: The category label

    Returns:
        The lowercase, hyphenated slug

    Examples:
        >>> slugify("Time.fun Team")
        "time.fun-team"
    """
    return _WHITESPACE_RE.sub("-", label.strip().lower())


def title_from_slug(slug: str) -> str:
    """Turn a storage slug back into a report section title.

    Examples:
        >>> title_from_slug("time.fun-team")
        "Time.fun Team"
    """
    words = [word for word in slug.split("-") if word]
    return " ".join(word[:1].upper() + word[1:] for word in words)
