"""
Plain text report rendering.

Building and rendering are separate steps: build_report() computes an
immutable CreatorReport from the detail partitions, render_report()
formats it. Totals are computed once and printed in both the leading and
trailing summary blocks.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path

from ..core.types import CreatorDetails

RULE_WIDTH = 50
NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class ReportSection:
    """One category of the report.

    Attributes:
        title: Section heading
        creators: Creators sorted by market cap, highest first
    """
    title: str
    creators: tuple[CreatorDetails, ...]


@dataclass(frozen=True)
class CreatorReport:
    """Aggregated view of all detail partitions.

    Attributes:
        total_creators: Number of creators across all sections
        total_market_cap: Sum of market caps, missing values count as 0
        sections: Sections in partition order
    """
    total_creators: int
    total_market_cap: float
    sections: tuple[ReportSection, ...]


def build_report(partitions: Mapping[str, Sequence[CreatorDetails]]) -> CreatorReport:
    """Aggregate detail partitions into a report.

    Args:
        partitions: Section title to creators, in discovery order. The
            sequences are not modified.

    Returns:
        CreatorReport with totals and per-section sorted creators
    """
    snapshot = {title: tuple(creators) for title, creators in partitions.items()}

    total_creators = sum(len(creators) for creators in snapshot.values())
    total_market_cap = sum(
        _market_cap(creator) for creators in snapshot.values() for creator in creators
    )

    # sorted() is stable, so equal market caps keep discovery order.
    sections = tuple(
        ReportSection(
            title=title,
            creators=tuple(sorted(creators, key=_market_cap, reverse=True)),
        )
        for title, creators in snapshot.items()
    )
    return CreatorReport(
        total_creators=total_creators,
        total_market_cap=total_market_cap,
        sections=sections,
    )


def render_report(
    report: CreatorReport,
    title: str,
    generated_at: datetime | None = None,
    timestamp_format: str = "%Y-%m-%d %H:%M:%S",
) -> str:
    """Format a report as plain text.

    Args:
        report: Aggregated report
        title: First line of the report
        generated_at: Optional generation time; omitted when None so that
            rendering the same data twice gives identical text
        timestamp_format: strftime format for generated_at

    Returns:
        The report text
    """
    lines = [title]
    if generated_at is not None:
        lines.append(f"Generated on: {generated_at.strftime(timestamp_format)}")
    lines.append("")
    lines.extend(_summary_lines(report))
    lines.append("")
    lines.append("=" * RULE_WIDTH)
    lines.append("")

    for section in report.sections:
        lines.append("")
        lines.append(section.title)
        lines.append("=" * len(section.title))
        lines.append("")
        for creator in section.creators:
            lines.extend(_creator_lines(creator))

    lines.append("")
    lines.extend(_summary_lines(report))
    return "\n".join(lines) + "\n"


def write_report(text: str, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")


def format_number(value: float) -> str:
    """Format a number with thousands separators.

    At most three fraction digits are shown and trailing zeros are
    dropped.

    Examples:
        >>> format_number(1234567)
        "1,234,567"
        >>> format_number(12345.5)
        "12,345.5"
    """
    if isinstance(value, int):
        return f"{value:,}"
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def format_price(value: float) -> str:
    """Format a price with exactly two fraction digits.

    The exact binary value is rounded half up, so 0.125 gives "0.13" while
    1.005 (stored as 1.00499...) gives "1.00".
    """
    return str(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _summary_lines(report: CreatorReport) -> list[str]:
    return [
        "Summary",
        "=======",
        f"Total Creators: {report.total_creators}",
        f"Total Market Cap: ${format_number(report.total_market_cap)}",
    ]


def _creator_lines(creator: CreatorDetails) -> list[str]:
    minutes = (
        format_number(creator.minutes_purchased)
        if creator.minutes_purchased is not None
        else NOT_AVAILABLE
    )
    price = (
        f"${format_price(creator.price_per_minute)}"
        if creator.price_per_minute is not None
        else NOT_AVAILABLE
    )
    market_cap = (
        f"${format_number(creator.market_cap)}"
        if creator.market_cap is not None
        else NOT_AVAILABLE
    )
    return [
        f"Creator: {creator.name}",
        f"URL: {creator.url}",
        f"Minutes Purchased: {minutes}",
        f"Price per Minute: {price}",
        f"Market Cap: {market_cap}",
        "-" * RULE_WIDTH,
    ]


def _market_cap(creator: CreatorDetails) -> float:
    return creator.market_cap or 0
