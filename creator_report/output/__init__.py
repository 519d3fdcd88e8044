"""
Report output.

This package aggregates detail partitions and renders the text report.
"""

from .renderer import CreatorReport, ReportSection, build_report, render_report, write_report

__all__ = ["CreatorReport", "ReportSection", "build_report", "render_report", "write_report"]
