"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- SiteConfig: Remote directory location
- BrowserConfig: Browser launch and navigation settings
- StorageConfig: Partition and report locations
- ReportConfig: Report rendering settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

import yaml


@dataclass
class SiteConfig:
    """Configuration for the remote creator directory.

    Attributes:
        base_url: Scheme and host of the directory
        category_path: Path template of a category page; {id} is the category id
    """

    base_url: str = "https://time.fun"
    category_path: str = "/categories?category={id}"


@dataclass
class BrowserConfig:
    """Configuration for the headless browser.

    Attributes:
        browser_type: Playwright browser type ("chromium", "firefox", "webkit")
        headless: Run the browser without a window
        args: Extra launch flags (sandboxing flags for container environments)
        navigation_timeout_ms: Fixed deadline applied to every navigation
        wait_until: Load state that marks a navigation as settled
        grid_selector: CSS selector of the creator grid on category pages
        grid_timeout_ms: How long to wait for the grid before treating it as absent
        heading_selector: Element holding the creator name inside a grid link
    """

    browser_type: str = "chromium"
    headless: bool = True
    args: list[str] = field(
        default_factory=lambda: ["--no-sandbox", "--disable-setuid-sandbox"]
    )
    navigation_timeout_ms: int = 50000
    wait_until: str = "networkidle"
    grid_selector: str = ".grid"
    grid_timeout_ms: int = 30000
    heading_selector: str = "h3"


@dataclass
class StorageConfig:
    """Configuration for persisted partitions and the report.

    Attributes:
        root: Directory holding both namespaces and the report
        stubs_namespace: Directory name of the listing-stage partitions
        details_namespace: Directory name of the enrichment-stage partitions
        report_filename: Name of the rendered text report
    """

    root: str = "."
    stubs_namespace: str = "creators"
    details_namespace: str = "creators-details"
    report_filename: str = "creator-report.txt"


@dataclass
class ReportConfig:
    """Configuration for the text report.

    Attributes:
        title: First line of the report
        include_timestamp: Add a "Generated on" line (breaks byte-identical reruns)
        timestamp_format: strftime format of the "Generated on" line
    """

    title: str = "Time.fun Creators Report"
    include_timestamp: bool = False
    timestamp_format: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file, created under the storage root
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "run.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    site: SiteConfig = field(default_factory=SiteConfig)
    browser: BrowserConfig = field(default_factory=BrowserConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        site=SiteConfig(**data["site"]),
        browser=BrowserConfig(**data["browser"]),
        storage=StorageConfig(**data["storage"]),
        report=ReportConfig(**data["report"]),
        logging=LoggingConfig(**data["logging"]),
    )
