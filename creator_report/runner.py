"""
Main pipeline orchestration for the creator report.

This module coordinates the entire workflow:
1. List creators of every registered category (one stub partition each)
2. Load the stub partitions back from disk
3. Scrape each creator's detail page (one detail partition per category)
4. Aggregate the detail partitions and write the text report

Everything runs sequentially in one browser session, which is released
on every exit path. A failure on a single creator page is logged and the
creator is skipped; any other error aborts the run.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)

from .config import AppConfig
from .core.registry import CATEGORIES
from .core.slug import title_from_slug
from .core.types import Category, Creator, CreatorDetails
from .extract.detail import extract_detail
from .extract.listing import extract_listing
from .fetch.browser import BrowserSession, render_page
from .output.renderer import build_report, render_report, write_report
from .storage import PartitionStore
from .utils.logging import log_event, log_failure, setup_logging

SessionFactory = Callable[[Any], AbstractAsyncContextManager[Any]]


class Stage(str, Enum):
    """Pipeline stages; FAILED is reachable from any other stage."""

    IDLE = "idle"
    LISTING = "listing"
    LISTING_PERSISTED = "listing_persisted"
    ENRICHING = "enriching"
    ENRICHMENT_PERSISTED = "enrichment_persisted"
    REPORTING = "reporting"
    DONE = "done"
    FAILED = "failed"


class PipelineError(RuntimeError):
    """A run-level failure.

    Attributes:
        stage: Stage that was running when the error occurred
    """

    def __init__(self, stage: Stage, cause: BaseException):
        super().__init__(f"Pipeline failed during {stage.value}: {type(cause).__name__}: {cause}")
        self.stage = stage


@dataclass
class EnrichStats:
    """Statistics collected during the enrichment stage.

    Attributes:
        total: Number of creators loaded from the stub partitions
        success: Creators whose detail page was scraped
        failed: Creators skipped after a page or extraction error
    """
    total: int = 0
    success: int = 0
    failed: int = 0


@dataclass
class PipelineResult:
    """Outcome of a completed run.

    Attributes:
        total_creators: Creators discovered during listing
        enriched: Creators written to the detail partitions
        failed: Creators skipped during enrichment
        report_path: Path of the written report
        timestamp: Completion time
        stats: Enrichment statistics shown on the console
    """
    total_creators: int
    enriched: int
    failed: int
    report_path: Path
    timestamp: datetime
    stats: EnrichStats = field(default_factory=EnrichStats)


class CreatorPipeline:
    """Runs the listing, enrichment and reporting stages in order.

    Args:
        cfg: Application configuration
        logger: Logger for pipeline events
        session_factory: Callable returning an async context manager that
            yields a browser session (defaults to BrowserSession.open)
        categories: Categories to list (defaults to the registry)
        progress: Optional Rich progress bar
    """

    def __init__(
        self,
        cfg: AppConfig,
        logger: logging.Logger,
        session_factory: SessionFactory | None = None,
        categories: tuple[Category, ...] = CATEGORIES,
        progress: Progress | None = None,
    ) -> None:
        self.cfg = cfg
        self.logger = logger
        self.session_factory = session_factory or BrowserSession.open
        self.categories = categories
        self.progress = progress
        self.store = PartitionStore(Path(cfg.storage.root))
        self.stage = Stage.IDLE

    def _enter(self, stage: Stage) -> None:
        self.stage = stage
        log_event(self.logger, f"Stage {stage.value}", event="stage", stage=stage.value)

    async def run(self) -> PipelineResult:
        """Run all stages.

        Raises:
            PipelineError: On any failure that is not limited to one creator
        """
        log_event(
            self.logger,
            "Pipeline start",
            event="pipeline_start",
            root=str(self.store.root),
            categories=len(self.categories),
        )
        try:
            async with self.session_factory(self.cfg.browser) as session:
                total_creators = await self._list_categories(session)
                stats = await self._enrich_partitions(session)
            report_path = self._write_report()
        except Exception as exc:  # noqa: BLE001
            failed_stage = self.stage
            self.stage = Stage.FAILED
            self.logger.exception(
                "Pipeline failed during %s",
                failed_stage.value,
                extra={"event": "pipeline_failed", "stage": failed_stage.value},
            )
            raise PipelineError(failed_stage, exc) from exc

        self._enter(Stage.DONE)
        log_event(
            self.logger,
            "Pipeline complete",
            event="pipeline_complete",
            total=total_creators,
            enriched=stats.success,
            failed=stats.failed,
            output=str(report_path),
        )
        return PipelineResult(
            total_creators=total_creators,
            enriched=stats.success,
            failed=stats.failed,
            report_path=report_path,
            timestamp=datetime.now(),
            stats=stats,
        )

    async def _list_categories(self, session) -> int:
        self._enter(Stage.LISTING)
        browser_cfg = self.cfg.browser
        page = await session.new_page()
        task = self._add_task("Categories", len(self.categories))
        total = 0

        for category in self.categories:
            url = category.url(self.cfg.site.base_url, self.cfg.site.category_path)
            try:
                snapshot = await render_page(page, url, browser_cfg, wait_for=browser_cfg.grid_selector)
                creators = extract_listing(
                    snapshot,
                    grid_selector=browser_cfg.grid_selector,
                    heading_selector=browser_cfg.heading_selector,
                )
            except Exception as exc:  # noqa: BLE001
                log_failure(
                    self.logger,
                    f"Failed to list {category.label}",
                    exc,
                    event="listing_failed",
                    category=category.label,
                    url=url,
                )
                creators = []

            self.store.save(self.cfg.storage.stubs_namespace, category.label, creators)
            log_event(
                self.logger,
                f"Found {len(creators)} creators in {category.label}",
                event="listing_saved",
                category=category.label,
                count=len(creators),
            )
            total += len(creators)
            self._advance(task)

        self._enter(Stage.LISTING_PERSISTED)
        return total

    async def _enrich_partitions(self, session) -> EnrichStats:
        self._enter(Stage.ENRICHING)
        raw_partitions = self.store.load_all(self.cfg.storage.stubs_namespace)
        partitions = {
            slug: [Creator.from_dict(record) for record in records]
            for slug, records in raw_partitions.items()
        }
        stats = EnrichStats(total=sum(len(creators) for creators in partitions.values()))
        self.store.namespace_dir(self.cfg.storage.details_namespace).mkdir(parents=True, exist_ok=True)
        page = await session.new_page()

        for slug, creators in partitions.items():
            log_event(
                self.logger,
                f"Processing {len(creators)} creators from {slug}",
                event="partition_start",
                category=slug,
                count=len(creators),
            )
            task = self._add_task(title_from_slug(slug), len(creators))
            details: list[CreatorDetails] = []
            for creator in creators:
                try:
                    snapshot = await render_page(page, creator.url, self.cfg.browser)
                    detail = extract_detail(snapshot, creator)
                except Exception as exc:  # noqa: BLE001
                    stats.failed += 1
                    log_failure(
                        self.logger,
                        f"Failed to scrape {creator.name}",
                        exc,
                        event="detail_failed",
                        category=slug,
                        creator=creator.name,
                        url=creator.url,
                    )
                else:
                    stats.success += 1
                    details.append(detail)
                    self.logger.debug(
                        "Scraped details for %s",
                        creator.name,
                        extra={"event": "detail_scraped", "category": slug, "url": creator.url},
                    )
                self._advance(task)

            self.store.save(self.cfg.storage.details_namespace, slug, details)
            log_event(
                self.logger,
                f"Saved {len(details)} of {len(creators)} creators for {slug}",
                event="partition_saved",
                category=slug,
                count=len(details),
                skipped=len(creators) - len(details),
            )

        self._enter(Stage.ENRICHMENT_PERSISTED)
        return stats

    def _write_report(self) -> Path:
        self._enter(Stage.REPORTING)
        report_path = generate_report(self.cfg, self.store)
        log_event(self.logger, "Report written", event="report_written", output=str(report_path))
        return report_path

    def _add_task(self, description: str, total: int) -> int | None:
        if self.progress is None:
            return None
        return self.progress.add_task(description, total=total)

    def _advance(self, task: int | None) -> None:
        if self.progress is not None and task is not None:
            self.progress.advance(task, 1)


def generate_report(
    cfg: AppConfig,
    store: PartitionStore,
    generated_at: datetime | None = None,
) -> Path:
    """Render the report from the detail partitions on disk.

    Args:
        cfg: Application configuration
        store: Partition store to read from
        generated_at: Timestamp for the header; defaults to now when the
            report config asks for one

    Returns:
        Path of the written report

    Raises:
        FileNotFoundError: If the detail namespace does not exist
    """
    raw_partitions = store.load_all(cfg.storage.details_namespace)
    partitions = {
        title_from_slug(slug): [CreatorDetails.from_dict(record) for record in records]
        for slug, records in raw_partitions.items()
    }
    if generated_at is None and cfg.report.include_timestamp:
        generated_at = datetime.now()

    text = render_report(
        build_report(partitions),
        title=cfg.report.title,
        generated_at=generated_at,
        timestamp_format=cfg.report.timestamp_format,
    )
    report_path = store.root / cfg.storage.report_filename
    write_report(text, report_path)
    return report_path


def run_pipeline(
    cfg: AppConfig,
    show_progress: bool = True,
    console: Console | None = None,
    session_factory: SessionFactory | None = None,
) -> PipelineResult:
    """Run the complete creator report pipeline.

    Args:
        cfg: Application configuration
        show_progress: Whether to display progress bars
        console: Rich console for output (creates default if None)
        session_factory: Browser session factory, mainly for tests

    Returns:
        PipelineResult of the completed run

    Raises:
        PipelineError: If the run failed
    """
    root = Path(cfg.storage.root)
    logger = setup_logging(cfg.logging, root)
    console = console or Console()

    if not show_progress:
        pipeline = CreatorPipeline(cfg, logger, session_factory=session_factory)
        result = asyncio.run(pipeline.run())
        _render_enrich_stats(result.stats, console)
        return result

    progress = Progress(
        SpinnerColumn(),
        TextColumn("{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    )
    with progress:
        pipeline = CreatorPipeline(cfg, logger, session_factory=session_factory, progress=progress)
        result = asyncio.run(pipeline.run())
    _render_enrich_stats(result.stats, console)
    return result


def _render_enrich_stats(stats: EnrichStats, console: Console) -> None:
    """Display enrichment statistics to the console.

    Args:
        stats: Enrichment statistics to display
        console: Rich console for output
    """
    console.print(
        "[bold]Scrape summary[/bold]: "
        f"total={stats.total}, success={stats.success}, failed={stats.failed}"
    )
