"""
Command-line interface for the creator report.

Uses Typer to provide a single command that runs the whole pipeline.
Every option is optional; without arguments the built-in defaults are
used and all files are written to the working directory.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from .config import load_config
from .runner import PipelineError, run_pipeline

app = typer.Typer(add_completion=False)
console = Console()


@app.command()
def run(
    config: Path | None = typer.Option(
        None, "--config", "-c", exists=True, readable=True, help="YAML config file."
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Directory for partitions and the report."
    ),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
    timestamp: bool | None = typer.Option(
        None, "--timestamp/--no-timestamp", help="Add a generation time to the report."
    ),
):
    """Scrape every creator category and write the creator report.

    Args:
        config: Optional path to YAML config file
        output: Storage root for partitions, report and log file
        progress: Whether to show progress bars
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Enable/disable file logging
        timestamp: Enable/disable the "Generated on" report line
    """
    cfg = load_config(str(config) if config else None)

    # Override with CLI options
    if output is not None:
        cfg.storage.root = str(output)
    if log_level:
        cfg.logging.level = log_level
    if log_file is not None:
        cfg.logging.file = log_file
    if timestamp is not None:
        cfg.report.include_timestamp = timestamp

    try:
        result = run_pipeline(cfg, show_progress=progress, console=console)
    except PipelineError as exc:
        console.print(f"[bold red]Scraping failed[/bold red]: {exc}")
        raise typer.Exit(code=1) from exc

    console.print(f"Report generated: {result.report_path}")


if __name__ == "__main__":
    app()
