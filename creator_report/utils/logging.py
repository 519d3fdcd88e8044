"""
Run logging for the creator pipeline.

Every pipeline message goes to the "creator_report" logger. Structured
fields (event, category, creator, url, ...) are passed as ``extra`` so
the Rich console shows a readable line while the optional JSONL file
under the storage root keeps one machine-readable object per event.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.logging import RichHandler

from ..config import LoggingConfig

LOGGER_NAME = "creator_report"

# Attributes every LogRecord carries; anything else came in through extra=.
_RESERVED = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {
    "message",
    "asctime",
    "taskName",
}


def setup_logging(cfg: LoggingConfig, log_dir: Path | None) -> logging.Logger:
    """Configure the pipeline logger for one run.

    Handlers from a previous run are dropped, so calling this twice in
    one process does not duplicate output.

    Args:
        cfg: Logging configuration
        log_dir: Directory for the JSONL run log, normally the storage
            root; no file is written when None or when cfg.file is off

    Returns:
        The configured "creator_report" logger
    """
    level = _level_from_string(cfg.level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers = []
    logger.propagate = False

    if cfg.console:
        console_handler = RichHandler(rich_tracebacks=True, show_time=False, show_level=True)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(console_handler)

    if cfg.file and log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / cfg.filename, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(_build_file_formatter(cfg.format))
        logger.addHandler(file_handler)

    return logger


def log_event(logger: logging.Logger | None, message: str, **fields: Any) -> None:
    """Log a pipeline event at INFO with structured fields."""
    if logger is None:
        return
    logger.info(message, extra=fields)


def log_failure(
    logger: logging.Logger | None,
    message: str,
    exc: BaseException,
    **fields: Any,
) -> None:
    """Log a recoverable failure at WARNING.

    The error is appended to the console message and stored as the
    ``error`` field for the JSONL log.
    """
    if logger is None:
        return
    error = f"{type(exc).__name__}: {exc}"
    logger.warning("%s: %s", message, exc, extra={**fields, "error": error})


class JsonlFormatter(logging.Formatter):
    """One JSON object per record: fixed keys first, then the extra fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        payload.update(
            (key, value) for key, value in record.__dict__.items() if key not in _RESERVED
        )
        return json.dumps(payload, ensure_ascii=True, default=str)


def _build_file_formatter(fmt: str) -> logging.Formatter:
    if fmt == "jsonl":
        return JsonlFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(message)s")


def _level_from_string(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)
