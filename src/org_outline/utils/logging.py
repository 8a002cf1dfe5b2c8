"""Structured logging setup for org-outline."""

import os
from pathlib import Path
from typing import Any

import structlog

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def get_log_dir() -> Path:
    """Return the log directory (ORG_OUTLINE_LOG_DIR or ~/.cache/org-outline/logs)."""
    override = os.environ.get("ORG_OUTLINE_LOG_DIR")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".cache" / "org-outline" / "logs"


def configure_logging() -> None:
    """
    Configure structlog for JSON logging to ~/.cache/org-outline/logs/org-outline.log.

    Log level can be controlled via ORG_OUTLINE_LOG_LEVEL environment variable
    (DEBUG, INFO, WARNING, ERROR). Defaults to INFO; unknown values fall back to INFO.

    Log levels:
    - DEBUG: Per-parse line counts, source open/close events
    - INFO: CLI commands, completed parses
    - WARNING: Containers left open at end of input
    - ERROR: Structure errors, unreadable sources

    Example:
        ORG_OUTLINE_LOG_LEVEL=DEBUG org-outline parse notes.org
        tail -f ~/.cache/org-outline/logs/org-outline.log | jq .
    """
    log_dir = get_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "org-outline.log"

    log_level = os.environ.get("ORG_OUTLINE_LOG_LEVEL", "INFO").upper()
    if log_level not in VALID_LEVELS:
        log_level = "INFO"

    log_stream = open(log_file, "a", encoding="utf-8")
    structlog.configure(
        processors=json_processors(),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=log_stream),
        cache_logger_on_first_use=True,
    )


def json_processors() -> list[Any]:
    """Processor chain rendering each event as one JSON object per line.

    Exceptions are kept structured (dict_tracebacks) so a structure error
    logged with exc_info stays machine-readable.
    """
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.dict_tracebacks,
        structlog.processors.JSONRenderer(ensure_ascii=False),
    ]


def get_logger(name: str) -> Any:
    """Return a structlog logger for module `name` (pass __name__)."""
    return structlog.get_logger(name)
