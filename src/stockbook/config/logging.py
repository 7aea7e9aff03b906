"""
structlog setup for the ledger.

Events are key-value records such as ``invoice_updated invoice_id=...``.
They go to stderr so command output on stdout stays clean for scripts.
``STOCKBOOK_ENVIRONMENT=production`` switches from plain console lines
to one JSON object per event.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from stockbook.config.settings import Settings, get_settings


def add_ledger_context(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Tag each event with the data directory it was written against."""
    event_dict.setdefault("data_dir", str(get_settings().data_dir))
    return event_dict


def _renderers(settings: Settings) -> list[Processor]:
    if settings.environment == "production":
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=False)]


def configure_logging() -> None:
    """Route structlog through stdlib logging at the configured level.

    Safe to call once per command invocation; the stderr handler is
    replaced each time.
    """
    settings = get_settings()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            add_ledger_context,
            *_renderers(settings),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.log_level),
        force=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
