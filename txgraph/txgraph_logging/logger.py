"""
structlog setup for txgraph.

Every record is one line on stderr; stdout is reserved for the graph report.
LOG_FORMAT=json (default) emits one JSON object per line with event_type,
level, an ISO-8601 UTC timestamp and the logger name, plus whatever context
the call site passes (block_hash, txid, url, attempt, ...). LOG_FORMAT=console
gives the structlog dev renderer instead. Context keys whose value is None
are dropped, so optional fields such as status_code only appear when known.

Imports nothing from txgraph, so every module may use it.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, TextIO

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)

LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()


def _event_type(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Store the positional event name under event_type."""
    event = event_dict.pop("event", None)
    if event is not None:
        event_dict.setdefault("event_type", event)
    return event_dict


def _drop_none(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in event_dict.items() if v is not None}


def _processors(log_format: str, stream: TextIO) -> list[Any]:
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        _drop_none,
    ]
    if log_format == "console":
        # the console renderer formats exc_info and needs the "event" key itself
        processors.append(structlog.dev.ConsoleRenderer(colors=stream.isatty()))
    else:
        processors += [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _event_type,
            structlog.processors.JSONRenderer(),
        ]
    return processors


def configure_structlog(
    level: int = LOG_LEVEL_VALUE,
    log_format: str = LOG_FORMAT,
    stream: TextIO | None = None,
) -> None:
    """(Re)configure structlog; loggers obtained afterwards use the new setup."""
    stream = stream if stream is not None else sys.stderr
    structlog.configure(
        processors=_processors(log_format, stream),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Structured logger tagged with the module name.

        logger = get_logger(__name__)
        logger.info("block_txs_fetched", block_hash=h, tx_count=2500, pages=100)

    renders as {"level": "info", "timestamp": "...", "logger": "txgraph.pipeline.fetcher",
    "block_hash": "...", "tx_count": 2500, "pages": 100, "event_type": "block_txs_fetched"}.
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_block(block_hash: str) -> structlog.BoundLogger:
    """Run-level logger with block_hash on every record."""
    return get_logger("txgraph").bind(block_hash=block_hash)
