"""Structured logging configuration."""
import datetime
import json
import logging
import sys
from typing import Any, List

import structlog
from structlog.types import EventDict, Processor

DEFAULT_LOG_LEVEL = "WARNING"
IGNORED_LOGGERS = ["aiohttp", "asyncio"]


def unpack_event_dict(_: Any, __: str, event_dict: EventDict) -> EventDict:
    """Flatten ``logger.info({"event": ..., **data})`` calls into the event dict."""
    event = event_dict.get("event")
    if isinstance(event, dict):
        data = dict(event)
        event_dict["event"] = data.pop("event", "")
        for key, value in data.items():
            event_dict.setdefault(key, value)
    return event_dict


def add_timestamp(_: Any, __: str, event_dict: EventDict) -> EventDict:
    """Add ISO timestamp to the event dict."""
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.datetime.now(datetime.timezone.utc).isoformat()
    return event_dict


def drop_ignored_loggers(logger: Any, _: str, event_dict: EventDict) -> EventDict:
    name = getattr(logger, "name", "") or ""
    if any(name.startswith(ignored) for ignored in IGNORED_LOGGERS):
        raise structlog.DropEvent
    return event_dict


class CompactJSONRenderer:
    """Single-line JSON renderer with minimal output."""

    def __call__(self, _: Any, __: str, event_dict: EventDict) -> str:
        items = {
            "ts": event_dict.pop("timestamp", None),
            "lvl": event_dict.pop("level", "???"),
            "msg": event_dict.pop("event", ""),
        }
        if event_dict:
            items["data"] = dict(event_dict)
        return json.dumps(items, separators=(",", ":"), default=str)


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure structured logging for the installer.

    Everything goes to STDERR as compact JSON so that STDOUT stays reserved
    for the user-facing progress lines and the handed-off payload.
    """
    level_no = getattr(logging, level.upper(), None)
    if not isinstance(level_no, int):
        level_no = getattr(logging, DEFAULT_LOG_LEVEL)

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level_no, force=True)

    processors: List[Processor] = [
        structlog.stdlib.filter_by_level,
        drop_ignored_loggers,
        unpack_event_dict,
        structlog.stdlib.add_log_level,
        add_timestamp,
        structlog.processors.format_exc_info,
        CompactJSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
