"""
structlog setup for screening runs.

Module loggers from get_logger() stay lazy: they resolve structlog's current
configuration on every call, so configure_logging() can run after the
environment (including .env) is loaded and still govern loggers created at
import time.

Records carry level, an ISO UTC timestamp and the emitting module under
"logger". JSON output names the event event_type; the console renderer keeps
it as the line's headline.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog._config import BoundLoggerLazyProxy

DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "json"


def _event_to_event_type(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    if "event" in event_dict:
        event_dict.setdefault("event_type", event_dict.pop("event"))
    return event_dict


def level_value(name: str) -> int:
    """Map a level name (any case) to its logging constant. Raises ValueError for unknown names."""
    value = logging.getLevelName(name.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"unknown log level {name!r}")
    return value


def configure_logging(level: str = DEFAULT_LEVEL, log_format: str = DEFAULT_FORMAT) -> None:
    """
    (Re)configure structlog for this process.

    level: minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    log_format: "json" for one JSON object per line, anything else for the
        console renderer.
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        structlog.processors.format_exc_info,
    ]
    if log_format.strip().lower() == "json":
        processors += [_event_to_event_type, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_value(level)),
        context_class=dict,
        # PrintLogger without a fixed file writes to whatever sys.stdout is at call time
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    configure_logging()


def get_logger(name: str) -> Any:
    """
    Lazy structured logger tagged with the module name.

        logger = get_logger(__name__)
        logger.info("screen_batch_started", batch=1, batch_count=4, size=45)
    """
    # structlog.get_logger(name, logger=name) collides with wrap_logger's own
    # `logger` parameter, so build the same lazy proxy with explicit initial values.
    return BoundLoggerLazyProxy(None, initial_values={"logger": name}, logger_factory_args=(name,))
