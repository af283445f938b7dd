"""
Logging - structlog setup shared by the Streamlit app and the scripts

Events are short snake_case names ("session_registered", "plan_save_failed")
with ids as key-value context. Inside plan_context() every event, including
those from the storage layer, also carries the plan id.

Usage:
    from core.logging import configure_logging, get_logger, plan_context

    configure_logging()
    logger = get_logger(__name__)
    with plan_context(plan.id):
        logger.info("session_registered", topic_id=topic.id)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

import structlog

from core import config

# Chatty libraries only log warnings and above
QUIET_LOGGERS = ("pymongo", "streamlit", "watchdog", "urllib3")


def configure_logging(
    *,
    debug: bool | None = None,
    json_output: bool | None = None,
    log_stream: TextIO | None = None,
) -> None:
    """
    Route structlog and stdlib logging through one handler.

    Args:
        debug: DEBUG level; defaults to the DEBUG setting
        json_output: One JSON object per line; defaults to the LOG_JSON setting
        log_stream: Output stream (stderr when omitted)
    """
    if debug is None:
        debug = config.is_debug()
    if json_output is None:
        json_output = config.use_json_logs()

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(log_stream or sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None, **initial_context: object) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name, **initial_context)


@contextmanager
def plan_context(plan_id: str, **context: object) -> Iterator[None]:
    """Bind plan_id (and any extra ids) to every event logged inside the block."""
    with structlog.contextvars.bound_contextvars(plan_id=plan_id, **context):
        yield
