"""structlog setup."""

import logging
from typing import Optional

import structlog

from dayinlife.infrastructure.config import get_log_json, get_log_level


def configure_logging(level: Optional[str] = None, json: Optional[bool] = None) -> None:
    """
    Configure structlog for the process.

    Args:
        level: Level name (default: LOG_LEVEL env var)
        json: Render JSON lines instead of console output (default: LOG_JSON)
    """
    level_name = (level or get_log_level()).upper()
    render_json = get_log_json() if json is None else json

    renderer = (
        structlog.processors.JSONRenderer()
        if render_json
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level_name)
        ),
        cache_logger_on_first_use=False,
    )
