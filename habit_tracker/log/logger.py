"""
Structured Logger

DESIGN DECISION: Every state change in the tracker emits a structured
event (account_registered, habit_created, progress_logged, ...).
This gives:
1. Traceability of what happened to the data file
2. Debugging capability without a debugger attached
3. Machine-readable logs when JSON output is enabled

Passwords are never passed to the logger.
"""

import logging
import sys
from typing import Optional

import structlog

from habit_tracker.config.settings import LoggingSettings


_SHARED_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def _configure_structlog(json_output: bool) -> None:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[*_SHARED_PROCESSORS, renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


# Configure structlog for local logging with defaults until
# configure_logging() is called with real settings.
_configure_structlog(json_output=True)


def configure_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Apply logging settings.

    Sets the stdlib root level (structlog filters through it) and
    picks the JSON or console renderer.
    """
    settings = settings or LoggingSettings()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=settings.level,
    )
    logging.getLogger().setLevel(settings.level)

    structlog.reset_defaults()
    _configure_structlog(json_output=settings.json_output)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, optionally named after a module."""
    return structlog.get_logger(name)
