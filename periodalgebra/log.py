"""structlog configuration for applications embedding periodalgebra.

The library only emits events through ``structlog.get_logger(__name__)``; it
never configures logging on import. Call ``setup_logging()`` from an
application or a REPL to see those events on the console.
"""

import logging
import sys

import structlog

from periodalgebra.settings import get_settings


def setup_logging(level: str | None = None) -> None:
    """Render structured events to stderr, filtered at ``level``.

    Args:
        level: Standard level name ("DEBUG", "INFO", ...). Defaults to
            the ``log_level`` setting.
    """
    name = (level or get_settings().log_level).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        raise ValueError(
            f"Unknown log level {name!r}.\n"
            f"Valid levels: DEBUG, INFO, WARNING, ERROR, CRITICAL"
        )

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
