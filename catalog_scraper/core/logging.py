"""structlog setup shared by the runner scripts."""

import logging
import sys

import structlog


def configure_logging(debug: bool = False) -> None:
    """Render log events as timestamped console lines.

    Args:
        debug: Emit DEBUG events as well (INFO and above otherwise)
    """
    level = logging.DEBUG if debug else logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )
