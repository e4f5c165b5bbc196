"""structlog configuration.

Library modules log through ``structlog.get_logger(__name__)`` and never
configure anything themselves; applications call
:func:`configure_logging` once at startup.
"""

from __future__ import annotations

import logging
import sys

import structlog

from relgraph import config


def configure_logging(level: str | None = None) -> None:
    """Configure stdlib logging and structlog.

    Args:
        level: Log level name. Defaults to the value derived from
            RELGRAPH_DEBUG / RELGRAPH_LOG_LEVEL.

    Raises:
        ValueError: If the level name is unknown.
    """
    name = (level or config.log_level()).upper()
    numeric_level = getattr(logging, name, None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {name}")

    logging.basicConfig(
        format="%(message)s",
        level=numeric_level,
        stream=sys.stderr,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger."""
    return structlog.get_logger(name)
