"""
Logger configuration.

Provides configured logger with ISO timestamps and correlation ID injection.

Dependencies: logging (stdlib), papernotes.observability.correlation
System role: Centralized logging configuration
"""

import logging
import sys

from papernotes.observability.correlation import get_correlation_id


class CorrelationIdFilter(logging.Filter):
    """Attach the current correlation ID to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    """
    Configure Python logging with ISO timestamp and structured format.

    Args:
        level: Root log level name
    """
    # Remove any existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.addFilter(CorrelationIdFilter())

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    root_logger.setLevel(level.upper())
    root_logger.addHandler(handler)

    # Reduce noise from verbose third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("unstructured_client").setLevel(logging.WARNING)
