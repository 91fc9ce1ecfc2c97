"""
Observability module.

Provides structured logging and correlation ID tracking.
"""

from papernotes.observability.correlation import get_correlation_id, set_correlation_id
from papernotes.observability.logger import configure_logging

__all__ = ["configure_logging", "get_correlation_id", "set_correlation_id"]
