"""Observability module for logging."""

from redux.observability.logging import configure_logging, get_logger


__all__ = [
    "configure_logging",
    "get_logger",
]
