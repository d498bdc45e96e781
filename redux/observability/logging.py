"""Structured logging configuration."""

import logging
import sys
from collections.abc import MutableMapping
from typing import Any, TextIO

import structlog

from redux.transport.redact import REDACTED_VALUE, SENSITIVE_FIELDS


def redact_sensitive_fields(
    _logger: Any, _method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Processor replacing top-level password values before rendering.

    Tokens are already shortened by the code logging them; passwords must
    never reach a log line in any form.
    """
    for key in SENSITIVE_FIELDS - {"token"}:
        if key in event_dict:
            event_dict[key] = REDACTED_VALUE
    return event_dict


def configure_logging(
    level: int = logging.WARNING,
    output: TextIO = sys.stderr,
    json_format: bool = False,
) -> None:
    """Configure structured logging for the client and CLI.

    Library code only emits through ``structlog.get_logger()``; applications
    decide where it goes by calling this once at startup.

    Args:
        level: Logging level (default: WARNING, so the CLI stays quiet).
        output: Output stream (default: stderr, keeping stdout for results).
        json_format: Render JSON lines instead of coloured console output.
    """
    renderer: structlog.types.Processor
    if json_format:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=output.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            redact_sensitive_fields,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=False,
    )

    # httpx logs every request at INFO through the standard library
    logging.basicConfig(format="%(message)s", stream=output, level=level)
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a bound logger instance.

    Args:
        name: Optional logger name.

    Returns:
        Bound logger instance.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
