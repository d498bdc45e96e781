"""Transport layer: authenticated POSTs and response classification.

This module provides:
- Form-encoded POST requests to named endpoints
- Status code classification into the client's error taxonomy
- Token and password redaction for logging
- Metrics collection for observability
"""

from redux.transport.config import ClientConfig
from redux.transport.constants import (
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    HTTP_STATUS_FORBIDDEN,
    HTTP_STATUS_NOT_FOUND,
    HTTP_STATUS_OK,
)
from redux.transport.gateway import RequestGateway, check_status, parse_json
from redux.transport.metrics import RequestMetrics
from redux.transport.redact import redact_body, redact_token, redact_url_credentials


__all__ = [
    # Gateway
    "RequestGateway",
    "check_status",
    "parse_json",
    # Config
    "ClientConfig",
    # Constants
    "DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_USER_AGENT",
    "HTTP_STATUS_FORBIDDEN",
    "HTTP_STATUS_NOT_FOUND",
    "HTTP_STATUS_OK",
    # Metrics
    "RequestMetrics",
    # Redaction
    "redact_body",
    "redact_token",
    "redact_url_credentials",
]
