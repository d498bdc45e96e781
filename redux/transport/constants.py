"""HTTP constants for the transport layer."""

HTTP_STATUS_OK = 200
HTTP_STATUS_FORBIDDEN = 403
HTTP_STATUS_NOT_FOUND = 404
HTTP_STATUS_ERROR_MIN = 400
HTTP_STATUS_ERROR_MAX = 600

DEFAULT_USER_AGENT = "redux-client/0.1.0"
DEFAULT_TIMEOUT_SECONDS = 60.0
