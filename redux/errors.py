"""Error taxonomy for the Redux client.

Every failure raised by the client derives from ``ReduxError`` so callers can
catch the whole family at once, while each kind stays individually catchable:

- ``ConfigurationError``: neither token nor username/password supplied
- ``AccountCompromisedError``: login flagged the account as compromised
- ``ForbiddenError``: HTTP 403, session expired or content not permitted
- ``NotFoundError``: HTTP 404
- ``HttpError``: any other 4xx/5xx response
- ``JsonParseError``: 200 response whose body is not valid JSON
- ``UnexpectedStatusError``: status outside 200-599
"""


class ReduxError(Exception):
    """Base exception for all Redux client errors."""


class ConfigurationError(ReduxError, ValueError):
    """Raised when the client is built without usable credentials."""


class AccountCompromisedError(ReduxError):
    """Raised when login reports the account as compromised.

    The account is locked and no session is established. Retrying will not
    help; the account owner has to reset it.
    """


class ProtocolError(ReduxError):
    """Raised when a successful response is missing a required field."""


class TransportError(ReduxError):
    """Raised when the request could not be sent or no response arrived."""

    def __init__(self, url: str, message: str) -> None:
        """Initialize the transport error.

        Args:
            url: Request URL.
            message: Description of the underlying failure.
        """
        self.url = url
        super().__init__(f"Request to {url} failed: {message}")


class ResponseError(ReduxError):
    """Base for errors derived from an HTTP response status.

    Attributes:
        status_code: HTTP status code returned by the API.
        url: Request URL.
    """

    def __init__(self, status_code: int, url: str, message: str | None = None) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message or f"{status_code} response for {url}")


class ForbiddenError(ResponseError):
    """HTTP 403: the token is invalid or expired, or the content is unavailable."""


class NotFoundError(ResponseError):
    """HTTP 404: the requested resource does not exist."""


class HttpError(ResponseError):
    """Any other 4xx or 5xx response."""


class UnexpectedStatusError(ResponseError):
    """Status code outside the 200-599 range."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(status_code, url, f"Unexpected status {status_code} for {url}")


class JsonParseError(ReduxError):
    """Raised when a 200 response body does not parse as JSON."""

    def __init__(self, url: str, message: str) -> None:
        """Initialize the parse error.

        Args:
            url: Request URL.
            message: Message of the underlying JSON decode error.
        """
        self.url = url
        self.message = message
        super().__init__(f"Error parsing {url}, {message}")


class SessionClosedError(ReduxError):
    """Raised when a request is attempted after logout."""

    def __init__(self) -> None:
        super().__init__("Session has been logged out; create a new client")


class SessionStateTransitionError(ReduxError):
    """Raised when an illegal session state transition is attempted."""

    def __init__(self, from_state: str, to_state: str) -> None:
        """Initialize the transition error.

        Args:
            from_state: Current state value.
            to_state: Attempted target state value.
        """
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Illegal session state transition: {from_state} -> {to_state}"
        )
