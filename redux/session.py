"""Session token lifecycle."""

from enum import Enum

import structlog

from redux.endpoints import Endpoint
from redux.errors import (
    AccountCompromisedError,
    ConfigurationError,
    ProtocolError,
    SessionClosedError,
    SessionStateTransitionError,
)
from redux.models.mapper import build
from redux.transport.gateway import RequestGateway
from redux.transport.redact import redact_token


logger = structlog.get_logger()


class SessionState(str, Enum):
    """State of a client session.

    - UNAUTHENTICATED: No token yet (login in progress or failed)
    - ACTIVE: Token established, requests allowed
    - LOGGED_OUT: Token invalidated by logout, requests fail locally
    """

    UNAUTHENTICATED = "UNAUTHENTICATED"
    ACTIVE = "ACTIVE"
    LOGGED_OUT = "LOGGED_OUT"


_VALID_TRANSITIONS: dict[SessionState, set[SessionState]] = {
    SessionState.UNAUTHENTICATED: {SessionState.ACTIVE},
    SessionState.ACTIVE: {SessionState.LOGGED_OUT},
    SessionState.LOGGED_OUT: set(),  # Terminal state
}


class Session:
    """Holds the session token and enforces its lifecycle.

    The token is set once, on activation, and never changes afterwards.
    After logout the token is kept for inspection but no request may use it.
    """

    def __init__(self, host: str) -> None:
        """Initialize an unauthenticated session.

        Args:
            host: API base URL the session belongs to.
        """
        self._host = host
        self._token: str | None = None
        self._state = SessionState.UNAUTHENTICATED
        self._log = logger.bind(component="session", host=host)

    @property
    def host(self) -> str:
        """API base URL."""
        return self._host

    @property
    def token(self) -> str | None:
        """Session token, None until activated."""
        return self._token

    @property
    def state(self) -> SessionState:
        """Current lifecycle state."""
        return self._state

    @property
    def is_active(self) -> bool:
        """Check if requests may be sent with this session."""
        return self._state == SessionState.ACTIVE

    def can_transition_to(self, target: SessionState) -> bool:
        """Check if a transition to the target state is valid.

        Args:
            target: The target state.

        Returns:
            True if the transition is valid.
        """
        return target in _VALID_TRANSITIONS.get(self._state, set())

    def _transition_to(self, target: SessionState) -> None:
        if not self.can_transition_to(target):
            self._log.error(
                "illegal_session_transition",
                from_state=self._state.value,
                to_state=target.value,
            )
            raise SessionStateTransitionError(self._state.value, target.value)

        old_state = self._state
        self._state = target
        self._log.info(
            "session_state_transition",
            from_state=old_state.value,
            to_state=target.value,
            token=redact_token(self._token),
        )

    def activate(self, token: str) -> None:
        """Establish the session with a token.

        Args:
            token: Session token, supplied or issued by login.

        Raises:
            SessionStateTransitionError: If the session was already activated.
        """
        if not self.can_transition_to(SessionState.ACTIVE):
            raise SessionStateTransitionError(
                self._state.value, SessionState.ACTIVE.value
            )
        self._token = token
        self._transition_to(SessionState.ACTIVE)

    def require_token(self) -> str:
        """Get the token for an outgoing request.

        Returns:
            The session token.

        Raises:
            SessionClosedError: If the session has been logged out.
            SessionStateTransitionError: If the session was never activated.
        """
        if self._state == SessionState.LOGGED_OUT:
            raise SessionClosedError
        if not self.is_active or self._token is None:
            raise SessionStateTransitionError(
                self._state.value, SessionState.ACTIVE.value
            )
        return self._token

    def logout(self, gateway: RequestGateway) -> None:
        """Invalidate the token on the server and close the session.

        The response body is not inspected.

        Args:
            gateway: Gateway to send the logout request through.

        Raises:
            SessionClosedError: If already logged out.
        """
        gateway.request(Endpoint.LOGOUT, token=self.require_token(), decode=False)
        self._transition_to(SessionState.LOGGED_OUT)


def login(gateway: RequestGateway, username: str, password: str) -> str:
    """Exchange a username and password for a session token.

    Args:
        gateway: Gateway to send the login request through.
        username: Account username.
        password: Account password.

    Returns:
        The issued session token.

    Raises:
        AccountCompromisedError: If the account is flagged as compromised.
        ProtocolError: If the response carries no token.
        ForbiddenError: If the credentials are rejected.
    """
    data = build(
        Endpoint.LOGIN,
        gateway.request(
            Endpoint.LOGIN, {"username": username, "password": password}
        ),
    )

    if data.get("compromised"):
        logger.warning("account_compromised", component="session", username=username)
        raise AccountCompromisedError(f"Account '{username}' is flagged as compromised")

    token = data.get("token")
    if not token:
        msg = "Login response did not contain a token"
        raise ProtocolError(msg)
    return str(token)


def authenticate(
    gateway: RequestGateway,
    *,
    token: str | None = None,
    username: str | None = None,
    password: str | None = None,
) -> Session:
    """Establish a session from a token or a username and password.

    A supplied token wins over username and password; no login call is made.
    Only None counts as missing, so empty strings are passed on to the server.

    Args:
        gateway: Gateway used for the login call.
        token: Existing session token.
        username: Account username.
        password: Account password.

    Returns:
        An active Session.

    Raises:
        ConfigurationError: If neither a token nor both username and
            password are supplied.
        AccountCompromisedError: If the account is flagged as compromised.
    """
    session = Session(gateway.host)

    if token is None:
        if username is None or password is None:
            msg = "Supply either token or username and password"
            raise ConfigurationError(msg)
        token = login(gateway, username, password)

    session.activate(token)
    return session
