"""Client library for the Redux media archive API."""

from redux.client import Client
from redux.endpoints import DEFAULT_HOST, Endpoint
from redux.errors import (
    AccountCompromisedError,
    ConfigurationError,
    ForbiddenError,
    HttpError,
    JsonParseError,
    NotFoundError,
    ProtocolError,
    ReduxError,
    ResponseError,
    SessionClosedError,
    SessionStateTransitionError,
    TransportError,
    UnexpectedStatusError,
)
from redux.models import (
    MEDIA_PROFILES,
    Asset,
    Channel,
    ChannelCategory,
    MediaUrl,
    SearchResults,
    User,
)
from redux.pagination import SearchPager
from redux.session import Session, SessionState
from redux.transport import ClientConfig


__version__ = "0.1.0"

__all__ = [
    # Client
    "Client",
    "ClientConfig",
    "DEFAULT_HOST",
    "Endpoint",
    "SearchPager",
    "Session",
    "SessionState",
    # Models
    "MEDIA_PROFILES",
    "Asset",
    "Channel",
    "ChannelCategory",
    "MediaUrl",
    "SearchResults",
    "User",
    # Errors
    "AccountCompromisedError",
    "ConfigurationError",
    "ForbiddenError",
    "HttpError",
    "JsonParseError",
    "NotFoundError",
    "ProtocolError",
    "ReduxError",
    "ResponseError",
    "SessionClosedError",
    "SessionStateTransitionError",
    "TransportError",
    "UnexpectedStatusError",
]
