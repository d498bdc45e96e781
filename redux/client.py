"""Redux API client."""

import re
from collections.abc import Mapping, Sequence
from datetime import date, datetime, time, timedelta
from types import TracebackType
from typing import Any

import httpx
import structlog

from redux.endpoints import Endpoint
from redux.models.asset import Asset
from redux.models.channel import Channel, ChannelCategory
from redux.models.mapper import build
from redux.models.search_results import SearchResults
from redux.models.user import User
from redux.pagination import SearchPager, collect_assets
from redux.session import Session, SessionState, authenticate
from redux.transport.config import ClientConfig
from redux.transport.gateway import RequestGateway


logger = structlog.get_logger()

UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"
)

SCHEDULE_PAGE_SIZE = 100
SCHEDULE_DAY_START = time(6, 0, 0)

# Defaults of the search loop; explicit query values win
SEARCH_LOOP_DEFAULTS: dict[str, Any] = {
    "offset": 0,
    "sort_by": "time",
    "sort_order": "ascending",
    "repeats": True,
}

ChannelFilter = str | Channel | Sequence[str | Channel] | None


class Client:
    """Client for the Redux archive API.

    Build it with either an existing session token or a username and
    password, which are exchanged for a token straight away.

    Example:
        client = Client(username="username", password="password")
        client = Client(token="some-token")

        client.asset("5966413090093319525")  # Asset
        client.channel_categories()          # list[ChannelCategory]
        client.channels()                    # list[Channel]
        client.schedule(date.today())        # list[Asset]
        client.search(name="Pingu")          # SearchResults
        client.user()                        # User

        client.logout()

    After ``logout()`` every further request fails with SessionClosedError.
    """

    def __init__(  # noqa: PLR0913
        self,
        token: str | None = None,
        username: str | None = None,
        password: str | None = None,
        host: str | None = None,
        http: httpx.Client | None = None,
        config: ClientConfig | None = None,
    ) -> None:
        """Initialize the client and establish its session.

        Args:
            token: Token of an existing session.
            username: Username of a Redux account.
            password: Password of a Redux account.
            host: API host, overrides ``config.host``.
            http: HTTP client to send requests with.
            config: Transport configuration.

        Raises:
            ConfigurationError: If neither token nor username and password
                are supplied.
            AccountCompromisedError: If the account is flagged as compromised.
            ForbiddenError: If the username or password are incorrect.
            HttpError: If the API fails.
        """
        config = config or ClientConfig()
        if host is not None:
            config = ClientConfig(**{**config.model_dump(), "host": host})

        self._gateway = RequestGateway(config, http)
        try:
            self._session = authenticate(
                self._gateway, token=token, username=username, password=password
            )
        except Exception:
            self._gateway.close()
            raise
        self._log = logger.bind(component="client", host=self.host)

    @property
    def token(self) -> str:
        """Token of the current session."""
        return self._session.token or ""

    @property
    def host(self) -> str:
        """API host."""
        return self._gateway.host

    @property
    def http(self) -> httpx.Client:
        """Underlying HTTP client."""
        return self._gateway.http

    @property
    def state(self) -> SessionState:
        """Lifecycle state of the session."""
        return self._session.state

    def __eq__(self, other: object) -> bool:
        return (
            type(self) is type(other)
            and isinstance(other, Client)
            and self.token == other.token
            and self.host == other.host
            and self.http is other.http
        )

    __hash__ = None  # type: ignore[assignment]

    def __enter__(self) -> "Client":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Release the HTTP client if the client created it.

        Does not log out; the session stays valid on the server.
        """
        self._gateway.close()

    def _request(
        self, endpoint: Endpoint, params: Mapping[str, Any] | None = None
    ) -> Any:
        return self._gateway.request(
            endpoint, params, token=self._session.require_token()
        )

    def asset(self, identifier: str) -> Asset:
        """Fetch an asset by disk reference or UUID.

        Args:
            identifier: Disk reference, e.g. ``5966413090093319525``, or UUID.

        Returns:
            The asset.
        """
        if UUID_PATTERN.fullmatch(identifier):
            params = {"uuid": identifier}
        else:
            params = {"reference": identifier}
        return build(Endpoint.ASSET, self._request(Endpoint.ASSET, params))

    def channels(self) -> list[Channel]:
        """Fetch the channels available to this session."""
        return build(Endpoint.CHANNELS, self._request(Endpoint.CHANNELS))

    def channel_categories(self) -> list[ChannelCategory]:
        """Fetch the channel categories available to this session."""
        return build(
            Endpoint.CHANNEL_CATEGORIES, self._request(Endpoint.CHANNEL_CATEGORIES)
        )

    def user(self) -> User:
        """Fetch the user owning this session."""
        return build(Endpoint.USER, self._request(Endpoint.USER))

    def logout(self) -> None:
        """Log out of Redux, invalidating the token.

        No further requests can be made with this client afterwards.
        """
        self._session.logout(self._gateway)

    def search(
        self, query: Mapping[str, Any] | None = None, **params: Any
    ) -> SearchResults:
        """Fetch one page of search results.

        Recognised parameters:

        - ``q``: free text query
        - ``name``: programme name
        - ``channel``: channel name or Channel, or a list of them
        - ``limit``: page size, server default 10
        - ``offset``: start of the page within all results
        - ``before`` / ``after``: broadcast time bounds (date or datetime)
        - ``date``: everything from 06:00 on the date for 24 hours
        - ``longer`` / ``shorter``: duration bounds in seconds
        - ``programme_crid`` / ``series_crid``: TV Anytime CRIDs
        - ``repeats``: include repeats (bool)
        - ``sort_by``: ``time`` or None
        - ``sort_order``: ``ascending`` or ``descending``

        Args:
            query: Search parameters as a mapping.
            **params: Search parameters as keywords, merged over ``query``.

        Returns:
            The page of results, carrying the query that produced it.
        """
        merged = {**(query or {}), **params}
        data = self._request(Endpoint.SEARCH_RESULTS, merged)
        return build(Endpoint.SEARCH_RESULTS, data, query=merged)

    def pages(
        self, query: Mapping[str, Any] | None = None, page_size: int | None = None
    ) -> SearchPager:
        """Iterate over search results one page at a time.

        Args:
            query: Search parameters for the first page.
            page_size: Offset increment, defaults to ``limit`` or 10.

        Returns:
            A lazy pager; call ``stop()`` on it to end iteration early.
        """
        return SearchPager(self.search, query or {}, page_size)

    def search_all(
        self, query: Mapping[str, Any] | None = None, page_size: int | None = None
    ) -> list[Asset]:
        """Run a search across every page, oldest broadcast first.

        Starts at offset 0, sorted by ascending time with repeats included
        unless the query says otherwise.

        Args:
            query: Search parameters.
            page_size: Offset increment, defaults to ``limit`` or 10.

        Returns:
            All matching assets.
        """
        full_query = {**SEARCH_LOOP_DEFAULTS, **(query or {})}
        return collect_assets(self.search, full_query, page_size)

    def schedule(self, day: date, channels: ChannelFilter = None) -> list[Asset]:
        """Return every programme broadcast on a schedule day.

        A schedule day runs from 06:00:00 to 05:59:59 the next morning. May
        make several requests to retrieve all the data.

        Args:
            day: Schedule date; the time part of a datetime is ignored.
            channels: Optionally limit to one channel or a list of channels.

        Returns:
            Assets broadcast on the day, in time order.
        """
        if isinstance(day, datetime):
            day = day.date()
        after = datetime.combine(day, SCHEDULE_DAY_START)
        before = after + timedelta(days=1) - timedelta(seconds=1)

        query = {
            "after": after,
            "before": before,
            "channel": channels,
            "offset": 0,
            "limit": SCHEDULE_PAGE_SIZE,
            "sort_by": "time",
            "sort_order": "ascending",
            "repeats": True,
        }

        self._log.info("schedule_started", day=day.isoformat())
        return collect_assets(self.search, query, page_size=SCHEDULE_PAGE_SIZE)
