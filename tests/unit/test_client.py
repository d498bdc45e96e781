"""Unit tests for the Redux client facade."""

from datetime import date, datetime

import httpx
import pytest

from redux.client import Client
from redux.errors import (
    AccountCompromisedError,
    ConfigurationError,
    ForbiddenError,
    SessionClosedError,
)
from redux.models import Asset, Channel, ChannelCategory, SearchResults, User
from redux.session import SessionState


class TestConstruction:
    """Tests for building a client."""

    def test_with_token(
        self, api, http_client: httpx.Client, api_host: str
    ) -> None:
        """The supplied token becomes the session token."""
        client = Client(token="supplied", host=api_host, http=http_client)

        assert client.token == "supplied"
        assert client.host == api_host
        assert client.http is http_client
        assert client.state == SessionState.ACTIVE
        assert api.requests == []

    def test_with_username_and_password(
        self, api, http_client: httpx.Client, api_host: str, session_token: str
    ) -> None:
        """Credentials are exchanged for the server-issued token."""
        client = Client(
            username="pingu", password="noot", host=api_host, http=http_client
        )

        assert client.token == session_token
        assert api.paths() == ["/user/login"]

    def test_without_credentials(self, http_client: httpx.Client) -> None:
        """Neither credential form is a configuration error."""
        with pytest.raises(ConfigurationError):
            Client(http=http_client)

    def test_empty_password_attempts_login(
        self, api, http_client: httpx.Client, api_host: str, session_token: str
    ) -> None:
        """An empty password is not treated as missing."""
        client = Client(
            username="pingu", password="", host=api_host, http=http_client
        )

        assert client.token == session_token
        assert api.paths() == ["/user/login"]

    def test_compromised_account(
        self, api, http_client: httpx.Client, api_host: str
    ) -> None:
        """A compromised account yields no client."""
        api.login_payload = {"compromised": True}

        with pytest.raises(AccountCompromisedError):
            Client(username="pingu", password="noot", host=api_host, http=http_client)

    def test_default_host(self, http_client: httpx.Client) -> None:
        """The public API host is the default."""
        client = Client(token="t", http=http_client)

        assert client.host == "https://i.bbcredux.com"

    def test_equality(self, http_client: httpx.Client, api_host: str) -> None:
        """Clients are equal when token, host and http client match."""
        first = Client(token="t", host=api_host, http=http_client)
        second = Client(token="t", host=api_host, http=http_client)
        other = Client(token="u", host=api_host, http=http_client)

        assert first == second
        assert first != other
        assert first != "t"

    def test_context_manager_keeps_injected_client_open(
        self, http_client: httpx.Client, api_host: str
    ) -> None:
        """Leaving the block does not close a caller-owned http client."""
        with Client(token="t", host=api_host, http=http_client) as client:
            assert client.token == "t"

        assert not http_client.is_closed


class TestAsset:
    """Tests for asset lookup."""

    def test_disk_reference(self, api, client: Client, asset_json) -> None:
        """Non-UUID identifiers are sent as ``reference``."""
        api.respond_json("/asset/details", asset_json(0))

        asset = client.asset("5966413090093319525")

        assert isinstance(asset, Asset)
        assert asset.reference == "5966413090093319525"
        body = api.requests[0].body
        assert body["reference"] == "5966413090093319525"
        assert "uuid" not in body

    def test_uuid(self, api, client: Client, asset_json) -> None:
        """UUID identifiers are sent as ``uuid``."""
        api.respond_json("/asset/details", asset_json(0))

        client.asset("6f9619ff-8b86-d011-b42d-00cf4fc964ff")

        body = api.requests[0].body
        assert body["uuid"] == "6f9619ff-8b86-d011-b42d-00cf4fc964ff"
        assert "reference" not in body

    @pytest.mark.parametrize(
        "identifier",
        [
            "6F9619FF-8B86-D011-B42D-00CF4FC964FF",
            "6f9619ff-8b86-d011-b42d-00cf4fc964ff\n",
            "6f9619ff8b86d011b42d00cf4fc964ff",
        ],
    )
    def test_non_canonical_uuid_is_reference(
        self, api, client: Client, asset_json, identifier: str
    ) -> None:
        """Only lower-case hyphenated UUIDs count as UUIDs."""
        api.respond_json("/asset/details", asset_json(0))

        client.asset(identifier)

        assert api.requests[0].body["reference"] == identifier


class TestListings:
    """Tests for channels, categories and user."""

    def test_channels(self, api, client: Client) -> None:
        """Channels are mapped from a JSON array."""
        api.respond_json(
            "/asset/channel/available",
            [
                {"name": "bbcone", "display_name": "BBC One", "category_id": 1},
                {"name": "bbcr4", "display_name": "BBC Radio 4", "category_id": 2},
            ],
        )

        channels = client.channels()

        assert [channel.name for channel in channels] == ["bbcone", "bbcr4"]
        assert all(isinstance(channel, Channel) for channel in channels)

    def test_channel_categories(self, api, client: Client) -> None:
        """Categories are mapped from a JSON array."""
        api.respond_json(
            "/asset/channel/categories",
            [{"id": 1, "description": "BBC TV", "priority": 1}],
        )

        categories = client.channel_categories()

        assert categories == [ChannelCategory(id=1, description="BBC TV", priority=1)]

    def test_user(self, api, client: Client, session_token: str) -> None:
        """User details come back as a User."""
        api.respond_json(
            "/user/details",
            {"id": 7, "username": "pingu", "first_name": "Pin", "last_name": "Gu"},
        )

        user = client.user()

        assert isinstance(user, User)
        assert user.full_name == "Pin Gu"
        assert api.requests[0].body == {"token": session_token}


class TestLogout:
    """Tests for logging out through the client."""

    def test_logout_then_requests_fail_locally(self, api, client: Client) -> None:
        """After logout no request reaches the server."""
        assert client.logout() is None

        with pytest.raises(SessionClosedError):
            client.user()
        with pytest.raises(SessionClosedError):
            client.search(name="Pingu")

        assert api.paths() == ["/user/logout"]
        assert client.state == SessionState.LOGGED_OUT

    def test_expired_token_is_forbidden(self, api, client: Client) -> None:
        """The server rejecting a token surfaces as ForbiddenError."""
        api.respond("/user/details", 403)

        with pytest.raises(ForbiddenError):
            client.user()


class TestSearch:
    """Tests for single-page search."""

    def test_single_page(self, api, client: Client, asset_json) -> None:
        """Search returns one page with the caller's query attached."""
        api.search_assets = [asset_json(i) for i in range(25)]

        results = client.search(name="Pingu", limit=10)

        assert isinstance(results, SearchResults)
        assert len(results.assets) == 10
        assert results.total == 25
        assert results.has_more
        assert results.query == {"name": "Pingu", "limit": 10}

    def test_query_mapping_and_keywords_merge(self, api, client: Client) -> None:
        """Keyword parameters override the mapping."""
        results = client.search({"name": "Pingu", "offset": 0}, offset=20)

        assert results.query == {"name": "Pingu", "offset": 20}
        assert api.requests[0].body["offset"] == "20"

    def test_parameter_coercion_on_the_wire(self, api, client: Client) -> None:
        """Booleans, dates and channel lists follow the codec rules."""
        client.search(
            {
                "repeats": False,
                "after": datetime(2024, 1, 1, 6, 0, 0),
                "channel": [Channel(name="bbcone"), "bbctwo"],
                "q": None,
            }
        )

        recorded = api.requests[0]
        assert recorded.body["repeats"] == "0"
        assert recorded.body["after"] == "2024-01-01T06:00:00"
        assert "q" not in recorded.body
        assert recorded.query_values("channel") == ["bbcone", "bbctwo"]

    def test_idempotent(self, api, client: Client, asset_json) -> None:
        """Identical searches give identical results."""
        api.search_assets = [asset_json(i) for i in range(15)]

        first = client.search(name="Pingu", offset=10)
        second = client.search(name="Pingu", offset=10)

        assert first == second
        assert first.has_more is second.has_more is False


class TestSearchAll:
    """Tests for the search loop."""

    def test_collects_every_page(self, api, client: Client, asset_json) -> None:
        """The loop walks pages of 10 from offset 0."""
        api.search_assets = [asset_json(i) for i in range(23)]

        assets = client.search_all({"name": "Pingu"})

        assert [a.name for a in assets] == [f"Programme {i}" for i in range(23)]
        offsets = [r.body["offset"] for r in api.requests]
        assert offsets == ["0", "10", "20"]

    def test_loop_defaults(self, api, client: Client) -> None:
        """Time-ascending order with repeats unless told otherwise."""
        client.search_all({"name": "Pingu"})

        body = api.requests[0].body
        assert body["sort_by"] == "time"
        assert body["sort_order"] == "ascending"
        assert body["repeats"] == "1"

    def test_repeats_can_be_disabled(self, api, client: Client) -> None:
        """An explicit repeats=False wins over the default."""
        client.search_all({"name": "Pingu", "repeats": False})

        assert api.requests[0].body["repeats"] == "0"


class TestSchedule:
    """Tests for the schedule convenience query."""

    def test_two_pages_for_150_assets(self, api, client: Client, asset_json) -> None:
        """150 assets arrive in two pages of 100 with a stable window."""
        api.search_assets = [asset_json(i) for i in range(150)]

        assets = client.schedule(date(2024, 1, 1), ["bbcone"])

        assert len(assets) == 150
        assert [a.name for a in assets] == [f"Programme {i}" for i in range(150)]
        assert len(api.requests) == 2

        first, second = api.requests
        assert first.body["offset"] == "0"
        assert second.body["offset"] == "100"
        for recorded in (first, second):
            assert recorded.body["after"] == "2024-01-01T06:00:00"
            assert recorded.body["before"] == "2024-01-02T05:59:59"
            assert recorded.body["limit"] == "100"
            assert recorded.query_values("channel") == ["bbcone"]
        assert first.body["before"] == second.body["before"]
        assert first.body["after"] == second.body["after"]

    def test_datetime_uses_its_date(self, api, client: Client) -> None:
        """The time part of a datetime is ignored."""
        client.schedule(datetime(2024, 2, 29, 23, 30))

        body = api.requests[0].body
        assert body["after"] == "2024-02-29T06:00:00"
        assert body["before"] == "2024-03-01T05:59:59"

    def test_no_channel_filter(self, api, client: Client) -> None:
        """Without channels no channel parameter is sent."""
        client.schedule(date(2024, 1, 1))

        recorded = api.requests[0]
        assert "channel" not in recorded.body
        assert recorded.query_values("channel") == []

    def test_single_channel_string(self, api, client: Client) -> None:
        """A single channel is a plain body field."""
        client.schedule(date(2024, 1, 1), "bbcone")

        assert api.requests[0].body["channel"] == "bbcone"

    def test_empty_day(self, api, client: Client) -> None:
        """An empty schedule takes one request."""
        assert client.schedule(date(2024, 1, 1)) == []
        assert len(api.requests) == 1
