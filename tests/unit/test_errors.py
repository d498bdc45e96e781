"""Unit tests for the error taxonomy."""

import pytest

from redux.errors import (
    AccountCompromisedError,
    ConfigurationError,
    ForbiddenError,
    HttpError,
    JsonParseError,
    NotFoundError,
    ReduxError,
    ResponseError,
    SessionClosedError,
    TransportError,
    UnexpectedStatusError,
)


class TestErrorHierarchy:
    """Tests for error relationships and messages."""

    @pytest.mark.parametrize(
        "error_type",
        [
            ConfigurationError,
            AccountCompromisedError,
            ForbiddenError,
            NotFoundError,
            HttpError,
            JsonParseError,
            UnexpectedStatusError,
            SessionClosedError,
            TransportError,
        ],
    )
    def test_all_derive_from_redux_error(self, error_type: type) -> None:
        """Callers can catch every client failure at once."""
        assert issubclass(error_type, ReduxError)

    def test_status_errors_are_distinct(self) -> None:
        """Forbidden and not-found are not generic HTTP errors."""
        assert not issubclass(ForbiddenError, HttpError)
        assert not issubclass(NotFoundError, HttpError)
        assert not issubclass(UnexpectedStatusError, HttpError)

    def test_response_error_carries_status_and_url(self) -> None:
        """Status and URL are available to callers."""
        error = HttpError(500, "https://redux.test/asset/search")

        assert isinstance(error, ResponseError)
        assert error.status_code == 500
        assert error.url == "https://redux.test/asset/search"
        assert str(error) == "500 response for https://redux.test/asset/search"

    def test_unexpected_status_message(self) -> None:
        """Unexpected statuses say so."""
        error = UnexpectedStatusError(999, "https://redux.test/user/details")

        assert error.status_code == 999
        assert "Unexpected status 999" in str(error)

    def test_json_parse_error_wraps_message(self) -> None:
        """Parse errors keep the URL and underlying message."""
        error = JsonParseError("https://redux.test/user/details", "Expecting value")

        assert error.url == "https://redux.test/user/details"
        assert error.message == "Expecting value"
        assert "Error parsing https://redux.test/user/details" in str(error)

    def test_configuration_error_is_value_error(self) -> None:
        """Bad constructor arguments are also ValueErrors."""
        assert issubclass(ConfigurationError, ValueError)
