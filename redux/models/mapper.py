"""Build typed records from decoded API JSON."""

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from redux.endpoints import Endpoint
from redux.errors import ProtocolError
from redux.models.asset import Asset
from redux.models.channel import Channel, ChannelCategory
from redux.models.search_results import SearchResults
from redux.models.user import User


def _as_list(data: Any, key: str) -> list[Any]:
    # List endpoints answer either with a bare array or an object wrapping one
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get(key), list):
        return list(data[key])
    msg = f"Expected a list of {key}, got {type(data).__name__}"
    raise ProtocolError(msg)


def _build_asset(data: Any) -> Asset:
    return Asset.model_validate(data)


def _build_channels(data: Any) -> list[Channel]:
    return [Channel.model_validate(item) for item in _as_list(data, "channels")]


def _build_channel_categories(data: Any) -> list[ChannelCategory]:
    return [
        ChannelCategory.model_validate(item)
        for item in _as_list(data, "categories")
    ]


def _build_login(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        msg = f"Expected a login object, got {type(data).__name__}"
        raise ProtocolError(msg)
    return data


def _build_logout(data: Any) -> None:  # noqa: ARG001
    return None


def _build_search_results(data: Any) -> SearchResults:
    return SearchResults.model_validate(data)


def _build_user(data: Any) -> User:
    return User.model_validate(data)


_BUILDERS: dict[Endpoint, Callable[[Any], Any]] = {
    Endpoint.ASSET: _build_asset,
    Endpoint.CHANNELS: _build_channels,
    Endpoint.CHANNEL_CATEGORIES: _build_channel_categories,
    Endpoint.LOGIN: _build_login,
    Endpoint.LOGOUT: _build_logout,
    Endpoint.SEARCH_RESULTS: _build_search_results,
    Endpoint.USER: _build_user,
}


def builder_for(endpoint: Endpoint) -> Callable[[Any], Any]:
    """Get the result builder for an endpoint.

    Args:
        endpoint: Endpoint whose response is being mapped.

    Returns:
        Callable turning decoded JSON into the endpoint's record type.
    """
    return _BUILDERS[endpoint]


def build(
    endpoint: Endpoint,
    data: Any,
    query: Mapping[str, Any] | None = None,
) -> Any:
    """Map decoded JSON for an endpoint into its record type.

    For search results the caller's ``query`` is attached to the payload, as
    the server does not echo it back.

    Args:
        endpoint: Endpoint that produced ``data``.
        data: Decoded JSON value.
        query: Original caller query, only used for search results.

    Returns:
        Asset, list of Channel, list of ChannelCategory, SearchResults, User,
        the raw login object, or None for logout.

    Raises:
        ProtocolError: If the payload does not fit the record type.
    """
    if endpoint is Endpoint.SEARCH_RESULTS:
        if not isinstance(data, dict):
            msg = f"Expected a search results object, got {type(data).__name__}"
            raise ProtocolError(msg)
        data = {**data, "query": dict(query or {})}
    try:
        return builder_for(endpoint)(data)
    except ValidationError as e:
        msg = f"Malformed {endpoint.logical_name} response: {e}"
        raise ProtocolError(msg) from e
