"""Logical API endpoints and their paths."""

from enum import Enum


DEFAULT_HOST = "https://i.bbcredux.com"


class Endpoint(str, Enum):
    """Closed set of API endpoints.

    Each member's value is its path relative to the configured host. Every
    member has exactly one result builder in ``redux.models.mapper``.
    """

    ASSET = "/asset/details"
    CHANNELS = "/asset/channel/available"
    CHANNEL_CATEGORIES = "/asset/channel/categories"
    LOGIN = "/user/login"
    LOGOUT = "/user/logout"
    SEARCH_RESULTS = "/asset/search"
    USER = "/user/details"

    @property
    def path(self) -> str:
        """Path relative to the API host."""
        return self.value

    @property
    def logical_name(self) -> str:
        """Lower-case name used in logs and metrics, e.g. ``search_results``."""
        return self.name.lower()


def url_for(host: str, endpoint: Endpoint) -> str:
    """Build the absolute URL for an endpoint.

    Args:
        host: API base URL, with or without trailing slash.
        endpoint: Endpoint to address.

    Returns:
        Absolute URL.
    """
    return host.rstrip("/") + endpoint.path
