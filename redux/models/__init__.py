"""Domain records returned by the Redux client."""

from redux.models.asset import MEDIA_PROFILES, Asset, MediaUrl
from redux.models.channel import Channel, ChannelCategory
from redux.models.search_results import SearchResults
from redux.models.user import User


__all__ = [
    "MEDIA_PROFILES",
    "Asset",
    "Channel",
    "ChannelCategory",
    "MediaUrl",
    "SearchResults",
    "User",
]
