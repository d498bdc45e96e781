"""Asset record and its delivery-profile end-points."""

from datetime import datetime, timedelta
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from redux.models.base import RecordModel
from redux.models.channel import Channel


MEDIA_HOST = "https://g.bbcredux.com"

# Delivery profile -> file extension
MEDIA_PROFILES: dict[str, str] = {
    "mp3": "mp3",
    "h264_lo": "mp4",
    "h264_hi": "mp4",
    "ts": "ts",
    "ts_stripped": "ts",
    "dvbsubs": "xml",
    "flv": "flv",
}


class MediaUrl(RecordModel):
    """Download end-point for one delivery profile of an asset.

    Attributes:
        profile: Delivery profile name, e.g. ``mp3`` or ``h264_hi``.
        url: Download URL.
        file_name: Suggested local file name.
    """

    profile: str
    url: str
    file_name: str

    @classmethod
    def for_asset(cls, reference: str, key: str, profile: str) -> "MediaUrl":
        """Build the end-point for a disk reference and media key.

        Args:
            reference: Asset disk reference.
            key: Media access key.
            profile: Delivery profile name.

        Returns:
            The MediaUrl.

        Raises:
            ValueError: If the profile is unknown.
        """
        if profile not in MEDIA_PROFILES:
            msg = f"Unknown media profile '{profile}'"
            raise ValueError(msg)
        file_name = f"{reference}-{profile}.{MEDIA_PROFILES[profile]}"
        url = f"{MEDIA_HOST}/programme/{reference}/download/{key}/{file_name}"
        return cls(profile=profile, url=url, file_name=file_name)

    def __str__(self) -> str:
        return self.url


class Asset(RecordModel):
    """A broadcast media item held in the archive.

    An asset is identified by its disk reference, its UUID, or both.
    """

    uuid: str | None = None
    reference: str | None = Field(
        default=None, validation_alias=AliasChoices("reference", "disk_reference")
    )
    name: str | None = None
    description: str | None = None
    channel: Channel | None = None
    start: datetime | None = None
    duration: int | None = Field(default=None, description="Duration in seconds")
    key: str | None = Field(default=None, description="Media access key")
    programme_crid: str | None = None
    series_crid: str | None = None

    @field_validator("channel", mode="before")
    @classmethod
    def coerce_channel(cls, v: Any) -> Any:
        """Accept a bare channel name as well as a channel object."""
        if isinstance(v, str):
            return {"name": v}
        return v

    @field_validator("reference", mode="before")
    @classmethod
    def coerce_reference(cls, v: Any) -> Any:
        """Disk references arrive as numbers from some endpoints."""
        if isinstance(v, int):
            return str(v)
        return v

    @property
    def end(self) -> datetime | None:
        """Broadcast end time, when start and duration are known."""
        if self.start is None or self.duration is None:
            return None
        return self.start + timedelta(seconds=self.duration)

    def media_url(self, profile: str) -> MediaUrl | None:
        """Get the download end-point for a delivery profile.

        Args:
            profile: Delivery profile name, one of ``MEDIA_PROFILES``.

        Returns:
            MediaUrl, or None when the asset has no reference or key.
        """
        if not self.reference or not self.key:
            return None
        return MediaUrl.for_asset(self.reference, self.key, profile)

    @property
    def mp3_url(self) -> MediaUrl | None:
        return self.media_url("mp3")

    @property
    def h264_lo_url(self) -> MediaUrl | None:
        return self.media_url("h264_lo")

    @property
    def h264_hi_url(self) -> MediaUrl | None:
        return self.media_url("h264_hi")

    @property
    def ts_url(self) -> MediaUrl | None:
        return self.media_url("ts")

    @property
    def ts_stripped_url(self) -> MediaUrl | None:
        return self.media_url("ts_stripped")

    @property
    def dvbsubs_url(self) -> MediaUrl | None:
        return self.media_url("dvbsubs")

    @property
    def flv_url(self) -> MediaUrl | None:
        return self.media_url("flv")
