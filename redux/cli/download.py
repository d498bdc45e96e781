"""Download asset media and metadata to local disk."""

import json
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

import structlog

from redux.models.asset import Asset, MediaUrl


logger = structlog.get_logger()

# Downloader executable -> argv builder (output path, url)
DOWNLOADERS: dict[str, tuple[str, ...]] = {
    "curl": ("curl", "--location", "--fail", "--silent", "--show-error", "--output"),
    "wget": ("wget", "--quiet", "--output-document"),
}


class DownloadError(Exception):
    """Raised when media for an asset cannot be downloaded."""


@dataclass
class DownloadResult:
    """Outcome of downloading one asset.

    Attributes:
        identifier: Identifier the asset was requested by.
        media_path: Where the media file was written, if downloaded.
        metadata_path: Where the metadata JSON was written, if requested.
    """

    identifier: str
    media_path: Path | None = None
    metadata_path: Path | None = None


def asset_basename(asset: Asset, fallback: str) -> str:
    """Name local files after the disk reference, then the UUID."""
    return asset.reference or asset.uuid or fallback


def write_metadata(asset: Asset, output_dir: Path, basename: str) -> Path:
    """Write an asset's metadata as pretty-printed JSON.

    Args:
        asset: Asset to describe.
        output_dir: Directory to write into.
        basename: File name without extension.

    Returns:
        Path of the written file.
    """
    path = output_dir / f"{basename}.json"
    payload = asset.model_dump(mode="json")
    payload["end"] = asset.end.isoformat() if asset.end else None
    path.write_text(
        json.dumps(payload, indent=2, sort_keys=True) + "\n", encoding="utf-8"
    )
    return path


def build_command(downloader: str, media: MediaUrl, destination: Path) -> list[str]:
    """Build the argv for an external download command.

    Args:
        downloader: Key of ``DOWNLOADERS``.
        media: End-point to fetch.
        destination: Output file path.

    Returns:
        Command line as a list.

    Raises:
        DownloadError: If the downloader is unknown.
    """
    try:
        prefix = DOWNLOADERS[downloader]
    except KeyError as e:
        msg = f"Unknown downloader '{downloader}'"
        raise DownloadError(msg) from e
    return [*prefix, str(destination), media.url]


def fetch_media(downloader: str, media: MediaUrl, destination: Path) -> None:
    """Run the external downloader for one end-point.

    Args:
        downloader: Key of ``DOWNLOADERS``.
        media: End-point to fetch.
        destination: Output file path.

    Raises:
        DownloadError: If the command is missing or exits non-zero.
    """
    command = build_command(downloader, media, destination)
    if shutil.which(command[0]) is None:
        msg = f"Download command '{command[0]}' not found on PATH"
        raise DownloadError(msg)

    logger.info(
        "download_started",
        component="cli",
        profile=media.profile,
        destination=str(destination),
    )
    try:
        subprocess.run(command, check=True)  # noqa: S603
    except subprocess.CalledProcessError as e:
        destination.unlink(missing_ok=True)
        msg = f"{command[0]} exited with status {e.returncode} for {media.file_name}"
        raise DownloadError(msg) from e


def download_asset(  # noqa: PLR0913
    asset: Asset,
    identifier: str,
    output_dir: Path,
    profile: str,
    downloader: str,
    metadata: bool = True,
) -> DownloadResult:
    """Download an asset's media and optionally its metadata.

    Args:
        asset: Asset to download.
        identifier: Identifier the asset was requested by.
        output_dir: Directory to write into, created if missing.
        profile: Delivery profile, e.g. ``mp3`` or ``h264_hi``.
        downloader: Key of ``DOWNLOADERS``.
        metadata: Also write ``<reference>.json``.

    Returns:
        DownloadResult with the written paths.

    Raises:
        DownloadError: If the asset has no end-point for the profile or the
            download fails.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    result = DownloadResult(identifier=identifier)
    basename = asset_basename(asset, identifier)

    if metadata:
        result.metadata_path = write_metadata(asset, output_dir, basename)

    media = asset.media_url(profile)
    if media is None:
        msg = f"Asset {basename} has no {profile} media available"
        raise DownloadError(msg)

    destination = output_dir / media.file_name
    fetch_media(downloader, media, destination)
    result.media_path = destination
    return result
