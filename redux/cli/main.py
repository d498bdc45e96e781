"""CLI commands for the Redux client."""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, NoReturn

import click
import structlog

from redux import __version__
from redux.cli.download import DOWNLOADERS, DownloadError, download_asset
from redux.cli.table import format_assets, format_table
from redux.client import Client
from redux.errors import ForbiddenError, NotFoundError, ReduxError
from redux.models.asset import MEDIA_PROFILES
from redux.observability.logging import configure_logging
from redux.session import SessionState
from redux.settings import get_settings


logger = structlog.get_logger()

DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S"]


@dataclass
class CliOptions:
    """Options shared by every command."""

    token: str | None
    username: str | None
    password: str | None
    host: str

    @property
    def logout_on_exit(self) -> bool:
        """Sessions opened with a password are ours to close."""
        return not self.token


def _fail(message: str) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@contextmanager
def open_client(options: CliOptions) -> Iterator[Client]:
    """Open a client for one command and report failures.

    Any ReduxError ends the command with exit status 1. A session created
    from username and password is logged out when the command finishes.

    Args:
        options: Shared CLI options.

    Yields:
        An authenticated client.
    """
    try:
        client = Client(
            token=options.token,
            username=options.username,
            password=options.password,
            host=options.host,
        )
    except ReduxError as e:
        _fail(str(e))

    log = logger.bind(component="cli", host=options.host)
    try:
        yield client
    except ReduxError as e:
        _fail(str(e))
    finally:
        if options.logout_on_exit and client.state == SessionState.ACTIVE:
            try:
                client.logout()
            except ReduxError as e:
                log.warning("logout_failed", error=str(e))
        client.close()


@click.group()
@click.version_option(version=__version__)
@click.option("--token", envvar="REDUX_TOKEN", help="Token of an existing session.")
@click.option("--username", "-u", envvar="REDUX_USERNAME", help="Redux username.")
@click.option(
    "--password",
    "-p",
    envvar="REDUX_PASSWORD",
    help="Redux password (prompted for when a username is given).",
)
@click.option("--host", envvar="REDUX_HOST", help="API host.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
@click.option(
    "--json-logs/--no-json-logs",
    default=False,
    help="Use JSON format for logs (default: false).",
)
@click.pass_context
def cli(  # noqa: PLR0913
    ctx: click.Context,
    token: str | None,
    username: str | None,
    password: str | None,
    host: str | None,
    verbose: bool,
    json_logs: bool,
) -> None:
    """Search and download from the Redux archive."""
    configure_logging(
        level=logging.DEBUG if verbose else logging.WARNING, json_format=json_logs
    )

    settings = get_settings()
    token = token or settings.token
    username = username or settings.username
    password = password or settings.password
    if not token and username and not password:
        password = click.prompt("Password", hide_input=True)

    ctx.obj = CliOptions(
        token=token,
        username=username,
        password=password,
        host=host or settings.host,
    )


@cli.command()
@click.option("--q", "q", help="Free text query.")
@click.option("--name", help="Programme name.")
@click.option("--channel", "-c", "channels", multiple=True, help="Channel, repeatable.")
@click.option("--after", type=click.DateTime(DATE_FORMATS), help="Broadcast after.")
@click.option("--before", type=click.DateTime(DATE_FORMATS), help="Broadcast before.")
@click.option(
    "--date",
    "on_date",
    type=click.DateTime(["%Y-%m-%d"]),
    help="Everything from 06:00 on this date for 24 hours.",
)
@click.option("--longer", type=int, help="Minimum duration in seconds.")
@click.option("--shorter", type=int, help="Maximum duration in seconds.")
@click.option("--programme-crid", help="TV Anytime programme CRID.")
@click.option("--series-crid", help="TV Anytime series CRID.")
@click.option("--no-repeats", is_flag=True, help="Exclude repeats.")
@click.pass_obj
def search(  # noqa: PLR0913
    options: CliOptions,
    q: str | None,
    name: str | None,
    channels: tuple[str, ...],
    after: datetime | None,
    before: datetime | None,
    on_date: datetime | None,
    longer: int | None,
    shorter: int | None,
    programme_crid: str | None,
    series_crid: str | None,
    no_repeats: bool,
) -> None:
    """Search the archive and list every matching programme."""
    query: dict[str, Any] = {
        "q": q,
        "name": name,
        "channel": list(channels) or None,
        "after": after,
        "before": before,
        "date": on_date.date() if on_date else None,
        "longer": longer,
        "shorter": shorter,
        "programme_crid": programme_crid,
        "series_crid": series_crid,
    }
    if no_repeats:
        query["repeats"] = False

    with open_client(options) as client:
        assets = client.search_all(query)

    if not assets:
        click.echo("No results.")
        return
    click.echo(format_assets(assets))
    click.echo(f"\n{len(assets)} results")


@cli.command()
@click.argument("day", type=click.DateTime(["%Y-%m-%d"]))
@click.option("--channel", "-c", "channels", multiple=True, help="Channel, repeatable.")
@click.pass_obj
def schedule(options: CliOptions, day: datetime, channels: tuple[str, ...]) -> None:
    """List everything broadcast on DAY (06:00 to 05:59 the next morning)."""
    with open_client(options) as client:
        assets = client.schedule(day.date(), list(channels) or None)

    click.echo(format_assets(assets))
    click.echo(f"\n{len(assets)} programmes")


@cli.command()
@click.pass_obj
def channels(options: CliOptions) -> None:
    """List the channels available to the session."""
    with open_client(options) as client:
        available = client.channels()

    rows = [
        [
            channel.name,
            channel.display_name or "",
            "" if channel.category_id is None else str(channel.category_id),
        ]
        for channel in available
    ]
    click.echo(format_table(("Name", "Display name", "Category"), rows))


@cli.command()
@click.pass_obj
def categories(options: CliOptions) -> None:
    """List the channel categories available to the session."""
    with open_client(options) as client:
        available = client.channel_categories()

    rows = [[str(category.id), category.description] for category in available]
    click.echo(format_table(("Id", "Description"), rows))


@cli.command()
@click.pass_obj
def user(options: CliOptions) -> None:
    """Show the account owning the session."""
    with open_client(options) as client:
        account = client.user()

    click.echo(f"Username: {account.username}")
    click.echo(f"Name:     {account.full_name}")
    if account.email:
        click.echo(f"Email:    {account.email}")
    if account.permitted_services:
        click.echo(f"Services: {', '.join(account.permitted_services)}")


@cli.command()
@click.argument("identifiers", nargs=-1, required=True)
@click.option(
    "--type",
    "profile",
    type=click.Choice(sorted(MEDIA_PROFILES)),
    default="mp3",
    show_default=True,
    help="Delivery profile to download.",
)
@click.option(
    "--output",
    "-o",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path(),
    help="Directory to write files into.",
)
@click.option(
    "--metadata/--no-metadata",
    default=True,
    help="Write <reference>.json next to the media (default: true).",
)
@click.option(
    "--downloader",
    type=click.Choice(sorted(DOWNLOADERS)),
    default="curl",
    show_default=True,
    help="External command used to fetch media.",
)
@click.pass_obj
def download(  # noqa: PLR0913
    options: CliOptions,
    identifiers: tuple[str, ...],
    profile: str,
    output_dir: Path,
    metadata: bool,
    downloader: str,
) -> None:
    """Download media for each IDENTIFIER (disk reference or UUID)."""
    failures = 0
    with open_client(options) as client:
        for identifier in identifiers:
            try:
                asset = client.asset(identifier)
                result = download_asset(
                    asset,
                    identifier,
                    output_dir,
                    profile,
                    downloader,
                    metadata=metadata,
                )
            except (DownloadError, ForbiddenError, NotFoundError) as e:
                failures += 1
                click.echo(f"Error: {identifier}: {e}", err=True)
                continue
            click.echo(f"{identifier}: {result.media_path}")

    if failures:
        _fail(f"{failures} of {len(identifiers)} downloads failed")


def main() -> None:
    """Console script entry point."""
    cli()
