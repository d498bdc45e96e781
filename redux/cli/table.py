"""Plain-text tables for CLI output."""

from collections.abc import Sequence

from redux.models.asset import Asset


ASSET_HEADERS = ("Start", "Channel", "Reference", "Mins", "Name")


def format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Render rows as left-aligned columns separated by two spaces.

    Args:
        headers: Column titles.
        rows: Cell values, one sequence per row.

    Returns:
        The table, header line and underline included.
    """
    widths = [len(header) for header in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def line(cells: Sequence[str]) -> str:
        return "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(cells)).rstrip()

    lines = [line(headers), line(["-" * width for width in widths])]
    lines.extend(line(row) for row in rows)
    return "\n".join(lines)


def asset_row(asset: Asset) -> list[str]:
    """Table cells for one asset."""
    return [
        asset.start.strftime("%Y-%m-%d %H:%M") if asset.start else "",
        asset.channel.name if asset.channel else "",
        asset.reference or asset.uuid or "",
        str(asset.duration // 60) if asset.duration is not None else "",
        asset.name or "",
    ]


def format_assets(assets: Sequence[Asset]) -> str:
    """Render assets as a schedule-style table."""
    return format_table(ASSET_HEADERS, [asset_row(asset) for asset in assets])
