"""Channel and channel category records."""

from pydantic import Field

from redux.models.base import RecordModel


class Channel(RecordModel):
    """A broadcast channel available to the session.

    Attributes:
        name: Short channel identifier used in queries, e.g. ``bbcone``.
        display_name: Human-readable name, e.g. ``BBC One``.
        category_id: Identifier of the owning ChannelCategory.
        sort_order: Display position within the category.
    """

    name: str
    display_name: str | None = None
    category_id: int | None = None
    sort_order: int | None = None

    def __str__(self) -> str:
        return self.name


class ChannelCategory(RecordModel):
    """A grouping of channels, e.g. ``BBC TV`` or ``Radio``."""

    id: int
    description: str = Field(default="")
    priority: int | None = None
