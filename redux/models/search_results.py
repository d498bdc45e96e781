"""Search results page."""

from datetime import datetime
from typing import Any

from pydantic import Field, model_validator

from redux.models.asset import Asset
from redux.models.base import RecordModel


class SearchResults(RecordModel):
    """One page of results from the search endpoint.

    The server does not echo the query back, so the client re-attaches the
    caller's query before building this record. Pagination is derived from
    the query's ``offset`` and the server's ``total``.

    Attributes:
        assets: Asset summaries on this page, in server order.
        total: Total number of matching assets available on the server.
        total_returned: Number of assets the server reports on this page.
        query_time: Server-side query time in seconds.
        created_at: When the server produced the page.
        query: The caller-supplied query that produced this page.
    """

    assets: list[Asset] = Field(default_factory=list)
    total: int = 0
    total_returned: int | None = None
    query_time: float | None = None
    created_at: datetime | None = None
    query: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def unwrap_results(cls, data: Any) -> Any:
        """Lift assets out of the ``results`` envelope the API wraps them in."""
        if isinstance(data, dict) and isinstance(data.get("results"), dict):
            data = dict(data)
            results = data.pop("results")
            data.setdefault("assets", results.get("assets", []))
            for key in ("total", "total_returned"):
                if key in results:
                    data.setdefault(key, results[key])
        return data

    @property
    def offset(self) -> int:
        """Start index of this page within the full result set."""
        return int(self.query.get("offset") or 0)

    @property
    def has_more(self) -> bool:
        """Whether a following page holds further assets.

        More pages exist while the assets seen so far (this page's offset plus
        its size) are fewer than the server's total. An empty page ends
        pagination.
        """
        if not self.assets:
            return False
        return self.offset + len(self.assets) < self.total
