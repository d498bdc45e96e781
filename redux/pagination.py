"""Page-at-a-time iteration over search results."""

from collections.abc import Callable, Iterator, Mapping
from typing import Any

import structlog

from redux.models.asset import Asset
from redux.models.search_results import SearchResults
from redux.transport.metrics import RequestMetrics


logger = structlog.get_logger()

# Page size the server uses when no limit is given
DEFAULT_PAGE_SIZE = 10


def next_query(results: SearchResults, page_size: int) -> dict[str, Any]:
    """Compute the query for the page following ``results``.

    Every parameter is carried over unchanged except ``offset``, which
    advances by ``page_size`` rather than by the number of assets received.
    A server that returns fewer assets than the page size while more remain
    therefore leaves a gap; the pager logs ``short_page`` when it sees one.

    Args:
        results: The page just received.
        page_size: Number of assets per page.

    Returns:
        Query for the next page.
    """
    return {**results.query, "offset": results.offset + page_size}


class SearchPager:
    """Iterates over search result pages, one request per page.

    Pages are fetched lazily and strictly in sequence. Iteration ends when a
    page reports no more results, or after ``stop()`` is called; a stop takes
    effect before the next request is sent.

    Example:
        pager = client.pages({"name": "Pingu", "limit": 25})
        for page in pager:
            handle(page.assets)
            if enough():
                pager.stop()
    """

    def __init__(
        self,
        search: Callable[[Mapping[str, Any]], SearchResults],
        query: Mapping[str, Any],
        page_size: int | None = None,
    ) -> None:
        """Initialize the pager.

        Args:
            search: Single-page search function.
            query: Query for the first page. ``offset`` defaults to 0.
            page_size: Offset increment between pages. Defaults to the
                query's ``limit`` or the server default of 10.
        """
        self._search = search
        self._query: dict[str, Any] = {"offset": 0, **query}
        if self._query["offset"] is None:
            self._query["offset"] = 0
        limit = self._query.get("limit")
        self._page_size = page_size or (int(limit) if limit else DEFAULT_PAGE_SIZE)
        self._stopped = False
        self._pages_fetched = 0
        self._metrics = RequestMetrics.get_instance()
        self._log = logger.bind(component="pagination", page_size=self._page_size)

    @property
    def page_size(self) -> int:
        """Offset increment between pages."""
        return self._page_size

    @property
    def pages_fetched(self) -> int:
        """Number of pages requested so far."""
        return self._pages_fetched

    @property
    def stopped(self) -> bool:
        """Whether ``stop()`` has been called."""
        return self._stopped

    def stop(self) -> None:
        """Ask the pager not to fetch any further pages."""
        self._stopped = True

    def __iter__(self) -> Iterator[SearchResults]:
        query: dict[str, Any] | None = self._query
        while query is not None and not self._stopped:
            results = self._search(query)
            self._pages_fetched += 1
            self._metrics.record_page()
            self._log.debug(
                "page_fetched",
                offset=results.offset,
                assets=len(results.assets),
                total=results.total,
                has_more=results.has_more,
            )
            if results.has_more and len(results.assets) < self._page_size:
                self._log.warning(
                    "short_page",
                    offset=results.offset,
                    assets=len(results.assets),
                    skipped=self._page_size - len(results.assets),
                )
            yield results
            query = next_query(results, self._page_size) if results.has_more else None

    def assets(self) -> list[Asset]:
        """Fetch every remaining page and concatenate their assets.

        Returns:
            Assets in the order the server returned them.
        """
        assets: list[Asset] = []
        for page in self:
            assets.extend(page.assets)
        self._log.info(
            "pagination_complete",
            pages=self._pages_fetched,
            assets=len(assets),
            stopped=self._stopped,
        )
        return assets


def collect_assets(
    search: Callable[[Mapping[str, Any]], SearchResults],
    query: Mapping[str, Any],
    page_size: int | None = None,
) -> list[Asset]:
    """Run a search across all pages and return every asset.

    Args:
        search: Single-page search function.
        query: Query for the first page.
        page_size: Offset increment between pages.

    Returns:
        Assets from all pages, in order.
    """
    return SearchPager(search, query, page_size).assets()
