"""Pagination control for one feed page.

Reads the OpenSearch result window before entries are processed and
locates the next-page link once the feed-level links are known.

Example:
    >>> from catalogspine.ingest.pagination import PaginationController
    >>> from catalogspine.models.feed import FeedMetadata
    >>> controller = PaginationController("https://example.com/opds", lambda rel, mime: rel)
    >>> window = controller.on_page_window_known(
    ...     FeedMetadata(start_index=21, items_per_page=20, total_results=35)
    ... )
    >>> window.offset, window.budget
    (20, 15)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from urllib.parse import urljoin

from catalogspine.classify.links import RelationNormalizer
from catalogspine.classify.relations import REL_NEXT
from catalogspine.models.feed import APP_ATOM, FeedMetadata, Link


@dataclass(frozen=True)
class PageWindow:
    """Zero-based offset of the page and its item budget.

    ``budget`` is None when the feed does not report its page size.
    """

    offset: int = 0
    budget: int | None = None


def page_window(metadata: FeedMetadata) -> PageWindow:
    """Compute the result window of a page.

    Example:
        >>> from catalogspine.models.feed import FeedMetadata
        >>> page_window(FeedMetadata(items_per_page=20))
        PageWindow(offset=0, budget=20)
        >>> page_window(FeedMetadata(start_index=5))
        PageWindow(offset=4, budget=None)
    """
    start_index = metadata.start_index
    offset = start_index - 1 if start_index is not None and start_index > 1 else 0

    per_page = metadata.items_per_page
    if per_page is None or per_page <= 0:
        return PageWindow(offset=offset)

    budget = per_page
    if metadata.total_results is not None:
        remaining = metadata.total_results - offset
        if 0 < remaining < budget:
            budget = remaining
    return PageWindow(offset=offset, budget=budget)


class PaginationController:
    """Tracks the item budget and next-page URL of one page."""

    def __init__(self, base_url: str, relation: RelationNormalizer) -> None:
        self._base_url = base_url
        self._relation = relation
        self._window = PageWindow()
        self._remaining: int | None = None
        self._next_url: str | None = None

    @property
    def window(self) -> PageWindow:
        return self._window

    @property
    def remaining(self) -> int | None:
        """Entries still expected on this page, or None when unknown."""
        return self._remaining

    @property
    def next_url(self) -> str | None:
        return self._next_url

    def on_page_window_known(self, metadata: FeedMetadata) -> PageWindow:
        self._window = page_window(metadata)
        self._remaining = self._window.budget
        return self._window

    def consume(self) -> None:
        """Account for one entry of the page.

        An entry past the end of a used-up budget means the page is larger
        than declared, so the budget becomes unknown.
        """
        if self._remaining is not None:
            self._remaining = self._remaining - 1 if self._remaining > 0 else None

    def on_page_links_scanned(self, links: Iterable[Link]) -> str | None:
        """Find the next-page link among the feed-level links.

        The last Atom link whose normalized relation is ``next`` wins.
        """
        for link in links:
            mime = link.mime
            if mime == APP_ATOM and self._relation(link.rel, mime) == REL_NEXT:
                self._next_url = urljoin(self._base_url, link.href)
        return self._next_url
