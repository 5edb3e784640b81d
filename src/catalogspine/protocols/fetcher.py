"""Page fetcher protocol.

Implementations return one parsed page of a catalog per URL. See
``catalogspine.adapter.opds.OPDSFeedAdapter`` for the HTTP implementation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from catalogspine.models.feed import FeedDocument


@runtime_checkable
class PageFetcher(Protocol):
    """Page fetcher protocol."""

    async def fetch_page(self, url: str) -> FeedDocument:
        """Fetch and parse the page at ``url``."""
        ...
