"""Catalog loader - sequential multi-page ingestion.

Loads a catalog page after page, following the checkpoint's resume URI and
saving the checkpoint after every page. Pages of one catalog are never
fetched concurrently.

Example:
    >>> from catalogspine.core.loader import CatalogLoader, LoadResult
    >>> hasattr(CatalogLoader, "load")
    True
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from catalogspine.core.checkpoint import Checkpoint
from catalogspine.core.config import Settings, get_settings
from catalogspine.ingest.driver import FeedIngestion, IngestionResult

if TYPE_CHECKING:
    from catalogspine.core.checkpoint import CheckpointStore
    from catalogspine.ingest.driver import RunConfig
    from catalogspine.models.feed import FeedDocument
    from catalogspine.protocols.fetcher import PageFetcher

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Result of a load.

    Example:
        >>> from catalogspine.core.checkpoint import Checkpoint
        >>> from catalogspine.core.loader import LoadResult
        >>> LoadResult(checkpoint=Checkpoint(catalog_id="c"), pages=2, items=40).has_more
        False
    """

    checkpoint: Checkpoint
    pages: int = 0
    items: int = 0
    interrupted: bool = False
    resume_failed: bool = False

    @property
    def has_more(self) -> bool:
        """Whether a later load would continue where this one stopped."""
        return self.checkpoint.resume_uri is not None


class CatalogLoader:
    """Loads catalog pages through a fetcher into a listener.

    Args:
        fetcher: Returns a parsed page per URL.
        store: Checkpoint storage.
        config: Run configuration shared by every page.
        settings: Limits; defaults to ``get_settings()``.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        store: CheckpointStore,
        config: RunConfig,
        settings: Settings | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._store = store
        self._config = config
        self._settings = settings or get_settings()

    async def load(self, catalog_id: str, root_url: str) -> LoadResult:
        """Load a catalog, resuming from its stored checkpoint if there is one.

        Args:
            catalog_id: Key of the checkpoint in the store.
            root_url: First page, used when nothing is pending.

        Raises:
            FeedError: If a page cannot be fetched or parsed. The checkpoint
                saved after the previous page is left in place.
        """
        checkpoint = await self._store.load(catalog_id) or Checkpoint(catalog_id=catalog_id)
        url = checkpoint.resume_uri or root_url
        result = LoadResult(checkpoint=checkpoint)

        while url is not None and result.pages < self._settings.max_pages:
            logger.info("Loading %s page %d: %s", catalog_id, result.pages + 1, url)
            document = await self._fetcher.fetch_page(url)
            page = self._ingest_page(url, document, result.checkpoint)
            await self._store.save(page.checkpoint)

            result.checkpoint = page.checkpoint
            result.pages += 1
            result.items += page.items_emitted
            logger.info(
                "Page done: %d entries, %d new items, %d skipped",
                page.entries_seen,
                page.items_emitted,
                page.entries_skipped,
            )
            if page.interrupted:
                result.interrupted = True
                break
            if page.resume_failed:
                result.resume_failed = True
            url = page.checkpoint.resume_uri

        return result

    def _ingest_page(
        self, url: str, document: FeedDocument, checkpoint: Checkpoint
    ) -> IngestionResult:
        ingestion = FeedIngestion(url, self._config, checkpoint)
        return ingestion.ingest(document)
