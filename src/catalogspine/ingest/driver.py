"""Feed ingestion driver.

``FeedIngestion`` is the state machine a feed parser drives, one page at a
time, in document order::

    on_feed_start -> on_page_window_known -> on_entry* -> on_page_links_scanned -> on_feed_end

It resolves identities, skips entries up to a pending resume point,
classifies the rest, hands them to the listener and, at the end, returns a
new checkpoint. The caller's checkpoint is never modified.

Example:
    >>> from catalogspine.core.checkpoint import Checkpoint
    >>> from catalogspine.dialect.opds import OPDSDialect
    >>> from catalogspine.ingest.driver import FeedIngestion, RunConfig
    >>> from catalogspine.models.feed import Entry, FeedDocument, Link
    >>> from catalogspine.protocols.listener import CollectingListener
    >>> listener = CollectingListener()
    >>> config = RunConfig(dialect=OPDSDialect("example"), listener=listener)
    >>> doc = FeedDocument(
    ...     links=[Link(href="?page=2", rel="next", type="application/atom+xml")],
    ...     entries=[Entry(id="urn:1", title="A", links=[Link(href="a.epub", type="application/epub+zip")])],
    ... )
    >>> run = FeedIngestion("https://example.com/opds", config, Checkpoint(catalog_id="example"))
    >>> result = run.ingest(doc)
    >>> result.checkpoint.resume_uri, [item.kind for item in listener.items]
    ('https://example.com/opds?page=2', ['book'])
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from catalogspine.classify.identity import resolve_entry_id
from catalogspine.classify.items import BookBuilder, ItemClassifier
from catalogspine.core.exceptions import ConfigurationError, IngestionStateError
from catalogspine.ingest.interrupt import InterruptOracle, InterruptPolicy, never_interrupt
from catalogspine.ingest.pagination import PageWindow, PaginationController
from catalogspine.ingest.tracker import ResumeTracker
from catalogspine.models.items import BookItem, Discarded
from catalogspine.protocols.dialect import CatalogDialect
from catalogspine.protocols.listener import ItemListener

if TYPE_CHECKING:
    from catalogspine.core.checkpoint import Checkpoint
    from catalogspine.models.feed import Entry, FeedDocument, FeedMetadata, Link

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunConfig:
    """Immutable configuration of an ingestion run.

    Raises:
        ConfigurationError: If ``dialect`` or ``listener`` do not implement
            their protocols.
    """

    dialect: CatalogDialect
    listener: ItemListener
    confirm_interrupt: InterruptOracle = never_interrupt
    book_builder: BookBuilder | None = None
    policy: InterruptPolicy = field(default_factory=InterruptPolicy)

    def __post_init__(self) -> None:
        if not isinstance(self.dialect, CatalogDialect):
            raise ConfigurationError(
                f"Catalog handle must implement CatalogDialect, got {type(self.dialect).__name__}"
            )
        if not isinstance(self.listener, ItemListener):
            raise ConfigurationError(
                f"Listener must implement ItemListener, got {type(self.listener).__name__}"
            )


class IngestionState(str, Enum):
    CREATED = "created"
    STARTED = "started"
    ENTRIES = "entries"
    LINKS_SCANNED = "links_scanned"
    FINISHED = "finished"
    INTERRUPTED = "interrupted"


_ALLOWED: dict[str, frozenset[IngestionState]] = {
    "on_feed_start": frozenset({IngestionState.CREATED}),
    "on_page_window_known": frozenset({IngestionState.STARTED}),
    "on_entry": frozenset({IngestionState.STARTED, IngestionState.ENTRIES}),
    "on_page_links_scanned": frozenset({IngestionState.STARTED, IngestionState.ENTRIES}),
    "on_feed_end": frozenset(
        {IngestionState.STARTED, IngestionState.ENTRIES, IngestionState.LINKS_SCANNED}
    ),
    "interrupt": frozenset({IngestionState.STARTED, IngestionState.ENTRIES}),
}


@dataclass
class IngestionResult:
    """Outcome of one page.

    Example:
        >>> from catalogspine.core.checkpoint import Checkpoint
        >>> from catalogspine.ingest.driver import IngestionResult
        >>> result = IngestionResult(checkpoint=Checkpoint(catalog_id="c"), entries_seen=3)
        >>> result.completed
        True
    """

    checkpoint: Checkpoint
    next_url: str | None = None
    interrupted: bool = False
    resume_failed: bool = False
    entries_seen: int = 0
    entries_skipped: int = 0
    entries_unidentified: int = 0
    items_emitted: int = 0
    items_discarded: int = 0

    @property
    def completed(self) -> bool:
        return not self.interrupted


class FeedIngestion:
    """Ingests one feed page against a checkpoint.

    Args:
        base_url: URL of the page, for resolving relative links.
        config: Run configuration.
        checkpoint: Checkpoint loaded by the caller; copied, never mutated.

    Raises:
        ConfigurationError: If the checkpoint belongs to another catalog.
    """

    def __init__(self, base_url: str, config: RunConfig, checkpoint: Checkpoint) -> None:
        if checkpoint.catalog_id != config.dialect.name:
            raise ConfigurationError(
                f"Checkpoint of catalog {checkpoint.catalog_id!r} cannot be used with "
                f"dialect {config.dialect.name!r}"
            )
        self._base_url = base_url
        self._config = config
        relation = config.dialect.relation
        self._pagination = PaginationController(base_url, relation)
        self._tracker = ResumeTracker(checkpoint)
        self._classifier = ItemClassifier(config.dialect, base_url, config.book_builder)
        self._index = 0
        self._state = IngestionState.CREATED
        self._result = IngestionResult(checkpoint=self._tracker.checkpoint)

    @property
    def state(self) -> IngestionState:
        return self._state

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def remaining(self) -> int | None:
        """Entries still expected on the page, None when the page size is unknown."""
        return self._pagination.remaining

    def _transition(self, event: str, target: IngestionState) -> None:
        if self._state not in _ALLOWED[event]:
            raise IngestionStateError(f"{event} is not allowed in state {self._state.value}")
        self._state = target

    def on_feed_start(self) -> None:
        self._transition("on_feed_start", IngestionState.STARTED)
        self._tracker.on_feed_start(self._base_url)

    def on_page_window_known(self, metadata: FeedMetadata) -> PageWindow:
        self._transition("on_page_window_known", IngestionState.ENTRIES)
        window = self._pagination.on_page_window_known(metadata)
        self._index = window.offset
        return window

    def on_entry(self, entry: Entry) -> bool:
        """Process one entry.

        Returns:
            True when the caller should stop reading the page.
        """
        self._transition("on_entry", IngestionState.ENTRIES)
        self._pagination.consume()
        self._result.entries_seen += 1

        entry_id = resolve_entry_id(entry, self._base_url, self._config.dialect.relation)
        if entry_id is None:
            logger.debug("Entry %r has no usable identity; skipped", entry.title)
            self._result.entries_unidentified += 1
            return self._may_interrupt()

        if not self._tracker.observe(entry_id):
            self._result.entries_skipped += 1
            return self._may_interrupt()

        item = self._classifier.classify(entry, self._index, entry_id=entry_id)
        if isinstance(item, BookItem):
            self._index += 1
        if isinstance(item, Discarded):
            self._result.items_discarded += 1
        else:
            self._config.listener.on_new_item(self._config.dialect.name, item)
            self._result.items_emitted += 1
        return self._may_interrupt()

    def on_page_links_scanned(self, links: Iterable[Link]) -> str | None:
        self._transition("on_page_links_scanned", IngestionState.LINKS_SCANNED)
        return self._pagination.on_page_links_scanned(links)

    def on_feed_end(self) -> IngestionResult:
        self._transition("on_feed_end", IngestionState.FINISHED)
        checkpoint = self._tracker.finalize(self._pagination.next_url)
        self._result.checkpoint = checkpoint
        self._result.next_url = checkpoint.resume_uri
        self._result.resume_failed = self._tracker.resume_failed
        return self._result

    def interrupt(self) -> IngestionResult:
        """Stop mid-page.

        The checkpoint keeps pointing at this page with ``last_loaded_id``
        set, so the next run skips what was already delivered.
        """
        self._transition("interrupt", IngestionState.INTERRUPTED)
        self._result.interrupted = True
        self._result.checkpoint = self._tracker.checkpoint
        logger.info(
            "Interrupted %s after %d entries", self._base_url, self._result.entries_seen
        )
        return self._result

    def ingest(self, document: FeedDocument) -> IngestionResult:
        """Drive every transition for a parsed page."""
        self.on_feed_start()
        self.on_page_window_known(document.metadata)
        for entry in document.entries:
            if self.on_entry(entry):
                return self.interrupt()
        self.on_page_links_scanned(document.links)
        return self.on_feed_end()

    def _may_interrupt(self) -> bool:
        return self._config.policy.may_interrupt(
            self._pagination.remaining, self._config.confirm_interrupt
        )
