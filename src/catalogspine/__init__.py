"""
catalogspine - Resumable OPDS Catalog Ingestion.

catalogspine turns pages of a remote book catalog into a classified
stream of items (books and sub-catalogs) while keeping a checkpoint that
lets ingestion resume exactly where it left off.

Key Features:
- Link classification with explicit precedence and tie-break rules
- Stable entry identities for feeds without <id>
- Skip-until-resume-point with safe failure when the point disappears
- Dedup against every identity seen in earlier runs
- Interrupts that never cut off the last few entries of a page

Quick Start:
    >>> from catalogspine import Checkpoint, CollectingListener, FeedIngestion, OPDSDialect, RunConfig
    >>> listener = CollectingListener()
    >>> config = RunConfig(dialect=OPDSDialect("example"), listener=listener)
    >>> run = FeedIngestion("https://example.com/opds", config, Checkpoint(catalog_id="example"))
    >>> # result = run.ingest(parse_feed(xml))
"""

# Feed adapters
from catalogspine.adapter.opds import OPDSFeedAdapter, parse_feed

# Classification
from catalogspine.classify.identity import resolve_entry_id
from catalogspine.classify.items import ItemClassifier
from catalogspine.classify.links import BookFormat, LinkCategory, classify_link

# Core
from catalogspine.core.checkpoint import (
    Checkpoint,
    CheckpointStore,
    FileCheckpointStore,
    MemoryCheckpointStore,
)
from catalogspine.core.config import Settings, get_settings
from catalogspine.core.exceptions import (
    CatalogSpineError,
    ConfigurationError,
    FeedError,
    IngestionStateError,
)
from catalogspine.core.loader import CatalogLoader, LoadResult

# Dialects
from catalogspine.dialect.opds import OPDSDialect

# HTTP
from catalogspine.http.client import HttpClient, HttpClientError

# Ingestion
from catalogspine.ingest.driver import FeedIngestion, IngestionResult, RunConfig
from catalogspine.ingest.interrupt import InterruptPolicy
from catalogspine.ingest.pagination import PageWindow, PaginationController
from catalogspine.ingest.tracker import ResumeTracker

# Models
from catalogspine.models.feed import Entry, FeedDocument, FeedMetadata, Link, MimeType
from catalogspine.models.items import (
    BookItem,
    BookshelfItem,
    CatalogFlags,
    CatalogItem,
    ClassifiedItem,
    Discarded,
    RecommendationsItem,
    TopUpItem,
    UrlMap,
    UrlType,
    Visibility,
)

# Protocols
from catalogspine.protocols import CatalogDialect, CollectingListener, ItemListener, PageFetcher

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Adapters
    "OPDSFeedAdapter",
    "parse_feed",
    # Classification
    "BookFormat",
    "ItemClassifier",
    "LinkCategory",
    "classify_link",
    "resolve_entry_id",
    # Core
    "CatalogLoader",
    "Checkpoint",
    "CheckpointStore",
    "FileCheckpointStore",
    "LoadResult",
    "MemoryCheckpointStore",
    "Settings",
    "get_settings",
    # Errors
    "CatalogSpineError",
    "ConfigurationError",
    "FeedError",
    "IngestionStateError",
    # Dialects
    "OPDSDialect",
    # HTTP
    "HttpClient",
    "HttpClientError",
    # Ingestion
    "FeedIngestion",
    "IngestionResult",
    "InterruptPolicy",
    "PageWindow",
    "PaginationController",
    "ResumeTracker",
    "RunConfig",
    # Models
    "BookItem",
    "BookshelfItem",
    "CatalogFlags",
    "CatalogItem",
    "ClassifiedItem",
    "Discarded",
    "Entry",
    "FeedDocument",
    "FeedMetadata",
    "Link",
    "MimeType",
    "RecommendationsItem",
    "TopUpItem",
    "UrlMap",
    "UrlType",
    "Visibility",
    # Protocols
    "CatalogDialect",
    "CollectingListener",
    "ItemListener",
    "PageFetcher",
]
