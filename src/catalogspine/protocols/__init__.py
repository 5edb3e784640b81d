"""Protocol definitions - all extension points."""

from catalogspine.protocols.dialect import CatalogDialect
from catalogspine.protocols.fetcher import PageFetcher
from catalogspine.protocols.listener import CollectingListener, ItemListener

__all__ = [
    # Dialect
    "CatalogDialect",
    # Listener
    "CollectingListener",
    "ItemListener",
    # Fetcher
    "PageFetcher",
]
