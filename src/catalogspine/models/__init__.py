"""Pydantic models for catalogspine."""

from catalogspine.models.base import CatalogSpineModel
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

__all__ = [
    # Base
    "CatalogSpineModel",
    # Feed document
    "Entry",
    "FeedDocument",
    "FeedMetadata",
    "Link",
    "MimeType",
    # Classified items
    "BookItem",
    "BookshelfItem",
    "CatalogFlags",
    "CatalogItem",
    "ClassifiedItem",
    "Discarded",
    "RecommendationsItem",
    "TopUpItem",
    "UrlMap",
    "UrlType",
    "Visibility",
]
