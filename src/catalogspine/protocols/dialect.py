"""Catalog dialect protocol.

A dialect is the catalog handle of an ingestion run. It knows how one
catalog spells its link relations, which entries need a signed-in user,
and how to build the concrete book representation for a leaf entry.

Example:
    >>> from catalogspine.protocols.dialect import CatalogDialect
    >>> hasattr(CatalogDialect, "relation")
    True
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from catalogspine.models.feed import Entry, MimeType
    from catalogspine.models.items import Visibility


@runtime_checkable
class CatalogDialect(Protocol):
    """Catalog dialect protocol."""

    @property
    def name(self) -> str:
        """Unique name of the catalog."""
        ...

    def relation(self, rel: str | None, mime: MimeType) -> str | None:
        """Normalize a raw link relation for the given media type."""
        ...

    def condition(self, entry_id: str) -> Visibility:
        """Visibility condition of the container with this identity."""
        ...

    def build_book(self, entry: Entry, base_url: str, index: int) -> Any:
        """Build the catalog-specific representation of a leaf entry."""
        ...
