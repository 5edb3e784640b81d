"""Entry classification.

Turns one feed entry into a ``ClassifiedItem``: a book when the entry has
an acquisition link, otherwise a container built from the entry's
categorized URLs.

Example:
    >>> from catalogspine.classify.items import ItemClassifier
    >>> from catalogspine.dialect.opds import OPDSDialect
    >>> from catalogspine.models.feed import Entry, Link
    >>> classifier = ItemClassifier(OPDSDialect("example"), "https://example.com/opds/")
    >>> entry = Entry(
    ...     id="urn:popular",
    ...     title="Popular",
    ...     links=[Link(href="popular", rel="subsection", type="application/atom+xml")],
    ... )
    >>> item = classifier.classify(entry, index=0)
    >>> item.kind, item.urls.get("catalog")
    ('catalog', 'https://example.com/opds/popular')
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any
from urllib.parse import urljoin

from catalogspine.classify import relations
from catalogspine.classify.links import LinkCategory, classify_link
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
)

if TYPE_CHECKING:
    from catalogspine.classify.links import ClassifiedLink
    from catalogspine.models.feed import Entry
    from catalogspine.protocols.dialect import CatalogDialect

logger = logging.getLogger(__name__)

BookBuilder = Callable[["Entry", str, int], Any]


def annotation_of(entry: Entry) -> str | None:
    """Summary, else content, with newlines stripped.

    Example:
        >>> from catalogspine.models.feed import Entry
        >>> annotation_of(Entry(summary="Two\\nlines", content="ignored"))
        'Twolines'
        >>> annotation_of(Entry()) is None
        True
    """
    text = entry.summary if entry.summary is not None else entry.content
    return text.replace("\n", "") if text is not None else None


class ItemClassifier:
    """Classifies the entries of one feed page.

    Args:
        dialect: Catalog dialect; supplies relation normalization,
            visibility conditions and the default book builder.
        base_url: URL of the page, for resolving relative links.
        book_builder: Overrides ``dialect.build_book``.
    """

    def __init__(
        self,
        dialect: CatalogDialect,
        base_url: str,
        book_builder: BookBuilder | None = None,
    ) -> None:
        self._dialect = dialect
        self._base_url = base_url
        self._book_builder = book_builder or dialect.build_book

    def classify(self, entry: Entry, index: int, entry_id: str | None = None) -> ClassifiedItem:
        """Classify an entry.

        Args:
            entry: The entry to classify.
            index: Catalog position given to the entry if it is a book.
            entry_id: Resolved identity; defaults to ``entry.id``.

        Returns:
            The classified item; ``Discarded`` when the entry yields nothing.
        """
        entry_id = entry_id if entry_id is not None else entry.id or ""
        links = [classify_link(link, self._dialect.relation) for link in entry.links]

        if any(c.is_book_link for c in links):
            return BookItem(
                catalog=self._dialect.name,
                entry_id=entry_id,
                index=index,
                title=entry.title,
                annotation=annotation_of(entry),
                entry=entry,
                book=self._book_builder(entry, self._base_url, index),
            )
        return self._classify_container(entry, entry_id, links)

    def _classify_container(
        self,
        entry: Entry,
        entry_id: str,
        links: list[ClassifiedLink],
    ) -> ClassifiedItem:
        urls = UrlMap()
        url_is_alternate = False
        vendor_rel: str | None = None
        flags = CatalogFlags.DEFAULT

        for c in links:
            href = urljoin(self._base_url, c.link.href)
            match c.category:
                case LinkCategory.THUMBNAIL:
                    urls.add(UrlType.THUMBNAIL, href)
                case LinkCategory.COVER_IMAGE:
                    urls.add(UrlType.IMAGE, href)
                case LinkCategory.ALTERNATE_CATALOG:
                    if UrlType.CATALOG not in urls:
                        urls.add(UrlType.CATALOG, href)
                        url_is_alternate = True
                case LinkCategory.CATALOG:
                    if (
                        UrlType.CATALOG not in urls
                        or c.relation is None
                        or c.relation == relations.REL_SUBSECTION
                    ):
                        urls.add(UrlType.CATALOG, href)
                        url_is_alternate = False
                        if c.relation == relations.REL_CATALOG_AUTHOR:
                            flags &= ~CatalogFlags.SHOW_AUTHOR
                        elif c.relation == relations.REL_CATALOG_SERIES:
                            flags &= ~CatalogFlags.GROUP_BY_SERIES
                case LinkCategory.HTML_PAGE:
                    urls.add(UrlType.HTML_PAGE, href)
                case LinkCategory.VENDOR:
                    urls.add(UrlType.CATALOG, href)
                    vendor_rel = c.relation

        if UrlType.CATALOG not in urls and UrlType.HTML_PAGE not in urls:
            return self._discard(entry_id, "no catalog or html link")
        if UrlType.CATALOG in urls and not url_is_alternate:
            urls.remove(UrlType.HTML_PAGE)

        annotation = annotation_of(entry)
        catalog = self._dialect.name

        if vendor_rel is None:
            return CatalogItem(
                catalog=catalog,
                entry_id=entry_id,
                title=entry.title,
                annotation=annotation,
                urls=urls,
                flags=flags,
                visibility=self._dialect.condition(entry_id),
            )

        match vendor_rel:
            case relations.REL_BOOKSHELF:
                return BookshelfItem(
                    catalog=catalog,
                    title=entry.title,
                    annotation=annotation,
                    urls=urls,
                    visibility=self._dialect.condition(entry_id),
                )
            case relations.REL_RECOMMENDATIONS:
                return RecommendationsItem(
                    catalog=catalog,
                    title=entry.title,
                    annotation=annotation,
                    urls=urls,
                    visibility=self._dialect.condition(entry_id),
                )
            case relations.REL_TOPUP:
                return TopUpItem(catalog=catalog, urls=urls)
            case relations.REL_BASKET:
                return self._discard(entry_id, "unsupported vendor relation")
            case _:
                return self._discard(entry_id, f"unknown vendor relation {vendor_rel!r}")

    def _discard(self, entry_id: str, reason: str) -> Discarded:
        logger.debug("Discarding entry %s: %s", entry_id, reason)
        return Discarded(reason=reason)
