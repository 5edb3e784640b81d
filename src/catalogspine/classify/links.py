"""Link classification.

Decides what a single feed link points at from its media type and its
normalized relation. Pure functions only: the same link and relation
normalizer always give the same answer.

Example:
    >>> from catalogspine.classify.links import LinkCategory, classify_link
    >>> from catalogspine.models.feed import Link
    >>> link = Link(href="/sub", rel="subsection", type="application/atom+xml")
    >>> classify_link(link, lambda rel, mime: rel).category
    <LinkCategory.CATALOG: 'catalog'>
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from catalogspine.classify.relations import (
    REL_ACQUISITION,
    REL_ACQUISITION_OPEN,
    REL_ALTERNATE,
    REL_COVER,
    REL_IMAGE_PREFIX,
    REL_IMAGE_THUMBNAIL,
    REL_THUMBNAIL,
    is_acquisition,
)
from catalogspine.models.feed import (
    APP_ATOM,
    APP_EPUB,
    APP_FB2,
    APP_FB2_ZIP,
    APP_LITRES,
    APP_MOBIPOCKET,
    TEXT_HTML,
    Link,
    MimeType,
)

RelationNormalizer = Callable[[str | None, MimeType], str | None]


class BookFormat(str, Enum):
    """Downloadable book formats, compared through ``rank``."""

    NONE = "none"
    MOBIPOCKET = "mobipocket"
    FB2 = "fb2"
    FB2_ZIP = "fb2_zip"
    EPUB = "epub"

    @property
    def rank(self) -> int:
        """Preference of this format; higher is better, NONE is 0.

        Example:
            >>> BookFormat.EPUB.rank > BookFormat.FB2_ZIP.rank > BookFormat.NONE.rank
            True
        """
        return _FORMAT_RANK[self]

    @classmethod
    def from_mime(cls, mime: MimeType) -> BookFormat:
        return _FORMAT_BY_MIME.get(mime.name, cls.NONE)


_FORMAT_RANK: dict[BookFormat, int] = {
    BookFormat.NONE: 0,
    BookFormat.MOBIPOCKET: 1,
    BookFormat.FB2: 2,
    BookFormat.FB2_ZIP: 3,
    BookFormat.EPUB: 4,
}

_FORMAT_BY_MIME: dict[str, BookFormat] = {
    APP_EPUB.name: BookFormat.EPUB,
    APP_FB2_ZIP.name: BookFormat.FB2_ZIP,
    APP_FB2.name: BookFormat.FB2,
    APP_MOBIPOCKET.name: BookFormat.MOBIPOCKET,
}


class LinkCategory(str, Enum):
    """Semantic category of a link."""

    ACQUISITION = "acquisition"
    CATALOG = "catalog"
    ALTERNATE_CATALOG = "alternate_catalog"
    THUMBNAIL = "thumbnail"
    COVER_IMAGE = "cover_image"
    HTML_PAGE = "html_page"
    VENDOR = "vendor"
    NONE = "none"


@dataclass(frozen=True)
class ClassifiedLink:
    """A link together with what the classifier decided about it."""

    link: Link
    mime: MimeType
    relation: str | None
    category: LinkCategory
    book_format: BookFormat

    @property
    def is_book_link(self) -> bool:
        """Whether the link references an acquirable book.

        With no relation the media type must be a known book format;
        otherwise the relation must be an acquisition relation.
        """
        if self.relation is None:
            return self.book_format is not BookFormat.NONE
        return is_acquisition(self.relation)

    @property
    def vendor_relation(self) -> str | None:
        return self.relation if self.category is LinkCategory.VENDOR else None


def _category(mime: MimeType, rel: str | None, book_format: BookFormat) -> LinkCategory:
    if mime.is_image:
        if rel in (REL_IMAGE_THUMBNAIL, REL_THUMBNAIL):
            return LinkCategory.THUMBNAIL
        if rel == REL_COVER or (rel is not None and rel.startswith(REL_IMAGE_PREFIX)):
            return LinkCategory.COVER_IMAGE
        return LinkCategory.NONE
    if mime == APP_ATOM:
        return LinkCategory.ALTERNATE_CATALOG if rel == REL_ALTERNATE else LinkCategory.CATALOG
    if mime == TEXT_HTML:
        if rel in (REL_ACQUISITION, REL_ACQUISITION_OPEN, REL_ALTERNATE, None):
            return LinkCategory.HTML_PAGE
        return LinkCategory.NONE
    if mime == APP_LITRES:
        return LinkCategory.VENDOR
    if (rel is None and book_format is not BookFormat.NONE) or is_acquisition(rel):
        return LinkCategory.ACQUISITION
    return LinkCategory.NONE


def classify_link(link: Link, relation: RelationNormalizer) -> ClassifiedLink:
    """Classify one link.

    Args:
        link: Link as it appears in the feed.
        relation: Dialect relation normalizer, ``(raw rel, mime) -> rel``.

    Returns:
        The classified link. Media type decides first: images, feed links,
        HTML pages and vendor links each have their own category; any other
        link is ACQUISITION when it references a book, else NONE.

    Example:
        >>> from catalogspine.classify.links import classify_link
        >>> from catalogspine.models.feed import Link
        >>> same = lambda rel, mime: rel
        >>> c = classify_link(Link(href="b.epub", type="application/epub+zip"), same)
        >>> c.category.value, c.book_format.value, c.is_book_link
        ('acquisition', 'epub', True)
        >>> c = classify_link(Link(href="x", rel="alternate", type="application/atom+xml"), same)
        >>> c.category.value
        'alternate_catalog'
    """
    mime = link.mime
    rel = relation(link.rel, mime)
    book_format = BookFormat.from_mime(mime)
    return ClassifiedLink(
        link=link,
        mime=mime,
        relation=rel,
        category=_category(mime, rel, book_format),
        book_format=book_format,
    )
