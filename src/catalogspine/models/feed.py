"""Parsed feed document model.

One ``FeedDocument`` is one page of a remote catalog, as produced by the
OPDS parser (or any other parser that fills these models).

Example:
    >>> from catalogspine.models.feed import Entry, FeedDocument, FeedMetadata, Link
    >>> doc = FeedDocument(
    ...     metadata=FeedMetadata(start_index=1, items_per_page=20),
    ...     entries=[Entry(id="urn:1", title="Book", links=[Link(href="/b.epub")])],
    ... )
    >>> doc.entries[0].links[0].mime.name
    ''
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import Field

from catalogspine.models.base import CatalogSpineModel


@dataclass(frozen=True)
class MimeType:
    """A parsed media type.

    Equality compares the bare type name only, so
    ``application/atom+xml;profile=opds-catalog`` equals ``application/atom+xml``.

    Example:
        >>> from catalogspine.models.feed import MimeType
        >>> mime = MimeType.parse("application/atom+xml; profile=opds-catalog")
        >>> mime.name, mime.params["profile"]
        ('application/atom+xml', 'opds-catalog')
        >>> mime == MimeType.parse("Application/Atom+XML")
        True
    """

    name: str
    params: dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def parse(cls, raw: str | None) -> MimeType:
        if not raw:
            return cls("")
        name, *rest = raw.split(";")
        params: dict[str, str] = {}
        for part in rest:
            key, sep, value = part.partition("=")
            if sep:
                params[key.strip().lower()] = value.strip().strip('"')
        return cls(name.strip().lower(), params)

    @property
    def is_image(self) -> bool:
        return self in (IMAGE_PNG, IMAGE_JPEG)

    def __str__(self) -> str:
        return self.name


APP_ATOM = MimeType("application/atom+xml")
APP_LITRES = MimeType("application/litres+xml")
TEXT_HTML = MimeType("text/html")
IMAGE_PNG = MimeType("image/png")
IMAGE_JPEG = MimeType("image/jpeg")
APP_EPUB = MimeType("application/epub+zip")
APP_FB2 = MimeType("application/x-fictionbook+xml")
APP_FB2_ZIP = MimeType("application/fb2+zip")
APP_MOBIPOCKET = MimeType("application/x-mobipocket-ebook")


class Link(CatalogSpineModel):
    """A link as it appears in the feed, before normalization."""

    href: str = Field(..., description="Link target, possibly relative")
    rel: str | None = Field(default=None, description="Raw relation attribute")
    type: str | None = Field(default=None, description="Raw media type attribute")

    @property
    def mime(self) -> MimeType:
        return MimeType.parse(self.type)


class Entry(CatalogSpineModel):
    """One item record within a feed page."""

    id: str | None = None
    title: str = ""
    links: list[Link] = Field(default_factory=list)
    summary: str | None = None
    content: str | None = None


class FeedMetadata(CatalogSpineModel):
    """Result-window indices reported by the feed.

    Each index is optional; ``None`` means the feed did not say.
    """

    start_index: int | None = None
    items_per_page: int | None = None
    total_results: int | None = None


class FeedDocument(CatalogSpineModel):
    """A parsed feed page: metadata, feed-level links and entries in document order."""

    title: str = ""
    metadata: FeedMetadata = Field(default_factory=FeedMetadata)
    links: list[Link] = Field(default_factory=list)
    entries: list[Entry] = Field(default_factory=list)
