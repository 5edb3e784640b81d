"""Classified catalog items.

Every entry of a feed page classifies to exactly one variant of
``ClassifiedItem``, a closed union discriminated on ``kind``:

- ``BookItem``: a leaf, acquirable item.
- ``CatalogItem``: a generic sub-catalog.
- ``BookshelfItem``, ``RecommendationsItem``, ``TopUpItem``: vendor containers.
- ``Discarded``: the entry yields nothing for the listener.

Example:
    >>> from catalogspine.models.items import CatalogItem, UrlMap, UrlType
    >>> urls = UrlMap()
    >>> urls.add(UrlType.CATALOG, "https://example.com/opds/new")
    >>> item = CatalogItem(catalog="feedbooks", entry_id="urn:new", title="New", urls=urls)
    >>> item.kind, item.urls.get(UrlType.CATALOG)
    ('catalog', 'https://example.com/opds/new')
"""

from __future__ import annotations

from enum import Enum, IntFlag
from typing import Annotated, Any, Literal

from pydantic import Field

from catalogspine.models.base import CatalogSpineModel
from catalogspine.models.feed import Entry


class UrlType(str, Enum):
    """Category of a URL kept for a container item."""

    THUMBNAIL = "thumbnail"
    IMAGE = "image"
    CATALOG = "catalog"
    HTML_PAGE = "html_page"


class CatalogFlags(IntFlag):
    """Display flags of a generic container."""

    NONE = 0
    SHOW_AUTHOR = 1
    GROUP_BY_SERIES = 2
    DEFAULT = SHOW_AUTHOR | GROUP_BY_SERIES


class Visibility(str, Enum):
    """When a container should be offered to the user."""

    ALWAYS = "always"
    SIGNED_IN = "signed_in"
    NEVER = "never"


class UrlMap(CatalogSpineModel):
    """Categorized URLs of a container, at most one per ``UrlType``.

    Example:
        >>> from catalogspine.models.items import UrlMap, UrlType
        >>> urls = UrlMap()
        >>> urls.add(UrlType.HTML_PAGE, "https://example.com/a.html")
        >>> urls.add(UrlType.HTML_PAGE, "https://example.com/b.html")
        >>> urls.get(UrlType.HTML_PAGE)
        'https://example.com/b.html'
        >>> urls.remove(UrlType.HTML_PAGE)
        >>> UrlType.HTML_PAGE in urls
        False
    """

    urls: dict[UrlType, str] = Field(default_factory=dict)

    def add(self, url_type: UrlType, url: str) -> None:
        self.urls[url_type] = url

    def get(self, url_type: UrlType) -> str | None:
        return self.urls.get(url_type)

    def remove(self, url_type: UrlType) -> None:
        self.urls.pop(url_type, None)

    def __contains__(self, url_type: object) -> bool:
        return url_type in self.urls

    def __len__(self) -> int:
        return len(self.urls)


class BookItem(CatalogSpineModel):
    """A leaf item: the entry carries at least one acquisition link.

    ``book`` holds whatever the catalog dialect built for this entry.
    """

    kind: Literal["book"] = "book"
    catalog: str
    entry_id: str
    index: int = Field(..., ge=0, description="Position of the book within the catalog")
    title: str = ""
    annotation: str | None = None
    entry: Entry
    book: Any = None


class CatalogItem(CatalogSpineModel):
    """A generic sub-catalog."""

    kind: Literal["catalog"] = "catalog"
    catalog: str
    entry_id: str
    title: str = ""
    annotation: str | None = None
    urls: UrlMap
    flags: CatalogFlags = CatalogFlags.DEFAULT
    visibility: Visibility = Visibility.ALWAYS


class BookshelfItem(CatalogSpineModel):
    """The signed-in user's purchased books, served by a vendor catalog."""

    kind: Literal["bookshelf"] = "bookshelf"
    catalog: str
    title: str = ""
    annotation: str | None = None
    urls: UrlMap
    visibility: Visibility = Visibility.ALWAYS


class RecommendationsItem(CatalogSpineModel):
    """Personal recommendations served by a vendor catalog."""

    kind: Literal["recommendations"] = "recommendations"
    catalog: str
    title: str = ""
    annotation: str | None = None
    urls: UrlMap
    visibility: Visibility = Visibility.ALWAYS


class TopUpItem(CatalogSpineModel):
    """Entry point for topping up a vendor account."""

    kind: Literal["topup"] = "topup"
    catalog: str
    urls: UrlMap


class Discarded(CatalogSpineModel):
    """An entry that produces nothing for the listener."""

    kind: Literal["discarded"] = "discarded"
    reason: str


ClassifiedItem = Annotated[
    BookItem | CatalogItem | BookshelfItem | RecommendationsItem | TopUpItem | Discarded,
    Field(discriminator="kind"),
]
