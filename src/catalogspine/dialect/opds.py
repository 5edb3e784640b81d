"""Generic OPDS catalog dialect.

Example:
    >>> from catalogspine.dialect.opds import OPDSDialect
    >>> from catalogspine.models.feed import APP_ATOM
    >>> dialect = OPDSDialect(
    ...     "example",
    ...     relation_aliases={("related", "application/atom+xml"): "subsection"},
    ... )
    >>> dialect.relation("related", APP_ATOM)
    'subsection'
    >>> dialect.relation("next", APP_ATOM)
    'next'
"""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import urljoin

from catalogspine.classify.links import BookFormat, classify_link
from catalogspine.classify.relations import is_acquisition
from catalogspine.models.feed import Entry, MimeType
from catalogspine.models.items import Visibility


class OPDSDialect:
    """Dialect for a plain OPDS catalog with optional relation aliases.

    Args:
        name: Catalog name, reported to the listener with every item.
        relation_aliases: Maps ``(raw relation, media type or None)`` to a
            normalized relation. A ``None`` media type matches any type.
        conditions: Per-entry visibility overrides keyed by entry identity.
    """

    def __init__(
        self,
        name: str,
        *,
        relation_aliases: Mapping[tuple[str, str | None], str] | None = None,
        conditions: Mapping[str, Visibility] | None = None,
    ) -> None:
        self._name = name
        self._aliases = dict(relation_aliases or {})
        self._conditions = dict(conditions or {})

    @property
    def name(self) -> str:
        return self._name

    def relation(self, rel: str | None, mime: MimeType) -> str | None:
        if rel is None:
            return None
        mapped = self._aliases.get((rel, mime.name))
        if mapped is None:
            mapped = self._aliases.get((rel, None))
        return mapped if mapped is not None else rel

    def condition(self, entry_id: str) -> Visibility:
        return self._conditions.get(entry_id, Visibility.ALWAYS)

    def build_book(self, entry: Entry, base_url: str, index: int) -> dict[str, str]:
        """Collect the entry's acquisition URLs, keyed by book format.

        When a format is offered twice the last link wins.
        """
        downloads: dict[str, str] = {}
        for link in entry.links:
            classified = classify_link(link, self.relation)
            if classified.book_format is BookFormat.NONE:
                continue
            if classified.relation is None or is_acquisition(classified.relation):
                downloads[classified.book_format.value] = urljoin(base_url, link.href)
        return downloads
