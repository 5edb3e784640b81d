"""Entry identity resolution.

Entries are deduplicated and resumed by identity. Most feeds give every
entry an ``<id>``; for those that don't, a stable identity is derived from
the entry's links.
"""

from __future__ import annotations

from urllib.parse import urljoin

from catalogspine.classify.links import BookFormat, RelationNormalizer, classify_link
from catalogspine.classify.relations import REL_ACQUISITION, is_acquisition
from catalogspine.models.feed import APP_ATOM, Entry


def resolve_entry_id(entry: Entry, base_url: str, relation: RelationNormalizer) -> str | None:
    """Return the identity URI of an entry.

    An explicit id is returned unchanged. Otherwise:

    1. The first feed link with no relation is the identity, immediately.
    2. Among links with no relation or an acquisition relation, the one
       with the best book format wins. On equal formats a link with the
       canonical acquisition relation replaces an earlier candidate.

    Links are resolved against ``base_url``. Returns None when no link
    qualifies.

    Example:
        >>> from catalogspine.models.feed import Entry, Link
        >>> entry = Entry(links=[
        ...     Link(href="b.mobi", type="application/x-mobipocket-ebook"),
        ...     Link(href="b.epub", type="application/epub+zip"),
        ... ])
        >>> resolve_entry_id(entry, "https://example.com/opds/", lambda r, m: r)
        'https://example.com/opds/b.epub'
    """
    if entry.id is not None:
        return entry.id

    best_id: str | None = None
    best_format = BookFormat.NONE
    for link in entry.links:
        classified = classify_link(link, relation)
        rel = classified.relation
        if rel is None and classified.mime == APP_ATOM:
            return urljoin(base_url, link.href)

        if rel is None or is_acquisition(rel):
            book_format = classified.book_format
        else:
            book_format = BookFormat.NONE
        if book_format is BookFormat.NONE:
            continue
        if (
            best_id is None
            or best_format.rank < book_format.rank
            or (best_format.rank == book_format.rank and rel == REL_ACQUISITION)
        ):
            best_id = urljoin(base_url, link.href)
            best_format = book_format
    return best_id
