"""Normalized link relations understood by the classifiers.

Dialects map their own relation spellings onto these tokens before any
classification happens.
"""

from __future__ import annotations

REL_ACQUISITION_PREFIX = "http://opds-spec.org/acquisition"
REL_FBREADER_ACQUISITION_PREFIX = "http://data.fbreader.org/acquisition"
REL_ACQUISITION = "http://opds-spec.org/acquisition"
REL_ACQUISITION_OPEN = "http://opds-spec.org/acquisition/open-access"

REL_IMAGE_PREFIX = "http://opds-spec.org/image"
REL_IMAGE_THUMBNAIL = "http://opds-spec.org/image/thumbnail"
REL_THUMBNAIL = "http://opds-spec.org/thumbnail"
REL_COVER = "http://opds-spec.org/cover"

REL_ALTERNATE = "alternate"
REL_SUBSECTION = "subsection"
REL_NEXT = "next"

REL_CATALOG_AUTHOR = "http://data.fbreader.org/catalog/author"
REL_CATALOG_SERIES = "http://data.fbreader.org/catalog/series"

# Vendor container relations, carried by application/litres+xml links.
REL_BOOKSHELF = "http://data.fbreader.org/catalog/bookshelf"
REL_RECOMMENDATIONS = "http://data.fbreader.org/catalog/recommendations"
REL_BASKET = "http://data.fbreader.org/catalog/basket"
REL_TOPUP = "http://data.fbreader.org/catalog/refill-account"


def is_acquisition(rel: str | None) -> bool:
    """Whether a normalized relation points at an acquirable book.

    Example:
        >>> is_acquisition("http://opds-spec.org/acquisition/buy")
        True
        >>> is_acquisition(None)
        False
    """
    return rel is not None and (
        rel.startswith(REL_ACQUISITION_PREFIX) or rel.startswith(REL_FBREADER_ACQUISITION_PREFIX)
    )
