"""Custom exceptions.

catalogspine uses a small hierarchy of exceptions. Conditions that are part
of normal catalog traffic (entries without a usable link, unknown vendor
relations, a lost resume point) are reported through results, not raised.

Example:
    >>> from catalogspine.core.exceptions import ConfigurationError, CatalogSpineError
    >>> isinstance(ConfigurationError("bad dialect"), CatalogSpineError)
    True
    >>> try:
    ...     raise IngestionStateError("on_entry after on_feed_end")
    ... except CatalogSpineError as e:
    ...     print(f"Caught: {type(e).__name__}")
    Caught: IngestionStateError
"""

from __future__ import annotations


class CatalogSpineError(Exception):
    """Base exception for catalogspine.

    Example:
        >>> from catalogspine.core.exceptions import CatalogSpineError
        >>> e = CatalogSpineError("something went wrong")
        >>> str(e)
        'something went wrong'
    """


class ConfigurationError(CatalogSpineError):
    """Run configuration is invalid.

    Raised when the catalog handle passed to an ingestion run does not
    implement the expected dialect protocol. Not recoverable within a run.

    Example:
        >>> from catalogspine.core.exceptions import ConfigurationError
        >>> raise ConfigurationError("not a dialect")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ConfigurationError: not a dialect
    """


class FeedError(CatalogSpineError):
    """Fetching or parsing a feed page failed.

    Example:
        >>> from catalogspine.core.exceptions import FeedError
        >>> err = FeedError("Connection failed", source="https://example.com/opds")
        >>> err.source
        'https://example.com/opds'
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.source = source
        self.cause = cause


class IngestionStateError(CatalogSpineError):
    """A feed callback arrived out of document order."""


class CheckpointError(CatalogSpineError):
    """A stored checkpoint could not be read."""
