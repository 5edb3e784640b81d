"""Tests for catalogspine.classify.links."""

from __future__ import annotations

import pytest

from catalogspine.classify.links import BookFormat, LinkCategory, classify_link
from catalogspine.classify.relations import (
    REL_ACQUISITION,
    REL_COVER,
    REL_FBREADER_ACQUISITION_PREFIX,
    REL_IMAGE_THUMBNAIL,
)
from catalogspine.models.feed import Link


def same(rel, mime):
    return rel


class TestBookFormat:
    """BookFormat ordering tests."""

    def test_ranks_are_a_total_order(self) -> None:
        """Formats rank NONE < MOBIPOCKET < FB2 < FB2_ZIP < EPUB."""
        ordered = [
            BookFormat.NONE,
            BookFormat.MOBIPOCKET,
            BookFormat.FB2,
            BookFormat.FB2_ZIP,
            BookFormat.EPUB,
        ]
        ranks = [f.rank for f in ordered]
        assert ranks == sorted(ranks)
        assert len(set(ranks)) == len(ranks)

    def test_every_format_has_a_rank(self) -> None:
        """No format is left out of the ranking."""
        for book_format in BookFormat:
            assert isinstance(book_format.rank, int)

    def test_from_mime_ignores_parameters(self) -> None:
        """Media type parameters do not affect the format."""
        link = Link(href="b", type="application/epub+zip; charset=binary")
        assert BookFormat.from_mime(link.mime) is BookFormat.EPUB


class TestClassifyLink:
    """classify_link tests."""

    @pytest.mark.parametrize(
        ("rel", "mime", "category"),
        [
            (REL_IMAGE_THUMBNAIL, "image/png", LinkCategory.THUMBNAIL),
            ("http://opds-spec.org/thumbnail", "image/jpeg", LinkCategory.THUMBNAIL),
            (REL_COVER, "image/jpeg", LinkCategory.COVER_IMAGE),
            ("http://opds-spec.org/image", "image/png", LinkCategory.COVER_IMAGE),
            (None, "image/png", LinkCategory.NONE),
            ("subsection", "application/atom+xml", LinkCategory.CATALOG),
            (None, "application/atom+xml;profile=opds-catalog", LinkCategory.CATALOG),
            ("alternate", "application/atom+xml", LinkCategory.ALTERNATE_CATALOG),
            ("alternate", "text/html", LinkCategory.HTML_PAGE),
            (None, "text/html", LinkCategory.HTML_PAGE),
            ("related", "text/html", LinkCategory.NONE),
            ("anything", "application/litres+xml", LinkCategory.VENDOR),
            (None, "application/epub+zip", LinkCategory.ACQUISITION),
            (REL_ACQUISITION, "application/pdf", LinkCategory.ACQUISITION),
            ("related", "application/pdf", LinkCategory.NONE),
        ],
    )
    def test_categories(self, rel, mime, category) -> None:
        """Media type and relation map to the expected category."""
        assert classify_link(Link(href="x", rel=rel, type=mime), same).category is category

    def test_relation_is_normalized_first(self) -> None:
        """Classification sees the dialect's relation, not the raw one."""
        normalize = lambda rel, mime: "subsection" if rel == "related" else rel  # noqa: E731
        classified = classify_link(
            Link(href="x", rel="related", type="application/atom+xml"), normalize
        )
        assert classified.relation == "subsection"

    def test_vendor_relation_is_kept(self) -> None:
        """Vendor links remember their relation for dispatch."""
        classified = classify_link(
            Link(href="x", rel="bookshelf", type="application/litres+xml"), same
        )
        assert classified.vendor_relation == "bookshelf"

    def test_vendor_relation_only_on_vendor_links(self) -> None:
        """Other links report no vendor relation."""
        classified = classify_link(Link(href="x", rel="next", type="application/atom+xml"), same)
        assert classified.vendor_relation is None


class TestIsBookLink:
    """ClassifiedLink.is_book_link tests."""

    def test_no_relation_known_format(self) -> None:
        """A bare link to a known book format is a book link."""
        assert classify_link(Link(href="b.fb2", type="application/fb2+zip"), same).is_book_link

    def test_no_relation_unknown_format(self) -> None:
        """A bare link to an unknown format is not."""
        assert not classify_link(Link(href="b.pdf", type="application/pdf"), same).is_book_link

    def test_fbreader_acquisition_prefix(self) -> None:
        """The reader-specific acquisition prefix counts."""
        link = Link(href="b", rel=REL_FBREADER_ACQUISITION_PREFIX + "/buy", type="text/html")
        assert classify_link(link, same).is_book_link

    def test_other_relation_on_book_format(self) -> None:
        """A book format under an unrelated relation is not a book link."""
        link = Link(href="b.epub", rel="related", type="application/epub+zip")
        assert not classify_link(link, same).is_book_link
