"""Tests for catalogspine.dialect.opds."""

from __future__ import annotations

from catalogspine.dialect.opds import OPDSDialect
from catalogspine.models.feed import APP_ATOM, TEXT_HTML, Entry, Link
from catalogspine.models.items import Visibility
from catalogspine.protocols.dialect import CatalogDialect

BASE = "https://example.com/opds/"


class TestRelation:
    """Relation normalization tests."""

    def test_implements_protocol(self) -> None:
        """OPDSDialect satisfies CatalogDialect."""
        assert isinstance(OPDSDialect("x"), CatalogDialect)

    def test_passthrough(self) -> None:
        """Unaliased relations are returned unchanged."""
        assert OPDSDialect("x").relation("subsection", APP_ATOM) == "subsection"

    def test_none_stays_none(self) -> None:
        """A missing relation stays missing."""
        assert OPDSDialect("x", relation_aliases={("a", None): "b"}).relation(None, APP_ATOM) is None

    def test_typed_alias_beats_wildcard(self) -> None:
        """An alias for the exact media type wins over an untyped one."""
        dialect = OPDSDialect(
            "x",
            relation_aliases={
                ("related", "application/atom+xml"): "subsection",
                ("related", None): "alternate",
            },
        )
        assert dialect.relation("related", APP_ATOM) == "subsection"
        assert dialect.relation("related", TEXT_HTML) == "alternate"


class TestCondition:
    """Visibility condition tests."""

    def test_default_always(self) -> None:
        """Unknown entries are always visible."""
        assert OPDSDialect("x").condition("urn:1") is Visibility.ALWAYS

    def test_override(self) -> None:
        """Configured entries get their visibility."""
        dialect = OPDSDialect("x", conditions={"urn:shelf": Visibility.SIGNED_IN})
        assert dialect.condition("urn:shelf") is Visibility.SIGNED_IN


class TestBuildBook:
    """build_book tests."""

    def test_collects_formats(self) -> None:
        """Acquisition links are keyed by format with absolute URLs."""
        entry = Entry(
            id="urn:1",
            links=[
                Link(href="b.epub", rel="http://opds-spec.org/acquisition", type="application/epub+zip"),
                Link(href="/b.fb2", type="application/x-fictionbook+xml"),
                Link(href="cover.png", rel="http://opds-spec.org/image", type="image/png"),
            ],
        )
        book = OPDSDialect("x").build_book(entry, BASE, 0)
        assert book == {
            "epub": "https://example.com/opds/b.epub",
            "fb2": "https://example.com/b.fb2",
        }

    def test_ignores_non_acquisition_relations(self) -> None:
        """Book formats behind other relations are not downloads."""
        entry = Entry(links=[Link(href="b.epub", rel="alternate", type="application/epub+zip")])
        assert OPDSDialect("x").build_book(entry, BASE, 0) == {}
