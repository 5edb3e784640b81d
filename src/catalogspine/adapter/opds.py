"""OPDS (Atom) feed adapter.

Parses OPDS catalog pages into ``FeedDocument`` objects and fetches them
over HTTP.

Example:
    >>> from catalogspine.adapter.opds import parse_feed
    >>> doc = parse_feed('''<feed xmlns="http://www.w3.org/2005/Atom">
    ...   <entry><id>urn:1</id><title>One</title></entry>
    ... </feed>''')
    >>> doc.entries[0].id
    'urn:1'
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

from catalogspine.core.exceptions import FeedError
from catalogspine.http.client import HttpClient, HttpClientError
from catalogspine.models.feed import Entry, FeedDocument, FeedMetadata, Link

logger = logging.getLogger(__name__)

ATOM_NS = "http://www.w3.org/2005/Atom"
OPENSEARCH_NS = "http://a9.com/-/spec/opensearch/1.1/"


def _find(elem: ET.Element, tag: str, ns: str = ATOM_NS) -> ET.Element | None:
    # Try with full namespace URI, then without namespace
    found = elem.find(f"{{{ns}}}{tag}")
    return found if found is not None else elem.find(tag)


def _text(elem: ET.Element, tag: str, ns: str = ATOM_NS) -> str | None:
    found = _find(elem, tag, ns)
    if found is None:
        return None
    # Summaries and content may carry inline XHTML
    text = "".join(found.itertext()).strip()
    return text or None


def _int(elem: ET.Element, tag: str) -> int | None:
    text = _text(elem, tag, OPENSEARCH_NS)
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        logger.debug("Ignoring non-numeric opensearch:%s %r", tag, text)
        return None


def _links(elem: ET.Element) -> list[Link]:
    links = []
    for link in [*elem.findall(f"{{{ATOM_NS}}}link"), *elem.findall("link")]:
        href = link.get("href")
        if href:
            links.append(Link(href=href.strip(), rel=link.get("rel"), type=link.get("type")))
    return links


def _parse_entry(entry: ET.Element) -> Entry:
    return Entry(
        id=_text(entry, "id"),
        title=_text(entry, "title") or "",
        links=_links(entry),
        summary=_text(entry, "summary"),
        content=_text(entry, "content"),
    )


def parse_feed(xml_content: str | bytes, source: str | None = None) -> FeedDocument:
    """Parse an OPDS page.

    Args:
        xml_content: Raw XML.
        source: URL of the page, used in error messages.

    Returns:
        The parsed page, entries in document order.

    Raises:
        FeedError: If the XML is malformed or is not an Atom feed.
    """
    try:
        root = ET.fromstring(xml_content)
    except ET.ParseError as e:
        raise FeedError(f"Failed to parse feed XML: {e}", source=source, cause=e) from e

    if root.tag not in (f"{{{ATOM_NS}}}feed", "feed"):
        raise FeedError(f"Not an Atom feed: root element {root.tag}", source=source)

    entries = root.findall(f"{{{ATOM_NS}}}entry") or root.findall("entry")
    return FeedDocument(
        title=_text(root, "title") or "",
        metadata=FeedMetadata(
            start_index=_int(root, "startIndex"),
            items_per_page=_int(root, "itemsPerPage"),
            total_results=_int(root, "totalResults"),
        ),
        links=_links(root),
        entries=[_parse_entry(entry) for entry in entries],
    )


class OPDSFeedAdapter:
    """Fetches OPDS pages over HTTP.

    Implements the ``PageFetcher`` protocol.

    Args:
        client: HTTP client; the adapter does not own it.
    """

    def __init__(self, client: HttpClient) -> None:
        self._client = client

    async def fetch_page(self, url: str) -> FeedDocument:
        """Fetch and parse one page.

        Raises:
            FeedError: If the page cannot be fetched or parsed.
        """
        try:
            response = await self._client.get(url)
        except HttpClientError as e:
            raise FeedError(f"Failed to fetch feed: {e}", source=url, cause=e) from e
        return parse_feed(response.content, source=url)
