"""Feed adapter module."""

from catalogspine.adapter.opds import OPDSFeedAdapter, parse_feed

__all__ = ["OPDSFeedAdapter", "parse_feed"]
