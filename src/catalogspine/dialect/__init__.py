"""Catalog dialects."""

from catalogspine.dialect.opds import OPDSDialect

__all__ = ["OPDSDialect"]
