"""HTTP utilities for fetching catalog pages."""

from catalogspine.http.client import HttpClient, HttpClientError

__all__ = ["HttpClient", "HttpClientError"]
