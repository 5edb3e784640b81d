"""HTTP client with retry support.

Async client used to fetch catalog pages. Timeouts, transport errors and
5xx responses are retried with exponential backoff.

Example:
    >>> from catalogspine.http.client import HttpClient
    >>> client = HttpClient(timeout=10.0, max_retries=2)
    >>> client.max_retries
    2
    >>> # async with client:
    >>> #     response = await client.get("https://example.com/opds")
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = (500, 502, 503, 504)


class HttpClientError(Exception):
    """Base exception for HTTP client errors."""


class HttpClient:
    """Async HTTP client with retry support.

    Args:
        user_agent: User-Agent header.
        timeout: Request timeout in seconds.
        max_retries: Retries after the first attempt.
        backoff: Base delay in seconds; attempt ``n`` waits ``backoff * 2**n``.
        headers: Additional default headers.
        transport: Optional httpx transport (``httpx.MockTransport`` in tests).
    """

    def __init__(
        self,
        user_agent: str = "catalogspine/0.1",
        timeout: float = 30.0,
        max_retries: int = 3,
        backoff: float = 1.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._user_agent = user_agent
        self._timeout = timeout
        self._max_retries = max_retries
        self._backoff = backoff
        self._extra_headers = headers or {}
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def max_retries(self) -> int:
        return self._max_retries

    @property
    def headers(self) -> dict[str, str]:
        """Default headers for requests."""
        return {
            "User-Agent": self._user_agent,
            "Accept": "application/atom+xml, application/xml;q=0.9, */*;q=0.8",
            **self._extra_headers,
        }

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers=self.headers,
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpClient:
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """GET ``url`` with retries.

        Raises:
            HttpClientError: On a non-retryable status or once retries run out.
        """
        client = self._ensure_client()
        last_error: Exception | None = None

        for attempt in range(self._max_retries + 1):
            try:
                response = await client.get(url, **kwargs)
                response.raise_for_status()
                return response
            except httpx.HTTPStatusError as e:
                last_error = e
                if e.response.status_code not in RETRYABLE_STATUS:
                    raise HttpClientError(f"HTTP {e.response.status_code}: {url}") from e
            except httpx.TimeoutException as e:
                last_error = e
            except httpx.RequestError as e:
                last_error = e

            if attempt < self._max_retries:
                delay = self._backoff * (2**attempt)
                logger.debug("Retrying %s in %.1fs after %s", url, delay, last_error)
                await asyncio.sleep(delay)

        raise HttpClientError(f"Max retries exceeded for {url}: {last_error}") from last_error
