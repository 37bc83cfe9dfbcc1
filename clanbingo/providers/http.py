"""Shared HTTP plumbing for activity feed clients.

Handles raw HTTP requests. No data transformation - just fetch and
return JSON (or None after the last failed attempt).
"""

import logging
import threading
import time

import httpx

from clanbingo.config import Config

logger = logging.getLogger(__name__)


class JsonHttpClient:
    """Low-level JSON-over-HTTP client with bounded retry."""

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        retry_count: int | None = None,
        retry_delay: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize client.

        Args:
            base_url: URL prefix for every request
            timeout: Per-request timeout in seconds (default HTTP_TIMEOUT)
            retry_count: Attempts per request (default HTTP_RETRY_COUNT)
            retry_delay: Base delay between attempts, multiplied by attempt number
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout if timeout is not None else Config.HTTP_TIMEOUT
        self._retry_count = max(1, retry_count if retry_count is not None else Config.HTTP_RETRY_COUNT)
        self._retry_delay = retry_delay if retry_delay is not None else Config.HTTP_RETRY_DELAY
        self._transport = transport
        self._client: httpx.Client | None = None
        self._lock = threading.Lock()

    @property
    def base_url(self) -> str:
        return self._base_url

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            with self._lock:
                # Double-check after acquiring lock
                if self._client is None:
                    self._client = httpx.Client(
                        timeout=self._timeout,
                        headers={"User-Agent": Config.USER_AGENT},
                        limits=httpx.Limits(max_connections=20, max_keepalive_connections=5),
                        transport=self._transport,
                    )
        return self._client

    def _request(self, path: str, params: dict | None = None) -> dict | None:
        """Make HTTP GET request with retry logic."""
        url = f"{self._base_url}{path}"
        for attempt in range(self._retry_count):
            try:
                client = self._get_client()
                response = client.get(url, params=params)
                response.raise_for_status()
                return response.json()
            except httpx.HTTPStatusError as e:
                logger.warning("[FETCH] HTTP %d for %s", e.response.status_code, url)
            except (httpx.RequestError, ValueError, RuntimeError, OSError) as e:
                # ValueError: body was not JSON
                # RuntimeError: "Cannot send a request, as the client has been closed"
                logger.warning("[FETCH] Request failed for %s: %s", url, e)

            if attempt < self._retry_count - 1:
                time.sleep(self._retry_delay * (attempt + 1))

        return None

    def close(self) -> None:
        """Close the underlying HTTP client."""
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None
