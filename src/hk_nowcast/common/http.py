"""Async HTTP client for the HKO open data endpoints, with retry."""

from __future__ import annotations

import logging

import httpx
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from hk_nowcast.config import get_settings

logger = logging.getLogger(__name__)

# data.weather.gov.hk answers 408/429 under load and 5xx while a feed is
# being regenerated; anything else is final.
RETRY_STATUSES = frozenset({408, 429, 500, 502, 503, 504})


def _is_retryable(exc: BaseException) -> bool:
    """Retry on timeouts, dropped connections and transient HTTP statuses."""
    if isinstance(exc, (httpx.TimeoutException, httpx.RemoteProtocolError)):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in RETRY_STATUSES
    return False


_retry_decorator = retry(
    retry=retry_if_exception(_is_retryable),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    before_sleep=before_sleep_log(logger, logging.DEBUG),
    reraise=True,
)


class HttpClient:
    """Async HTTP client with retry logic.

    ``transport`` replaces the network layer (e.g. ``httpx.MockTransport``).
    """

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        settings = get_settings()
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.http_timeout),
            follow_redirects=True,
            transport=transport,
        )

    @_retry_decorator
    async def get(self, url: str) -> httpx.Response:
        resp = await self._client.get(url)
        resp.raise_for_status()
        return resp

    async def fetch_bytes(self, url: str) -> bytes:
        """Body of a successful GET, undecoded.

        Raises:
            httpx.HTTPStatusError: non-2xx after retries
            httpx.TransportError: the host could not be reached after retries
        """
        resp = await self.get(url)
        logger.debug("GET %s -> %d (%d bytes)", url, resp.status_code, len(resp.content))
        return resp.content

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
