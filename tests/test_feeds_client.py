"""Tests for the HKO fetchers with a mocked HTTP client."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from hk_nowcast.config import Settings
from hk_nowcast.feeds.client import Feed, HkoFetcher, InMemoryFetcher
from hk_nowcast.feeds.errors import FeedFetchError, NetworkUnavailableError


def _mock_client(MockClient, fetch_bytes):
    instance = AsyncMock()
    instance.fetch_bytes = fetch_bytes
    instance.__aenter__ = AsyncMock(return_value=instance)
    instance.__aexit__ = AsyncMock(return_value=False)
    MockClient.return_value = instance
    return instance


def test_feed_urls_come_from_settings():
    settings = Settings(regional_temperature_url="https://example.test/temp.csv")
    assert Feed.REGIONAL_TEMPERATURE.url(settings) == "https://example.test/temp.csv"
    assert Feed.RAINFALL_NOWCAST.url(settings).endswith("Gridded_rainfall_nowcast.csv")
    assert "warnsum" in Feed.WEATHER_WARNING.url(settings)


@pytest.mark.asyncio
async def test_hko_fetch_returns_body(rainfall_payload):
    with patch("hk_nowcast.feeds.client.HttpClient") as MockClient:
        instance = _mock_client(MockClient, AsyncMock(return_value=rainfall_payload))
        payload = await HkoFetcher(Settings()).fetch(Feed.RAINFALL_NOWCAST)

    assert payload == rainfall_payload
    instance.fetch_bytes.assert_awaited_once_with(Feed.RAINFALL_NOWCAST.url(Settings()))


@pytest.mark.asyncio
async def test_hko_http_error_is_fetch_error():
    request = httpx.Request("GET", "https://data.weather.gov.hk/")
    error = httpx.HTTPStatusError(
        "Service Unavailable", request=request, response=httpx.Response(503, request=request),
    )

    with patch("hk_nowcast.feeds.client.HttpClient") as MockClient:
        _mock_client(MockClient, AsyncMock(side_effect=error))
        with pytest.raises(FeedFetchError, match="503"):
            await HkoFetcher(Settings()).fetch(Feed.WEATHER_WARNING)


@pytest.mark.asyncio
async def test_hko_transport_error_is_network_unavailable():
    request = httpx.Request("GET", "https://data.weather.gov.hk/")
    error = httpx.ConnectError("Name or service not known", request=request)

    with patch("hk_nowcast.feeds.client.HttpClient") as MockClient:
        _mock_client(MockClient, AsyncMock(side_effect=error))
        with pytest.raises(NetworkUnavailableError):
            await HkoFetcher(Settings()).fetch(Feed.REGIONAL_TEMPERATURE)


@pytest.mark.asyncio
async def test_in_memory_fetcher_records_calls(fetcher, warnings_payload):
    assert await fetcher.fetch(Feed.WEATHER_WARNING) == warnings_payload
    await fetcher.fetch(Feed.WEATHER_WARNING)
    assert fetcher.calls == [Feed.WEATHER_WARNING, Feed.WEATHER_WARNING]


@pytest.mark.asyncio
async def test_in_memory_fetcher_missing_feed():
    with pytest.raises(FeedFetchError):
        await InMemoryFetcher().fetch(Feed.RAINFALL_NOWCAST)


@pytest.mark.asyncio
async def test_from_directory(feed_dir, temperature_payload):
    (feed_dir / "warnings.json").unlink()
    fetcher = InMemoryFetcher.from_directory(feed_dir)

    assert await fetcher.fetch(Feed.REGIONAL_TEMPERATURE) == temperature_payload
    with pytest.raises(FeedFetchError):
        await fetcher.fetch(Feed.WEATHER_WARNING)
