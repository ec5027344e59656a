#!/usr/bin/env python
"""Shared fixtures for the funding rate downloader tests."""

import httpx
import pytest

from funding_rate_downloader.core.providers.binance.funding_rate_client import (
    FundingRateClient,
)
from funding_rate_downloader.utils.rate_limiter import RateLimiter


class FakeClock:
    """Manual clock whose sleep() advances time instead of blocking."""

    def __init__(self, start=0.0):
        self.now = start
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def exchange_info_payload():
    """Trimmed dapi exchangeInfo response."""
    return {
        "timezone": "UTC",
        "symbols": [
            {"symbol": "BTCUSD_PERP", "pair": "BTCUSD", "contractType": "PERPETUAL"},
            {"symbol": "ETHUSD_PERP", "pair": "ETHUSD", "contractType": "perpetual"},
            {"symbol": "BTCUSD_230331", "pair": "BTCUSD", "contractType": "CURRENT_QUARTER"},
            {"symbol": "ADAUSD_PERP", "pair": "ADAUSD", "contractType": ""},
        ],
    }


@pytest.fixture
def make_funding_client():
    """Build a FundingRateClient whose HTTP traffic is answered by ``handler``.

    Every request seen by the transport is appended to ``client.requests``.
    """
    clients = []

    def factory(handler, rate_limiter=None, max_workers=4):
        requests = []

        def recording_handler(request):
            requests.append(request)
            return handler(request)

        http_client = httpx.Client(transport=httpx.MockTransport(recording_handler))
        client = FundingRateClient(
            rate_limiter=rate_limiter or RateLimiter(max_requests=1000, window=60.0),
            client=http_client,
            max_workers=max_workers,
        )
        client.requests = requests
        clients.append(http_client)
        return client

    yield factory

    for http_client in clients:
        http_client.close()
