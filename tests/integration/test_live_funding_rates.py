#!/usr/bin/env python
"""Live checks against the Binance futures API.

Skipped unless RUN_NETWORK_TESTS=1.
"""

from datetime import date

import pytest

from funding_rate_downloader.core.funding_rate_downloader import FundingRateDownloader
from funding_rate_downloader.core.providers.binance.funding_rate_client import (
    FundingRateClient,
)
from funding_rate_downloader.utils.market_constraints import MarketType

TEST_DATE = date(2024, 3, 30)


@pytest.mark.network
def test_live_usdt_futures_day():
    with FundingRateClient() as client:
        records = client.get_data(MarketType.FUTURES_USDT, TEST_DATE)

    assert records
    assert any(r.symbol == "BTCUSDT" for r in records)
    assert all(r.funding_time.date() == TEST_DATE for r in records)


@pytest.mark.network
def test_live_download_single_date(tmp_path):
    with FundingRateDownloader(
        tmp_path / "out", deployment_date=TEST_DATE, existing_data_folder=tmp_path / "data"
    ) as downloader:
        assert downloader.run() is True

    folder = downloader.destination_folder
    assert (folder / "btcusdt.csv").exists()
    assert (folder / "btcusd.csv").exists()
    assert (folder / "btcusdt.csv").read_text().startswith("20240330 00:00:00,")
