"""Binance futures funding rate provider."""

from funding_rate_downloader.core.providers.binance.funding_rate_client import (
    FundingRateClient,
)
from funding_rate_downloader.core.providers.binance.funding_rate_models import (
    ExchangeSymbolInfo,
    FundingRateRecord,
)

__all__ = ["ExchangeSymbolInfo", "FundingRateClient", "FundingRateRecord"]
