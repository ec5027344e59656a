#!/usr/bin/env python

from dataclasses import dataclass
from datetime import date
from enum import Enum, auto
from typing import Dict, Optional

from funding_rate_downloader.utils.config import (
    BINANCE_FUTURES_COIN_API_ENDPOINT,
    BINANCE_FUTURES_USDT_API_ENDPOINT,
    COIN_FUTURES_FUNDING_START_DATE,
)


class MarketType(Enum):
    FUTURES_USDT = auto()  # USDT-margined futures (UM), the "linear" family
    FUTURES_COIN = auto()  # Coin-margined futures (CM), the "inverse" family


@dataclass(frozen=True)
class MarketCapabilities:
    """Encapsulates the funding rate endpoint constraints of a market type."""

    api_base_url: str  # Base URL including the API version
    per_symbol_requests: bool  # True when fundingRate must be queried symbol by symbol
    first_funding_date: Optional[date]  # No funding history exists before this date

    @property
    def exchange_info_url(self) -> str:
        return f"{self.api_base_url}/exchangeInfo"


MARKET_CAPABILITIES: Dict[MarketType, MarketCapabilities] = {
    # fundingRate returns every symbol when the symbol parameter is omitted
    MarketType.FUTURES_USDT: MarketCapabilities(
        api_base_url=BINANCE_FUTURES_USDT_API_ENDPOINT,
        per_symbol_requests=False,
        first_funding_date=None,
    ),
    # fundingRate requires a symbol; perpetuals from exchangeInfo are queried one by one
    MarketType.FUTURES_COIN: MarketCapabilities(
        api_base_url=BINANCE_FUTURES_COIN_API_ENDPOINT,
        per_symbol_requests=True,
        first_funding_date=COIN_FUTURES_FUNDING_START_DATE,
    ),
}


def get_market_capabilities(market_type: MarketType) -> MarketCapabilities:
    """Get the capabilities for a specific market type."""
    return MARKET_CAPABILITIES[market_type]
