#!/usr/bin/env python
"""Incremental Binance funding rate downloader.

For each endpoint family the downloader walks the processing dates, collects
the fetched rates per symbol and, once every date is done, merges each symbol
into its history file.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from funding_rate_downloader.core.history_merger import HistoryMerger, SymbolHistory
from funding_rate_downloader.core.providers.binance.funding_rate_client import (
    FundingRateClient,
)
from funding_rate_downloader.utils.config import (
    DEFAULT_DATA_FOLDER,
    FUNDING_HISTORY_START_DATE,
    MAX_CONCURRENT_SYMBOL_REQUESTS,
    OUTPUT_PATH_PARTS,
)
from funding_rate_downloader.utils.logger_setup import get_logger
from funding_rate_downloader.utils.market_constraints import MarketType
from funding_rate_downloader.utils.rate_limiter import RateLimiter
from funding_rate_downloader.utils.time_utils import each_day, utc_today

logger = get_logger(__name__)

# Coin-margined first, as its exchangeInfo is loaded at startup
MARKET_TYPES: Sequence[MarketType] = (MarketType.FUTURES_COIN, MarketType.FUTURES_USDT)


class FundingRateDownloader:
    """Downloads funding rates and merges them into per-symbol CSV history."""

    def __init__(
        self,
        destination_folder: Union[str, Path],
        deployment_date: Optional[date] = None,
        existing_data_folder: Union[str, Path, None] = None,
        client: Optional[FundingRateClient] = None,
        max_workers: int = MAX_CONCURRENT_SYMBOL_REQUESTS,
    ):
        """Initialize the downloader and load exchange info.

        Args:
            destination_folder: Root folder the data is written under
            deployment_date: Only process this date; all history when None
            existing_data_folder: Root folder of previously saved data
            client: Optional preconfigured FundingRateClient
            max_workers: Thread pool size for per-symbol requests
        """
        if isinstance(deployment_date, datetime):
            deployment_date = deployment_date.date()
        self.deployment_date = deployment_date
        self.destination_folder = Path(destination_folder).joinpath(*OUTPUT_PATH_PARTS)
        self.existing_data_folder = Path(existing_data_folder or DEFAULT_DATA_FOLDER).joinpath(*OUTPUT_PATH_PARTS)

        self._client = client or FundingRateClient(rate_limiter=RateLimiter(), max_workers=max_workers)
        self._merger = HistoryMerger(self.destination_folder, self.existing_data_folder)

        self.destination_folder.mkdir(parents=True, exist_ok=True)

        try:
            self._client.fetch_exchange_info()
        except BaseException:
            self.close()
            raise

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        """Release the HTTP client and the rate limiter."""
        self._client.close()
        self._client.rate_limiter.close()

    def get_processing_dates(self, today: Optional[date] = None) -> List[date]:
        """Dates to download, ascending.

        Args:
            today: Current UTC date; only used without a deployment date

        Returns:
            The deployment date alone, or every day from the first funding
            history date up to yesterday
        """
        if self.deployment_date is not None:
            return [self.deployment_date]

        # everything
        today = today or utc_today()
        return list(each_day(FUNDING_HISTORY_START_DATE, today - timedelta(days=1)))

    def _collect_rates(self, market_type: MarketType, dates: Sequence[date]) -> Dict[str, SymbolHistory]:
        rate_per_symbol: Dict[str, Dict[datetime, Decimal]] = {}
        for day in dates:
            records = self._client.get_data(market_type, day)
            logger.debug(f"{market_type.name} {day}: {len(records)} records")

            for record in records:
                rate_per_symbol.setdefault(record.symbol, {})[record.funding_time] = record.funding_rate

        return rate_per_symbol

    def run(self) -> bool:
        """Run the download for every endpoint family.

        Returns:
            True once every symbol has been saved. Failures raise.
        """
        dates = self.get_processing_dates()
        logger.info(f"Processing {len(dates)} dates from {dates[0]} to {dates[-1]}" if dates else "No dates to process")

        for market_type in MARKET_TYPES:
            rate_per_symbol = self._collect_rates(market_type, dates)
            logger.info(f"{market_type.name}: fetched rates for {len(rate_per_symbol)} symbols")

            for symbol, rates in rate_per_symbol.items():
                self._merger.merge_and_save(symbol, rates)

        return True
