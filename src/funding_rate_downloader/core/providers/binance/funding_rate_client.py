#!/usr/bin/env python

"""Binance futures funding rate REST client.

Talks to two endpoint families:

- ``FUTURES_USDT`` (fapi): one request per day returns every symbol.
- ``FUTURES_COIN`` (dapi): the symbol is mandatory, so every perpetual contract
  listed in exchangeInfo is requested separately on a small thread pool.

Every fundingRate request takes a slot from the shared ``RateLimiter`` first.
Nothing is retried: HTTP errors and undecodable payloads are raised to the caller.
"""

import json
import platform
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

import httpx

from funding_rate_downloader import __version__
from funding_rate_downloader.core.providers.binance.funding_rate_models import (
    ExchangeSymbolInfo,
    FundingRateRecord,
)
from funding_rate_downloader.utils.config import (
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    MAX_CONCURRENT_SYMBOL_REQUESTS,
)
from funding_rate_downloader.utils.for_core.rest_exceptions import (
    HTTPError,
    JSONDecodeError,
    RateLimitError,
)
from funding_rate_downloader.utils.logger_setup import get_logger
from funding_rate_downloader.utils.market_constraints import (
    MarketType,
    get_market_capabilities,
)
from funding_rate_downloader.utils.rate_limiter import RateLimiter
from funding_rate_downloader.utils.time_utils import day_bounds_milliseconds

logger = get_logger(__name__)


def create_http_client(timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS) -> httpx.Client:
    """Create the synchronous httpx client used for every request."""
    return httpx.Client(
        timeout=httpx.Timeout(connect=min(timeout, 10.0), read=timeout, write=timeout, pool=timeout),
        headers={
            "User-Agent": f"FundingRateDownloader/{__version__} Python/{platform.python_version()}",
            "Accept": "application/json",
        },
        follow_redirects=True,
    )


class FundingRateClient:
    """Fetches exchange info and funding rate history from Binance futures APIs."""

    def __init__(
        self,
        rate_limiter: Optional[RateLimiter] = None,
        client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        max_workers: int = MAX_CONCURRENT_SYMBOL_REQUESTS,
    ):
        """Initialize the client.

        Args:
            rate_limiter: Limiter shared by all fundingRate requests
            client: Optional existing httpx.Client; it is not closed by this object
            timeout: Request timeout in seconds for an internally created client
            max_workers: Thread pool size for per-symbol requests
        """
        self.rate_limiter = rate_limiter or RateLimiter()
        self.timeout = timeout
        self.max_workers = max_workers
        self._client = client
        self._client_is_external = client is not None
        self._exchange_info: Optional[List[ExchangeSymbolInfo]] = None

        logger.debug(
            f"Initialized FundingRateClient with max_workers={max_workers}, "
            f"rate limit {self.rate_limiter.max_requests}/{self.rate_limiter.window_seconds}s"
        )

    def __enter__(self):
        self._ensure_client()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _ensure_client(self) -> httpx.Client:
        if self._client is None:
            self._client = create_http_client(self.timeout)
            self._client_is_external = False
            logger.debug("Created new HTTP client")
        return self._client

    def close(self) -> None:
        """Close the HTTP client if it was created here."""
        if self._client is not None and not self._client_is_external:
            self._client.close()
            logger.debug("FundingRateClient closed HTTP client")
            self._client = None

    @property
    def exchange_info(self) -> Optional[List[ExchangeSymbolInfo]]:
        return self._exchange_info

    def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Tuple[Any, str]:
        """GET ``url`` and decode the JSON body.

        Returns:
            The decoded payload and the raw response text

        Raises:
            RateLimitError: On 418/429 responses
            HTTPError: On any other error status
            JSONDecodeError: If the body is not valid JSON
        """
        logger.debug(f"GET {url} params={params}")
        response = self._ensure_client().get(url, params=params)

        if response.status_code >= 400:
            error_cls = RateLimitError if response.status_code in (418, 429) else HTTPError
            logger.error(f"API error {response.status_code} for {url}: {response.text}")
            raise error_cls(
                f"API error {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            return json.loads(response.text), response.text
        except ValueError as e:
            logger.error(f"deserialization failed {response.text}")
            raise JSONDecodeError(f"Invalid JSON response from {url}: {e}", body=response.text) from e

    def fetch_exchange_info(self) -> List[ExchangeSymbolInfo]:
        """Fetch the coin-margined symbol list once and cache it.

        Only the coin-margined endpoint needs it: its fundingRate endpoint
        must be queried symbol by symbol.
        """
        url = get_market_capabilities(MarketType.FUTURES_COIN).exchange_info_url
        payload, body = self._get_json(url)

        try:
            symbols = [ExchangeSymbolInfo.from_api(item) for item in payload["symbols"]]
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"deserialization failed {body}")
            raise JSONDecodeError(f"Unexpected exchangeInfo format: {e}", body=body) from e

        self._exchange_info = symbols
        logger.info(
            f"Loaded {len(symbols)} symbols from exchangeInfo "
            f"({sum(1 for s in symbols if s.is_perpetual)} perpetual)"
        )
        return symbols

    def fetch_funding_rates(
        self,
        base_url: str,
        start_ms: int,
        end_ms: int,
        symbol: Optional[str] = None,
    ) -> List[FundingRateRecord]:
        """Fetch funding rates between ``start_ms`` and ``end_ms``.

        Args:
            base_url: API base URL including version, e.g. https://fapi.binance.com/fapi/v1
            start_ms: startTime in Unix milliseconds
            end_ms: endTime in Unix milliseconds
            symbol: Optional symbol filter

        Returns:
            Decoded funding rate records
        """
        params: Dict[str, Any] = {"startTime": start_ms, "endTime": end_ms}
        if symbol is not None:
            params["symbol"] = symbol

        self.rate_limiter.acquire()
        payload, body = self._get_json(f"{base_url}/fundingRate", params=params)

        try:
            return [FundingRateRecord.from_api(item) for item in payload]
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"deserialization failed {body}")
            raise JSONDecodeError(f"Unexpected fundingRate format: {e}", body=body) from e

    def get_data(self, market_type: MarketType, day: date) -> List[FundingRateRecord]:
        """Fetch every funding rate of ``market_type`` published on ``day`` (UTC).

        Args:
            market_type: Endpoint family to query
            day: Processing date

        Returns:
            Flattened records of all requested symbols
        """
        capabilities = get_market_capabilities(market_type)
        start_ms, end_ms = day_bounds_milliseconds(day)

        if not capabilities.per_symbol_requests:
            # symbol not mandatory
            return self.fetch_funding_rates(capabilities.api_base_url, start_ms, end_ms)

        if capabilities.first_funding_date is not None and day < capabilities.first_funding_date:
            logger.debug(f"No {market_type.name} funding history before {capabilities.first_funding_date}")
            return []

        if self._exchange_info is None:
            self.fetch_exchange_info()

        symbols = [s.name for s in self._exchange_info if s.is_perpetual]
        if not symbols:
            return []

        result: List[FundingRateRecord] = []
        with ThreadPoolExecutor(max_workers=min(len(symbols), self.max_workers)) as executor:
            futures = {
                executor.submit(
                    self.fetch_funding_rates,
                    capabilities.api_base_url,
                    start_ms,
                    end_ms,
                    symbol,
                ): symbol
                for symbol in symbols
            }

            for future in as_completed(futures):
                result.extend(future.result())

        logger.debug(f"Retrieved {len(result)} {market_type.name} records for {day} from {len(symbols)} symbols")
        return result
