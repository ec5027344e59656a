#!/usr/bin/env python
"""Records decoded from the Binance futures REST API."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict

from funding_rate_downloader.utils.config import PERPETUAL_CONTRACT_TYPE
from funding_rate_downloader.utils.time_utils import milliseconds_to_second


def to_decimal(value: Any) -> Decimal:
    """Convert an API number (usually sent as a string) to Decimal without float rounding.

    Only finite plain decimals are accepted: ``NaN``, ``Infinity`` and
    underscore digit grouping are rejected.
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Invalid decimal value: {value!r}")
    text = str(value).strip()
    if "_" in text:
        raise ValueError(f"Invalid decimal value: {value!r}")
    try:
        result = Decimal(text)
    except InvalidOperation as e:
        raise ValueError(f"Invalid decimal value: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Invalid decimal value: {value!r}")
    return result


@dataclass(frozen=True)
class FundingRateRecord:
    symbol: str
    funding_time_ms: int  # Unix timestamp in milliseconds
    funding_rate: Decimal

    @property
    def funding_time(self) -> datetime:
        """Funding time as a naive UTC datetime truncated to whole seconds."""
        return milliseconds_to_second(self.funding_time_ms)

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "FundingRateRecord":
        """Build a record from one element of a fundingRate response.

        Raises:
            KeyError: If a required field is missing
            ValueError: If a field cannot be converted
        """
        return cls(
            symbol=str(item["symbol"]),
            funding_time_ms=int(item["fundingTime"]),
            funding_rate=to_decimal(item["fundingRate"]),
        )


@dataclass(frozen=True)
class ExchangeSymbolInfo:
    name: str
    contract_type: str

    @property
    def is_perpetual(self) -> bool:
        return self.contract_type.upper() == PERPETUAL_CONTRACT_TYPE

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "ExchangeSymbolInfo":
        return cls(
            name=str(item["symbol"]),
            contract_type=str(item.get("contractType") or ""),
        )
