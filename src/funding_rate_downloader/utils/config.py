#!/usr/bin/env python
"""Centralized configuration for the funding rate downloader.

This module centralizes endpoints, policy dates, rate limits and file layout
constants, creating a single source of truth for system-wide settings.
"""

import os
from datetime import date, timedelta
from typing import Final, Tuple

# Time-related constants
HISTORY_TIMESTAMP_FORMAT: Final = "%Y%m%d %H:%M:%S"

# Binance futures REST endpoints
BINANCE_FUTURES_USDT_API_ENDPOINT: Final = "https://fapi.binance.com/fapi/v1"
BINANCE_FUTURES_COIN_API_ENDPOINT: Final = "https://dapi.binance.com/dapi/v1"

# Policy dates
FUNDING_HISTORY_START_DATE: Final = date(2019, 9, 13)
COIN_FUTURES_FUNDING_START_DATE: Final = date(2020, 10, 1)  # Nothing on dapi before this

# API constraints
RATE_LIMIT_MAX_REQUESTS: Final = 25
RATE_LIMIT_WINDOW: Final = timedelta(seconds=1)
MAX_CONCURRENT_SYMBOL_REQUESTS: Final = 10
DEFAULT_HTTP_TIMEOUT_SECONDS: Final = 30.0
PERPETUAL_CONTRACT_TYPE: Final = "PERPETUAL"
PERPETUAL_SYMBOL_SUFFIX: Final = "_PERP"

# File layout
OUTPUT_PATH_PARTS: Final[Tuple[str, ...]] = (
    "cryptofuture",
    "binance",
    "margin_interest",
)
HISTORY_FILE_EXTENSION: Final = ".csv"
DEFAULT_DESTINATION_FOLDER: Final = "./output"
DEFAULT_DATA_FOLDER: Final = os.environ.get("DATA_FOLDER", "./Data")
