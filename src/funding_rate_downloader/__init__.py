"""Funding Rate Downloader - Binance futures funding rate history.

This package downloads funding rate history from the Binance USDT-margined and
coin-margined futures REST APIs and merges it into per-symbol CSV files.

Example:
    >>> from funding_rate_downloader import FundingRateDownloader
    >>> with FundingRateDownloader("./output") as downloader:
    ...     downloader.run()
"""

__version__ = "1.0.0"


# Lazy imports keep `import funding_rate_downloader` free of httpx and logging setup
def __getattr__(name):
    """Lazy import for main package exports."""
    if name == "FundingRateDownloader":
        from .core.funding_rate_downloader import FundingRateDownloader
        return FundingRateDownloader
    elif name == "FundingRateClient":
        from .core.providers.binance.funding_rate_client import FundingRateClient
        return FundingRateClient
    elif name == "HistoryMerger":
        from .core.history_merger import HistoryMerger
        return HistoryMerger
    elif name == "RateLimiter":
        from .utils.rate_limiter import RateLimiter
        return RateLimiter
    elif name == "MarketType":
        from .utils.market_constraints import MarketType
        return MarketType
    else:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


__all__ = [
    "FundingRateClient",
    "FundingRateDownloader",
    "HistoryMerger",
    "MarketType",
    "RateLimiter",
]
