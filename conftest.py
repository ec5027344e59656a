#!/usr/bin/env python
"""Pytest configuration for the funding rate downloader tests."""

import os

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "network: test talks to the live Binance API (set RUN_NETWORK_TESTS=1 to run)",
    )


def pytest_collection_modifyitems(items):
    """Skip live API tests unless explicitly enabled."""
    if os.environ.get("RUN_NETWORK_TESTS", "").lower() in ("1", "true", "yes"):
        return
    skip_network = pytest.mark.skip(reason="set RUN_NETWORK_TESTS=1 to run live API tests")
    for item in items:
        if item.get_closest_marker("network"):
            item.add_marker(skip_network)
