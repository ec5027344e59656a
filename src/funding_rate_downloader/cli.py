#!/usr/bin/env python3
"""
Command line entry point for the Binance funding rate downloader.

Usage:
    funding-rate-downloader --destination ./output
    funding-rate-downloader --destination ./output --date 2024-03-30
"""

from datetime import date, datetime
from pathlib import Path
from typing import Optional

import typer

from funding_rate_downloader import __version__
from funding_rate_downloader.core.funding_rate_downloader import FundingRateDownloader
from funding_rate_downloader.utils.config import (
    DEFAULT_DATA_FOLDER,
    DEFAULT_DESTINATION_FOLDER,
    MAX_CONCURRENT_SYMBOL_REQUESTS,
)
from funding_rate_downloader.utils.logger_setup import logger

app = typer.Typer(help="Download Binance futures funding rate history into per-symbol CSV files")

DATE_FORMATS = ("%Y-%m-%d", "%Y%m%d")


def parse_date(value: Optional[str]) -> Optional[date]:
    """Parse ``YYYY-MM-DD`` or ``YYYYMMDD``."""
    if value is None:
        return None
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise typer.BadParameter(f"Invalid date {value!r}, expected YYYY-MM-DD or YYYYMMDD")


def version_callback(value: bool):
    if value:
        print(f"Funding Rate Downloader v{__version__}")
        raise typer.Exit()


@app.command()
def download(
    destination: Path = typer.Option(
        Path(DEFAULT_DESTINATION_FOLDER),
        "--destination",
        "-d",
        help="Root folder the merged files are written under",
    ),
    run_date: Optional[str] = typer.Option(
        None,
        "--date",
        help="Only download this date (YYYY-MM-DD or YYYYMMDD); full history when omitted",
    ),
    existing_data: Path = typer.Option(
        Path(DEFAULT_DATA_FOLDER),
        "--existing-data",
        "-e",
        help="Root folder holding previously downloaded data",
    ),
    max_workers: int = typer.Option(
        MAX_CONCURRENT_SYMBOL_REQUESTS,
        "--max-workers",
        min=1,
        help="Parallel requests for coin-margined symbols",
    ),
    log_level: str = typer.Option("INFO", "--log-level", "-l", help="DEBUG, INFO, WARNING or ERROR"),
    rich: bool = typer.Option(False, "--rich", help="Use Rich log formatting"),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version information and exit",
    ),
):
    """
    Download funding rates and merge them into the existing history.

    Exits with status 1 if any request, decode or file operation fails.
    """
    deployment_date = parse_date(run_date)

    logger.setLevel(log_level)
    if rich:
        logger.use_rich(True, level=log_level)

    logger.info(f"Funding rate download started (date: {deployment_date or 'full history'})")
    try:
        with FundingRateDownloader(
            destination,
            deployment_date=deployment_date,
            existing_data_folder=existing_data,
            max_workers=max_workers,
        ) as downloader:
            success = downloader.run()
    except Exception:
        logger.exception("Funding rate download failed")
        raise typer.Exit(code=1)

    if not success:
        raise typer.Exit(code=1)
    logger.info("Funding rate download complete")


def main():
    app()


if __name__ == "__main__":
    main()
