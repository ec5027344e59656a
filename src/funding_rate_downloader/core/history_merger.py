#!/usr/bin/env python
"""Per-symbol funding rate history files.

Each symbol is stored in ``<symbol>.csv`` with one ``yyyyMMdd HH:mm:ss,<rate>``
line per funding event, ascending, without a header. Rates are written as
plain fixed-point decimals.
"""

import os
import stat
import tempfile
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Mapping, Union

from funding_rate_downloader.core.providers.binance.funding_rate_models import to_decimal
from funding_rate_downloader.utils.config import (
    HISTORY_FILE_EXTENSION,
    HISTORY_TIMESTAMP_FORMAT,
    PERPETUAL_SYMBOL_SUFFIX,
)
from funding_rate_downloader.utils.logger_setup import get_logger

logger = get_logger(__name__)

SymbolHistory = Dict[datetime, Decimal]


class HistoryParseError(ValueError):
    """A stored history line has an unparsable timestamp or rate."""


def symbol_file_name(symbol: str) -> str:
    """File name for ``symbol``: ``_PERP`` suffix removed, lower case."""
    if symbol.endswith(PERPETUAL_SYMBOL_SUFFIX):
        symbol = symbol[: -len(PERPETUAL_SYMBOL_SUFFIX)]
    return f"{symbol.lower()}{HISTORY_FILE_EXTENSION}"


def format_rate(rate: Decimal) -> str:
    return format(rate, "f")


def read_history(path: Union[str, Path]) -> SymbolHistory:
    """Parse a history file.

    Empty lines and lines without a comma are skipped.

    Raises:
        HistoryParseError: If a line has an invalid timestamp or rate
    """
    path = Path(path)
    history: SymbolHistory = {}

    with open(path, "r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue

            parts = line.split(",")
            if len(parts) == 1:
                logger.debug(f"Skipping line {line_number} of {path}: {line!r}")
                continue

            try:
                time = datetime.strptime(parts[0].strip(), HISTORY_TIMESTAMP_FORMAT)
                rate = to_decimal(parts[1])
            except ValueError as e:
                raise HistoryParseError(f"{path}:{line_number}: cannot parse {line!r}") from e

            history[time] = rate

    return history


def merge_histories(existing: Mapping[datetime, Decimal], new_rates: Mapping[datetime, Decimal]) -> SymbolHistory:
    """Combine stored and freshly fetched rates; fetched rates win on equal timestamps."""
    merged: SymbolHistory = dict(new_rates)
    for time, rate in existing.items():
        if time not in merged:
            # use existing unless we have a new value
            merged[time] = rate
    return merged


def format_history(history: Mapping[datetime, Decimal]) -> List[str]:
    """Render ``history`` as ascending ``timestamp,rate`` lines."""
    return [
        f"{time.strftime(HISTORY_TIMESTAMP_FORMAT)},{format_rate(rate)}"
        for time, rate in sorted(history.items())
    ]


def _target_mode(path: Path) -> int:
    """Permission bits for a file written to ``path``: the current file's, else ``0o666`` minus the umask."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_atomically(path: Union[str, Path], lines: List[str]) -> None:
    """Write ``lines`` to a temporary file beside ``path`` and rename it over ``path``.

    Readers only ever see the previous file or the complete new one. The
    result keeps the permissions of the file it replaces, or gets the
    umask default for a new file.
    """
    path = Path(path)
    mode = _target_mode(path)
    fd, temp_path = tempfile.mkstemp(suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            for line in lines:
                f.write(line)
                f.write("\n")
        # mkstemp creates the file owner-only
        os.chmod(temp_path, mode)
        os.replace(temp_path, path)
    except BaseException:
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise


class HistoryMerger:
    """Merges fetched funding rates into the stored per-symbol history files."""

    def __init__(self, destination_folder: Union[str, Path], existing_data_folder: Union[str, Path]):
        """Initialize the merger.

        Args:
            destination_folder: Folder the merged files are written to
            existing_data_folder: Folder holding the previously saved files
        """
        self.destination_folder = Path(destination_folder)
        self.existing_data_folder = Path(existing_data_folder)

    def merge_and_save(self, symbol: str, new_rates: Mapping[datetime, Decimal]) -> Path:
        """Merge ``new_rates`` with the stored history of ``symbol`` and save it.

        Args:
            symbol: Exchange symbol, e.g. BTCUSDT or BTCUSD_PERP
            new_rates: Freshly fetched rates keyed by second-resolution UTC time

        Returns:
            Path of the written file
        """
        name = symbol_file_name(symbol)
        final_path = self.destination_folder / name
        existing_path = self.existing_data_folder / name

        existing: SymbolHistory = {}
        if existing_path.exists():
            existing = read_history(existing_path)

        merged = merge_histories(existing, new_rates)
        write_atomically(final_path, format_history(merged))

        logger.info(
            f"Saved {len(merged)} rates for {symbol} to {final_path} "
            f"({len(new_rates)} fetched, {len(existing)} previously stored)"
        )
        return final_path
