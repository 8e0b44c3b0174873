"""Filesystem configuration for TSA Core.

This module provides the single configuration class used by the loaders
and the command-line pipeline to locate input data.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class DataPaths:
    """All filesystem paths used to load time series.

    Attributes:
        data_root: Root directory holding the input CSV files.
        stocks_file: File name of the daily stock prices CSV.
        wait_time_pattern: Glob pattern of the hourly wait-time CSV files.

    Directory Structure:
        data_root/
        ├── big_five_stocks.csv        # Date,Name,Open,Close,High,Low,Volume
        └── Wait_Time_Sample_*.csv     # Date,QueryWaitTime (one file per series)
    """

    data_root: Path
    stocks_file: str = "big_five_stocks.csv"
    wait_time_pattern: str = "Wait_Time_Sample_*.csv"

    @classmethod
    def from_root(cls, data_root: str | Path) -> DataPaths:
        """Create DataPaths from a root directory.

        Args:
            data_root: Directory containing the input CSV files.

        Returns:
            DataPaths instance.

        Examples:
            >>> paths = DataPaths.from_root("data")
            >>> paths.stocks_csv
            PosixPath('data/big_five_stocks.csv')
        """
        if isinstance(data_root, str):
            data_root = Path(data_root)

        return cls(data_root=data_root)

    @property
    def stocks_csv(self) -> Path:
        """Daily stock prices for several tickers in one file."""
        return self.data_root / self.stocks_file

    @property
    def wait_time_dir(self) -> Path:
        """Directory scanned for wait-time sample files."""
        return self.data_root
