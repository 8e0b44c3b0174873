"""Data loading utilities for the analysis pipeline."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from tsa_core.exceptions import DataQualityError
from tsa_core.forecasting.config import (
    DEFAULT_STOCK_INTERVAL,
    DEFAULT_WAIT_TIME_INTERVAL,
    STOCKS_GROUP,
    WAIT_TIMES_GROUP,
)
from tsa_core.forecasting.types import TimeSeries

logger = logging.getLogger(__name__)

WAIT_TIME_COLUMNS = ["Date", "QueryWaitTime"]


def _read_csv(csv_path: Path, required_columns: list[str]) -> pd.DataFrame:
    if not csv_path.exists():
        raise FileNotFoundError(f"Data file not found at {csv_path}")

    df = pd.read_csv(csv_path)
    missing_columns = [col for col in required_columns if col not in df.columns]
    if missing_columns:
        raise DataQualityError(
            f"Missing required columns in {csv_path.name}: {missing_columns}. "
            f"Required: {required_columns}"
        )

    df["Date"] = pd.to_datetime(df["Date"])
    return df


def load_stock_series(
    csv_path: Path | str,
    value_column: str = "Close",
    interval: pd.Timedelta = DEFAULT_STOCK_INTERVAL,
    group: str = STOCKS_GROUP,
) -> list[TimeSeries]:
    """Load daily stock prices, one TimeSeries per stock name.

    Args:
        csv_path: CSV with columns Date, Name, Open, Close, High, Low, Volume
        value_column: Price column used as the observation value (default: Close)
        interval: Nominal sampling interval (default: one day)
        group: Group label assigned to every series

    Returns:
        List of TimeSeries sorted by stock name, observations sorted by date

    Raises:
        FileNotFoundError: If the CSV file does not exist
        DataQualityError: If required columns are missing
    """
    csv_path = Path(csv_path)
    logger.info(f"Loading stocks from '{csv_path}'...")
    df = _read_csv(csv_path, ["Date", "Name", value_column])

    series_list = []
    for name, stock_df in df.groupby("Name", sort=True):
        values = stock_df.set_index("Date")[value_column].astype(float)
        if values.dropna().empty:
            logger.warning(f"Stock '{name}' has no values in column '{value_column}', skipping")
            continue
        series_list.append(TimeSeries.from_series(str(name), group, interval, values))

    logger.info(f"Loaded {len(series_list)} stock series")
    return series_list


def load_wait_time_series(
    data_dir: Path | str,
    pattern: str = "Wait_Time_Sample_*.csv",
    interval: pd.Timedelta = DEFAULT_WAIT_TIME_INTERVAL,
    group: str = WAIT_TIMES_GROUP,
) -> list[TimeSeries]:
    """Load database wait-time samples, one TimeSeries per matching file.

    Args:
        data_dir: Directory scanned for files matching `pattern`
        pattern: Glob pattern of the wait-time CSV files
        interval: Nominal sampling interval (default: one hour)
        group: Group label assigned to every series

    Returns:
        List of TimeSeries named after their file, in file name order

    Raises:
        FileNotFoundError: If data_dir does not exist
        DataQualityError: If a file is missing required columns or has no rows
    """
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        raise FileNotFoundError(f"Data directory not found at {data_dir}")

    series_list = []
    for csv_path in sorted(data_dir.glob(pattern)):
        logger.info(f"Loading database wait times from '{csv_path}'...")
        df = _read_csv(csv_path, WAIT_TIME_COLUMNS)
        values = df.set_index("Date")["QueryWaitTime"].astype(float)
        if values.dropna().empty:
            raise DataQualityError(f"No wait-time rows in {csv_path.name}")
        series_list.append(TimeSeries.from_series(csv_path.name, group, interval, values))

    logger.info(f"Loaded {len(series_list)} wait-time series")
    return series_list
