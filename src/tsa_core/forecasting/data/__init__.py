"""Data loading and preparation utilities."""

from tsa_core.forecasting.data.loaders import load_stock_series, load_wait_time_series
from tsa_core.forecasting.data.preparation import fill_gaps, regularize, split_window

__all__ = [
    "fill_gaps",
    "load_stock_series",
    "load_wait_time_series",
    "regularize",
    "split_window",
]
