"""TSA Core - gap filling, forecasting and forecast scoring for time series.

This package regularizes irregularly-sampled named time series onto a fixed
grid, holds out the last `horizon` points, forecasts them with one or more
interchangeable models, and scores each forecast against the real outcome.

Module Structure:
    tsa_core.forecasting: Analysis pipeline (gap filling, models, scoring)
    tsa_core.forecasting.data: Gap filling and CSV loaders
    tsa_core.forecasting.models: Linear trend and SSA forecasters
    tsa_core.forecasting.reporting: Tables for charts and RMSE histograms
    tsa_core.config: DataPaths configuration

Quick Start:
    >>> from tsa_core import DataPaths
    >>> from tsa_core.forecasting import AnalysisConfig, run_analysis
    >>> from tsa_core.forecasting.data.loaders import load_stock_series
    >>>
    >>> paths = DataPaths.from_root("data")
    >>> series_list = load_stock_series(paths.stocks_csv)
    >>> report = run_analysis(series_list, AnalysisConfig(horizon=100))
    >>> for analysis in report.analyses:
    ...     for details in analysis.forecasts:
    ...         print(analysis.series.name, details.algorithm_name, details.metrics.rmse)
"""

__version__ = "0.1.0"

from tsa_core.config import DataPaths
from tsa_core.exceptions import (
    AlgorithmFailure,
    AnalysisError,
    ConfigError,
    DataQualityError,
    EmptyInputError,
    ForecastTimeoutError,
    InsufficientDataError,
    LengthMismatchError,
    NumericDegeneracyError,
    TsaCoreError,
)

__all__ = [
    "AlgorithmFailure",
    "AnalysisError",
    "ConfigError",
    "DataPaths",
    "DataQualityError",
    "EmptyInputError",
    "ForecastTimeoutError",
    "InsufficientDataError",
    "LengthMismatchError",
    "NumericDegeneracyError",
    "TsaCoreError",
    "__version__",
]
