"""Time series forecasting module.

This module gap-fills series onto their nominal interval, holds out the last
`horizon` points, forecasts them with each configured model and scores the
forecasts.

Example:
    >>> import pandas as pd
    >>> from tsa_core.forecasting import AnalysisConfig, TimeSeries, run_analysis
    >>>
    >>> values = pd.Series(
    ...     range(200), index=pd.date_range("2024-01-01", periods=200, freq="D"), dtype=float
    ... )
    >>> series = TimeSeries.from_series("demo", "Examples", "1D", values)
    >>>
    >>> # Run analysis
    >>> report = run_analysis([series], AnalysisConfig(horizon=30))
    >>>
    >>> # Access results
    >>> analysis = report.analyses[0]
    >>> [d.algorithm_name for d in analysis.forecasts]
    ['Linear Regression', 'SSA']
"""

from tsa_core.forecasting.api import AnalysisConfig, AnalysisReport, analyze_series, run_analysis
from tsa_core.forecasting.types import (
    AnalysisFailure,
    ForecastDetails,
    Observation,
    RegressionMetrics,
    TimeSeries,
    TimeSeriesAnalysis,
)

__all__ = [
    "AnalysisConfig",
    "AnalysisFailure",
    "AnalysisReport",
    "ForecastDetails",
    "Observation",
    "RegressionMetrics",
    "TimeSeries",
    "TimeSeriesAnalysis",
    "analyze_series",
    "run_analysis",
]
