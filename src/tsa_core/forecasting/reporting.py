"""Tables consumed by the charting layer.

Charts are drawn elsewhere; this module flattens analyses into the long
DataFrames a plotting library needs: one line-chart trace per window or
forecast, and per-group RMSE distributions binned per algorithm.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np
import pandas as pd

from tsa_core.forecasting.types import Observation, TimeSeriesAnalysis

HISTOGRAM_BINS = 10

TRACE_COLUMNS = ["series", "trace", "timestamp", "value"]
RMSE_COLUMNS = ["group", "series", "algorithm", "rmse"]
HISTOGRAM_COLUMNS = ["group", "algorithm", "bin_start", "bin_end", "count"]


def _trace_rows(series_name: str, trace: str, observations: Sequence[Observation]) -> list[dict]:
    return [
        {"series": series_name, "trace": trace, "timestamp": o.timestamp, "value": o.value}
        for o in observations
    ]


def build_trace_frame(analysis: TimeSeriesAnalysis) -> pd.DataFrame:
    """Line-chart traces for one analysis.

    Returns:
        DataFrame with columns: series, trace, timestamp, value. Traces are
        "Historical", "Actual" and "<algorithm> Forecast" per forecast.
    """
    name = analysis.series.name
    rows = _trace_rows(name, "Historical", analysis.historical)
    rows += _trace_rows(name, "Actual", analysis.actual)
    for details in analysis.forecasts:
        rows += _trace_rows(name, f"{details.algorithm_name} Forecast", details.forecast)

    return pd.DataFrame(rows, columns=TRACE_COLUMNS)


def build_rmse_frame(analyses: Iterable[TimeSeriesAnalysis]) -> pd.DataFrame:
    """One row per (series, algorithm) with the forecast RMSE.

    Returns:
        DataFrame with columns: group, series, algorithm, rmse
    """
    rows = [
        {
            "group": analysis.series.group,
            "series": analysis.series.name,
            "algorithm": details.algorithm_name,
            "rmse": details.metrics.rmse,
        }
        for analysis in analyses
        for details in analysis.forecasts
    ]
    return pd.DataFrame(rows, columns=RMSE_COLUMNS)


def rmse_bin_size(max_rmse: float) -> int:
    """Histogram bin width: a tenth of max RMSE rounded down to a multiple of 10.

    Small error ranges fall back to a width of 1.

    Examples:
        >>> rmse_bin_size(250.0)
        20
        >>> rmse_bin_size(3.5)
        1
    """
    return max(1, int((max_rmse + 1) / 100) * 10)


def build_rmse_histograms(analyses: Iterable[TimeSeriesAnalysis]) -> pd.DataFrame:
    """Bin the RMSE values of each group per algorithm.

    Each group gets HISTOGRAM_BINS bins of equal width starting at 0, with the
    width from rmse_bin_size() of the group's largest RMSE. Values past the
    last edge are counted in the last bin. NaN and infinite RMSE values are
    left out.

    Returns:
        DataFrame with columns: group, algorithm, bin_start, bin_end, count
    """
    rmse_df = build_rmse_frame(analyses)
    rmse_df = rmse_df[np.isfinite(rmse_df["rmse"].to_numpy(dtype=float))]
    if rmse_df.empty:
        return pd.DataFrame(columns=HISTOGRAM_COLUMNS)

    rows = []
    for group, group_df in rmse_df.groupby("group", sort=True):
        bin_size = rmse_bin_size(float(group_df["rmse"].max()))
        edges = np.arange(HISTOGRAM_BINS + 1) * bin_size

        for algorithm, algorithm_df in group_df.groupby("algorithm", sort=True):
            values = np.clip(algorithm_df["rmse"].to_numpy(dtype=float), 0, edges[-1])
            counts, _ = np.histogram(values, bins=edges)
            for start, end, count in zip(edges[:-1], edges[1:], counts):
                rows.append(
                    {
                        "group": group,
                        "algorithm": algorithm,
                        "bin_start": float(start),
                        "bin_end": float(end),
                        "count": int(count),
                    }
                )

    return pd.DataFrame(rows, columns=HISTOGRAM_COLUMNS)
