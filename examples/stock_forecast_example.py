"""Example: Forecast accuracy of the linear and SSA models on stock prices

This example loads daily closing prices, holds out the last 100 trading
days of each stock, forecasts them with both models and compares the error.

Prerequisites:
- data/big_five_stocks.csv with columns Date,Name,Open,Close,High,Low,Volume
"""

import logging
from pathlib import Path

from tsa_core import DataPaths
from tsa_core.forecasting import AnalysisConfig, run_analysis
from tsa_core.forecasting.data.loaders import load_stock_series
from tsa_core.forecasting.models import LinearTrendForecaster, SeasonalForecaster
from tsa_core.forecasting.reporting import build_rmse_frame, build_trace_frame

logging.basicConfig(level=logging.INFO)

paths = DataPaths.from_root(Path("data"))

print("=" * 80)
print("Stock Forecast Accuracy")
print("=" * 80)

if paths.stocks_csv.exists():
    series_list = load_stock_series(paths.stocks_csv)
    print(f"Loaded {len(series_list)} stocks")

    config = AnalysisConfig(
        horizon=100,  # Hold out and forecast 100 days
        forecasters=[LinearTrendForecaster(), SeasonalForecaster()],
        forecast_timeout=30.0,  # Give up on a single fit after 30 seconds
    )
    report = run_analysis(series_list, config=config)

    print(f"\nSuccessful forecasts: {report.metadata['successful_forecasts']}")
    print(f"Failed forecasts: {report.metadata['failed_forecasts']}")

    # RMSE per stock and algorithm, as consumed by the histogram charts
    rmse_df = build_rmse_frame(report.analyses)
    print("\nRMSE by stock:")
    print(rmse_df.pivot(index="series", columns="algorithm", values="rmse"))

    # Traces for the first stock's line chart
    if report.analyses:
        traces = build_trace_frame(report.analyses[0])
        print(f"\nTraces for {report.analyses[0].series.name}:")
        print(traces.groupby("trace")["value"].describe())

    for failure in report.failures:
        print(f"[FAILED] {failure.series_name} {failure.algorithm_name or ''}: {failure.message}")
else:
    print(f"\nData file not found: {paths.stocks_csv}")
    print("Download the stock prices CSV into the data directory to run this example.")
