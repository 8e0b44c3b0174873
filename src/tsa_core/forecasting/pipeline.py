"""CLI wrapper for the time series analysis pipeline.

This module provides a command-line interface for running an analysis.
All core logic is in tsa_core.forecasting.api.
"""

from __future__ import annotations

import argparse
import logging

from tsa_core.config import DataPaths
from tsa_core.forecasting.api import AnalysisConfig, run_analysis
from tsa_core.forecasting.config import DEFAULT_HORIZON
from tsa_core.forecasting.data.loaders import load_stock_series, load_wait_time_series
from tsa_core.forecasting.formatters.console import (
    format_histograms_for_console,
    format_report_for_console,
)
from tsa_core.forecasting.reporting import build_rmse_histograms


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Forecast and score held-out time series windows.")
    parser.add_argument(
        "--data-root",
        type=str,
        default="data",
        help="Directory containing the input CSV files (default: data)",
    )
    parser.add_argument(
        "--source",
        type=str,
        default="stocks",
        choices=["stocks", "wait-times"],
        help="Series to load (default: stocks). Options: stocks, wait-times",
    )
    parser.add_argument(
        "--horizon",
        type=int,
        default=DEFAULT_HORIZON,
        help=f"Number of trailing points to hold out and forecast (default: {DEFAULT_HORIZON})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds allowed per forecast before it is reported as failed",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker threads used for forecasting (default: executor default)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Loads series, runs the analysis, and prints the accuracy summary and RMSE
    histograms. Returns a non-zero exit code when no series could be analysed.
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("=" * 60)
    print("Time Series Forecast Analysis")
    print("=" * 60)

    paths = DataPaths.from_root(args.data_root)

    print("\n[1/3] Loading series...")
    if args.source == "stocks":
        series_list = load_stock_series(paths.stocks_csv)
    else:
        series_list = load_wait_time_series(paths.wait_time_dir, pattern=paths.wait_time_pattern)
    print(f"[OK] Loaded {len(series_list)} series")

    print(f"\n[2/3] Forecasting {args.horizon} points per series...")
    config = AnalysisConfig(
        horizon=args.horizon,
        max_workers=args.workers,
        forecast_timeout=args.timeout,
    )
    report = run_analysis(series_list, config=config)
    print(
        f"[OK] {report.metadata['successful_forecasts']} forecasts, "
        f"{report.metadata['failed_forecasts']} failed"
    )

    print("\n[3/3] Formatting results...")
    print("\n" + "=" * 60)
    print(format_report_for_console(report))
    print(format_histograms_for_console(build_rmse_histograms(report.analyses)))
    print("=" * 60)

    return 0 if report.analyses else 1


if __name__ == "__main__":
    raise SystemExit(main())
