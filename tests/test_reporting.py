"""Tests for chart tables, RMSE histograms and console output."""

import pandas as pd

from tsa_core.forecasting import (
    AnalysisFailure,
    AnalysisReport,
    ForecastDetails,
    Observation,
    RegressionMetrics,
    TimeSeries,
    TimeSeriesAnalysis,
)
from tsa_core.forecasting.formatters.console import (
    format_histograms_for_console,
    format_report_for_console,
    sanitize_for_console,
)
from tsa_core.forecasting.pipeline import main
from tsa_core.forecasting.reporting import (
    build_rmse_frame,
    build_rmse_histograms,
    build_trace_frame,
    rmse_bin_size,
)

DAY = pd.Timedelta(days=1)


def observations(start: int, values) -> tuple:
    base = pd.Timestamp("2024-01-01")
    return tuple(Observation(base + (start + k) * DAY, float(v)) for k, v in enumerate(values))


def make_analysis(name: str, group: str, rmse_by_algorithm: dict) -> TimeSeriesAnalysis:
    historical = observations(0, [1, 2, 3, 4])
    actual = observations(4, [5, 6])
    forecasts = tuple(
        ForecastDetails(
            algorithm_name=algorithm,
            forecast=observations(4, [5, 6]),
            metrics=RegressionMetrics(mae=rmse, mse=rmse**2, rmse=rmse, r2=0.5),
        )
        for algorithm, rmse in rmse_by_algorithm.items()
    )
    series = TimeSeries(name=name, group=group, interval=DAY, observations=historical + actual)
    return TimeSeriesAnalysis(series=series, historical=historical, actual=actual, forecasts=forecasts)


def test_build_trace_frame() -> None:
    """Test one trace per window and per forecast."""
    analysis = make_analysis("AAPL", "Stocks", {"Linear Regression": 1.0, "SSA": 2.0})

    df = build_trace_frame(analysis)

    assert list(df.columns) == ["series", "trace", "timestamp", "value"]
    counts = df["trace"].value_counts().to_dict()
    assert counts == {
        "Historical": 4,
        "Actual": 2,
        "Linear Regression Forecast": 2,
        "SSA Forecast": 2,
    }
    assert (df["series"] == "AAPL").all()


def test_build_rmse_frame() -> None:
    """Test one row per series and algorithm."""
    analyses = [
        make_analysis("AAPL", "Stocks", {"Linear Regression": 1.0, "SSA": 2.0}),
        make_analysis("db1", "Database Wait Times", {"Linear Regression": 3.0}),
    ]

    df = build_rmse_frame(analyses)

    assert len(df) == 3
    assert df.loc[df["series"] == "db1", "rmse"].item() == 3.0
    assert set(df["group"]) == {"Stocks", "Database Wait Times"}


def test_rmse_bin_size() -> None:
    """Test histogram bin width from the largest RMSE."""
    assert rmse_bin_size(250.0) == 20
    assert rmse_bin_size(99.0) == 10
    assert rmse_bin_size(1000.0) == 100
    assert rmse_bin_size(3.5) == 1


def test_build_rmse_histograms() -> None:
    """Test bin counts per group and algorithm."""
    analyses = [
        make_analysis("A", "Stocks", {"Linear Regression": 5.0, "SSA": 150.0}),
        make_analysis("B", "Stocks", {"Linear Regression": 25.0, "SSA": 199.0}),
        make_analysis("C", "Other", {"Linear Regression": 0.5}),
    ]

    df = build_rmse_histograms(analyses)

    stocks = df[df["group"] == "Stocks"]
    # max rmse 199 -> bin size 20, edges 0..200
    assert stocks["bin_end"].max() == 200.0
    linear = stocks[stocks["algorithm"] == "Linear Regression"].set_index("bin_start")["count"]
    assert linear[0.0] == 1
    assert linear[20.0] == 1
    assert linear.sum() == 2
    ssa = stocks[stocks["algorithm"] == "SSA"].set_index("bin_start")["count"]
    assert ssa[140.0] == 1
    assert ssa[180.0] == 1

    other = df[df["group"] == "Other"]
    assert len(other) == 10
    assert other["count"].sum() == 1


def test_build_rmse_histograms_empty() -> None:
    """Test that no analyses give an empty table."""
    df = build_rmse_histograms([])

    assert df.empty
    assert "No RMSE values" in format_histograms_for_console(df)


def test_format_report_for_console() -> None:
    """Test the text summary lists metrics and failures."""
    report = AnalysisReport(
        analyses=[make_analysis("AAPL", "Stocks", {"Linear Regression": 1.25})],
        failures=[
            AnalysisFailure("MSFT", "Stocks", None, "InsufficientDataError", "too short"),
            AnalysisFailure("AAPL", "Stocks", "SSA", "AlgorithmFailure", "window too small"),
        ],
        metadata={"horizon": 2},
    )

    text = format_report_for_console(report)

    assert "Horizon 2" in text
    assert "AAPL [Stocks]:" in text
    assert "Linear Regression: RMSE 1.2500" in text
    assert "MSFT: InsufficientDataError: too short" in text
    assert "AAPL - SSA: AlgorithmFailure: window too small" in text


def test_format_report_empty() -> None:
    """Test the message for an empty report."""
    assert format_report_for_console(AnalysisReport()) == "No series analysed."


def test_sanitize_for_console() -> None:
    """Test that non-ASCII characters are stripped."""
    assert sanitize_for_console("Café ✓ ok") == "Caf  ok"


def test_cli_runs_on_stock_file(tmp_path, capsys) -> None:
    """Test the CLI end to end on a small stock file."""
    dates = pd.date_range("2024-01-01", periods=40, freq="D")
    df = pd.DataFrame(
        {
            "Date": list(dates) * 2,
            "Name": ["AAPL"] * 40 + ["MSFT"] * 40,
            "Open": 1.0,
            "Close": [100.0 + k for k in range(40)] + [50.0 + (k % 5) for k in range(40)],
            "High": 1.0,
            "Low": 1.0,
            "Volume": 1.0,
        }
    )
    df.to_csv(tmp_path / "big_five_stocks.csv", index=False)

    exit_code = main(["--data-root", str(tmp_path), "--horizon", "5", "--workers", "2"])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "Loaded 2 series" in out
    assert "AAPL [Stocks]:" in out
    assert "Stocks RMSE - SSA:" in out


def test_cli_reports_failure_exit_code(tmp_path) -> None:
    """Test that the CLI exits non-zero when nothing could be analysed."""
    (tmp_path / "Wait_Time_Sample_1.csv").write_text(
        "Date,QueryWaitTime\n2024-01-01 00:00,1\n2024-01-01 01:00,2\n"
    )

    assert main(["--data-root", str(tmp_path), "--source", "wait-times", "--horizon", "5"]) == 1


def test_format_report_nan_r2() -> None:
    """Test that an undefined r2 is shown as n/a."""
    analysis = make_analysis("AAPL", "Stocks", {"Linear Regression": 1.0})
    details = analysis.forecasts[0]
    nan_details = ForecastDetails(
        details.algorithm_name,
        details.forecast,
        RegressionMetrics(mae=1.0, mse=1.0, rmse=1.0, r2=float("nan")),
    )
    report = AnalysisReport(
        analyses=[
            TimeSeriesAnalysis(analysis.series, analysis.historical, analysis.actual, (nan_details,))
        ],
        metadata={"horizon": 2},
    )

    assert "R2 n/a" in format_report_for_console(report)


def test_build_rmse_histograms_skips_non_finite() -> None:
    """Test that an overflowed RMSE does not break the bin size."""
    analyses = [
        make_analysis("A", "Stocks", {"Linear Regression": float("inf"), "SSA": 150.0}),
        make_analysis("B", "Stocks", {"Linear Regression": 25.0, "SSA": float("nan")}),
    ]

    df = build_rmse_histograms(analyses)

    assert df["bin_end"].max() == 100.0
    counts = df.groupby("algorithm")["count"].sum().to_dict()
    assert counts == {"Linear Regression": 1, "SSA": 1}
