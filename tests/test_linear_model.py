"""Tests for the linear trend forecaster."""

import numpy as np
import pandas as pd
import pytest

from tsa_core.exceptions import AlgorithmFailure, ConfigError, NumericDegeneracyError
from tsa_core.forecasting.models.linear import LinearTrendForecaster, fit_line, timestamp_to_x
from tsa_core.forecasting.types import Observation

DAY = pd.Timedelta(days=1)


def line_history(n: int) -> list[Observation]:
    dates = pd.date_range("2024-01-01", periods=n, freq="D")
    return [Observation(ts, 2.0 * k + 3.0) for k, ts in enumerate(dates)]


def test_fit_line_recovers_slope_and_intercept() -> None:
    """Test that y = 2x + 3 is recovered exactly."""
    x = np.arange(20)
    y = 2 * x + 3

    intercept, slope = fit_line(x, y)

    assert slope == pytest.approx(2.0)
    assert intercept == pytest.approx(3.0)


def test_fit_line_zero_variance() -> None:
    """Test that identical x values are reported instead of producing NaN."""
    with pytest.raises(NumericDegeneracyError, match="2 distinct timestamps"):
        fit_line([5.0, 5.0, 5.0], [1.0, 2.0, 3.0])


def test_timestamp_to_x_is_seconds_since_epoch() -> None:
    """Test the numeric time axis."""
    assert timestamp_to_x(pd.Timestamp("1970-01-01")) == 0.0
    assert timestamp_to_x(pd.Timestamp("1970-01-02")) == 86400.0


def test_forecast_continues_the_line() -> None:
    """Test that the forecast extends an exact linear history."""
    historical = line_history(30)

    forecast = LinearTrendForecaster().forecast(historical, horizon=5, interval=DAY)

    expected = [2.0 * k + 3.0 for k in range(30, 35)]
    assert [o.value for o in forecast] == pytest.approx(expected, rel=1e-6)


def test_forecast_timestamps_follow_interval() -> None:
    """Test that forecast timestamps are last + k * interval."""
    historical = line_history(10)
    last = historical[-1].timestamp

    forecast = LinearTrendForecaster().forecast(historical, horizon=4, interval=DAY)

    assert len(forecast) == 4
    assert [o.timestamp for o in forecast] == [last + k * DAY for k in range(1, 5)]


def test_forecast_interval_independent_of_history_spacing() -> None:
    """Test that the forecast grid uses the given interval, not the history spacing."""
    historical = line_history(10)
    hour = pd.Timedelta(hours=1)

    forecast = LinearTrendForecaster().forecast(historical, horizon=2, interval=hour)

    assert forecast[0].timestamp == historical[-1].timestamp + hour
    # Slope is 2 per day, so one hour later adds 2/24
    assert forecast[0].value == pytest.approx(historical[-1].value + 2.0 / 24, rel=1e-6)


def test_forecast_degenerate_history() -> None:
    """Test that a history with a single distinct timestamp fails explicitly."""
    ts = pd.Timestamp("2024-01-01")
    historical = [Observation(ts, 1.0), Observation(ts, 2.0)]

    with pytest.raises(NumericDegeneracyError):
        LinearTrendForecaster().forecast(historical, horizon=3, interval=DAY)


def test_forecast_rejects_invalid_arguments() -> None:
    """Test horizon and empty history validation."""
    model = LinearTrendForecaster()

    with pytest.raises(ConfigError, match="positive integer"):
        model.forecast(line_history(5), horizon=0, interval=DAY)

    with pytest.raises(AlgorithmFailure, match="empty"):
        model.forecast([], horizon=3, interval=DAY)


def test_forecaster_name() -> None:
    """Test the algorithm label used in reports."""
    assert LinearTrendForecaster().name == "Linear Regression"
