"""Linear trend forecasting model.

Fits an ordinary least-squares line to (time, value) pairs of the historical
window and extrapolates it over the forecast grid. Time is measured in
seconds since the Unix epoch.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
import pandas as pd

from tsa_core.exceptions import NumericDegeneracyError
from tsa_core.forecasting.models.base import Forecaster, future_timestamps, validate_forecast_inputs
from tsa_core.forecasting.types import Observation

logger = logging.getLogger(__name__)

_EPOCH = pd.Timestamp("1970-01-01")


def timestamp_to_x(timestamp: pd.Timestamp) -> float:
    """Numeric x coordinate of a timestamp (seconds since the Unix epoch)."""
    timestamp = pd.Timestamp(timestamp)
    if timestamp.tzinfo is not None:
        timestamp = timestamp.tz_convert("UTC").tz_localize(None)
    return (timestamp - _EPOCH) / pd.Timedelta(seconds=1)


def fit_line(x: Sequence[float], y: Sequence[float]) -> tuple[float, float]:
    """Least-squares fit of y = slope * x + intercept.

    Args:
        x: Predictor values
        y: Response values, same length as x

    Returns:
        Tuple of (intercept, slope)

    Raises:
        NumericDegeneracyError: If all x values are identical (zero variance)

    Example:
        >>> fit_line([0, 1, 2, 3], [3, 5, 7, 9])
        (3.0, 2.0)
    """
    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y, dtype=float)

    mean_x = x_arr.mean()
    mean_y = y_arr.mean()

    diff = x_arr - mean_x
    variance = float(np.sum(diff * diff))
    covariance = float(np.sum(diff * (y_arr - mean_y)))

    if variance == 0.0:
        raise NumericDegeneracyError(
            "Cannot fit a line: historical window needs at least 2 distinct timestamps"
        )

    slope = covariance / variance
    return float(mean_y - slope * mean_x), float(slope)


class LinearTrendForecaster(Forecaster):
    """Closed-form linear regression over time.

    The forecast continues the fitted line at each future grid timestamp.
    """

    name = "Linear Regression"

    def forecast(
        self,
        historical: Sequence[Observation],
        horizon: int,
        interval: pd.Timedelta,
    ) -> list[Observation]:
        validate_forecast_inputs(historical, horizon)

        x = [timestamp_to_x(o.timestamp) for o in historical]
        y = [o.value for o in historical]
        intercept, slope = fit_line(x, y)
        logger.debug(f"Linear fit over {len(historical)} points: slope={slope:.6g}, intercept={intercept:.6g}")

        return [
            Observation(timestamp=ts, value=slope * timestamp_to_x(ts) + intercept)
            for ts in future_timestamps(historical[-1].timestamp, horizon, interval)
        ]
