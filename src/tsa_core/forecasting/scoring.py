"""Forecast accuracy scoring.

Forecast and actual observations are paired by position. Timestamps are not
compared; the caller is responsible for aligning both sequences on the same
grid.

r2 is the one value allowed to be NaN: it is undefined for a constant actual
window, and a warning is logged when that happens. mae, mse and rmse are
always finite for finite inputs.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
from statsmodels.tools.eval_measures import meanabs, mse, rmse

from tsa_core.exceptions import LengthMismatchError
from tsa_core.forecasting.types import Observation, RegressionMetrics

logger = logging.getLogger(__name__)


def evaluate(actual: Sequence[Observation], forecast: Sequence[Observation]) -> RegressionMetrics:
    """Compute regression metrics of a forecast against the actual outcome.

    Args:
        actual: Held-out real observations
        forecast: Predicted observations, same length as actual

    Returns:
        RegressionMetrics with mae, mse, rmse and r2. r2 is NaN when the
        actual values are constant (zero variance).

    Raises:
        LengthMismatchError: If the sequences differ in length or are empty
    """
    if len(actual) != len(forecast):
        raise LengthMismatchError(
            f"Cannot score forecast of length {len(forecast)} against {len(actual)} actual values"
        )
    if len(actual) == 0:
        raise LengthMismatchError("Cannot score empty actual and forecast sequences")

    y_true = np.array([o.value for o in actual], dtype=float)
    y_pred = np.array([o.value for o in forecast], dtype=float)

    mean_squared_error = float(mse(y_true, y_pred))
    variance = float(np.var(y_true))
    if variance == 0.0:
        logger.warning("Actual values are constant; r2 is undefined and reported as NaN")
        r2 = float("nan")
    else:
        r2 = 1.0 - mean_squared_error / variance

    return RegressionMetrics(
        mae=float(meanabs(y_true, y_pred)),
        mse=mean_squared_error,
        rmse=float(rmse(y_true, y_pred)),
        r2=r2,
    )
