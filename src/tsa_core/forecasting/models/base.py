"""Base interface for forecasting models.

This module defines the abstract base class that all forecasters implement,
so the analysis pipeline can run any number of interchangeable models over
the same historical window.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

import pandas as pd

from tsa_core.exceptions import AlgorithmFailure, ConfigError
from tsa_core.forecasting.types import Observation


class Forecaster(ABC):
    """Abstract base class for forecasting models.

    Implementations must be safe to call concurrently: forecast() may not
    mutate the instance, since the pipeline shares one forecaster across
    worker threads.

    Attributes:
        name: Algorithm name used to label ForecastDetails and report traces.
    """

    name: str = "forecaster"

    @abstractmethod
    def forecast(
        self,
        historical: Sequence[Observation],
        horizon: int,
        interval: pd.Timedelta,
    ) -> list[Observation]:
        """Predict the `horizon` values following the historical window.

        Args:
            historical: Regularized observations in ascending timestamp order
            horizon: Number of future points to predict
            interval: Spacing of the forecast grid

        Returns:
            Exactly `horizon` observations at last_timestamp + k * interval,
            k = 1..horizon

        Raises:
            AlgorithmFailure: If no valid model can be formed from the window
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def validate_forecast_inputs(historical: Sequence[Observation], horizon: int) -> None:
    """Check the arguments shared by every forecaster."""
    if horizon < 1:
        raise ConfigError(f"Forecast horizon must be a positive integer, got {horizon}")
    if len(historical) == 0:
        raise AlgorithmFailure("Cannot forecast from an empty historical window")


def future_timestamps(last_timestamp: pd.Timestamp, horizon: int, interval: pd.Timedelta) -> list[pd.Timestamp]:
    """Forecast grid: last_timestamp + k * interval for k = 1..horizon."""
    interval = pd.Timedelta(interval)
    return [last_timestamp + k * interval for k in range(1, horizon + 1)]
