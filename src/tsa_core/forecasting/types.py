"""Shared types for the analysis pipeline.

Every type here is a frozen dataclass: series, forecasts and analyses are
built once and read-only afterwards, so they can be handed to worker
threads without copying.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import pandas as pd

from tsa_core.exceptions import EmptyInputError


@dataclass(frozen=True)
class Observation:
    """A single timestamped numeric sample."""

    timestamp: pd.Timestamp
    value: float


@dataclass(frozen=True)
class TimeSeries:
    """A named, grouped sequence of observations with its nominal interval.

    Attributes:
        name: Series identifier, e.g. a ticker symbol or source file name.
        group: Label used to aggregate series across a batch (e.g. "Stocks").
        interval: Expected spacing between consecutive observations.
        observations: Observations in ascending timestamp order.

    Raises:
        EmptyInputError: If no observations are given.
    """

    name: str
    group: str
    interval: pd.Timedelta
    observations: tuple[Observation, ...]

    def __post_init__(self) -> None:
        observations = tuple(self.observations)
        if not observations:
            raise EmptyInputError(f"Time series '{self.name}' has no observations")
        object.__setattr__(self, "observations", observations)
        object.__setattr__(self, "interval", pd.Timedelta(self.interval))

    def __len__(self) -> int:
        return len(self.observations)

    @classmethod
    def from_series(
        cls,
        name: str,
        group: str,
        interval: pd.Timedelta | str,
        series: pd.Series,
    ) -> TimeSeries:
        """Build a TimeSeries from a pandas Series indexed by timestamp.

        The series is sorted by its index; NaN values are dropped.
        """
        series = series.dropna().sort_index()
        observations = [
            Observation(timestamp=pd.Timestamp(ts), value=float(value))
            for ts, value in series.items()
        ]
        return cls(
            name=name,
            group=group,
            interval=pd.Timedelta(interval),
            observations=tuple(observations),
        )

    def to_series(self) -> pd.Series:
        """Return the observations as a float Series indexed by timestamp."""
        return observations_to_series(self.observations, name=self.name)


@dataclass(frozen=True)
class RegressionMetrics:
    """Regression accuracy of a forecast against the actual outcome."""

    mae: float
    mse: float
    rmse: float
    r2: float


@dataclass(frozen=True)
class ForecastDetails:
    """Forecast produced by one algorithm for one series, with its score."""

    algorithm_name: str
    forecast: tuple[Observation, ...]
    metrics: RegressionMetrics


@dataclass(frozen=True)
class TimeSeriesAnalysis:
    """Result of analysing one series.

    Attributes:
        series: The source series (not regularized).
        historical: Regularized observations given to the forecasters.
        actual: Regularized held-out observations (length == horizon).
        forecasts: One ForecastDetails per forecaster that succeeded,
            in configured forecaster order.
    """

    series: TimeSeries
    historical: tuple[Observation, ...]
    actual: tuple[Observation, ...]
    forecasts: tuple[ForecastDetails, ...] = ()


@dataclass(frozen=True)
class AnalysisFailure:
    """One failed unit of work in a batch run.

    algorithm_name is None when the whole series failed (e.g. not enough
    data), otherwise it names the forecaster that failed for this series.
    """

    series_name: str
    group: str
    algorithm_name: str | None
    error_type: str
    message: str

    @classmethod
    def from_exception(
        cls,
        series: TimeSeries,
        error: BaseException,
        algorithm_name: str | None = None,
    ) -> AnalysisFailure:
        return cls(
            series_name=series.name,
            group=series.group,
            algorithm_name=algorithm_name,
            error_type=type(error).__name__,
            message=str(error),
        )


def observations_to_series(observations: Iterable[Observation], name: str | None = None) -> pd.Series:
    """Convert observations to a float Series indexed by timestamp."""
    observations = list(observations)
    index = pd.DatetimeIndex([o.timestamp for o in observations])
    return pd.Series([o.value for o in observations], index=index, dtype=float, name=name)
