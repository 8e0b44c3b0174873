"""Public API for the time series analysis pipeline.

This module regularizes each series, holds out the last `horizon` points,
runs every configured forecaster over the remaining history and scores the
forecasts against the held-out values.
"""

from __future__ import annotations

import functools
import logging
import time
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from tsa_core.exceptions import AlgorithmFailure, ConfigError, ForecastTimeoutError
from tsa_core.forecasting.config import DEFAULT_HORIZON
from tsa_core.forecasting.data.preparation import regularize, split_window
from tsa_core.forecasting.execution import run_units
from tsa_core.forecasting.models.base import Forecaster
from tsa_core.forecasting.models.linear import LinearTrendForecaster
from tsa_core.forecasting.models.ssa import SeasonalForecaster
from tsa_core.forecasting.scoring import evaluate
from tsa_core.forecasting.types import (
    AnalysisFailure,
    ForecastDetails,
    Observation,
    TimeSeries,
    TimeSeriesAnalysis,
)

logger = logging.getLogger(__name__)


@dataclass
class AnalysisConfig:
    """Configuration for a batch analysis run.

    Attributes:
        horizon: Number of trailing points held out and forecast (default: 100).
        forecasters: Forecasters run on every series (default: linear trend and SSA).
        max_workers: Forecast units running at the same time. If None, uses the
            ThreadPoolExecutor default; 1 runs units one at a time.
        forecast_timeout: Seconds a single forecast may run, counted from its
            own start, before it is abandoned and recorded as failed. Queued
            units are not affected. If None, waits indefinitely.
        drop_empty_analyses: If True, series whose every forecaster failed are
            left out of the analyses instead of appearing with no forecasts.
    """

    horizon: int = DEFAULT_HORIZON
    forecasters: List[Forecaster] = field(
        default_factory=lambda: [LinearTrendForecaster(), SeasonalForecaster()]
    )
    max_workers: Optional[int] = None
    forecast_timeout: Optional[float] = None
    drop_empty_analyses: bool = False

    @property
    def algorithm_names(self) -> List[str]:
        return [forecaster.name for forecaster in self.forecasters]

    def validate(self) -> None:
        """Raise ConfigError if any setting is out of range."""
        if not isinstance(self.horizon, int) or isinstance(self.horizon, bool) or self.horizon < 1:
            raise ConfigError(f"horizon must be a positive integer, got {self.horizon!r}")
        if not self.forecasters:
            raise ConfigError("At least one forecaster must be configured")
        names = self.algorithm_names
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ConfigError(f"Forecaster names must be unique, duplicated: {duplicates}")
        if self.max_workers is not None and self.max_workers < 1:
            raise ConfigError(f"max_workers must be at least 1, got {self.max_workers}")
        if self.forecast_timeout is not None and self.forecast_timeout <= 0:
            raise ConfigError(f"forecast_timeout must be positive, got {self.forecast_timeout}")


@dataclass
class AnalysisReport:
    """Result of a batch analysis run.

    Attributes:
        analyses: One TimeSeriesAnalysis per series that could be split,
            in input order.
        failures: Series-level and forecaster-level failures with their causes.
        metadata: Run summary (horizon, algorithms, counts, elapsed seconds).
    """

    analyses: List[TimeSeriesAnalysis] = field(default_factory=list)
    failures: List[AnalysisFailure] = field(default_factory=list)
    metadata: Dict[str, object] = field(default_factory=dict)

    def failures_for(self, series_name: str) -> List[AnalysisFailure]:
        return [failure for failure in self.failures if failure.series_name == series_name]


def _prepare_windows(
    series: TimeSeries, horizon: int
) -> Tuple[Tuple[Observation, ...], Tuple[Observation, ...]]:
    observations = regularize(series)
    logger.debug(
        f"{series.name}: {len(series)} observations, {len(observations)} after gap filling"
    )
    return split_window(observations, horizon)


def _run_forecaster(
    forecaster: Forecaster,
    historical: Sequence[Observation],
    actual: Sequence[Observation],
    interval: pd.Timedelta,
) -> ForecastDetails:
    """Forecast the actual window with one model and score the result."""
    horizon = len(actual)
    forecast = forecaster.forecast(historical, horizon, interval)
    if len(forecast) != horizon:
        raise AlgorithmFailure(
            f"{forecaster.name} returned {len(forecast)} values for horizon {horizon}"
        )
    metrics = evaluate(actual, forecast)
    return ForecastDetails(
        algorithm_name=forecaster.name,
        forecast=tuple(forecast),
        metrics=metrics,
    )


def analyze_series(series: TimeSeries, config: Optional[AnalysisConfig] = None) -> TimeSeriesAnalysis:
    """Analyse a single series in the calling thread.

    Unlike run_analysis(), any failure is raised to the caller.

    Raises:
        InsufficientDataError: If the regularized series is not longer than the horizon
        NumericDegeneracyError: If the linear fit is degenerate
        AlgorithmFailure: If a forecaster cannot form a model
    """
    if config is None:
        config = AnalysisConfig()
    config.validate()

    historical, actual = _prepare_windows(series, config.horizon)
    forecasts = [
        _run_forecaster(forecaster, historical, actual, series.interval)
        for forecaster in config.forecasters
    ]
    return TimeSeriesAnalysis(
        series=series,
        historical=historical,
        actual=actual,
        forecasts=tuple(forecasts),
    )


def run_analysis(
    series_list: Iterable[TimeSeries],
    config: Optional[AnalysisConfig] = None,
) -> AnalysisReport:
    """Run the gap-fill, forecast and score pipeline over many series.

    This function:
    - does NOT read or write any files,
    - does NOT render charts,
    - MAY log progress via the logging module.

    Every (series, forecaster) pair is an independent unit of work executed
    on a bounded pool of worker threads (see execution.run_units). A failing,
    or timed-out, series or forecaster is recorded in AnalysisReport.failures
    and never aborts the batch.

    Args:
        series_list: Series to analyse.
        config: AnalysisConfig for horizon, forecasters and execution. If None,
            uses defaults.

    Returns:
        AnalysisReport with the successful analyses, the failures, and metadata.

    Raises:
        ConfigError: If the configuration is invalid.
    """
    if config is None:
        config = AnalysisConfig()
    config.validate()

    started = time.perf_counter()
    series_list = list(series_list)
    horizon = config.horizon

    logger.info(
        f"Running analysis for {len(series_list)} series, "
        f"{len(config.forecasters)} forecasters, horizon {horizon}"
    )

    failures: List[AnalysisFailure] = []
    prepared: List[Tuple[TimeSeries, Tuple[Observation, ...], Tuple[Observation, ...]]] = []

    for series in series_list:
        try:
            historical, actual = _prepare_windows(series, horizon)
        except Exception as e:
            logger.warning(f"Skipping series '{series.name}': {e}")
            failures.append(AnalysisFailure.from_exception(series, e))
            continue
        prepared.append((series, historical, actual))

    # results[i][j] holds the ForecastDetails of prepared series i, forecaster j
    results: List[List[Optional[ForecastDetails]]] = [
        [None] * len(config.forecasters) for _ in prepared
    ]
    successful_forecasts = 0
    failed_forecasts = 0
    unit_failures: Dict[Tuple[int, int], AnalysisFailure] = {}

    units = {
        (i, j): functools.partial(_run_forecaster, forecaster, historical, actual, series.interval)
        for i, (series, historical, actual) in enumerate(prepared)
        for j, forecaster in enumerate(config.forecasters)
    }
    for (i, j), future in run_units(units, config.max_workers, config.forecast_timeout):
        series = prepared[i][0]
        forecaster = config.forecasters[j]
        if future is None:
            error = ForecastTimeoutError(
                f"{forecaster.name} did not finish within {config.forecast_timeout}s"
            )
            logger.warning(f"Error forecasting {series.name} - {forecaster.name}: {error}")
            unit_failures[(i, j)] = AnalysisFailure.from_exception(series, error, forecaster.name)
            failed_forecasts += 1
            continue
        try:
            results[i][j] = future.result()
            successful_forecasts += 1
            logger.debug(f"{series.name} - {forecaster.name}: done")
        except Exception as e:
            logger.warning(f"Error forecasting {series.name} - {forecaster.name}: {e}")
            unit_failures[(i, j)] = AnalysisFailure.from_exception(series, e, forecaster.name)
            failed_forecasts += 1
    failures.extend(unit_failures[key] for key in sorted(unit_failures))

    analyses: List[TimeSeriesAnalysis] = []
    for (series, historical, actual), details in zip(prepared, results):
        forecasts = tuple(d for d in details if d is not None)
        if not forecasts and config.drop_empty_analyses:
            logger.info(f"Dropping series '{series.name}': every forecaster failed")
            continue
        analyses.append(
            TimeSeriesAnalysis(
                series=series,
                historical=historical,
                actual=actual,
                forecasts=forecasts,
            )
        )

    elapsed = time.perf_counter() - started
    logger.info(
        f"Analysis summary: {len(analyses)} series analysed, "
        f"{successful_forecasts} forecasts successful, {failed_forecasts} failed "
        f"in {elapsed:.2f}s"
    )

    return AnalysisReport(
        analyses=analyses,
        failures=failures,
        metadata={
            "horizon": horizon,
            "algorithms": config.algorithm_names,
            "series_total": len(series_list),
            "series_analyzed": len(analyses),
            "successful_forecasts": successful_forecasts,
            "failed_forecasts": failed_forecasts,
            "elapsed_seconds": elapsed,
        },
    )
