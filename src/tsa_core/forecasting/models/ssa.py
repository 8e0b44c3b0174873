"""Singular spectrum analysis (SSA) forecasting model.

The historical window is embedded into a trajectory (Hankel) matrix, which
is decomposed with an SVD. The leading components capture trend and
periodic structure; they are used to reconstruct the series and to derive
a linear recurrent formula that extrapolates it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd

from tsa_core.exceptions import AlgorithmFailure
from tsa_core.forecasting.config import (
    SSA_MAX_SERIES_LENGTH,
    SSA_MAX_WINDOW,
    SSA_VARIANCE_THRESHOLD,
)
from tsa_core.forecasting.models.base import Forecaster, future_timestamps, validate_forecast_inputs
from tsa_core.forecasting.types import Observation

logger = logging.getLogger(__name__)

# Recurrence is unusable when the last eigenvector coordinates carry all the energy
_VERTICALITY_LIMIT = 1.0 - 1e-9


@dataclass(frozen=True)
class SsaModel:
    """Fitted SSA decomposition.

    Attributes:
        window_size: Embedding window (rows of the trajectory matrix).
        series_length: Number of trailing observations that were embedded.
        rank: Number of retained components.
        reconstruction: Series rebuilt from the retained components.
        coefficients: Linear recurrence weights, oldest lag first
            (length window_size - 1).
    """

    window_size: int
    series_length: int
    rank: int
    reconstruction: np.ndarray
    coefficients: np.ndarray

    def extrapolate(self, steps: int) -> np.ndarray:
        """Apply the linear recurrence `steps` times past the reconstruction."""
        lags = len(self.coefficients)
        if lags == 0:
            return np.full(steps, self.reconstruction[-1])

        values = list(self.reconstruction[-lags:])
        forecast = np.empty(steps)
        for i in range(steps):
            next_value = float(np.dot(self.coefficients, values[-lags:]))
            forecast[i] = next_value
            values.append(next_value)
        return forecast


def trajectory_matrix(values: np.ndarray, window_size: int) -> np.ndarray:
    """Hankel matrix whose columns are the lagged windows of `values`."""
    k = len(values) - window_size + 1
    return np.column_stack([values[i : i + window_size] for i in range(k)])


def diagonal_average(matrix: np.ndarray) -> np.ndarray:
    """Average the anti-diagonals of a trajectory matrix back into a series."""
    window_size, k = matrix.shape
    length = window_size + k - 1
    totals = np.zeros(length)
    counts = np.zeros(length)
    for j in range(k):
        totals[j : j + window_size] += matrix[:, j]
        counts[j : j + window_size] += 1
    return totals / counts


def select_rank(singular_values: np.ndarray, threshold: float, max_rank: int) -> int:
    """Smallest rank whose components hold `threshold` of the spectrum energy."""
    energy = singular_values**2
    total = energy.sum()
    if total == 0.0:
        return 1
    cumulative = np.cumsum(energy) / total
    rank = int(np.searchsorted(cumulative, threshold) + 1)
    return max(1, min(rank, max_rank))


class SeasonalForecaster(Forecaster):
    """SSA forecaster capturing trend and periodic components.

    For a historical window of n observations the embedding window is
    min(max_window, n // 2 - 1) and the last min(max_series_length, n)
    observations are decomposed.
    """

    name = "SSA"

    def __init__(
        self,
        max_window: int = SSA_MAX_WINDOW,
        max_series_length: int = SSA_MAX_SERIES_LENGTH,
        variance_threshold: float = SSA_VARIANCE_THRESHOLD,
        rank: int | None = None,
    ) -> None:
        """Initialize the SSA forecaster.

        Args:
            max_window: Upper bound on the embedding window (default: 50)
            max_series_length: Upper bound on the number of trailing
                observations decomposed (default: 110)
            variance_threshold: Share of singular-value energy to retain when
                rank is chosen automatically (default: 0.95)
            rank: Fixed number of components; overrides variance_threshold
        """
        if not 0.0 < variance_threshold <= 1.0:
            raise ValueError(f"variance_threshold must be in (0, 1], got {variance_threshold}")
        if rank is not None and rank < 1:
            raise ValueError(f"rank must be positive, got {rank}")
        self.max_window = max_window
        self.max_series_length = max_series_length
        self.variance_threshold = variance_threshold
        self.rank = rank

    def window_parameters(self, n: int) -> tuple[int, int]:
        """Return (window_size, series_length) for n historical observations."""
        return min(self.max_window, n // 2 - 1), min(self.max_series_length, n)

    def fit(self, values: Sequence[float]) -> SsaModel:
        """Decompose the trailing values and derive the recurrence.

        Raises:
            AlgorithmFailure: If the window is too small or the recurrence
                is degenerate
        """
        n = len(values)
        window_size, series_length = self.window_parameters(n)
        if window_size < 1:
            raise AlgorithmFailure(
                f"SSA needs at least 4 historical observations to form a window, got {n}"
            )

        series = np.asarray(values, dtype=float)[-series_length:]
        if not np.all(np.isfinite(series)):
            raise AlgorithmFailure("SSA input contains non-finite values")

        trajectory = trajectory_matrix(series, window_size)
        u, s, vt = np.linalg.svd(trajectory, full_matrices=False)

        max_rank = max(1, min(window_size - 1, len(s)))
        if self.rank is not None:
            rank = min(self.rank, max_rank)
        else:
            rank = select_rank(s, self.variance_threshold, max_rank)

        reconstruction = diagonal_average(u[:, :rank] @ np.diag(s[:rank]) @ vt[:rank])
        coefficients = self._recurrence_coefficients(u[:, :rank], window_size)

        logger.debug(f"SSA fit: window={window_size}, length={series_length}, rank={rank}")
        return SsaModel(
            window_size=window_size,
            series_length=series_length,
            rank=rank,
            reconstruction=reconstruction,
            coefficients=coefficients,
        )

    @staticmethod
    def _recurrence_coefficients(eigenvectors: np.ndarray, window_size: int) -> np.ndarray:
        if window_size == 1:
            return np.empty(0)

        last_row = eigenvectors[-1, :]
        verticality = float(np.dot(last_row, last_row))
        if verticality >= _VERTICALITY_LIMIT:
            raise AlgorithmFailure(
                f"SSA recurrence is degenerate (verticality coefficient {verticality:.6f})"
            )
        return eigenvectors[:-1, :] @ last_row / (1.0 - verticality)

    def forecast(
        self,
        historical: Sequence[Observation],
        horizon: int,
        interval: pd.Timedelta,
    ) -> list[Observation]:
        validate_forecast_inputs(historical, horizon)

        model = self.fit([o.value for o in historical])
        values = model.extrapolate(horizon)
        if not np.all(np.isfinite(values)):
            raise AlgorithmFailure("SSA extrapolation diverged to non-finite values")

        return [
            Observation(timestamp=ts, value=float(value))
            for ts, value in zip(future_timestamps(historical[-1].timestamp, horizon, interval), values)
        ]
