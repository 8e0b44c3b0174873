"""Tests for forecast scoring."""

import logging
import math

import numpy as np
import pandas as pd
import pytest

from tsa_core.exceptions import LengthMismatchError
from tsa_core.forecasting.scoring import evaluate
from tsa_core.forecasting.types import Observation


def observations(values, start: str = "2024-01-01") -> list[Observation]:
    dates = pd.date_range(start, periods=len(values), freq="D")
    return [Observation(ts, float(v)) for ts, v in zip(dates, values)]


def test_evaluate_identical_sequences() -> None:
    """Test that a perfect forecast has zero error."""
    actual = observations([3.0, 1.0, 4.0, 1.0, 5.0])

    metrics = evaluate(actual, actual)

    assert metrics.mae == 0.0
    assert metrics.mse == 0.0
    assert metrics.rmse == 0.0
    assert metrics.r2 == pytest.approx(1.0)


def test_evaluate_known_values() -> None:
    """Test metrics against hand-computed values."""
    actual = observations([1.0, 2.0, 3.0, 4.0])
    forecast = observations([2.0, 2.0, 2.0, 2.0])

    metrics = evaluate(actual, forecast)

    # errors: -1, 0, 1, 2
    assert metrics.mae == pytest.approx(1.0)
    assert metrics.mse == pytest.approx(1.5)
    assert metrics.rmse == pytest.approx(math.sqrt(1.5))
    # population variance of actual is 1.25
    assert metrics.r2 == pytest.approx(1.0 - 1.5 / 1.25)


def test_mae_never_exceeds_rmse() -> None:
    """Test mae <= rmse on random forecasts."""
    rng = np.random.default_rng(7)
    for _ in range(20):
        size = int(rng.integers(1, 50))
        actual = observations(rng.normal(0.0, 10.0, size))
        forecast = observations(rng.normal(0.0, 10.0, size))

        metrics = evaluate(actual, forecast)

        assert metrics.mae <= metrics.rmse + 1e-12
        assert metrics.rmse >= 0.0


def test_evaluate_pairs_by_position() -> None:
    """Test that timestamps are ignored when pairing values."""
    actual = observations([1.0, 2.0, 3.0], start="2024-01-01")
    forecast = observations([1.0, 2.0, 3.0], start="2030-06-15")

    assert evaluate(actual, forecast).rmse == 0.0


def test_evaluate_constant_actual_r2_undefined(caplog) -> None:
    """Test that r2 is NaN when actual values have no variance, with a warning."""
    with caplog.at_level(logging.WARNING, logger="tsa_core.forecasting.scoring"):
        metrics = evaluate(observations([2.0, 2.0, 2.0]), observations([1.0, 2.0, 3.0]))

    assert math.isnan(metrics.r2)
    assert metrics.rmse == pytest.approx(math.sqrt(2.0 / 3.0))
    assert "r2 is undefined" in caplog.text


def test_evaluate_length_mismatch() -> None:
    """Test that sequences of different length are rejected."""
    with pytest.raises(LengthMismatchError, match="length 2 against 3"):
        evaluate(observations([1.0, 2.0, 3.0]), observations([1.0, 2.0]))


def test_evaluate_empty() -> None:
    """Test that empty sequences cannot be scored."""
    with pytest.raises(LengthMismatchError, match="empty"):
        evaluate([], [])
