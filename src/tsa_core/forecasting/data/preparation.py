"""Data preparation utilities for time series forecasting.

This module regularizes raw observations onto their nominal interval and
splits the result into the historical and held-out windows used by the
analysis pipeline.
"""

from __future__ import annotations

import itertools
from typing import Iterable, Iterator, Sequence

import pandas as pd

from tsa_core.exceptions import EmptyInputError, InsufficientDataError
from tsa_core.forecasting.types import Observation, TimeSeries


def fill_gaps(observations: Iterable[Observation], interval: pd.Timedelta) -> Iterator[Observation]:
    """Lazily fill gaps wider than the interval by carrying the last value forward.

    A synthetic observation is emitted at every grid point that falls more than
    half an interval before the next real observation. The grid restarts at
    each real observation, so real points are never moved, dropped or
    reordered, and a synthetic point always repeats the most recent real value.

    Input must be sorted by timestamp; unsorted input is not detected.

    Args:
        observations: Observations in ascending timestamp order
        interval: Nominal spacing between observations

    Yields:
        Real and synthetic observations covering first..last timestamp

    Raises:
        EmptyInputError: If observations is empty (on first iteration)

    Example:
        Observations at t=0 (value 5) and t=3 with interval 1 yield
        t=0, t=1 (5), t=2 (5), t=3.
    """
    interval = pd.Timedelta(interval)
    tolerance = interval / 2

    iterator = iter(observations)
    first = next(iterator, None)
    if first is None:
        raise EmptyInputError("Cannot fill gaps in an empty sequence of observations")

    expected_time = first.timestamp
    last_value = first.value

    for observation in itertools.chain([first], iterator):
        while expected_time + tolerance < observation.timestamp:
            yield Observation(timestamp=expected_time, value=last_value)
            expected_time = expected_time + interval

        yield observation

        expected_time = observation.timestamp + interval
        last_value = observation.value


def regularize(series: TimeSeries) -> list[Observation]:
    """Materialize the gap-filled observations of a series."""
    return list(fill_gaps(series.observations, series.interval))


def split_window(
    observations: Sequence[Observation], horizon: int
) -> tuple[tuple[Observation, ...], tuple[Observation, ...]]:
    """Split observations into historical and actual (last `horizon`) windows.

    Raises:
        InsufficientDataError: If there are not more than `horizon` observations,
            which would leave the historical window empty
    """
    if len(observations) <= horizon:
        raise InsufficientDataError(
            f"Need more than {horizon} observations after gap filling, got {len(observations)}"
        )

    cut = len(observations) - horizon
    return tuple(observations[:cut]), tuple(observations[cut:])
