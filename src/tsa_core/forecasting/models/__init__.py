"""Forecasting models module.

Adding a forecasting model
==========================

1. Subclass Forecaster and give it a unique, human-readable `name`
   (it labels ForecastDetails and chart traces):
   ```python
   class MyForecaster(Forecaster):
       name = "My Model"

       def forecast(self, historical, horizon, interval) -> list[Observation]:
           validate_forecast_inputs(historical, horizon)
           ...
           return [Observation(ts, value) for ts, value in zip(
               future_timestamps(historical[-1].timestamp, horizon, interval), values)]
   ```

2. Important constraints:
   - Always return exactly `horizon` observations on the forecast grid
   - Never mutate `self` inside forecast(); one instance is shared by all
     worker threads of a batch
   - Raise AlgorithmFailure (or NumericDegeneracyError) instead of returning
     NaN values; the pipeline records the failure and moves on

3. Pass the instance in AnalysisConfig(forecasters=[...]).

Implementations:
- LinearTrendForecaster: see models/linear.py
- SeasonalForecaster (SSA): see models/ssa.py
"""

from tsa_core.forecasting.models.base import Forecaster
from tsa_core.forecasting.models.linear import LinearTrendForecaster
from tsa_core.forecasting.models.ssa import SeasonalForecaster

__all__ = ["Forecaster", "LinearTrendForecaster", "SeasonalForecaster"]
