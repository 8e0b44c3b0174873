"""Configuration constants for the analysis pipeline."""

import pandas as pd

# Number of trailing points held out as ground truth and forecast
DEFAULT_HORIZON = 100

# SSA embedding window: min(SSA_MAX_WINDOW, n // 2 - 1)
SSA_MAX_WINDOW = 50

# SSA effective series length: min(SSA_MAX_SERIES_LENGTH, n)
SSA_MAX_SERIES_LENGTH = 110

# Share of singular-value energy kept when choosing the SSA rank
SSA_VARIANCE_THRESHOLD = 0.95

# Nominal sampling intervals of the bundled loaders
DEFAULT_STOCK_INTERVAL = pd.Timedelta(days=1)
DEFAULT_WAIT_TIME_INTERVAL = pd.Timedelta(hours=1)

# Groups assigned by the bundled loaders
STOCKS_GROUP = "Stocks"
WAIT_TIMES_GROUP = "Database Wait Times"
