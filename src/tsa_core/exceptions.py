"""Domain-specific exceptions for TSA Core.

This module defines custom exceptions that are part of the public API.
All exceptions inherit from TsaCoreError for easy catching.
"""


class TsaCoreError(Exception):
    """Base exception for all TSA Core errors.

    Users can catch this exception to handle any error raised by the package.
    """

    pass


class ConfigError(TsaCoreError):
    """Raised when there is a configuration error.

    This exception is raised when:
    - The forecast horizon is not a positive integer
    - No forecasters are configured, or two share an algorithm name
    - Worker counts or timeouts are out of range
    """

    pass


class DataQualityError(TsaCoreError):
    """Raised when loaded data fails validation.

    This exception is raised when:
    - Required columns are missing from an input file
    - A loaded series has no usable rows
    """

    pass


class AnalysisError(TsaCoreError):
    """Base class for failures inside the gap-fill/forecast/score pipeline.

    The orchestrator catches these per series and per algorithm and reports
    them in AnalysisReport.failures instead of aborting the batch.
    """

    pass


class EmptyInputError(AnalysisError):
    """Raised when a series or the gap filler is given zero observations."""

    pass


class InsufficientDataError(AnalysisError):
    """Raised when a regularized series is not longer than the forecast horizon."""

    pass


class NumericDegeneracyError(AnalysisError):
    """Raised when a regression cannot be fitted (all x values identical)."""

    pass


class AlgorithmFailure(AnalysisError):
    """Raised when a forecaster cannot form a valid model.

    Examples:
    - The historical window is too short for the SSA embedding window
    - The linear recurrence of the SSA model is degenerate
    """

    pass


class ForecastTimeoutError(AlgorithmFailure):
    """Raised when a single forecast did not finish within the configured timeout."""

    pass


class LengthMismatchError(AnalysisError):
    """Raised when actual and forecast sequences differ in length."""

    pass
