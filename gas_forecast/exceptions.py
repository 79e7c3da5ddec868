"""
Error taxonomy for the forecast comparison pipeline.

Each error is fatal to the strategy that raised it; the comparison engine
records it against that strategy and keeps evaluating the others.
"""


class ForecastPipelineError(Exception):
    """Base class for all pipeline errors."""


class DataNotFoundError(ForecastPipelineError, LookupError):
    """Dataset identifier is not bundled and has no CSV in the data directory."""


class InvalidSeriesError(ForecastPipelineError, ValueError):
    """Series is not a gap-free, evenly spaced monthly series."""


class InvalidHorizonError(ForecastPipelineError, ValueError):
    """Horizon is not in [1, len(series))."""


class InsufficientDataError(ForecastPipelineError, ValueError):
    """Not enough observations to fit a model."""


class NotFittedError(ForecastPipelineError, ValueError):
    """forecast() or parameters() called before fit()."""


class NonConvergenceError(ForecastPipelineError):
    """Smoothing coefficient optimization did not converge."""


class NonStationaryError(ForecastPipelineError):
    """Differencing reached its maximum order without a stationary series."""


class OrderSearchExhaustedError(ForecastPipelineError):
    """No candidate order satisfied the stationarity/invertibility constraints."""


class FitDivergenceError(ForecastPipelineError):
    """Maximum-likelihood estimation failed to converge."""


class DivisionByZeroError(ForecastPipelineError, ZeroDivisionError):
    """Percentage error requested against an actual value of exactly zero."""
