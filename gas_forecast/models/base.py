"""Base model protocol for type safety and consistent interface."""
from typing import Protocol, runtime_checkable

import pandas as pd

from ..forecast.result import ForecastResult, ModelParameters


@runtime_checkable
class ForecastModel(Protocol):
    """
    Protocol defining the forecasting strategy interface.

    The comparison engine and reporters only talk to strategies through
    these methods, never through concrete types.
    """

    name: str

    def fit(self, train: pd.Series) -> 'ForecastModel':
        """
        Fit the strategy on the training prefix.

        Args:
            train: Validated monthly series

        Returns:
            Self for method chaining
        """
        ...

    def forecast(self, h: int) -> ForecastResult:
        """
        Forecast the h months following the training data.

        Returns:
            ForecastResult indexed by the future months
        """
        ...

    def parameters(self) -> ModelParameters:
        """Return the immutable fitted coefficients."""
        ...

    def fitted_values(self) -> pd.Series:
        """In-sample one-step predictions aligned with train (NaN where undefined)."""
        ...

    def residuals(self) -> pd.Series:
        """In-sample residuals used for diagnostics."""
        ...
