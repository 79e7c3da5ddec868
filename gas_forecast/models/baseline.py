"""
Baseline model: naive constant forecast.

This establishes the minimum performance bar for the seasonal models.
If they can't beat this, they are likely overfitting.
"""
from typing import Optional

import numpy as np
import pandas as pd
from scipy.stats import norm

from ..exceptions import InsufficientDataError, InvalidHorizonError, NotFittedError
from ..forecast.result import ForecastResult, ModelParameters
from ..utils.dates import future_month_index


class NaiveModel:
    """
    Baseline forecasting model repeating one stored scalar.

    method='mean': average of the training observations (default).
    method='last': last training observation.
    """

    name = 'naive'

    def __init__(self, method: str = 'mean', interval_level: float = 0.95):
        """
        Initialize the model.

        Args:
            method: 'mean' or 'last'
            interval_level: Coverage of the prediction interval
        """
        if method not in ('mean', 'last'):
            raise ValueError(f"Unknown method: {method}")
        self.method = method
        self.interval_level = interval_level
        self.value: Optional[float] = None
        self.std: Optional[float] = None
        self.n_samples: int = 0
        self._train: Optional[pd.Series] = None

    def fit(self, train: pd.Series) -> 'NaiveModel':
        """
        Store the forecast scalar and its spread.

        Args:
            train: Training series

        Returns:
            Self for method chaining
        """
        if len(train) == 0:
            raise InsufficientDataError("Cannot fit naive model on an empty series")

        values = train.to_numpy(dtype=float)
        if self.method == 'mean':
            # Shifted mean: exact for a constant series
            self.value = float(values[0] + np.mean(values - values[0]))
            self.std = float(np.std(values, ddof=1)) if len(values) > 1 else 0.0
        else:
            self.value = float(values[-1])
            steps = np.diff(values)
            self.std = float(np.std(steps, ddof=1)) if len(steps) > 1 else 0.0

        self.n_samples = len(values)
        self._train = train.copy()
        return self

    def forecast(self, h: int) -> ForecastResult:
        """
        Repeat the stored scalar for h months.

        Returns:
            ForecastResult with a normal-theory prediction interval
        """
        self._check_fitted()
        if h < 1:
            raise InvalidHorizonError(f"h must be >= 1, got {h}")

        index = future_month_index(self._train.index[-1], h)
        mean = pd.Series(np.full(h, self.value), index=index, name=self.name)

        z = norm.ppf(0.5 + self.interval_level / 2)
        if self.method == 'mean':
            se = self.std * np.sqrt(1 + 1 / self.n_samples) * np.ones(h)
        else:
            se = self.std * np.sqrt(np.arange(1, h + 1))

        return ForecastResult(
            model_name=self.name,
            mean=mean,
            lower=mean - z * se,
            upper=mean + z * se,
            interval_level=self.interval_level,
        )

    def parameters(self) -> ModelParameters:
        self._check_fitted()
        return ModelParameters(self.name, {
            'method': self.method,
            'value': self.value,
            'std': self.std,
            'n_samples': self.n_samples,
        })

    def fitted_values(self) -> pd.Series:
        """Average of preceding observations, or the previous observation."""
        self._check_fitted()
        if self.method == 'mean':
            return self._train.expanding().mean().shift(1)
        return self._train.shift(1)

    def residuals(self) -> pd.Series:
        return (self._train - self.fitted_values()).dropna()

    def _check_fitted(self) -> None:
        if self.value is None:
            raise NotFittedError("Model not fitted. Call fit() first.")

    def __repr__(self) -> str:
        if self.value is None:
            return f"NaiveModel(method={self.method!r}, not fitted)"
        return (
            f"NaiveModel(method={self.method!r}, value={self.value:.2f}, "
            f"n={self.n_samples})"
        )
