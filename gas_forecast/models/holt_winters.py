"""
Holt-Winters exponential smoothing.

Wraps the statsmodels Holt-Winters implementation. The smoothing weights
are estimated by minimizing the one-step-ahead sum of squared errors over
the training window, each bounded to [0, 1].
"""
import logging
from typing import Any, Optional

import numpy as np
import pandas as pd
from statsmodels.tsa.holtwinters import ExponentialSmoothing

from ..exceptions import (
    InsufficientDataError,
    InvalidHorizonError,
    InvalidSeriesError,
    NonConvergenceError,
    NotFittedError,
)
from ..forecast.result import ForecastResult, ModelParameters
from ..utils.dates import future_month_index

logger = logging.getLogger(__name__)


def _weight(params: dict, key: str) -> float:
    """Smoothing weight, 0.0 for a component the model does not have."""
    value = params.get(key)
    if value is None or np.isnan(value):
        return 0.0
    return float(value)


class HoltWintersModel:
    """
    Level / trend / seasonal smoothing with additive or multiplicative terms.

    trend=None fixes beta at 0: forecasts repeat the seasonal pattern
    around a constant level.
    """

    name = 'holt_winters'

    def __init__(
        self,
        seasonal_period: int = 12,
        trend: Optional[str] = 'add',
        seasonal: Optional[str] = 'add',
        damped_trend: bool = False,
        interval_level: float = 0.95,
        n_simulations: int = 500,
        random_seed: Optional[int] = None,
        max_iterations: int = 200,
    ):
        self.seasonal_period = seasonal_period
        self.trend = trend
        self.seasonal = seasonal
        self.damped_trend = damped_trend and trend is not None
        self.interval_level = interval_level
        self.n_simulations = max(int(n_simulations), 2)
        self.random_seed = random_seed
        self.max_iterations = max_iterations
        self._fitted: Any = None
        self._train: Optional[pd.Series] = None

    def fit(self, train: pd.Series) -> 'HoltWintersModel':
        """
        Estimate alpha, beta and gamma on the training window.

        Raises:
            InsufficientDataError: Fewer than two full seasonal cycles
            NonConvergenceError: Optimizer did not converge
        """
        min_obs = 2 * self.seasonal_period if self.seasonal else 2
        if len(train) < min_obs:
            raise InsufficientDataError(
                f"Holt-Winters needs at least {min_obs} observations, got {len(train)}"
            )
        if 'mul' in (self.trend, self.seasonal) and (train <= 0).any():
            raise InvalidSeriesError(
                "Multiplicative components require strictly positive data"
            )

        model = ExponentialSmoothing(
            train,
            trend=self.trend,
            seasonal=self.seasonal,
            seasonal_periods=self.seasonal_period if self.seasonal else None,
            damped_trend=self.damped_trend,
            initialization_method='estimated',
        )

        fitted = model.fit(
            optimized=True,
            use_brute=True,
            minimize_kwargs={'options': {'maxiter': self.max_iterations}},
        )

        # Optimizer status, not warnings: filters are shared across threads
        retvals = getattr(fitted, 'mle_retvals', None)
        if retvals is not None and not getattr(retvals, 'success', True):
            raise NonConvergenceError(
                "Holt-Winters smoothing coefficients did not converge"
            )

        self._fitted = fitted
        self._train = train.copy()
        params = self.parameters()
        logger.info(
            "Holt-Winters fitted: alpha=%.3f beta=%.3f gamma=%.3f",
            params['alpha'], params['beta'], params['gamma']
        )
        return self

    def forecast(self, h: int) -> ForecastResult:
        """
        Project level, trend and season forward h months.

        The interval comes from simulating the fitted recursion with
        Gaussian errors scaled by the in-sample residual variance.
        """
        self._check_fitted()
        if h < 1:
            raise InvalidHorizonError(f"h must be >= 1, got {h}")

        index = future_month_index(self._train.index[-1], h)
        mean = pd.Series(
            np.asarray(self._fitted.forecast(h), dtype=float),
            index=index,
            name=self.name,
        )

        sigma = np.sqrt(self._fitted.sse / len(self._train))
        rng = np.random.default_rng(self.random_seed)
        errors = rng.normal(0.0, sigma, size=(h, self.n_simulations))
        paths = np.asarray(
            self._fitted.simulate(
                h,
                repetitions=self.n_simulations,
                error='add',
                anchor='end',
                random_errors=errors,
            ),
            dtype=float,
        ).reshape(h, -1)
        tail = (1 - self.interval_level) / 2
        lower, upper = np.quantile(paths, [tail, 1 - tail], axis=1)

        return ForecastResult(
            model_name=self.name,
            mean=mean,
            lower=pd.Series(lower, index=index),
            upper=pd.Series(upper, index=index),
            interval_level=self.interval_level,
        )

    def parameters(self) -> ModelParameters:
        self._check_fitted()
        params = self._fitted.params
        return ModelParameters(self.name, {
            'alpha': _weight(params, 'smoothing_level'),
            'beta': _weight(params, 'smoothing_trend'),
            'gamma': _weight(params, 'smoothing_seasonal'),
            'phi': _weight(params, 'damping_trend') if self.damped_trend else None,
            'initial_level': float(params['initial_level']),
            'initial_trend': _weight(params, 'initial_trend'),
            'trend': self.trend,
            'seasonal': self.seasonal,
            'seasonal_period': self.seasonal_period,
            'sse': float(self._fitted.sse),
        })

    def fitted_values(self) -> pd.Series:
        self._check_fitted()
        return pd.Series(
            np.asarray(self._fitted.fittedvalues, dtype=float),
            index=self._train.index,
        )

    def residuals(self) -> pd.Series:
        return self._train - self.fitted_values()

    def _check_fitted(self) -> None:
        if self._fitted is None:
            raise NotFittedError("Model not fitted. Call fit() first.")

    def __repr__(self) -> str:
        return (
            f"HoltWintersModel(trend={self.trend!r}, seasonal={self.seasonal!r}, "
            f"period={self.seasonal_period})"
        )
