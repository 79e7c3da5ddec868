"""
Seasonal ARIMA with automatic order selection.

Workflow:
1. Pick seasonal / non-seasonal differencing with the ADF policy
2. Search the (p, q, P, Q) grid by information criterion
3. Forecast with the winning fit; SARIMAX integrates the differenced
   forecasts back to the original scale and widens the interval with
   horizon
"""
import logging
from typing import Optional

import numpy as np
import pandas as pd

from ..exceptions import (
    FitDivergenceError,
    InsufficientDataError,
    InvalidHorizonError,
    NotFittedError,
    OrderSearchExhaustedError,
)
from ..forecast.result import ForecastResult, ModelParameters
from ..utils.dates import future_month_index
from .order_search import (
    OrderSearchResult,
    SarimaOrder,
    check_lag_roots,
    fit_sarimax,
    search_orders,
)
from .stationarity import DifferencingPlan, select_differencing

logger = logging.getLogger(__name__)


class SeasonalArimaModel:
    """
    SARIMA(p,d,q)(P,D,Q)[s] forecaster.

    Pass `order` to skip differencing selection and the grid search.
    """

    name = 'sarima'

    def __init__(
        self,
        seasonal_period: int = 12,
        max_differencing_order: int = 2,
        significance_level: float = 0.05,
        criterion: str = 'aicc',
        max_p: int = 2,
        max_q: int = 2,
        max_P: int = 1,
        max_Q: int = 1,
        interval_level: float = 0.95,
        max_iterations: int = 200,
        order: Optional[SarimaOrder] = None,
    ):
        self.seasonal_period = seasonal_period
        self.max_differencing_order = max_differencing_order
        self.significance_level = significance_level
        self.criterion = criterion
        self.max_p = max_p
        self.max_q = max_q
        self.max_P = max_P
        self.max_Q = max_Q
        self.interval_level = interval_level
        self.max_iterations = max_iterations
        self.fixed_order = order

        self.order: Optional[SarimaOrder] = None
        self.plan: Optional[DifferencingPlan] = None
        self.search: Optional[OrderSearchResult] = None
        self._results = None
        self._train: Optional[pd.Series] = None

    def fit(self, train: pd.Series) -> 'SeasonalArimaModel':
        """
        Select differencing and orders, then fit by maximum likelihood.

        Raises:
            InsufficientDataError: Fewer than two seasonal cycles
            NonStationaryError: Differencing exhausted
            OrderSearchExhaustedError: No admissible candidate, or the fixed
                order violates the root constraints
            FitDivergenceError: Likelihood optimization failed
        """
        min_obs = 2 * self.seasonal_period
        if len(train) < min_obs:
            raise InsufficientDataError(
                f"SARIMA needs at least {min_obs} observations, got {len(train)}"
            )

        if self.fixed_order is not None:
            results, converged = fit_sarimax(
                train, self.fixed_order, self.max_iterations
            )
            if not converged:
                raise FitDivergenceError(
                    f"Maximum likelihood did not converge for {self.fixed_order}"
                )
            stationary, invertible = check_lag_roots(results, self.fixed_order)
            if not (stationary and invertible):
                raise OrderSearchExhaustedError(
                    f"{self.fixed_order} violates the constraints: "
                    f"stationary={stationary}, invertible={invertible}"
                )
            self.order = self.fixed_order
            self.plan = DifferencingPlan(
                d=self.fixed_order.d,
                D=self.fixed_order.D,
                seasonal_period=self.fixed_order.s,
            )
            self.search = None
        else:
            self.plan = select_differencing(
                train,
                seasonal_period=self.seasonal_period,
                max_order=self.max_differencing_order,
                significance_level=self.significance_level,
            )
            self.search = search_orders(
                train,
                d=self.plan.d,
                D=self.plan.D,
                seasonal_period=self.seasonal_period,
                max_p=self.max_p,
                max_q=self.max_q,
                max_P=self.max_P,
                max_Q=self.max_Q,
                criterion=self.criterion,
                max_iterations=self.max_iterations,
            )
            self.order = self.search.best_order
            results = self.search.best_results

        self._results = results
        self._train = train.copy()
        logger.info("SARIMA fitted: %s", self.order)
        return self

    def forecast(self, h: int) -> ForecastResult:
        """Forecast h months on the original scale with a prediction interval."""
        self._check_fitted()
        if h < 1:
            raise InvalidHorizonError(f"h must be >= 1, got {h}")

        index = future_month_index(self._train.index[-1], h)
        prediction = self._results.get_forecast(steps=h)
        bounds = np.asarray(
            prediction.conf_int(alpha=1 - self.interval_level), dtype=float
        )

        return ForecastResult(
            model_name=self.name,
            mean=pd.Series(
                np.asarray(prediction.predicted_mean, dtype=float),
                index=index,
                name=self.name,
            ),
            lower=pd.Series(bounds[:, 0], index=index),
            upper=pd.Series(bounds[:, 1], index=index),
            interval_level=self.interval_level,
        )

    def parameters(self) -> ModelParameters:
        self._check_fitted()
        results = self._results
        return ModelParameters(self.name, {
            'order': self.order.order,
            'seasonal_order': self.order.seasonal_order,
            'trend': self.order.trend,
            'label': str(self.order),
            'criterion': self.criterion,
            'aic': float(results.aic),
            'aicc': float(results.aicc),
            'bic': float(results.bic),
            'coefficients': {
                str(k): float(v) for k, v in zip(results.model.param_names,
                                                 np.asarray(results.params))
            },
            'stationarity_pvalues': {
                f"d={t.d},D={t.D}": t.pvalue for t in self.plan.tests
            },
            'n_candidates': len(self.search.candidates) if self.search else 1,
        })

    def fitted_values(self) -> pd.Series:
        """One-step predictions; the differencing burn-in is left undefined."""
        self._check_fitted()
        fitted = pd.Series(
            np.asarray(self._results.fittedvalues, dtype=float),
            index=self._train.index,
        )
        fitted.iloc[:self.plan.burn_in] = np.nan
        return fitted

    def residuals(self) -> pd.Series:
        return (self._train - self.fitted_values()).dropna()

    def _check_fitted(self) -> None:
        if self._results is None:
            raise NotFittedError("Model not fitted. Call fit() first.")

    def __repr__(self) -> str:
        if self.order is None:
            return "SeasonalArimaModel(not fitted)"
        return f"SeasonalArimaModel({self.order})"
