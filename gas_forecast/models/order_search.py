"""
SARIMA order search.

An explicit enumerate -> fit -> score -> filter -> select loop over a
bounded grid of (p, q, P, Q) with d and D fixed by the differencing policy.
Each candidate is fitted by maximum likelihood with unconstrained
coefficients, then rejected if its optimizer did not converge or if its
reduced AR / MA lag polynomials have a root on or inside the unit circle.
"""
import itertools
import logging
import warnings
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

import numpy as np
import pandas as pd
from numpy.polynomial import polynomial
from statsmodels.tsa.statespace.sarimax import SARIMAX

from ..exceptions import FitDivergenceError, OrderSearchExhaustedError

logger = logging.getLogger(__name__)

ROOT_TOLERANCE = 1e-3


@dataclass(frozen=True)
class SarimaOrder:
    """(p, d, q)(P, D, Q)[s] specification."""
    p: int
    d: int
    q: int
    P: int = 0
    D: int = 0
    Q: int = 0
    s: int = 12

    @property
    def order(self) -> Tuple[int, int, int]:
        return self.p, self.d, self.q

    @property
    def seasonal_order(self) -> Tuple[int, int, int, int]:
        return self.P, self.D, self.Q, self.s

    @property
    def trend(self) -> str:
        """Constant (or drift) only while the differenced level is identified."""
        return 'c' if self.d + self.D <= 1 else 'n'

    def __str__(self) -> str:
        return (
            f"SARIMA({self.p},{self.d},{self.q})"
            f"({self.P},{self.D},{self.Q})[{self.s}]"
        )


@dataclass
class CandidateFit:
    """Outcome of fitting one grid point."""
    order: SarimaOrder
    score: float = np.nan
    converged: bool = False
    stationary: bool = False
    invertible: bool = False
    error: Optional[str] = None

    @property
    def admissible(self) -> bool:
        return (
            self.converged and self.stationary and self.invertible
            and np.isfinite(self.score)
        )


@dataclass
class OrderSearchResult:
    """Winning order, its fitted results and the full search table."""
    best_order: SarimaOrder
    best_results: Any
    criterion: str
    candidates: List[CandidateFit] = field(default_factory=list)

    @property
    def best_score(self) -> float:
        return float(getattr(self.best_results, self.criterion))

    def to_dataframe(self) -> pd.DataFrame:
        """Search table sorted by score, admissible candidates first."""
        rows = []
        for c in self.candidates:
            rows.append({
                'order': str(c.order),
                'p': c.order.p, 'q': c.order.q,
                'P': c.order.P, 'Q': c.order.Q,
                self.criterion: c.score,
                'converged': c.converged,
                'stationary': c.stationary,
                'invertible': c.invertible,
                'admissible': c.admissible,
                'error': c.error,
            })
        df = pd.DataFrame(rows)
        if df.empty:
            return df
        return df.sort_values(
            ['admissible', self.criterion], ascending=[False, True]
        ).reset_index(drop=True)


def lag_polynomial_roots(coefficients: np.ndarray) -> np.ndarray:
    """
    Roots of a lag polynomial given in increasing power order.

    Args:
        coefficients: [1, c1, c2, ...] for 1 + c1*L + c2*L^2 + ...

    Returns:
        Complex roots (empty for a constant polynomial)
    """
    coefs = np.trim_zeros(np.asarray(coefficients, dtype=float), 'b')
    if len(coefs) <= 1:
        return np.array([], dtype=complex)
    return polynomial.polyroots(coefs)


def roots_outside_unit_circle(
    coefficients: np.ndarray,
    tolerance: float = ROOT_TOLERANCE
) -> bool:
    """True when every root lies strictly outside the unit circle."""
    roots = lag_polynomial_roots(coefficients)
    return bool(np.all(np.abs(roots) > 1.0 + tolerance))


def _seasonal_polynomial(params: np.ndarray, s: int, sign: float) -> np.ndarray:
    """1 + sign * (c1*L^s + c2*L^2s + ...) in increasing power order."""
    params = np.asarray(params, dtype=float)
    poly = np.zeros(len(params) * s + 1)
    poly[0] = 1.0
    poly[s::s] = sign * params
    return poly


def reduced_lag_polynomials(results: Any, order: SarimaOrder) -> Tuple[np.ndarray, np.ndarray]:
    """
    Multiply out the non-seasonal and seasonal lag polynomials.

    AR side: (1 - phi(L)) * (1 - Phi(L^s)); MA side: (1 + theta(L)) * (1 + Theta(L^s)).

    Returns:
        (reduced AR polynomial, reduced MA polynomial), increasing power order
    """
    ar = np.r_[1.0, -np.asarray(results.arparams, dtype=float)]
    ma = np.r_[1.0, np.asarray(results.maparams, dtype=float)]
    seasonal_ar = _seasonal_polynomial(results.seasonalarparams, order.s, -1.0)
    seasonal_ma = _seasonal_polynomial(results.seasonalmaparams, order.s, 1.0)
    return polynomial.polymul(ar, seasonal_ar), polynomial.polymul(ma, seasonal_ma)


def check_lag_roots(
    results: Any,
    order: SarimaOrder,
    tolerance: float = ROOT_TOLERANCE
) -> Tuple[bool, bool]:
    """
    Stationarity and invertibility of a fitted specification.

    Returns:
        (AR roots outside the unit circle, MA roots outside the unit circle)
    """
    ar_poly, ma_poly = reduced_lag_polynomials(results, order)
    return (
        roots_outside_unit_circle(ar_poly, tolerance),
        roots_outside_unit_circle(ma_poly, tolerance),
    )


def fit_sarimax(
    train: pd.Series,
    order: SarimaOrder,
    max_iterations: int = 200
) -> Tuple[Any, bool]:
    """
    Maximum-likelihood fit of one SARIMA specification.

    Returns:
        (results, converged)
    """
    model = SARIMAX(
        train,
        order=order.order,
        seasonal_order=order.seasonal_order,
        trend=order.trend,
        enforce_stationarity=False,
        enforce_invertibility=False,
    )
    with warnings.catch_warnings():
        warnings.simplefilter('ignore')
        results = model.fit(disp=False, maxiter=max_iterations)

    retvals = results.mle_retvals or {}
    converged = bool(retvals.get('converged', False))
    return results, converged


def evaluate_candidate(
    train: pd.Series,
    order: SarimaOrder,
    criterion: str = 'aicc',
    max_iterations: int = 200,
    tolerance: float = ROOT_TOLERANCE
) -> Tuple[CandidateFit, Any]:
    """Fit, score and check the root constraints of one grid point."""
    candidate = CandidateFit(order=order)
    try:
        results, converged = fit_sarimax(train, order, max_iterations)
    except (np.linalg.LinAlgError, ValueError) as exc:
        candidate.error = f"{type(exc).__name__}: {exc}"
        return candidate, None

    candidate.converged = converged
    candidate.score = float(getattr(results, criterion))
    candidate.stationary, candidate.invertible = check_lag_roots(
        results, order, tolerance
    )
    return candidate, results


def search_orders(
    train: pd.Series,
    d: int,
    D: int,
    seasonal_period: int = 12,
    max_p: int = 2,
    max_q: int = 2,
    max_P: int = 1,
    max_Q: int = 1,
    criterion: str = 'aicc',
    max_iterations: int = 200
) -> OrderSearchResult:
    """
    Select the admissible order with the lowest information criterion.

    Args:
        train: Training series on the original scale
        d, D: Differencing orders from the stationarity policy
        seasonal_period: Seasonal lag s
        max_p, max_q, max_P, max_Q: Grid bounds (inclusive)
        criterion: 'aicc', 'aic' or 'bic'
        max_iterations: Optimizer iteration cap per candidate

    Returns:
        OrderSearchResult

    Raises:
        FitDivergenceError: No candidate converged
        OrderSearchExhaustedError: Converged candidates all violate root constraints
    """
    grid = list(itertools.product(
        range(max_p + 1), range(max_q + 1), range(max_P + 1), range(max_Q + 1)
    ))
    logger.info(
        "Searching %d SARIMA candidates (d=%d, D=%d, s=%d) by %s",
        len(grid), d, D, seasonal_period, criterion.upper()
    )

    candidates: List[CandidateFit] = []
    best: Optional[CandidateFit] = None
    best_results = None

    for p, q, P, Q in grid:
        order = SarimaOrder(p=p, d=d, q=q, P=P, D=D, Q=Q, s=seasonal_period)
        candidate, results = evaluate_candidate(
            train, order, criterion, max_iterations
        )
        candidates.append(candidate)
        logger.debug(
            "%s: %s=%.3f converged=%s stationary=%s invertible=%s",
            order, criterion, candidate.score, candidate.converged,
            candidate.stationary, candidate.invertible
        )

        if candidate.admissible and (best is None or candidate.score < best.score):
            best = candidate
            best_results = results

    if best is None:
        if not any(c.converged for c in candidates):
            raise FitDivergenceError(
                f"Maximum likelihood did not converge for any of {len(grid)} candidates"
            )
        raise OrderSearchExhaustedError(
            f"No candidate among {len(grid)} satisfies the "
            "stationarity/invertibility constraints"
        )

    logger.info("Selected %s with %s=%.3f", best.order, criterion.upper(), best.score)
    return OrderSearchResult(
        best_order=best.order,
        best_results=best_results,
        criterion=criterion,
        candidates=candidates,
    )
