"""Residual diagnostics shared by all strategies."""
import logging
from typing import Optional

import numpy as np
import pandas as pd
from statsmodels.stats.diagnostic import acorr_ljungbox
from statsmodels.tsa.stattools import acf

from ..forecast.result import ResidualDiagnostics

logger = logging.getLogger(__name__)


def ljung_box_lag(n_obs: int, seasonal_period: int) -> int:
    """Lag tested by the portmanteau test: min(2s, n/5)."""
    return min(2 * seasonal_period, n_obs // 5)


def residual_diagnostics(
    residuals: pd.Series,
    seasonal_period: int = 12,
    significance_level: float = 0.05
) -> Optional[ResidualDiagnostics]:
    """
    Ljung-Box test and ACF of in-sample residuals.

    The result is informational only; a failed test never stops the pipeline.

    Returns:
        ResidualDiagnostics, or None when the residuals are too short or constant
    """
    resid = residuals.dropna()
    lags = ljung_box_lag(len(resid), seasonal_period)
    if lags < 1 or np.ptp(resid.to_numpy()) == 0:
        return None

    table = acorr_ljungbox(resid, lags=[lags])
    diagnostics = ResidualDiagnostics(
        lags=lags,
        ljung_box_stat=float(table['lb_stat'].iloc[-1]),
        ljung_box_pvalue=float(table['lb_pvalue'].iloc[-1]),
        significance_level=significance_level,
        residual_acf=acf(resid, nlags=lags, fft=False),
    )
    if not diagnostics.passed:
        logger.warning(
            "Residual autocorrelation detected: Ljung-Box Q(%d)=%.2f, p=%.4f",
            lags, diagnostics.ljung_box_stat, diagnostics.ljung_box_pvalue
        )
    return diagnostics
