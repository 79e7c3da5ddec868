"""Presentation layer: plotly figures and HTML report."""
from .plots import (
    ComparisonReportBuilder,
    plot_series,
    plot_decomposition,
    plot_acf_pacf,
    plot_forecasts,
    plot_residuals,
)

__all__ = [
    'ComparisonReportBuilder',
    'plot_series',
    'plot_decomposition',
    'plot_acf_pacf',
    'plot_forecasts',
    'plot_residuals',
]
