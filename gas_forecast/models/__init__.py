"""Forecasting strategies and evaluation."""
from .base import ForecastModel
from .baseline import NaiveModel
from .holt_winters import HoltWintersModel
from .arima import SeasonalArimaModel
from .order_search import SarimaOrder, OrderSearchResult, search_orders
from .stationarity import DifferencingPlan, select_differencing, difference
from .diagnostics import residual_diagnostics
from .evaluator import AccuracyReport, evaluate, evaluate_in_sample

__all__ = [
    'ForecastModel',
    'NaiveModel',
    'HoltWintersModel',
    'SeasonalArimaModel',
    'SarimaOrder',
    'OrderSearchResult',
    'search_orders',
    'DifferencingPlan',
    'select_differencing',
    'difference',
    'residual_diagnostics',
    'AccuracyReport',
    'evaluate',
    'evaluate_in_sample',
]
